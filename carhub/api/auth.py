"""Authentication API endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from carhub.api.dependencies import get_current_user
from carhub.database import get_db
from carhub.exceptions import AuthenticationFailure
from carhub.models.user import User
from carhub.schemas.auth import TokenResponse, UserLogin, UserRegister, UserResponse
from carhub.services.auth import authenticate_user, create_user
from carhub.services.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
def signup(
    user_data: UserRegister,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Sign up a new user and return a token."""
    user = create_user(
        db,
        name=user_data.name,
        username=user_data.username,
        email=user_data.email,
        password=user_data.password,
    )
    return TokenResponse(token=tokens.issue(user.id))


@router.post("/login", response_model=TokenResponse)
def login(
    credentials: UserLogin,
    db: Annotated[Session, Depends(get_db)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
):
    """Login with email and password."""
    user = authenticate_user(db, credentials.email, credentials.password)

    if not user:
        logger.info(f"Failed login for {credentials.email}")
        raise AuthenticationFailure("Invalid credentials")

    return TokenResponse(token=tokens.issue(user.id))


@router.get("/me", response_model=UserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return current_user
