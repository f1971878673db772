"""FastAPI dependencies for authentication, database and services."""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from carhub.config import get_settings
from carhub.database import get_db
from carhub.exceptions import AuthenticationFailure
from carhub.models.user import User
from carhub.services.auth import get_user_by_id
from carhub.services.car_service import CarService
from carhub.services.storage import AttachmentStorage, get_attachment_storage
from carhub.services.tokens import TokenService, get_token_service

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 from us, not FastAPI's default
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    tokens: Annotated[TokenService, Depends(get_token_service)],
    db: Annotated[Session, Depends(get_db)],
) -> User:
    """Get the current authenticated user from the bearer token.

    This is the only way into the car routes: any token problem ends the
    request with a 401.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationFailure("Not authenticated")

    try:
        user_id = tokens.verify(credentials.credentials)
    except AuthenticationFailure as e:
        logger.info(f"Rejected bearer token: {e.detail}")
        raise AuthenticationFailure(e.detail) from None

    user = get_user_by_id(db, user_id)
    if user is None:
        raise AuthenticationFailure("User not found")

    request.state.user_id = user.id
    return user


def get_car_service(
    db: Annotated[Session, Depends(get_db)],
    storage: Annotated[AttachmentStorage, Depends(get_attachment_storage)],
) -> CarService:
    """Get car service with dependencies."""
    return CarService(db, storage, max_images=get_settings().max_images)
