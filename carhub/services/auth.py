"""Authentication service for password handling and user accounts."""

import logging

from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from carhub.config import get_settings
from carhub.exceptions import DuplicateEmail, DuplicateUsername, ValidationError
from carhub.models.user import User

logger = logging.getLogger(__name__)

settings = get_settings()

MIN_PASSWORD_LENGTH = 6

# Password hashing context
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return pwd_context.hash(password)


def get_user_by_id(db: Session, user_id: int) -> User | None:
    """Get a user by id."""
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> User | None:
    """Get a user by email."""
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> User | None:
    """Get a user by username."""
    return db.query(User).filter(User.username == username).first()


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """Authenticate a user by email and password."""
    user = get_user_by_email(db, email)
    if not user:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def create_user(db: Session, name: str, username: str, email: str, password: str) -> User:
    """Create a new user.

    The lookups only give a friendly early answer. The unique indexes on
    ``users.email`` and ``users.username`` decide who wins a concurrent
    signup, so a failed insert is reported the same way.
    """
    name = (name or "").strip()
    username = (username or "").strip()
    email = (email or "").strip()
    if not name:
        raise ValidationError("Name is required")
    if not username:
        raise ValidationError("Username is required")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        raise ValidationError("Enter a valid email") from None
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if get_user_by_email(db, email):
        raise DuplicateEmail()
    if get_user_by_username(db, username):
        raise DuplicateUsername()

    user = User(
        name=name,
        username=username,
        email=email,
        password_hash=get_password_hash(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        if get_user_by_email(db, email):
            raise DuplicateEmail() from None
        raise DuplicateUsername() from None
    db.refresh(user)

    logger.info(f"Registered user {user.id} ({user.username})")
    return user
