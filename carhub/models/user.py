"""User model."""

from sqlalchemy import Column, Integer, String

from carhub.database import Base
from carhub.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    """User model for authentication and car ownership."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    username = Column(String(150), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
