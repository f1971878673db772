"""SQLAlchemy models."""

from carhub.models.car import Car
from carhub.models.user import User

__all__ = [
    "User",
    "Car",
]
