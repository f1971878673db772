"""Pydantic schemas for API requests and responses."""

from carhub.schemas.auth import TokenResponse, UserLogin, UserRegister, UserResponse
from carhub.schemas.car import (
    CarDeleteResponse,
    CarEnvelope,
    CarListEnvelope,
    CarResponse,
    CarUpdate,
)

__all__ = [
    "UserRegister",
    "UserLogin",
    "TokenResponse",
    "UserResponse",
    "CarUpdate",
    "CarResponse",
    "CarEnvelope",
    "CarListEnvelope",
    "CarDeleteResponse",
]
