"""Pydantic schemas for API requests and responses."""

from src.schemas.user import (
    UserCreate,
    UserDeleteResponse,
    UserResponse,
    UserUpdate,
    UserWriteResponse,
)

__all__ = [
    "UserCreate",
    "UserUpdate",
    "UserResponse",
    "UserWriteResponse",
    "UserDeleteResponse",
]
