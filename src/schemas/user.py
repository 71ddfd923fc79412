"""User schemas."""

from pydantic import BaseModel, ConfigDict, Field


class UserCreate(BaseModel):
    """Create a new user. A client-supplied id is ignored."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)


class UserUpdate(BaseModel):
    """Replace a user's name and email."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)


class UserResponse(BaseModel):
    """User response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str


class UserWriteResponse(BaseModel):
    """Result of a create or update: a message and the stored user."""

    message: str
    user: UserResponse


class UserDeleteResponse(BaseModel):
    """Result of a delete: a message and the removed id."""

    message: str
    id: int
