"""User API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.api.dependencies import get_user_service
from src.schemas.user import (
    UserCreate,
    UserDeleteResponse,
    UserResponse,
    UserUpdate,
    UserWriteResponse,
)
from src.services.user_service import (
    UserConflictError,
    UserNotFoundError,
    UserService,
    UserServiceError,
)

router = APIRouter(prefix="/users", tags=["users"])


def to_http_error(error: UserServiceError) -> HTTPException:
    """Map a service error onto the matching HTTP status."""
    if isinstance(error, UserNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=error.message)
    if isinstance(error, UserConflictError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)


@router.get("", response_model=list[UserResponse])
def list_users(service: Annotated[UserService, Depends(get_user_service)]):
    """Get all users."""
    try:
        return service.list_users()
    except UserServiceError as e:
        raise to_http_error(e) from e


@router.get("/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Get a user by id."""
    try:
        return service.get_user(user_id)
    except UserServiceError as e:
        raise to_http_error(e) from e


@router.post("", response_model=UserWriteResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    response: Response,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Create a new user. Name and email must not be taken."""
    try:
        user = service.create_user(user_data.name, user_data.email)
    except UserServiceError as e:
        raise to_http_error(e) from e

    response.headers["Location"] = f"/users/{user.id}"
    return UserWriteResponse(
        message="User created successfully",
        user=UserResponse.model_validate(user),
    )


@router.put("/{user_id}", response_model=UserWriteResponse)
def update_user(
    user_id: int,
    user_data: UserUpdate,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Replace a user's name and email."""
    try:
        user = service.update_user(user_id, user_data.name, user_data.email)
    except UserServiceError as e:
        raise to_http_error(e) from e

    return UserWriteResponse(
        message="User updated successfully",
        user=UserResponse.model_validate(user),
    )


@router.delete("/{user_id}", response_model=UserDeleteResponse)
def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
):
    """Delete a user."""
    try:
        deleted_id = service.delete_user(user_id)
    except UserServiceError as e:
        raise to_http_error(e) from e

    return UserDeleteResponse(message="User deleted successfully", id=deleted_id)
