"""HTTP client for the users API."""

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from src.config import get_settings
from src.schemas.user import UserResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")


class APIError(Exception):
    """A failed call to the users API.

    ``payload`` is what the server said went wrong: the ``detail`` of a
    FastAPI error body when there is one, otherwise the decoded body. For
    transport errors there is no response, so it holds the error message.
    """

    def __init__(self, payload: Any, status_code: int | None = None):
        super().__init__(str(payload))
        self.payload = payload
        self.status_code = status_code

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        try:
            body = response.json()
        except ValueError:
            body = response.text
        if isinstance(body, dict) and "detail" in body:
            body = body["detail"]
        return cls(body, response.status_code)


class UsersClient:
    """Async wrapper over the ``/users`` endpoints."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self.transport = transport

    async def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        **kwargs: Any,
    ) -> T:
        """Send a request and turn the decoded body into a result with ``parse``.

        Transport errors, error statuses and bodies that do not decode or do
        not have the expected shape all raise :class:`APIError`.
        """
        async with httpx.AsyncClient(
            base_url=self.base_url, timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.request(method, path, **kwargs)
            except httpx.HTTPError as e:
                logger.error(f"HTTP error calling {method} {path}: {e}")
                raise APIError(str(e)) from e
        if response.is_error:
            raise APIError.from_response(response)

        try:
            return parse(response.json())
        except (ValueError, KeyError, TypeError) as e:
            # pydantic's ValidationError and JSONDecodeError are ValueErrors
            logger.error(f"Unexpected response from {method} {path}: {e}")
            raise APIError(f"Unexpected response from server: {e}", response.status_code) from e

    async def list_users(self) -> list[UserResponse]:
        return await self._request(
            "GET", "/users", lambda data: [UserResponse.model_validate(item) for item in data]
        )

    async def get_user(self, user_id: int) -> UserResponse:
        return await self._request("GET", f"/users/{user_id}", UserResponse.model_validate)

    async def create_user(self, name: str, email: str) -> UserResponse:
        """Create a user and return the stored record from the response."""
        return await self._request(
            "POST",
            "/users",
            lambda data: UserResponse.model_validate(data["user"]),
            json={"name": name, "email": email},
        )

    async def update_user(self, user_id: int, name: str, email: str) -> UserResponse:
        """Update a user and return the stored record from the response."""
        return await self._request(
            "PUT",
            f"/users/{user_id}",
            lambda data: UserResponse.model_validate(data["user"]),
            json={"name": name, "email": email},
        )

    async def delete_user(self, user_id: int) -> int:
        return await self._request("DELETE", f"/users/{user_id}", lambda data: int(data["id"]))
