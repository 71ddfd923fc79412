"""Client-side store for users.

State changes only through :func:`reduce`, which applies one :class:`Event`
to a :class:`UsersState` and returns the new state. :class:`UsersStore`
wraps each API call in a pending event followed by a fulfilled or rejected
one, and tells subscribers about every dispatched event.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from src.client.api import APIError, UsersClient
from src.schemas.user import UserResponse

logger = logging.getLogger(__name__)


class Operation(StrEnum):
    """Store operations."""

    FETCH_USERS = "fetch_users"
    FETCH_USER = "fetch_user"
    CREATE_USER = "create_user"
    UPDATE_USER = "update_user"
    DELETE_USER = "delete_user"
    CLEAR_ERROR = "clear_error"


class Phase(StrEnum):
    """Lifecycle of an asynchronous operation."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Event:
    """One step of an operation, with its result or error payload."""

    operation: Operation
    phase: Phase = Phase.FULFILLED
    payload: Any = None

    @property
    def failed(self) -> bool:
        return self.phase == Phase.REJECTED


@dataclass(frozen=True)
class UsersState:
    """Cached users plus UI-only fields that do not exist server-side."""

    users: tuple[UserResponse, ...] = field(default_factory=tuple)
    loading: bool = False
    selected_user: UserResponse | None = None
    error: Any = None


def reduce(state: UsersState, event: Event) -> UsersState:
    """Return the state that results from applying ``event``."""
    op, phase, payload = event.operation, event.phase, event.payload

    if op == Operation.CLEAR_ERROR:
        return replace(state, error=None)

    if op == Operation.FETCH_USERS:
        if phase == Phase.PENDING:
            return replace(state, loading=True, error=None)
        if phase == Phase.FULFILLED:
            return replace(state, users=tuple(payload), loading=False)
        return replace(state, loading=False, error=payload)

    if phase == Phase.PENDING:
        return state
    if phase == Phase.REJECTED:
        return replace(state, error=payload)

    if op == Operation.FETCH_USER:
        return replace(state, selected_user=payload)
    if op == Operation.CREATE_USER:
        return replace(state, users=(*state.users, payload), error=None)
    if op == Operation.UPDATE_USER:
        users = tuple(payload if user.id == payload.id else user for user in state.users)
        return replace(state, users=users, error=None)
    if op == Operation.DELETE_USER:
        users = tuple(user for user in state.users if user.id != payload)
        return replace(state, users=users, error=None)

    raise ValueError(f"Unknown operation: {op}")


Listener = Callable[[UsersState, Event], None]


class UsersStore:
    """Holds :class:`UsersState` and runs API calls against it."""

    def __init__(self, api: UsersClient, state: UsersState | None = None) -> None:
        self.api = api
        self._state = state or UsersState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> UsersState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call ``listener`` with the new state and the event after every dispatch.

        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def dispatch(self, event: Event) -> UsersState:
        self._state = reduce(self._state, event)
        for listener in list(self._listeners):
            listener(self._state, event)
        return self._state

    async def _run(self, operation: Operation, call: Callable[[], Awaitable[Any]]) -> Event:
        self.dispatch(Event(operation, Phase.PENDING))
        try:
            result = await call()
        except APIError as e:
            logger.warning(f"{operation} rejected: {e.payload}")
            event = Event(operation, Phase.REJECTED, e.payload)
        else:
            event = Event(operation, Phase.FULFILLED, result)
        self.dispatch(event)
        return event

    async def fetch_users(self) -> Event:
        return await self._run(Operation.FETCH_USERS, self.api.list_users)

    async def fetch_user(self, user_id: int) -> Event:
        return await self._run(Operation.FETCH_USER, lambda: self.api.get_user(user_id))

    async def create_user(self, name: str, email: str) -> Event:
        return await self._run(
            Operation.CREATE_USER, lambda: self.api.create_user(name, email)
        )

    async def update_user(self, user_id: int, name: str, email: str) -> Event:
        """Update a user; the cached copy becomes the submitted values."""

        async def call() -> UserResponse:
            await self.api.update_user(user_id, name, email)
            return UserResponse(id=user_id, name=name, email=email)

        return await self._run(Operation.UPDATE_USER, call)

    async def delete_user(self, user_id: int) -> Event:
        return await self._run(Operation.DELETE_USER, lambda: self.api.delete_user(user_id))

    def clear_error(self) -> None:
        self.dispatch(Event(Operation.CLEAR_ERROR))
