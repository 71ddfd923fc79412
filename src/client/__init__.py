"""Client for the users API: HTTP wrapper, state store and text screen."""

from src.client.api import APIError, UsersClient
from src.client.screen import UsersScreen
from src.client.store import Event, Operation, Phase, UsersState, UsersStore, reduce

__all__ = [
    "APIError",
    "UsersClient",
    "UsersScreen",
    "UsersStore",
    "UsersState",
    "Event",
    "Operation",
    "Phase",
    "reduce",
]
