"""Users screen: a text table plus create, update and delete handlers."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from src.client.store import Event, UsersState, UsersStore


class Level(StrEnum):
    """Notification severity."""

    SUCCESS = "success"
    ERROR = "error"
    WARNING = "warning"


Notifier = Callable[[str, str, Level], None]
Confirmer = Callable[[str, str], bool]

REQUIRED_FIELDS = "All fields are required"
EMPTY_TABLE = "No registered users"


@dataclass
class UserForm:
    """Name and email being typed into a form."""

    name: str = ""
    email: str = ""

    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.email)

    def reset(self) -> None:
        self.name = ""
        self.email = ""


def render_table(state: UsersState) -> str:
    """Render cached users as a plain-text table."""
    rows = [(str(user.id), user.name, user.email) for user in state.users]
    headers = ("ID", "Name", "Email")
    widths = [
        max([len(headers[i]), *(len(row[i]) for row in rows)]) for i in range(len(headers))
    ]

    def line(cells: tuple[str, ...]) -> str:
        return "  ".join(cell.ljust(width) for cell, width in zip(cells, widths)).rstrip()

    lines = [line(headers), "  ".join("-" * width for width in widths)]
    if rows:
        lines.extend(line(row) for row in rows)
    else:
        lines.append(EMPTY_TABLE)
    return "\n".join(lines)


class UsersScreen:
    """Drives a :class:`UsersStore` from user input and reports outcomes.

    Every rejected operation shows the stored error through ``notify`` and
    resets the create form. The edit flow clears the error before it starts and when
    it closes, so a stale error is never shown twice.
    """

    def __init__(
        self,
        store: UsersStore,
        notify: Notifier,
        confirm: Confirmer | None = None,
    ) -> None:
        self.store = store
        self.notify = notify
        self.confirm = confirm or (lambda title, text: True)
        self.create_form = UserForm()
        self.edit_form = UserForm()
        self.editing_id: int | None = None
        self._unsubscribe = store.subscribe(self._on_change)

    def close(self) -> None:
        self._unsubscribe()

    def render(self) -> str:
        return render_table(self.store.state)

    def _on_change(self, state: UsersState, event: Event) -> None:
        if event.failed and state.error:
            self.notify("Error", str(state.error), Level.ERROR)
            self.create_form.reset()

    async def load(self) -> None:
        await self.store.fetch_users()

    async def handle_create(self) -> bool:
        form = self.create_form
        if not form.is_complete():
            self.notify("Error", REQUIRED_FIELDS, Level.ERROR)
            return False

        event = await self.store.create_user(form.name, form.email)
        if event.failed:
            return False
        self.notify("Success", "User created successfully", Level.SUCCESS)
        form.reset()
        await self.store.fetch_users()
        return True

    async def handle_delete(self, user_id: int, user_name: str) -> bool:
        confirmed = self.confirm(
            f"Are you sure you want to delete user {user_name}?",
            "This action cannot be undone",
        )
        if not confirmed:
            return False

        event = await self.store.delete_user(user_id)
        if event.failed:
            return False
        self.notify("Deleted", "User deleted successfully", Level.SUCCESS)
        await self.store.fetch_users()
        return True

    async def open_update(self, user_id: int) -> None:
        """Start editing a user, prefilling the form from the server."""
        self.store.clear_error()
        self.editing_id = user_id
        event = await self.store.fetch_user(user_id)
        selected = self.store.state.selected_user
        if not event.failed and selected is not None:
            self.edit_form.name = selected.name
            self.edit_form.email = selected.email

    async def handle_update(self) -> bool:
        form = self.edit_form
        if not form.is_complete():
            self.notify("Error", REQUIRED_FIELDS, Level.ERROR)
            return False
        if self.editing_id is None:
            raise RuntimeError("No user is being edited")

        event = await self.store.update_user(self.editing_id, form.name, form.email)
        if event.failed:
            return False
        self.notify("Success", "User updated successfully", Level.SUCCESS)
        self.close_update()
        return True

    def close_update(self) -> None:
        self.store.clear_error()
        self.editing_id = None
        self.edit_form.reset()
