"""Command-line front end for the users API.

Usage:
    python -m src.client.cli list
    python -m src.client.cli create "Ada Lovelace" ada@example.com
    python -m src.client.cli update 3 "Ada King" ada@example.com
    python -m src.client.cli delete 3 --yes
"""

import argparse
import asyncio
import sys

from src.client.api import UsersClient
from src.client.screen import Level, UsersScreen
from src.client.store import UsersStore


def print_notification(title: str, text: str, level: Level) -> None:
    stream = sys.stderr if level == Level.ERROR else sys.stdout
    print(f"[{level}] {title}: {text}", file=stream)


def ask_confirmation(title: str, text: str) -> bool:
    answer = input(f"{title} {text}. [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="users", description="Manage the user directory")
    parser.add_argument("--base-url", help="API base URL (default: API_BASE_URL setting)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="Show all users")

    get_parser = subparsers.add_parser("get", help="Show one user")
    get_parser.add_argument("id", type=int)

    create_parser = subparsers.add_parser("create", help="Create a user")
    create_parser.add_argument("name")
    create_parser.add_argument("email")

    update_parser = subparsers.add_parser("update", help="Replace a user's name and email")
    update_parser.add_argument("id", type=int)
    update_parser.add_argument("name")
    update_parser.add_argument("email")

    delete_parser = subparsers.add_parser("delete", help="Delete a user")
    delete_parser.add_argument("id", type=int)
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    return parser


async def run(args: argparse.Namespace, screen: UsersScreen) -> int:
    """Run one command against the screen and return an exit code."""
    store = screen.store
    await screen.load()
    if store.state.error:
        return 1

    if args.command == "list":
        ok = True
    elif args.command == "get":
        await screen.open_update(args.id)
        selected = store.state.selected_user
        ok = store.state.error is None and selected is not None
        if ok:
            print(f"{selected.id}\t{selected.name}\t{selected.email}")
        return 0 if ok else 1
    elif args.command == "create":
        screen.create_form.name = args.name
        screen.create_form.email = args.email
        ok = await screen.handle_create()
    elif args.command == "update":
        await screen.open_update(args.id)
        if store.state.error:
            return 1
        screen.edit_form.name = args.name
        screen.edit_form.email = args.email
        ok = await screen.handle_update()
    else:
        user = next((u for u in store.state.users if u.id == args.id), None)
        ok = await screen.handle_delete(args.id, user.name if user else str(args.id))

    print(screen.render())
    return 0 if ok else 1


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    confirm = (lambda title, text: True) if getattr(args, "yes", False) else ask_confirmation
    store = UsersStore(UsersClient(base_url=args.base_url))
    screen = UsersScreen(store, notify=print_notification, confirm=confirm)
    try:
        return asyncio.run(run(args, screen))
    finally:
        screen.close()


if __name__ == "__main__":
    sys.exit(main())
