"""Client store driven against the real app."""

import pytest

from src.client.store import UsersStore
from src.schemas.user import UserResponse


@pytest.mark.asyncio
async def test_fetch_create_then_rejected_update(api_client, create_user):
    """A rejected update leaves the cached users alone and stores the error."""
    existing = create_user("Ada", "ada@example.com")
    store = UsersStore(api_client)

    await store.fetch_users()
    assert [u.id for u in store.state.users] == [existing["id"]]

    created = await store.create_user("Grace", "grace@example.com")
    assert not created.failed
    grace = created.payload
    users_before = store.state.users
    assert users_before[-1] == grace

    rejected = await store.update_user(grace.id, "Grace", "ada@example.com")

    assert rejected.failed
    assert store.state.users == users_before
    assert store.state.error == "A user with that email already exists."
    assert store.state.error == rejected.payload


@pytest.mark.asyncio
async def test_edit_flow(api_client, create_user):
    """Fetch a user into the selected slot, update it, then delete it."""
    user = create_user("Ada", "ada@example.com")
    store = UsersStore(api_client)
    await store.fetch_users()

    await store.fetch_user(user["id"])
    assert store.state.selected_user == UserResponse(**user)

    await store.update_user(user["id"], "Ada King", "king@example.com")
    assert store.state.users == (
        UserResponse(id=user["id"], name="Ada King", email="king@example.com"),
    )

    await store.delete_user(user["id"])
    assert store.state.users == ()

    missing = await store.delete_user(user["id"])
    assert missing.failed
    assert store.state.error == f"No user found with ID {user['id']}."
