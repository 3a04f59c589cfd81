"""User Service — tests for registration and profile edits.

Tests cover:
    - register stores the user with role USER by default
    - duplicate email (case-insensitive) raises DuplicateEmailError
    - update_profile applies partial fields and rejects another user's email
    - unknown user id is NotFound
"""

from uuid import uuid4

import pytest

from taskboard.core.domain_types import Role
from taskboard.core.errors import (
    DuplicateEmailError, ResourceNotFoundError, ValidationError,
)


def test_register_defaults(users):
    user = users.register("Dana", "dana@example.com")
    loaded = users.get(user.id)
    assert (loaded.name, loaded.email, loaded.role) == ("Dana", "dana@example.com", Role.USER)


def test_register_admin(users):
    admin = users.register("Root", "root@example.com", role=Role.ADMIN)
    assert users.get(admin.id).role == Role.ADMIN


def test_register_duplicate_email(users, alice):
    with pytest.raises(DuplicateEmailError) as exc:
        users.register("Other Alice", "ALICE@example.com")
    assert exc.value.http_status == 409


def test_register_blank_name_rejected(users):
    with pytest.raises(ValidationError):
        users.register("  ", "blank@example.com")


def test_get_unknown_user(users):
    with pytest.raises(ResourceNotFoundError):
        users.get(uuid4())


def test_update_profile_partial(users, alice):
    users.update_profile(alice, {"username": "al", "avatar_url": "https://img/a.png"})
    loaded = users.get(alice.id)
    assert (loaded.name, loaded.username, loaded.avatar_url) == (
        "Alice", "al", "https://img/a.png",
    )


def test_update_profile_same_email_allowed(users, alice):
    users.update_profile(alice, {"email": "alice@example.com"})
    assert users.get(alice.id).email == "alice@example.com"


def test_update_profile_taken_email(users, alice, bob):
    with pytest.raises(DuplicateEmailError):
        users.update_profile(alice, {"email": bob.email})
    assert users.get(alice.id).email == "alice@example.com"


def test_update_profile_invalid_email(users, alice):
    with pytest.raises(ValidationError):
        users.update_profile(alice, {"email": "not-an-email"})


def test_profile_change_visible_on_boards(users, boards, alice):
    board = boards.create(alice, "Mine")
    users.update_profile(alice, {"name": "Alice A."})
    assert boards.get(board.id, alice).owner.name == "Alice A."
