"""Access Guard — tests for pure membership / ownership / visibility assertions.

Tests cover:
    - require_member passes for members and raises AccessDeniedError otherwise
    - require_owner compares ids, not object identity
    - require_readable lets anyone read public boards, members only for private boards
    - AccessDeniedError names the resource and the actor
"""

import pytest

from taskboard.core import access_guard
from taskboard.core.entities import Board, Project, User
from taskboard.core.errors import AccessDeniedError


def _user(name: str) -> User:
    return User(name=name, email=f"{name.lower()}@example.com")


@pytest.fixture
def owner():
    return _user("Owner")


@pytest.fixture
def stranger():
    return _user("Stranger")


@pytest.fixture
def private_board(owner):
    return Board(name="Private", owner=owner, members={owner})


# ─── require_member ──────────────────────────────────────────────

def test_member_passes(owner, private_board):
    assert access_guard.require_member(owner, private_board) is None


def test_non_member_denied_on_board(stranger, private_board):
    with pytest.raises(AccessDeniedError) as exc:
        access_guard.require_member(stranger, private_board)
    assert exc.value.resource_type == "Board"
    assert exc.value.resource_id == private_board.id
    assert exc.value.actor_id == stranger.id
    assert exc.value.http_status == 403


def test_non_member_denied_on_project(owner, stranger):
    project = Project(name="Launch", owner=owner, members={owner})
    with pytest.raises(AccessDeniedError) as exc:
        access_guard.require_member(stranger, project)
    assert exc.value.resource_type == "Project"


def test_public_board_does_not_bypass_member_check(owner, stranger):
    board = Board(name="Open", owner=owner, members={owner}, is_public=True)
    with pytest.raises(AccessDeniedError):
        access_guard.require_member(stranger, board)


def test_membership_compares_ids_not_identity(owner, private_board):
    copy_of_owner = User(id=owner.id, name="Renamed", email="other@example.com")
    assert access_guard.is_member(copy_of_owner, private_board)


# ─── require_owner ───────────────────────────────────────────────

def test_owner_passes(owner, private_board):
    assert access_guard.require_owner(owner, private_board) is None


def test_member_who_is_not_owner_denied(owner, stranger, private_board):
    private_board.members.add(stranger)
    with pytest.raises(AccessDeniedError) as exc:
        access_guard.require_owner(stranger, private_board)
    assert "owner" in exc.value.message


# ─── require_readable ────────────────────────────────────────────

def test_private_board_unreadable_for_non_member(stranger, private_board):
    with pytest.raises(AccessDeniedError):
        access_guard.require_readable(stranger, private_board)


def test_public_board_readable_for_anyone(owner, stranger):
    board = Board(name="Open", owner=owner, members={owner}, is_public=True)
    assert access_guard.require_readable(stranger, board) is None
    assert access_guard.can_read(stranger, board)


def test_private_board_readable_for_member(owner, private_board):
    assert access_guard.can_read(owner, private_board)
