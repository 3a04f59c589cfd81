"""Root conftest — shared fixtures: an in-memory store, wired services, registered users.

Invariants:
    - Every test gets a fresh InMemoryBoardStore (no state shared between tests)
    - Tests never touch a real database file or the developer's .env

Design Decisions:
    - Users are registered through UserService so they exist in the store like real users
"""

import os

import pytest

# Keep tests off any developer .env / database
os.environ.setdefault("TASKBOARD_STORE_BACKEND", "memory")
os.environ.setdefault("TASKBOARD_DATABASE_URL", "sqlite://")
os.environ.setdefault("TASKBOARD_LOG_FORMAT", "text")

from taskboard.infrastructure.memory_store import InMemoryBoardStore  # noqa: E402
from taskboard.services.board_service import BoardService  # noqa: E402
from taskboard.services.card_service import CardService  # noqa: E402
from taskboard.services.column_service import ColumnService  # noqa: E402
from taskboard.services.membership_sync import MembershipSynchronizer  # noqa: E402
from taskboard.services.project_service import ProjectService  # noqa: E402
from taskboard.services.user_service import UserService  # noqa: E402


@pytest.fixture
def store():
    return InMemoryBoardStore()


@pytest.fixture
def users(store):
    return UserService(store)


@pytest.fixture
def projects(store):
    return ProjectService(store, MembershipSynchronizer(store))


@pytest.fixture
def boards(store):
    return BoardService(store)


@pytest.fixture
def columns(store):
    return ColumnService(store)


@pytest.fixture
def cards(store):
    return CardService(store)


@pytest.fixture
def alice(users):
    return users.register("Alice", "alice@example.com", username="alice")


@pytest.fixture
def bob(users):
    return users.register("Bob", "bob@example.com", username="bob")


@pytest.fixture
def carol(users):
    return users.register("Carol", "carol@example.com")
