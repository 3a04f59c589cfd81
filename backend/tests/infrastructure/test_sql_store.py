"""SQL Board Store — service-level tests against SQLite through SQLAlchemy.

Tests cover:
    - the full service stack works on SqlBoardStore (create, move, children)
    - delete cascades the owned graph at the row level
    - cross-board move keeps the card and its children
    - membership propagation and rollback of a failed unit of work
    - SQLAlchemy failures surface as DatabaseError
    - loaded cards come back in (position, id) order when positions collide
"""

import pytest
from sqlalchemy import func, select

from taskboard.bootstrap import Services
from taskboard.core.errors import AccessDeniedError, DatabaseError, OwnerRemovalError
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.infrastructure.sql_store import SqlBoardStore
from taskboard.models import BoardRow, CardRow, ColumnRow, CommentRow, UserRow
from taskboard.services.board_service import BoardService
from taskboard.services.card_service import CardService
from taskboard.services.column_service import ColumnService
from taskboard.services.membership_sync import MembershipSynchronizer
from taskboard.services.project_service import ProjectService
from taskboard.services.user_service import UserService


@pytest.fixture
def manager():
    manager = DatabaseSessionManager("sqlite://")
    manager.create_schema()
    yield manager
    manager.dispose()


@pytest.fixture
def sql_store(manager):
    return SqlBoardStore(manager)


@pytest.fixture
def svc(sql_store):
    return Services(
        store=sql_store,
        users=UserService(sql_store),
        projects=ProjectService(sql_store, MembershipSynchronizer(sql_store)),
        boards=BoardService(sql_store),
        columns=ColumnService(sql_store),
        cards=CardService(sql_store),
    )


@pytest.fixture
def ann(svc):
    return svc.users.register("Ann", "ann@example.com")


@pytest.fixture
def ben(svc):
    return svc.users.register("Ben", "ben@example.com")


def _count(manager, model):
    with manager.session() as session:
        return session.scalar(select(func.count()).select_from(model))


def test_store_requires_transaction(sql_store):
    with pytest.raises(RuntimeError):
        sql_store.find_all_boards()


def test_board_round_trip(svc, ann):
    board = svc.boards.create(ann, "Sprint", "first sprint")
    todo = svc.columns.create(board.id, ann, "Todo")
    svc.columns.create(board.id, ann, "Done")
    card = svc.cards.create(todo.id, ann, "Task")
    svc.cards.add_checklist_item(card.id, ann, "step one")

    loaded = svc.boards.get(board.id, ann)
    assert [c.name for c in loaded.columns] == ["Todo", "Done"]
    assert loaded.owner.id == ann.id
    assert loaded.member_ids == {ann.id}
    [stored] = loaded.find_column(todo.id).cards
    assert (stored.title, stored.name, stored.position) == ("Task", "Task", 1)
    assert [i.name for i in stored.checklist_items] == ["step one"]


def test_card_positions_append(svc, ann):
    board = svc.boards.create(ann, "Sprint")
    todo = svc.columns.create(board.id, ann, "Todo")
    created = [svc.cards.create(todo.id, ann, f"T{i}") for i in range(3)]
    assert [svc.cards.get(c.id, ann).position for c in created] == [1, 2, 3]


def test_move_within_board(svc, manager, ann):
    board = svc.boards.create(ann, "Sprint")
    todo = svc.columns.create(board.id, ann, "Todo")
    done = svc.columns.create(board.id, ann, "Done")
    card = svc.cards.create(todo.id, ann, "Task")
    svc.cards.add_comment(card.id, ann, "note")

    svc.cards.move(card.id, ann, done.id, position=5)

    loaded = svc.cards.get(card.id, ann)
    assert (loaded.column.id, loaded.position) == (done.id, 5)
    assert [c.text for c in loaded.comments] == ["note"]
    assert _count(manager, CardRow) == 1


def test_move_across_boards(svc, manager, ann):
    source = svc.boards.create(ann, "Source")
    target = svc.boards.create(ann, "Target")
    src_col = svc.columns.create(source.id, ann, "Todo")
    dst_col = svc.columns.create(target.id, ann, "Inbox")
    card = svc.cards.create(src_col.id, ann, "Travel")
    svc.cards.add_comment(card.id, ann, "with me")

    svc.cards.move(card.id, ann, dst_col.id)

    loaded = svc.cards.get(card.id, ann)
    assert loaded.board.id == target.id
    assert loaded.position == 0
    assert [c.text for c in loaded.comments] == ["with me"]
    assert svc.boards.get(source.id, ann).find_column(src_col.id).cards == []
    assert _count(manager, CardRow) == 1
    assert _count(manager, CommentRow) == 1


def test_delete_board_cascades_rows(svc, manager, ann):
    board = svc.boards.create(ann, "Temp")
    todo = svc.columns.create(board.id, ann, "Todo")
    card = svc.cards.create(todo.id, ann, "Task")
    svc.cards.add_comment(card.id, ann, "bye")

    svc.boards.delete(board.id, ann)

    assert _count(manager, BoardRow) == 0
    assert _count(manager, ColumnRow) == 0
    assert _count(manager, CardRow) == 0
    assert _count(manager, CommentRow) == 0


def test_project_membership_propagates(svc, ann, ben):
    project = svc.projects.create(ann, "Launch")
    board = svc.boards.create(ann, "Sprint", project_id=project.id)

    svc.projects.add_member(project.id, ann, ben.email)
    assert svc.boards.get(board.id, ben).is_member(ben.id)

    svc.projects.remove_member(project.id, ann, ben.id)
    with pytest.raises(AccessDeniedError):
        svc.boards.get(board.id, ben)


def test_owner_removal_rolls_back(svc, ann, ben):
    project = svc.projects.create(ann, "Launch")
    svc.projects.add_member(project.id, ann, ben.email)
    with pytest.raises(OwnerRemovalError):
        svc.projects.remove_member(project.id, ann, ann.id)
    assert svc.projects.get(project.id, ann).member_ids == {ann.id, ben.id}


def test_delete_project_detaches_boards(svc, ann):
    project = svc.projects.create(ann, "Launch")
    board = svc.boards.create(ann, "Sprint", project_id=project.id)
    svc.projects.delete(project.id, ann)
    assert svc.boards.get(board.id, ann).project_id is None


def test_integrity_error_maps_to_database_error(manager, sql_store, ann):
    with pytest.raises(DatabaseError) as exc:
        with sql_store.transaction():
            sql_store.session.add(UserRow(
                name="Dup", email="ann@example.com", role="USER",
            ))
            sql_store.session.flush()
    assert exc.value.http_status == 503


def test_health_check(manager):
    assert manager.health_check() is True


def test_loaded_cards_follow_position_then_id(svc, ann):
    board = svc.boards.create(ann, "Sprint")
    todo = svc.columns.create(board.id, ann, "Todo")
    inbox = svc.columns.create(board.id, ann, "Inbox")
    first = svc.cards.create(inbox.id, ann, "First")
    second = svc.cards.create(inbox.id, ann, "Second")
    svc.cards.move(first.id, ann, todo.id, position=4)
    svc.cards.move(second.id, ann, todo.id, position=4)
    tail = svc.cards.create(todo.id, ann, "Tail")

    loaded = svc.boards.get(board.id, ann).find_column(todo.id)
    ties = sorted([first.id, second.id], key=str)
    assert [c.id for c in loaded.cards] == [*ties, tail.id]
