"""In-Memory Board Store — tests for copy isolation, rollback, and queries.

Tests cover:
    - loaded roots are copies: mutation without save() is invisible
    - transaction() restores the snapshot on exception and joins when nested
    - project load hydrates boards; saved projects never embed boards
    - user records re-bound on load; case-insensitive email lookup
"""

import pytest

from taskboard.core.entities import Board, Column, Project, User


@pytest.fixture
def owner(store):
    user = User(name="Owner", email="Owner@Example.com")
    store.save_user(user)
    return user


def test_loaded_board_is_a_copy(store, owner):
    board = Board(name="Sprint", owner=owner, members={owner})
    with store.transaction():
        store.save(board)
        loaded = store.find_board_by_id(board.id)
    loaded.name = "Changed"
    loaded.columns.append(Column(name="Ghost"))
    with store.transaction():
        again = store.find_board_by_id(board.id)
    assert again.name == "Sprint"
    assert again.columns == []


def test_saved_board_detached_from_caller(store, owner):
    board = Board(name="Sprint", owner=owner, members={owner})
    with store.transaction():
        store.save(board)
    board.name = "Mutated after save"
    with store.transaction():
        assert store.find_board_by_id(board.id).name == "Sprint"


def test_transaction_rolls_back_on_error(store, owner):
    board = Board(name="Sprint", owner=owner, members={owner})
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.save(board)
            raise RuntimeError("boom")
    with store.transaction():
        assert store.find_board_by_id(board.id) is None


def test_nested_transaction_joins_outer(store, owner):
    board = Board(name="Sprint", owner=owner, members={owner})
    with pytest.raises(RuntimeError):
        with store.transaction():
            with store.transaction():
                store.save(board)
            raise RuntimeError("outer fails")
    with store.transaction():
        assert store.find_all_boards() == []


def test_project_load_hydrates_boards(store, owner):
    project = Project(name="Launch", owner=owner, members={owner})
    board = Board(name="Sprint", owner=owner, members={owner}, project_id=project.id)
    project.boards = [board]
    with store.transaction():
        store.save(project)
        assert store.find_boards_by_project_id(project.id) == []
        store.save(board)
        loaded = store.find_project_by_id(project.id)
    assert [b.id for b in loaded.boards] == [board.id]


def test_column_and_card_lookup_return_graph(store, owner):
    board = Board(name="Sprint", owner=owner, members={owner})
    column = Column(name="Todo", board=board)
    board.columns.append(column)
    with store.transaction():
        store.save(board)
        found = store.find_column_by_id(column.id)
    assert found.board.id == board.id
    assert found.board.columns[0] is found


def test_user_rebound_on_load(store, owner):
    board = Board(name="Sprint", owner=owner, members={owner})
    with store.transaction():
        store.save(board)
        renamed = store.find_user_by_id(owner.id)
        renamed.name = "Renamed"
        store.save_user(renamed)
        loaded = store.find_board_by_id(board.id)
    assert loaded.owner.name == "Renamed"


def test_email_lookup_case_insensitive(store, owner):
    with store.transaction():
        assert store.find_user_by_email("owner@example.COM").id == owner.id
        assert store.find_user_by_email("nobody@example.com") is None


def test_member_queries(store, owner):
    other = User(name="Other", email="other@example.com")
    store.save_user(other)
    mine = Board(name="Mine", owner=owner, members={owner})
    shared = Board(name="Shared", owner=other, members={owner, other})
    with store.transaction():
        store.save(mine)
        store.save(shared)
        assert {b.id for b in store.find_boards_by_member_id(owner.id)} == {mine.id, shared.id}
        assert [b.id for b in store.find_boards_by_member_id(other.id)] == [shared.id]
