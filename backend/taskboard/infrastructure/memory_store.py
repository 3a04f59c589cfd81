"""In-Memory Board Store — process-local BoardStore with copy isolation and snapshot rollback.

Invariants:
    - Every find_* returns a deep copy: callers never hold a live stored root
    - save() stores a deep copy; Project.boards is never stored (boards are separate roots)
    - Owner, members and comment authors are re-bound to the current user records on load
    - Loaded columns and cards come back in (position, id) order
    - transaction() snapshots all tables on the outermost entry and restores them on exception

Design Decisions:
    - Deep copies over shared references: mutations without save() are invisible,
      same as a real store
    - Nested transaction() calls join the outer unit of work (depth counter)
"""

import copy
import logging
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from taskboard.core.domain_types import BoardId, CardId, ColumnId, ProjectId, UserId
from taskboard.core.entities import Board, Card, Column, Project, User

logger = logging.getLogger(__name__)


class InMemoryBoardStore:
    """BoardStore backed by plain dicts keyed by id."""

    def __init__(self):
        self._users: dict[UUID, User] = {}
        self._projects: dict[UUID, Project] = {}
        self._boards: dict[UUID, Board] = {}
        self._depth = 0

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Unit of work — restore the pre-transaction snapshot on any exception."""
        if self._depth:
            self._depth += 1
            try:
                yield
            finally:
                self._depth -= 1
            return

        snapshot = copy.deepcopy((self._users, self._projects, self._boards))
        self._depth = 1
        try:
            yield
        except Exception:
            self._users, self._projects, self._boards = snapshot
            logger.debug("In-memory transaction rolled back")
            raise
        finally:
            self._depth = 0

    # ─── Users ──────────────────────────────────────────────────

    def find_user_by_id(self, user_id: UserId) -> User | None:
        user = self._users.get(user_id)
        return copy.deepcopy(user) if user else None

    def find_user_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email.lower() == email.lower():
                return copy.deepcopy(user)
        return None

    def save_user(self, user: User) -> User:
        self._users[user.id] = copy.deepcopy(user)
        return user

    # ─── Aggregate roots ────────────────────────────────────────

    def find_project_by_id(self, project_id: ProjectId) -> Project | None:
        stored = self._projects.get(project_id)
        if stored is None:
            return None
        project = self._rebind_project(copy.deepcopy(stored))
        project.boards = self.find_boards_by_project_id(project_id)
        return project

    def find_board_by_id(self, board_id: BoardId) -> Board | None:
        stored = self._boards.get(board_id)
        return self._rebind_board(copy.deepcopy(stored)) if stored else None

    def find_column_by_id(self, column_id: ColumnId) -> Column | None:
        for board_id, stored in self._boards.items():
            if stored.find_column(column_id) is not None:
                return self.find_board_by_id(board_id).find_column(column_id)
        return None

    def find_card_by_id(self, card_id: CardId) -> Card | None:
        for board_id, stored in self._boards.items():
            if stored.find_card(card_id) is not None:
                return self.find_board_by_id(board_id).find_card(card_id)
        return None

    def save(self, root: Project | Board) -> Project | Board:
        if isinstance(root, Project):
            stored = copy.copy(root)
            stored.boards = []
            self._projects[root.id] = copy.deepcopy(stored)
        else:
            self._boards[root.id] = copy.deepcopy(root)
        return root

    def delete(self, root: Project | Board) -> None:
        table = self._projects if isinstance(root, Project) else self._boards
        table.pop(root.id, None)

    # ─── Queries ────────────────────────────────────────────────

    def find_boards_by_member_id(self, user_id: UserId) -> list[Board]:
        return [
            self.find_board_by_id(b.id)
            for b in self._boards.values() if b.is_member(user_id)
        ]

    def find_boards_by_project_id(self, project_id: ProjectId) -> list[Board]:
        return [
            self.find_board_by_id(b.id)
            for b in self._boards.values() if b.project_id == project_id
        ]

    def find_projects_by_member_id(self, user_id: UserId) -> list[Project]:
        return [
            self.find_project_by_id(p.id)
            for p in self._projects.values() if p.is_member(user_id)
        ]

    def find_all_boards(self) -> list[Board]:
        return [self.find_board_by_id(board_id) for board_id in self._boards]

    # ─── Helpers ────────────────────────────────────────────────

    def _current(self, user: User) -> User:
        fresh = self._users.get(user.id)
        return copy.deepcopy(fresh) if fresh else user

    def _rebind_project(self, project: Project) -> Project:
        project.owner = self._current(project.owner)
        project.members = {self._current(m) for m in project.members}
        return project

    def _rebind_board(self, board: Board) -> Board:
        board.owner = self._current(board.owner)
        board.members = {self._current(m) for m in board.members}
        board.columns = board.ordered_columns()
        for column in board.columns:
            column.cards = column.ordered_cards()
            for card in column.cards:
                for comment in card.comments:
                    if comment.author is not None:
                        comment.author = self._current(comment.author)
        return board
