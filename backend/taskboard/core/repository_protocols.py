"""Boundary Protocols — contract between the core and the persistence collaborator.

Invariants:
    - Core NEVER imports from infrastructure — dependency arrows point inward only
    - All IO goes through BoardStore; implementations are injected into the services
    - Loading a Board loads its Columns, Cards and card children transitively
    - find_column_by_id / find_card_by_id return the entity INSIDE its loaded board,
      so column.board / card.column.board is the root to save
    - Every load returns a fresh object graph: no live root is shared across operations

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Synchronous methods: one operation is one unit of work at the IO boundary
    - transaction() is a context manager: commit on success, roll back on exception
"""

from typing import ContextManager, Protocol

from taskboard.core.domain_types import BoardId, CardId, ColumnId, ProjectId, UserId
from taskboard.core.entities import Board, Card, Column, Project, User


class BoardStore(Protocol):
    """Contract for aggregate persistence — implemented by infrastructure adapters."""

    def transaction(self) -> ContextManager[None]: ...

    # ─── Aggregate roots ────────────────────────────────────────
    def find_project_by_id(self, project_id: ProjectId) -> Project | None: ...
    def find_board_by_id(self, board_id: BoardId) -> Board | None: ...
    def find_column_by_id(self, column_id: ColumnId) -> Column | None: ...
    def find_card_by_id(self, card_id: CardId) -> Card | None: ...
    def save(self, root: Project | Board) -> Project | Board: ...
    def delete(self, root: Project | Board) -> None: ...

    # ─── Queries ────────────────────────────────────────────────
    def find_boards_by_member_id(self, user_id: UserId) -> list[Board]: ...
    def find_boards_by_project_id(self, project_id: ProjectId) -> list[Board]: ...
    def find_projects_by_member_id(self, user_id: UserId) -> list[Project]: ...
    def find_all_boards(self) -> list[Board]: ...

    # ─── Users ──────────────────────────────────────────────────
    def find_user_by_id(self, user_id: UserId) -> User | None: ...
    def find_user_by_email(self, email: str) -> User | None: ...
    def save_user(self, user: User) -> User: ...
