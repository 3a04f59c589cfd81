"""SQL Board Store — BoardStore over SQLAlchemy rows (taskboard.models).

Invariants:
    - All access happens inside transaction(): one Session per outermost unit of work,
      committed on success, rolled back (via DatabaseSessionManager) on any exception
    - Loads map rows to fresh entity graphs; no row object escapes the store
    - Loaded columns and cards come back in (position, id) order
    - save(board) rewrites the board's owned collections: rows missing from the entity
      graph are deleted at flush (delete-orphan), rows present are updated or inserted
    - save()/delete() flush immediately so statement order follows call order

Design Decisions:
    - Entity <-> row mapping in one module: the core never sees SQLAlchemy types
    - Users referenced by a root but missing from the users table are inserted on save;
      existing user rows are only changed through save_user()
"""

import logging
from contextlib import contextmanager
from typing import Iterator
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from taskboard.core.domain_types import (
    BoardId, CardId, ColumnId, ProjectId, Role, UserId,
)
from taskboard.core.entities import (
    Attachment, Board, Card, ChecklistItem, Column, Comment, Project, User,
)
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.models import (
    AttachmentRow, BoardRow, CardRow, ChecklistItemRow, ColumnRow, CommentRow,
    ProjectRow, UserRow,
)

logger = logging.getLogger(__name__)


# ─── Row → entity ───────────────────────────────────────────────

def _to_user(row: UserRow) -> User:
    return User(
        id=row.id, name=row.name, email=row.email, username=row.username,
        avatar_url=row.avatar_url, role=Role(row.role),
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _to_card(row: CardRow, column: Column) -> Card:
    return Card(
        id=row.id, title=row.title, name=row.name, description=row.description,
        position=row.position, is_active=row.is_active, due_date=row.due_date,
        column=column,
        comments=[
            Comment(
                id=c.id, text=c.text,
                author=_to_user(c.author) if c.author is not None else None,
                created_at=c.created_at, updated_at=c.updated_at,
            )
            for c in row.comments
        ],
        attachments=[
            Attachment(
                id=a.id, filename=a.filename, location=a.location,
                created_at=a.created_at, updated_at=a.updated_at,
            )
            for a in row.attachments
        ],
        checklist_items=[
            ChecklistItem(
                id=i.id, name=i.name, is_checked=i.is_checked, position=i.position,
                created_at=i.created_at, updated_at=i.updated_at,
            )
            for i in row.checklist_items
        ],
        created_at=row.created_at, updated_at=row.updated_at,
    )


def _to_board(row: BoardRow) -> Board:
    board = Board(
        id=row.id, name=row.name, description=row.description,
        is_public=row.is_public, owner=_to_user(row.owner),
        project_id=row.project_id,
        members={_to_user(m) for m in row.members},
        created_at=row.created_at, updated_at=row.updated_at,
    )
    for col_row in row.columns:
        column = Column(
            id=col_row.id, name=col_row.name, position=col_row.position,
            board=board,
            created_at=col_row.created_at, updated_at=col_row.updated_at,
        )
        column.cards = [_to_card(card_row, column) for card_row in col_row.cards]
        column.cards = column.ordered_cards()
        board.columns.append(column)
    board.columns = board.ordered_columns()
    return board


def _to_project(row: ProjectRow) -> Project:
    return Project(
        id=row.id, name=row.name, description=row.description,
        owner=_to_user(row.owner),
        members={_to_user(m) for m in row.members},
        created_at=row.created_at, updated_at=row.updated_at,
    )


class SqlBoardStore:
    """BoardStore backed by a relational database through SQLAlchemy."""

    def __init__(self, manager: DatabaseSessionManager):
        self.manager = manager
        self._session: Session | None = None

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Unit of work — commit on success; the session manager rolls back on error."""
        if self._session is not None:
            yield
            return
        with self.manager.session() as session:
            self._session = session
            try:
                yield
                session.commit()
            finally:
                self._session = None

    @property
    def session(self) -> Session:
        if self._session is None:
            raise RuntimeError("SqlBoardStore used outside of transaction()")
        return self._session

    # ─── Users ──────────────────────────────────────────────────

    def find_user_by_id(self, user_id: UserId) -> User | None:
        row = self.session.get(UserRow, user_id)
        return _to_user(row) if row else None

    def find_user_by_email(self, email: str) -> User | None:
        row = self.session.scalars(
            select(UserRow).where(func.lower(UserRow.email) == email.lower()),
        ).first()
        return _to_user(row) if row else None

    def save_user(self, user: User) -> User:
        row = self.session.get(UserRow, user.id)
        if row is None:
            row = UserRow(id=user.id, created_at=user.created_at)
            self.session.add(row)
        row.name = user.name
        row.email = user.email
        row.username = user.username
        row.avatar_url = user.avatar_url
        row.role = user.role.value
        row.updated_at = user.updated_at
        self.session.flush()
        return user

    # ─── Aggregate roots ────────────────────────────────────────

    def find_project_by_id(self, project_id: ProjectId) -> Project | None:
        row = self.session.get(ProjectRow, project_id)
        if row is None:
            return None
        project = _to_project(row)
        project.boards = self.find_boards_by_project_id(project_id)
        return project

    def find_board_by_id(self, board_id: BoardId) -> Board | None:
        row = self.session.get(BoardRow, board_id)
        return _to_board(row) if row else None

    def find_column_by_id(self, column_id: ColumnId) -> Column | None:
        row = self.session.get(ColumnRow, column_id)
        if row is None:
            return None
        return self.find_board_by_id(row.board_id).find_column(column_id)

    def find_card_by_id(self, card_id: CardId) -> Card | None:
        row = self.session.get(CardRow, card_id)
        if row is None:
            return None
        board = self.find_board_by_id(row.column.board_id)
        return board.find_card(card_id)

    def save(self, root: Project | Board) -> Project | Board:
        with self.session.no_autoflush:
            if isinstance(root, Project):
                self._write_project(root)
            else:
                self._write_board(root)
        self.session.flush()
        return root

    def delete(self, root: Project | Board) -> None:
        model = ProjectRow if isinstance(root, Project) else BoardRow
        row = self.session.get(model, root.id)
        if row is not None:
            self.session.delete(row)
            self.session.flush()

    # ─── Queries ────────────────────────────────────────────────

    def find_boards_by_member_id(self, user_id: UserId) -> list[Board]:
        rows = self.session.scalars(
            select(BoardRow).join(BoardRow.members).where(UserRow.id == user_id),
        ).all()
        return [_to_board(r) for r in rows]

    def find_boards_by_project_id(self, project_id: ProjectId) -> list[Board]:
        rows = self.session.scalars(
            select(BoardRow).where(BoardRow.project_id == project_id),
        ).all()
        return [_to_board(r) for r in rows]

    def find_projects_by_member_id(self, user_id: UserId) -> list[Project]:
        rows = self.session.scalars(
            select(ProjectRow).join(ProjectRow.members).where(UserRow.id == user_id),
        ).all()
        return [self.find_project_by_id(r.id) for r in rows]

    def find_all_boards(self) -> list[Board]:
        rows = self.session.scalars(select(BoardRow)).all()
        return [_to_board(r) for r in rows]

    # ─── Entity → row ───────────────────────────────────────────

    def _get_or_add(self, model, entity_id: UUID, **init):
        row = self.session.get(model, entity_id)
        if row is None:
            row = model(id=entity_id, **init)
            self.session.add(row)
        return row

    def _user_row(self, user: User) -> UserRow:
        row = self.session.get(UserRow, user.id)
        if row is None:
            row = UserRow(
                id=user.id, name=user.name, email=user.email,
                username=user.username, avatar_url=user.avatar_url,
                role=user.role.value,
                created_at=user.created_at, updated_at=user.updated_at,
            )
            self.session.add(row)
        return row

    def _write_project(self, project: Project) -> None:
        row = self._get_or_add(ProjectRow, project.id, created_at=project.created_at)
        row.name = project.name
        row.description = project.description
        row.owner = self._user_row(project.owner)
        row.members = [self._user_row(m) for m in project.members]
        row.updated_at = project.updated_at

    def _write_board(self, board: Board) -> None:
        row = self._get_or_add(BoardRow, board.id, created_at=board.created_at)
        row.name = board.name
        row.description = board.description
        row.is_public = board.is_public
        row.project_id = board.project_id
        row.owner = self._user_row(board.owner)
        row.members = [self._user_row(m) for m in board.members]
        row.updated_at = board.updated_at
        row.columns = [self._column_row(c) for c in board.columns]

    def _column_row(self, column: Column) -> ColumnRow:
        row = self._get_or_add(ColumnRow, column.id, created_at=column.created_at)
        row.name = column.name
        row.position = column.position
        row.updated_at = column.updated_at
        row.cards = [self._card_row(card) for card in column.cards]
        return row

    def _card_row(self, card: Card) -> CardRow:
        row = self._get_or_add(CardRow, card.id, created_at=card.created_at)
        row.title = card.title
        row.name = card.name
        row.description = card.description
        row.position = card.position
        row.is_active = card.is_active
        row.due_date = card.due_date
        row.updated_at = card.updated_at

        comments = []
        for comment in card.comments:
            c_row = self._get_or_add(CommentRow, comment.id, created_at=comment.created_at)
            c_row.text = comment.text
            c_row.author = self._user_row(comment.author) if comment.author else None
            c_row.updated_at = comment.updated_at
            comments.append(c_row)
        row.comments = comments

        attachments = []
        for attachment in card.attachments:
            a_row = self._get_or_add(
                AttachmentRow, attachment.id, created_at=attachment.created_at,
            )
            a_row.filename = attachment.filename
            a_row.location = attachment.location
            a_row.updated_at = attachment.updated_at
            attachments.append(a_row)
        row.attachments = attachments

        items = []
        for item in card.checklist_items:
            i_row = self._get_or_add(ChecklistItemRow, item.id, created_at=item.created_at)
            i_row.name = item.name
            i_row.is_checked = item.is_checked
            i_row.position = item.position
            i_row.updated_at = item.updated_at
            items.append(i_row)
        row.checklist_items = items
        return row
