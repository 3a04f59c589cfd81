"""Entity Graph — typed records for users, projects, boards, columns, cards and card children.

Invariants:
    - Board exclusively owns its Columns; Column exclusively owns its Cards
    - Card exclusively owns its Comments, Attachments and ChecklistItems
    - members sets hold shared User references (non-owning)
    - User equality and hashing use id only: two loads of one user are the same member
    - Back-references (column.board, card.column) are excluded from repr and equality
    - Stored list order is not presentation order; readers use ordered_columns() and
      ordered_cards(), which sort by (position, id)

Design Decisions:
    - Plain dataclasses with structural accessors only: rules live in access_guard,
      positions and the services (no behavior hidden in the records)
    - Project.boards is hydrated by the store on load; boards are their own roots
      and are saved separately
    - Board.project_id instead of an object back-reference: keeps the two aggregate
      roots independently loadable
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from taskboard.core import positions
from taskboard.core.domain_types import Role


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(eq=False)
class User:
    """System-owned identity. Referenced by projects, boards and comments, never owned."""
    name: str
    email: str
    username: str | None = None
    avatar_url: str | None = None
    role: Role = Role.USER
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


@dataclass(eq=False)
class Comment:
    text: str
    author: User | None = None
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False)
class Attachment:
    filename: str
    location: str
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False)
class ChecklistItem:
    name: str
    is_checked: bool = False
    position: int = 0
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)


@dataclass(eq=False)
class Card:
    """Work item inside a column. is_active is set on creation and never toggled."""
    title: str
    name: str | None = None
    description: str | None = None
    position: int | None = 0
    is_active: bool = True
    due_date: date | None = None
    column: "Column | None" = field(default=None, repr=False)
    comments: list[Comment] = field(default_factory=list)
    attachments: list[Attachment] = field(default_factory=list)
    checklist_items: list[ChecklistItem] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def board(self) -> "Board | None":
        return self.column.board if self.column is not None else None

    def find_checklist_item(self, item_id: UUID) -> ChecklistItem | None:
        return next((i for i in self.checklist_items if i.id == item_id), None)


@dataclass(eq=False)
class Column:
    name: str
    position: int = 0
    board: "Board | None" = field(default=None, repr=False)
    cards: list[Card] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def find_card(self, card_id: UUID) -> Card | None:
        return next((c for c in self.cards if c.id == card_id), None)

    def ordered_cards(self) -> list[Card]:
        """Cards in presentation order: (position, id)."""
        return positions.ordered(self.cards)


@dataclass(eq=False)
class Board:
    """Aggregate root — loading a board loads its columns and cards transitively."""
    name: str
    owner: User
    description: str | None = None
    is_public: bool = False
    project_id: UUID | None = None
    members: set[User] = field(default_factory=set)
    columns: list[Column] = field(default_factory=list)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def member_ids(self) -> set[UUID]:
        return {m.id for m in self.members}

    def is_member(self, user_id: UUID) -> bool:
        return user_id in self.member_ids

    def find_column(self, column_id: UUID) -> Column | None:
        return next((c for c in self.columns if c.id == column_id), None)

    def ordered_columns(self) -> list[Column]:
        """Columns in presentation order: (position, id)."""
        return positions.ordered(self.columns)

    def find_card(self, card_id: UUID) -> Card | None:
        for column in self.columns:
            card = column.find_card(card_id)
            if card is not None:
                return card
        return None


@dataclass(eq=False)
class Project:
    """Aggregate root — owns its member set; boards listed here are read-only hydration."""
    name: str
    owner: User
    description: str | None = None
    members: set[User] = field(default_factory=set)
    boards: list[Board] = field(default_factory=list, repr=False)
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @property
    def member_ids(self) -> set[UUID]:
        return {m.id for m in self.members}

    def is_member(self, user_id: UUID) -> bool:
        return user_id in self.member_ids
