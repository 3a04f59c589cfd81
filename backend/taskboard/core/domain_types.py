"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, ProjectId, BoardId, ColumnId, CardId wrap UUIDs
    - All valid roles and resource kinds encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
ProjectId = NewType("ProjectId", UUID)
BoardId = NewType("BoardId", UUID)
ColumnId = NewType("ColumnId", UUID)
CardId = NewType("CardId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """User role tag — informational, not consulted by the access guard."""
    USER = "USER"
    ADMIN = "ADMIN"


class ResourceType(str, Enum):
    """Resource names used in errors and log lines."""
    USER = "User"
    PROJECT = "Project"
    BOARD = "Board"
    COLUMN = "Column"
    CARD = "Card"
    CHECKLIST_ITEM = "ChecklistItem"


class StoreBackend(str, Enum):
    """Persistence adapters selectable from settings."""
    MEMORY = "memory"
    SQL = "sql"
