"""ORM Models — SQLAlchemy declarative rows backing the SQL board store.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rows are persistence shapes only; the entity graph lives in core/entities.py
    - Project and Board are the aggregate roots; every other row is reached through them

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from taskboard.models.membership import board_members, project_members  # noqa: F401
from taskboard.models.user import UserRow  # noqa: F401
from taskboard.models.project import ProjectRow  # noqa: F401
from taskboard.models.board import BoardRow  # noqa: F401
from taskboard.models.column import ColumnRow  # noqa: F401
from taskboard.models.card import CardRow  # noqa: F401
from taskboard.models.card_children import (  # noqa: F401
    AttachmentRow, ChecklistItemRow, CommentRow,
)
