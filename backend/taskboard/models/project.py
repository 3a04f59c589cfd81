"""Project ORM — aggregate root holding the project member set.

Invariants:
    - owner_id is non-nullable; the owner is also a row in project_members
    - Boards reference projects by boards.project_id; deleting a project never deletes boards

Design Decisions:
    - No ORM relationship to boards: boards are their own roots, loaded by query
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.db.base import Base
from taskboard.models.membership import project_members


class ProjectRow(Base):
    __tablename__ = "projects"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    owner: Mapped["UserRow"] = relationship("UserRow", lazy="selectin")
    members: Mapped[list["UserRow"]] = relationship(
        "UserRow", secondary=project_members, lazy="selectin",
    )
