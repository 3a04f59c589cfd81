"""Board ORM — aggregate root; owns its columns (and through them cards).

Invariants:
    - owner_id is non-nullable; the owner is also a row in board_members
    - project_id is nullable: standalone boards and boards detached from a deleted project
    - columns load ordered by position

Design Decisions:
    - cascade delete-orphan on columns: the store rewrites the owned collections on save
      and rows dropped from the entity graph are removed at flush
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.db.base import Base
from taskboard.models.membership import board_members


class BoardRow(Base):
    __tablename__ = "boards"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id"), nullable=False,
    )
    project_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("projects.id"), nullable=True, index=True,
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
        "UserRow", secondary=board_members, lazy="selectin",
    )
    columns: Mapped[list["ColumnRow"]] = relationship(
        "ColumnRow", back_populates="board",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ColumnRow.position",
    )
