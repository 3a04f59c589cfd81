"""Card ORM — work item inside a column; owns comments, attachments and checklist items.

Invariants:
    - position is nullable for rows written before positions were assigned; the store
      treats them as "no position" and the append rule skips them
    - is_active is written True on creation and never toggled by the core
"""

import uuid
from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from taskboard.db.base import Base


class CardRow(Base):
    __tablename__ = "cards"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    column_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("board_columns.id"), nullable=False, index=True,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[int | None] = mapped_column(Integer, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    column: Mapped["ColumnRow"] = relationship("ColumnRow", back_populates="cards")
    comments: Mapped[list["CommentRow"]] = relationship(
        "CommentRow", back_populates="card",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="CommentRow.created_at",
    )
    attachments: Mapped[list["AttachmentRow"]] = relationship(
        "AttachmentRow", back_populates="card",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="AttachmentRow.created_at",
    )
    checklist_items: Mapped[list["ChecklistItemRow"]] = relationship(
        "ChecklistItemRow", back_populates="card",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="ChecklistItemRow.position",
    )
