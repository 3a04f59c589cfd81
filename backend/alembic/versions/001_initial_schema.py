"""Initial schema — users, projects, boards, columns, cards, card children, memberships.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("email", sa.String(320), nullable=False, unique=True),
        sa.Column("username", sa.String(50), nullable=True),
        sa.Column("avatar_url", sa.String(1000), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="USER"),
        *_timestamps(),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("owner_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "project_members",
        sa.Column("project_id", sa.Uuid, sa.ForeignKey("projects.id"), primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), primary_key=True),
    )

    op.create_table(
        "boards",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("is_public", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("owner_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("project_id", sa.Uuid, sa.ForeignKey("projects.id"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_boards_project_id", "boards", ["project_id"])

    op.create_table(
        "board_members",
        sa.Column("board_id", sa.Uuid, sa.ForeignKey("boards.id"), primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("users.id"), primary_key=True),
    )

    op.create_table(
        "board_columns",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("board_id", sa.Uuid, sa.ForeignKey("boards.id"), nullable=False),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_board_columns_board_id", "board_columns", ["board_id"])

    op.create_table(
        "cards",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("column_id", sa.Uuid, sa.ForeignKey("board_columns.id"), nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("position", sa.Integer, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("due_date", sa.Date, nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_cards_column_id", "cards", ["column_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("card_id", sa.Uuid, sa.ForeignKey("cards.id"), nullable=False),
        sa.Column("author_id", sa.Uuid, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("text", sa.Text, nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_comments_card_id", "comments", ["card_id"])

    op.create_table(
        "card_attachments",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("card_id", sa.Uuid, sa.ForeignKey("cards.id"), nullable=False),
        sa.Column("filename", sa.String(500), nullable=False),
        sa.Column("location", sa.String(2000), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_card_attachments_card_id", "card_attachments", ["card_id"])

    op.create_table(
        "checklist_items",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("card_id", sa.Uuid, sa.ForeignKey("cards.id"), nullable=False),
        sa.Column("name", sa.String(500), nullable=False),
        sa.Column("is_checked", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("position", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )
    op.create_index("ix_checklist_items_card_id", "checklist_items", ["card_id"])


def downgrade() -> None:
    for table in (
        "checklist_items", "card_attachments", "comments", "cards",
        "board_columns", "board_members", "boards", "project_members",
        "projects", "users",
    ):
        op.drop_table(table)
