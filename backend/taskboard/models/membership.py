"""Membership association tables — project_members and board_members.

Invariants:
    - Composite primary key (root id, user id): a user is a member at most once
"""

from sqlalchemy import Column, ForeignKey, Table, Uuid

from taskboard.db.base import Base


project_members = Table(
    "project_members",
    Base.metadata,
    Column("project_id", Uuid, ForeignKey("projects.id"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id"), primary_key=True),
)

board_members = Table(
    "board_members",
    Base.metadata,
    Column("board_id", Uuid, ForeignKey("boards.id"), primary_key=True),
    Column("user_id", Uuid, ForeignKey("users.id"), primary_key=True),
)
