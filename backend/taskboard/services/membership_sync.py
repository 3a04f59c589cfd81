"""Membership Synchronizer — mirrors project member changes onto the project's boards.

Invariants:
    - propagate_add is an idempotent union: a user already in the project changes nothing
    - propagate_remove refuses the project owner (OwnerRemovalError) before touching state
    - A board owner is never removed from their own board by propagation (board owner ∈ members)
    - Every board save is attempted; failed boards are collected and surfaced together
      as PartialFailureError naming each board id

Design Decisions:
    - Runs inside the caller's transaction: a PartialFailureError unwinds the whole
      unit of work, so no project/board split state is committed
    - The project itself is saved by the caller after propagation succeeds
"""

import logging
from typing import Callable

from taskboard.core.domain_types import BoardId, ResourceType, UserId
from taskboard.core.entities import Board, Project, User, utcnow
from taskboard.core.errors import OwnerRemovalError, PartialFailureError
from taskboard.core.repository_protocols import BoardStore

logger = logging.getLogger(__name__)


class MembershipSynchronizer:
    """Applies project membership changes to every board whose parent is the project."""

    def __init__(self, store: BoardStore):
        self.store = store

    def propagate_add(self, project: Project, user: User) -> bool:
        """Add user to project.members and to each child board. Returns False if already a member."""
        if project.is_member(user.id):
            return False

        project.members.add(user)
        project.updated_at = utcnow()

        def _add(board: Board) -> bool:
            if board.is_member(user.id):
                return False
            board.members.add(user)
            return True

        self._apply_to_boards(project, _add)
        logger.info(
            "Propagated member add to project boards",
            extra={"project_id": str(project.id), "user_id": str(user.id)},
        )
        return True

    def propagate_remove(self, project: Project, user_id: UserId) -> bool:
        """Remove user from project.members and from each child board."""
        if project.owner.id == user_id:
            logger.warning(
                "Refused to remove project owner",
                extra={"project_id": str(project.id), "user_id": str(user_id)},
            )
            raise OwnerRemovalError(ResourceType.PROJECT.value, project.id, user_id)

        if not project.is_member(user_id):
            return False

        project.members = {m for m in project.members if m.id != user_id}
        project.updated_at = utcnow()

        def _remove(board: Board) -> bool:
            if not board.is_member(user_id):
                return False
            if board.owner.id == user_id:
                logger.warning(
                    "Board owner kept as member during project removal",
                    extra={"board_id": str(board.id), "user_id": str(user_id)},
                )
                return False
            board.members = {m for m in board.members if m.id != user_id}
            return True

        self._apply_to_boards(project, _remove)
        logger.info(
            "Propagated member removal to project boards",
            extra={"project_id": str(project.id), "user_id": str(user_id)},
        )
        return True

    def _apply_to_boards(
        self, project: Project, change: Callable[[Board], bool],
    ) -> None:
        failed: list[BoardId] = []
        first_error: Exception | None = None

        for board in self.store.find_boards_by_project_id(project.id):
            if not change(board):
                continue
            board.updated_at = utcnow()
            try:
                self.store.save(board)
            except Exception as e:
                logger.error(
                    f"Membership propagation failed for board: {e}",
                    extra={"board_id": str(board.id), "project_id": str(project.id)},
                )
                failed.append(board.id)
                first_error = first_error or e

        if failed:
            raise PartialFailureError(failed, cause=first_error)
