"""Column Service — columns are edited by any board member, not only the owner."""

import logging

from taskboard.core import access_guard, positions
from taskboard.core.domain_types import BoardId, ColumnId, ResourceType
from taskboard.core.entities import Board, Column, User, utcnow
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.repository_protocols import BoardStore
from taskboard.schemas.updates import require_text
from taskboard.services.cascade import cascade_column

logger = logging.getLogger(__name__)


class ColumnService:

    def __init__(self, store: BoardStore):
        self.store = store

    def _load(self, board_id: BoardId, actor: User) -> Board:
        board = self.store.find_board_by_id(board_id)
        if board is None:
            raise ResourceNotFoundError(ResourceType.BOARD.value, board_id)
        access_guard.require_member(actor, board)
        return board

    @staticmethod
    def _column(board: Board, column_id: ColumnId) -> Column:
        column = board.find_column(column_id)
        if column is None:
            raise ResourceNotFoundError(ResourceType.COLUMN.value, column_id)
        return column

    def create(
        self, board_id: BoardId, actor: User, name: str, position: int | None = None,
    ) -> Column:
        with self.store.transaction():
            board = self._load(board_id, actor)
            column = Column(
                name=require_text(name, "name"),
                position=positions.resolve_column_position(board.columns, position),
                board=board,
            )
            board.columns.append(column)
            board.updated_at = utcnow()
            self.store.save(board)
        logger.info(
            f"Column created: {column.name}",
            extra={"board_id": str(board_id), "actor_id": str(actor.id)},
        )
        return column

    def update(
        self,
        board_id: BoardId,
        column_id: ColumnId,
        actor: User,
        name: str | None = None,
        position: int | None = None,
    ) -> Column:
        """Rename and/or reposition. A given position is stored as-is."""
        with self.store.transaction():
            board = self._load(board_id, actor)
            column = self._column(board, column_id)
            if name is not None:
                column.name = require_text(name, "name")
            if position is not None:
                column.position = position
            column.updated_at = utcnow()
            self.store.save(board)
        logger.info(
            "Column updated",
            extra={"board_id": str(board_id), "actor_id": str(actor.id)},
        )
        return column

    def delete(self, board_id: BoardId, column_id: ColumnId, actor: User) -> None:
        with self.store.transaction():
            board = self._load(board_id, actor)
            column = self._column(board, column_id)
            cascade_column(column)
            board.columns.remove(column)
            board.updated_at = utcnow()
            self.store.save(board)
        logger.info(
            "Column deleted",
            extra={"board_id": str(board_id), "actor_id": str(actor.id)},
        )
