"""Board Service — create, read, update, delete boards and manage their members.

Invariants:
    - board.owner ∈ board.members after every call
    - A board created under a project starts with the project's member set (plus the creator)
    - get() applies the visibility rule: public boards for anyone, private boards for members
    - remove_member refuses the owner (OwnerRemovalError) and leaves state unchanged
    - delete() cascades in memory (cards' children → cards → columns) before store.delete

Design Decisions:
    - Explicit cascade over store-side ON DELETE rules: the same order applies to every
      store adapter, and the in-memory graph is empty before the persistence call
"""

import logging

from taskboard.core import access_guard
from taskboard.core.domain_types import BoardId, ProjectId, ResourceType, UserId
from taskboard.core.entities import Board, User, utcnow
from taskboard.core.errors import OwnerRemovalError, ResourceNotFoundError
from taskboard.core.repository_protocols import BoardStore
from taskboard.schemas.updates import BoardUpdate, parse_update, require_text
from taskboard.services.cascade import cascade_board

logger = logging.getLogger(__name__)


class BoardService:
    """Aggregate mutator for Board roots."""

    def __init__(self, store: BoardStore):
        self.store = store

    def _load(self, board_id: BoardId) -> Board:
        board = self.store.find_board_by_id(board_id)
        if board is None:
            raise ResourceNotFoundError(ResourceType.BOARD.value, board_id)
        return board

    def create(
        self,
        actor: User,
        name: str,
        description: str | None = None,
        is_public: bool = False,
        project_id: ProjectId | None = None,
    ) -> Board:
        """New board owned by actor. Under a project, actor must be a project member."""
        with self.store.transaction():
            members = {actor}
            if project_id is not None:
                project = self.store.find_project_by_id(project_id)
                if project is None:
                    raise ResourceNotFoundError(ResourceType.PROJECT.value, project_id)
                access_guard.require_member(actor, project)
                members |= project.members

            board = Board(
                name=require_text(name, "name"),
                description=description,
                is_public=is_public,
                owner=actor,
                project_id=project_id,
                members=members,
            )
            self.store.save(board)
        logger.info(
            f"Board created: {board.name}",
            extra={
                "board_id": str(board.id), "actor_id": str(actor.id),
                "project_id": str(project_id) if project_id else None,
            },
        )
        return board

    def get(self, board_id: BoardId, actor: User) -> Board:
        with self.store.transaction():
            board = self._load(board_id)
            access_guard.require_readable(actor, board)
            return board

    def list_for(self, actor: User) -> list[Board]:
        """Boards where the actor is a member."""
        with self.store.transaction():
            return self.store.find_boards_by_member_id(actor.id)

    def list_public(self) -> list[Board]:
        """Public board discovery."""
        with self.store.transaction():
            return [b for b in self.store.find_all_boards() if b.is_public]

    def update(self, board_id: BoardId, actor: User, fields: BoardUpdate | dict) -> Board:
        changes = parse_update(BoardUpdate, fields).changes()
        with self.store.transaction():
            board = self._load(board_id)
            access_guard.require_owner(actor, board)
            for key, value in changes.items():
                setattr(board, key, value)
            board.updated_at = utcnow()
            self.store.save(board)
        logger.info(
            "Board updated",
            extra={"board_id": str(board_id), "actor_id": str(actor.id)},
        )
        return board

    def delete(self, board_id: BoardId, actor: User) -> None:
        with self.store.transaction():
            board = self._load(board_id)
            access_guard.require_owner(actor, board)
            cascade_board(board)
            self.store.delete(board)
        logger.info(
            "Board deleted",
            extra={"board_id": str(board_id), "actor_id": str(actor.id)},
        )

    def add_member(self, board_id: BoardId, actor: User, user_id: UserId) -> Board:
        with self.store.transaction():
            board = self._load(board_id)
            access_guard.require_owner(actor, board)
            user = self.store.find_user_by_id(user_id)
            if user is None:
                raise ResourceNotFoundError(ResourceType.USER.value, user_id)
            if not board.is_member(user.id):
                board.members.add(user)
                board.updated_at = utcnow()
                self.store.save(board)
        logger.info(
            "Board member added",
            extra={
                "board_id": str(board_id), "actor_id": str(actor.id),
                "user_id": str(user_id),
            },
        )
        return board

    def remove_member(self, board_id: BoardId, actor: User, user_id: UserId) -> Board:
        with self.store.transaction():
            board = self._load(board_id)
            access_guard.require_owner(actor, board)
            if board.owner.id == user_id:
                logger.warning(
                    "Refused to remove board owner",
                    extra={"board_id": str(board_id), "actor_id": str(actor.id)},
                )
                raise OwnerRemovalError(ResourceType.BOARD.value, board_id, user_id)
            if self.store.find_user_by_id(user_id) is None:
                raise ResourceNotFoundError(ResourceType.USER.value, user_id)
            if board.is_member(user_id):
                board.members = {m for m in board.members if m.id != user_id}
                board.updated_at = utcnow()
                self.store.save(board)
        logger.info(
            "Board member removed",
            extra={
                "board_id": str(board_id), "actor_id": str(actor.id),
                "user_id": str(user_id),
            },
        )
        return board
