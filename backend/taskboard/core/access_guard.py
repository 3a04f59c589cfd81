"""Access Control Guard — pure assertions deciding who may read or mutate an aggregate.

Invariants:
    - All functions are PURE: no IO, no state mutation; raise AccessDeniedError or return None
    - Membership and ownership compare user ids, never object identity
    - Public boards bypass membership for reads only (require_readable), never for mutations

Design Decisions:
    - Explicit calls at the top of each service method instead of decorator metadata:
      the policy table below is the single place to audit who may do what

Policy:
    read board (public)                          -> none
    read board (private)                         -> member
    update/delete board, add/remove board member -> owner
    column and card commands                     -> member of the owning board
    read project                                 -> member
    update/delete project, add/remove member     -> owner
    create board under a project                 -> member of the project
"""

from taskboard.core.domain_types import ResourceType
from taskboard.core.entities import Board, Project, User
from taskboard.core.errors import AccessDeniedError


def _resource_type(aggregate: Board | Project) -> str:
    if isinstance(aggregate, Project):
        return ResourceType.PROJECT.value
    return ResourceType.BOARD.value


def is_member(actor: User, aggregate: Board | Project) -> bool:
    return aggregate.is_member(actor.id)


def is_owner(actor: User, aggregate: Board | Project) -> bool:
    return aggregate.owner.id == actor.id


def can_read(actor: User, board: Board) -> bool:
    return board.is_public or is_member(actor, board)


def require_member(actor: User, aggregate: Board | Project) -> None:
    """Fail unless actor is in aggregate.members. Used for every mutation below owner level."""
    if not is_member(actor, aggregate):
        kind = _resource_type(aggregate)
        raise AccessDeniedError(
            f"Access denied to this {kind.lower()}",
            kind, aggregate.id, actor.id,
        )


def require_readable(actor: User, board: Board) -> None:
    """Public boards are readable by any actor; private boards require membership."""
    if not can_read(actor, board):
        raise AccessDeniedError(
            "Access denied to this board",
            ResourceType.BOARD.value, board.id, actor.id,
        )


def require_owner(actor: User, aggregate: Board | Project) -> None:
    """Fail unless actor.id == aggregate.owner.id."""
    if not is_owner(actor, aggregate):
        kind = _resource_type(aggregate)
        raise AccessDeniedError(
            f"Only the {kind.lower()} owner can perform this operation",
            kind, aggregate.id, actor.id,
        )
