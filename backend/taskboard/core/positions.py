"""Position Sequencer — ordering keys for columns within a board and cards within a column.

Invariants:
    - Append for cards: max(sibling positions, default 0) + 1; siblings without a position are skipped
    - Append for columns: count(siblings), zero-based
    - An explicit position is written verbatim; siblings are NEVER renumbered
    - Moving without a position stores 0
    - Readers order by (position, id) and must tolerate gaps and duplicates

Design Decisions:
    - Permissive positions over strict uniqueness: no shifting pass means a move touches
      exactly one card, and duplicate positions remain a reader-side concern
"""

from typing import Iterable, Protocol, TypeVar
from uuid import UUID


MOVE_DEFAULT_POSITION: int = 0


class Positioned(Protocol):
    id: UUID
    position: int | None


P = TypeVar("P", bound=Positioned)


def next_card_position(siblings: Iterable[Positioned]) -> int:
    """Append rule for cards and checklist items: one past the current maximum."""
    positions = [s.position for s in siblings if s.position is not None]
    return max(positions, default=0) + 1


def next_column_position(siblings: Iterable[Positioned]) -> int:
    """Append rule for columns: number of existing columns."""
    return sum(1 for _ in siblings)


def resolve_column_position(
    siblings: Iterable[Positioned], requested: int | None,
) -> int:
    if requested is not None:
        return requested
    return next_column_position(siblings)


def resolve_move_position(requested: int | None) -> int:
    return MOVE_DEFAULT_POSITION if requested is None else requested


def sort_key(item: Positioned) -> tuple[int, str]:
    position = item.position if item.position is not None else 0
    return (position, str(item.id))


def ordered(items: Iterable[P]) -> list[P]:
    """Presentation order: (position, id). Ties are broken by id."""
    return sorted(items, key=sort_key)
