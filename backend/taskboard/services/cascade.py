"""Delete Cascades — empty an owned graph in dependency order before the persistence delete.

Invariants:
    - Card children (comments, attachments, checklist items) go before the card
    - Cards go before their column; columns go before their board
"""

from taskboard.core.entities import Board, Card, Column


def cascade_card(card: Card) -> None:
    card.comments.clear()
    card.attachments.clear()
    card.checklist_items.clear()


def cascade_column(column: Column) -> None:
    for card in column.cards:
        cascade_card(card)
    column.cards.clear()


def cascade_board(board: Board) -> None:
    for column in board.columns:
        cascade_column(column)
    board.columns.clear()
