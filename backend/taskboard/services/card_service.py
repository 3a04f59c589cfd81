"""Card Service — card lifecycle, moves between columns, and card children.

Invariants:
    - Every command requires membership of the board owning the card (or the target column)
    - move() requires membership of BOTH the source and the destination board
    - New cards append at max(sibling positions, default 0) + 1 and start is_active=True
    - An explicit move position is stored verbatim; siblings are never renumbered
    - Cards are persisted through their board root: the board is what gets saved

Design Decisions:
    - Cross-board move saves both roots inside one transaction so the card is never
      present in zero or two boards after commit
    - Same-board move reuses the already loaded board graph: one root, one save
"""

import logging
from datetime import date
from uuid import UUID

from taskboard.core import access_guard, positions
from taskboard.core.domain_types import CardId, ColumnId, ResourceType
from taskboard.core.entities import (
    Attachment, Board, Card, ChecklistItem, Column, Comment, User, utcnow,
)
from taskboard.core.errors import ResourceNotFoundError
from taskboard.core.repository_protocols import BoardStore
from taskboard.schemas.updates import CardUpdate, parse_update, require_text
from taskboard.services.cascade import cascade_card

logger = logging.getLogger(__name__)


class CardService:
    """Aggregate mutator for cards; all writes go through the owning Board root."""

    def __init__(self, store: BoardStore):
        self.store = store

    def _load_column(self, column_id: ColumnId) -> Column:
        column = self.store.find_column_by_id(column_id)
        if column is None:
            raise ResourceNotFoundError(ResourceType.COLUMN.value, column_id)
        return column

    def _load_card(self, card_id: CardId, actor: User) -> Card:
        card = self.store.find_card_by_id(card_id)
        if card is None:
            raise ResourceNotFoundError(ResourceType.CARD.value, card_id)
        access_guard.require_member(actor, card.board)
        return card

    def _touch_and_save(self, card: Card) -> None:
        card.updated_at = utcnow()
        self.store.save(card.board)

    # ─── Card lifecycle ─────────────────────────────────────────

    def create(
        self,
        column_id: ColumnId,
        actor: User,
        title: str,
        name: str | None = None,
        description: str | None = None,
        due_date: date | None = None,
    ) -> Card:
        """Append a new card to the column. name defaults to title."""
        with self.store.transaction():
            column = self._load_column(column_id)
            access_guard.require_member(actor, column.board)
            title = require_text(title, "title")
            card = Card(
                title=title,
                name=name if name is not None else title,
                description=description,
                due_date=due_date,
                position=positions.next_card_position(column.cards),
                is_active=True,
                column=column,
            )
            column.cards.append(card)
            self.store.save(column.board)
        logger.info(
            f"Card created: {card.title}",
            extra={
                "card_id": str(card.id), "board_id": str(column.board.id),
                "actor_id": str(actor.id),
            },
        )
        return card

    def get(self, card_id: CardId, actor: User) -> Card:
        """Read a card; follows the board visibility rule."""
        with self.store.transaction():
            card = self.store.find_card_by_id(card_id)
            if card is None:
                raise ResourceNotFoundError(ResourceType.CARD.value, card_id)
            access_guard.require_readable(actor, card.board)
            return card

    def update(self, card_id: CardId, actor: User, fields: CardUpdate | dict) -> Card:
        changes = parse_update(CardUpdate, fields).changes()
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            for key, value in changes.items():
                setattr(card, key, value)
            self._touch_and_save(card)
        logger.info(
            "Card updated",
            extra={"card_id": str(card_id), "actor_id": str(actor.id)},
        )
        return card

    def delete(self, card_id: CardId, actor: User) -> None:
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            board = card.board
            cascade_card(card)
            card.column.cards.remove(card)
            board.updated_at = utcnow()
            self.store.save(board)
        logger.info(
            "Card deleted",
            extra={"card_id": str(card_id), "actor_id": str(actor.id)},
        )

    def move(
        self,
        card_id: CardId,
        actor: User,
        to_column_id: ColumnId,
        position: int | None = None,
    ) -> Card:
        """Move a card to another column (possibly on another board)."""
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            source: Board = card.board

            target = source.find_column(to_column_id)
            if target is None:
                target = self._load_column(to_column_id)
                access_guard.require_member(actor, target.board)

            card.column.cards.remove(card)
            target.cards.append(card)
            card.column = target
            card.position = positions.resolve_move_position(position)
            card.updated_at = utcnow()

            # destination first: the card row must belong to its new column
            # before the source root drops cards it no longer holds
            if target.board is not source:
                self.store.save(target.board)
            self.store.save(source)
        logger.info(
            "Card moved",
            extra={
                "card_id": str(card_id), "actor_id": str(actor.id),
                "board_id": str(target.board.id),
            },
        )
        return card

    # ─── Card children ──────────────────────────────────────────

    def add_comment(self, card_id: CardId, actor: User, text: str) -> Comment:
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            comment = Comment(text=require_text(text, "text"), author=actor)
            card.comments.append(comment)
            self._touch_and_save(card)
        logger.info(
            "Comment added",
            extra={"card_id": str(card_id), "actor_id": str(actor.id)},
        )
        return comment

    def add_attachment(
        self, card_id: CardId, actor: User, filename: str, location: str,
    ) -> Attachment:
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            attachment = Attachment(
                filename=require_text(filename, "filename"),
                location=require_text(location, "location"),
            )
            card.attachments.append(attachment)
            self._touch_and_save(card)
        logger.info(
            f"Attachment added: {attachment.filename}",
            extra={"card_id": str(card_id), "actor_id": str(actor.id)},
        )
        return attachment

    def add_checklist_item(self, card_id: CardId, actor: User, name: str) -> ChecklistItem:
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            item = ChecklistItem(
                name=require_text(name, "name"),
                position=positions.next_card_position(card.checklist_items),
            )
            card.checklist_items.append(item)
            self._touch_and_save(card)
        logger.info(
            "Checklist item added",
            extra={"card_id": str(card_id), "actor_id": str(actor.id)},
        )
        return item

    def set_checklist_item_checked(
        self, card_id: CardId, item_id: UUID, actor: User, checked: bool,
    ) -> ChecklistItem:
        with self.store.transaction():
            card = self._load_card(card_id, actor)
            item = card.find_checklist_item(item_id)
            if item is None:
                raise ResourceNotFoundError(ResourceType.CHECKLIST_ITEM.value, item_id)
            item.is_checked = checked
            item.updated_at = utcnow()
            self._touch_and_save(card)
        logger.info(
            f"Checklist item {'checked' if checked else 'unchecked'}",
            extra={"card_id": str(card_id), "actor_id": str(actor.id)},
        )
        return item
