"""Composition Root — wires settings, logging, the configured store and all services.

Invariants:
    - Services share one store instance (and therefore one transaction boundary)
    - Logging is configured before the first service is built

Design Decisions:
    - Plain dataclass container over a DI framework: explicit wiring, no magic
"""

import logging
from dataclasses import dataclass

from taskboard.config import Settings, get_settings
from taskboard.core.domain_types import StoreBackend
from taskboard.core.repository_protocols import BoardStore
from taskboard.infrastructure.database import DatabaseSessionManager
from taskboard.infrastructure.memory_store import InMemoryBoardStore
from taskboard.infrastructure.observability import setup_logging
from taskboard.infrastructure.sql_store import SqlBoardStore
from taskboard.services.board_service import BoardService
from taskboard.services.card_service import CardService
from taskboard.services.column_service import ColumnService
from taskboard.services.membership_sync import MembershipSynchronizer
from taskboard.services.project_service import ProjectService
from taskboard.services.user_service import UserService

logger = logging.getLogger(__name__)


@dataclass
class Services:
    store: BoardStore
    users: UserService
    projects: ProjectService
    boards: BoardService
    columns: ColumnService
    cards: CardService


def build_store(settings: Settings) -> BoardStore:
    if settings.store_backend == StoreBackend.SQL:
        manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            echo=settings.database_echo,
        )
        manager.create_schema()
        return SqlBoardStore(manager)
    return InMemoryBoardStore()


def build_services(settings: Settings | None = None) -> Services:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = build_store(settings)
    services = Services(
        store=store,
        users=UserService(store),
        projects=ProjectService(store, MembershipSynchronizer(store)),
        boards=BoardService(store),
        columns=ColumnService(store),
        cards=CardService(store),
    )
    logger.info(
        "Task board services ready",
        extra={"operation": f"store={settings.store_backend.value}"},
    )
    return services
