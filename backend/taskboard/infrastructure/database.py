"""Database Session Manager — connection pool with automatic rollback and health checks.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to DatabaseError (core/errors.py)
    - Domain errors raised inside a session roll back and propagate unchanged

Design Decisions:
    - Synchronous engine: each core operation is a single blocking unit of work
    - expire_on_commit=False: rows stay readable after the store commits
    - In-memory SQLite shares one connection (StaticPool) so every session sees one database
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskboard.core.errors import DatabaseError
from taskboard.db.base import Base

logger = logging.getLogger(__name__)


def _engine_options(
    database_url: str, pool_size: int, max_overflow: int, echo: bool,
) -> dict:
    if database_url.startswith("sqlite"):
        options = {"echo": echo, "connect_args": {"check_same_thread": False}}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            options["poolclass"] = StaticPool
        return options
    return {
        "echo": echo,
        "pool_size": pool_size,
        "max_overflow": max_overflow,
        "pool_pre_ping": True,
        "pool_recycle": 3600,
    }


class DatabaseSessionManager:
    """Manages database sessions with pooling, rollback, and health checks."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        self.engine = create_engine(
            database_url,
            **_engine_options(database_url, pool_size, max_overflow, echo),
        )
        self._session_factory = sessionmaker(
            self.engine, class_=Session, expire_on_commit=False,
        )

    def create_schema(self) -> None:
        """Create all tables (local runs and tests; production uses alembic)."""
        import taskboard.models  # noqa: F401

        Base.metadata.create_all(self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            session.rollback()
            logger.error(f"DB integrity error: {e}")
            raise DatabaseError("Integrity constraint violated", "commit")
        except OperationalError as e:
            session.rollback()
            logger.error(f"DB operational error: {e}")
            raise DatabaseError("Connection or operational error", "execute")
        except DBAPIError as e:
            session.rollback()
            logger.error(f"DB driver error: {e}")
            raise DatabaseError("Database driver error", "query")
        except SQLAlchemyError as e:
            session.rollback()
            logger.error(f"SQLAlchemy error: {e}")
            raise DatabaseError("Database operation failed", "unknown")
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            with self.session() as db:
                db.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e}")
            return False

    def dispose(self) -> None:
        self.engine.dispose()
