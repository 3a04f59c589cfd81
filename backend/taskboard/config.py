"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Connection strings come from environment variables (never hardcoded secrets)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: in-memory store and JSON logs work out of the box
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from taskboard.core.domain_types import StoreBackend


class Settings(BaseSettings):
    """Application settings from environment variables (prefix TASKBOARD_)."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="TASKBOARD_", case_sensitive=False,
    )

    # Persistence
    store_backend: StoreBackend = StoreBackend.MEMORY
    database_url: str = "sqlite:///./taskboard.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but SQLAlchemy needs the psycopg driver."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+psycopg://", 1)
        return v

    database_pool_size: int = 5
    database_max_overflow: int = 10
    database_echo: bool = False

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
