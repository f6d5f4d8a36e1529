"""Runtime settings sourced from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

_DB_COMPONENT_VARS = ("POSTGRES_USER", "POSTGRES_PASSWORD", "POSTGRES_HOST", "POSTGRES_PORT", "POSTGRES_DB")


@dataclass(frozen=True)
class Settings:
    database_url: Optional[str]
    log_level: int
    default_page_size: int
    max_page_size: int
    sql_echo: bool

    def require_database_url(self) -> str:
        if self.database_url:
            return self.database_url
        missing = [name for name in _DB_COMPONENT_VARS if not os.getenv(name)]
        raise ValueError(f"Missing required database environment variables: {', '.join(missing)}")

    def clamp_limit(self, limit: Optional[int]) -> int:
        if limit is None or limit <= 0:
            return self.default_page_size
        return min(limit, self.max_page_size)


def _normalize_bool(value: str | None, default: bool = False) -> bool:
    """Return normalized boolean from environment-style value."""
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"", "0", "false", "no", "off"}:
        return False
    if normalized in {"1", "true", "yes", "on"}:
        return True
    return default


def _positive_int(value: str | None, default: int) -> int:
    try:
        parsed = int(value) if value is not None else default
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _database_url() -> Optional[str]:
    if os.getenv("DATABASE_URL"):
        return os.getenv("DATABASE_URL")
    parts = [os.getenv(name) for name in _DB_COMPONENT_VARS]
    if not all(parts):
        return None
    user, password, host, port, name = parts
    return f"postgresql://{user}:{password}@{host}:{port}/{name}"


def _log_level() -> int:
    name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, name, logging.INFO)
    return level if isinstance(level, int) else logging.INFO


@lru_cache(maxsize=None)
def get_settings() -> Settings:
    """Return the cached settings state sourced from the environment."""
    default_page_size = _positive_int(os.getenv("CATALOG_DEFAULT_PAGE_SIZE"), 20)
    max_page_size = max(_positive_int(os.getenv("CATALOG_MAX_PAGE_SIZE"), 100), default_page_size)
    return Settings(
        database_url=_database_url(),
        log_level=_log_level(),
        default_page_size=default_page_size,
        max_page_size=max_page_size,
        sql_echo=_normalize_bool(os.getenv("CATALOG_SQL_ECHO")),
    )


def refresh_settings() -> None:
    """Clear cached settings so subsequent calls re-read environment variables."""
    get_settings.cache_clear()


def configure_logging() -> None:
    logging.basicConfig(level=get_settings().log_level)
