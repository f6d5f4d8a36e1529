"""
Shared SQLAlchemy base and helpers.
"""
from datetime import datetime, UTC
from enum import Enum
from typing import Optional

from sqlalchemy.orm import declarative_base

# Registers SQLite compilers for PostgreSQL-only types used by the models.
from .. import sqlite_compiler_shims  # noqa: F401


def now_utc():
    """Return an aware UTC datetime for default/updated timestamps."""
    return datetime.now(UTC)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class CatalogKind(str, Enum):
    """Discriminator stored in Product.details_type and Image.owner_type."""

    COURSE = "course"
    SEMINAR = "seminar"
    TRAINING_SESSION = "training_session"
    PHYSICAL_GOOD = "physical_good"


Base = declarative_base()
