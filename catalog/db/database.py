"""
Database engine, session factory and unit of work.

The engine is built lazily from ``catalog.utils.config`` so importing the
package never requires a database. Services open exactly one unit of work per
public operation and pass its session down to every repository call.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from functools import lru_cache
from typing import Callable, Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.errors import CatalogError, ErrorKind
from catalog.utils.config import get_settings

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], Session]


def build_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine; in-memory SQLite shares one connection via StaticPool."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


@lru_cache(maxsize=None)
def get_engine() -> Engine:
    settings = get_settings()
    return build_engine(settings.require_database_url(), echo=settings.sql_echo)


@lru_cache(maxsize=None)
def get_session_factory() -> sessionmaker:
    return build_session_factory(get_engine())


def reset_engine_cache() -> None:
    """Drop the cached engine and session factory (used after settings change)."""
    get_session_factory.cache_clear()
    get_engine.cache_clear()


def get_db():
    """Yield a session from the default factory and close it afterwards."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def unit_of_work(session_factory: SessionFactory) -> Iterator[Session]:
    """Open one transaction: commit on success, roll back on any exception.

    Storage errors are re-raised as ``CatalogError(INTERNAL)``.
    """
    db = session_factory()
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Storage failure, transaction rolled back: {e}")
        raise CatalogError(ErrorKind.INTERNAL, "storage failure", cause=e) from e
    except BaseException:
        db.rollback()
        raise
    finally:
        db.close()
