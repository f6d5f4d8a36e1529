import uuid

import pytest
from sqlalchemy import text

from catalog.db import models
from catalog.db.database import build_engine, unit_of_work
from catalog.errors import CatalogError, ErrorKind, invalid_argument


def _course(name="Go Basics"):
    return models.Course(
        id=uuid.uuid4(),
        name=name,
        short_description="intro",
        topic="programming",
        access_duration=30,
    )


def test_commits_on_success(session_factory, fetch):
    course = _course()
    with unit_of_work(session_factory) as db:
        db.add(course)

    assert fetch(models.Course, course.id).name == "Go Basics"


def test_rolls_back_on_catalog_error(session_factory, fetch):
    course = _course()
    with pytest.raises(CatalogError) as exc:
        with unit_of_work(session_factory) as db:
            db.add(course)
            db.flush()
            raise invalid_argument("rejected")

    assert exc.value.kind == ErrorKind.INVALID_ARGUMENT
    assert fetch(models.Course, course.id) is None


def test_storage_errors_become_internal(session_factory):
    with pytest.raises(CatalogError) as exc:
        with unit_of_work(session_factory) as db:
            db.execute(text("SELECT * FROM no_such_table"))

    assert exc.value.kind == ErrorKind.INTERNAL
    assert exc.value.cause is not None


def test_sqlite_engine_options():
    memory = build_engine("sqlite+pysqlite:///:memory:")
    try:
        assert memory.pool.__class__.__name__ == "StaticPool"
    finally:
        memory.dispose()
