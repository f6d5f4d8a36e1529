from __future__ import annotations

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

_TABLES = {
    "courses",
    "course_parts",
    "seminars",
    "training_sessions",
    "physical_goods",
    "products",
    "images",
}


def _make_alembic_config(database_url: str) -> Config:
    """Return an Alembic config pointing at the project migrations."""
    project_root = Path(__file__).resolve().parents[2]
    cfg = Config(str(project_root / "alembic.ini"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.set_main_option("script_location", str(project_root / "migrations"))
    return cfg


def _tables(database_url: str) -> set[str]:
    engine = create_engine(database_url)
    try:
        return set(inspect(engine).get_table_names()) - {"alembic_version"}
    finally:
        engine.dispose()


@pytest.mark.integration
def test_alembic_upgrade_and_downgrade_cycle(tmp_path, monkeypatch) -> None:
    """Migrations upgrade from base to head and cleanly downgrade back to base."""
    database_url = f"sqlite:///{tmp_path / 'catalog.db'}"
    monkeypatch.setenv("DATABASE_URL", database_url)
    cfg = _make_alembic_config(database_url)

    command.upgrade(cfg, "head")
    assert _tables(database_url) == _TABLES

    command.downgrade(cfg, "base")
    assert _tables(database_url) == set()

    command.upgrade(cfg, "head")
    assert _tables(database_url) == _TABLES
