"""SQLite compilation shim for the PostgreSQL JSONB type.

Installs a compiler for JSONB when the active dialect is SQLite so that the
declarative metadata can be created in test runs against an in-memory SQLite
database. Only storage is preserved; JSONB operators are not emulated.

Usage: Imported for side-effects by catalog.db.models.
"""
from __future__ import annotations

from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.compiler import compiles


@compiles(JSONB, "sqlite")
def _compile_jsonb_sqlite(element, compiler, **kw):  # pragma: no cover - trivial
    # Stored as TEXT-backed JSON; tag lists round-trip unchanged.
    return "JSON"
