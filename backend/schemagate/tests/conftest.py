from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy.orm import Session

from schemagate.db.session import create_db_engine
from schemagate.services.migration_source import load_migrations


@pytest.fixture()
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'service.db'}"


@pytest.fixture()
def db(db_url: str):
    engine = create_db_engine(db_url)
    with engine.connect() as conn, Session(bind=conn) as session:
        yield session
    engine.dispose()


@pytest.fixture()
def make_migrations(tmp_path: Path):
    """Write ``{filename: sql}`` into a fresh directory and load it."""

    def _make(files: dict[str, str], dirname: str = "migrations"):
        root = tmp_path / dirname
        root.mkdir()
        for name, sql in files.items():
            (root / name).write_text(sql, encoding="utf-8")
        return load_migrations(root)

    return _make


@pytest.fixture()
def ddl() -> dict[str, str]:
    """Migration bodies shared by the applier and startup tests."""
    return {
        "widgets": "CREATE TABLE widgets (id INTEGER PRIMARY KEY, label TEXT NOT NULL);",
        "gadgets": (
            "-- gadgets belong to widgets\n"
            "CREATE TABLE gadgets (id INTEGER PRIMARY KEY, widget_id INTEGER NOT NULL);\n"
            "CREATE INDEX ix_gadgets_widget_id ON gadgets (widget_id);\n"
        ),
        "sprockets": "CREATE TABLE sprockets (id INTEGER PRIMARY KEY);",
    }
