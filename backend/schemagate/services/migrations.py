from __future__ import annotations

import logging
from typing import Sequence

import sqlparse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from schemagate.core.errors import MigrationError
from schemagate.repositories.schema_history import SchemaHistoryRepository
from schemagate.services.migration_source import Migration

log = logging.getLogger(__name__)


def split_statements(sql: str) -> list[str]:
    statements: list[str] = []
    for stmt in sqlparse.split(sql):
        if sqlparse.format(stmt, strip_comments=True).strip():
            statements.append(stmt.strip())
    return statements


class MigrationApplier:
    """Applies the migrations missing from schema history, lowest version first.

    Each migration and its history row share one transaction. The first failure
    rolls that transaction back and stops the run.
    """

    def __init__(self, db: Session, migrations: Sequence[Migration]) -> None:
        self._db = db
        self._history = SchemaHistoryRepository(db)
        self._migrations = sorted(migrations, key=lambda m: m.version)

    def pending(self, applied_versions: set[int]) -> list[Migration]:
        known = {m.version for m in self._migrations}
        missing = sorted(applied_versions - known)
        if missing:
            raise MigrationError(
                f"Applied migrations not found in migration source: {', '.join(map(str, missing))}",
                version=missing[0],
            )
        return [m for m in self._migrations if m.version not in applied_versions]

    def apply(self) -> list[Migration]:
        self._history.ensure_table()
        applied_versions = {r.version for r in self._history.list()}
        todo = self.pending(applied_versions)
        if not todo:
            log.debug("Schema is up to date at %d migration(s)", len(applied_versions))
            return []

        for migration in todo:
            self._apply_one(migration)
        return todo

    def _apply_one(self, migration: Migration) -> None:
        log.debug("Applying migration V%d__%s", migration.version, migration.name)
        try:
            conn = self._db.connection()
            for stmt in split_statements(migration.sql):
                conn.exec_driver_sql(stmt, execution_options={"no_parameters": True})
            self._history.add(migration)
            self._db.commit()
        except SQLAlchemyError as e:
            self._db.rollback()
            raise MigrationError(
                f"Migration V{migration.version}__{migration.name} failed: {e}",
                version=migration.version,
                name=migration.name,
            ) from e
