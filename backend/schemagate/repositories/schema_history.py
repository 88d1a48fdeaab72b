from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.orm import Session

from schemagate.models.schema_history import HISTORY_TABLE, SchemaHistory
from schemagate.schemas.migration import MigrationRecord
from schemagate.services.migration_source import Migration

log = logging.getLogger(__name__)

# PostgreSQL SQLSTATE for "relation does not exist".
UNDEFINED_TABLE = "42P01"


def is_undefined_table(exc: DBAPIError) -> bool:
    orig = exc.orig
    if getattr(orig, "pgcode", None) == UNDEFINED_TABLE:
        return True
    # sqlite3 has no error codes on OperationalError
    return "no such table" in str(orig)


class SchemaHistoryRepository:
    def __init__(self, db: Session) -> None:
        self._db = db

    def list(self) -> list[MigrationRecord]:
        """Return applied migrations ordered by version.

        A missing history table means nothing was ever applied and yields an
        empty list. Every other database error propagates.
        """
        stmt = select(SchemaHistory).order_by(SchemaHistory.version.asc())
        try:
            rows = self._db.execute(stmt).scalars().all()
        except DBAPIError as e:
            if not is_undefined_table(e):
                raise
            self._db.rollback()
            log.info("History table %s does not exist yet, assuming first run", HISTORY_TABLE)
            return []
        return [MigrationRecord.model_validate(r) for r in rows]

    def ensure_table(self) -> None:
        SchemaHistory.__table__.create(bind=self._db.connection(), checkfirst=True)
        self._db.commit()

    def add(self, migration: Migration) -> None:
        """Stage a history row; the caller owns the transaction."""
        self._db.add(
            SchemaHistory(
                version=migration.version,
                name=migration.name,
                applied_on=datetime.now(timezone.utc).isoformat(),
                checksum=migration.checksum,
            )
        )
