"""Startup sequencing: migrate the database, then hand over to the server.

The sequence is linear::

    DISCONNECTED -> CONNECTED -> HISTORY_READ_BEFORE -> MIGRATIONS_APPLIED
        -> HISTORY_READ_AFTER -> DELTA_REPORTED -> SERVING

Any failure ends in STARTUP_FAILED and the serve callback is never invoked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from schemagate.core.errors import SchemaGateError
from schemagate.db.session import create_db_engine
from schemagate.repositories.schema_history import SchemaHistoryRepository
from schemagate.schemas.migration import MigrationRecord
from schemagate.services.delta import report_delta
from schemagate.services.migration_source import Migration
from schemagate.services.migrations import MigrationApplier

log = logging.getLogger(__name__)


class StartupState(str, Enum):
    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    HISTORY_READ_BEFORE = "history_read_before"
    MIGRATIONS_APPLIED = "migrations_applied"
    HISTORY_READ_AFTER = "history_read_after"
    DELTA_REPORTED = "delta_reported"
    SERVING = "serving"
    STARTUP_FAILED = "startup_failed"


_SEQUENCE = (
    StartupState.DISCONNECTED,
    StartupState.CONNECTED,
    StartupState.HISTORY_READ_BEFORE,
    StartupState.MIGRATIONS_APPLIED,
    StartupState.HISTORY_READ_AFTER,
    StartupState.DELTA_REPORTED,
    StartupState.SERVING,
)


@dataclass(frozen=True)
class StartupResult:
    """Outcome of a startup run.

    ``failed_at`` is the state the sequence was trying to reach when it
    failed: CONNECTED for a refused connection, MIGRATIONS_APPLIED for a
    failing migration.
    """

    ok: bool
    message: str
    state: StartupState
    applied: tuple[MigrationRecord, ...] = ()
    failed_at: StartupState | None = None


class StartupSequence:
    def __init__(self, database_url: str, migrations: Sequence[Migration]) -> None:
        self._database_url = database_url
        self._migrations = tuple(migrations)
        self.state = StartupState.DISCONNECTED

    def _advance(self, state: StartupState) -> None:
        log.debug("Startup: %s -> %s", self.state.value, state.value)
        self.state = state

    def migrate(self) -> StartupResult:
        """Run the migration phase over a single connection."""
        log.info("Running DB migrations...")
        engine = create_db_engine(self._database_url)
        try:
            with engine.connect() as conn, Session(bind=conn) as db:
                self._advance(StartupState.CONNECTED)
                history = SchemaHistoryRepository(db)

                before = history.list()
                self._advance(StartupState.HISTORY_READ_BEFORE)

                MigrationApplier(db, self._migrations).apply()
                self._advance(StartupState.MIGRATIONS_APPLIED)

                after = history.list()
                self._advance(StartupState.HISTORY_READ_AFTER)

            delta = report_delta(before, after)
            self._advance(StartupState.DELTA_REPORTED)
        except (SQLAlchemyError, SchemaGateError) as e:
            failed_at = _SEQUENCE[_SEQUENCE.index(self.state) + 1]
            self.state = StartupState.STARTUP_FAILED
            log.exception("DB migrations failed while entering state %s", failed_at.value)
            return StartupResult(
                ok=False,
                message=f"{type(e).__name__}: {e}",
                state=self.state,
                failed_at=failed_at,
            )
        finally:
            engine.dispose()

        log.info("DB migrations finished!")
        return StartupResult(
            ok=True,
            message=f"{len(delta)} migration(s) applied",
            state=self.state,
            applied=tuple(delta),
        )

    def start(self, serve: Callable[[], None]) -> StartupResult:
        """Migrate, then call ``serve`` only if every migration step succeeded."""
        result = self.migrate()
        if not result.ok:
            return result
        self._advance(StartupState.SERVING)
        serve()
        return StartupResult(ok=True, message=result.message, state=self.state, applied=result.applied)
