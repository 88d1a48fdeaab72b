from __future__ import annotations

import logging
from typing import Sequence

from schemagate.schemas.migration import MigrationRecord

log = logging.getLogger(__name__)


def compute_delta(before: Sequence[MigrationRecord], after: Sequence[MigrationRecord]) -> list[MigrationRecord]:
    """Records present in ``after`` but not in ``before``, by version."""
    # History is append-only; a shrinking history is reported as no change.
    if len(after) < len(before):
        return []
    seen = {r.version for r in before}
    return sorted((r for r in after if r.version not in seen), key=lambda r: r.version)


def report_delta(before: Sequence[MigrationRecord], after: Sequence[MigrationRecord]) -> list[MigrationRecord]:
    delta = compute_delta(before, after)
    if not delta:
        log.info("No migrations to apply")
        return delta
    for record in delta:
        log.info("Migration Applied - Name: %s, Version: %d", record.name, record.version)
    return delta
