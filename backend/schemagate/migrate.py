"""Standalone migration runner.

Applies the shipped migrations and exits without starting the HTTP server,
for deployments that migrate as a separate step before rolling out.
"""

import logging

from schemagate.core.config import settings
from schemagate.core.logging import configure_logging
from schemagate.services.migration_source import load_migrations
from schemagate.use_cases.startup import StartupSequence

log = logging.getLogger(__name__)


def main() -> None:
    configure_logging(settings.log_level)
    result = StartupSequence(settings.database_url, load_migrations()).migrate()
    if not result.ok:
        log.error("Migration failed: %s", result.message)
        raise SystemExit(1)
    log.info("DB migrated: %s.", result.message)


if __name__ == "__main__":
    main()
