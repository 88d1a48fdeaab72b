"""Migrations shipped with the package.

Each migration is a file named ``V<version>__<name>.sql`` under
``schemagate/migrations``. The directory is fixed at build time; files that do
not follow the naming pattern are ignored.
"""

from __future__ import annotations

import hashlib
import re
from dataclasses import dataclass
from pathlib import Path

from schemagate.core.errors import MigrationSourceError

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"

_FILENAME_RE = re.compile(r"^[Vv](\d+)__(\w+)\.sql$")


@dataclass(frozen=True)
class Migration:
    version: int
    name: str
    sql: str
    checksum: str


def migration_checksum(name: str, version: int, sql: str) -> str:
    h = hashlib.sha256()
    h.update(name.encode("utf-8"))
    h.update(str(version).encode("utf-8"))
    h.update(sql.encode("utf-8"))
    return h.hexdigest()


def parse_migration(path: Path) -> Migration | None:
    m = _FILENAME_RE.match(path.name)
    if not m:
        return None
    version = int(m.group(1))
    name = m.group(2)
    if version < 1:
        raise MigrationSourceError(f"Migration {path.name}: version must be >= 1")
    sql = path.read_text(encoding="utf-8")
    if not sql.strip():
        raise MigrationSourceError(f"Migration {path.name} is empty")
    return Migration(version=version, name=name, sql=sql, checksum=migration_checksum(name, version, sql))


def load_migrations(directory: Path | str = MIGRATIONS_DIR) -> tuple[Migration, ...]:
    """Load and order the migrations found in ``directory``.

    Raises MigrationSourceError when two files declare the same version.
    """
    root = Path(directory)
    if not root.is_dir():
        raise MigrationSourceError(f"Migrations directory not found: {root}")

    by_version: dict[int, Migration] = {}
    for path in sorted(root.iterdir()):
        if not path.is_file():
            continue
        migration = parse_migration(path)
        if migration is None:
            continue
        existing = by_version.get(migration.version)
        if existing is not None:
            raise MigrationSourceError(
                f"Duplicate migration version {migration.version}: "
                f"{existing.name} and {migration.name}"
            )
        by_version[migration.version] = migration

    return tuple(by_version[v] for v in sorted(by_version))
