from __future__ import annotations


class SchemaGateError(Exception):
    """Base class for errors raised by schemagate."""


class MigrationSourceError(SchemaGateError):
    """The shipped migration directory is malformed."""


class MigrationError(SchemaGateError):
    """A migration could not be applied, or history disagrees with the source."""

    def __init__(self, message: str, version: int | None = None, name: str | None = None) -> None:
        super().__init__(message)
        self.version = version
        self.name = name
