import logging

import pytest
from sqlalchemy.exc import OperationalError

from schemagate.repositories.schema_history import SchemaHistoryRepository


def test_missing_table_reads_as_empty_history(db, caplog):
    caplog.set_level(logging.INFO)
    assert SchemaHistoryRepository(db).list() == []
    assert "does not exist yet" in caplog.text


def test_session_is_usable_after_missing_table(db):
    history = SchemaHistoryRepository(db)
    assert history.list() == []
    history.ensure_table()
    assert history.list() == []


def test_other_database_errors_propagate(db):
    # A history table without the expected columns is not a first run.
    db.connection().exec_driver_sql("CREATE TABLE schema_history (version INTEGER PRIMARY KEY)")
    db.commit()
    with pytest.raises(OperationalError, match="no such column"):
        SchemaHistoryRepository(db).list()


def test_ensure_table_is_idempotent(db):
    history = SchemaHistoryRepository(db)
    history.ensure_table()
    history.ensure_table()
    assert history.list() == []
