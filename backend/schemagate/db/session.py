from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine


def _enable_sqlite_transactional_ddl(engine: Engine) -> None:
    # pysqlite only opens transactions before DML; take over BEGIN so DDL
    # inside a migration rolls back with the rest of it.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_db_engine(database_url: str) -> Engine:
    engine = create_engine(database_url, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        _enable_sqlite_transactional_ddl(engine)
    return engine
