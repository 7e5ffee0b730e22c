"""Database lifecycle — engine, schema bootstrap, health check, units of work.

``Database`` is the process-wide store handle: created once at startup,
handed to whatever needs units of work, and disposed at shutdown. Nothing
reaches it through module globals.

Concurrency: for SQLite every transaction starts with ``BEGIN IMMEDIATE``
so two writers can never both pass the stock check; the second one waits
on the database lock (up to ``busy_timeout``) and then sees the committed
stock. Other backends rely on ``SELECT ... FOR UPDATE`` plus the
conditional stock decrement.
"""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from stockroom.domain.exceptions import StoreError
from stockroom.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork
from stockroom.infrastructure.persistence.tables import Base

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30


class Database:

    def __init__(self, url: str, pool_size: int = 5, echo: bool = False) -> None:
        options: dict = {"echo": echo, "pool_pre_ping": True}
        if url.startswith("sqlite"):
            options["connect_args"] = {
                "check_same_thread": False,
                "timeout": SQLITE_BUSY_TIMEOUT_SECONDS,
            }
        else:
            options["pool_size"] = pool_size

        self.engine: Engine = create_engine(url, **options)
        if self.engine.dialect.name == "sqlite":
            _begin_immediate(self.engine)

        self._session_factory = sessionmaker(self.engine, expire_on_commit=False)

    def unit_of_work(self) -> SqlUnitOfWork:
        return SqlUnitOfWork(self._session_factory)

    def session(self) -> Session:
        """Raw session, for scripts and tests that bypass the repositories."""
        return self._session_factory()

    def create_schema(self) -> None:
        """Create missing tables. Safe to run on every startup."""
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as exc:
            logger.error("Schema bootstrap failed: %s", exc)
            raise StoreError("schema bootstrap failed") from exc
        logger.info("Schema ready at %s", self.engine.url.render_as_string(hide_password=True))

    def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            with self.engine.connect() as conn:
                # A probe must not queue behind writers for the SQLite lock.
                conn.execution_options(skip_begin_immediate=True)
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error("DB health check failed: %s", exc)
            return False
        return True

    def dispose(self) -> None:
        self.engine.dispose()


def _begin_immediate(engine: Engine) -> None:
    """Make pysqlite emit ``BEGIN IMMEDIATE`` instead of its own deferred BEGIN."""

    @event.listens_for(engine, "connect")
    def _disable_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        if conn.get_execution_options().get("skip_begin_immediate"):
            return  # statements run in the driver's autocommit mode
        conn.exec_driver_sql("BEGIN IMMEDIATE")
