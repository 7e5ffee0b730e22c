"""SQLAlchemy-session-backed UnitOfWork.

One session == one database transaction. Any SQLAlchemy error raised
inside the ``with`` block, or by ``commit()``, is rolled back, logged and
re-raised as StoreError so no driver detail leaks past this layer.
"""

from __future__ import annotations

import logging
from types import TracebackType

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from stockroom.domain.exceptions import StoreError
from stockroom.domain.repository.unit_of_work import UnitOfWork
from stockroom.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from stockroom.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, session_factory: sessionmaker[Session]) -> None:
        self._session_factory = session_factory
        self._session: Session | None = None

    def __enter__(self) -> SqlUnitOfWork:
        self._session = self._session_factory()
        self.products = SqlProductRepository(self._session)
        self.orders = SqlOrderRepository(self._session)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        try:
            self.rollback()
        finally:
            if self._session is not None:
                self._session.close()
                self._session = None

        if isinstance(exc, SQLAlchemyError):
            logger.error("Store error, unit of work rolled back: %s", exc)
            raise StoreError("store operation failed") from exc

    def commit(self) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error("Commit failed, unit of work rolled back: %s", exc)
            raise StoreError("commit failed") from exc

    def rollback(self) -> None:
        if self._session is None:
            return
        try:
            self._session.rollback()
        except SQLAlchemyError as exc:
            logger.error("Rollback failed: %s", exc)
            raise StoreError("rollback failed") from exc
