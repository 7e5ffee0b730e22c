"""Abstract unit of work.

A unit of work binds the product and order repositories to a single
atomic transaction. Usage::

    with uow_factory() as uow:
        ...
        uow.commit()

Leaving the ``with`` block without calling ``commit()`` (an exception,
an early return, an abandoned request) rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):

    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        # No-op after a successful commit.
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every change in this unit of work durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted change."""
