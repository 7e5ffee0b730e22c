"""Abstract repository for Order aggregate.

Orders are append-only: there is no update or delete.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.order import Order, OrderItem


class OrderRepository(ABC):

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert the order header (id, total, created_at)."""

    @abstractmethod
    def add_items(self, order_id: str, items: list[OrderItem]) -> None:
        """Insert the line items belonging to an order."""

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""
