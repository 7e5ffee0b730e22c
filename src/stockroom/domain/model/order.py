"""Order aggregate.

The Order is an aggregate root that exclusively owns its line items.
Each item references a product by id only and carries a frozen copy of
the unit price, so totals stay stable whatever happens to the catalog
afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import uuid4

from stockroom.domain.exceptions import ValidationError
from stockroom.domain.model.value_objects import MAX_INTEGER


@dataclass(frozen=True)
class OrderItem:
    """Captures quantity and the price snapshot of one product."""

    product_id: int
    quantity: int
    unit_price: int  # locked at order-placement time

    @property
    def line_total(self) -> int:
        return self.quantity * self.unit_price


@dataclass
class Order:
    """Aggregate root for placed orders.

    Use the ``Order.place()`` factory for new orders. The ``__init__`` is
    intentionally simple so the repository can reconstitute persisted
    orders without re-validating.
    """

    id: str
    total: int
    items: list[OrderItem] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def place(items: list[OrderItem]) -> Order:
        """Create a new order with a fresh id and its computed total."""
        if not items:
            raise ValidationError("order must contain at least one item")

        total = sum(item.line_total for item in items)
        if total > MAX_INTEGER:
            raise ValidationError("order total is too large")

        return Order(
            id=str(uuid4()),
            total=total,
            items=list(items),
        )

    def is_consistent(self) -> bool:
        """True if the recorded total matches the sum of its line items."""
        return self.total == sum(item.line_total for item in self.items)
