"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the delivery layers (CLI, HTTP) and the
application layer without exposing domain internals to the outside
world. Money fields are integers in minor currency units.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrderItemRequest:
    """Input: what the caller asked for (product id + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class PlacedOrderDTO:
    """Output: the result of a successful order placement."""

    id: str
    total: int


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: int
    quantity: int
    unit_price: int
    line_total: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: a persisted order with its frozen prices."""

    id: str
    total: int
    created_at: datetime
    items: list[OrderItemDTO]


@dataclass(frozen=True)
class ProductDTO:
    id: int
    name: str
    description: str | None
    unit_price: int
    stock: int
    created_at: datetime
