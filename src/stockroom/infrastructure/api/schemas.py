"""HTTP request/response bodies.

Integer fields are strict: ``"3"``, ``3.0`` and ``true`` are rejected
rather than coerced. Value rules (positive quantity, non-empty name, ...)
are left to the domain so every entry point reports them the same way.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, StrictInt, StrictStr

from stockroom.domain.model.value_objects import MAX_INTEGER, MIN_INTEGER

# Anything wider than the store's integer columns is a malformed request.
StoreInt = Annotated[StrictInt, Field(ge=MIN_INTEGER, le=MAX_INTEGER)]


class OrderItemIn(BaseModel):
    product_id: StoreInt
    quantity: StoreInt


class OrderCreate(BaseModel):
    items: list[OrderItemIn]


class OrderCreated(BaseModel):
    id: str
    total: int


class OrderItemOut(BaseModel):
    product_id: int
    quantity: int
    unit_price: int
    line_total: int


class OrderOut(BaseModel):
    id: str
    total: int
    created_at: datetime
    items: list[OrderItemOut]


class ProductCreate(BaseModel):
    name: StrictStr
    description: StrictStr | None = None
    unit_price: StoreInt
    stock: StoreInt = 0


class ProductUpdate(BaseModel):
    """Partial update; omitted fields keep their current value."""

    name: StrictStr | None = None
    description: StrictStr | None = None
    unit_price: StoreInt | None = None
    stock: StoreInt | None = None


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None
    unit_price: int
    stock: int
    created_at: datetime
