"""Application service: Place Order use case.

This is the only operation with real invariants:

- stock never goes negative,
- the recorded total equals the sum of the frozen line prices,
- an order is applied completely or not at all.

Input is validated before any store access. Everything else happens
inside one unit of work: products are read once (the price observed
here is the price frozen into the order), the order and its items are
inserted, and stock is decremented with the store's atomic conditional
update. Any failure leaves the unit of work uncommitted, which rolls it
back.
"""

from __future__ import annotations

import logging
from typing import Callable

from stockroom.application.dto import OrderItemRequest, PlacedOrderDTO
from stockroom.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    NotFoundError,
    ValidationError,
)
from stockroom.domain.model.order import Order, OrderItem
from stockroom.domain.model.value_objects import Quantity
from stockroom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, requests: list[OrderItemRequest]) -> PlacedOrderDTO:
        """Place an order, all-or-nothing.

        Raises:
            ValidationError: empty request list or non-positive quantity.
            NotFoundError: a referenced product does not exist.
            InsufficientStockError: a quantity exceeds available stock.
            StoreError: the store failed; nothing was applied.
        """
        try:
            order = self._place(requests)
        except DomainException as exc:
            logger.warning(
                "Rejected order: %s",
                exc,
                extra={
                    "product_id": getattr(exc, "product_id", None)
                    or getattr(exc, "entity_id", None),
                    "error_code": type(exc).__name__,
                },
            )
            raise

        logger.info(
            "Placed order %s (%d items, total %d)",
            order.id,
            len(order.items),
            order.total,
            extra={"order_id": order.id},
        )
        return PlacedOrderDTO(id=order.id, total=order.total)

    def _place(self, requests: list[OrderItemRequest]) -> Order:
        self._validate(requests)

        with self._uow_factory() as uow:
            items: list[OrderItem] = []

            # Phase 1: read and check every product, in input order.
            for request in requests:
                product = uow.products.get_by_id(request.product_id)
                if product is None:
                    raise NotFoundError("product", request.product_id)
                if request.quantity > product.stock:
                    raise InsufficientStockError(
                        product.id, request.quantity, product.stock
                    )
                items.append(
                    OrderItem(
                        product_id=request.product_id,
                        quantity=request.quantity,
                        unit_price=product.unit_price,  # <-- price snapshot
                    )
                )

            # Phase 2: persist the order and consume stock.
            order = Order.place(items)
            uow.orders.add(order)
            uow.orders.add_items(order.id, order.items)
            for item in order.items:
                uow.products.decrement_stock(item.product_id, item.quantity)

            uow.commit()
        return order

    @staticmethod
    def _validate(requests: list[OrderItemRequest]) -> None:
        if not requests:
            raise ValidationError("order must contain at least one item")
        for request in requests:
            try:
                Quantity(request.quantity)
            except ValidationError as exc:
                raise ValidationError(
                    f"quantity for product {request.product_id} must be a positive integer"
                ) from exc
