"""Application service: Show Order use case (query)."""

from __future__ import annotations

from typing import Callable

from stockroom.application.dto import OrderDTO, OrderItemDTO
from stockroom.domain.exceptions import NotFoundError
from stockroom.domain.model.order import Order
from stockroom.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow_factory() as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise NotFoundError("order", order_id)
        return self._to_dto(order)

    @staticmethod
    def _to_dto(order: Order) -> OrderDTO:
        return OrderDTO(
            id=order.id,
            total=order.total,
            created_at=order.created_at,
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    line_total=item.line_total,
                )
                for item in order.items
            ],
        )
