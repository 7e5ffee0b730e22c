"""SQL-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy.orm import Session

from stockroom.domain.model.order import Order, OrderItem
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.infrastructure.persistence.tables import OrderItemRow, OrderRow


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def add(self, order: Order) -> None:
        self._session.add(
            OrderRow(id=order.id, total_cents=order.total, created_at=order.created_at)
        )
        self._session.flush()

    def add_items(self, order_id: str, items: list[OrderItem]) -> None:
        self._session.add_all(
            OrderItemRow(
                order_id=order_id,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price_cents=item.unit_price,
            )
            for item in items
        )
        self._session.flush()

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        if row is None:
            return None

        created_at = row.created_at
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Order(
            id=row.id,
            total=row.total_cents,
            created_at=created_at,
            items=[
                OrderItem(
                    product_id=item.product_id,
                    quantity=item.quantity,
                    unit_price=item.unit_price_cents,
                )
                for item in row.items
            ],
        )
