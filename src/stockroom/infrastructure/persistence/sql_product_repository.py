"""SQL-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import timezone

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from stockroom.domain.exceptions import InsufficientStockError, NotFoundError
from stockroom.domain.model.product import Product
from stockroom.domain.model.value_objects import MAX_INTEGER, MIN_INTEGER
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.infrastructure.persistence.tables import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        if not _storable(product_id):
            return None
        # FOR UPDATE holds the row until the unit of work ends on backends
        # that support it; SQLite serializes writers with BEGIN IMMEDIATE.
        row = self._session.execute(
            select(ProductRow).where(ProductRow.id == product_id).with_for_update()
        ).scalar_one_or_none()
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Product]:
        rows = self._session.execute(
            select(ProductRow).order_by(ProductRow.id.desc())
        ).scalars()
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> Product:
        row = ProductRow(
            name=product.name,
            description=product.description,
            price_cents=product.unit_price,
            stock=product.stock,
            created_at=product.created_at,
        )
        self._session.add(row)
        self._session.flush()
        product.id = row.id
        return product

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            raise NotFoundError("product", product.id)
        row.name = product.name
        row.description = product.description
        row.price_cents = product.unit_price
        row.stock = product.stock
        self._session.flush()

    def delete(self, product_id: int) -> bool:
        if not _storable(product_id):
            return False
        result = self._session.execute(
            delete(ProductRow).where(ProductRow.id == product_id)
        )
        return result.rowcount > 0

    def decrement_stock(self, product_id: int, amount: int) -> None:
        if not _storable(product_id):
            raise NotFoundError("product", product_id)
        result = self._session.execute(
            update(ProductRow)
            .where(ProductRow.id == product_id, ProductRow.stock >= amount)
            .values(stock=ProductRow.stock - amount)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return

        available = self._session.execute(
            select(ProductRow.stock).where(ProductRow.id == product_id)
        ).scalar_one_or_none()
        if available is None:
            raise NotFoundError("product", product_id)
        raise InsufficientStockError(product_id, amount, available)

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        created_at = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; everything is stored in UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Product(
            id=row.id,
            name=row.name,
            description=row.description,
            unit_price=row.price_cents,
            stock=row.stock,
            created_at=created_at,
        )


def _storable(product_id: int) -> bool:
    # No row can carry an id the integer column cannot hold; the driver
    # would raise OverflowError instead of finding nothing.
    return MIN_INTEGER <= product_id <= MAX_INTEGER
