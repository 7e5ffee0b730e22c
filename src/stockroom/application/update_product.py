"""Application service: Update Product use case.

Partial update: any field left as None keeps its current value.
"""

from __future__ import annotations

from typing import Callable

from stockroom.application.dto import ProductDTO
from stockroom.application.show_product import to_product_dto
from stockroom.domain.exceptions import NotFoundError
from stockroom.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        product_id: int,
        name: str | None = None,
        description: str | None = None,
        unit_price: int | None = None,
        stock: int | None = None,
    ) -> ProductDTO:
        """Update a product.

        A price change does NOT affect any existing orders; they
        captured a price snapshot at placement time.
        """
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise NotFoundError("product", product_id)

            if name is not None:
                product.rename(name)
            if description is not None:
                product.describe(description)
            if unit_price is not None:
                product.update_price(unit_price)
            if stock is not None:
                product.set_stock(stock)

            uow.products.save(product)
            uow.commit()

        return to_product_dto(product)
