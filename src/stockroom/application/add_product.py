"""Application service: Add Product use case."""

from __future__ import annotations

import logging
from typing import Callable

from stockroom.application.dto import ProductDTO
from stockroom.application.show_product import to_product_dto
from stockroom.domain.model.product import Product
from stockroom.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(
        self,
        name: str,
        unit_price: int,
        stock: int = 0,
        description: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(
            name=name, unit_price=unit_price, stock=stock, description=description
        )

        with self._uow_factory() as uow:
            product = uow.products.add(product)
            uow.commit()

        logger.info("Added product %s", product.id, extra={"product_id": product.id})
        return to_product_dto(product)
