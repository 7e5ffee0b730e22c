"""Application service: Show Product use cases (queries)."""

from __future__ import annotations

from typing import Callable

from stockroom.application.dto import ProductDTO
from stockroom.domain.exceptions import NotFoundError
from stockroom.domain.model.product import Product
from stockroom.domain.repository.unit_of_work import UnitOfWork


def to_product_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        name=product.name,
        description=product.description,
        unit_price=product.unit_price,
        stock=product.stock,
        created_at=product.created_at,
    )


class ShowProductHandler:

    def __init__(self, uow_factory: Callable[[], UnitOfWork]) -> None:
        self._uow_factory = uow_factory

    def handle(self, product_id: int) -> ProductDTO:
        with self._uow_factory() as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise NotFoundError("product", product_id)
        return to_product_dto(product)

    def list_all(self) -> list[ProductDTO]:
        with self._uow_factory() as uow:
            products = uow.products.list_all()
        return [to_product_dto(p) for p in products]
