"""Fixtures backed by a real SQLite file in a temporary directory."""

from __future__ import annotations

import pytest

from stockroom.domain.model.product import Product
from stockroom.infrastructure.persistence.database import Database


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite:///{tmp_path / 'stockroom.db'}"


@pytest.fixture
def database(database_url):
    db = Database(database_url)
    db.create_schema()
    yield db
    db.dispose()


@pytest.fixture
def add_product(database):
    """Insert a product directly and return its id."""

    def _add(name: str = "Widget", unit_price: int = 500, stock: int = 10) -> int:
        with database.unit_of_work() as uow:
            product = uow.products.add(
                Product.create(name=name, unit_price=unit_price, stock=stock)
            )
            uow.commit()
        return product.id

    return _add


@pytest.fixture
def stock_of(database):
    def _stock(product_id: int) -> int | None:
        with database.unit_of_work() as uow:
            product = uow.products.get_by_id(product_id)
        return product.stock if product is not None else None

    return _stock
