"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from stockroom.application.add_product import AddProductHandler
from stockroom.application.place_order import PlaceOrderHandler
from stockroom.application.remove_product import RemoveProductHandler
from stockroom.application.show_order import ShowOrderHandler
from stockroom.application.show_product import ShowProductHandler
from stockroom.application.update_product import UpdateProductHandler
from stockroom.domain.exceptions import StoreError
from stockroom.infrastructure.config import Settings, get_settings
from stockroom.infrastructure.persistence.database import Database


def open_database(settings: Settings | None = None) -> Database:
    """Connect to the configured store and make sure the schema exists."""
    settings = settings or get_settings()
    database = Database(
        settings.database_url,
        pool_size=settings.database_pool_size,
        echo=settings.database_echo,
    )
    try:
        database.create_schema()
    except StoreError:
        database.dispose()
        raise
    return database


def place_order_handler(database: Database) -> PlaceOrderHandler:
    return PlaceOrderHandler(uow_factory=database.unit_of_work)


def show_order_handler(database: Database) -> ShowOrderHandler:
    return ShowOrderHandler(uow_factory=database.unit_of_work)


def add_product_handler(database: Database) -> AddProductHandler:
    return AddProductHandler(uow_factory=database.unit_of_work)


def show_product_handler(database: Database) -> ShowProductHandler:
    return ShowProductHandler(uow_factory=database.unit_of_work)


def update_product_handler(database: Database) -> UpdateProductHandler:
    return UpdateProductHandler(uow_factory=database.unit_of_work)


def remove_product_handler(database: Database) -> RemoveProductHandler:
    return RemoveProductHandler(uow_factory=database.unit_of_work)
