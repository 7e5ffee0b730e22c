"""FastAPI dependencies: resolve handlers from the app's Database."""

from __future__ import annotations

from fastapi import Depends, Request

from stockroom.application.add_product import AddProductHandler
from stockroom.application.place_order import PlaceOrderHandler
from stockroom.application.remove_product import RemoveProductHandler
from stockroom.application.show_order import ShowOrderHandler
from stockroom.application.show_product import ShowProductHandler
from stockroom.application.update_product import UpdateProductHandler
from stockroom.infrastructure import bootstrap
from stockroom.infrastructure.persistence.database import Database


def get_database(request: Request) -> Database:
    database = request.app.state.database
    if database is None:
        raise RuntimeError("Database not initialized")
    return database


def get_place_order(database: Database = Depends(get_database)) -> PlaceOrderHandler:
    return bootstrap.place_order_handler(database)


def get_show_order(database: Database = Depends(get_database)) -> ShowOrderHandler:
    return bootstrap.show_order_handler(database)


def get_add_product(database: Database = Depends(get_database)) -> AddProductHandler:
    return bootstrap.add_product_handler(database)


def get_show_product(database: Database = Depends(get_database)) -> ShowProductHandler:
    return bootstrap.show_product_handler(database)


def get_update_product(database: Database = Depends(get_database)) -> UpdateProductHandler:
    return bootstrap.update_product_handler(database)


def get_remove_product(database: Database = Depends(get_database)) -> RemoveProductHandler:
    return bootstrap.remove_product_handler(database)
