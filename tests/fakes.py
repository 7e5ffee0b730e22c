"""In-memory fakes for testing.

These implement the same abstract interfaces as the SQL repositories
but keep everything in dicts. No database, no side effects.

FakeUnitOfWork snapshots the store on enter and restores it on
rollback, so all-or-nothing behaviour is observable without SQL.
"""

from __future__ import annotations

import copy
from dataclasses import replace

from stockroom.domain.exceptions import InsufficientStockError, NotFoundError, StoreError
from stockroom.domain.model.order import Order, OrderItem
from stockroom.domain.model.product import Product
from stockroom.domain.repository.order_repository import OrderRepository
from stockroom.domain.repository.product_repository import ProductRepository
from stockroom.domain.repository.unit_of_work import UnitOfWork


class FakeStore:
    """Shared state behind every FakeUnitOfWork, like a database file."""

    def __init__(self, products: list[Product] | None = None) -> None:
        self.products: dict[int, Product] = {}
        self.orders: dict[str, Order] = {}
        self.fail_on: str | None = None  # repository method name to break
        self.commits = 0
        self.rollbacks = 0
        self._next_product_id = 1
        for p in products or []:
            if p.id is None:
                p.id = self._next_product_id
            self._next_product_id = max(self._next_product_id, p.id + 1)
            self.products[p.id] = p

    def unit_of_work(self) -> FakeUnitOfWork:
        return FakeUnitOfWork(self)

    def next_product_id(self) -> int:
        product_id = self._next_product_id
        self._next_product_id += 1
        return product_id

    def check(self, operation: str) -> None:
        if self.fail_on == operation:
            raise StoreError(f"simulated failure in {operation}")


class FakeProductRepository(ProductRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def get_by_id(self, product_id: int) -> Product | None:
        self._store.check("get_by_id")
        product = self._store.products.get(product_id)
        return replace(product) if product is not None else None

    def list_all(self) -> list[Product]:
        return [
            replace(p)
            for p in sorted(self._store.products.values(), key=lambda p: p.id, reverse=True)
        ]

    def add(self, product: Product) -> Product:
        self._store.check("add_product")
        product.id = self._store.next_product_id()
        self._store.products[product.id] = replace(product)
        return product

    def save(self, product: Product) -> None:
        if product.id not in self._store.products:
            raise NotFoundError("product", product.id)
        self._store.products[product.id] = replace(product)

    def delete(self, product_id: int) -> bool:
        return self._store.products.pop(product_id, None) is not None

    def decrement_stock(self, product_id: int, amount: int) -> None:
        self._store.check("decrement_stock")
        product = self._store.products.get(product_id)
        if product is None:
            raise NotFoundError("product", product_id)
        if product.stock < amount:
            raise InsufficientStockError(product_id, amount, product.stock)
        product.stock -= amount


class FakeOrderRepository(OrderRepository):

    def __init__(self, store: FakeStore) -> None:
        self._store = store

    def add(self, order: Order) -> None:
        self._store.check("add_order")
        self._store.orders[order.id] = replace(order, items=[])

    def add_items(self, order_id: str, items: list[OrderItem]) -> None:
        self._store.check("add_items")
        self._store.orders[order_id].items.extend(items)

    def get_by_id(self, order_id: str) -> Order | None:
        order = self._store.orders.get(order_id)
        return replace(order, items=list(order.items)) if order is not None else None


class FakeUnitOfWork(UnitOfWork):

    def __init__(self, store: FakeStore) -> None:
        self._store = store
        self._snapshot: tuple[dict, dict] | None = None
        self.products = FakeProductRepository(store)
        self.orders = FakeOrderRepository(store)

    def __enter__(self) -> FakeUnitOfWork:
        self._snapshot = (
            copy.deepcopy(self._store.products),
            copy.deepcopy(self._store.orders),
        )
        return self

    def commit(self) -> None:
        self._store.check("commit")
        self._snapshot = None
        self._store.commits += 1

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        self._store.products, self._store.orders = self._snapshot
        self._snapshot = None
        self._store.rollbacks += 1
