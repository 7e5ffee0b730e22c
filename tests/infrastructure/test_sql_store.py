"""SQL repositories and unit of work against a real SQLite file."""

import threading
import time

import pytest
from sqlalchemy import func, select

from stockroom.application.dto import OrderItemRequest
from stockroom.application.place_order import PlaceOrderHandler
from stockroom.domain.exceptions import (
    InsufficientStockError,
    NotFoundError,
    StoreError,
    ValidationError,
)
from stockroom.domain.model.order import Order, OrderItem
from stockroom.infrastructure.persistence.database import Database
from stockroom.infrastructure.persistence.tables import OrderItemRow, OrderRow


def _count(database, table) -> int:
    with database.session() as session:
        return session.execute(select(func.count()).select_from(table)).scalar_one()


class TestProductRepository:

    def test_add_assigns_increasing_ids(self, add_product):
        first = add_product("A")
        second = add_product("B")
        assert second > first

    def test_round_trip(self, database, add_product):
        pid = add_product("Mug", unit_price=1250, stock=4)
        with database.unit_of_work() as uow:
            product = uow.products.get_by_id(pid)
        assert (product.name, product.unit_price, product.stock) == ("Mug", 1250, 4)
        assert product.created_at.tzinfo is not None

    def test_list_newest_first(self, database, add_product):
        ids = [add_product(n) for n in ("A", "B", "C")]
        with database.unit_of_work() as uow:
            listed = [p.id for p in uow.products.list_all()]
        assert listed == list(reversed(ids))

    def test_save_and_delete(self, database, add_product):
        pid = add_product()
        with database.unit_of_work() as uow:
            product = uow.products.get_by_id(pid)
            product.update_price(900)
            uow.products.save(product)
            uow.commit()
        with database.unit_of_work() as uow:
            assert uow.products.get_by_id(pid).unit_price == 900
            assert uow.products.delete(pid) is True
            assert uow.products.delete(pid) is False
            uow.commit()
        with database.unit_of_work() as uow:
            assert uow.products.get_by_id(pid) is None

    def test_uncommitted_changes_are_discarded(self, database, add_product, stock_of):
        pid = add_product(stock=10)
        with database.unit_of_work() as uow:
            uow.products.decrement_stock(pid, 4)
        assert stock_of(pid) == 10


class TestConditionalDecrement:

    def test_decrements(self, database, add_product, stock_of):
        pid = add_product(stock=5)
        with database.unit_of_work() as uow:
            uow.products.decrement_stock(pid, 5)
            uow.commit()
        assert stock_of(pid) == 0

    def test_refuses_to_go_negative(self, database, add_product, stock_of):
        pid = add_product(stock=2)
        with database.unit_of_work() as uow:
            with pytest.raises(InsufficientStockError) as info:
                uow.products.decrement_stock(pid, 3)
        assert info.value.available == 2
        assert stock_of(pid) == 2

    def test_missing_product(self, database):
        with database.unit_of_work() as uow:
            with pytest.raises(NotFoundError):
                uow.products.decrement_stock(12345, 1)

    @pytest.mark.parametrize("product_id", [2**63, -(2**63) - 1])
    def test_id_wider_than_column_is_absent(self, database, product_id):
        with database.unit_of_work() as uow:
            assert uow.products.get_by_id(product_id) is None
            assert uow.products.delete(product_id) is False
            with pytest.raises(NotFoundError):
                uow.products.decrement_stock(product_id, 1)


class TestOrderRepository:

    def test_round_trip_with_items(self, database):
        order = Order.place([
            OrderItem(product_id=1, quantity=2, unit_price=500),
            OrderItem(product_id=7, quantity=1, unit_price=1999),
        ])
        with database.unit_of_work() as uow:
            uow.orders.add(order)
            uow.orders.add_items(order.id, order.items)
            uow.commit()

        with database.unit_of_work() as uow:
            loaded = uow.orders.get_by_id(order.id)

        assert loaded.id == order.id
        assert loaded.total == 2999
        assert loaded.items == order.items
        assert loaded.created_at == order.created_at

    def test_unknown(self, database):
        with database.unit_of_work() as uow:
            assert uow.orders.get_by_id("missing") is None


class TestPlaceOrderAgainstSql:

    def test_end_to_end(self, database, add_product, stock_of):
        pid = add_product(unit_price=500, stock=10)
        handler = PlaceOrderHandler(database.unit_of_work)

        placed = handler.handle([OrderItemRequest(pid, 3)])
        assert placed.total == 1500
        assert stock_of(pid) == 7

        with pytest.raises(InsufficientStockError):
            handler.handle([OrderItemRequest(pid, 100)])
        assert stock_of(pid) == 7

    def test_failure_leaves_no_order_rows(self, database, add_product, stock_of):
        a = add_product("A", stock=10)
        b = add_product("B", stock=1)
        handler = PlaceOrderHandler(database.unit_of_work)

        with pytest.raises(InsufficientStockError):
            handler.handle([OrderItemRequest(a, 5), OrderItemRequest(b, 2)])
        with pytest.raises(NotFoundError):
            handler.handle([OrderItemRequest(a, 5), OrderItemRequest(9999, 1)])
        with pytest.raises(ValidationError):
            handler.handle([OrderItemRequest(a, 5), OrderItemRequest(b, 0)])

        assert stock_of(a) == 10
        assert stock_of(b) == 1
        assert _count(database, OrderRow) == 0
        assert _count(database, OrderItemRow) == 0

    def test_repeated_product_rolls_back(self, database, add_product, stock_of):
        pid = add_product(stock=3)
        handler = PlaceOrderHandler(database.unit_of_work)
        with pytest.raises(InsufficientStockError):
            handler.handle([OrderItemRequest(pid, 2), OrderItemRequest(pid, 2)])
        assert stock_of(pid) == 3
        assert _count(database, OrderRow) == 0

    def test_product_id_wider_than_column_is_not_found(self, database, add_product, stock_of):
        pid = add_product(stock=10)
        handler = PlaceOrderHandler(database.unit_of_work)
        with pytest.raises(NotFoundError, match=f"product {2**63} not found"):
            handler.handle([OrderItemRequest(pid, 1), OrderItemRequest(2**63, 1)])
        assert stock_of(pid) == 10
        assert _count(database, OrderRow) == 0

    def test_order_outlives_product(self, database, add_product):
        pid = add_product(unit_price=500, stock=10)
        placed = PlaceOrderHandler(database.unit_of_work).handle([OrderItemRequest(pid, 2)])

        with database.unit_of_work() as uow:
            uow.products.delete(pid)
            uow.commit()

        with database.unit_of_work() as uow:
            order = uow.orders.get_by_id(placed.id)
        assert order.items[0].product_id == pid
        assert order.items[0].unit_price == 500
        assert order.total == 1000


class TestConcurrency:

    def test_last_unit_is_sold_once(self, database, add_product, stock_of):
        pid = add_product(stock=1)
        handler = PlaceOrderHandler(database.unit_of_work)
        barrier = threading.Barrier(2)
        outcomes: list[object] = []
        lock = threading.Lock()

        def buy():
            barrier.wait()
            try:
                result = handler.handle([OrderItemRequest(pid, 1)])
            except Exception as exc:  # collected and asserted below
                result = exc
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=buy) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        failures = [o for o in outcomes if isinstance(o, Exception)]
        successes = [o for o in outcomes if not isinstance(o, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientStockError)
        assert stock_of(pid) == 0
        assert _count(database, OrderRow) == 1


class TestStoreErrors:

    def test_sqlalchemy_errors_become_store_error(self, tmp_path):
        # A database whose schema was never created.
        db = Database(f"sqlite:///{tmp_path / 'empty.db'}")
        try:
            with pytest.raises(StoreError) as info:
                PlaceOrderHandler(db.unit_of_work).handle([OrderItemRequest(1, 1)])
            assert "no such table" not in str(info.value)
        finally:
            db.dispose()

    def test_health_check(self, database):
        assert database.health_check() is True

    def test_health_check_does_not_wait_for_writers(self, database, add_product):
        pid = add_product(stock=5)
        with database.unit_of_work() as uow:
            # The write lock is held until this unit of work ends.
            uow.products.decrement_stock(pid, 1)
            started = time.monotonic()
            assert database.health_check() is True
            assert time.monotonic() - started < 5

    def test_orders_still_placed_after_health_check(self, database, add_product, stock_of):
        pid = add_product(stock=5)
        assert database.health_check() is True
        PlaceOrderHandler(database.unit_of_work).handle([OrderItemRequest(pid, 2)])
        assert stock_of(pid) == 3

    def test_health_check_fails_for_unreachable_database(self, tmp_path):
        db = Database(f"sqlite:///{tmp_path / 'missing-dir' / 'x.db'}")
        try:
            assert db.health_check() is False
        finally:
            db.dispose()
