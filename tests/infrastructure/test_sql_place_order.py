"""End-to-end order placement against a real SQLite database.

Covers atomicity, the conditional decrement under real concurrency
(separate threads, separate connections) and price snapshots.
"""

import threading

import pytest
from sqlalchemy import text

from storefront.application.dto import OrderItemSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.database import build_engine
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'orders.db'}", lock_timeout=30)
    yield engine
    engine.dispose()


@pytest.fixture
def seeded(engine):
    user = User.create("alice@example.com", "Alice", "Kim")
    widget = Product.create("Widget", "tools", Money.of("15.00"), stock=5)
    gadget = Product.create("Gadget", "tools", Money.of("25.00"), stock=10)
    with SqlUnitOfWork(engine) as uow:
        uow.users.add(user)
        uow.products.add(widget)
        uow.products.add(gadget)
        uow.commit()
    return user, widget, gadget


def _stock(engine, product_id: str) -> int:
    with SqlUnitOfWork(engine) as uow:
        return uow.inventory.stock_levels([product_id])[product_id]


def _order_count(engine) -> tuple[int, int]:
    with engine.connect() as conn:
        orders = conn.execute(text("SELECT COUNT(*) FROM orders")).scalar_one()
        items = conn.execute(text("SELECT COUNT(*) FROM order_items")).scalar_one()
    return orders, items


class _PausingUnitOfWork(SqlUnitOfWork):
    """Waits on *barrier* before opening the atomic unit (second ``with``)."""

    def __init__(self, engine, barrier: threading.Barrier) -> None:
        super().__init__(engine)
        self._barrier = barrier
        self._entries = 0

    def __enter__(self):
        self._entries += 1
        if self._entries == 2:
            self._barrier.wait(timeout=30)
        return super().__enter__()


class _InterferingUnitOfWork(SqlUnitOfWork):
    """Lets a competing writer drain stock between pre-check and commit."""

    def __init__(self, engine, product_id: str, drain_to: int) -> None:
        super().__init__(engine)
        self._product_id = product_id
        self._drain_to = drain_to
        self._entries = 0

    def __enter__(self):
        self._entries += 1
        if self._entries == 2:
            with self._engine.begin() as conn:
                conn.execute(
                    text("UPDATE products SET stock = :s WHERE id = :id"),
                    {"s": self._drain_to, "id": self._product_id},
                )
        return super().__enter__()


class TestScenarios:

    def test_success_decrements_and_snapshots_price(self, engine, seeded):
        user, widget, _ = seeded
        dto = PlaceOrderHandler(SqlUnitOfWork(engine)).handle(
            user.id, [OrderItemSpec(widget.id, 3)]
        )

        assert _stock(engine, widget.id) == 2
        assert dto.items[0].unit_price == "$15.00"
        assert dto.total == "$45.00"
        assert _order_count(engine) == (1, 1)

    def test_insufficient_stock_changes_nothing(self, engine, seeded):
        user, widget, _ = seeded
        with SqlUnitOfWork(engine) as uow:
            uow.inventory.decrement_if_sufficient(widget.id, 3)
            uow.commit()

        with pytest.raises(InsufficientStockError) as info:
            PlaceOrderHandler(SqlUnitOfWork(engine)).handle(
                user.id, [OrderItemSpec(widget.id, 3)]
            )

        assert info.value.product_id == widget.id
        assert _stock(engine, widget.id) == 2
        assert _order_count(engine) == (0, 0)

    def test_unknown_product_changes_nothing(self, engine, seeded):
        user, widget, _ = seeded
        with pytest.raises(ProductNotFoundError):
            PlaceOrderHandler(SqlUnitOfWork(engine)).handle(
                user.id, [OrderItemSpec(widget.id, 1), OrderItemSpec("ghost", 1)]
            )
        assert _stock(engine, widget.id) == 5
        assert _order_count(engine) == (0, 0)

    def test_zero_quantity_changes_nothing(self, engine, seeded):
        user, widget, _ = seeded
        with pytest.raises(InvalidQuantityError):
            PlaceOrderHandler(SqlUnitOfWork(engine)).handle(
                user.id, [OrderItemSpec(widget.id, 0)]
            )
        assert _stock(engine, widget.id) == 5
        assert _order_count(engine) == (0, 0)

    def test_price_change_does_not_rewrite_history(self, engine, seeded):
        user, widget, _ = seeded
        placed = PlaceOrderHandler(SqlUnitOfWork(engine)).handle(
            user.id, [OrderItemSpec(widget.id, 1)]
        )

        UpdateProductHandler(SqlUnitOfWork(engine)).handle(widget.id, price="99.99")

        reread = ShowOrderHandler(SqlUnitOfWork(engine)).handle(placed.id)
        assert reread.items[0].unit_price == "$15.00"
        assert reread.total == "$15.00"


class TestAtomicity:

    def test_failure_on_later_line_rolls_back_earlier_decrements(self, engine, seeded):
        user, widget, gadget = seeded
        uow = _InterferingUnitOfWork(engine, gadget.id, drain_to=1)

        with pytest.raises(InsufficientStockError) as info:
            PlaceOrderHandler(uow).handle(
                user.id, [OrderItemSpec(widget.id, 3), OrderItemSpec(gadget.id, 2)]
            )

        assert info.value.product_id == gadget.id
        assert info.value.available == 1
        assert _stock(engine, widget.id) == 5
        assert _stock(engine, gadget.id) == 1
        assert _order_count(engine) == (0, 0)

    def test_success_applies_every_line(self, engine, seeded):
        user, widget, gadget = seeded
        dto = PlaceOrderHandler(SqlUnitOfWork(engine)).handle(
            user.id, [OrderItemSpec(widget.id, 5), OrderItemSpec(gadget.id, 10)]
        )
        assert _stock(engine, widget.id) == 0
        assert _stock(engine, gadget.id) == 0
        assert _order_count(engine) == (1, 2)
        assert dto.total == "$325.00"


class TestConcurrency:

    def test_two_racing_orders_only_one_wins(self, engine, seeded):
        user, widget, _ = seeded
        barrier = threading.Barrier(2)
        outcomes: list[object] = []
        lock = threading.Lock()

        def place() -> None:
            handler = PlaceOrderHandler(_PausingUnitOfWork(engine, barrier))
            try:
                result = handler.handle(user.id, [OrderItemSpec(widget.id, 3)])
            except Exception as exc:  # collected for assertions below
                result = exc
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=place) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=60)

        failures = [o for o in outcomes if isinstance(o, Exception)]
        assert len(outcomes) == 2
        assert len(failures) == 1
        assert isinstance(failures[0], InsufficientStockError)
        assert failures[0].product_id == widget.id
        assert _stock(engine, widget.id) == 2
        assert _order_count(engine) == (1, 1)

    def test_many_concurrent_orders_never_oversell(self, engine, seeded):
        user, widget, _ = seeded
        workers = 8
        barrier = threading.Barrier(workers)
        successes: list[int] = []
        errors: list[Exception] = []
        lock = threading.Lock()

        def place(qty: int) -> None:
            handler = PlaceOrderHandler(_PausingUnitOfWork(engine, barrier))
            try:
                handler.handle(user.id, [OrderItemSpec(widget.id, qty)])
            except InsufficientStockError:
                return
            except Exception as exc:  # surfaced by the assertion below
                with lock:
                    errors.append(exc)
                return
            with lock:
                successes.append(qty)

        quantities = [1, 2, 1, 2, 1, 2, 1, 2]
        threads = [threading.Thread(target=place, args=(q,)) for q in quantities]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=120)

        assert errors == []
        final = _stock(engine, widget.id)
        assert final >= 0
        assert sum(successes) == 5 - final
        assert _order_count(engine)[0] == len(successes)
