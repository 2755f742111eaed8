"""Integration tests for the PlaceOrder use case.

Uses in-memory fakes — no database.
"""

import pytest

from storefront.application.dto import OrderItemSpec
from storefront.application.place_order import PlaceOrderHandler
from storefront.application.update_product import UpdateProductHandler
from storefront.domain.exceptions import (
    DuplicateLineItemError,
    InsufficientStockError,
    InvalidQuantityError,
    ProductNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.user import User
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeDatabase, FakeUnitOfWork


def _setup(stock: dict[str, int] | None = None) -> tuple[PlaceOrderHandler, FakeUnitOfWork]:
    """Build handler over a fake store with one user and a few products."""
    if stock is None:
        stock = {"widget": 5, "gadget": 10, "freebie": 3}
    prices = {"widget": "15.00", "gadget": "25.00", "freebie": "0"}

    db = FakeDatabase()
    db.users["u1"] = User(id="u1", email="alice@example.com", first_name="Alice", last_name="Kim")
    for pid, level in stock.items():
        db.products[pid] = Product(
            id=pid, name=pid.title(), category="misc",
            price=Money.of(prices.get(pid, "1.00")), stock=level,
        )
    uow = FakeUnitOfWork(db)
    return PlaceOrderHandler(uow), uow


class TestPlaceOrderHappyPath:

    def test_decrements_stock_and_creates_order(self):
        handler, uow = _setup()
        dto = handler.handle("u1", [OrderItemSpec("widget", 3)])

        assert uow.db.stock_of("widget") == 2
        assert dto.id in uow.db.orders
        assert dto.status == "PENDING"
        assert dto.user_id == "u1"
        assert len(dto.items) == 1
        assert dto.items[0].unit_price == "$15.00"

    def test_total_is_computed(self):
        handler, _ = _setup()
        dto = handler.handle("u1", [
            OrderItemSpec("widget", 3),
            OrderItemSpec("gadget", 5),
        ])
        assert dto.total == "$170.00"
        assert [i.line_total for i in dto.items] == ["$45.00", "$125.00"]

    def test_exact_stock_can_be_consumed(self):
        handler, uow = _setup()
        handler.handle("u1", [OrderItemSpec("widget", 5)])
        assert uow.db.stock_of("widget") == 0

    def test_free_items_are_allowed(self):
        handler, _ = _setup()
        dto = handler.handle("u1", [OrderItemSpec("freebie", 1)])
        assert dto.total == "$0.00"

    def test_single_commit(self):
        handler, uow = _setup()
        handler.handle("u1", [OrderItemSpec("widget", 1), OrderItemSpec("gadget", 1)])
        assert uow.commits == 1

    def test_decrements_run_in_product_id_order(self):
        handler, uow = _setup()
        dto = handler.handle("u1", [
            OrderItemSpec("widget", 1),
            OrderItemSpec("freebie", 1),
            OrderItemSpec("gadget", 2),
        ])

        assert uow.inventory.decrements == [("freebie", 1), ("gadget", 2), ("widget", 1)]
        assert [i.product_id for i in dto.items] == ["widget", "freebie", "gadget"]
        assert [i.product_id for i in uow.db.orders[dto.id].items] == ["widget", "freebie", "gadget"]

    def test_repeat_call_creates_distinct_order(self):
        handler, uow = _setup()
        first = handler.handle("u1", [OrderItemSpec("widget", 2)])
        second = handler.handle("u1", [OrderItemSpec("widget", 2)])
        assert first.id != second.id
        assert uow.db.stock_of("widget") == 1
        assert len(uow.db.orders) == 2


class TestPlaceOrderPriceLock:

    def test_price_snapshot_at_creation(self):
        handler, uow = _setup()
        dto = handler.handle("u1", [OrderItemSpec("widget", 1)])

        UpdateProductHandler(uow).handle("widget", price="99.99")

        saved = uow.db.orders[dto.id]
        assert saved.items[0].unit_price == Money.of("15.00")
        assert str(saved.total) == "$15.00"


class TestPlaceOrderRejections:

    def _assert_untouched(self, uow, before: dict[str, int]) -> None:
        assert uow.db.orders == {}
        assert {pid: p.stock for pid, p in uow.db.products.items()} == before

    def test_insufficient_stock(self):
        handler, uow = _setup({"widget": 2})
        with pytest.raises(InsufficientStockError) as info:
            handler.handle("u1", [OrderItemSpec("widget", 3)])
        assert info.value.product_id == "widget"
        self._assert_untouched(uow, {"widget": 2})

    def test_insufficient_second_line_leaves_first_untouched(self):
        handler, uow = _setup({"widget": 5, "gadget": 1})
        with pytest.raises(InsufficientStockError) as info:
            handler.handle("u1", [OrderItemSpec("widget", 3), OrderItemSpec("gadget", 2)])
        assert info.value.product_id == "gadget"
        self._assert_untouched(uow, {"widget": 5, "gadget": 1})

    def test_unknown_product(self):
        handler, uow = _setup()
        with pytest.raises(ProductNotFoundError) as info:
            handler.handle("u1", [OrderItemSpec("widget", 1), OrderItemSpec("ghost", 1)])
        assert info.value.product_id == "ghost"
        self._assert_untouched(uow, {"widget": 5, "gadget": 10, "freebie": 3})

    def test_unknown_user(self):
        handler, uow = _setup()
        with pytest.raises(UserNotFoundError):
            handler.handle("nobody", [OrderItemSpec("widget", 1)])
        assert uow.db.orders == {}

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity(self, qty):
        handler, uow = _setup()
        with pytest.raises(InvalidQuantityError):
            handler.handle("u1", [OrderItemSpec("widget", qty)])
        self._assert_untouched(uow, {"widget": 5, "gadget": 10, "freebie": 3})

    def test_non_integer_quantity(self):
        handler, _ = _setup()
        with pytest.raises(InvalidQuantityError):
            handler.handle("u1", [OrderItemSpec("widget", 1.5)])

    def test_duplicate_line_items_rejected_not_summed(self):
        handler, uow = _setup()
        with pytest.raises(DuplicateLineItemError):
            handler.handle("u1", [OrderItemSpec("widget", 1), OrderItemSpec("widget", 1)])
        self._assert_untouched(uow, {"widget": 5, "gadget": 10, "freebie": 3})

    def test_empty_order(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="at least one item"):
            handler.handle("u1", [])

    def test_invalid_request_never_touches_store(self):
        handler, uow = _setup()
        with pytest.raises(InvalidQuantityError):
            handler.handle("u1", [OrderItemSpec("widget", 0)])
        assert uow.commits == 0
        assert uow.rollbacks == 0


class _StaleSnapshotUnitOfWork(FakeUnitOfWork):
    """Simulates a competing order landing between pre-check and commit."""

    def __init__(self, db, steal: dict[str, int]) -> None:
        super().__init__(db)
        self._steal = steal
        self._entries = 0

    def __enter__(self):
        self._entries += 1
        if self._entries == 2:
            for pid, qty in self._steal.items():
                self.db.products[pid].stock -= qty
        return super().__enter__()


class TestAuthoritativeCheck:

    def test_decrement_guard_wins_over_stale_precheck(self):
        _, uow = _setup({"widget": 5})
        racing = _StaleSnapshotUnitOfWork(uow.db, steal={"widget": 3})
        handler = PlaceOrderHandler(racing)

        with pytest.raises(InsufficientStockError) as info:
            handler.handle("u1", [OrderItemSpec("widget", 3)])

        assert info.value.product_id == "widget"
        assert info.value.available == 2
        assert racing.inventory.decrements == []
        assert racing.db.stock_of("widget") == 2
        assert racing.db.orders == {}
        assert racing.commits == 0

    def test_product_deleted_after_precheck(self):
        _, uow = _setup({"widget": 5})

        class _Deleting(FakeUnitOfWork):
            entries = 0

            def __enter__(self):
                type(self).entries += 1
                if type(self).entries == 2:
                    del self.db.products["widget"]
                return super().__enter__()

        handler = PlaceOrderHandler(_Deleting(uow.db))
        with pytest.raises(ProductNotFoundError):
            handler.handle("u1", [OrderItemSpec("widget", 1)])
