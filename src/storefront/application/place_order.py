"""Application service: Place Order use case.

Turns a cart-like request into a persisted Order while consuming
inventory.  The decrement of every line and the order insert happen in
one unit of work; either all of it commits or none of it does.
"""

from __future__ import annotations

import logging

from storefront.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from storefront.domain.exceptions import (
    DomainException,
    InsufficientStockError,
    ProductNotFoundError,
    UserNotFoundError,
    ValidationError,
)
from storefront.domain.model.order import MAX_LINE_ITEMS, Order, OrderItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.domain.service.stock_verifier import StockVerifier, reject_duplicates

logger = logging.getLogger(__name__)


class PlaceOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str, item_specs: list[OrderItemSpec]) -> OrderDTO:
        """Place a new order for *user_id*.

        Steps:
        1. Validate the request shape (quantities, duplicates); no I/O.
        2. Load the user and products, snapshot prices, pre-check stock.
        3. In a fresh unit of work: conditionally decrement every line
           in product-id order, insert the order, commit.
        4. Return a DTO with the computed total.
        """
        try:
            requested = self._validate(item_specs)
            prices = self._load_prices(user_id, requested)

            items = [
                OrderItem(
                    product_id=product_id,
                    quantity=Quantity(quantity),
                    unit_price=prices[product_id],  # <-- price snapshot
                )
                for product_id, quantity in requested
            ]
            order = Order.create(user_id=user_id, items=items)

            with self._uow as uow:
                # Fixed lock order across concurrent placements; items keep request order.
                for product_id, quantity in sorted(requested):
                    if not uow.inventory.decrement_if_sufficient(product_id, quantity):
                        self._raise_decrement_failure(uow, product_id, quantity)
                uow.orders.add(order)
                uow.commit()
        except DomainException as exc:
            logger.warning(
                "Order placement for user %s rejected (%s): %s",
                user_id, exc.kind.value, exc,
            )
            raise

        logger.info(
            "Placed order %s for user %s (%d items, total %s)",
            order.id, user_id, len(order.items), order.total,
        )
        return to_order_dto(order)

    # --- Steps ----------------------------------------------------------------

    @staticmethod
    def _validate(item_specs: list[OrderItemSpec]) -> list[tuple[str, int]]:
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        if len(item_specs) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        requested = [
            (spec.product_id, Quantity(spec.quantity).value) for spec in item_specs
        ]
        reject_duplicates(requested)
        return requested

    def _load_prices(
        self, user_id: str, requested: list[tuple[str, int]]
    ) -> dict[str, Money]:
        """Resolve user and products; run the optimistic stock pre-check."""
        with self._uow as uow:
            if uow.users.get_by_id(user_id) is None:
                raise UserNotFoundError(user_id)

            products = uow.products.get_many(pid for pid, _ in requested)
            for product_id, _ in requested:
                if product_id not in products:
                    raise ProductNotFoundError(product_id)

            StockVerifier(uow.inventory).verify(requested)

        return {pid: product.price for pid, product in products.items()}

    @staticmethod
    def _raise_decrement_failure(uow: UnitOfWork, product_id: str, quantity: int) -> None:
        """Tell a product deleted since the pre-check apart from a stock shortfall."""
        levels = uow.inventory.stock_levels([product_id])
        if product_id not in levels:
            raise ProductNotFoundError(product_id)
        raise InsufficientStockError(product_id, quantity, levels[product_id])
