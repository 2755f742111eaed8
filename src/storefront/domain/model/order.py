"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.  Line items are
fixed at creation; afterwards only the status moves.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from storefront.domain.exceptions import DuplicateLineItemError, ValidationError
from storefront.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"


# Forward-only lifecycle.
_STATUS_SEQUENCE = list(OrderStatus)


@dataclass(frozen=True)
class OrderItem:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_LINE_ITEMS = 50


@dataclass
class Order:
    """Aggregate root for purchase orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    user_id: str | None
    items: tuple[OrderItem, ...]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(user_id: str, items: list[OrderItem]) -> Order:
        """Create a new order, enforcing all invariants."""
        if not user_id:
            raise ValidationError("Order must belong to a user")

        if not items:
            raise ValidationError("Order must contain at least one item")

        if len(items) > MAX_LINE_ITEMS:
            raise ValidationError(f"Maximum {MAX_LINE_ITEMS} items per order")

        seen: set[str] = set()
        for item in items:
            if item.product_id in seen:
                raise DuplicateLineItemError(item.product_id)
            seen.add(item.product_id)

        return Order(id=str(uuid.uuid4()), user_id=user_id, items=tuple(items))

    # --- State transitions ----------------------------------------------------

    def advance_to(self, status: OrderStatus) -> None:
        """Move the order forward in its lifecycle.

        Never touches items or stock.
        """
        current = _STATUS_SEQUENCE.index(self.status)
        target = _STATUS_SEQUENCE.index(status)
        if target <= current:
            raise ValidationError(
                f"Cannot move order from {self.status.value} to {status.value}"
            )
        self.status = status

    # --- Computed properties --------------------------------------------------

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result
