"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, stock is replenished, products are added and removed from
the catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import InvalidQuantityError, ValidationError
from storefront.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog.

    ``stock`` mirrors the persisted counter at load time.  It is never
    written back through ``ProductRepository.save``; the counter only moves
    through the atomic operations of ``InventoryStore``.
    """

    id: str
    name: str
    category: str
    price: Money
    stock: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(name: str, category: str, price: Money, stock: int = 0) -> Product:
        """Create a new catalog entry, validating every field."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        if not isinstance(stock, int) or isinstance(stock, bool) or stock < 0:
            raise InvalidQuantityError("Initial stock must be a non-negative integer")
        return Product(
            id=str(uuid.uuid4()),
            name=name.strip(),
            category=category.strip(),
            price=price,
            stock=stock,
        )

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        self.name = name.strip()

    def recategorize(self, category: str) -> None:
        if not category or not category.strip():
            raise ValidationError("Product category is required")
        self.category = category.strip()

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.price = new_price
