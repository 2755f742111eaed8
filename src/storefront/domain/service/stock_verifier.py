"""Domain service: Stock Verifier.

Checks whether current inventory covers a set of requested quantities.
The check is read-only and takes no lock, so its answer is a snapshot:
callers must still rely on ``InventoryStore.decrement_if_sufficient`` inside
a unit of work as the authoritative guard.
"""

from __future__ import annotations

from collections.abc import Sequence

from storefront.domain.exceptions import (
    DuplicateLineItemError,
    InsufficientStockError,
    ProductNotFoundError,
)
from storefront.domain.repository.inventory_store import InventoryStore


def reject_duplicates(requested: Sequence[tuple[str, int]]) -> None:
    """Raise DuplicateLineItemError for the first repeated product ID."""
    seen: set[str] = set()
    for product_id, _ in requested:
        if product_id in seen:
            raise DuplicateLineItemError(product_id)
        seen.add(product_id)


class StockVerifier:

    def __init__(self, inventory: InventoryStore) -> None:
        self._inventory = inventory

    def verify(self, requested: Sequence[tuple[str, int]]) -> None:
        """Fail fast on the first product whose stock cannot cover its line.

        Args:
            requested: (product_id, quantity) pairs, each product at most once.

        Raises:
            DuplicateLineItemError: a product ID appears twice.
            ProductNotFoundError: a product has no stock record.
            InsufficientStockError: stock < quantity for some product.
        """
        reject_duplicates(requested)

        levels = self._inventory.stock_levels(pid for pid, _ in requested)

        for product_id, quantity in requested:
            if product_id not in levels:
                raise ProductNotFoundError(product_id)
            available = levels[product_id]
            if available < quantity:
                raise InsufficientStockError(product_id, quantity, available)
