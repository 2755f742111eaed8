"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQL, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from enum import Enum

from storefront.domain.model.product import Product


class ProductSort(Enum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOWEST = "priceLowest"
    PRICE_HIGHEST = "priceHighest"


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        """Return the known products among *product_ids*, keyed by ID."""

    @abstractmethod
    def list(
        self,
        category: str | None = None,
        offset: int = 0,
        limit: int = 10,
        sort: ProductSort = ProductSort.NEWEST,
    ) -> list[Product]:
        """Return one page of the catalog, optionally filtered by category."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Insert a new product, including its initial stock."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist name, category and price of an existing product.

        Stock is deliberately left untouched; see ``InventoryStore``.
        """

    @abstractmethod
    def delete(self, product_id: str) -> None:
        """Remove a product.

        Raises ProductNotFoundError if absent and ConflictError while order
        items still reference it.
        """
