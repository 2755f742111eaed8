"""Abstract unit of work.

Groups the repositories that must change together.  Leaving the ``with``
block without calling ``commit()`` rolls everything back, so an exception
or a cancelled caller can never leave a half-applied write behind.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.repository.inventory_store import InventoryStore
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.repository.user_repository import UserRepository


class UnitOfWork(ABC):

    users: UserRepository
    products: ProductRepository
    orders: OrderRepository
    inventory: InventoryStore

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write since ``__enter__`` durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard uncommitted writes.  A no-op after ``commit()``."""
