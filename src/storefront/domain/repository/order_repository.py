"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def list(
        self,
        user_id: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        """Return orders, newest first, optionally for a single user."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Insert a new order and all of its items.

        Raises UserNotFoundError if the owning user no longer exists.
        """

    @abstractmethod
    def update_status(self, order: Order) -> None:
        """Persist the order's status; items are never rewritten."""

    @abstractmethod
    def delete(self, order_id: str) -> None:
        """Remove an order and its items.  Stock is not restored."""
