"""Abstract inventory store: the only path through which stock moves.

Implementations are bound to a unit of work, so every write below joins
that unit's transaction and commits or rolls back with it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable


class InventoryStore(ABC):

    @abstractmethod
    def stock_levels(self, product_ids: Iterable[str]) -> dict[str, int]:
        """Read current stock for *product_ids* in a single query.

        Unknown IDs are simply absent from the result.
        """

    @abstractmethod
    def decrement_if_sufficient(self, product_id: str, quantity: int) -> bool:
        """Atomically subtract *quantity* if stock stays non-negative.

        The guard and the write are one operation: there is no window
        between checking and decrementing.  Returns False (and changes
        nothing) when stock is insufficient or the product is unknown.
        """

    @abstractmethod
    def restock(self, product_id: str, quantity: int) -> int:
        """Atomically add *quantity* to stock and return the new level."""
