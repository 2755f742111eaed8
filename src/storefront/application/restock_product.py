"""Application service: Restock Product use case."""

from __future__ import annotations

import logging

from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class RestockProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, quantity: int) -> int:
        """Add *quantity* units to stock and return the new level.

        The increment is applied by the store in one statement, so it
        composes safely with concurrent order placements.
        """
        qty = Quantity(quantity).value
        with self._uow as uow:
            level = uow.inventory.restock(product_id, qty)
            uow.commit()
        logger.info("Restocked product %s by %d (now %d)", product_id, qty, level)
        return level
