"""Application service: Delete Order use case."""

from __future__ import annotations

from storefront.domain.repository.unit_of_work import UnitOfWork


class DeleteOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> None:
        """Delete an order and its items.

        Stock consumed by the order is not returned to inventory.
        """
        with self._uow as uow:
            uow.orders.delete(order_id)
            uow.commit()
