"""Application service: Delete Product use case."""

from __future__ import annotations

from storefront.domain.repository.unit_of_work import UnitOfWork


class DeleteProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> None:
        """Remove a product that no order references."""
        with self._uow as uow:
            uow.products.delete(product_id)
            uow.commit()
