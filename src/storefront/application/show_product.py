"""Application service: Show / List Products use cases (queries)."""

from __future__ import annotations

from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductSort
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str) -> Product:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        category: str | None = None,
        offset: int = 0,
        limit: int = 10,
        order: str = "newest",
    ) -> list[Product]:
        try:
            sort = ProductSort(order)
        except ValueError:
            choices = ", ".join(s.value for s in ProductSort)
            raise ValidationError(f"Unknown order '{order}' (expected one of {choices})")
        if offset < 0 or limit <= 0:
            raise ValidationError("offset must be >= 0 and limit > 0")

        with self._uow as uow:
            return uow.products.list(
                category=category, offset=offset, limit=limit, sort=sort
            )
