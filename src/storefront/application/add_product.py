"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, category: str, price: str, stock: int = 0) -> Product:
        """Add a new product to the catalog with its opening stock."""
        product = Product.create(
            name=name, category=category, price=Money.of(price), stock=stock
        )
        with self._uow as uow:
            uow.products.add(product)
            uow.commit()
        return product
