"""Application service: Update Product use case."""

from __future__ import annotations

from storefront.domain.exceptions import ProductNotFoundError, ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        product_id: str,
        name: str | None = None,
        category: str | None = None,
        price: str | None = None,
    ) -> Product:
        """Update a product's catalog fields.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.  Stock is changed only through
        ``RestockProductHandler``.
        """
        if name is None and category is None and price is None:
            raise ValidationError("Nothing to update")

        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(product_id)

            if name is not None:
                product.rename(name)
            if category is not None:
                product.recategorize(category)
            if price is not None:
                product.update_price(Money.of(price))

            uow.products.save(product)
            uow.commit()
        return product
