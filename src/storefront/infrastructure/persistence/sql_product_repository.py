"""SQL implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import Connection, delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError

from storefront.domain.exceptions import ConflictError, ProductNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import (
    ProductRepository,
    ProductSort,
)
from storefront.infrastructure.persistence._convert import as_utc, to_money
from storefront.infrastructure.persistence.tables import products

_ORDERING = {
    ProductSort.NEWEST: products.c.created_at.desc(),
    ProductSort.OLDEST: products.c.created_at.asc(),
    ProductSort.PRICE_LOWEST: products.c.price.asc(),
    ProductSort.PRICE_HIGHEST: products.c.price.desc(),
}


class SqlProductRepository(ProductRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._conn.execute(
            select(products).where(products.c.id == product_id)
        ).first()
        return self._to_domain(row) if row is not None else None

    def get_many(self, product_ids: Iterable[str]) -> dict[str, Product]:
        ids = list(product_ids)
        if not ids:
            return {}
        rows = self._conn.execute(select(products).where(products.c.id.in_(ids))).all()
        return {row.id: self._to_domain(row) for row in rows}

    def list(
        self,
        category: str | None = None,
        offset: int = 0,
        limit: int = 10,
        sort: ProductSort = ProductSort.NEWEST,
    ) -> list[Product]:
        query = select(products)
        if category:
            query = query.where(products.c.category == category)
        query = query.order_by(_ORDERING[sort], products.c.id).offset(offset).limit(limit)
        return [self._to_domain(row) for row in self._conn.execute(query).all()]

    def add(self, product: Product) -> None:
        self._conn.execute(
            insert(products).values(**self._to_raw(product), stock=product.stock)
        )

    def save(self, product: Product) -> None:
        result = self._conn.execute(
            update(products)
            .where(products.c.id == product.id)
            .values(**self._to_raw(product))
        )
        if result.rowcount == 0:
            raise ProductNotFoundError(product.id)

    def delete(self, product_id: str) -> None:
        try:
            result = self._conn.execute(
                delete(products).where(products.c.id == product_id)
            )
        except IntegrityError as exc:
            raise ConflictError(
                f"Product '{product_id}' is referenced by existing orders"
            ) from exc
        if result.rowcount == 0:
            raise ProductNotFoundError(product_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        # No "stock" key: the counter only moves through SqlInventoryStore.
        return {
            "id": product.id,
            "name": product.name,
            "category": product.category,
            "price": product.price.amount,
            "currency": product.price.currency,
            "created_at": product.created_at,
        }

    @staticmethod
    def _to_domain(row: Row) -> Product:
        return Product(
            id=row.id,
            name=row.name,
            category=row.category,
            price=to_money(row.price, row.currency),
            stock=row.stock,
            created_at=as_utc(row.created_at),
        )
