"""SQL implementation of InventoryStore.

Each stock write is a single UPDATE whose WHERE clause carries the
guard, so the database applies check and write as one step.  Under
READ COMMITTED (PostgreSQL) a blocked writer re-evaluates the guard
against the committed row; SQLite serializes writers outright.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import Connection, select, update

from storefront.domain.exceptions import InvalidQuantityError, ProductNotFoundError
from storefront.domain.repository.inventory_store import InventoryStore
from storefront.infrastructure.persistence.tables import products


class SqlInventoryStore(InventoryStore):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def stock_levels(self, product_ids: Iterable[str]) -> dict[str, int]:
        ids = list(product_ids)
        if not ids:
            return {}
        rows = self._conn.execute(
            select(products.c.id, products.c.stock).where(products.c.id.in_(ids))
        ).all()
        return {row.id: row.stock for row in rows}

    def decrement_if_sufficient(self, product_id: str, quantity: int) -> bool:
        if quantity <= 0:
            raise InvalidQuantityError("Decrement quantity must be positive")
        result = self._conn.execute(
            update(products)
            .where(products.c.id == product_id, products.c.stock >= quantity)
            .values(stock=products.c.stock - quantity)
        )
        return result.rowcount == 1

    def restock(self, product_id: str, quantity: int) -> int:
        if quantity <= 0:
            raise InvalidQuantityError("Restock quantity must be positive")
        result = self._conn.execute(
            update(products)
            .where(products.c.id == product_id)
            .values(stock=products.c.stock + quantity)
        )
        if result.rowcount == 0:
            raise ProductNotFoundError(product_id)
        return self._conn.execute(
            select(products.c.stock).where(products.c.id == product_id)
        ).scalar_one()
