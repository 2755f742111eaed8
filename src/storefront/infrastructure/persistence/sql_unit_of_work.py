"""SQL implementation of UnitOfWork.

One connection and one transaction per ``with`` block.  Instances are
not shared between threads: give each concurrent request its own.
"""

from __future__ import annotations

import logging

from sqlalchemy import Connection, Engine, RootTransaction
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.exceptions import StorageError
from storefront.domain.repository.unit_of_work import UnitOfWork
from storefront.infrastructure.persistence.sql_inventory_store import SqlInventoryStore
from storefront.infrastructure.persistence.sql_order_repository import SqlOrderRepository
from storefront.infrastructure.persistence.sql_product_repository import (
    SqlProductRepository,
)
from storefront.infrastructure.persistence.sql_user_repository import SqlUserRepository

logger = logging.getLogger(__name__)


class SqlUnitOfWork(UnitOfWork):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._connection: Connection | None = None
        self._transaction: RootTransaction | None = None

    def __enter__(self) -> SqlUnitOfWork:
        try:
            self._connection = self._engine.connect()
            self._transaction = self._connection.begin()
        except SQLAlchemyError as exc:
            self._close()
            raise StorageError(f"Could not open a transaction: {exc}") from exc

        self.users = SqlUserRepository(self._connection)
        self.products = SqlProductRepository(self._connection)
        self.orders = SqlOrderRepository(self._connection)
        self.inventory = SqlInventoryStore(self._connection)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.rollback()
        except SQLAlchemyError as rollback_exc:
            if exc is None:
                raise StorageError(f"Rollback failed: {rollback_exc}") from rollback_exc
            # The block's own error propagates below.
            logger.warning("Rollback failed: %s", rollback_exc)
        finally:
            self._close()
        if isinstance(exc, SQLAlchemyError):
            raise StorageError(f"Storage failure: {exc}") from exc

    def commit(self) -> None:
        if self._transaction is None:
            raise StorageError("No active unit of work to commit")
        try:
            self._transaction.commit()
        except SQLAlchemyError as exc:
            raise StorageError(f"Commit failed: {exc}") from exc

    def rollback(self) -> None:
        if self._transaction is not None and self._transaction.is_active:
            self._transaction.rollback()
            logger.debug("Unit of work rolled back")

    def _close(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._transaction = None
