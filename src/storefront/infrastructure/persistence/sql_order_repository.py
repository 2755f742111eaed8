"""SQL implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import Connection, delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError

from storefront.domain.exceptions import OrderNotFoundError, UserNotFoundError
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Quantity
from storefront.domain.repository.order_repository import OrderRepository
from storefront.infrastructure.persistence._convert import as_utc, to_money
from storefront.infrastructure.persistence.tables import order_items, orders


class SqlOrderRepository(OrderRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._conn.execute(select(orders).where(orders.c.id == order_id)).first()
        if row is None:
            return None
        return self._to_domain(row, self._load_items([order_id]).get(order_id, []))

    def list(
        self,
        user_id: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[Order]:
        query = select(orders)
        if user_id is not None:
            query = query.where(orders.c.user_id == user_id)
        query = query.order_by(orders.c.created_at.desc(), orders.c.id).offset(offset).limit(limit)
        rows = self._conn.execute(query).all()

        items = self._load_items([row.id for row in rows])
        return [self._to_domain(row, items.get(row.id, [])) for row in rows]

    def add(self, order: Order) -> None:
        try:
            self._conn.execute(
                insert(orders).values(
                    id=order.id,
                    user_id=order.user_id,
                    status=order.status.value,
                    created_at=order.created_at,
                )
            )
        except IntegrityError as exc:
            # Products are row-locked by the decrements earlier in this
            # transaction, so the user is the only reference that can vanish.
            raise UserNotFoundError(order.user_id or "") from exc

        self._conn.execute(
            insert(order_items),
            [
                {
                    "order_id": order.id,
                    "product_id": item.product_id,
                    "line_no": line_no,
                    "quantity": item.quantity.value,
                    "unit_price": item.unit_price.amount,
                    "currency": item.unit_price.currency,
                }
                for line_no, item in enumerate(order.items)
            ],
        )

    def update_status(self, order: Order) -> None:
        result = self._conn.execute(
            update(orders)
            .where(orders.c.id == order.id)
            .values(status=order.status.value)
        )
        if result.rowcount == 0:
            raise OrderNotFoundError(order.id)

    def delete(self, order_id: str) -> None:
        # Explicit item delete keeps this correct on engines without cascades.
        self._conn.execute(delete(order_items).where(order_items.c.order_id == order_id))
        result = self._conn.execute(delete(orders).where(orders.c.id == order_id))
        if result.rowcount == 0:
            raise OrderNotFoundError(order_id)

    # --- Serialization --------------------------------------------------------

    def _load_items(self, order_ids: list[str]) -> dict[str, list[OrderItem]]:
        if not order_ids:
            return {}
        rows = self._conn.execute(
            select(order_items)
            .where(order_items.c.order_id.in_(order_ids))
            .order_by(order_items.c.order_id, order_items.c.line_no)
        ).all()

        grouped: dict[str, list[OrderItem]] = {}
        for row in rows:
            grouped.setdefault(row.order_id, []).append(
                OrderItem(
                    product_id=row.product_id,
                    quantity=Quantity(row.quantity),
                    unit_price=to_money(row.unit_price, row.currency),
                )
            )
        return grouped

    @staticmethod
    def _to_domain(row: Row, items: list[OrderItem]) -> Order:
        return Order(
            id=row.id,
            user_id=row.user_id,
            items=tuple(items),
            status=OrderStatus(row.status),
            created_at=as_utc(row.created_at),
        )
