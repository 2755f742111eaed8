"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import OrderNotFoundError, ValidationError
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return to_order_dto(order)


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str | None = None,
        offset: int = 0,
        limit: int = 10,
    ) -> list[OrderDTO]:
        if offset < 0 or limit <= 0:
            raise ValidationError("offset must be >= 0 and limit > 0")

        with self._uow as uow:
            orders = uow.orders.list(user_id=user_id, offset=offset, limit=limit)
        return [to_order_dto(order) for order in orders]
