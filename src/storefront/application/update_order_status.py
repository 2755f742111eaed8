"""Application service: Update Order Status use case.

The status is the only mutable part of a placed order.  Items, their
price snapshots and the stock they consumed never change here.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO, to_order_dto
from storefront.domain.exceptions import OrderNotFoundError, ValidationError
from storefront.domain.model.order import OrderStatus
from storefront.domain.repository.unit_of_work import UnitOfWork


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str, status: str) -> OrderDTO:
        try:
            new_status = OrderStatus(status.upper())
        except ValueError:
            choices = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(f"Unknown status '{status}' (expected one of {choices})")

        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            order.advance_to(new_status)
            uow.orders.update_status(order)
            uow.commit()
        return to_order_dto(order)
