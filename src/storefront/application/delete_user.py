"""Application service: Delete User use case.

Orders placed by the user stay in place with no owner; their items,
prices and the stock they consumed are history and are not touched.
"""

from __future__ import annotations

from storefront.domain.repository.unit_of_work import UnitOfWork


class DeleteUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> None:
        with self._uow as uow:
            uow.users.delete(user_id)
            uow.commit()
