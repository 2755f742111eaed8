"""Application service: Add User use case."""

from __future__ import annotations

from storefront.domain.exceptions import ConflictError
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork


class AddUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        email: str,
        first_name: str,
        last_name: str,
        address: str = "",
    ) -> User:
        user = User.create(
            email=email, first_name=first_name, last_name=last_name, address=address
        )
        with self._uow as uow:
            # The unique constraint in the store is what really guards this.
            if uow.users.get_by_email(user.email) is not None:
                raise ConflictError(f"User with email '{user.email}' already exists")
            uow.users.add(user)
            uow.commit()
        return user
