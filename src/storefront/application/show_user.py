"""Application service: Show / List Users use cases (queries)."""

from __future__ import annotations

from storefront.domain.exceptions import UserNotFoundError, ValidationError
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork


class ShowUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, user_id: str) -> User:
        with self._uow as uow:
            user = uow.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user


class ListUsersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, offset: int = 0, limit: int = 10, order: str = "newest") -> list[User]:
        if order not in ("newest", "oldest"):
            raise ValidationError(f"Unknown order '{order}' (expected newest or oldest)")
        if offset < 0 or limit <= 0:
            raise ValidationError("offset must be >= 0 and limit > 0")

        with self._uow as uow:
            return uow.users.list(
                offset=offset, limit=limit, newest_first=(order == "newest")
            )
