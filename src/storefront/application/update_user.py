"""Application service: Update User use case."""

from __future__ import annotations

import logging

from storefront.domain.exceptions import ConflictError, UserNotFoundError, ValidationError
from storefront.domain.model.user import User
from storefront.domain.repository.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


class UpdateUserHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        user_id: str,
        email: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
        address: str | None = None,
    ) -> User:
        """Change any of a user's profile fields; omitted fields stay as they are.

        Orders keep pointing at the same user, so nothing else moves.
        """
        if email is None and first_name is None and last_name is None and address is None:
            raise ValidationError("Nothing to update")

        with self._uow as uow:
            user = uow.users.get_by_id(user_id)
            if user is None:
                raise UserNotFoundError(user_id)

            if email is not None:
                owner = uow.users.get_by_email(email)
                if owner is not None and owner.id != user.id:
                    raise ConflictError(f"User with email '{owner.email}' already exists")
                user.change_email(email)
            user.rename(first_name=first_name, last_name=last_name)
            if address is not None:
                user.move_to(address)

            uow.users.save(user)
            uow.commit()

        logger.info("Updated user %s", user.id)
        return user
