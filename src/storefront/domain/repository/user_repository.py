"""Abstract repository for User aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from storefront.domain.model.user import User


class UserRepository(ABC):

    @abstractmethod
    def get_by_id(self, user_id: str) -> User | None:
        """Return a user by ID, or None if not found."""

    @abstractmethod
    def get_by_email(self, email: str) -> User | None:
        """Return a user by (case-insensitive) email, or None."""

    @abstractmethod
    def list(self, offset: int = 0, limit: int = 10, newest_first: bool = True) -> list[User]:
        """Return one page of users ordered by creation time."""

    @abstractmethod
    def add(self, user: User) -> None:
        """Insert a new user.  Raises ConflictError on a duplicate email."""

    @abstractmethod
    def save(self, user: User) -> None:
        """Persist the profile fields of an existing user.

        Raises ConflictError when the new email belongs to someone else.
        """

    @abstractmethod
    def delete(self, user_id: str) -> None:
        """Remove a user; their orders remain with no owner."""
