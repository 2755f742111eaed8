"""SQL implementation of UserRepository."""

from __future__ import annotations

from sqlalchemy import Connection, delete, insert, select, update
from sqlalchemy.engine import Row
from sqlalchemy.exc import IntegrityError

from storefront.domain.exceptions import ConflictError, UserNotFoundError
from storefront.domain.model.user import User
from storefront.domain.repository.user_repository import UserRepository
from storefront.infrastructure.persistence._convert import as_utc
from storefront.infrastructure.persistence.tables import users


class SqlUserRepository(UserRepository):

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    # --- UserRepository interface ---------------------------------------------

    def get_by_id(self, user_id: str) -> User | None:
        row = self._conn.execute(select(users).where(users.c.id == user_id)).first()
        return self._to_domain(row) if row is not None else None

    def get_by_email(self, email: str) -> User | None:
        row = self._conn.execute(
            select(users).where(users.c.email == email.strip().lower())
        ).first()
        return self._to_domain(row) if row is not None else None

    def list(self, offset: int = 0, limit: int = 10, newest_first: bool = True) -> list[User]:
        ordering = users.c.created_at.desc() if newest_first else users.c.created_at.asc()
        rows = self._conn.execute(
            select(users).order_by(ordering, users.c.id).offset(offset).limit(limit)
        ).all()
        return [self._to_domain(row) for row in rows]

    def add(self, user: User) -> None:
        try:
            self._conn.execute(insert(users).values(**self._to_raw(user)))
        except IntegrityError as exc:
            raise ConflictError(
                f"User with email '{user.email}' already exists"
            ) from exc

    def save(self, user: User) -> None:
        raw = self._to_raw(user)
        del raw["created_at"]
        try:
            result = self._conn.execute(
                update(users).where(users.c.id == user.id).values(**raw)
            )
        except IntegrityError as exc:
            raise ConflictError(
                f"User with email '{user.email}' already exists"
            ) from exc
        if result.rowcount == 0:
            raise UserNotFoundError(user.id)

    def delete(self, user_id: str) -> None:
        result = self._conn.execute(delete(users).where(users.c.id == user_id))
        if result.rowcount == 0:
            raise UserNotFoundError(user_id)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(user: User) -> dict:
        return {
            "id": user.id,
            "email": user.email,
            "first_name": user.first_name,
            "last_name": user.last_name,
            "address": user.address,
            "created_at": user.created_at,
        }

    @staticmethod
    def _to_domain(row: Row) -> User:
        return User(
            id=row.id,
            email=row.email,
            first_name=row.first_name,
            last_name=row.last_name,
            address=row.address,
            created_at=as_utc(row.created_at),
        )
