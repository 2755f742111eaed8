"""User aggregate: the customer that owns orders."""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront.domain.exceptions import ValidationError

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


@dataclass
class User:

    id: str
    email: str
    first_name: str
    last_name: str
    address: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        email: str,
        first_name: str,
        last_name: str,
        address: str = "",
    ) -> User:
        return User(
            id=str(uuid.uuid4()),
            email=_normalise_email(email),
            first_name=_required_name(first_name, "First name"),
            last_name=_required_name(last_name, "Last name"),
            address=(address or "").strip(),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    # --- Mutations ------------------------------------------------------------

    def change_email(self, email: str) -> None:
        self.email = _normalise_email(email)

    def rename(self, first_name: str | None = None, last_name: str | None = None) -> None:
        if first_name is not None:
            self.first_name = _required_name(first_name, "First name")
        if last_name is not None:
            self.last_name = _required_name(last_name, "Last name")

    def move_to(self, address: str) -> None:
        self.address = (address or "").strip()


def _normalise_email(email: str) -> str:
    email = (email or "").strip().lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"Invalid email address: {email!r}")
    return email


def _required_name(value: str, label: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()
