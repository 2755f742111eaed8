"""Column <-> domain value conversions shared by the SQL repositories."""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

from storefront.domain.model.value_objects import Money


def as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def to_money(amount, currency: str) -> Money:
    return Money(Decimal(str(amount)), currency)
