"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Settings come from the environment:

    STOREFRONT_DATABASE_URL  SQLAlchemy URL (default: SQLite file in ./data)
    STOREFRONT_DB_TIMEOUT    seconds a SQLite writer waits for the lock
    STOREFRONT_SQL_ECHO      "1"/"true" to log every SQL statement
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from sqlalchemy import Engine

from storefront.infrastructure.persistence.database import build_engine
from storefront.infrastructure.persistence.sql_unit_of_work import SqlUnitOfWork

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class Settings:
    database_url: str
    lock_timeout: float = 30.0
    sql_echo: bool = False

    @staticmethod
    def from_env() -> Settings:
        url = os.environ.get("STOREFRONT_DATABASE_URL")
        if not url:
            _DATA_DIR.mkdir(parents=True, exist_ok=True)
            url = f"sqlite:///{_DATA_DIR / 'storefront.db'}"

        raw_timeout = os.environ.get("STOREFRONT_DB_TIMEOUT", "30")
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(f"STOREFRONT_DB_TIMEOUT must be a number, got {raw_timeout!r}")

        echo = os.environ.get("STOREFRONT_SQL_ECHO", "").lower() in ("1", "true", "yes")
        return Settings(database_url=url, lock_timeout=timeout, sql_echo=echo)


@lru_cache(maxsize=None)
def _engine_for(settings: Settings) -> Engine:
    return build_engine(
        settings.database_url,
        lock_timeout=settings.lock_timeout,
        echo=settings.sql_echo,
    )


def unit_of_work() -> SqlUnitOfWork:
    return SqlUnitOfWork(_engine_for(Settings.from_env()))
