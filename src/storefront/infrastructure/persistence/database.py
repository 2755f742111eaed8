"""Engine construction for the relational store."""

from __future__ import annotations

import logging

from sqlalchemy import Engine, create_engine, event

from storefront.infrastructure.persistence.tables import metadata

logger = logging.getLogger(__name__)


def build_engine(
    url: str,
    *,
    lock_timeout: float = 30.0,
    echo: bool = False,
    create_schema: bool = True,
) -> Engine:
    """Create an engine for *url* and make sure the tables exist.

    SQLite needs a few adjustments: foreign keys are off unless switched on
    per connection, writers wait up to *lock_timeout* seconds for the
    database lock instead of failing at once, and pooled connections may be
    checked out by any thread.
    """
    connect_args: dict = {}
    is_sqlite = url.startswith("sqlite")
    if is_sqlite:
        connect_args["timeout"] = lock_timeout
        connect_args["check_same_thread"] = False

    engine = create_engine(url, echo=echo, connect_args=connect_args)

    if is_sqlite:
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    if create_schema:
        metadata.create_all(engine)
        logger.debug("Schema ensured on %s", engine.url.render_as_string(hide_password=True))

    return engine
