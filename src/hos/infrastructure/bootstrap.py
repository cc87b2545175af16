"""Composition root: wires concrete implementations to domain interfaces.

Handlers and CLI commands get their repositories from here and nowhere else.
"""

from __future__ import annotations

from sqlalchemy.engine import Engine

from hos.infrastructure.config import Settings
from hos.infrastructure.logging_config import configure_logging
from hos.infrastructure.persistence.database import (
    init_database,
    make_engine,
    make_session_factory,
)
from hos.infrastructure.persistence.sql_menu_repository import SqlMenuRepository
from hos.infrastructure.persistence.sql_order_repository import SqlOrderRepository

# One engine per database URL for the life of the process.
_ENGINES: dict[str, Engine] = {}


def settings() -> Settings:
    return Settings.from_env()


def engine() -> Engine:
    db_url = settings().db_url
    if db_url not in _ENGINES:
        _ENGINES[db_url] = make_engine(db_url)
    return _ENGINES[db_url]


def startup() -> Settings:
    """Run once before serving any command: logging, schema, seed data."""
    current = settings()
    configure_logging(current.log_level)
    init_database(engine())
    return current


def order_repository() -> SqlOrderRepository:
    return SqlOrderRepository(make_session_factory(engine()))


def menu_repository() -> SqlMenuRepository:
    return SqlMenuRepository(make_session_factory(engine()))
