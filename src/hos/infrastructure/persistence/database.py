"""Engine, session factory and schema initialisation.

``init_database`` is called once at process start-up, before any command
runs.  It is idempotent: tables are created only if absent and the sample
menu is loaded only into an empty catalog.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from hos.infrastructure.persistence.sample_menu import sample_menu
from hos.infrastructure.persistence.sql_menu_repository import SqlMenuRepository
from hos.infrastructure.persistence.tables import Base

logger = logging.getLogger(__name__)


def make_engine(db_url: str) -> Engine:
    engine = create_engine(db_url, future=True)
    if engine.dialect.name == "sqlite":
        _ensure_sqlite_dir(engine)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _ensure_sqlite_dir(engine: Engine) -> None:
    database = engine.url.database
    if database and database != ":memory:":
        Path(database).parent.mkdir(parents=True, exist_ok=True)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_database(engine: Engine) -> None:
    """Create the schema if absent and seed the starter menu."""
    Base.metadata.create_all(engine)

    menu_repo = SqlMenuRepository(make_session_factory(engine))
    if menu_repo.count() == 0:
        seeded = sample_menu()
        menu_repo.replace_version(seeded[0].version, seeded)
        logger.info(f"Seeded sample menu with {len(seeded)} items")
