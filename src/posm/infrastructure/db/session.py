from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url

from posm.config import get_settings
from posm.infrastructure.db.models.menu import Base
from posm.infrastructure.db.models.recipe import RecipeModel  # noqa: F401  registers tables

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache(maxsize=8)
def _build_engine(database_url: str) -> Engine:
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite":
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(database_url, pool_pre_ping=True)


def get_engine() -> Engine:
    return _build_engine(get_settings().database_url)


def create_schema(engine: Engine | None = None) -> None:
    target = engine or get_engine()
    Base.metadata.create_all(target)
    logger.info("schema_ready", extra={"tables": sorted(Base.metadata.tables)})


def ping_database() -> bool:
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
