import json
from contextlib import contextmanager
from datetime import datetime
from typing import Optional

import pytz
from peewee import Database, DatabaseProxy, Model, PeeweeException, SqliteDatabase, TextField
from playhouse.pool import PooledPostgresqlDatabase

from core.exceptions import StoreError
from core.logging import get_logger
from core.settings import settings

# Bound to a concrete database by init_db()
db = DatabaseProxy()


def utc_now() -> datetime:
    # Stored naive, always UTC
    return datetime.now(pytz.utc).replace(tzinfo=None)


class JSONField(TextField):
    """Stores any JSON-serialisable value as text."""

    def db_value(self, value):
        if value is None:
            return None
        return json.dumps(value)

    def python_value(self, value):
        if value is None:
            return None
        return json.loads(value)


class BaseModel(Model):
    class Meta:
        database = db


@contextmanager
def store_errors(operation: str, **context):
    """Log a failed store call with context and re-raise it as StoreError."""
    try:
        yield
    except PeeweeException as e:
        get_logger("store").error("store_error", operation=operation, error=str(e), **context)
        raise StoreError(f"{operation} failed") from e


def _build_database() -> Database:
    if settings.db_engine == "sqlite":
        return SqliteDatabase(settings.sqlite_path, pragmas={"foreign_keys": 1})

    return PooledPostgresqlDatabase(
        settings.db_name,
        user=settings.db_user,
        password=settings.db_password,
        host=settings.db_host,
        port=settings.db_port,
        max_connections=settings.db_max_connections,
        stale_timeout=300,
        timeout=10,
    )


def init_db(database: Optional[Database] = None) -> Database:
    """
    Bind the models to a database and create missing tables.

    Args:
        database: Database to use. Built from settings when omitted.

    Returns:
        The database the proxy now points at
    """
    database = database or _build_database()
    db.initialize(database)

    # Import all models to register them
    from db.models import ALL_MODELS

    db.connect(reuse_if_open=True)
    db.create_tables(ALL_MODELS, safe=True)

    get_logger().info("database_initialized", engine=type(database).__name__)
    return database


def close_db() -> None:
    """Close database connection."""
    if db.obj is not None and not db.is_closed():
        db.close()
