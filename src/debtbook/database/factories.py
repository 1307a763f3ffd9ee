"""Store factory functions."""

import os
from typing import Optional

from debtbook import config
from debtbook.database.sqlalchemy_db import SQLAlchemyStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemyStore:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to SQLite database file. If None, checks DEBTBOOK_DB_PATH
            environment variable, then defaults to ~/.debtbook/debtbook.db

    Returns:
        SQLAlchemyStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get(config.DB_PATH_ENV)

    if database_path is None:
        config.DEFAULT_DB_DIR.mkdir(exist_ok=True)
        database_path = str(config.DEFAULT_DB_DIR / config.DEFAULT_DB_NAME)

    return SQLAlchemyStore(f"sqlite:///{database_path}")
