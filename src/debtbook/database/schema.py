"""Additive schema upgrades for the local store.

Version history:
    1. Tables ``debtors`` and ``tx`` (written by the first release).
    2. Tables ``clients`` and ``transactions`` with JSON payloads, plus
       ``store_meta`` to record the version.

Upgrades only ever create what is missing. Tables and indexes that already
exist, including the version 1 tables, are left untouched.
"""

from typing import Optional

import structlog
from sqlalchemy import inspect, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from debtbook.database.models import Base, StoreMeta

logger = structlog.get_logger(__name__)

SCHEMA_VERSION = 2
VERSION_KEY = "schema_version"


def table_exists(engine: Engine, table_name: str) -> bool:
    """Check if a table exists in the database."""
    return inspect(engine).has_table(table_name)


def index_exists(engine: Engine, table_name: str, index_name: str) -> bool:
    """Check if an index exists on a table."""
    indexes = inspect(engine).get_indexes(table_name)
    return index_name in [idx["name"] for idx in indexes]


def get_schema_version(engine: Engine) -> int:
    """Return the stamped schema version, or 0 if the store has none."""
    if not table_exists(engine, StoreMeta.__tablename__):
        return 0
    with Session(engine) as session:
        value = session.scalar(select(StoreMeta.value).where(StoreMeta.key == VERSION_KEY))
    if value is None:
        return 0
    try:
        return int(value)
    except ValueError:
        return 0


def _stamp_version(engine: Engine, version: int) -> None:
    with Session(engine) as session:
        session.merge(StoreMeta(key=VERSION_KEY, value=str(version)))
        session.commit()


def upgrade_schema(engine: Engine) -> Optional[int]:
    """Bring the store up to SCHEMA_VERSION.

    Args:
        engine: SQLAlchemy engine bound to the store

    Returns:
        The version found before the upgrade, or None if nothing had to change
    """
    current = get_schema_version(engine)
    if current > SCHEMA_VERSION:
        logger.warning(
            "schema_newer_than_code", found=current, supported=SCHEMA_VERSION
        )

    changed = False
    for table in Base.metadata.sorted_tables:
        if not table_exists(engine, table.name):
            table.create(engine)
            changed = True
            logger.info("table_created", table=table.name)
            continue
        for index in table.indexes:
            if not index_exists(engine, table.name, index.name):
                index.create(engine)
                changed = True
                logger.info("index_created", table=table.name, index=index.name)

    if current < SCHEMA_VERSION:
        _stamp_version(engine, SCHEMA_VERSION)
        changed = True
        logger.info("schema_upgraded", from_version=current, to_version=SCHEMA_VERSION)

    return current if changed else None
