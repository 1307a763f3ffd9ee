"""SQLAlchemy implementation of the store."""

from typing import Callable, Optional, TypeVar

import structlog
from sqlalchemy import create_engine, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from debtbook.database.base import CLIENTS, COLLECTIONS, TRANSACTIONS, Record, Store
from debtbook.database.models import Client, Transaction
from debtbook.database.mappers import client_row_from_record, transaction_row_from_record
from debtbook.database.schema import upgrade_schema
from debtbook.domain.errors import StoreUnavailable, ValidationError

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_ROW_TYPES = {CLIENTS: Client, TRANSACTIONS: Transaction}
_ROW_BUILDERS = {CLIENTS: client_row_from_record, TRANSACTIONS: transaction_row_from_record}


class SQLAlchemyStore(Store):
    """SQLAlchemy-based implementation of the Store interface."""

    def __init__(self, database_url: str):
        """Initialize the store without touching the database.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self._engine: Optional[Engine] = None
        self.session_factory: Optional[sessionmaker[Session]] = None

    def _open(self) -> sessionmaker[Session]:
        """Open the database and upgrade its schema on first use."""
        if self.session_factory is not None:
            return self.session_factory
        try:
            engine = create_engine(self.database_url, echo=False)
            previous = upgrade_schema(engine)
        except SQLAlchemyError as exc:
            raise StoreUnavailable(f"Cannot open store at {self.database_url}: {exc}") from exc
        self._engine = engine
        self.session_factory = sessionmaker(bind=engine)
        logger.debug("store_opened", url=self.database_url, upgraded_from=previous)
        return self.session_factory

    def _run(self, action: str, work: Callable[[Session], T]) -> T:
        """Run one unit of work in its own session."""
        # A fresh session per call so reads never come from a stale identity map
        with self._open()() as session:
            try:
                return work(session)
            except SQLAlchemyError as exc:
                session.rollback()
                logger.error("store_failure", action=action, error=str(exc))
                raise StoreUnavailable(f"Store {action} failed: {exc}") from exc

    @staticmethod
    def _row_type(collection: str):
        if collection not in COLLECTIONS:
            raise ValueError(f"Unknown collection '{collection}'")
        return _ROW_TYPES[collection]

    def connect(self) -> None:
        """Connect to the database."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the database."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            self.session_factory = None

    def initialize_schema(self) -> None:
        """Open the store, creating or upgrading the schema."""
        self._open()

    def read_all(self, collection: str) -> list[Record]:
        """Return every record in a collection, as stored."""
        row_type = self._row_type(collection)

        def work(session: Session) -> list[Record]:
            rows = session.scalars(select(row_type)).all()
            return [dict(row.payload) for row in rows]

        return self._run("read", work)

    def get(self, collection: str, key: str) -> Optional[Record]:
        """Return one record by primary key, or None."""
        row_type = self._row_type(collection)

        def work(session: Session) -> Optional[Record]:
            row = session.get(row_type, key)
            return None if row is None else dict(row.payload)

        return self._run("read", work)

    def upsert(self, collection: str, record: Record) -> None:
        """Insert or fully replace a record by its ``id``."""
        self._row_type(collection)
        record_id = record.get("id")
        if not isinstance(record_id, str) or not record_id:
            raise ValidationError("Record must carry a non-empty string id")
        row = _ROW_BUILDERS[collection](record)

        def work(session: Session) -> None:
            session.merge(row)
            session.commit()

        self._run("write", work)

    def delete(self, collection: str, key: str) -> None:
        """Delete a record by primary key. Missing keys are a no-op."""
        row_type = self._row_type(collection)

        def work(session: Session) -> None:
            row = session.get(row_type, key)
            if row is None:
                return
            session.delete(row)
            session.commit()

        self._run("delete", work)
