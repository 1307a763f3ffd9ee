"""Abstract store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

CLIENTS = "clients"
TRANSACTIONS = "transactions"
COLLECTIONS = (CLIENTS, TRANSACTIONS)

Record = dict[str, Any]


class Store(ABC):
    """Abstract key/value store with two named collections.

    Records are plain dicts keyed by their ``id``. Every operation is atomic
    on its own; nothing spans more than one record.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Create or upgrade the on-disk schema. Safe to call repeatedly."""
        pass

    @abstractmethod
    def read_all(self, collection: str) -> list[Record]:
        """Return every record in a collection, as stored."""
        pass

    @abstractmethod
    def get(self, collection: str, key: str) -> Optional[Record]:
        """Return one record by primary key, or None."""
        pass

    @abstractmethod
    def upsert(self, collection: str, record: Record) -> None:
        """Insert or fully replace a record by its ``id``. Fields are never merged."""
        pass

    @abstractmethod
    def delete(self, collection: str, key: str) -> None:
        """Delete a record by primary key. Missing keys are a no-op."""
        pass
