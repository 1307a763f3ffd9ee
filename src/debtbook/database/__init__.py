"""Storage layer for debtbook."""

from debtbook.database.base import CLIENTS, TRANSACTIONS, Store
from debtbook.database.factories import create_sqlite_store

__all__ = ["CLIENTS", "TRANSACTIONS", "Store", "create_sqlite_store"]
