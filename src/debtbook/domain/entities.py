"""Domain model entities for debtbook.

These are pure data classes representing business concepts, independent of
the stored record shapes. Stored records may come in older layouts; the
normalizer projects them onto these entities at read time.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Client:
    """Counterparty domain entity."""

    id: str
    name: str
    created_at: Optional[str]
    is_archived: bool = False
    phone: str = ""
    note: str = ""
    due_date: Optional[date] = None


@dataclass(frozen=True)
class Transaction:
    """Ledger entry domain entity.

    ``amount`` is signed: positive when the client took (owes more),
    negative when the client gave (paid back).
    """

    id: str
    debtor_id: Optional[str]
    date: date
    amount: int
    comment: str


@dataclass(frozen=True)
class ClientView:
    """Client with derived balance and history, rebuilt on every read."""

    client: Client
    balance: int
    last_date: Optional[date]
    entries: tuple[Transaction, ...]
    is_overdue: bool = False

    @property
    def id(self) -> str:
        return self.client.id

    @property
    def name(self) -> str:
        return self.client.name

    @property
    def is_archived(self) -> bool:
        return self.client.is_archived


@dataclass(frozen=True)
class LedgerStats:
    """Aggregate totals over a built model."""

    client_count: int
    total_owed: int


@dataclass(frozen=True)
class ImportSummary:
    """Outcome of a destructive-replace import."""

    clients: int
    transactions: int
    skipped_clients: int
    skipped_transactions: int


@dataclass(frozen=True)
class CascadeResult:
    """Outcome of deleting a client together with its entries."""

    client_id: str
    transactions_deleted: int
    orphans_left: int
