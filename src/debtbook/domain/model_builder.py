"""Derive per-client balances and history from the stored records."""

from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

import structlog

from debtbook.database.base import CLIENTS, TRANSACTIONS, Store
from debtbook.domain.entities import ClientView, LedgerStats, Transaction
from debtbook.domain.normalizer import (
    is_overdue,
    is_visible_client,
    normalize_client,
    normalize_transaction,
)

logger = structlog.get_logger(__name__)


class ModelBuilder:
    """Builds the read model from scratch on every call.

    Nothing is cached between calls, so the result can never drift from what
    is stored.
    """

    def __init__(self, store: Store):
        """Initialize model builder.

        Args:
            store: Store instance
        """
        self.store = store

    def build_model(self, include_archived: bool = False, today: Optional[date] = None) -> list[ClientView]:
        """Join clients with their entries and compute balances.

        Args:
            include_archived: Also build views for archived clients
            today: Reference day for the overdue flag (defaults to today)

        Returns:
            Client views ordered by descending absolute balance, then by name
        """
        raw_clients = self.store.read_all(CLIENTS)
        raw_transactions = self.store.read_all(TRANSACTIONS)

        clients = {}
        for raw in raw_clients:
            if not include_archived and not is_visible_client(raw):
                continue
            client = normalize_client(raw)
            if client is not None:
                clients[client.id] = client

        groups: dict[str, list[Transaction]] = defaultdict(list)
        orphans = 0
        for raw in raw_transactions:
            txn = normalize_transaction(raw)
            if txn.debtor_id is None or txn.debtor_id not in clients:
                orphans += 1
                continue
            groups[txn.debtor_id].append(txn)

        if orphans:
            logger.debug("orphaned_entries_skipped", count=orphans)

        today = today or date.today()
        views = []
        for client_id, client in clients.items():
            # sorted() is stable with reverse=True, so same-day entries keep stored order
            entries = tuple(sorted(groups.get(client_id, []), key=lambda t: t.date, reverse=True))
            balance = sum(t.amount for t in entries)
            views.append(
                ClientView(
                    client=client,
                    balance=balance,
                    last_date=entries[0].date if entries else None,
                    entries=entries,
                    is_overdue=is_overdue(client, balance, today),
                )
            )

        views.sort(key=lambda v: (-abs(v.balance), v.name.casefold(), v.id))
        return views


def build_model(store: Store, include_archived: bool = False) -> list[ClientView]:
    """Build the read model for a store."""
    return ModelBuilder(store).build_model(include_archived=include_archived)


def compute_stats(views: Iterable[ClientView]) -> LedgerStats:
    """Count active clients and total what they owe the user (positive balances).

    Archived clients are left out of both figures.
    """
    count = 0
    owed = 0
    for view in views:
        if view.is_archived:
            continue
        count += 1
        if view.balance > 0:
            owed += view.balance
    return LedgerStats(client_count=count, total_owed=owed)
