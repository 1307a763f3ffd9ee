"""Export the whole ledger to a portable JSON document and restore it.

Document layout::

    {
        "version": 2,
        "exportedAt": "2024-05-01T10:00:00+00:00",
        "clients": [{"id": ..., "name": ..., "createdAt": ...}],
        "tx": [{"id": ..., "debtorId": ..., "date": "YYYY-MM-DD", "amount": 500, "comment": ""}]
    }

Version 1 documents named the client list ``debtors`` and stored entries in
the legacy layout; both are still accepted on import.
"""

import json
from dataclasses import replace
from datetime import datetime, UTC
from typing import Any

import structlog

from debtbook.database.base import CLIENTS, TRANSACTIONS, Record, Store
from debtbook.database.mappers import transaction_to_record
from debtbook.domain.entities import ImportSummary
from debtbook.domain.errors import ValidationError, invalid_document
from debtbook.domain.normalizer import normalize_transaction

logger = structlog.get_logger(__name__)

EXPORT_VERSION = 2


class TransferCodec:
    """Serializes the full dataset and restores it by destructive replace."""

    def __init__(self, store: Store):
        """Initialize transfer codec.

        Args:
            store: Store instance
        """
        self.store = store

    def export(self) -> dict[str, Any]:
        """Build the portable document for everything currently stored.

        Clients are exported as stored, minus archived ones. Entries are
        exported in the canonical layout; entries with no owner are left out.
        """
        clients = [dict(raw) for raw in self.store.read_all(CLIENTS) if not raw.get("isArchived")]
        entries = []
        for raw in self.store.read_all(TRANSACTIONS):
            txn = normalize_transaction(raw)
            if txn.debtor_id is None:
                continue
            entries.append(transaction_to_record(txn))
        return {
            "version": EXPORT_VERSION,
            "exportedAt": datetime.now(UTC).isoformat(),
            "clients": clients,
            "tx": entries,
        }

    def import_document(self, document: Any) -> ImportSummary:
        """Replace everything stored with the contents of a document.

        This is not a merge: every existing client and entry is deleted
        first. Importing the same document twice leaves the same state.

        Args:
            document: Parsed document (see module docstring)

        Returns:
            Counts of written and skipped records

        Raises:
            ValidationError: If the document is malformed. Nothing is written.
        """
        clients_in, entries_in = _validate(document)

        clients: list[Record] = []
        client_ids: set[str] = set()
        skipped_clients = 0
        for raw in clients_in:
            if not isinstance(raw, dict):
                skipped_clients += 1
                continue
            client_id = str(raw.get("id") or "").strip()
            name = raw.get("name")
            if not client_id or not isinstance(name, str) or not name.strip():
                skipped_clients += 1
                continue
            record = dict(raw)
            record["id"] = client_id
            clients.append(record)
            client_ids.add(client_id)

        entries: list[Record] = []
        skipped_entries = 0
        for raw in entries_in:
            if not isinstance(raw, dict):
                skipped_entries += 1
                continue
            txn = normalize_transaction(raw)
            entry_id = txn.id.strip()
            debtor_id = (txn.debtor_id or "").strip()
            if not entry_id or debtor_id not in client_ids:
                skipped_entries += 1
                continue
            entries.append(transaction_to_record(replace(txn, id=entry_id, debtor_id=debtor_id)))

        for raw in self.store.read_all(TRANSACTIONS):
            self.store.delete(TRANSACTIONS, str(raw["id"]))
        for raw in self.store.read_all(CLIENTS):
            self.store.delete(CLIENTS, str(raw["id"]))

        for record in clients:
            self.store.upsert(CLIENTS, record)
        for record in entries:
            self.store.upsert(TRANSACTIONS, record)

        summary = ImportSummary(
            clients=len(clients),
            transactions=len(entries),
            skipped_clients=skipped_clients,
            skipped_transactions=skipped_entries,
        )
        logger.info(
            "import_replaced",
            clients=summary.clients,
            transactions=summary.transactions,
            skipped_clients=skipped_clients,
            skipped_transactions=skipped_entries,
        )
        return summary

    @staticmethod
    def dumps(document: dict[str, Any]) -> str:
        """Render a document as JSON text."""
        return json.dumps(document, ensure_ascii=False, indent=2)

    @staticmethod
    def loads(text: str) -> Any:
        """Parse JSON text into a document.

        Raises:
            ValidationError: If the text is not JSON
        """
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(invalid_document(f"not JSON ({e.msg})"))


def _validate(document: Any) -> tuple[list, list]:
    if not isinstance(document, dict):
        raise ValidationError(invalid_document("expected an object"))
    clients = document.get("clients")
    if clients is None:
        clients = document.get("debtors")
    if not isinstance(clients, list):
        raise ValidationError(invalid_document("'clients' must be a list"))
    entries = document.get("tx")
    if not isinstance(entries, list):
        raise ValidationError(invalid_document("'tx' must be a list"))
    return clients, entries
