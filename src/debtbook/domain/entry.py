"""Ledger entry domain service."""

from typing import Callable, Optional

from debtbook.database.base import CLIENTS, TRANSACTIONS, Store
from debtbook.domain.autosave import AutosaveController, EntryDraft, TOOK
from debtbook.domain.entities import Transaction as TransactionEntity
from debtbook.domain.errors import NotFoundError, client_not_found, entry_not_found
from debtbook.domain.normalizer import normalize_transaction


class EntryService:
    """Service for recording, editing and deleting ledger entries."""

    def __init__(self, store: Store, on_change: Optional[Callable[[], None]] = None):
        """Initialize entry service.

        Args:
            store: Store instance
            on_change: Passed to every editing session it opens
        """
        self.store = store
        self.on_change = on_change

    def get_entry(self, entry_id: str) -> Optional[TransactionEntity]:
        """Get a normalized entry by ID, or None."""
        record = self.store.get(TRANSACTIONS, entry_id)
        if record is None:
            return None
        return normalize_transaction(record)

    def open_new(self, client_id: str, kind: str = TOOK, delay: Optional[float] = None) -> AutosaveController:
        """Start an editing session for a new entry against a client.

        Raises:
            NotFoundError: If the client does not exist
        """
        if self.store.get(CLIENTS, client_id) is None:
            raise NotFoundError(client_not_found(client_id))
        draft = EntryDraft(debtor_id=client_id, kind=kind)
        return AutosaveController(self.store, draft, is_new=True, delay=delay, on_change=self.on_change)

    def open_existing(self, entry_id: str, delay: Optional[float] = None) -> AutosaveController:
        """Start an editing session for an entry that is already stored.

        The stored record may use the legacy layout; the session writes it
        back in the canonical layout.

        Raises:
            NotFoundError: If the entry does not exist
        """
        entry = self.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(entry_not_found(entry_id))
        draft = EntryDraft.from_transaction(entry)
        return AutosaveController(self.store, draft, is_new=False, delay=delay, on_change=self.on_change)

    def delete_entry(self, entry_id: str) -> None:
        """Delete an entry. Deleting a missing entry does nothing."""
        self.store.delete(TRANSACTIONS, entry_id)
