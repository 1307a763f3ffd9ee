"""Client domain service."""

from typing import Any, Optional

import structlog

from debtbook.database.base import CLIENTS, TRANSACTIONS, Store
from debtbook.domain.autosave import ClientDraft
from debtbook.domain.entities import CascadeResult, Client as ClientEntity
from debtbook.domain.errors import (
    NotFoundError,
    StoreUnavailable,
    ValidationError,
    client_name_required,
    client_not_found,
)
from debtbook.domain.normalizer import normalize_client

logger = structlog.get_logger(__name__)


class ClientService:
    """Service for managing clients outside an autosave session."""

    def __init__(self, store: Store):
        """Initialize client service.

        Args:
            store: Store instance
        """
        self.store = store

    def create_client(self, name: str, **details: Any) -> str:
        """Create a new client.

        Args:
            name: Display name
            details: Optional phone, note and due_date

        Returns:
            Client ID

        Raises:
            ValidationError: If the name is blank
        """
        draft = ClientDraft()
        draft.update(name=name, **details)
        if not draft.has_content():
            raise ValidationError(client_name_required())
        self.store.upsert(CLIENTS, draft.payload())
        logger.info("client_created", client_id=draft.id)
        return draft.id

    def get_client(self, client_id: str) -> Optional[ClientEntity]:
        """Get client by ID.

        Returns:
            Client entity, or None if missing or nameless
        """
        record = self.store.get(CLIENTS, client_id)
        if record is None:
            return None
        return normalize_client(record)

    def list_clients(self, include_archived: bool = False) -> list[ClientEntity]:
        """List clients ordered by name.

        Args:
            include_archived: Also return archived clients
        """
        clients = []
        for record in self.store.read_all(CLIENTS):
            client = normalize_client(record)
            if client is None:
                continue
            if client.is_archived and not include_archived:
                continue
            clients.append(client)
        clients.sort(key=lambda c: (c.name.casefold(), c.id))
        return clients

    def _require_record(self, client_id: str) -> dict:
        record = self.store.get(CLIENTS, client_id)
        if record is None:
            raise NotFoundError(client_not_found(client_id))
        return record

    def update_client(self, client_id: str, **changes: Any) -> None:
        """Change name, phone, note or due date, keeping every other stored field.

        Raises:
            NotFoundError: If the client does not exist
            ValidationError: If the name would become blank
        """
        draft = ClientDraft.from_record(self._require_record(client_id))
        draft.update(**changes)
        if not draft.has_content():
            raise ValidationError(client_name_required())
        self.store.upsert(CLIENTS, draft.payload())

    def rename_client(self, client_id: str, name: str) -> None:
        """Rename a client."""
        self.update_client(client_id, name=name)

    def set_archived(self, client_id: str, archived: bool) -> None:
        """Archive or restore a client. Archived clients drop out of every view.

        Raises:
            NotFoundError: If the client does not exist
        """
        record = self._require_record(client_id)
        record["isArchived"] = bool(archived)
        self.store.upsert(CLIENTS, record)

    def delete_client(self, client_id: str) -> CascadeResult:
        """Delete a client and all of its entries.

        Entries are deleted one at a time before the client. An entry that
        fails to delete is left behind as an orphan, which views ignore; the
        cascade carries on and the client itself is still deleted.

        Raises:
            NotFoundError: If the client does not exist
            StoreUnavailable: If the client record itself cannot be deleted
        """
        self._require_record(client_id)

        deleted = 0
        orphans = 0
        for record in self.store.read_all(TRANSACTIONS):
            if record.get("debtorId") != client_id:
                continue
            try:
                self.store.delete(TRANSACTIONS, str(record["id"]))
                deleted += 1
            except StoreUnavailable as exc:
                orphans += 1
                logger.warning(
                    "cascade_delete_failed",
                    client_id=client_id,
                    entry_id=record.get("id"),
                    error=str(exc),
                )

        self.store.delete(CLIENTS, client_id)
        logger.info("client_deleted", client_id=client_id, entries=deleted, orphans=orphans)
        return CascadeResult(client_id=client_id, transactions_deleted=deleted, orphans_left=orphans)
