"""Debounced autosave for the record currently open in an editor.

An editing session owns one draft (a client being added, or a ledger entry
being created or edited). Field edits are coalesced with a short timer and
written at most once per distinct content state.

A session moves between three states:

    UNSAVED_EMPTY  nothing durable, and the draft has no required content
    UNSAVED_DIRTY  the draft differs from what was last written
    SAVED          the store holds exactly the draft's current content

For a brand-new record the first write only happens once the draft has
content. If the content is cleared again afterwards, the earlier write is
deleted so no empty placeholder is left behind. Records that existed before
the session started are always written back, never deleted.
"""

import asyncio
import datetime
import hashlib
import json
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Optional

import structlog

from debtbook import config
from debtbook.database.base import CLIENTS, TRANSACTIONS, Record, Store
from debtbook.database.mappers import transaction_to_record
from debtbook.domain.entities import Transaction
from debtbook.domain.errors import StoreUnavailable
from debtbook.utils.amount_parser import digits_amount, to_whole_units
from debtbook.utils.date_parser import parse_date, truncate_to_day

logger = structlog.get_logger(__name__)

TOOK = "took"
GAVE = "gave"
KINDS = (TOOK, GAVE)


class AutosaveState(Enum):
    UNSAVED_EMPTY = "unsaved-empty"
    UNSAVED_DIRTY = "unsaved-dirty"
    SAVED = "saved"


def new_id() -> str:
    """Return a fresh opaque record id."""
    return uuid.uuid4().hex


def utc_now_iso() -> str:
    return datetime.datetime.now(datetime.UTC).isoformat()


def fingerprint(payload: Record) -> str:
    """Content hash of a payload, independent of key order."""
    blob = json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(blob.encode("utf-8")).hexdigest()


class Draft(ABC):
    """In-memory field values of a record being edited."""

    collection: ClassVar[str]
    editable: ClassVar[tuple[str, ...]]

    id: str

    @abstractmethod
    def payload(self) -> Record:
        """Canonical record to store for the current field values."""

    @abstractmethod
    def has_content(self) -> bool:
        """Whether the required content is filled in."""

    def _coerce(self, name: str, value: Any) -> Any:
        return value

    def update(self, **changes: Any) -> None:
        """Apply field values from the editor."""
        unknown = sorted(set(changes) - set(self.editable))
        if unknown:
            raise ValueError(f"Unknown draft field(s): {', '.join(unknown)}")
        for name, value in changes.items():
            setattr(self, name, self._coerce(name, value))


@dataclass
class ClientDraft(Draft):
    """Client being added or edited. Only the name is required.

    Phone, note and due date live in ``extra`` under their stored keys, so a
    record that is opened and written back keeps fields it never touched
    exactly as they were.
    """

    collection: ClassVar[str] = CLIENTS
    editable: ClassVar[tuple[str, ...]] = ("name", "phone", "note", "due_date")

    id: str = field(default_factory=new_id)
    name: str = ""
    created_at: Optional[str] = field(default_factory=utc_now_iso)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_record(cls, record: Record) -> "ClientDraft":
        """Open an existing client record, keeping keys the editor does not know."""
        extra = {k: v for k, v in record.items() if k not in ("id", "name", "createdAt")}
        return cls(
            id=str(record["id"]),
            name=str(record.get("name") or ""),
            created_at=record.get("createdAt"),
            extra=extra,
        )

    @property
    def phone(self) -> str:
        return str(self.extra.get("phone") or "")

    @phone.setter
    def phone(self, value: str) -> None:
        self._set_extra("phone", value.strip() or None)

    @property
    def note(self) -> str:
        return str(self.extra.get("note") or "")

    @note.setter
    def note(self, value: str) -> None:
        self._set_extra("note", value.strip() or None)

    @property
    def due_date(self) -> Optional[datetime.date]:
        return truncate_to_day(self.extra.get("dueDate"))

    @due_date.setter
    def due_date(self, value: Optional[datetime.date]) -> None:
        day = truncate_to_day(value)
        self._set_extra("dueDate", day.isoformat() if day is not None else None)

    def _set_extra(self, key: str, value: Any) -> None:
        if value is None:
            self.extra.pop(key, None)
        else:
            self.extra[key] = value

    def _coerce(self, name: str, value: Any) -> Any:
        if name == "due_date":
            if isinstance(value, str):
                return parse_date(value) if value.strip() else None
            return value
        return "" if value is None else str(value)

    def payload(self) -> Record:
        record = dict(self.extra)
        record["id"] = self.id
        record["name"] = self.name.strip()
        if self.created_at is not None:
            record["createdAt"] = self.created_at
        return record

    def has_content(self) -> bool:
        return bool(self.name.strip())


@dataclass
class EntryDraft(Draft):
    """Ledger entry being recorded against a client.

    ``amount`` is the magnitude typed by the user; ``kind`` picks the sign.
    """

    collection: ClassVar[str] = TRANSACTIONS
    editable: ClassVar[tuple[str, ...]] = ("kind", "amount", "date", "comment")

    debtor_id: str
    id: str = field(default_factory=new_id)
    kind: str = TOOK
    amount: int = 0
    date: datetime.date = field(default_factory=datetime.date.today)
    comment: str = ""

    def __post_init__(self):
        for name in self.editable:
            setattr(self, name, self._coerce(name, getattr(self, name)))

    @classmethod
    def from_transaction(cls, transaction: Transaction) -> "EntryDraft":
        """Open a normalized entry for editing."""
        return cls(
            debtor_id=transaction.debtor_id or "",
            id=transaction.id,
            kind=GAVE if transaction.amount < 0 else TOOK,
            amount=abs(transaction.amount),
            date=transaction.date,
            comment=transaction.comment,
        )

    def _coerce(self, name: str, value: Any) -> Any:
        if name == "kind":
            if value not in KINDS:
                raise ValueError(f"Entry kind must be one of {', '.join(KINDS)}, got {value!r}")
            return value
        if name == "amount":
            if isinstance(value, str):
                return digits_amount(value)
            return abs(to_whole_units(value))
        if name == "date":
            if isinstance(value, str):
                return parse_date(value) if value.strip() else datetime.date.today()
            return value or datetime.date.today()
        if name == "comment":
            return "" if value is None else str(value)
        return value

    def to_transaction(self) -> Transaction:
        magnitude = abs(int(self.amount))
        return Transaction(
            id=self.id,
            debtor_id=self.debtor_id,
            date=self.date,
            amount=magnitude if self.kind == TOOK else -magnitude,
            comment=self.comment.strip(),
        )

    def payload(self) -> Record:
        return transaction_to_record(self.to_transaction())

    def has_content(self) -> bool:
        return self.amount != 0 or bool(self.comment.strip())


class AutosaveController:
    """Persists one draft continuously while it is being edited."""

    def __init__(
        self,
        store: Store,
        draft: Draft,
        is_new: bool = True,
        delay: Optional[float] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        """Start an editing session.

        Args:
            store: Store instance
            draft: Draft being edited
            is_new: False when the record existed before this session
            delay: Debounce interval in seconds (defaults to config.AUTOSAVE_DELAY)
            on_change: Called after every write or retraction
        """
        self.store = store
        self.draft = draft
        self.is_new = is_new
        self.delay = config.AUTOSAVE_DELAY if delay is None else delay
        self.on_change = on_change
        self.last_error: Optional[StoreUnavailable] = None
        self.saved_at: Optional[datetime.datetime] = None
        self._handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

        if is_new:
            self._persisted = False
            self._last_fingerprint: Optional[str] = None
            self._state = (
                AutosaveState.UNSAVED_DIRTY if draft.has_content() else AutosaveState.UNSAVED_EMPTY
            )
        else:
            self._persisted = True
            self._last_fingerprint = fingerprint(draft.payload())
            self._state = AutosaveState.SAVED

    @property
    def state(self) -> AutosaveState:
        return self._state

    @property
    def persisted(self) -> bool:
        """Whether the record currently exists in the store."""
        return self._persisted

    @property
    def pending(self) -> bool:
        """Whether a debounced write is armed."""
        return self._handle is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def status(self) -> str:
        """Short text for an autosave indicator."""
        if self.last_error is not None:
            return f"error: {self.last_error}"
        if self.is_new and self._state is AutosaveState.UNSAVED_EMPTY:
            return "needs content"
        if self._state is AutosaveState.SAVED and self.saved_at is not None:
            return f"saved {self.saved_at:%H:%M}"
        return "enabled"

    def schedule(self, **changes: Any) -> None:
        """Record field edits and (re)arm the debounce timer.

        Only the state at the end of a burst of edits is written. Without a
        running event loop the edit stays pending until ``flush``.
        """
        if self._closed:
            raise RuntimeError("Editing session is closed")
        self.draft.update(**changes)
        if self.is_new and not self._persisted and not self.draft.has_content():
            self._state = AutosaveState.UNSAVED_EMPTY
        else:
            self._state = AutosaveState.UNSAVED_DIRTY

        self._disarm()
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("autosave_deferred", record_id=self.draft.id)
            return
        self._handle = loop.call_later(self.delay, self._on_timer)

    def flush(self, force: bool = False) -> bool:
        """Write the draft now if its content changed.

        Args:
            force: Write even when the content matches the last write

        Returns:
            True if the store was written to (saved or retracted)

        Raises:
            StoreUnavailable: If the store cannot be written
        """
        self._disarm()
        collection = self.draft.collection

        if self.is_new and not self.draft.has_content():
            if not self._persisted:
                self._state = AutosaveState.UNSAVED_EMPTY
                return False
            try:
                self.store.delete(collection, self.draft.id)
            except StoreUnavailable:
                self._state = AutosaveState.UNSAVED_DIRTY
                raise
            self._state = AutosaveState.UNSAVED_EMPTY
            self._persisted = False
            self._last_fingerprint = None
            self.saved_at = None
            self.last_error = None
            logger.info("autosave_retracted", collection=collection, record_id=self.draft.id)
            self._notify()
            return True

        payload = self.draft.payload()
        digest = fingerprint(payload)
        if not force and digest == self._last_fingerprint:
            self._state = AutosaveState.SAVED
            logger.debug("autosave_skipped", collection=collection, record_id=self.draft.id)
            return False

        try:
            self.store.upsert(collection, payload)
        except StoreUnavailable:
            self._state = AutosaveState.UNSAVED_DIRTY
            raise
        self._persisted = True
        self._last_fingerprint = digest
        self._state = AutosaveState.SAVED
        self.saved_at = datetime.datetime.now()
        self.last_error = None
        logger.info("autosave_written", collection=collection, record_id=self.draft.id)
        self._notify()
        return True

    def set_kind(self, kind: str) -> bool:
        """Switch an entry between took and gave, then write immediately."""
        self.draft.update(kind=kind)
        return self.flush(force=True)

    def close(self) -> bool:
        """End the session, writing whatever is pending."""
        wrote = self.flush(force=True)
        self._closed = True
        return wrote

    def cancel(self) -> None:
        """Disarm the timer without writing."""
        self._disarm()

    def _disarm(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _on_timer(self) -> None:
        self._handle = None
        try:
            self.flush()
        except StoreUnavailable as exc:
            self.last_error = exc
            logger.error("autosave_failed", record_id=self.draft.id, error=str(exc))

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
