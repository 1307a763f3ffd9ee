"""Read-time projection of stored records onto domain entities.

Two transaction layouts exist on disk:

    current: {id, debtorId, date, amount (signed), comment}
    legacy:  {id, debtorId, date, type: "debt"|"payment", amount (unsigned), note}

Normalization never rewrites the stored record. A record only takes the
current layout when the user edits it and the editor writes it back.
"""

from datetime import date
from typing import Any, Mapping, Optional

from debtbook.domain.entities import Client, Transaction
from debtbook.utils.amount_parser import to_whole_units
from debtbook.utils.date_parser import truncate_to_day

DEBT = "debt"
PAYMENT = "payment"


def _signed_amount(raw: Mapping[str, Any]) -> int:
    amount = to_whole_units(raw.get("amount"))
    kind = raw.get("type")
    if kind == DEBT:
        return abs(amount)
    if kind == PAYMENT:
        return -abs(amount)
    return amount


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _comment(raw: Mapping[str, Any]) -> str:
    value = raw.get("comment")
    if value is None:
        value = raw.get("note")
    return _text(value)


def normalize_transaction(raw: Mapping[str, Any]) -> Transaction:
    """Project a stored transaction record onto the canonical entity.

    Always returns a best-effort result; ``debtor_id`` is None when the
    record names no owner and callers are expected to drop those.
    """
    debtor_id = raw.get("debtorId")
    return Transaction(
        id=str(raw.get("id") or ""),
        debtor_id=str(debtor_id) if debtor_id not in (None, "") else None,
        date=truncate_to_day(raw.get("date")) or date.today(),
        amount=_signed_amount(raw),
        comment=_comment(raw),
    )


def is_visible_client(raw: Mapping[str, Any]) -> bool:
    """Whether a stored client record should appear in any view."""
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return False
    return not raw.get("isArchived")


def normalize_client(raw: Mapping[str, Any]) -> Optional[Client]:
    """Project a stored client record onto the entity.

    Returns None for records with no id or a blank name, which are treated
    as if they did not exist.
    """
    client_id = raw.get("id")
    name = raw.get("name")
    if not client_id or not isinstance(name, str) or not name.strip():
        return None
    created_at = raw.get("createdAt")
    return Client(
        id=str(client_id),
        name=name.strip(),
        created_at=str(created_at) if created_at is not None else None,
        is_archived=bool(raw.get("isArchived")),
        phone=_text(raw.get("phone")),
        note=_text(raw.get("note")),
        due_date=truncate_to_day(raw.get("dueDate")),
    )


def is_overdue(client: Client, balance: int, today: date) -> bool:
    """Whether an active client is past their due date and still owes."""
    if client.is_archived or client.due_date is None:
        return False
    return client.due_date < today and balance > 0
