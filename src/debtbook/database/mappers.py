"""Mapper functions between stored records, SQLAlchemy rows and domain entities.

Stored records keep whatever layout wrote them. These helpers extract the
indexed lookup columns for the rows and render domain entities back into the
canonical record layout.
"""

from typing import Any, Mapping

from debtbook.domain import entities as domain
from debtbook.database.models import (
    Client as ORMClient,
    Transaction as ORMTransaction,
)


def _text_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def client_row_from_record(record: Mapping[str, Any]) -> ORMClient:
    """Build a SQLAlchemy Client row holding the record verbatim."""
    return ORMClient(
        id=str(record["id"]),
        name=str(record.get("name") or ""),
        payload=dict(record),
    )


def transaction_row_from_record(record: Mapping[str, Any]) -> ORMTransaction:
    """Build a SQLAlchemy Transaction row holding the record verbatim."""
    return ORMTransaction(
        id=str(record["id"]),
        debtor_id=_text_or_none(record.get("debtorId")),
        date=_text_or_none(record.get("date")),
        payload=dict(record),
    )


def transaction_to_record(transaction: domain.Transaction) -> dict[str, Any]:
    """Render a domain Transaction in the canonical stored layout."""
    return {
        "id": transaction.id,
        "debtorId": transaction.debtor_id,
        "date": transaction.date.isoformat(),
        "amount": transaction.amount,
        "comment": transaction.comment,
    }
