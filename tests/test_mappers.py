"""Tests for database mappers."""

from datetime import date

from debtbook.database.models import (
    Client as ORMClient,
    Transaction as ORMTransaction,
)
from debtbook.database.mappers import (
    client_row_from_record,
    transaction_row_from_record,
    transaction_to_record,
)
from debtbook.domain.entities import Transaction


class TestClientMapper:
    """Tests for client row mapping."""

    def test_client_row_keeps_payload_verbatim(self):
        record = {"id": "c1", "name": "Ivan", "createdAt": "2024-01-01", "phone": "+7 900"}
        row = client_row_from_record(record)

        assert isinstance(row, ORMClient)
        assert row.id == "c1"
        assert row.name == "Ivan"
        assert row.payload == record
        assert row.payload is not record

    def test_client_row_without_name(self):
        row = client_row_from_record({"id": 7})
        assert row.id == "7"
        assert row.name == ""


class TestTransactionMapper:
    """Tests for transaction row mapping."""

    def test_transaction_row_extracts_lookup_columns(self):
        record = {"id": "t1", "debtorId": "c1", "date": "2024-03-05", "type": "debt", "amount": 10}
        row = transaction_row_from_record(record)

        assert isinstance(row, ORMTransaction)
        assert row.debtor_id == "c1"
        assert row.date == "2024-03-05"
        assert row.payload == record

    def test_transaction_row_missing_owner(self):
        row = transaction_row_from_record({"id": "t1", "debtorId": ""})
        assert row.debtor_id is None
        assert row.date is None

    def test_transaction_to_record_canonical_layout(self):
        txn = Transaction(id="t1", debtor_id="c1", date=date(2024, 3, 5), amount=-250, comment="cash")
        assert transaction_to_record(txn) == {
            "id": "t1",
            "debtorId": "c1",
            "date": "2024-03-05",
            "amount": -250,
            "comment": "cash",
        }
