"""Tests for the query filter."""

from datetime import date

import pytest

from debtbook.domain.entities import Client, ClientView, Transaction
from debtbook.domain.query_filter import ViewState, filter_clients, filter_status


def make_view(client_id, name, comments=(), archived=False, overdue=False, **details):
    entries = tuple(
        Transaction(id=f"{client_id}-{i}", debtor_id=client_id, date=date(2024, 1, 1), amount=10, comment=c)
        for i, c in enumerate(comments)
    )
    return ClientView(
        client=Client(id=client_id, name=name, created_at=None, is_archived=archived, **details),
        balance=10 * len(entries),
        last_date=entries[0].date if entries else None,
        entries=entries,
        is_overdue=overdue,
    )


@pytest.fixture
def items():
    return [
        make_view("1", "Ivan Petrov", ["laptop repair"]),
        make_view("2", "Olga", ["Advance for PHONE"]),
        make_view("3", "Sergey"),
    ]


@pytest.fixture
def mixed():
    return [
        make_view("1", "Ivan", ["x"], overdue=True),
        make_view("2", "Olga", ["y"]),
        make_view("3", "Old", archived=True),
    ]


def test_blank_query_is_identity(items):
    assert filter_clients(items, "") is items
    assert filter_clients(items, "   ") is items


def test_matches_name_case_insensitive(items):
    assert [v.id for v in filter_clients(items, "IVAN")] == ["1"]


def test_matches_entry_comment(items):
    assert [v.id for v in filter_clients(items, "phone")] == ["2"]
    assert [v.id for v in filter_clients(items, "Repair")] == ["1"]


def test_matches_client_phone_and_note():
    views = [
        make_view("1", "Ivan", phone="+7 900 123"),
        make_view("2", "Olga", note="Neighbour from the 5th floor"),
    ]
    assert [v.id for v in filter_clients(views, "900")] == ["1"]
    assert [v.id for v in filter_clients(views, "NEIGHBOUR")] == ["2"]


def test_substring_not_tokens(items):
    assert [v.id for v in filter_clients(items, "an pet")] == ["1"]
    assert filter_clients(items, "ivan laptop") == []


def test_filter_is_idempotent(items):
    once = filter_clients(items, "o")
    assert filter_clients(once, "o") == once


def test_no_match(items):
    assert filter_clients(items, "zzz") == []


@pytest.mark.parametrize(
    "status, expected",
    [
        ("active", ["1", "2"]),
        ("overdue", ["1"]),
        ("closed", ["3"]),
        ("all", ["1", "2", "3"]),
    ],
)
def test_status_modes(mixed, status, expected):
    assert [v.id for v in filter_status(mixed, status)] == expected


def test_unknown_status(mixed):
    with pytest.raises(ValueError):
        filter_status(mixed, "paid")


def test_view_state_applies_query(items):
    state = ViewState()
    assert state.apply(items) == items
    state.query = "serg"
    assert [v.id for v in state.apply(items)] == ["3"]


def test_view_state_combines_status_and_query(mixed):
    state = ViewState(query="o", status="all")
    assert state.needs_archived
    assert [v.id for v in state.apply(mixed)] == ["2", "3"]
    state.status = "active"
    assert not state.needs_archived
    assert [v.id for v in state.apply(mixed)] == ["2"]
