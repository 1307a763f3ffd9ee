"""Shared pytest fixtures for debtbook tests."""

import tempfile
import os
from datetime import date
import pytest

from debtbook.database import CLIENTS, TRANSACTIONS
from debtbook.database.factories import create_sqlite_store
from debtbook.domain.client import ClientService
from debtbook.domain.entry import EntryService
from debtbook.domain.transfer import TransferCodec
from debtbook.log_config import configure_logging


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Route structlog through stdlib logging for the whole test run."""
    configure_logging("WARNING")


@pytest.fixture
def temp_store():
    """Create a temporary store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    store = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    store.database_path = db_path
    store.connect()
    store.initialize_schema()

    yield store

    store.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def client_service(temp_store):
    """Create a ClientService with a temporary store."""
    return ClientService(temp_store)


@pytest.fixture
def entry_service(temp_store):
    """Create an EntryService with a temporary store."""
    return EntryService(temp_store)


@pytest.fixture
def codec(temp_store):
    """Create a TransferCodec with a temporary store."""
    return TransferCodec(temp_store)


@pytest.fixture
def sample_client(client_service):
    """Create a sample client and return its entity."""
    client_id = client_service.create_client("Ivan")
    return client_service.get_client(client_id)


@pytest.fixture
def put_entry(temp_store):
    """Write a raw transaction record straight into the store."""

    def _put(entry_id, debtor_id, amount, day=date(2024, 1, 15), **extra):
        record = {"id": entry_id, "debtorId": debtor_id, "date": day.isoformat(), "amount": amount}
        record.update(extra)
        temp_store.upsert(TRANSACTIONS, record)
        return record

    return _put


@pytest.fixture
def put_client(temp_store):
    """Write a raw client record straight into the store."""

    def _put(client_id, name, **extra):
        record = {"id": client_id, "name": name, "createdAt": "2024-01-01T00:00:00+00:00"}
        record.update(extra)
        temp_store.upsert(CLIENTS, record)
        return record

    return _put


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
