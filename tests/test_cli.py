"""Tests for CLI commands."""

import json

from debtbook.cli.main import cli
from debtbook.database import CLIENTS, TRANSACTIONS


def run(cli_runner, temp_store, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_store.database_path, *args], **kwargs)


def test_client_add_and_list(cli_runner, temp_store):
    result = run(cli_runner, temp_store, "client", "add", "Ivan")
    assert result.exit_code == 0
    assert "Created client 'Ivan'" in result.output

    result = run(cli_runner, temp_store, "client", "list")
    assert result.exit_code == 0
    assert "Ivan" in result.output


def test_client_add_blank_name(cli_runner, temp_store):
    result = run(cli_runner, temp_store, "client", "add", "  ")
    assert result.exit_code == 1
    assert "must not be empty" in result.output


def test_client_list_empty(cli_runner, temp_store):
    result = run(cli_runner, temp_store, "client", "list")
    assert result.exit_code == 0
    assert "No clients found" in result.output


def test_took_gave_and_balances(cli_runner, temp_store, sample_client):
    result = run(cli_runner, temp_store, "took", "Ivan", "5000", "--comment", "laptop repair", "--date", "2024-01-10")
    assert result.exit_code == 0
    assert "Recorded: took 5 000" in result.output

    result = run(cli_runner, temp_store, "gave", "ivan", "2000", "--date", "2024-02-01")
    assert result.exit_code == 0

    result = run(cli_runner, temp_store, "list")
    assert result.exit_code == 0
    assert "Clients: 1 | Owed to you: 3 000" in result.output
    assert "last: 2024-02-01" in result.output

    result = run(cli_runner, temp_store, "show", sample_client.id)
    assert result.exit_code == 0
    lines = result.output.splitlines()
    assert "Balance: 3 000" in result.output
    history = [line for line in lines if line.startswith("2024-")]
    assert history[0].startswith("2024-02-01 | gave")
    assert "laptop repair" in history[1]


def test_took_zero_amount_records_nothing(cli_runner, temp_store, sample_client):
    result = run(cli_runner, temp_store, "took", "Ivan", "0")
    assert result.exit_code == 1
    assert temp_store.read_all(TRANSACTIONS) == []


def test_took_invalid_amount(cli_runner, temp_store, sample_client):
    result = run(cli_runner, temp_store, "took", "Ivan", "lots")
    assert result.exit_code == 1
    assert "Invalid amount" in result.output


def test_unknown_client(cli_runner, temp_store):
    result = run(cli_runner, temp_store, "took", "Nobody", "10")
    assert result.exit_code == 1
    assert "not found" in result.output


def test_list_search(cli_runner, temp_store, put_client, put_entry):
    put_client("c1", "Ivan")
    put_client("c2", "Olga")
    put_entry("t1", "c2", 100, comment="phone screen")

    result = run(cli_runner, temp_store, "list", "--search", "PHONE")
    assert result.exit_code == 0
    assert "Olga" in result.output
    assert "Ivan" not in result.output


def test_entry_edit_and_delete(cli_runner, temp_store, put_client, put_entry):
    put_client("c1", "Ivan")
    put_entry("t1", "c1", 500, type="debt", note="old")

    result = run(cli_runner, temp_store, "entry", "edit", "t1", "--gave", "--amount", "700")
    assert result.exit_code == 0
    assert temp_store.get(TRANSACTIONS, "t1")["amount"] == -700
    assert temp_store.get(TRANSACTIONS, "t1")["comment"] == "old"

    result = run(cli_runner, temp_store, "entry", "delete", "t1")
    assert result.exit_code == 0
    assert temp_store.get(TRANSACTIONS, "t1") is None

    result = run(cli_runner, temp_store, "entry", "delete", "t1")
    assert result.exit_code == 1


def test_client_archive_restore(cli_runner, temp_store, put_client):
    put_client("c1", "Ivan")
    result = run(cli_runner, temp_store, "client", "archive", "Ivan")
    assert result.exit_code == 0
    assert "No clients found" in run(cli_runner, temp_store, "list").output

    result = run(cli_runner, temp_store, "client", "restore", "c1")
    assert result.exit_code == 0
    assert "Ivan" in run(cli_runner, temp_store, "list").output


def test_client_delete_cascades(cli_runner, temp_store, put_client, put_entry):
    put_client("c1", "Ivan")
    put_entry("t1", "c1", 500)

    result = run(cli_runner, temp_store, "client", "delete", "Ivan", input="n\n")
    assert "Deletion cancelled" in result.output
    assert temp_store.get(CLIENTS, "c1") is not None

    result = run(cli_runner, temp_store, "client", "delete", "Ivan", "--yes")
    assert result.exit_code == 0
    assert "1 entries" in result.output
    assert temp_store.read_all(CLIENTS) == []
    assert temp_store.read_all(TRANSACTIONS) == []


def test_export_import(cli_runner, temp_store, put_client, put_entry, tmp_path):
    put_client("c1", "Ivan")
    put_entry("t1", "c1", 500)
    backup = tmp_path / "backup.json"

    result = run(cli_runner, temp_store, "export", str(backup))
    assert result.exit_code == 0
    document = json.loads(backup.read_text(encoding="utf-8"))
    assert [c["id"] for c in document["clients"]] == ["c1"]

    temp_store.upsert(CLIENTS, {"id": "c9", "name": "Later"})
    result = run(cli_runner, temp_store, "import", str(backup), "--yes")
    assert result.exit_code == 0
    assert "Clients: 1" in result.output
    assert [c["id"] for c in temp_store.read_all(CLIENTS)] == ["c1"]


def test_import_rejects_bad_file(cli_runner, temp_store, put_client, tmp_path):
    put_client("c1", "Ivan")
    bad = tmp_path / "bad.json"
    bad.write_text('{"clients": "nope", "tx": []}', encoding="utf-8")

    result = run(cli_runner, temp_store, "import", str(bad), "--yes")
    assert result.exit_code == 1
    assert "Invalid import document" in result.output
    assert temp_store.get(CLIENTS, "c1") is not None


def test_export_to_stdout(cli_runner, temp_store, put_client):
    put_client("c1", "Ivan")
    result = run(cli_runner, temp_store, "export", "-")
    assert result.exit_code == 0
    assert json.loads(result.output)["clients"][0]["name"] == "Ivan"


def test_list_status_modes(cli_runner, temp_store, put_client, put_entry):
    put_client("c1", "Ivan", dueDate="2000-01-01")
    put_client("c2", "Olga")
    put_client("c3", "Old", isArchived=True)
    put_entry("t1", "c1", 500)

    result = run(cli_runner, temp_store, "list", "--status", "overdue")
    assert result.exit_code == 0
    assert "Ivan" in result.output
    assert "OVERDUE" in result.output
    assert "Olga" not in result.output

    result = run(cli_runner, temp_store, "list", "--status", "closed")
    assert result.exit_code == 0
    assert "Old" in result.output
    assert "Ivan" not in result.output
    assert "Clients: 2 | Owed to you: 500" in result.output

    result = run(cli_runner, temp_store, "list", "--status", "paid")
    assert result.exit_code == 2


def test_client_add_with_details_and_edit(cli_runner, temp_store):
    result = run(cli_runner, temp_store, "client", "add", "Ivan", "--phone", "+7 900", "--due", "2024-06-30")
    assert result.exit_code == 0
    [record] = temp_store.read_all(CLIENTS)
    assert (record["phone"], record["dueDate"]) == ("+7 900", "2024-06-30")

    result = run(cli_runner, temp_store, "client", "edit", "Ivan", "--note", "neighbour", "--due", "")
    assert result.exit_code == 0
    record = temp_store.get(CLIENTS, record["id"])
    assert record["note"] == "neighbour"
    assert "dueDate" not in record

    result = run(cli_runner, temp_store, "list", "--search", "900")
    assert "Ivan" in result.output

    result = run(cli_runner, temp_store, "show", "Ivan")
    assert "Phone: +7 900" in result.output
    assert "Note: neighbour" in result.output


def test_client_add_bad_due_date(cli_runner, temp_store):
    result = run(cli_runner, temp_store, "client", "add", "Ivan", "--due", "someday")
    assert result.exit_code == 1
    assert "Invalid date format" in result.output
    assert temp_store.read_all(CLIENTS) == []


def test_show_archived_client(cli_runner, temp_store, put_client):
    put_client("c1", "Old", isArchived=True)
    result = run(cli_runner, temp_store, "show", "c1")
    assert result.exit_code == 0
    assert "[closed]" in result.output
