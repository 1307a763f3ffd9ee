"""Ledger entry commands."""

import click
from debtbook.domain.autosave import GAVE, TOOK
from debtbook.domain.client import ClientService
from debtbook.domain.entry import EntryService
from debtbook.domain.errors import DomainError, StoreUnavailable
from debtbook.cli.client_resolution import resolve_client_or_exit
from debtbook.cli.error_handling import handle_domain_error
from debtbook.cli.commands.ledger import format_amount
from debtbook.utils.amount_parser import parse_amount
from debtbook.utils.date_parser import parse_date


def _record(ctx, kind: str, client: str, amount: str, date: str | None, comment: str | None) -> None:
    store = ctx.obj["store"]
    client_id = resolve_client_or_exit(ctx, ClientService(store), client)

    try:
        value = abs(parse_amount(amount))
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    fields = {"amount": value, "comment": comment or ""}
    if date:
        try:
            fields["date"] = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        session = EntryService(store).open_new(client_id, kind=kind)
        session.draft.update(**fields)
        written = session.close()
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)

    if not written:
        click.echo("Error: Nothing to record (amount is zero and there is no comment)", err=True)
        ctx.exit(1)
    click.echo(f"Recorded: {kind} {format_amount(value)} (ID: {session.draft.id})")


@click.command("took")
@click.argument("client", metavar="CLIENT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today")
@click.option("--comment", help="Comment")
@click.pass_context
def took(ctx, client: str, amount: str, date: str | None, comment: str | None):
    """Record that CLIENT took AMOUNT (their debt grows).

    Examples:
        debtbook took "Ivan" 5000 --comment "laptop repair"
    """
    _record(ctx, TOOK, client, amount, date, comment)


@click.command("gave")
@click.argument("client", metavar="CLIENT")
@click.argument("amount", metavar="AMOUNT")
@click.option("--date", help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today")
@click.option("--comment", help="Comment")
@click.pass_context
def gave(ctx, client: str, amount: str, date: str | None, comment: str | None):
    """Record that CLIENT gave back AMOUNT (their debt shrinks).

    Examples:
        debtbook gave "Ivan" 2000 --date yesterday
    """
    _record(ctx, GAVE, client, amount, date, comment)


@click.group()
def entry_group():
    """Edit or delete individual entries."""
    pass


@entry_group.command("edit")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.option("--amount", help="New amount")
@click.option("--took", "kind", flag_value=TOOK, help="Mark as taken by the client")
@click.option("--gave", "kind", flag_value=GAVE, help="Mark as given back by the client")
@click.option("--date", help="New date")
@click.option("--comment", help="New comment")
@click.pass_context
def edit_entry(ctx, entry_id: str, amount: str | None, kind: str | None, date: str | None, comment: str | None):
    """Edit an entry in place (same ID).

    Older entries are rewritten in the current layout when edited.
    """
    store = ctx.obj["store"]
    try:
        session = EntryService(store).open_existing(entry_id)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)

    fields = {}
    if amount is not None:
        try:
            fields["amount"] = abs(parse_amount(amount))
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
    if date is not None:
        try:
            fields["date"] = parse_date(date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    if comment is not None:
        fields["comment"] = comment
    if kind is not None:
        fields["kind"] = kind

    try:
        session.draft.update(**fields)
        session.close()
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)

    txn = session.draft.to_transaction()
    click.echo(f"Updated entry {entry_id}: {txn.date.isoformat()} {format_amount(txn.amount)}")


@entry_group.command("delete")
@click.argument("entry_id", metavar="ENTRY_ID")
@click.pass_context
def delete_entry(ctx, entry_id: str):
    """Delete an entry."""
    service = EntryService(ctx.obj["store"])
    if service.get_entry(entry_id) is None:
        click.echo(f"Error: Entry {entry_id} not found", err=True)
        ctx.exit(1)
    try:
        service.delete_entry(entry_id)
    except StoreUnavailable as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted entry {entry_id}")


def register_commands(cli):
    """Register entry commands with main CLI."""
    cli.add_command(took)
    cli.add_command(gave)
    cli.add_command(entry_group, name="entry")
