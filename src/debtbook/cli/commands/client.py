"""Client management commands."""

import click
from debtbook.domain.client import ClientService
from debtbook.domain.errors import DomainError, StoreUnavailable
from debtbook.cli.client_resolution import resolve_client_or_exit
from debtbook.cli.error_handling import handle_domain_error
from debtbook.utils.date_parser import parse_date


@click.group()
def client_group():
    """Manage clients."""
    pass


def _details(ctx, phone: str | None, note: str | None, due: str | None) -> dict:
    details = {}
    if phone is not None:
        details["phone"] = phone
    if note is not None:
        details["note"] = note
    if due is not None:
        try:
            details["due_date"] = parse_date(due) if due.strip() else None
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
    return details


@client_group.command("add")
@click.argument("name", metavar="NAME")
@click.option("--phone", help="Phone number")
@click.option("--note", help="Free-form note")
@click.option("--due", help="Date the debt should be settled by")
@click.pass_context
def add_client(ctx, name: str, phone: str | None, note: str | None, due: str | None):
    """Add a new client.

    Examples:
        debtbook client add "Ivan"
        debtbook client add "Ivan" --phone "+7 900 000 00 00" --due 2024-06-30
    """
    service = ClientService(ctx.obj["store"])
    details = _details(ctx, phone, note, due)
    try:
        client_id = service.create_client(name, **details)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{name.strip()}' (ID: {client_id})")


@client_group.command("edit")
@click.argument("client", metavar="CLIENT")
@click.option("--name", help="New name")
@click.option("--phone", help="Phone number (empty string clears it)")
@click.option("--note", help="Note (empty string clears it)")
@click.option("--due", help="Due date (empty string clears it)")
@click.pass_context
def edit_client(ctx, client: str, name: str | None, phone: str | None, note: str | None, due: str | None):
    """Change a client's name, phone, note or due date.

    CLIENT can be a client name or ID.
    """
    service = ClientService(ctx.obj["store"])
    client_id = resolve_client_or_exit(ctx, service, client)
    changes = _details(ctx, phone, note, due)
    if name is not None:
        changes["name"] = name
    if not changes:
        click.echo("Nothing to change.")
        return
    try:
        service.update_client(client_id, **changes)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated client '{service.get_client(client_id).name}'")


@client_group.command("list")
@click.option("--archived", is_flag=True, help="Include archived clients")
@click.pass_context
def list_clients(ctx, archived: bool):
    """List clients by name."""
    service = ClientService(ctx.obj["store"])
    clients = service.list_clients(include_archived=archived)
    if not clients:
        click.echo("No clients found.")
        return

    click.echo("\nClients:")
    click.echo("-" * 60)
    for c in clients:
        suffix = " (archived)" if c.is_archived else ""
        click.echo(f"{c.id} | {c.name}{suffix}")


@client_group.command("rename")
@click.argument("client", metavar="CLIENT")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_client(ctx, client: str, new_name: str):
    """Rename a client.

    CLIENT can be a client name or ID.
    """
    service = ClientService(ctx.obj["store"])
    client_id = resolve_client_or_exit(ctx, service, client)
    try:
        service.rename_client(client_id, new_name)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed client to '{new_name.strip()}'")


def _set_archived(ctx, client: str, archived: bool) -> None:
    service = ClientService(ctx.obj["store"])
    client_id = resolve_client_or_exit(ctx, service, client)
    try:
        service.set_archived(client_id, archived)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)
    name = service.get_client(client_id).name
    click.echo(f"{'Archived' if archived else 'Restored'} client '{name}'")


@client_group.command("archive")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def archive_client(ctx, client: str):
    """Archive a client (hide it from balances and exports)."""
    _set_archived(ctx, client, True)


@client_group.command("restore")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def restore_client(ctx, client: str):
    """Restore an archived client."""
    _set_archived(ctx, client, False)


@client_group.command("delete")
@click.argument("client", metavar="CLIENT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_client(ctx, client: str, yes: bool):
    """Delete a client together with all of its entries.

    Examples:
        debtbook client delete "Ivan"
        debtbook client delete 3f2a... --yes
    """
    service = ClientService(ctx.obj["store"])
    client_id = resolve_client_or_exit(ctx, service, client)
    client_obj = service.get_client(client_id)
    name = client_obj.name if client_obj is not None else client_id

    if not yes and not click.confirm(f"Delete client '{name}' and all of its entries?"):
        click.echo("Deletion cancelled.")
        return

    try:
        result = service.delete_client(client_id)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted client '{name}' and {result.transactions_deleted} entries")
    if result.orphans_left:
        click.echo(f"Warning: {result.orphans_left} entries could not be deleted", err=True)


def register_commands(cli):
    """Register client commands with main CLI."""
    cli.add_command(client_group, name="client")
