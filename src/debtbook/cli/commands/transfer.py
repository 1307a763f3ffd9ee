"""Backup export and import commands."""

from datetime import date

import click
from debtbook.domain.errors import DomainError, StoreUnavailable
from debtbook.domain.transfer import TransferCodec
from debtbook.cli.error_handling import handle_domain_error


@click.command("export")
@click.argument("output", required=False, type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_data(ctx, output: str | None):
    """Export every client and entry to a JSON backup.

    Without OUTPUT the file is named debtbook_backup_YYYY-MM-DD.json.
    Use "-" to write to stdout.
    """
    codec = TransferCodec(ctx.obj["store"])
    try:
        document = codec.export()
    except StoreUnavailable as e:
        handle_domain_error(ctx, e)
    text = codec.dumps(document)

    if output == "-":
        click.echo(text)
        return
    path = output or f"debtbook_backup_{date.today().isoformat()}.json"
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    click.echo(f"Exported {len(document['clients'])} clients and {len(document['tx'])} entries to {path}")


@click.command("import")
@click.argument("backup_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def import_data(ctx, backup_file: str, yes: bool):
    """Replace all data with the contents of a JSON backup.

    Everything currently stored is deleted first.
    """
    codec = TransferCodec(ctx.obj["store"])
    with open(backup_file, "r", encoding="utf-8-sig") as f:
        text = f.read()

    try:
        document = codec.loads(text)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm("Import replaces all current clients and entries. Continue?"):
        click.echo("Import cancelled.")
        return

    try:
        summary = codec.import_document(document)
    except (DomainError, StoreUnavailable) as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Clients: {summary.clients}")
    click.echo(f"  Entries: {summary.transactions}")
    skipped = summary.skipped_clients + summary.skipped_transactions
    if skipped:
        click.echo(f"  Skipped: {skipped} invalid records")


def register_commands(cli):
    """Register export and import commands with main CLI."""
    cli.add_command(export_data)
    cli.add_command(import_data)
