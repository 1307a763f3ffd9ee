"""Balance and history viewing commands."""

import click
from debtbook.domain.client import ClientService
from debtbook.domain.model_builder import ModelBuilder, compute_stats
from debtbook.domain.query_filter import ACTIVE, STATUSES, ViewState
from debtbook.cli.client_resolution import resolve_client_or_exit


def format_amount(amount: int) -> str:
    """Render a whole-unit amount with thousands separators."""
    return f"{amount:,}".replace(",", " ")


def _badge(item) -> str:
    if item.is_archived:
        return "closed"
    if item.is_overdue:
        return "OVERDUE"
    return "active"


@click.command("list")
@click.option("--search", "-s", default="", help="Only clients whose name, phone, note or entry comments contain TEXT")
@click.option(
    "--status",
    type=click.Choice(STATUSES),
    default=ACTIVE,
    show_default=True,
    help="Which clients to show (closed means archived)",
)
@click.pass_context
def list_balances(ctx, search: str, status: str):
    """List clients with their balances.

    A positive balance means the client owes you; a negative one means you
    owe the client.
    """
    state = ViewState(query=search, status=status)
    model = ModelBuilder(ctx.obj["store"]).build_model(include_archived=state.needs_archived)
    stats = compute_stats(model)
    view = state.apply(model)

    click.echo(f"Clients: {stats.client_count} | Owed to you: {format_amount(stats.total_owed)}")
    if not view:
        click.echo("No clients found.")
        return

    click.echo("-" * 60)
    for item in view:
        last = item.last_date.isoformat() if item.last_date else "-"
        click.echo(
            f"{format_amount(item.balance):>12} | {item.name:20s} | {_badge(item):7s} | last: {last} | {item.id}"
        )


@click.command("show")
@click.argument("client", metavar="CLIENT")
@click.pass_context
def show_client(ctx, client: str):
    """Show a client's balance and full history, newest first.

    CLIENT can be a client name or ID.
    """
    store = ctx.obj["store"]
    client_id = resolve_client_or_exit(ctx, ClientService(store), client)
    model = ModelBuilder(store).build_model(include_archived=True)
    item = next((v for v in model if v.id == client_id), None)
    if item is None:
        click.echo("Error: Client has no name", err=True)
        ctx.exit(1)

    details = item.client
    click.echo(f"{item.name}  (ID: {item.id})  [{_badge(item)}]")
    if details.created_at:
        click.echo(f"Created: {details.created_at[:10]}")
    if details.phone:
        click.echo(f"Phone: {details.phone}")
    if details.due_date:
        click.echo(f"Due: {details.due_date.isoformat()}")
    if details.note:
        click.echo(f"Note: {details.note}")
    click.echo(f"Balance: {format_amount(item.balance)}")
    click.echo("-" * 60)
    if not item.entries:
        click.echo("No entries.")
        return
    for e in item.entries:
        label = "took" if e.amount >= 0 else "gave"
        comment = f" | {e.comment}" if e.comment else ""
        click.echo(f"{e.date.isoformat()} | {label:4s} | {format_amount(abs(e.amount)):>10} | {e.id}{comment}")


def register_commands(cli):
    """Register viewing commands with main CLI."""
    cli.add_command(list_balances)
    cli.add_command(show_client)
