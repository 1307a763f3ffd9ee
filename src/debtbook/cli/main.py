"""Main CLI entry point."""

import click
from debtbook import config
from debtbook.database.factories import create_sqlite_store
from debtbook.domain.errors import StoreUnavailable
from debtbook.cli.error_handling import handle_domain_error
from debtbook.log_config import configure_logging

# Import and register all commands at module level
from debtbook.cli.commands import client, entry, ledger, transfer


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {config.DB_PATH_ENV} environment variable)",
    envvar=config.DB_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Log store activity to stderr")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Debtbook - who owes whom, kept on this machine.

    Record what each client took from you or gave back, see running
    balances, and back everything up to a JSON file.
    """
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else None)

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        try:
            store.initialize_schema()
        except StoreUnavailable as e:
            handle_domain_error(ctx, e)
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
client.register_commands(cli)
entry.register_commands(cli)
ledger.register_commands(cli)
transfer.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
