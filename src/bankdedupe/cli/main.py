"""Main CLI entry point."""

import click
from bankdedupe.common.logging import configure_logging
from bankdedupe.database.factories import create_sqlite_database
from bankdedupe.domain.errors import StoreUnavailableError
from bankdedupe.cli.error_handling import handle_store_error

# Import and register all commands at module level
from bankdedupe.cli.commands import (
    account,
    dedupe,
    reference,
    transaction,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BANKDEDUPE_DB_PATH environment variable)",
    envvar="BANKDEDUPE_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    envvar="BANKDEDUPE_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Bankdedupe - find and merge duplicate bank accounts.

    Scans the bank account references for duplicates, merges bank accounts
    that belong to the same contact and removes redundant references.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            db = create_sqlite_database(database_path=db_path)
        except StoreUnavailableError as e:
            handle_store_error(ctx, e)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
dedupe.register_commands(cli)
reference.register_commands(cli)
transaction.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
