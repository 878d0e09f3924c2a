"""Main CLI entry point."""

import logging

import click
from balanceit.database.factories import create_sqlite_database
from balanceit.domain.currency import DEFAULT_BASE_CURRENCY
from balanceit.domain.ledger import LedgerService

# Import and register all commands at module level
from balanceit.cli.commands import (
    account,
    add,
    group,
    import_cmd,
    init_demo,
    journal,
    reconcile,
    report,
    template,
    transaction,
)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides BALANCEIT_DB_PATH environment variable)",
    envvar="BALANCEIT_DB_PATH",
)
@click.option(
    "--base-currency",
    help=(
        "Currency all balances are kept in "
        f"(defaults to the ledger's stored currency, else {DEFAULT_BASE_CURRENCY})"
    ),
    envvar="BALANCEIT_BASE_CURRENCY",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable debug logging",
    envvar="BALANCEIT_VERBOSE",
)
@click.pass_context
def cli(ctx, db_path: str | None, base_currency: str | None, verbose: bool):
    """Balanceit - double-entry bookkeeping.

    Keep a chart of accounts, post transactions and journal entries,
    reconcile bank statements and produce financial statements.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ledger = LedgerService(db, base_currency=base_currency)
        if ledger.base_currency_mismatch:
            click.echo(
                f"Warning: ledger amounts are stored in {ledger.stored_base_currency}, "
                f"not {ledger.base_currency}; they are not converted.",
                err=True,
            )
        ctx.obj["ledger"] = ledger
        ctx.call_on_close(db.disconnect)


# Register all commands
init_demo.register_commands(cli)
account.register_commands(cli)
group.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
journal.register_commands(cli)
import_cmd.register_commands(cli)
template.register_commands(cli)
reconcile.register_commands(cli)
report.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
