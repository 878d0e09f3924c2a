"""CSV ledger import command."""

import click
from balanceit.cli.formatting import format_amount
from balanceit.domain.csv_import import CSVImportService, ImportMode


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True))
@click.option(
    "--mode",
    type=click.Choice([m.value for m in ImportMode]),
    default=ImportMode.TRIAL_BALANCE.value,
    show_default=True,
    help="tb: one row per account; gl: one row per transaction",
)
@click.option("--currency", help="Currency the file's amounts are in (defaults to base currency)")
@click.option("--yes", "-y", is_flag=True, help="Do not ask before replacing an existing ledger")
@click.pass_context
def import_csv(ctx, csv_file: str, mode: str, currency: str | None, yes: bool):
    """Import a trial balance or general ledger CSV file.

    The import replaces the whole ledger. Use 'balanceit template' to get
    an example file with the expected columns.
    """
    ledger = ctx.obj["ledger"]
    service = CSVImportService(ledger)

    if ledger.list_accounts() and not yes:
        if not click.confirm("This replaces the existing ledger. Continue?"):
            click.echo("Import cancelled.")
            return

    try:
        result = service.import_ledger(csv_file, mode=mode, file_currency=currency)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    click.echo(f"\nImport complete:")
    click.echo(f"  Accounts: {result['accounts']}")
    click.echo(f"  Transactions: {result['transactions']}")
    click.echo(f"  Total debits: {format_amount(result['debit_total'])}")
    click.echo(f"  Total credits: {format_amount(result['credit_total'])}")
    if not result["balanced"]:
        click.echo(
            "  Warning: imported debits and credits do not agree "
            f"(difference {format_amount(result['debit_total'] - result['credit_total'])})",
            err=True,
        )


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
