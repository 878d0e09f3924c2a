"""Bank reconciliation command."""

import click
from balanceit.cli.account_resolution import resolve_account_or_exit
from balanceit.cli.formatting import format_amount
from balanceit.domain.csv_import import CSVImportService
from balanceit.domain.reconciliation import ReconciliationService


@click.command("reconcile")
@click.argument("statement", type=click.Path(exists=True))
@click.option("--account", help="Account ID, code or name to reconcile")
@click.option(
    "--add-unmatched",
    is_flag=True,
    help="Post every unmatched statement line to the account",
)
@click.option("--currency", help="Currency the statement is in (defaults to base currency)")
@click.pass_context
def reconcile(ctx, statement: str, account: str | None, add_unmatched: bool, currency: str | None):
    """Match a bank statement CSV against an account's transactions.

    The statement needs date and amount columns; description is optional.
    Without --account the candidate bank, cash and card accounts are listed.

    Examples:
        balanceit reconcile statement.csv --account 1010
        balanceit reconcile statement.csv --account "Cash at Bank" --add-unmatched
    """
    ledger = ctx.obj["ledger"]
    service = ReconciliationService(ledger)

    if account is None:
        candidates = service.reconcilable_accounts()
        if not candidates:
            click.echo("No bank, cash or card accounts found.")
            return
        click.echo("Choose an account with --account:")
        for acc in candidates:
            click.echo(f"  {acc.code:6s} {acc.name}")
        return

    account_id = resolve_account_or_exit(ctx, ledger, account)

    try:
        bank_lines = CSVImportService(ledger).parse_bank_statement(statement)
        result = service.reconcile_account(account_id, bank_lines)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    summary = service.summarize(account_id, result)
    click.echo(f"\nBook balance:     {format_amount(summary.book_balance):>16s}")
    click.echo(f"Statement total:  {format_amount(summary.statement_total):>16s}")

    click.echo(f"\nMatched ({summary.matched_count}):")
    for match in result.matched:
        click.echo(
            f"  {match.bank.date:<12} {format_amount(match.bank.amount):>14s}  "
            f"{match.bank.description[:30]:<30} -> {match.ledger.id} (score {match.score})"
        )

    click.echo(f"\nUnmatched statement lines ({summary.unmatched_bank_count}):")
    for line in result.unmatched_bank:
        click.echo(f"  {line.date:<12} {format_amount(line.amount):>14s}  {line.description}")

    click.echo(f"\nUnmatched ledger transactions ({summary.unmatched_ledger_count}):")
    for txn in result.unmatched_ledger:
        click.echo(f"  {txn.date:<12} {format_amount(txn.amount):>14s}  {txn.description}")

    if add_unmatched and result.unmatched_bank:
        for line in result.unmatched_bank:
            service.add_to_ledger(account_id, line, currency=currency)
        click.echo(f"\nPosted {len(result.unmatched_bank)} statement line(s) to the ledger.")


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile)
