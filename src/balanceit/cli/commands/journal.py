"""Manual journal entry command."""

import click
from balanceit.cli.account_resolution import resolve_account_or_exit
from balanceit.cli.error_handling import handle_domain_error
from balanceit.cli.formatting import format_amount
from balanceit.domain.entities import JournalLine
from balanceit.utils.amount_parser import parse_amount_or_zero
from balanceit.utils.date_parser import parse_date


def parse_journal_line(text: str) -> tuple[str, str, str, str | None]:
    """Split ACCOUNT:DEBIT:CREDIT[:DESCRIPTION] into its parts.

    Raises:
        ValueError: If the text has fewer than three parts
    """
    parts = text.split(":", 3)
    if len(parts) < 3:
        raise ValueError(f"Invalid journal line '{text}': expected ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]")
    account, debit, credit = (p.strip() for p in parts[:3])
    description = parts[3].strip() if len(parts) == 4 and parts[3].strip() else None
    return account, debit, credit, description


@click.command("journal")
@click.option("--date", default="today", show_default=True, help="Entry date")
@click.option("--memo", default="", help="Memo used for lines without their own description")
@click.option(
    "--line",
    "line_args",
    multiple=True,
    required=True,
    help="ACCOUNT:DEBIT:CREDIT[:DESCRIPTION]; repeat for each line",
)
@click.pass_context
def post_journal(ctx, date: str, memo: str, line_args: tuple[str, ...]):
    """Post a balanced journal entry.

    Total debits must equal total credits. Each line becomes one
    transaction on its account.

    Examples:
        balanceit journal --memo "March rent" --line 5100:2000:0 --line 1010:0:2000
        balanceit journal --line "Sales Revenue:0:500:Invoice 7" --line 1020:500:0
    """
    ledger = ctx.obj["ledger"]

    try:
        entry_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    lines = []
    for line_arg in line_args:
        try:
            account, debit, credit, description = parse_journal_line(line_arg)
        except ValueError as e:
            handle_domain_error(ctx, e)
            return
        lines.append(
            JournalLine(
                account_id=resolve_account_or_exit(ctx, ledger, account),
                debit=parse_amount_or_zero(debit),
                credit=parse_amount_or_zero(credit),
                description=description,
            )
        )

    try:
        posted = ledger.post_journal_entry(entry_date.isoformat(), memo, lines)
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Posted journal entry with {len(posted)} line(s):")
    for txn in posted:
        acc = ledger.get_account(txn.account_id)
        click.echo(f"  {acc.code:6s} {acc.name:28s} {format_amount(txn.amount):>14s}  {txn.description}")


def register_commands(cli):
    """Register journal command with main CLI."""
    cli.add_command(post_journal)
