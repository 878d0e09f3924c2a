"""Add transaction command."""

import click
from balanceit.cli.account_resolution import resolve_account_or_exit
from balanceit.cli.error_handling import handle_domain_error
from balanceit.cli.formatting import format_amount, format_money
from balanceit.utils.amount_parser import parse_amount
from balanceit.utils.date_parser import parse_date


@click.command("add")
@click.option("--account", required=True, help="Account ID, code or name")
@click.option(
    "--date",
    required=True,
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--amount",
    required=True,
    help="Signed amount: positive debits the account, negative credits it",
)
@click.option("--description", default="", help="Transaction description")
@click.option("--reference", help="Reference number")
@click.option("--currency", help="Currency the amount is in (defaults to base currency)")
@click.option("--rate", help="Exchange rate to base currency; looked up when omitted")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    date: str,
    amount: str,
    description: str,
    reference: str | None,
    currency: str | None,
    rate: str | None,
):
    """Post a transaction to an account.

    Foreign amounts are converted to base currency when posted.

    Examples:
        balanceit add --account 1010 --date 2024-03-05 --amount 15000 --description "Client payment"
        balanceit add --account "Cash at Bank" --date today --amount -100 --currency EUR
    """
    ledger = ctx.obj["ledger"]

    account_id = resolve_account_or_exit(ctx, ledger, account)
    account_obj = ledger.get_account(account_id)

    try:
        txn_date = parse_date(date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    try:
        txn_amount = parse_amount(amount)
        exchange_rate = parse_amount(rate) if rate is not None else None
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    foreign = currency is not None and currency.upper() != ledger.base_currency
    if foreign and exchange_rate is None and currency not in ledger.currency_table:
        click.echo(f"Warning: no rate known for {currency.upper()}; using 1.0", err=True)
    try:
        transaction = ledger.add_transaction(
            account_id=account_id,
            date=txn_date.isoformat(),
            description=description,
            amount=txn_amount,
            reference=reference,
            original_currency=currency,
            original_amount=txn_amount if foreign else None,
            exchange_rate=exchange_rate,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(f"Created transaction {transaction.id}")
    click.echo(f"  Account: {account_obj.code} {account_obj.name}")
    click.echo(f"  Date: {transaction.date}")
    click.echo(f"  Amount: {format_amount(transaction.amount)} {ledger.base_currency}")
    if foreign:
        symbol = ledger.currency_table.symbol_for(transaction.original_currency)
        click.echo(
            f"  Original: {format_money(transaction.original_amount, symbol)} "
            f"{transaction.original_currency} @ {transaction.exchange_rate}"
        )
    if description:
        click.echo(f"  Description: {description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
