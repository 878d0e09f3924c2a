"""Transaction management commands."""

import click
from balanceit.cli.account_resolution import resolve_account_or_exit
from balanceit.cli.error_handling import handle_domain_error
from balanceit.cli.formatting import format_amount
from balanceit.utils.amount_parser import parse_amount
from balanceit.utils.date_parser import parse_date


@click.group()
def transaction_group():
    """Manage posted transactions."""
    pass


@transaction_group.command("list")
@click.option("--account", help="Account ID, code or name")
@click.option("--verbose", "-v", is_flag=True, help="Show currency details and references")
@click.pass_context
def list_transactions(ctx, account: str | None, verbose: bool):
    """List transactions in posting order."""
    ledger = ctx.obj["ledger"]

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, ledger, account)

    transactions = ledger.list_transactions(account_id=account_id)
    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc for acc in ledger.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 110)
    click.echo(f"{'ID':<32} {'Date':<12} {'Amount':>14}  {'Account':<24} {'Description':<30}")
    click.echo("-" * 110)
    for txn in transactions:
        acc = accounts.get(txn.account_id)
        account_name = f"{acc.code} {acc.name}" if acc else f"Unknown ({txn.account_id})"
        click.echo(
            f"{txn.id:<32} {txn.date:<12} {format_amount(txn.amount):>14}  "
            f"{account_name[:24]:<24} {(txn.description or '')[:30]:<30}"
        )
        if verbose:
            if txn.reference:
                click.echo(f"    Reference: {txn.reference}")
            if txn.original_currency and txn.original_amount is not None:
                click.echo(
                    f"    Original: {format_amount(txn.original_amount)} "
                    f"{txn.original_currency} @ {txn.exchange_rate}"
                )

    total_debits = sum(txn.amount for txn in transactions if txn.amount > 0)
    total_credits = sum(-txn.amount for txn in transactions if txn.amount < 0)
    click.echo("-" * 110)
    click.echo(
        f"TOTAL  Debits: {format_amount(total_debits)} | "
        f"Credits: {format_amount(total_credits)} | Count: {len(transactions)}"
    )


@transaction_group.command("update")
@click.argument("transaction_id")
@click.option("--account", help="Move the transaction to this account (ID, code or name)")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="New signed amount in base currency")
@click.option("--description", help="Transaction description")
@click.option("--reference", help="Reference number")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: str,
    account: str | None,
    date: str | None,
    amount: str | None,
    description: str | None,
    reference: str | None,
) -> None:
    """Update a transaction and re-state its balance effect.

    Updates only the fields that are provided.

    Examples:
        balanceit transaction update manual-1710000000000000-ab12cd34 --amount 60
        balanceit transaction update t3 --account 5100
    """
    ledger = ctx.obj["ledger"]

    if ledger.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, ledger, account)

    txn_date = None
    if date is not None:
        try:
            txn_date = parse_date(date).isoformat()
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    txn_amount = None
    if amount is not None:
        try:
            txn_amount = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)

    try:
        ledger.edit_transaction(
            transaction_id,
            account_id=account_id,
            date=txn_date,
            amount=txn_amount,
            description=description,
            reference=reference,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool) -> None:
    """Delete a transaction and reverse its balance effect.

    Examples:
        balanceit transaction delete t3
    """
    ledger = ctx.obj["ledger"]

    txn = ledger.get_transaction(transaction_id)
    if txn is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(
        f"Are you sure you want to delete transaction {transaction_id} "
        f"({format_amount(txn.amount)}, {txn.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    ledger.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli: click.Group) -> None:
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
