"""Account management commands."""

import click
from balanceit.cli.account_resolution import resolve_account_or_exit
from balanceit.cli.error_handling import handle_domain_error
from balanceit.cli.formatting import format_amount
from balanceit.domain.classification import parse_account_type
from balanceit.domain.entities import AccountType
from balanceit.utils.amount_parser import parse_amount


ACCOUNT_TYPES = [t.value for t in AccountType]


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("list")
@click.option("--category", help="Only show accounts in this category")
@click.pass_context
def list_accounts(ctx, category: str | None):
    """List all accounts ordered by code."""
    ledger = ctx.obj["ledger"]

    accounts = ledger.list_accounts()
    if category is not None:
        accounts = [a for a in accounts if a.category == category]
    if not accounts:
        click.echo("No accounts found.")
        return

    groups = {g.id: g.name for g in ledger.list_custom_groups()}
    click.echo("\nAccounts:")
    click.echo("-" * 100)
    for acc in accounts:
        group = groups.get(acc.custom_group_id, "") if acc.custom_group_id else ""
        click.echo(
            f"{acc.code:6s} | {acc.name:28s} | {acc.type.value:9s} | {acc.category:24s} "
            f"| Dr {format_amount(acc.debit):>14s} | Cr {format_amount(acc.credit):>14s}"
            + (f" | {group}" if group else "")
        )


@account_group.command("add")
@click.argument("code")
@click.argument("name")
@click.option(
    "--type",
    "account_type",
    required=True,
    help=f"Account type ({', '.join(ACCOUNT_TYPES)}); free text is matched by keyword",
)
@click.option("--category", default="", help="Reporting category (e.g. 'Current Assets')")
@click.option("--debit", default="0", help="Opening debit total")
@click.option("--credit", default="0", help="Opening credit total")
@click.option("--note", help="Free-text note")
@click.pass_context
def add_account(
    ctx,
    code: str,
    name: str,
    account_type: str,
    category: str,
    debit: str,
    credit: str,
    note: str | None,
):
    """Add an account to the chart of accounts.

    Examples:
        balanceit account add 1010 "Cash at Bank" --type Asset --category "Current Assets"
        balanceit account add 2010 "Accounts Payable" --type liability --credit 500
    """
    ledger = ctx.obj["ledger"]

    try:
        account = ledger.add_account(
            code=code,
            name=name,
            type=parse_account_type(account_type),
            category=category,
            debit=parse_amount(debit),
            credit=parse_amount(credit),
            note=note,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created account {account.code} '{account.name}' ({account.type.value}, ID: {account.id})")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--category", help="New category")
@click.option("--note", help="New note")
@click.option("--group", "group_name", help="Custom group name or ID")
@click.option("--ungroup", is_flag=True, help="Remove the account from its custom group")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    category: str | None,
    note: str | None,
    group_name: str | None,
    ungroup: bool,
):
    """Update an account's descriptive fields.

    ACCOUNT can be an account ID, code or name. Balances are not changed;
    use 'account set-balance' for that.

    Examples:
        balanceit account update 1010 --note "Main operating account"
        balanceit account update "Rent Expense" --group "Overheads"
    """
    ledger = ctx.obj["ledger"]
    account_id = resolve_account_or_exit(ctx, ledger, account)

    group_id = None
    if group_name is not None:
        group_id = next(
            (g.id for g in ledger.list_custom_groups() if group_name in (g.id, g.name)),
            None,
        )
        if group_id is None:
            click.echo(f"Error: Custom group '{group_name}' not found", err=True)
            ctx.exit(1)

    try:
        updated = ledger.update_account_details(
            account_id,
            name=name,
            category=category,
            note=note,
            custom_group_id=group_id,
            clear_custom_group=ungroup,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Updated account {updated.code} '{updated.name}'")


@account_group.command("set-balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--debit", help="New debit total")
@click.option("--credit", help="New credit total")
@click.pass_context
def set_balance(ctx, account: str, debit: str | None, credit: str | None):
    """Overwrite an account's debit and/or credit totals.

    This is a manual trial balance adjustment. It is not recorded as a
    transaction, so the account's totals stop matching its transactions.
    """
    ledger = ctx.obj["ledger"]
    account_id = resolve_account_or_exit(ctx, ledger, account)

    if debit is None and credit is None:
        click.echo("Error: Provide --debit and/or --credit", err=True)
        ctx.exit(1)

    try:
        updated = ledger.set_account_balance(
            account_id,
            debit=parse_amount(debit) if debit is not None else None,
            credit=parse_amount(credit) if credit is not None else None,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(
        f"Set {updated.code} '{updated.name}' to Dr {format_amount(updated.debit)} "
        f"Cr {format_amount(updated.credit)}"
    )


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
