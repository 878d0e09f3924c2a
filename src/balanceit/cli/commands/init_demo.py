"""Load the demonstration ledger."""

from decimal import Decimal

import click
from balanceit.domain.entities import Account, AccountType, Transaction


# (id, code, name, type, debit, credit, category, note)
INITIAL_LEDGER = [
    ("1", "1010", "Cash at Bank", AccountType.ASSET, "150000", "0", "Current Assets",
     "Main operating account at Chase Bank."),
    ("2", "1020", "Accounts Receivable", AccountType.ASSET, "45000", "0", "Current Assets", None),
    ("3", "1030", "Inventory", AccountType.ASSET, "25000", "0", "Current Assets",
     "Valued at lower of cost or market using FIFO."),
    ("4", "1200", "Office Equipment", AccountType.ASSET, "12000", "0", "Non-Current Assets",
     "Depreciated over 5 years straight-line."),
    ("5", "2010", "Accounts Payable", AccountType.LIABILITY, "0", "35000", "Current Liabilities", None),
    ("6", "2020", "Sales Tax Payable", AccountType.LIABILITY, "0", "5000", "Current Liabilities", None),
    ("7", "2100", "Bank Loan (Long Term)", AccountType.LIABILITY, "0", "100000",
     "Non-Current Liabilities", "5-year term loan @ 5% interest."),
    ("8", "3010", "Owner's Capital", AccountType.EQUITY, "0", "80000", "Equity", None),
    ("9", "3020", "Retained Earnings", AccountType.EQUITY, "0", "12000", "Equity", None),
    ("10", "4010", "Sales Revenue", AccountType.REVENUE, "0", "250000", "Revenue", None),
    ("11", "4020", "Service Revenue", AccountType.REVENUE, "0", "50000", "Revenue", None),
    ("12", "5010", "Cost of Goods Sold", AccountType.EXPENSE, "110000", "0", "Cost of Sales", None),
    ("13", "5100", "Rent Expense", AccountType.EXPENSE, "24000", "0", "Operating Expenses", None),
    ("14", "5110", "Wages Expense", AccountType.EXPENSE, "140000", "0", "Operating Expenses", None),
    ("15", "5120", "Utilities Expense", AccountType.EXPENSE, "6000", "0", "Operating Expenses", None),
    ("16", "5130", "Marketing Expense", AccountType.EXPENSE, "20000", "0", "Operating Expenses", None),
]

# Bank activity on Cash at Bank, already reflected in its opening balance.
INITIAL_TRANSACTIONS = [
    ("t1", "1", "2024-03-01", "Opening Balance", "100000"),
    ("t2", "1", "2024-03-05", "Client Payment #1042", "15000"),
    ("t3", "1", "2024-03-10", "Rent Payment - March", "-2000"),
    ("t4", "1", "2024-03-15", "Utility Bill Payment", "-450.50"),
    ("t5", "1", "2024-03-20", "Client Payment #1043", "37450.50"),
]


def build_demo_ledger() -> tuple[list[Account], list[Transaction]]:
    """Build the demonstration accounts and transactions."""
    accounts = [
        Account(
            id=account_id,
            code=code,
            name=name,
            type=account_type,
            category=category,
            debit=Decimal(debit),
            credit=Decimal(credit),
            note=note,
        )
        for account_id, code, name, account_type, debit, credit, category, note in INITIAL_LEDGER
    ]
    transactions = [
        Transaction(
            id=transaction_id,
            account_id=account_id,
            date=txn_date,
            description=description,
            amount=Decimal(amount),
            exchange_rate=Decimal("1.0"),
        )
        for transaction_id, account_id, txn_date, description, amount in INITIAL_TRANSACTIONS
    ]
    return accounts, transactions


@click.command("init-demo")
@click.option("--force", is_flag=True, help="Replace an existing ledger")
@click.pass_context
def init_demo(ctx, force: bool):
    """Replace the ledger with a small demonstration company."""
    ledger = ctx.obj["ledger"]

    if ledger.list_accounts() and not force:
        click.echo("Ledger already has accounts. Use --force to overwrite.")
        return

    accounts, transactions = build_demo_ledger()
    ledger.import_ledger(accounts, transactions)
    click.echo(f"Loaded {len(accounts)} accounts and {len(transactions)} transactions.")


def register_commands(cli):
    """Register init-demo command with main CLI."""
    cli.add_command(init_demo)
