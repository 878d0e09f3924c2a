"""Example CSV files for each import shape.

Header names are a contract: other tooling builds files against them.
"""

from balanceit.domain.csv_import import ImportMode

TRIAL_BALANCE_TEMPLATE = (
    "Code,Name,Type,Category,Debit,Credit,Note\n"
    '1010,"Cash, Petty",Asset,Current Assets,1000,0,Float for small expenses\n'
    "2010,Accounts Payable,Liability,Current Liabilities,0,1000,"
)

GENERAL_LEDGER_TEMPLATE = (
    "Date,Code,Name,Type,Category,Description,Debit,Credit\n"
    "2024-03-01,5100,Rent Expense,Expense,Operating Expenses,Monthly Office Rent,2000,0\n"
    "2024-03-01,1010,Cash at Bank,Asset,Current Assets,Rent Payment,0,2000\n"
    "2024-03-05,4010,Sales Revenue,Revenue,Revenue,Client Invoice #101,0,5000\n"
    "2024-03-05,1020,Accounts Receivable,Asset,Current Assets,Client Invoice #101,5000,0"
)

BANK_STATEMENT_TEMPLATE = (
    "Date,Description,Amount\n"
    "2024-03-05,Client Payment #1042,15000.00\n"
    "2024-03-10,Rent Payment,-2000.00\n"
    "2024-03-12,Bank Service Fee,-25.00"
)

TEMPLATE_FILENAMES = {
    "tb": "trial_balance_template.csv",
    "gl": "transaction_template.csv",
    "bank": "bank_statement_template.csv",
}


def generate_template(mode: ImportMode | str) -> str:
    """Return the example ledger file for a trial balance or general ledger import."""
    if ImportMode(mode) == ImportMode.GENERAL_LEDGER:
        return GENERAL_LEDGER_TEMPLATE
    return TRIAL_BALANCE_TEMPLATE


def generate_bank_template() -> str:
    """Return the example bank statement file."""
    return BANK_STATEMENT_TEMPLATE
