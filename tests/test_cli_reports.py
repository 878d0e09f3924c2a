"""Tests for import, template, reconcile and report commands."""

from decimal import Decimal

import pytest

from balanceit.cli.main import cli
from balanceit.domain.csv_templates import BANK_STATEMENT_TEMPLATE, TRIAL_BALANCE_TEMPLATE


def run(cli_runner, temp_db, *args, input=None):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], input=input)


@pytest.fixture
def demo_db(cli_runner, temp_db):
    """Temporary database loaded with the demonstration ledger."""
    assert run(cli_runner, temp_db, "init-demo").exit_code == 0
    return temp_db


@pytest.fixture
def statement_file(write_csv):
    return write_csv(BANK_STATEMENT_TEMPLATE, name="statement.csv")


def test_template_written_to_file(cli_runner, temp_db, tmp_path):
    target = tmp_path / "tb.csv"
    result = run(cli_runner, temp_db, "template", "tb", "--output", str(target))

    assert result.exit_code == 0
    assert target.read_text(encoding="utf-8").startswith("Code,Name,Type,Category,Debit,Credit,Note")


def test_template_to_stdout(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "template", "bank", "--output", "-")
    assert result.exit_code == 0
    assert "Bank Service Fee" in result.output


def test_import_trial_balance(cli_runner, temp_db, write_csv, reopen_ledger):
    path = write_csv(TRIAL_BALANCE_TEMPLATE)

    result = run(cli_runner, temp_db, "import", path, "--mode", "tb")

    assert result.exit_code == 0
    assert "Accounts: 2" in result.output
    assert "Total debits: 1,000.00" in result.output
    ledger = reopen_ledger(temp_db.database_path)
    assert ledger.get_account("imported-acc-1010").name == "Cash, Petty"


def test_import_general_ledger_in_foreign_currency(cli_runner, temp_db, write_csv, reopen_ledger):
    path = write_csv(
        "Date,Code,Name,Type,Category,Description,Debit,Credit\n"
        "2024-03-05,1010,Cash,Asset,Current Assets,Deposit,100,0\n"
        "2024-03-05,4010,Sales,Revenue,Revenue,Sale,0,100\n"
    )

    result = run(cli_runner, temp_db, "import", path, "--mode", "gl", "--currency", "GBP")

    assert result.exit_code == 0
    assert "Transactions: 2" in result.output
    ledger = reopen_ledger(temp_db.database_path)
    assert ledger.get_account("imported-acc-1010").debit == Decimal("127")


def test_import_over_existing_ledger_asks_first(cli_runner, demo_db, write_csv, reopen_ledger):
    path = write_csv(TRIAL_BALANCE_TEMPLATE)

    result = run(cli_runner, demo_db, "import", path, input="n\n")
    assert "Import cancelled." in result.output
    assert len(reopen_ledger(demo_db.database_path).list_accounts()) == 16

    result = run(cli_runner, demo_db, "import", path, "--yes")
    assert result.exit_code == 0


def test_import_unbalanced_file_warns(cli_runner, temp_db, write_csv):
    path = write_csv("Code,Name,Type,Category,Debit,Credit\n1010,Cash,Asset,Current Assets,5,0\n")
    result = run(cli_runner, temp_db, "import", path)
    assert result.exit_code == 0
    assert "do not agree" in result.output


def test_import_missing_columns(cli_runner, demo_db, write_csv, reopen_ledger):
    path = write_csv("Code,Name\n1010,Cash\n")

    result = run(cli_runner, demo_db, "import", path, "--yes")

    assert result.exit_code == 1
    assert "Missing required columns" in result.output
    assert len(reopen_ledger(demo_db.database_path).list_accounts()) == 16


def test_reconcile_lists_candidate_accounts(cli_runner, demo_db, statement_file):
    result = run(cli_runner, demo_db, "reconcile", statement_file)
    assert result.exit_code == 0
    assert "Choose an account" in result.output
    assert "Cash at Bank" in result.output


def test_reconcile_account(cli_runner, demo_db, statement_file, reopen_ledger):
    result = run(cli_runner, demo_db, "reconcile", statement_file, "--account", "1010")

    assert result.exit_code == 0
    assert "Matched (2)" in result.output
    assert "Unmatched statement lines (1)" in result.output
    assert "Unmatched ledger transactions (3)" in result.output
    assert "-> t2 (score 35)" in result.output
    assert len(reopen_ledger(demo_db.database_path).list_transactions()) == 5


def test_reconcile_add_unmatched(cli_runner, demo_db, statement_file, reopen_ledger):
    result = run(
        cli_runner, demo_db, "reconcile", statement_file, "--account", "1010", "--add-unmatched"
    )

    assert result.exit_code == 0
    assert "Posted 1 statement line(s)" in result.output
    ledger = reopen_ledger(demo_db.database_path)
    assert ledger.get_account("1").credit == Decimal("25")
    assert ledger.list_transactions()[-1].description == "Bank Service Fee"


def test_reconcile_bad_statement(cli_runner, demo_db, write_csv):
    path = write_csv("Date,Description\n2024-03-05,Payment\n")
    result = run(cli_runner, demo_db, "reconcile", path, "--account", "1010")
    assert result.exit_code == 1
    assert "Missing required columns: amount" in result.output


def test_report_trial_balance(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "trial-balance")

    assert result.exit_code == 0
    assert "532,000.00" in result.output
    assert "Trial balance is balanced." in result.output


def test_report_trial_balance_grouped(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "trial-balance", "--group-by", "type")

    assert result.exit_code == 0
    assert "Liability" in result.output
    assert "Subtotal" in result.output


def test_report_trial_balance_out_of_balance(cli_runner, demo_db):
    run(cli_runner, demo_db, "account", "set-balance", "1010", "--debit", "150010")
    result = run(cli_runner, demo_db, "report", "trial-balance")
    assert "out of balance by 10.00" in result.output


def test_report_income(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "income")

    assert result.exit_code == 0
    assert "Gross Profit" in result.output
    assert "190,000.00" in result.output


def test_report_balance_sheet(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "balance-sheet")

    assert result.exit_code == 0
    assert "Total Liabilities & Equity" in result.output
    assert "232,000.00" in result.output
    assert "Warning" not in result.output


def test_report_cash_flow(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "cash-flow")

    assert result.exit_code == 0
    assert "(Increase) in Accounts Receivable" in result.output
    assert "192,000.00" in result.output


def test_report_equity(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "equity")

    assert result.exit_code == 0
    assert "Closing total equity" in result.output
    assert "92,000.00" in result.output


def test_base_currency_option(cli_runner, temp_db, reopen_ledger):
    run(cli_runner, temp_db, "init-demo")
    result = run(
        cli_runner, temp_db, "--base-currency", "EUR",
        "add", "--account", "1010", "--date", "2024-03-25", "--amount", "10", "--currency", "EUR",
    )
    assert result.exit_code == 0
    assert reopen_ledger(temp_db.database_path).get_account("1").debit == Decimal("150010")
    assert "Warning: ledger amounts are stored in USD, not EUR" in result.output


def test_stored_base_currency_used_without_option(cli_runner, temp_db):
    run(cli_runner, temp_db, "--base-currency", "EUR", "init-demo")

    result = run(
        cli_runner, temp_db,
        "add", "--account", "1010", "--date", "2024-03-25", "--amount", "10",
    )

    assert result.exit_code == 0
    assert "Amount: 10.00 EUR" in result.output
    assert "Warning" not in result.output


def test_report_summary(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "summary")

    assert result.exit_code == 0
    assert "Ledger Summary (USD)" in result.output
    assert "300,000.00" in result.output
    assert "232,000.00" in result.output
    lines = [line for line in result.output.splitlines() if "Expense" in line and "%" in line]
    assert "Wages Expense" in lines[0]
    assert "46.7%" in lines[0]


def test_report_notes(cli_runner, demo_db):
    result = run(cli_runner, demo_db, "report", "notes")

    assert result.exit_code == 0
    assert "1. Cash at Bank (1010) - Current Assets" in result.output
    assert "Depreciated over 5 years straight-line." in result.output
    assert "Accounts Payable" not in result.output


def test_report_notes_when_none(cli_runner, temp_db):
    result = run(cli_runner, temp_db, "report", "notes")
    assert result.exit_code == 0
    assert "No account notes" in result.output
