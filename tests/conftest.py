"""Shared pytest fixtures for balanceit tests."""

import tempfile
import os
from decimal import Decimal
import pytest

from balanceit.database.factories import create_sqlite_database
from balanceit.domain.entities import AccountType
from balanceit.domain.ledger import LedgerService
from balanceit.domain.reconciliation import ReconciliationService
from balanceit.domain.csv_import import CSVImportService
from balanceit.domain.reports import ReportService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger():
    """Create an in-memory LedgerService with no storage."""
    return LedgerService()


@pytest.fixture
def stored_ledger(temp_db):
    """Create a LedgerService saving to a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def reconciliation_service(ledger):
    return ReconciliationService(ledger)


@pytest.fixture
def csv_import_service(ledger):
    return CSVImportService(ledger)


@pytest.fixture
def report_service(ledger):
    return ReportService(ledger)


@pytest.fixture
def sample_accounts(ledger):
    """Add a cash, revenue and expense account to the in-memory ledger."""
    return {
        "cash": ledger.add_account(
            code="1010", name="Cash at Bank", type=AccountType.ASSET, category="Current Assets"
        ),
        "sales": ledger.add_account(
            code="4010", name="Sales Revenue", type=AccountType.REVENUE, category="Revenue"
        ),
        "rent": ledger.add_account(
            code="5100", name="Rent Expense", type=AccountType.EXPENSE, category="Operating Expenses"
        ),
    }


@pytest.fixture
def demo_ledger(ledger):
    """Load the demonstration company into the in-memory ledger."""
    from balanceit.cli.commands.init_demo import build_demo_ledger

    accounts, transactions = build_demo_ledger()
    ledger.import_ledger(accounts, transactions)
    return ledger


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV text to a temporary file and return its path."""

    def _write(content: str, name: str = "upload.csv") -> str:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return str(path)

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def reopen_ledger():
    """Load a fresh LedgerService from a database file another command wrote to."""
    opened = []

    def _reopen(database_path: str) -> LedgerService:
        db = create_sqlite_database(database_path=database_path)
        db.connect()
        opened.append(db)
        return LedgerService(db)

    yield _reopen

    for db in opened:
        db.disconnect()
