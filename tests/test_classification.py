"""Tests for account type and category classification."""

import pytest

from balanceit.domain.classification import (
    is_bank_account,
    is_cost_of_sales,
    is_current_asset,
    is_current_liability,
    parse_account_type,
)
from balanceit.domain.entities import Account, AccountType


def test_parse_account_type_first_keyword_wins():
    assert parse_account_type("Asset") == AccountType.ASSET
    assert parse_account_type("  LIABILITY ") == AccountType.LIABILITY
    assert parse_account_type("Income") == AccountType.REVENUE
    assert parse_account_type(None) == AccountType.ASSET


@pytest.mark.parametrize(
    "category,expected",
    [
        ("Current Assets", True),
        ("Cash and equivalents", True),
        ("Bank accounts", True),
        ("Trade Receivables", True),
        ("Prepaid expenses", True),
        ("Non-Current Assets", False),
        ("Noncurrent assets", False),
        ("Fixed Assets", False),
        ("", False),
        (None, False),
    ],
)
def test_is_current_asset(category, expected):
    assert is_current_asset(category) is expected


@pytest.mark.parametrize(
    "category,expected",
    [
        ("Current Liabilities", True),
        ("Accounts Payable", True),
        ("VAT control", True),
        ("Short-term loans", True),
        ("Non-Current Liabilities", False),
        ("Non Current Liabilities", False),
        ("Long-term debt", False),
    ],
)
def test_is_current_liability(category, expected):
    assert is_current_liability(category) is expected


def test_is_cost_of_sales():
    assert is_cost_of_sales("Cost of Sales")
    assert is_cost_of_sales("Cost of Goods Sold")
    assert not is_cost_of_sales("cost of sales")
    assert not is_cost_of_sales("Operating Expenses")


def _account(name, type, category=""):
    return Account(id="x", code="1", name=name, type=type, category=category)


def test_is_bank_account():
    assert is_bank_account(_account("Operating", AccountType.ASSET, "Current Assets"))
    assert is_bank_account(_account("Visa Card", AccountType.LIABILITY, "Current Liabilities"))
    assert is_bank_account(_account("Petty Cash", AccountType.EXPENSE))
    assert not is_bank_account(_account("Rent", AccountType.EXPENSE, "Operating Expenses"))
    assert not is_bank_account(_account("Accounts Payable", AccountType.LIABILITY, "Current Liabilities"))
