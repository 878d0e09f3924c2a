"""Domain model entities for balanceit.

These are pure data classes representing bookkeeping concepts, independent of
database schema. Balances are never mutated in place: the ledger service swaps
in a replaced copy, so any snapshot handed to a caller stays stable.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Closed set of account types. Drives sign conventions in reports."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    REVENUE = "Revenue"
    EXPENSE = "Expense"

    @property
    def is_debit_natural(self) -> bool:
        """True when the type accumulates its value on the debit side."""
        return self in (AccountType.ASSET, AccountType.EXPENSE)


ACCOUNT_TYPE_ORDER = {
    AccountType.ASSET: 1,
    AccountType.LIABILITY: 2,
    AccountType.EQUITY: 3,
    AccountType.REVENUE: 4,
    AccountType.EXPENSE: 5,
}


class TrialBalanceGrouping(str, Enum):
    """Ways to group accounts in a trial balance."""

    NONE = "none"
    TYPE = "type"
    CATEGORY = "category"
    CUSTOM = "custom"


@dataclass(frozen=True)
class Account:
    """Ledger account with gross debit and credit totals."""

    id: str
    code: str
    name: str
    type: AccountType
    category: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    note: Optional[str] = None
    custom_group_id: Optional[str] = None

    @property
    def net_debit(self) -> Decimal:
        """Signed balance as debit minus credit."""
        return self.debit - self.credit

    @property
    def natural_balance(self) -> Decimal:
        """Balance expressed on the account type's natural side."""
        if self.type.is_debit_natural:
            return self.debit - self.credit
        return self.credit - self.debit


@dataclass(frozen=True)
class Transaction:
    """Posted transaction against exactly one account.

    ``amount`` is always in base currency: positive increases the debit side,
    negative increases the credit side, whatever the account type.
    """

    id: str
    account_id: str
    date: str
    description: str
    amount: Decimal
    reference: Optional[str] = None
    original_currency: Optional[str] = None
    original_amount: Optional[Decimal] = None
    exchange_rate: Optional[Decimal] = None


@dataclass(frozen=True)
class BankTransaction:
    """Bank statement line. Ephemeral, never stored in the ledger."""

    id: str
    date: str
    description: str
    amount: Decimal


@dataclass(frozen=True)
class CustomGroup:
    """User-defined account grouping label."""

    id: str
    name: str


@dataclass(frozen=True)
class Currency:
    """Currency with its conversion rate (1 unit of this currency = rate base units)."""

    code: str
    name: str
    symbol: str
    rate: Decimal


@dataclass(frozen=True)
class JournalLine:
    """One line of a manual journal entry."""

    account_id: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    description: Optional[str] = None

    @property
    def net_amount(self) -> Decimal:
        return self.debit - self.credit


@dataclass(frozen=True)
class ReconciliationMatch:
    """A bank line paired with the ledger transaction it was matched to."""

    bank: BankTransaction
    ledger: Transaction
    score: int


@dataclass(frozen=True)
class ReconciliationResult:
    """Three-way partition produced by the reconciliation matcher."""

    matched: tuple[ReconciliationMatch, ...] = ()
    unmatched_bank: tuple[BankTransaction, ...] = ()
    unmatched_ledger: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class ReconciliationSummary:
    """Headline figures for a reconciliation view."""

    account_id: str
    book_balance: Decimal
    statement_total: Decimal
    matched_count: int
    unmatched_bank_count: int
    unmatched_ledger_count: int


@dataclass(frozen=True)
class ImportBatch:
    """Accounts and transactions produced by a ledger CSV file."""

    accounts: tuple[Account, ...]
    transactions: tuple[Transaction, ...] = ()

    @property
    def debit_total(self) -> Decimal:
        return sum((a.debit for a in self.accounts), Decimal("0"))

    @property
    def credit_total(self) -> Decimal:
        return sum((a.credit for a in self.accounts), Decimal("0"))


@dataclass(frozen=True)
class ReportLine:
    """Labelled amount in a financial statement."""

    label: str
    amount: Decimal


@dataclass(frozen=True)
class TrialBalanceGroup:
    """Accounts sharing a grouping key, with subtotals."""

    key: str
    accounts: tuple[Account, ...]
    debit: Decimal
    credit: Decimal


@dataclass(frozen=True)
class TrialBalance:
    """Full list of accounts with totals."""

    accounts: tuple[Account, ...]
    debit_total: Decimal
    credit_total: Decimal
    groups: tuple[TrialBalanceGroup, ...] = ()

    @property
    def difference(self) -> Decimal:
        return self.debit_total - self.credit_total

    @property
    def is_balanced(self) -> bool:
        return abs(self.difference) < Decimal("0.01")


@dataclass(frozen=True)
class IncomeStatement:
    revenue: tuple[ReportLine, ...]
    cost_of_sales: tuple[ReportLine, ...]
    operating_expenses: tuple[ReportLine, ...]
    total_revenue: Decimal
    total_cost_of_sales: Decimal
    gross_profit: Decimal
    total_operating_expenses: Decimal
    net_income: Decimal


@dataclass(frozen=True)
class BalanceSheet:
    current_assets: tuple[ReportLine, ...]
    non_current_assets: tuple[ReportLine, ...]
    current_liabilities: tuple[ReportLine, ...]
    non_current_liabilities: tuple[ReportLine, ...]
    equity: tuple[ReportLine, ...]
    total_current_assets: Decimal
    total_non_current_assets: Decimal
    total_assets: Decimal
    total_current_liabilities: Decimal
    total_non_current_liabilities: Decimal
    total_liabilities: Decimal
    current_period_earnings: Decimal
    total_equity: Decimal

    @property
    def net_working_capital(self) -> Decimal:
        return self.total_current_assets - self.total_current_liabilities

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def is_balanced(self) -> bool:
        return abs(self.total_assets - self.total_liabilities_and_equity) < Decimal("0.01")


@dataclass(frozen=True)
class CashFlowStatement:
    net_income: Decimal
    operating_adjustments: tuple[ReportLine, ...]
    investing: tuple[ReportLine, ...]
    financing: tuple[ReportLine, ...]
    net_cash_from_operating: Decimal
    net_cash_from_investing: Decimal
    net_cash_from_financing: Decimal
    beginning_cash: Decimal
    ending_cash: Decimal

    @property
    def net_change_in_cash(self) -> Decimal:
        return (
            self.net_cash_from_operating
            + self.net_cash_from_investing
            + self.net_cash_from_financing
        )


@dataclass(frozen=True)
class EquityStatement:
    capital: Decimal
    opening_retained_earnings: Decimal
    net_income: Decimal
    dividends: Decimal
    closing_retained_earnings: Decimal
    lines: tuple[ReportLine, ...] = field(default_factory=tuple)

    @property
    def opening_total(self) -> Decimal:
        return self.capital + self.opening_retained_earnings

    @property
    def closing_total(self) -> Decimal:
        return self.capital + self.closing_retained_earnings


@dataclass(frozen=True)
class ExpenseShare:
    """An expense account's part of total expenses, as a percentage."""

    account: Account
    amount: Decimal
    share: Decimal


@dataclass(frozen=True)
class LedgerSummary:
    """Headline figures for the whole ledger."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_income: Decimal
    total_assets: Decimal
    total_liabilities: Decimal
    expense_breakdown: tuple[ExpenseShare, ...] = ()
