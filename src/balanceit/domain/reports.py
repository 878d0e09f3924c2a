"""Financial statement reports built from account balances.

All reports are read-only views over the ledger's current accounts. Amounts
are shown on the natural side of each section: revenue, liabilities and
equity as credit minus debit, assets and expenses as debit minus credit.
"""

from collections import defaultdict
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from balanceit.domain.classification import (
    is_cost_of_sales,
    is_current_asset,
    is_current_liability,
)
from balanceit.domain.entities import (
    ACCOUNT_TYPE_ORDER,
    Account,
    AccountType,
    BalanceSheet,
    CashFlowStatement,
    EquityStatement,
    ExpenseShare,
    IncomeStatement,
    LedgerSummary,
    ReportLine,
    TrialBalance,
    TrialBalanceGroup,
    TrialBalanceGrouping,
)
from balanceit.domain.ledger import LedgerService

UNCATEGORIZED = "Uncategorized"
UNGROUPED = "Ungrouped"

ZERO = Decimal("0")
SHARE_PLACES = Decimal("0.1")


def _debit_balance(account: Account) -> Decimal:
    return account.debit - account.credit


def _credit_balance(account: Account) -> Decimal:
    return account.credit - account.debit


def _total(accounts: Iterable[Account], credit_natural: bool = False) -> Decimal:
    balance = _credit_balance if credit_natural else _debit_balance
    return sum((balance(a) for a in accounts), ZERO)


def _account_lines(accounts: Iterable[Account], credit_natural: bool = False) -> tuple[ReportLine, ...]:
    balance = _credit_balance if credit_natural else _debit_balance
    return tuple(ReportLine(label=a.name, amount=balance(a)) for a in accounts)


def category_subtotals(
    accounts: Iterable[Account], credit_natural: bool = False
) -> tuple[ReportLine, ...]:
    """Sum account balances per category, categories in alphabetical order."""
    balance = _credit_balance if credit_natural else _debit_balance
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for account in accounts:
        totals[account.category or UNCATEGORIZED] += balance(account)
    return tuple(ReportLine(label=key, amount=totals[key]) for key in sorted(totals))


def _name_contains(account: Account, *words: str) -> bool:
    name = account.name.lower()
    return any(word in name for word in words)


class ReportService:
    """Service for building financial statements from the ledger."""

    def __init__(self, ledger: LedgerService):
        """Initialize report service.

        Args:
            ledger: Ledger service whose accounts are reported on
        """
        self.ledger = ledger

    def _accounts(self, account_type: Optional[AccountType] = None) -> list[Account]:
        accounts = self.ledger.list_accounts()
        if account_type is None:
            return accounts
        return [a for a in accounts if a.type == account_type]

    def net_income(self) -> Decimal:
        """Revenue (credit minus debit) less every expense (debit minus credit)."""
        revenue = _total(self._accounts(AccountType.REVENUE), credit_natural=True)
        expenses = _total(self._accounts(AccountType.EXPENSE))
        return revenue - expenses

    def trial_balance(
        self,
        group_by: TrialBalanceGrouping | str = TrialBalanceGrouping.NONE,
        category: Optional[str] = None,
    ) -> TrialBalance:
        """Build the trial balance, optionally filtered and grouped.

        Args:
            group_by: Grouping of accounts. Type groups follow the fixed
                Asset, Liability, Equity, Revenue, Expense order; category
                groups are alphabetical; custom groups are alphabetical with
                "Ungrouped" last.
            category: Only include accounts in this exact category

        Returns:
            TrialBalance with accounts sorted by code and debit/credit totals
        """
        group_by = TrialBalanceGrouping(group_by)
        accounts = self._accounts()
        if category is not None:
            accounts = [a for a in accounts if a.category == category]

        groups: tuple[TrialBalanceGroup, ...] = ()
        if group_by != TrialBalanceGrouping.NONE:
            groups = self._group_accounts(accounts, group_by)

        return TrialBalance(
            accounts=tuple(accounts),
            debit_total=sum((a.debit for a in accounts), ZERO),
            credit_total=sum((a.credit for a in accounts), ZERO),
            groups=groups,
        )

    def _group_accounts(
        self, accounts: list[Account], group_by: TrialBalanceGrouping
    ) -> tuple[TrialBalanceGroup, ...]:
        buckets: dict[str, list[Account]] = defaultdict(list)
        for account in accounts:
            if group_by == TrialBalanceGrouping.TYPE:
                key = account.type.value
            elif group_by == TrialBalanceGrouping.CATEGORY:
                key = account.category or UNCATEGORIZED
            else:
                group = None
                if account.custom_group_id:
                    group = self.ledger.get_custom_group(account.custom_group_id)
                key = group.name if group is not None else UNGROUPED
            buckets[key].append(account)

        if group_by == TrialBalanceGrouping.TYPE:
            keys = sorted(buckets, key=lambda k: ACCOUNT_TYPE_ORDER[AccountType(k)])
        elif group_by == TrialBalanceGrouping.CUSTOM:
            keys = sorted(buckets, key=lambda k: (k == UNGROUPED, k))
        else:
            keys = sorted(buckets)

        return tuple(
            TrialBalanceGroup(
                key=key,
                accounts=tuple(sorted(buckets[key], key=lambda a: a.code)),
                debit=sum((a.debit for a in buckets[key]), ZERO),
                credit=sum((a.credit for a in buckets[key]), ZERO),
            )
            for key in keys
        )

    def income_statement(self) -> IncomeStatement:
        """Build the income statement.

        Cost of sales is any account categorised "Cost of Sales" or
        "Cost of Goods Sold"; every other expense is operating.
        """
        revenue = self._accounts(AccountType.REVENUE)
        cost_of_sales = [a for a in self._accounts() if is_cost_of_sales(a.category)]
        operating = [
            a for a in self._accounts(AccountType.EXPENSE) if not is_cost_of_sales(a.category)
        ]

        total_revenue = _total(revenue, credit_natural=True)
        total_cost_of_sales = _total(cost_of_sales)
        gross_profit = total_revenue - total_cost_of_sales
        total_operating = _total(operating)

        return IncomeStatement(
            revenue=category_subtotals(revenue, credit_natural=True),
            cost_of_sales=category_subtotals(cost_of_sales),
            operating_expenses=category_subtotals(operating),
            total_revenue=total_revenue,
            total_cost_of_sales=total_cost_of_sales,
            gross_profit=gross_profit,
            total_operating_expenses=total_operating,
            net_income=gross_profit - total_operating,
        )

    def balance_sheet(self) -> BalanceSheet:
        """Build the balance sheet.

        Current and non-current sections are split by category keywords.
        Equity includes current-period earnings, so a ledger whose trial
        balance agrees also yields a balanced sheet.
        """
        assets = self._accounts(AccountType.ASSET)
        liabilities = self._accounts(AccountType.LIABILITY)
        equity = self._accounts(AccountType.EQUITY)

        current_assets = [a for a in assets if is_current_asset(a.category)]
        non_current_assets = [a for a in assets if not is_current_asset(a.category)]
        current_liabilities = [a for a in liabilities if is_current_liability(a.category)]
        non_current_liabilities = [
            a for a in liabilities if not is_current_liability(a.category)
        ]

        total_current_assets = _total(current_assets)
        total_non_current_assets = _total(non_current_assets)
        total_current_liabilities = _total(current_liabilities, credit_natural=True)
        total_non_current_liabilities = _total(non_current_liabilities, credit_natural=True)
        earnings = self.net_income()

        return BalanceSheet(
            current_assets=_account_lines(current_assets),
            non_current_assets=_account_lines(non_current_assets),
            current_liabilities=_account_lines(current_liabilities, credit_natural=True),
            non_current_liabilities=_account_lines(non_current_liabilities, credit_natural=True),
            equity=_account_lines(equity, credit_natural=True),
            total_current_assets=total_current_assets,
            total_non_current_assets=total_non_current_assets,
            total_assets=total_current_assets + total_non_current_assets,
            total_current_liabilities=total_current_liabilities,
            total_non_current_liabilities=total_non_current_liabilities,
            total_liabilities=total_current_liabilities + total_non_current_liabilities,
            current_period_earnings=earnings,
            total_equity=_total(equity, credit_natural=True) + earnings,
        )

    def cash_flow_statement(self) -> CashFlowStatement:
        """Build a cash flow statement using the indirect method.

        Balances stand in for period movements, so beginning cash is derived
        as ending cash less the net change.
        """
        net_income = self.net_income()
        assets = self._accounts(AccountType.ASSET)
        liabilities = self._accounts(AccountType.LIABILITY)
        equity = self._accounts(AccountType.EQUITY)

        working_assets = [
            a
            for a in assets
            if a.category == "Current Assets" and not _name_contains(a, "cash")
        ]
        working_liabilities = [a for a in liabilities if a.category == "Current Liabilities"]
        operating = tuple(
            ReportLine(label=f"(Increase) in {a.name}", amount=-_debit_balance(a))
            for a in working_assets
        ) + tuple(
            ReportLine(label=f"Increase in {a.name}", amount=_credit_balance(a))
            for a in working_liabilities
        )

        investing = tuple(
            ReportLine(label=f"Purchase of {a.name}", amount=-_debit_balance(a))
            for a in assets
            if a.category != "Current Assets"
        )

        funding = [a for a in liabilities if a.category != "Current Liabilities"] + [
            a for a in equity if a.category != "Retained Earnings"
        ]
        financing = tuple(
            ReportLine(label=f"Proceeds from {a.name}", amount=_credit_balance(a))
            for a in funding
        )

        net_operating = net_income + sum((line.amount for line in operating), ZERO)
        net_investing = sum((line.amount for line in investing), ZERO)
        net_financing = sum((line.amount for line in financing), ZERO)

        cash_account = next((a for a in self._accounts() if _name_contains(a, "cash")), None)
        ending_cash = _debit_balance(cash_account) if cash_account is not None else ZERO

        return CashFlowStatement(
            net_income=net_income,
            operating_adjustments=operating,
            investing=investing,
            financing=financing,
            net_cash_from_operating=net_operating,
            net_cash_from_investing=net_investing,
            net_cash_from_financing=net_financing,
            beginning_cash=ending_cash - (net_operating + net_investing + net_financing),
            ending_cash=ending_cash,
        )

    def changes_in_equity(self) -> EquityStatement:
        """Build the statement of changes in equity.

        The capital, retained earnings and dividend accounts are the first
        equity accounts (by code) whose names mention capital/share,
        retained/earnings and dividend/drawing respectively.
        """
        equity = self._accounts(AccountType.EQUITY)
        capital_account = next((a for a in equity if _name_contains(a, "capital", "share")), None)
        retained_account = next(
            (a for a in equity if _name_contains(a, "retained", "earnings")), None
        )
        dividends_account = next(
            (a for a in equity if _name_contains(a, "dividend", "drawing")), None
        )

        capital = _credit_balance(capital_account) if capital_account else ZERO
        opening = _credit_balance(retained_account) if retained_account else ZERO
        dividends = _debit_balance(dividends_account) if dividends_account else ZERO
        net_income = self.net_income()

        return EquityStatement(
            capital=capital,
            opening_retained_earnings=opening,
            net_income=net_income,
            dividends=dividends,
            closing_retained_earnings=opening + net_income - dividends,
            lines=_account_lines(equity, credit_natural=True),
        )

    def summary(self) -> LedgerSummary:
        """Headline totals with each expense account's share of total expenses.

        The breakdown lists expense accounts largest first; shares are
        percentages rounded to one decimal place.
        """
        expenses = sorted(
            self._accounts(AccountType.EXPENSE), key=_debit_balance, reverse=True
        )
        total_revenue = _total(self._accounts(AccountType.REVENUE), credit_natural=True)
        total_expenses = _total(expenses)

        breakdown = []
        for account in expenses:
            amount = _debit_balance(account)
            share = ZERO
            if total_expenses > 0:
                share = (amount / total_expenses * 100).quantize(SHARE_PLACES, rounding=ROUND_HALF_UP)
            breakdown.append(ExpenseShare(account=account, amount=amount, share=share))

        return LedgerSummary(
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_income=total_revenue - total_expenses,
            total_assets=_total(self._accounts(AccountType.ASSET)),
            total_liabilities=_total(self._accounts(AccountType.LIABILITY), credit_natural=True),
            expense_breakdown=tuple(breakdown),
        )

    def notes(self) -> tuple[Account, ...]:
        """Accounts carrying a non-blank note, ordered by code."""
        return tuple(a for a in self._accounts() if a.note and a.note.strip())
