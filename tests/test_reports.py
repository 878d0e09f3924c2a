"""Tests for financial statement reports on the demonstration ledger."""

from decimal import Decimal

from balanceit.domain.entities import AccountType, JournalLine, ReportLine, TrialBalanceGrouping


def test_trial_balance_totals(demo_ledger, report_service):
    report = report_service.trial_balance()

    assert len(report.accounts) == 16
    assert report.debit_total == Decimal("532000")
    assert report.credit_total == Decimal("532000")
    assert report.is_balanced
    assert report.groups == ()
    assert [a.code for a in report.accounts] == sorted(a.code for a in report.accounts)


def test_trial_balance_out_of_balance(demo_ledger, report_service):
    demo_ledger.set_account_balance("1", debit=Decimal("150000.02"))
    report = report_service.trial_balance()
    assert not report.is_balanced
    assert report.difference == Decimal("0.02")


def test_trial_balance_grouped_by_type(demo_ledger, report_service):
    report = report_service.trial_balance(group_by=TrialBalanceGrouping.TYPE)

    assert [g.key for g in report.groups] == ["Asset", "Liability", "Equity", "Revenue", "Expense"]
    assets = report.groups[0]
    assert assets.debit == Decimal("232000")
    assert [a.code for a in assets.accounts] == ["1010", "1020", "1030", "1200"]


def test_trial_balance_grouped_by_category(demo_ledger, report_service):
    demo_ledger.add_account(code="9000", name="Suspense", type=AccountType.ASSET)
    report = report_service.trial_balance(group_by="category")

    assert [g.key for g in report.groups] == [
        "Cost of Sales",
        "Current Assets",
        "Current Liabilities",
        "Equity",
        "Non-Current Assets",
        "Non-Current Liabilities",
        "Operating Expenses",
        "Revenue",
        "Uncategorized",
    ]


def test_trial_balance_grouped_by_custom_group(demo_ledger, report_service):
    overheads = demo_ledger.add_custom_group("Overheads")
    banking = demo_ledger.add_custom_group("Banking")
    demo_ledger.update_account_details("13", custom_group_id=overheads.id)
    demo_ledger.update_account_details("15", custom_group_id=overheads.id)
    demo_ledger.update_account_details("1", custom_group_id=banking.id)

    report = report_service.trial_balance(group_by=TrialBalanceGrouping.CUSTOM)

    assert [g.key for g in report.groups] == ["Banking", "Overheads", "Ungrouped"]
    assert report.groups[1].debit == Decimal("30000")
    assert len(report.groups[2].accounts) == 13


def test_trial_balance_category_filter(demo_ledger, report_service):
    report = report_service.trial_balance(category="Current Assets")
    assert [a.code for a in report.accounts] == ["1010", "1020", "1030"]
    assert report.debit_total == Decimal("220000")


def test_income_statement(demo_ledger, report_service):
    report = report_service.income_statement()

    assert report.total_revenue == Decimal("300000")
    assert report.total_cost_of_sales == Decimal("110000")
    assert report.gross_profit == Decimal("190000")
    assert report.total_operating_expenses == Decimal("190000")
    assert report.net_income == Decimal("0")
    assert report.revenue == (ReportLine("Revenue", Decimal("300000")),)
    assert report.operating_expenses == (ReportLine("Operating Expenses", Decimal("190000")),)


def test_balance_sheet(demo_ledger, report_service):
    report = report_service.balance_sheet()

    assert report.total_current_assets == Decimal("220000")
    assert report.total_non_current_assets == Decimal("12000")
    assert report.total_assets == Decimal("232000")
    assert report.total_current_liabilities == Decimal("40000")
    assert report.total_non_current_liabilities == Decimal("100000")
    assert [line.label for line in report.non_current_liabilities] == ["Bank Loan (Long Term)"]
    assert report.current_period_earnings == Decimal("0")
    assert report.total_equity == Decimal("92000")
    assert report.net_working_capital == Decimal("180000")
    assert report.is_balanced


def test_statements_stay_consistent_after_posting(demo_ledger, report_service):
    demo_ledger.post_journal_entry(
        "2024-03-25",
        "Cash sale",
        [
            JournalLine(account_id="1", debit=Decimal("1000")),
            JournalLine(account_id="10", credit=Decimal("1000")),
        ],
    )

    assert report_service.trial_balance().is_balanced
    assert report_service.income_statement().net_income == Decimal("1000")
    sheet = report_service.balance_sheet()
    assert sheet.current_period_earnings == Decimal("1000")
    assert sheet.is_balanced
    assert report_service.changes_in_equity().closing_retained_earnings == Decimal("13000")


def test_cash_flow_statement(demo_ledger, report_service):
    report = report_service.cash_flow_statement()

    assert report.net_income == Decimal("0")
    assert [(line.label, line.amount) for line in report.operating_adjustments] == [
        ("(Increase) in Accounts Receivable", Decimal("-45000")),
        ("(Increase) in Inventory", Decimal("-25000")),
        ("Increase in Accounts Payable", Decimal("35000")),
        ("Increase in Sales Tax Payable", Decimal("5000")),
    ]
    assert report.net_cash_from_operating == Decimal("-30000")
    assert report.net_cash_from_investing == Decimal("-12000")
    assert report.net_cash_from_financing == Decimal("192000")
    assert report.net_change_in_cash == Decimal("150000")
    assert report.ending_cash == Decimal("150000")
    assert report.beginning_cash == Decimal("0")


def test_cash_flow_without_cash_account(ledger, report_service):
    ledger.add_account(code="4010", name="Sales", type=AccountType.REVENUE, credit=Decimal("10"))
    report = report_service.cash_flow_statement()
    assert report.ending_cash == Decimal("0")
    assert report.beginning_cash == Decimal("-10")


def test_changes_in_equity(demo_ledger, report_service):
    report = report_service.changes_in_equity()

    assert report.capital == Decimal("80000")
    assert report.opening_retained_earnings == Decimal("12000")
    assert report.net_income == Decimal("0")
    assert report.dividends == Decimal("0")
    assert report.closing_retained_earnings == Decimal("12000")
    assert report.opening_total == Decimal("92000")
    assert report.closing_total == Decimal("92000")


def test_dividends_reduce_retained_earnings(demo_ledger, report_service):
    demo_ledger.add_account(
        code="3030", name="Dividends Paid", type=AccountType.EQUITY, category="Equity",
        debit=Decimal("5000"),
    )
    report = report_service.changes_in_equity()
    assert report.dividends == Decimal("5000")
    assert report.closing_retained_earnings == Decimal("7000")


def test_reports_on_empty_ledger(report_service):
    assert report_service.trial_balance().is_balanced
    assert report_service.income_statement().net_income == 0
    assert report_service.balance_sheet().is_balanced
    assert report_service.changes_in_equity().closing_total == 0
    assert report_service.summary().expense_breakdown == ()
    assert report_service.notes() == ()


def test_summary(demo_ledger, report_service):
    summary = report_service.summary()

    assert summary.total_revenue == Decimal("300000")
    assert summary.total_expenses == Decimal("300000")
    assert summary.net_income == Decimal("0")
    assert summary.total_assets == Decimal("232000")
    assert summary.total_liabilities == Decimal("140000")
    assert [(item.account.code, item.share) for item in summary.expense_breakdown] == [
        ("5110", Decimal("46.7")),
        ("5010", Decimal("36.7")),
        ("5100", Decimal("8.0")),
        ("5130", Decimal("6.7")),
        ("5120", Decimal("2.0")),
    ]


def test_summary_share_is_zero_without_expenses(ledger, report_service):
    ledger.add_account(code="5100", name="Rent", type=AccountType.EXPENSE, credit="10")
    summary = report_service.summary()
    assert summary.total_expenses == Decimal("-10")
    assert summary.expense_breakdown[0].share == Decimal("0")


def test_notes_lists_accounts_with_text(demo_ledger, report_service):
    demo_ledger.update_account_details("5", note="   ")

    assert [a.code for a in report_service.notes()] == ["1010", "1030", "1200", "2100"]
