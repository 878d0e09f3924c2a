"""Financial statement commands."""

import click
from balanceit.cli.formatting import echo_row, echo_rule, format_amount
from balanceit.domain.entities import TrialBalanceGrouping
from balanceit.domain.reports import ReportService


@click.group()
def report_group():
    """Produce financial statements from current balances."""
    pass


def _echo_account(acc) -> None:
    click.echo(
        f"  {acc.code:6s} {acc.name[:32]:<32} {format_amount(acc.debit):>16s} {format_amount(acc.credit):>16s}"
    )


@report_group.command("trial-balance")
@click.option(
    "--group-by",
    type=click.Choice([g.value for g in TrialBalanceGrouping]),
    default=TrialBalanceGrouping.NONE.value,
    show_default=True,
    help="Group accounts by type, category or custom group",
)
@click.option("--category", help="Only include accounts in this category")
@click.pass_context
def trial_balance(ctx, group_by: str, category: str | None):
    """Show every account's debit and credit totals."""
    report = ReportService(ctx.obj["ledger"]).trial_balance(group_by=group_by, category=category)

    if not report.accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\n{'Code':8s} {'Account':<32} {'Debit':>16s} {'Credit':>16s}")
    echo_rule()
    if report.groups:
        for group in report.groups:
            click.echo(f"{group.key}")
            for acc in group.accounts:
                _echo_account(acc)
            click.echo(
                f"  {'Subtotal':<39} {format_amount(group.debit):>16s} {format_amount(group.credit):>16s}"
            )
    else:
        for acc in report.accounts:
            _echo_account(acc)
    echo_rule()
    click.echo(
        f"  {'TOTAL':<39} {format_amount(report.debit_total):>16s} {format_amount(report.credit_total):>16s}"
    )
    if report.is_balanced:
        click.echo("Trial balance is balanced.")
    else:
        click.echo(f"Trial balance is out of balance by {format_amount(report.difference)}.")


@report_group.command("income")
@click.pass_context
def income_statement(ctx):
    """Show the income statement."""
    report = ReportService(ctx.obj["ledger"]).income_statement()

    click.echo("\nIncome Statement")
    echo_rule("=")
    click.echo("Revenue")
    for line in report.revenue:
        echo_row(line.label, line.amount, indent=4)
    echo_row("Total Revenue", report.total_revenue)
    click.echo("Cost of Sales")
    for line in report.cost_of_sales:
        echo_row(line.label, line.amount, indent=4)
    echo_row("Total Cost of Sales", report.total_cost_of_sales)
    echo_rule()
    echo_row("Gross Profit", report.gross_profit, indent=0, width=46)
    click.echo("Operating Expenses")
    for line in report.operating_expenses:
        echo_row(line.label, line.amount, indent=4)
    echo_row("Total Operating Expenses", report.total_operating_expenses)
    echo_rule()
    echo_row("Net Income", report.net_income, indent=0, width=46)


@report_group.command("balance-sheet")
@click.pass_context
def balance_sheet(ctx):
    """Show the balance sheet."""
    report = ReportService(ctx.obj["ledger"]).balance_sheet()

    click.echo("\nBalance Sheet")
    echo_rule("=")
    sections = [
        ("Current Assets", report.current_assets, report.total_current_assets),
        ("Non-Current Assets", report.non_current_assets, report.total_non_current_assets),
    ]
    for title, lines, total in sections:
        click.echo(title)
        for line in lines:
            echo_row(line.label, line.amount, indent=4)
        echo_row(f"Total {title}", total)
    echo_row("Total Assets", report.total_assets, indent=0, width=46)
    echo_rule()

    sections = [
        ("Current Liabilities", report.current_liabilities, report.total_current_liabilities),
        (
            "Non-Current Liabilities",
            report.non_current_liabilities,
            report.total_non_current_liabilities,
        ),
    ]
    for title, lines, total in sections:
        click.echo(title)
        for line in lines:
            echo_row(line.label, line.amount, indent=4)
        echo_row(f"Total {title}", total)
    echo_row("Total Liabilities", report.total_liabilities, indent=0, width=46)

    click.echo("Equity")
    for line in report.equity:
        echo_row(line.label, line.amount, indent=4)
    echo_row("Current Period Earnings", report.current_period_earnings, indent=4, width=42)
    echo_row("Total Equity", report.total_equity)
    echo_rule()
    echo_row("Total Liabilities & Equity", report.total_liabilities_and_equity, indent=0, width=46)
    echo_row("Net Working Capital", report.net_working_capital, indent=0, width=46)
    if not report.is_balanced:
        click.echo(
            "Warning: assets differ from liabilities and equity by "
            f"{format_amount(report.total_assets - report.total_liabilities_and_equity)}",
            err=True,
        )


@report_group.command("cash-flow")
@click.pass_context
def cash_flow(ctx):
    """Show the cash flow statement (indirect method)."""
    report = ReportService(ctx.obj["ledger"]).cash_flow_statement()

    click.echo("\nStatement of Cash Flows")
    echo_rule("=")
    click.echo("Cash flows from operating activities")
    echo_row("Net Income", report.net_income, indent=4, width=42)
    for line in report.operating_adjustments:
        echo_row(line.label, line.amount, indent=4, width=42)
    echo_row("Net cash from operating activities", report.net_cash_from_operating)
    click.echo("Cash flows from investing activities")
    for line in report.investing:
        echo_row(line.label, line.amount, indent=4, width=42)
    echo_row("Net cash from investing activities", report.net_cash_from_investing)
    click.echo("Cash flows from financing activities")
    for line in report.financing:
        echo_row(line.label, line.amount, indent=4, width=42)
    echo_row("Net cash from financing activities", report.net_cash_from_financing)
    echo_rule()
    echo_row("Net increase in cash", report.net_change_in_cash, indent=0, width=46)
    echo_row("Cash at beginning of period", report.beginning_cash, indent=0, width=46)
    echo_row("Cash at end of period", report.ending_cash, indent=0, width=46)


@report_group.command("equity")
@click.pass_context
def changes_in_equity(ctx):
    """Show the statement of changes in equity."""
    report = ReportService(ctx.obj["ledger"]).changes_in_equity()

    click.echo("\nStatement of Changes in Equity")
    echo_rule("=")
    echo_row("Share capital", report.capital, indent=0, width=46)
    echo_row("Opening retained earnings", report.opening_retained_earnings, indent=0, width=46)
    echo_row("Opening total equity", report.opening_total, indent=0, width=46)
    echo_rule()
    echo_row("Net income", report.net_income)
    echo_row("Dividends", -report.dividends)
    echo_rule()
    echo_row("Closing retained earnings", report.closing_retained_earnings, indent=0, width=46)
    echo_row("Closing total equity", report.closing_total, indent=0, width=46)


@report_group.command("summary")
@click.pass_context
def summary(ctx):
    """Show headline totals and the expense breakdown."""
    ledger = ctx.obj["ledger"]
    report = ReportService(ledger).summary()

    click.echo(f"\nLedger Summary ({ledger.base_currency})")
    echo_rule("=")
    echo_row("Total Revenue", report.total_revenue, indent=0, width=46)
    echo_row("Total Expenses", report.total_expenses, indent=0, width=46)
    echo_row("Net Income", report.net_income, indent=0, width=46)
    echo_row("Total Assets", report.total_assets, indent=0, width=46)
    echo_row("Total Liabilities", report.total_liabilities, indent=0, width=46)

    if not report.expense_breakdown:
        return
    click.echo("\nExpense Breakdown")
    echo_rule()
    for item in report.expense_breakdown:
        click.echo(
            f"  {item.account.code:6s} {item.account.name[:32]:<32} "
            f"{format_amount(item.amount):>16s} {item.share:>7.1f}%"
        )


@report_group.command("notes")
@click.pass_context
def notes(ctx):
    """Show the notes attached to accounts."""
    accounts = ReportService(ctx.obj["ledger"]).notes()

    if not accounts:
        click.echo("No account notes. Add one with 'balanceit account update ACCOUNT --note TEXT'.")
        return

    click.echo("\nNotes to the Financial Statements")
    echo_rule("=")
    for number, acc in enumerate(accounts, start=1):
        click.echo(f"{number}. {acc.name} ({acc.code}) - {acc.category}")
        click.echo(f"   {acc.note}")
        click.echo(
            f"   Debit: {format_amount(acc.debit)}  Credit: {format_amount(acc.credit)}"
        )


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
