"""Plain-text rendering helpers shared by commands."""

import click


def format_amount(amount) -> str:
    """Render an amount with thousands separators and two decimals."""
    return f"{amount:,.2f}"


def echo_row(label: str, amount, indent: int = 2, width: int = 44) -> None:
    click.echo(f"{' ' * indent}{label:<{width}} {format_amount(amount):>16}")


def echo_rule(char: str = "-", width: int = 80) -> None:
    click.echo(char * width)


def format_money(amount, symbol: str) -> str:
    """Render an amount behind a currency symbol, sign first: -€100.00."""
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{format_amount(abs(amount))}"
