"""Amount parsing utilities."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import re

# Scale of the Numeric(18, 6) money columns.
MONEY_QUANTUM = Decimal("0.000001")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "-$123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)
    - '"1,234.56"' (a still-quoted CSV cell)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace and any surrounding quotes
    amount_str = amount_str.strip()
    if len(amount_str) >= 2 and amount_str.startswith('"') and amount_str.endswith('"'):
        amount_str = amount_str[1:-1].replace('""', '"').strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"[$€£¥₹]", "", amount_str)

    # Remove commas
    amount_str = amount_str.replace(",", "")

    # Remove whitespace again
    amount_str = amount_str.strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return -amount if is_negative else amount


def parse_amount_or_zero(amount_str: str | None) -> Decimal:
    """Parse an amount leniently: anything unparseable counts as zero."""
    try:
        return parse_amount(amount_str or "")
    except ValueError:
        return Decimal("0")


def to_decimal(value) -> Decimal:
    """Coerce an int, float, str or Decimal into a Decimal.

    Floats go through their string form so 1.09 stays 1.09.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, str):
        return parse_amount(value)
    return Decimal(value)


def round_money(value) -> Decimal:
    """Round an amount to the six decimal places the database keeps.

    Balances and transaction amounts are stored separately, so both must be
    rounded the same way before either is saved.
    """
    return to_decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
