"""Utility functions for balanceit."""

from balanceit.utils.date_parser import parse_date
from balanceit.utils.amount_parser import parse_amount
from balanceit.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
