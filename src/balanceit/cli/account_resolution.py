"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from balanceit.domain.ledger import LedgerService
from balanceit.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, ledger: LedgerService, account: str) -> str:
    """Resolve account ID, code or name, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    try:
        return resolve_account(ledger, account)
    except ValueError as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(1)
