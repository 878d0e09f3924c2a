"""Utility for resolving account references to IDs."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from balanceit.domain.ledger import LedgerService


def resolve_account(ledger: "LedgerService", account: str) -> str:
    """Resolve an account ID, code or name to an account ID.

    IDs are tried first, then codes, then exact names.

    Args:
        ledger: LedgerService instance
        account: Account ID, code or name

    Returns:
        Account ID

    Raises:
        ValueError: If no account matches
    """
    account = str(account).strip()
    if ledger.get_account(account) is not None:
        return account

    by_code = ledger.get_account_by_code(account)
    if by_code is not None:
        return by_code.id

    for acc in ledger.list_accounts():
        if acc.name == account:
            return acc.id

    raise ValueError(f"Account '{account}' not found")
