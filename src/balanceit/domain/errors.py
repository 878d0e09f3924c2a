"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def account_not_found(account_id: str) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def custom_group_not_found(group_id: str) -> str:
    """Return message for missing custom group."""
    return f"Custom group {group_id} not found"


def duplicate_account_code(code: str) -> str:
    """Return message for an account code that is already in use."""
    return f"Account with code '{code}' already exists"


def missing_columns(columns: list[str]) -> str:
    """Return message for CSV files lacking required columns."""
    return f"Missing required columns: {', '.join(columns)}"


def unbalanced_journal(debit_total, credit_total) -> str:
    """Return message for a journal entry whose sides differ."""
    return (
        f"Journal entry is out of balance: debits {debit_total:,.2f} "
        f"!= credits {credit_total:,.2f}"
    )
