"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, making it easy to change when
the database schema changes.
"""

from decimal import Decimal
from typing import Optional

from balanceit.domain import entities as domain
from balanceit.database.models import (
    Account as ORMAccount,
    CustomGroup as ORMCustomGroup,
    Transaction as ORMTransaction,
)


def _to_decimal(value) -> Optional[Decimal]:
    if value is None:
        return None
    return value if isinstance(value, Decimal) else Decimal(str(value))


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        category=orm_account.category or "",
        debit=_to_decimal(orm_account.debit) or Decimal("0"),
        credit=_to_decimal(orm_account.credit) or Decimal("0"),
        note=orm_account.note,
        custom_group_id=orm_account.custom_group_id,
    )


def account_to_orm(account: domain.Account) -> ORMAccount:
    """Convert domain Account entity to a detached SQLAlchemy Account model."""
    return ORMAccount(
        id=account.id,
        code=account.code,
        name=account.name,
        type=account.type.value,
        category=account.category,
        debit=account.debit,
        credit=account.credit,
        note=account.note,
        custom_group_id=account.custom_group_id,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        description=orm_transaction.description or "",
        amount=_to_decimal(orm_transaction.amount),
        reference=orm_transaction.reference,
        original_currency=orm_transaction.original_currency,
        original_amount=_to_decimal(orm_transaction.original_amount),
        exchange_rate=_to_decimal(orm_transaction.exchange_rate),
    )


def apply_transaction(orm_transaction: ORMTransaction, transaction: domain.Transaction) -> None:
    """Copy domain Transaction fields onto a SQLAlchemy Transaction model."""
    orm_transaction.id = transaction.id
    orm_transaction.account_id = transaction.account_id
    orm_transaction.date = transaction.date
    orm_transaction.description = transaction.description
    orm_transaction.amount = transaction.amount
    orm_transaction.reference = transaction.reference
    orm_transaction.original_currency = transaction.original_currency
    orm_transaction.original_amount = transaction.original_amount
    orm_transaction.exchange_rate = transaction.exchange_rate


def custom_group_to_domain(orm_group: ORMCustomGroup) -> domain.CustomGroup:
    """Convert SQLAlchemy CustomGroup model to domain CustomGroup entity."""
    return domain.CustomGroup(id=orm_group.id, name=orm_group.name)
