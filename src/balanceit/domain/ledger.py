"""Ledger domain service: the posting engine.

The service owns the account, transaction and custom group collections.
Every change to a transaction is paired with the exactly-inverse change to
its account's debit/credit totals before the next operation can read state,
so that for any account without a manual override:

    account.debit - account.credit == baseline + sum(live transaction amounts)
"""

import logging
import time
import uuid
from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Iterable, Optional

from balanceit.domain.currency import (
    DEFAULT_BASE_CURRENCY,
    CurrencyTable,
    convert_to_base,
)
from balanceit.domain.entities import (
    Account,
    AccountType,
    CustomGroup,
    JournalLine,
    Transaction,
)
from balanceit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    custom_group_not_found,
    duplicate_account_code,
    unbalanced_journal,
)
from balanceit.utils.amount_parser import round_money, to_decimal

if TYPE_CHECKING:
    from balanceit.database.base import Database

logger = logging.getLogger(__name__)

JOURNAL_TOLERANCE = Decimal("0.01")
BASE_CURRENCY_SETTING = "base_currency"


def generate_id(prefix: str) -> str:
    """Generate an ID that stays unique for objects created in the same tick."""
    return f"{prefix}-{time.time_ns() // 1000}-{uuid.uuid4().hex[:8]}"


def apply_amount(account: Account, amount: Decimal) -> Account:
    """Return the account with a transaction amount's effect added."""
    if amount > 0:
        return replace(account, debit=account.debit + amount)
    return replace(account, credit=account.credit + abs(amount))


def reverse_amount(account: Account, amount: Decimal) -> Account:
    """Return the account with a transaction amount's effect removed."""
    if amount > 0:
        return replace(account, debit=account.debit - amount)
    return replace(account, credit=account.credit - abs(amount))


class LedgerService:
    """Service owning accounts and transactions and keeping them consistent."""

    def __init__(
        self,
        db: Optional["Database"] = None,
        base_currency: Optional[str] = None,
        currency_table: Optional[CurrencyTable] = None,
    ):
        """Initialize ledger service.

        Args:
            db: Optional storage collaborator. The ledger is loaded from it once
                and every mutation is saved back to it.
            base_currency: Currency all balances are expressed in. Defaults to
                the currency stored with the ledger, then to USD.
            currency_table: Rates used to convert foreign amounts on posting
        """
        self.db = db
        self.stored_base_currency = (
            db.get_setting(BASE_CURRENCY_SETTING) if db is not None else None
        )
        self.base_currency = (
            base_currency or self.stored_base_currency or DEFAULT_BASE_CURRENCY
        ).upper()
        self.currency_table = currency_table if currency_table is not None else CurrencyTable()
        self._accounts: dict[str, Account] = {}
        self._transactions: dict[str, Transaction] = {}
        self._custom_groups: dict[str, CustomGroup] = {}
        if db is None:
            return

        self.reload()
        if self.stored_base_currency is None:
            self._store_base_currency()
        elif self.base_currency_mismatch:
            logger.info(
                "Ledger is kept in %s but %s was requested; stored amounts are not converted",
                self.stored_base_currency,
                self.base_currency,
            )

    @property
    def base_currency_mismatch(self) -> bool:
        """True when the requested base currency differs from the stored one."""
        return (
            self.stored_base_currency is not None
            and self.stored_base_currency != self.base_currency
        )

    def _store_base_currency(self) -> None:
        self.db.save_setting(BASE_CURRENCY_SETTING, self.base_currency)
        self.stored_base_currency = self.base_currency

    def reload(self) -> None:
        """Load the full ledger from the database."""
        if self.db is None:
            return
        self._accounts = {a.id: a for a in self.db.list_accounts()}
        self._transactions = {t.id: t for t in self.db.list_transactions()}
        self._custom_groups = {g.id: g for g in self.db.list_custom_groups()}
        logger.debug(
            "Loaded %d accounts and %d transactions",
            len(self._accounts),
            len(self._transactions),
        )

    # Read accessors
    def get_account(self, account_id: str) -> Optional[Account]:
        return self._accounts.get(account_id)

    def get_account_by_code(self, code: str) -> Optional[Account]:
        for account in self._accounts.values():
            if account.code == code:
                return account
        return None

    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by ledger code."""
        return sorted(self._accounts.values(), key=lambda a: (a.code, a.id))

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        return self._transactions.get(transaction_id)

    def list_transactions(self, account_id: Optional[str] = None) -> list[Transaction]:
        """List transactions in posting order, optionally for one account."""
        if account_id is None:
            return list(self._transactions.values())
        return [t for t in self._transactions.values() if t.account_id == account_id]

    def transactions_for_account(self, account_id: str) -> list[Transaction]:
        return self.list_transactions(account_id=account_id)

    def list_custom_groups(self) -> list[CustomGroup]:
        return sorted(self._custom_groups.values(), key=lambda g: g.name)

    def get_custom_group(self, group_id: str) -> Optional[CustomGroup]:
        return self._custom_groups.get(group_id)

    # Posting engine
    def add_transaction(
        self,
        account_id: str,
        date: str,
        description: str,
        amount=None,
        reference: Optional[str] = None,
        original_currency: Optional[str] = None,
        original_amount=None,
        exchange_rate=None,
    ) -> Transaction:
        """Post a transaction and apply its effect to the account balance.

        Args:
            account_id: Account the transaction belongs to
            date: ISO transaction date
            description: Transaction description
            amount: Signed amount. Treated as base currency unless
                original_currency differs from the base currency.
            reference: Optional reference
            original_currency: Currency the amount was entered in
            original_amount: Amount in original_currency
            exchange_rate: Explicit rate; trusted as-is when supplied

        Returns:
            The posted transaction, with its generated ID, base-currency
            amount and resolved exchange rate

        Raises:
            ValidationError: If neither amount nor original_amount is supplied
        """
        if amount is None and original_amount is None:
            raise ValidationError("Transaction requires an amount")

        if original_amount is not None:
            original_amount = to_decimal(original_amount)
        base_amount = to_decimal(amount) if amount is not None else original_amount
        rate = to_decimal(exchange_rate) if exchange_rate else Decimal("1.0")

        if original_currency:
            original_currency = original_currency.upper()
        if original_currency and original_currency != self.base_currency:
            if not exchange_rate:
                rate = self.currency_table.rate_for(original_currency)
            source = original_amount if original_amount is not None else to_decimal(amount)
            base_amount = convert_to_base(source, rate)
        base_amount = round_money(base_amount)

        transaction = Transaction(
            id=generate_id("manual"),
            account_id=account_id,
            date=date,
            description=description,
            amount=base_amount,
            reference=reference,
            original_currency=original_currency,
            original_amount=original_amount,
            exchange_rate=rate,
        )

        touched = {}
        account = self._accounts.get(account_id)
        if account is None:
            logger.warning(
                "Transaction %s posted to unknown account %s; no balance updated",
                transaction.id,
                account_id,
            )
        else:
            touched[account_id] = apply_amount(account, base_amount)

        self._commit(touched, saved=[transaction])
        logger.info("Posted %s of %s to account %s", transaction.id, base_amount, account_id)
        return transaction

    def edit_transaction(self, transaction_id: str, **updates) -> None:
        """Edit a transaction, re-stating its balance effect.

        The old amount is reversed against the old account, then the new
        amount is applied to the account the transaction now belongs to.
        When account_id changes the two legs land on different accounts.
        Amounts in updates are taken as base currency.

        A missing transaction_id is a no-op.

        Raises:
            ValidationError: If updates name a field transactions do not have
        """
        old = self._transactions.get(transaction_id)
        if old is None:
            logger.info("Edit of unknown transaction %s ignored", transaction_id)
            return

        editable = set(Transaction.__dataclass_fields__) - {"id"}
        unknown = set(updates) - editable
        if unknown:
            raise ValidationError(f"Cannot update transaction fields: {', '.join(sorted(unknown))}")

        for key in ("amount", "original_amount", "exchange_rate"):
            if updates.get(key) is not None:
                updates[key] = to_decimal(updates[key])
        if updates.get("amount") is not None:
            updates["amount"] = round_money(updates["amount"])
        updated = replace(old, **{k: v for k, v in updates.items() if v is not None})

        touched: dict[str, Account] = {}
        old_account = self._accounts.get(old.account_id)
        if old_account is not None:
            touched[old.account_id] = reverse_amount(old_account, old.amount)
        else:
            logger.warning("Transaction %s references unknown account %s", old.id, old.account_id)

        target = touched.get(updated.account_id, self._accounts.get(updated.account_id))
        if target is not None:
            touched[updated.account_id] = apply_amount(target, updated.amount)
        else:
            logger.warning(
                "Transaction %s moved to unknown account %s; no balance updated",
                old.id,
                updated.account_id,
            )

        self._commit(touched, saved=[updated])
        logger.info("Edited transaction %s", transaction_id)

    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction and reverse its balance effect.

        A missing transaction_id is a no-op.
        """
        transaction = self._transactions.get(transaction_id)
        if transaction is None:
            logger.info("Delete of unknown transaction %s ignored", transaction_id)
            return

        touched = {}
        account = self._accounts.get(transaction.account_id)
        if account is not None:
            touched[transaction.account_id] = reverse_amount(account, transaction.amount)

        self._commit(touched, deleted=[transaction_id])
        logger.info("Deleted transaction %s", transaction_id)

    def post_journal_entry(
        self, date: str, memo: str, lines: Iterable[JournalLine]
    ) -> list[Transaction]:
        """Post a balanced journal entry as one transaction per line.

        Lines without an account or without any amount are skipped.

        Returns:
            Posted transactions, in line order

        Raises:
            ValidationError: If the entry is out of balance or empty
            NotFoundError: If a line references an unknown account
        """
        lines = list(lines)
        debit_total = sum((line.debit for line in lines), Decimal("0"))
        credit_total = sum((line.credit for line in lines), Decimal("0"))
        if abs(debit_total - credit_total) >= JOURNAL_TOLERANCE:
            raise ValidationError(unbalanced_journal(debit_total, credit_total))

        valid = [l for l in lines if l.account_id and (l.debit > 0 or l.credit > 0)]
        if not valid:
            raise ValidationError("Journal entry has no lines with amounts")
        for line in valid:
            if line.account_id not in self._accounts:
                raise NotFoundError(account_not_found(line.account_id))

        posted = []
        for line in valid:
            if line.net_amount == 0:
                continue
            posted.append(
                self.add_transaction(
                    account_id=line.account_id,
                    date=date,
                    description=line.description or memo or "Journal Entry",
                    amount=line.net_amount,
                )
            )
        return posted

    # Account maintenance
    def add_account(
        self,
        code: str,
        name: str,
        type: AccountType,
        category: str = "",
        debit=Decimal("0"),
        credit=Decimal("0"),
        note: Optional[str] = None,
        custom_group_id: Optional[str] = None,
        account_id: Optional[str] = None,
    ) -> Account:
        """Add an account to the chart of accounts.

        Raises:
            ConflictError: If the code is already in use
        """
        if self.get_account_by_code(code) is not None:
            raise ConflictError(duplicate_account_code(code))
        account = Account(
            id=account_id or generate_id("acc"),
            code=code,
            name=name,
            type=AccountType(type),
            category=category,
            debit=round_money(debit),
            credit=round_money(credit),
            note=note,
            custom_group_id=custom_group_id,
        )
        self._commit({account.id: account})
        return account

    def update_account_details(
        self,
        account_id: str,
        name: Optional[str] = None,
        category: Optional[str] = None,
        note: Optional[str] = None,
        custom_group_id: Optional[str] = None,
        clear_custom_group: bool = False,
    ) -> Account:
        """Update descriptive account fields. Balances are not touched.

        Raises:
            NotFoundError: If the account or custom group does not exist
            ValidationError: If both custom_group_id and clear_custom_group are set
        """
        account = self._require_account(account_id)
        changes = {}
        if name is not None:
            changes["name"] = name
        if category is not None:
            changes["category"] = category
        if note is not None:
            changes["note"] = note
        if clear_custom_group:
            if custom_group_id is not None:
                raise ValidationError("Cannot set both custom_group_id and clear_custom_group")
            changes["custom_group_id"] = None
        elif custom_group_id is not None:
            if custom_group_id not in self._custom_groups:
                raise NotFoundError(custom_group_not_found(custom_group_id))
            changes["custom_group_id"] = custom_group_id

        updated = replace(account, **changes)
        self._commit({account_id: updated})
        return updated

    def set_account_balance(self, account_id: str, debit=None, credit=None) -> Account:
        """Overwrite an account's totals directly, as in a trial balance edit.

        This bypasses the transaction ledger: afterwards the account's totals
        no longer derive from its transactions alone.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self._require_account(account_id)
        updated = replace(
            account,
            debit=round_money(debit) if debit is not None else account.debit,
            credit=round_money(credit) if credit is not None else account.credit,
        )
        self._commit({account_id: updated})
        logger.info(
            "Manual balance override on %s: debit %s credit %s",
            account.code,
            updated.debit,
            updated.credit,
        )
        return updated

    def import_ledger(
        self, accounts: Iterable[Account], transactions: Iterable[Transaction] = ()
    ) -> None:
        """Replace the whole ledger with an imported batch.

        The imported amounts are taken to be in the current base currency,
        which becomes the stored currency of the ledger.
        """
        self._accounts = {a.id: a for a in accounts}
        self._transactions = {t.id: t for t in transactions}
        if self.db is not None:
            self.db.replace_ledger(self._accounts.values(), self._transactions.values())
            self._store_base_currency()
        logger.info(
            "Imported ledger of %d accounts and %d transactions",
            len(self._accounts),
            len(self._transactions),
        )

    # Custom groups
    def add_custom_group(self, name: str) -> CustomGroup:
        group = CustomGroup(id=generate_id("group"), name=name)
        self._custom_groups[group.id] = group
        if self.db is not None:
            self.db.save_custom_group(group)
        return group

    def rename_custom_group(self, group_id: str, name: str) -> CustomGroup:
        """Rename a custom group.

        Raises:
            NotFoundError: If the group does not exist
        """
        group = self._custom_groups.get(group_id)
        if group is None:
            raise NotFoundError(custom_group_not_found(group_id))
        renamed = replace(group, name=name)
        self._custom_groups[group_id] = renamed
        if self.db is not None:
            self.db.save_custom_group(renamed)
        return renamed

    def delete_custom_group(self, group_id: str) -> None:
        """Delete a custom group and clear every account reference to it."""
        self._custom_groups.pop(group_id, None)
        cleared = {
            a.id: replace(a, custom_group_id=None)
            for a in self._accounts.values()
            if a.custom_group_id == group_id
        }
        self._commit(cleared)
        if self.db is not None:
            self.db.delete_custom_group(group_id)

    def _require_account(self, account_id: str) -> Account:
        account = self._accounts.get(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def _commit(
        self,
        accounts: dict[str, Account],
        saved: Iterable[Transaction] = (),
        deleted: Iterable[str] = (),
    ) -> None:
        """Apply account and transaction changes together, then persist them."""
        saved = list(saved)
        deleted = list(deleted)
        self._accounts.update(accounts)
        for transaction in saved:
            self._transactions[transaction.id] = transaction
        for transaction_id in deleted:
            self._transactions.pop(transaction_id, None)

        if self.db is None:
            return
        for transaction in saved:
            self.db.save_transaction(transaction)
        for transaction_id in deleted:
            self.db.delete_transaction(transaction_id)
        for account in accounts.values():
            self.db.save_account(account)
