"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

# Import entities directly to avoid circular import through domain/__init__.py
from balanceit.domain.entities import (
    Account,
    CustomGroup,
    Transaction,
)


class Database(ABC):
    """Abstract storage collaborator for the ledger.

    The ledger is loaded once per session and held in memory; every posting
    operation then saves the rows it touched.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def save_account(self, account: Account) -> None:
        """Insert or update an account."""
        pass

    # Transaction operations
    @abstractmethod
    def list_transactions(self) -> list[Transaction]:
        """List all transactions in insertion order."""
        pass

    @abstractmethod
    def save_transaction(self, transaction: Transaction) -> None:
        """Insert or update a transaction."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: str) -> None:
        """Delete a transaction. Unknown IDs are ignored."""
        pass

    @abstractmethod
    def replace_ledger(
        self, accounts: Iterable[Account], transactions: Iterable[Transaction]
    ) -> None:
        """Replace every account and transaction in one step."""
        pass

    # Custom group operations
    @abstractmethod
    def list_custom_groups(self) -> list[CustomGroup]:
        """List all custom groups."""
        pass

    @abstractmethod
    def save_custom_group(self, group: CustomGroup) -> None:
        """Insert or update a custom group."""
        pass

    @abstractmethod
    def delete_custom_group(self, group_id: str) -> None:
        """Delete a custom group. Unknown IDs are ignored."""
        pass

    # Settings
    @abstractmethod
    def get_setting(self, key: str) -> Optional[str]:
        """Get a stored setting, or None if it was never saved."""
        pass

    @abstractmethod
    def save_setting(self, key: str, value: str) -> None:
        """Insert or update a setting."""
        pass
