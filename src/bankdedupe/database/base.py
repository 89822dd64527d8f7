"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Optional, Sequence
from datetime import date, datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from bankdedupe.domain.entities import (
    Account,
    Contact,
    Reference,
    ReferenceGroupStats,
    RepointCounts,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for the bank account ledger."""

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

    @abstractmethod
    def transaction(self) -> AbstractContextManager["Database"]:
        """Open an atomic unit of work.

        Writes inside the block are committed together on normal exit and
        rolled back if the block raises.
        """
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        description: Optional[str] = None,
        data_raw: Optional[str] = None,
        data_parsed: Optional[dict[str, Any]] = None,
        created_date: Optional[datetime] = None,
    ) -> int:
        """Create a bank account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts ordered by ID."""
        pass

    @abstractmethod
    def update_account(self, account: Account) -> None:
        """Persist every mutable field of an account."""
        pass

    @abstractmethod
    def delete_accounts(self, account_ids: Sequence[int]) -> int:
        """Delete accounts by ID. Returns number of deleted rows."""
        pass

    # Reference operations
    @abstractmethod
    def create_reference(
        self,
        reference: str,
        reference_type_id: int,
        account_id: int,
        contact_id: Optional[int] = None,
        modified_date: Optional[datetime] = None,
    ) -> int:
        """Create a reference. Returns reference ID."""
        pass

    @abstractmethod
    def get_reference(self, reference_id: int) -> Optional[Reference]:
        """Get reference by ID."""
        pass

    @abstractmethod
    def list_references(
        self,
        reference: Optional[str] = None,
        reference_type_id: Optional[int] = None,
        account_id: Optional[int] = None,
    ) -> list[Reference]:
        """List references with optional filters."""
        pass

    @abstractmethod
    def delete_reference(self, reference_id: int) -> None:
        """Delete a reference. Raises NotFoundError if it does not exist."""
        pass

    @abstractmethod
    def find_redundant_reference_ids(self, keeper_id: int) -> list[int]:
        """IDs of other references with the keeper's value, type and account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        bank_reference: str,
        amount: Decimal,
        account_id: Optional[int] = None,
        party_account_id: Optional[int] = None,
        value_date: Optional[date] = None,
        purpose: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(self, account_id: Optional[int] = None) -> list[Transaction]:
        """List transactions, optionally those linked to an account on either side."""
        pass

    # Contact and option value operations
    @abstractmethod
    def create_contact(self, display_name: str, contact_type: str = "Individual") -> int:
        """Create a contact. Returns contact ID."""
        pass

    @abstractmethod
    def get_contact(self, contact_id: int) -> Optional[Contact]:
        """Get contact by ID."""
        pass

    @abstractmethod
    def create_option_value(self, group_name: str, value: int, label: str) -> int:
        """Register a label for a numeric code. Returns option value ID."""
        pass

    @abstractmethod
    def list_option_values(self, group_name: str) -> dict[int, str]:
        """Map numeric code to label for one option group."""
        pass

    # Deduplication queries
    @abstractmethod
    def find_duplicate_reference_groups(self) -> list[ReferenceGroupStats]:
        """Aggregate references by (reference, type), keeping groups of more than one row.

        Ordered by most recent modification first.
        """
        pass

    @abstractmethod
    def list_group_contact_ids(self, reference: str, reference_type_id: int) -> list[int]:
        """Distinct contact IDs owning a reference of the group."""
        pass

    @abstractmethod
    def get_group_account_ids(self, reference_id: int) -> list[int]:
        """Distinct account IDs of the group the reference belongs to, ascending."""
        pass

    @abstractmethod
    def repoint_accounts(self, source_ids: Sequence[int], target_id: int) -> RepointCounts:
        """Move references and both transaction account links from sources to target."""
        pass
