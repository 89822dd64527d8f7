"""Ledger domain service for accounts, references and their owners."""

from typing import Any, Optional
from datetime import date, datetime
from decimal import Decimal

from bankdedupe.database.base import Database
from bankdedupe.domain.entities import (
    Account as AccountEntity,
    Reference as ReferenceEntity,
    Transaction as TransactionEntity,
)
from bankdedupe.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    contact_not_found,
)
from bankdedupe.domain.scanner import REFERENCE_TYPE_GROUP


class LedgerService:
    """Service for creating and inspecting ledger rows."""

    def __init__(self, db: Database):
        """Initialize ledger service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        description: Optional[str] = None,
        data_raw: Optional[str] = None,
        data_parsed: Optional[dict[str, Any]] = None,
        created_date: Optional[datetime] = None,
    ) -> int:
        """Create a bank account.

        Returns:
            Account ID
        """
        return self.db.create_account(
            description=description,
            data_raw=data_raw,
            data_parsed=data_parsed,
            created_date=created_date,
        )

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID."""
        return self.db.get_account(account_id)

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts."""
        return self.db.list_accounts()

    def add_reference(
        self,
        reference: str,
        reference_type: str | int,
        account_id: int,
        contact_id: Optional[int] = None,
    ) -> int:
        """Attach a reference to an account.

        Args:
            reference: External identifier, e.g. an IBAN
            reference_type: Reference type label or numeric code
            account_id: Account the reference points at
            contact_id: Optional owning contact

        Returns:
            Reference ID

        Raises:
            NotFoundError: If account, contact or reference type doesn't exist
            ValidationError: If the reference is blank
        """
        reference = reference.strip()
        if not reference:
            raise ValidationError("Reference must not be empty")
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        if contact_id is not None and self.db.get_contact(contact_id) is None:
            raise NotFoundError(contact_not_found(contact_id))

        return self.db.create_reference(
            reference=reference,
            reference_type_id=self.resolve_reference_type(reference_type),
            account_id=account_id,
            contact_id=contact_id,
        )

    def list_references(
        self, reference: Optional[str] = None, account_id: Optional[int] = None
    ) -> list[ReferenceEntity]:
        """List references, optionally filtered by value or account."""
        return self.db.list_references(reference=reference, account_id=account_id)

    def add_reference_type(self, code: int, label: str) -> int:
        """Register a reference type label.

        Raises:
            ConflictError: If the code or label is already registered
        """
        for existing_code, existing_label in self.reference_types().items():
            if existing_code == code or existing_label == label:
                raise ConflictError(
                    f"Reference type {existing_code} ('{existing_label}') already exists"
                )
        return self.db.create_option_value(REFERENCE_TYPE_GROUP, code, label)

    def reference_types(self) -> dict[int, str]:
        """Map reference type code to label."""
        return self.db.list_option_values(REFERENCE_TYPE_GROUP)

    def resolve_reference_type(self, reference_type: str | int) -> int:
        """Resolve a reference type label or code to its code.

        Raises:
            NotFoundError: If the type is not registered
        """
        types = self.reference_types()
        if isinstance(reference_type, int) or reference_type.isdigit():
            code = int(reference_type)
            if code in types:
                return code
        else:
            for code, label in types.items():
                if label == reference_type:
                    return code
        raise NotFoundError(f"Reference type '{reference_type}' not found")

    def create_contact(self, display_name: str, contact_type: str = "Individual") -> int:
        """Create a contact. Returns contact ID."""
        return self.db.create_contact(display_name=display_name, contact_type=contact_type)

    def add_transaction(
        self,
        bank_reference: str,
        amount: Decimal,
        account_id: int,
        party_account_id: Optional[int] = None,
        value_date: Optional[date] = None,
        purpose: Optional[str] = None,
    ) -> int:
        """Record a transaction against an account.

        Raises:
            NotFoundError: If either account doesn't exist
        """
        for linked_id in (account_id, party_account_id):
            if linked_id is not None and self.db.get_account(linked_id) is None:
                raise NotFoundError(account_not_found(linked_id))
        return self.db.create_transaction(
            bank_reference=bank_reference,
            amount=amount,
            account_id=account_id,
            party_account_id=party_account_id,
            value_date=value_date,
            purpose=purpose,
        )

    def list_transactions(self, account_id: Optional[int] = None) -> list[TransactionEntity]:
        """List transactions linked to an account on either side."""
        return self.db.list_transactions(account_id=account_id)
