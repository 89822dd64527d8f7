"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the JSON encoding of an
account's parsed data, so the rest of the code never sees raw blobs.
"""

import json
from typing import Any, Optional

from bankdedupe.domain import entities as domain
from bankdedupe.database.models import (
    BankAccount as ORMBankAccount,
    BankAccountReference as ORMReference,
    BankTransaction as ORMTransaction,
    Contact as ORMContact,
)


def decode_data_parsed(blob: Optional[str]) -> dict[str, Any]:
    """Decode a stored ``data_parsed`` blob; empty or invalid blobs give {}."""
    if not blob:
        return {}
    try:
        value = json.loads(blob)
    except ValueError:
        return {}
    return value if isinstance(value, dict) else {}


def encode_data_parsed(data: dict[str, Any]) -> str:
    """Encode parsed data for storage with a stable key order."""
    return json.dumps(data, sort_keys=True)


def account_to_domain(orm_account: ORMBankAccount) -> domain.Account:
    """Convert SQLAlchemy BankAccount model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        description=orm_account.description,
        data_raw=orm_account.data_raw,
        data_parsed=decode_data_parsed(orm_account.data_parsed),
        created_date=orm_account.created_date,
        modified_date=orm_account.modified_date,
    )


def reference_to_domain(orm_reference: ORMReference) -> domain.Reference:
    """Convert SQLAlchemy BankAccountReference model to domain Reference entity."""
    return domain.Reference(
        id=orm_reference.id,
        reference=orm_reference.reference,
        reference_type_id=orm_reference.reference_type_id,
        account_id=orm_reference.ba_id,
        contact_id=orm_reference.contact_id,
        modified_date=orm_reference.modified_date,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy BankTransaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        bank_reference=orm_transaction.bank_reference,
        amount=orm_transaction.amount,
        value_date=orm_transaction.value_date,
        purpose=orm_transaction.purpose,
        account_id=orm_transaction.ba_id,
        party_account_id=orm_transaction.party_ba_id,
    )


def contact_to_domain(orm_contact: ORMContact) -> domain.Contact:
    """Convert SQLAlchemy Contact model to domain Contact entity."""
    return domain.Contact(
        id=orm_contact.id,
        display_name=orm_contact.display_name,
        contact_type=orm_contact.contact_type,
    )
