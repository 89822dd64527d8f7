"""Interfaces of the services the dedupe engine depends on.

Each port comes with a default implementation backed by the ledger store, so
the engine works standalone; callers embedding it elsewhere can pass their own
objects satisfying the same protocols.
"""

from typing import Protocol

from bankdedupe.database.base import Database
from bankdedupe.domain.entities import Contact
from bankdedupe.domain.errors import DeleteFailedError, LookupFailedError, NotFoundError


class ContactLookup(Protocol):
    """Resolves contact IDs to contacts."""

    def get_contact(self, contact_id: int) -> Contact:
        """Return the contact or raise LookupFailedError."""
        ...


class OptionValueLookup(Protocol):
    """Maps numeric type codes to labels."""

    def list_option_values(self, group_name: str) -> dict[int, str]:
        ...


class ReferenceDeleter(Protocol):
    """Deletes references through the reference management service."""

    def delete_reference(self, reference_id: int) -> None:
        """Delete one reference or raise DeleteFailedError."""
        ...


class StoreContactLookup:
    """Contact lookup reading the store's contact table."""

    def __init__(self, db: Database):
        self.db = db

    def get_contact(self, contact_id: int) -> Contact:
        contact = self.db.get_contact(contact_id)
        if contact is None:
            raise LookupFailedError(contact_id)
        return contact


class StoreOptionValueLookup:
    """Option value lookup reading the store's option value table."""

    def __init__(self, db: Database):
        self.db = db

    def list_option_values(self, group_name: str) -> dict[int, str]:
        return self.db.list_option_values(group_name)


class StoreReferenceDeleter:
    """Reference deletion straight against the store."""

    def __init__(self, db: Database):
        self.db = db

    def delete_reference(self, reference_id: int) -> None:
        try:
            self.db.delete_reference(reference_id)
        except NotFoundError as exc:
            raise DeleteFailedError(reference_id, str(exc)) from exc
