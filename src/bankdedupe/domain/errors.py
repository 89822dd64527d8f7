"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity or path does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class InsufficientDuplicatesError(ValidationError):
    """A merge group resolved to fewer than two distinct accounts."""

    def __init__(self, reference_id: int, account_ids: list[int]):
        self.reference_id = reference_id
        self.account_ids = account_ids
        super().__init__(insufficient_duplicates(reference_id, len(account_ids)))


class MergeConflictError(ConflictError):
    """Two accounts disagree on a non-empty value for the same field."""

    def __init__(self, account_id: int, field: str):
        self.account_id = account_id
        self.field = field
        super().__init__(merge_conflict(account_id, field))


class ContactConflictError(ConflictError):
    """A merge group is not owned by exactly one contact."""

    def __init__(self, reference_id: int, contact_ids: list[int]):
        self.reference_id = reference_id
        self.contact_ids = contact_ids
        super().__init__(contact_conflict(reference_id, contact_ids))


class DeleteFailedError(DomainError):
    """A duplicate reference could not be deleted."""

    def __init__(self, reference_id: int, message: str):
        self.reference_id = reference_id
        super().__init__(message)


class LookupFailedError(NotFoundError):
    """An identity could not be resolved by the contact lookup."""

    def __init__(self, contact_id: int):
        self.contact_id = contact_id
        super().__init__(contact_not_found(contact_id))


class StoreUnavailableError(RuntimeError):
    """The relational store cannot be reached or a transaction cannot commit.

    Not a DomainError: this always aborts the whole invocation.
    """


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def reference_not_found(reference_id: int) -> str:
    """Return message for missing reference."""
    return f"Reference {reference_id} not found"


def contact_not_found(contact_id: int) -> str:
    """Return message for missing contact."""
    return f"Contact {contact_id} not found"


def insufficient_duplicates(reference_id: int, account_count: int) -> str:
    """Return message when a merge group has nothing left to merge."""
    return (
        f"Reference {reference_id} resolves to {account_count} "
        f"bank account{'s' if account_count != 1 else ''}, at least 2 are needed to merge"
    )


def merge_conflict(account_id: int, field: str) -> str:
    """Return message for a strict-merge conflict."""
    return f"Bank account {account_id} conflicts with merge target on '{field}'"


def contact_conflict(reference_id: int, contact_ids: list[int]) -> str:
    """Return message when a merge group no longer has a single owner."""
    owners = ", ".join(str(contact_id) for contact_id in contact_ids) or "none"
    return f"Reference {reference_id} is owned by contacts {owners}, exactly 1 is needed to merge"
