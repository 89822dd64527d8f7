"""Duplicate bank account merging.

Merging is strict: a merge source may only fill gaps in the target. Whenever
target and source carry different non-empty values for the same field or
parsed-data key the group is left untouched and reported as an error.
"""

import logging
from dataclasses import replace
from datetime import datetime, UTC
from functools import reduce
from typing import Any, Sequence

from bankdedupe.database.base import Database
from bankdedupe.domain.entities import Account, MergeOutcome
from bankdedupe.domain.errors import (
    ContactConflictError,
    DomainError,
    InsufficientDuplicatesError,
    MergeConflictError,
    NotFoundError,
    account_not_found,
)

log = logging.getLogger(__name__)

SCALAR_FIELDS = ("description", "data_raw")


def is_empty(value: Any) -> bool:
    """True for None and empty strings or containers.

    Zero and False are real values here: a balance of 0 must not be
    overwritten by another account's non-zero one.
    """
    if value is None:
        return True
    if isinstance(value, (str, list, dict, tuple)):
        return len(value) == 0
    return False


def _merge_created_date(target: Account, source: Account):
    if source.created_date is None:
        return target.created_date
    if target.created_date is None or source.created_date < target.created_date:
        return source.created_date
    return target.created_date


def _merge_data_parsed(target: Account, source: Account) -> dict[str, Any]:
    merged = dict(target.data_parsed)
    for key, value in source.data_parsed.items():
        if key not in merged:
            merged[key] = value
        elif is_empty(value):
            continue
        elif is_empty(merged[key]):
            merged[key] = value
        elif merged[key] != value:
            raise MergeConflictError(source.id, f"data_parsed.{key}")
    return merged


def fold_account(target: Account, source: Account) -> Account:
    """Fold one merge source into the target.

    Raises:
        MergeConflictError: If both carry different non-empty values for a field
    """
    changes: dict[str, Any] = {"created_date": _merge_created_date(target, source)}

    for attribute in SCALAR_FIELDS:
        source_value = getattr(source, attribute)
        if is_empty(source_value):
            continue
        target_value = getattr(target, attribute)
        if is_empty(target_value):
            changes[attribute] = source_value
        elif target_value != source_value:
            raise MergeConflictError(source.id, attribute)

    changes["data_parsed"] = _merge_data_parsed(target, source)
    return replace(target, **changes)


def fold_accounts(target: Account, sources: Sequence[Account]) -> Account:
    """Fold every source into the target in the given order."""
    return reduce(fold_account, sources, target)


class AccountMergeService:
    """Merges the bank accounts behind duplicate reference groups."""

    def __init__(self, db: Database):
        """Initialize account merge service.

        Args:
            db: Database instance
        """
        self.db = db

    def merge_by_reference_ids(self, reference_ids: Sequence[int]) -> MergeOutcome:
        """Merge the accounts of each reference's group into the lowest account ID.

        Each group is merged in its own store transaction; a failing group is
        counted as an error and does not affect the others.

        Args:
            reference_ids: One representative reference ID per group

        Returns:
            MergeOutcome with merged/error counts and the reference IDs whose
            groups were merged (these are ready for reference cleanup)

        Raises:
            StoreUnavailableError: If the store fails; processing stops
        """
        merged = 0
        errors = 0
        merged_reference_ids = []

        for reference_id in reference_ids:
            try:
                self.merge_group(reference_id)
            except DomainError as exc:
                log.warning("Could not merge bank accounts of reference %s: %s", reference_id, exc)
                errors += 1
                continue
            merged += 1
            merged_reference_ids.append(reference_id)

        return MergeOutcome(
            merged=merged,
            errors=errors,
            merged_reference_ids=tuple(merged_reference_ids),
        )

    def merge_group(self, reference_id: int) -> Account:
        """Merge one group atomically and return the surviving account.

        The group's accounts and owners are resolved inside the transaction,
        so references added or removed since the last scan are taken into
        account.

        Raises:
            InsufficientDuplicatesError: If fewer than two accounts remain
            ContactConflictError: If the group is not owned by exactly one contact
            MergeConflictError: If the accounts disagree on a non-empty value
        """
        with self.db.transaction():
            account_ids = self.db.get_group_account_ids(reference_id)
            if len(account_ids) < 2:
                raise InsufficientDuplicatesError(reference_id, account_ids)

            keeper = self.db.get_reference(reference_id)
            contact_ids = self.db.list_group_contact_ids(keeper.reference, keeper.reference_type_id)
            if len(contact_ids) != 1:
                raise ContactConflictError(reference_id, contact_ids)

            accounts = []
            for account_id in account_ids:
                account = self.db.get_account(account_id)
                if account is None:
                    raise NotFoundError(account_not_found(account_id))
                accounts.append(account)

            target, sources = accounts[0], accounts[1:]
            merged = replace(fold_accounts(target, sources), modified_date=datetime.now(UTC))
            source_ids = [source.id for source in sources]

            self.db.update_account(merged)
            counts = self.db.repoint_accounts(source_ids, target.id)
            self.db.delete_accounts(source_ids)

        log.info(
            "Merged bank accounts %s into %d (%d references, %d transactions, %d party transactions moved)",
            source_ids,
            target.id,
            counts.references,
            counts.transactions,
            counts.party_transactions,
        )
        return merged
