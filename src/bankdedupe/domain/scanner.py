"""Duplicate reference scanner."""

import logging
from typing import Optional

from bankdedupe.database.base import Database
from bankdedupe.domain.collaborators import OptionValueLookup, StoreOptionValueLookup
from bankdedupe.domain.entities import Finding, ReferenceGroupStats, ScanResult

log = logging.getLogger(__name__)

REFERENCE_TYPE_GROUP = "banking.reference_types"

REFERENCE_DUPLICATE = "reference"
ACCOUNT_DUPLICATE = "account"
ACCOUNT_CONFLICT = "conflict"


def classify(account_count: int, contact_count: int) -> str:
    """Classify a duplicate group by its distinct account and contact counts.

    One account means the extra rows are redundant references. Several
    accounts owned by a single contact are safe to merge. Anything else
    needs a human decision.
    """
    if account_count == 1:
        return REFERENCE_DUPLICATE
    if contact_count == 1:
        return ACCOUNT_DUPLICATE
    return ACCOUNT_CONFLICT


def finding_from_stats(stats: ReferenceGroupStats, type_labels: dict[int, str]) -> Finding:
    """Build an unenriched finding from an aggregate row."""
    return Finding(
        reference=stats.reference,
        reference_id=stats.reference_id,
        dupe_count=stats.dupe_count,
        account_count=stats.account_count,
        contact_count=stats.contact_count,
        last_change=stats.last_change,
        reference_type_id=stats.reference_type_id,
        reference_type=type_labels.get(stats.reference_type_id),
    )


class DuplicateScanner:
    """Finds duplicate references and sorts them into the three buckets."""

    def __init__(self, db: Database, type_lookup: Optional[OptionValueLookup] = None):
        """Initialize duplicate scanner.

        Args:
            db: Database instance
            type_lookup: Reference type label lookup (defaults to the store's option values)
        """
        self.db = db
        self.type_lookup = type_lookup or StoreOptionValueLookup(db)

    def scan(self) -> ScanResult:
        """Scan the store for duplicate references.

        Returns:
            ScanResult with findings keyed by reference value, most recently
            changed groups first

        Raises:
            StoreUnavailableError: If the store cannot be queried
        """
        type_labels = self.type_lookup.list_option_values(REFERENCE_TYPE_GROUP)
        result = ScanResult()
        buckets = {
            REFERENCE_DUPLICATE: result.reference_duplicates,
            ACCOUNT_DUPLICATE: result.account_duplicates,
            ACCOUNT_CONFLICT: result.account_conflicts,
        }

        for stats in self.db.find_duplicate_reference_groups():
            kind = classify(stats.account_count, stats.contact_count)
            bucket = buckets[kind]
            # Same value under another type lands on the same key; the first
            # (most recent) group wins, the other waits for the next scan.
            if stats.reference in bucket:
                log.debug(
                    "Skipping %s group %r of type %s, already listed under type %s",
                    kind,
                    stats.reference,
                    stats.reference_type_id,
                    bucket[stats.reference].reference_type_id,
                )
                continue
            bucket[stats.reference] = finding_from_stats(stats, type_labels)

        log.debug(
            "Scan found %d reference duplicates, %d account duplicates, %d conflicts",
            len(result.reference_duplicates),
            len(result.account_duplicates),
            len(result.account_conflicts),
        )
        return result
