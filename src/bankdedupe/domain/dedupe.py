"""Dedupe orchestration: scan, act on operator selections, re-scan."""

import logging
from dataclasses import replace
from typing import Iterable, Optional

from bankdedupe.database.base import Database
from bankdedupe.domain.cleanup import ReferenceCleanupService
from bankdedupe.domain.collaborators import ContactLookup, OptionValueLookup, ReferenceDeleter
from bankdedupe.domain.enrichment import EnrichmentService
from bankdedupe.domain.entities import (
    CleanupOutcome,
    DedupeReport,
    Finding,
    MergeOutcome,
    ScanResult,
    StatusMessage,
    TargetSelection,
)
from bankdedupe.domain.merge import AccountMergeService
from bankdedupe.domain.scanner import DuplicateScanner

log = logging.getLogger(__name__)


def merge_status(outcome: MergeOutcome) -> StatusMessage:
    """Summarize a merge run for the operator."""
    if outcome.errors:
        return StatusMessage(
            title="Errors encountered",
            message=(
                f"{outcome.errors} errors were encountered when trying to merge duplicate bank "
                f"accounts, {outcome.merged}/{outcome.errors + outcome.merged} bank accounts "
                "were successfully merged."
            ),
            level="warn",
        )
    return StatusMessage(
        title="Success",
        message=f"{outcome.merged} duplicate bank accounts successfully merged.",
    )


def cleanup_status(outcome: CleanupOutcome) -> StatusMessage:
    """Summarize a reference cleanup run for the operator."""
    if outcome.errors:
        return StatusMessage(
            title="Errors encountered",
            message=(
                f"{outcome.errors} errors were encountered when trying to delete duplicate "
                f"references. {outcome.deleted}/{outcome.errors + outcome.deleted} references "
                "were successfully deleted."
            ),
            level="warn",
        )
    return StatusMessage(
        title="Success",
        message=f"{outcome.deleted} duplicate references successfully deleted.",
    )


class DedupeService:
    """Entry point of the dedupe engine."""

    def __init__(
        self,
        db: Database,
        contact_lookup: Optional[ContactLookup] = None,
        type_lookup: Optional[OptionValueLookup] = None,
        reference_deleter: Optional[ReferenceDeleter] = None,
    ):
        """Initialize dedupe service.

        Args:
            db: Database instance
            contact_lookup: Identity lookup used to enrich findings
            type_lookup: Reference type label lookup
            reference_deleter: Delete operation used by the reference cleanup
        """
        self.db = db
        self.scanner = DuplicateScanner(db, type_lookup)
        self.enrichment = EnrichmentService(db, contact_lookup)
        self.merge_service = AccountMergeService(db)
        self.cleanup_service = ReferenceCleanupService(db, reference_deleter)

    def scan(self) -> ScanResult:
        """Scan for duplicates and enrich the findings."""
        return self.enrichment.enrich_scan(self.scanner.scan())

    def merge_accounts(
        self, targets: TargetSelection, scan: Optional[ScanResult] = None
    ) -> MergeOutcome:
        """Merge the duplicate account groups selected by the operator.

        ``TargetSelection.all()`` selects every account duplicate of the scan.
        """
        scan = scan if scan is not None else self.scan()
        reference_ids, unresolved = self._resolve_targets(
            targets, scan.account_duplicates, scan
        )
        outcome = self.merge_service.merge_by_reference_ids(reference_ids)
        return replace(outcome, errors=outcome.errors + unresolved)

    def delete_references(
        self,
        targets: TargetSelection,
        implicit_ids: Iterable[int] = (),
        scan: Optional[ScanResult] = None,
    ) -> CleanupOutcome:
        """Delete redundant references of the selected groups.

        ``implicit_ids`` are keepers added without operator selection,
        typically the groups a merge has just unified.
        """
        reference_ids: list[int] = list(implicit_ids)
        unresolved = 0
        if not targets.is_empty():
            scan = scan if scan is not None else self.scan()
            selected, unresolved = self._resolve_targets(
                targets, scan.reference_duplicates, scan
            )
            reference_ids.extend(selected)

        outcome = self.cleanup_service.delete_redundant_references(
            list(dict.fromkeys(reference_ids))
        )
        return replace(outcome, errors=outcome.errors + unresolved)

    def run(
        self,
        merge: Optional[TargetSelection] = None,
        cleanup: Optional[TargetSelection] = None,
    ) -> DedupeReport:
        """Scan, apply the requested actions and re-scan if anything changed."""
        scan = self.scan()
        messages = []
        changed = 0
        merged_reference_ids: tuple[int, ...] = ()

        if merge is not None and not merge.is_empty():
            merge_outcome = self.merge_accounts(merge, scan)
            messages.append(merge_status(merge_outcome))
            changed += merge_outcome.merged
            merged_reference_ids = merge_outcome.merged_reference_ids

        if (cleanup is not None and not cleanup.is_empty()) or merged_reference_ids:
            cleanup_outcome = self.delete_references(
                cleanup or TargetSelection(), merged_reference_ids, scan
            )
            messages.append(cleanup_status(cleanup_outcome))
            changed += cleanup_outcome.deleted

        if changed:
            scan = self.scan()

        return DedupeReport(scan=scan, messages=tuple(messages), changed=changed)

    def _resolve_targets(
        self,
        targets: TargetSelection,
        bucket: dict[str, Finding],
        scan: ScanResult,
    ) -> tuple[list[int], int]:
        """Turn a selection into reference IDs.

        Integers are reference IDs, strings are reference values looked up in
        the given bucket first and then in the whole scan. Returns the IDs and
        the number of values that could not be resolved.
        """
        if targets.select_all:
            return [f.reference_id for f in bucket.values() if f.reference_id > 0], 0

        reference_ids = []
        unresolved = 0
        for item in targets.items:
            if isinstance(item, int):
                if item > 0:
                    reference_ids.append(item)
                continue

            finding = bucket.get(item) or self._find_by_reference(scan, item)
            if finding is None:
                log.warning("No duplicate group found for reference '%s'", item)
                unresolved += 1
            else:
                reference_ids.append(finding.reference_id)

        return reference_ids, unresolved

    @staticmethod
    def _find_by_reference(scan: ScanResult, reference: str) -> Optional[Finding]:
        for bucket in scan.buckets():
            if reference in bucket:
                return bucket[reference]
        return None
