"""Redundant reference cleanup."""

import logging
from typing import Iterable, Optional

from bankdedupe.database.base import Database
from bankdedupe.domain.collaborators import ReferenceDeleter, StoreReferenceDeleter
from bankdedupe.domain.entities import CleanupOutcome
from bankdedupe.domain.errors import DeleteFailedError

log = logging.getLogger(__name__)


class ReferenceCleanupService:
    """Deletes references that duplicate a kept reference exactly."""

    def __init__(self, db: Database, deleter: Optional[ReferenceDeleter] = None):
        """Initialize reference cleanup service.

        Args:
            db: Database instance
            deleter: Reference delete operation (defaults to a plain store delete)
        """
        self.db = db
        self.deleter = deleter or StoreReferenceDeleter(db)

    def delete_redundant_references(self, keeper_ids: Iterable[int]) -> CleanupOutcome:
        """Delete every other reference with a keeper's value, type and account.

        Args:
            keeper_ids: References to keep, one per group

        Returns:
            CleanupOutcome with deleted/error counts. Failed deletes are
            logged and counted, the remaining deletes still run.
        """
        deleted = 0
        errors = 0

        for keeper_id in keeper_ids:
            for reference_id in self.db.find_redundant_reference_ids(keeper_id):
                try:
                    self.deleter.delete_reference(reference_id)
                except DeleteFailedError as exc:
                    log.error("Error while deleting dupe reference %d: %s", reference_id, exc)
                    errors += 1
                    continue
                deleted += 1

        if deleted:
            log.info("Deleted %d duplicate references", deleted)
        return CleanupOutcome(deleted=deleted, errors=errors)
