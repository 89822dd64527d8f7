"""Finding enrichment with contact information."""

import logging
from dataclasses import replace
from typing import Optional

from bankdedupe.database.base import Database
from bankdedupe.domain.collaborators import ContactLookup, StoreContactLookup
from bankdedupe.domain.entities import Finding, ScanResult
from bankdedupe.domain.errors import LookupFailedError

log = logging.getLogger(__name__)


class EnrichmentService:
    """Adds the contacts behind each duplicate group to its finding."""

    def __init__(self, db: Database, contact_lookup: Optional[ContactLookup] = None):
        """Initialize enrichment service.

        Args:
            db: Database instance
            contact_lookup: Identity lookup (defaults to the store's contacts)
        """
        self.db = db
        self.contact_lookup = contact_lookup or StoreContactLookup(db)

    def enrich(self, finding: Finding) -> Finding:
        """Return a copy of the finding with its contacts filled in.

        Contacts that cannot be looked up are left out; enrichment is
        informational and never fails a scan.
        """
        contacts = []
        for contact_id in self.db.list_group_contact_ids(finding.reference, finding.reference_type_id):
            try:
                contacts.append(self.contact_lookup.get_contact(contact_id))
            except LookupFailedError as exc:
                log.warning("Skipping contact for reference '%s': %s", finding.reference, exc)

        return replace(
            finding,
            contacts=tuple(contacts),
            contact=contacts[0] if len(contacts) == 1 else None,
        )

    def enrich_scan(self, scan: ScanResult) -> ScanResult:
        """Enrich every finding of a scan, keeping bucket order."""
        return ScanResult(
            reference_duplicates={k: self.enrich(f) for k, f in scan.reference_duplicates.items()},
            account_duplicates={k: self.enrich(f) for k, f in scan.account_duplicates.items()},
            account_conflicts={k: self.enrich(f) for k, f in scan.account_conflicts.items()},
        )
