"""Tests for finding enrichment."""

from bankdedupe.domain.enrichment import EnrichmentService
from bankdedupe.domain.entities import Contact
from bankdedupe.domain.errors import LookupFailedError
from bankdedupe.domain.scanner import DuplicateScanner

IBAN = 1


def test_single_contact(temp_db, ref_x, contacts):
    finding = DuplicateScanner(temp_db).scan().account_duplicates["REF-X"]

    enriched = EnrichmentService(temp_db).enrich(finding)

    assert [c.display_name for c in enriched.contacts] == ["Jane Doe"]
    assert enriched.contact == Contact(id=contacts["jane"], display_name="Jane Doe")
    assert finding.contacts == ()


def test_several_contacts(temp_db, reference_types, contacts):
    first = temp_db.create_account()
    second = temp_db.create_account()
    temp_db.create_reference("DE-CON", IBAN, first, contact_id=contacts["jane"])
    temp_db.create_reference("DE-CON", IBAN, second, contact_id=contacts["john"])
    finding = DuplicateScanner(temp_db).scan().account_conflicts["DE-CON"]

    enriched = EnrichmentService(temp_db).enrich(finding)

    assert {c.display_name for c in enriched.contacts} == {"Jane Doe", "John Roe"}
    assert enriched.contact is None


def test_failed_lookup_is_skipped(temp_db, reference_types, contacts, caplog):
    """A contact that cannot be looked up is left out without failing."""
    first = temp_db.create_account()
    second = temp_db.create_account()
    temp_db.create_reference("DE-CON", IBAN, first, contact_id=contacts["jane"])
    temp_db.create_reference("DE-CON", IBAN, second, contact_id=contacts["john"])
    finding = DuplicateScanner(temp_db).scan().account_conflicts["DE-CON"]

    class Lookup:
        def get_contact(self, contact_id):
            if contact_id == contacts["john"]:
                raise LookupFailedError(contact_id)
            return Contact(id=contact_id, display_name="Jane Doe")

    with caplog.at_level("WARNING", logger="bankdedupe.domain.enrichment"):
        enriched = EnrichmentService(temp_db, contact_lookup=Lookup()).enrich(finding)

    assert [c.id for c in enriched.contacts] == [contacts["jane"]]
    assert enriched.contact == enriched.contacts[0]
    assert "DE-CON" in caplog.text


def test_references_without_contact(temp_db, reference_types):
    account_id = temp_db.create_account()
    temp_db.create_reference("DE-REF", IBAN, account_id)
    temp_db.create_reference("DE-REF", IBAN, account_id)
    finding = DuplicateScanner(temp_db).scan().reference_duplicates["DE-REF"]

    enriched = EnrichmentService(temp_db).enrich(finding)

    assert enriched.contacts == ()
    assert enriched.contact is None


def test_enrich_scan_keeps_buckets(temp_db, ref_x):
    scan = DuplicateScanner(temp_db).scan()

    enriched = EnrichmentService(temp_db).enrich_scan(scan)

    assert list(enriched.account_duplicates) == list(scan.account_duplicates)
    assert enriched.account_duplicates["REF-X"].contact is not None
