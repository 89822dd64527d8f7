"""Tests for redundant reference cleanup."""

from bankdedupe.domain.cleanup import ReferenceCleanupService
from bankdedupe.domain.errors import DeleteFailedError

IBAN = 1
NBAN = 2


def test_deletes_exact_duplicates(temp_db, reference_types):
    account_id = temp_db.create_account()
    keeper = temp_db.create_reference("DE-REF", IBAN, account_id)
    temp_db.create_reference("DE-REF", IBAN, account_id)
    temp_db.create_reference("DE-REF", IBAN, account_id)

    outcome = ReferenceCleanupService(temp_db).delete_redundant_references([keeper])

    assert outcome.deleted == 2
    assert outcome.errors == 0
    assert [ref.id for ref in temp_db.list_references(reference="DE-REF")] == [keeper]


def test_keeps_references_of_other_accounts_and_types(temp_db, reference_types):
    first = temp_db.create_account()
    second = temp_db.create_account()
    keeper = temp_db.create_reference("DE-REF", IBAN, first)
    other_account = temp_db.create_reference("DE-REF", IBAN, second)
    other_type = temp_db.create_reference("DE-REF", NBAN, first)

    outcome = ReferenceCleanupService(temp_db).delete_redundant_references([keeper])

    assert outcome.deleted == 0
    remaining = {ref.id for ref in temp_db.list_references(reference="DE-REF")}
    assert remaining == {keeper, other_account, other_type}


def test_cleanup_is_idempotent(temp_db, reference_types):
    account_id = temp_db.create_account()
    keeper = temp_db.create_reference("DE-REF", IBAN, account_id)
    temp_db.create_reference("DE-REF", IBAN, account_id)
    service = ReferenceCleanupService(temp_db)
    service.delete_redundant_references([keeper])

    outcome = service.delete_redundant_references([keeper])

    assert outcome.deleted == 0
    assert outcome.errors == 0


def test_deleted_keeper_is_a_no_op(temp_db, reference_types):
    account_id = temp_db.create_account()
    first = temp_db.create_reference("DE-REF", IBAN, account_id)
    second = temp_db.create_reference("DE-REF", IBAN, account_id)
    service = ReferenceCleanupService(temp_db)

    service.delete_redundant_references([first])
    outcome = service.delete_redundant_references([second])

    assert outcome.deleted == 0
    assert outcome.errors == 0
    assert [ref.id for ref in temp_db.list_references()] == [first]


def test_delete_goes_through_collaborator(temp_db, reference_types):
    """Failed deletes are counted and the remaining ones still run."""
    account_id = temp_db.create_account()
    keeper = temp_db.create_reference("DE-REF", IBAN, account_id)
    failing = temp_db.create_reference("DE-REF", IBAN, account_id)
    ok = temp_db.create_reference("DE-REF", IBAN, account_id)
    calls = []

    class Deleter:
        def delete_reference(self, reference_id):
            calls.append(reference_id)
            if reference_id == failing:
                raise DeleteFailedError(reference_id, "permission denied")
            temp_db.delete_reference(reference_id)

    outcome = ReferenceCleanupService(temp_db, deleter=Deleter()).delete_redundant_references([keeper])

    assert calls == [failing, ok]
    assert outcome.deleted == 1
    assert outcome.errors == 1
    assert {ref.id for ref in temp_db.list_references()} == {keeper, failing}


def test_failed_delete_is_logged(temp_db, reference_types, caplog):
    account_id = temp_db.create_account()
    keeper = temp_db.create_reference("DE-REF", IBAN, account_id)
    temp_db.create_reference("DE-REF", IBAN, account_id)

    class Deleter:
        def delete_reference(self, reference_id):
            raise DeleteFailedError(reference_id, "hook refused")

    with caplog.at_level("ERROR", logger="bankdedupe.domain.cleanup"):
        ReferenceCleanupService(temp_db, deleter=Deleter()).delete_redundant_references([keeper])

    assert "Error while deleting dupe reference" in caplog.text
    assert "hook refused" in caplog.text
