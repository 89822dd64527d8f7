"""Shared pytest fixtures for bankdedupe tests."""

import tempfile
import os
from datetime import datetime
import pytest

from bankdedupe.database.factories import create_sqlite_database
from bankdedupe.domain.dedupe import DedupeService
from bankdedupe.domain.ledger import LedgerService

IBAN = 1
NBAN = 2


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def ledger(temp_db):
    """Create a LedgerService with a temporary database."""
    return LedgerService(temp_db)


@pytest.fixture
def dedupe_service(temp_db):
    """Create a DedupeService with store-backed collaborators."""
    return DedupeService(temp_db)


@pytest.fixture
def reference_types(ledger):
    """Register the IBAN and NBAN reference types."""
    ledger.add_reference_type(IBAN, "IBAN")
    ledger.add_reference_type(NBAN, "NBAN")
    return {IBAN: "IBAN", NBAN: "NBAN"}


@pytest.fixture
def contacts(ledger):
    """Create two contacts."""
    return {
        "jane": ledger.create_contact("Jane Doe"),
        "john": ledger.create_contact("John Roe"),
    }


@pytest.fixture
def ref_x(temp_db, reference_types, contacts):
    """Two accounts of the same contact sharing the reference REF-X.

    Account 1 was created later but has the lower ID; account 2 carries the
    older creation date.
    """
    first = temp_db.create_account(
        data_parsed={"iban": "DE1"}, created_date=datetime(2020, 1, 1)
    )
    second = temp_db.create_account(
        data_parsed={"city": "Berlin"}, created_date=datetime(2019, 6, 1)
    )
    keeper = temp_db.create_reference("REF-X", IBAN, first, contact_id=contacts["jane"])
    other = temp_db.create_reference("REF-X", IBAN, second, contact_id=contacts["jane"])
    return {
        "target": first,
        "source": second,
        "keeper_ref": keeper,
        "other_ref": other,
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
