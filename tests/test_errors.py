"""Tests for the domain error hierarchy."""

import pytest

from bankdedupe.domain import errors


@pytest.mark.parametrize(
    "error, category",
    [
        (errors.InsufficientDuplicatesError(1, [3]), errors.ValidationError),
        (errors.MergeConflictError(2, "description"), errors.ConflictError),
        (errors.ContactConflictError(1, [4, 5]), errors.ConflictError),
        (errors.DeleteFailedError(7, "locked"), errors.DomainError),
        (errors.LookupFailedError(9), errors.NotFoundError),
    ],
)
def test_per_item_errors_are_domain_errors(error, category):
    """Per-group and per-item failures are counted, so they must be DomainErrors."""
    assert isinstance(error, category)
    assert isinstance(error, errors.DomainError)


def test_store_unavailable_is_not_a_domain_error():
    assert not issubclass(errors.StoreUnavailableError, errors.DomainError)


def test_only_used_categories_are_defined():
    categories = {
        name
        for name, value in vars(errors).items()
        if isinstance(value, type) and value.__bases__ == (errors.DomainError,)
    }

    assert categories == {"ValidationError", "NotFoundError", "ConflictError", "DeleteFailedError"}


def test_contact_conflict_message():
    assert str(errors.ContactConflictError(3, [])) == (
        "Reference 3 is owned by contacts none, exactly 1 is needed to merge"
    )
    assert "contacts 4, 5" in str(errors.ContactConflictError(3, [4, 5]))
