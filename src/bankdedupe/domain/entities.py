"""Domain model entities for bankdedupe.

These are pure data classes representing the ledger and the deduplication
results, independent of the database schema.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from typing import Any, Optional, Sequence, Union


@dataclass(frozen=True)
class Account:
    """Unified bank account record.

    ``data_parsed`` holds the structured fields (holder name, bank name, IBAN,
    ...) contributed by every source that was merged into this account.
    """

    id: int
    description: Optional[str]
    data_raw: Optional[str]
    data_parsed: dict[str, Any]
    created_date: Optional[datetime]
    modified_date: Optional[datetime]


@dataclass(frozen=True)
class Reference:
    """External identifier of a given type pointing at one account."""

    id: int
    reference: str
    reference_type_id: int
    account_id: int
    contact_id: Optional[int]
    modified_date: datetime


@dataclass(frozen=True)
class Transaction:
    """Bank transaction with its primary and counter-party account links."""

    id: int
    bank_reference: str
    amount: Decimal
    value_date: Optional[date]
    purpose: Optional[str]
    account_id: Optional[int]
    party_account_id: Optional[int]


@dataclass(frozen=True)
class Contact:
    """Identity owning one or more references."""

    id: int
    display_name: str
    contact_type: str = "Individual"


@dataclass(frozen=True)
class ReferenceGroupStats:
    """Aggregate row for one (reference, reference_type_id) group."""

    reference: str
    reference_id: int
    reference_type_id: int
    dupe_count: int
    account_count: int
    contact_count: int
    last_change: Optional[datetime]


@dataclass(frozen=True)
class RepointCounts:
    """Number of rows moved onto a merge target."""

    references: int = 0
    transactions: int = 0
    party_transactions: int = 0


@dataclass(frozen=True)
class Finding:
    """One duplicate reference group as seen by the last scan."""

    reference: str
    reference_id: int
    dupe_count: int
    account_count: int
    contact_count: int
    last_change: Optional[datetime]
    reference_type_id: int
    reference_type: Optional[str] = None
    contacts: tuple[Contact, ...] = ()
    contact: Optional[Contact] = None


@dataclass(frozen=True)
class ScanResult:
    """Scan output split into the three classification buckets.

    Each bucket maps reference value to its finding, in scan order.
    """

    reference_duplicates: dict[str, Finding] = field(default_factory=dict)
    account_duplicates: dict[str, Finding] = field(default_factory=dict)
    account_conflicts: dict[str, Finding] = field(default_factory=dict)

    def buckets(self) -> tuple[dict[str, Finding], ...]:
        return (self.reference_duplicates, self.account_duplicates, self.account_conflicts)

    def all_findings(self) -> list[Finding]:
        return [finding for bucket in self.buckets() for finding in bucket.values()]


@dataclass(frozen=True)
class MergeOutcome:
    """Result of merging duplicate account groups."""

    merged: int = 0
    errors: int = 0
    merged_reference_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class CleanupOutcome:
    """Result of deleting redundant references."""

    deleted: int = 0
    errors: int = 0


@dataclass(frozen=True)
class TargetSelection:
    """Operator choice of which groups to act on.

    Either every finding of the relevant bucket (``select_all``) or an explicit
    list of representative reference ids and/or reference values.
    """

    select_all: bool = False
    items: tuple[Union[int, str], ...] = ()

    @classmethod
    def all(cls) -> "TargetSelection":
        return cls(select_all=True)

    @classmethod
    def of(cls, items: Sequence[Union[int, str]]) -> "TargetSelection":
        return cls(items=tuple(items))

    def is_empty(self) -> bool:
        return not self.select_all and not self.items


@dataclass(frozen=True)
class StatusMessage:
    """Human readable summary of one resolver run."""

    title: str
    message: str
    level: str = "info"


@dataclass(frozen=True)
class DedupeReport:
    """Outcome of one orchestrator invocation."""

    scan: ScanResult
    messages: tuple[StatusMessage, ...] = ()
    changed: int = 0
