#!/usr/bin/env python3
"""
Core Data Models for the Family Ledger

The normalized transaction shape consumed by the split and reporting engine.
Records are produced by an external persistence/query layer, already resolved
(category, subcategory and tag names joined, participants attached).
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from .dates import DeclaredMonth, FinancialDate
from .money import Money


class InvalidRecordError(ValueError):
    """Raised when a transaction row cannot be turned into a TransactionRecord"""

    pass


class TransactionKind(Enum):
    """Direction of a ledger transaction."""

    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: "str | TransactionKind") -> "TransactionKind":
        """Parse 'Income'/'Expense' case-insensitively."""
        if isinstance(value, TransactionKind):
            return value
        normalized = str(value).strip().lower()
        for kind in cls:
            if kind.value.lower() == normalized:
                return kind
        raise ValueError(f"Unknown transaction kind: {value!r}")


@dataclass(frozen=True)
class Participant:
    """A family member's allocated share of one transaction."""

    user_id: str
    allocated_amount: Money
    user_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "user_id": self.user_id,
            "user_name": self.user_name,
            "amount": self.allocated_amount.to_amount_str(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Participant":
        """Create Participant from an export row."""
        return cls(
            user_id=str(data["user_id"]),
            allocated_amount=_parse_money(data.get("amount", data.get("allocated_amount"))),
            user_name=data.get("user_name"),
        )


@dataclass(frozen=True)
class TransactionRecord:
    """
    Immutable, denormalized ledger transaction.

    ``declared_month`` is the reporting bucket chosen by the user; when it is
    not set the record reports under the month of ``date``.

    Note: the engine never mutates a record. Derived views (for example a
    single member's share) are built with ``dataclasses.replace``.
    """

    id: str
    kind: TransactionKind
    amount: Money
    date: FinancialDate
    participants: tuple[Participant, ...] = ()

    declared_month: DeclaredMonth | None = None
    category_id: str | None = None
    category_name: str | None = None
    subcategory_id: str | None = None
    subcategory_name: str | None = None
    tag_id: str | None = None
    tag_name: str | None = None
    comment: str | None = None

    @property
    def reporting_month(self) -> DeclaredMonth:
        """Month the record is reported under."""
        if self.declared_month is not None:
            return self.declared_month
        return DeclaredMonth.from_date(self.date)

    @property
    def is_income(self) -> bool:
        return self.kind is TransactionKind.INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind is TransactionKind.EXPENSE

    @property
    def participant_ids(self) -> tuple[str, ...]:
        return tuple(p.user_id for p in self.participants)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "amount": self.amount.to_amount_str(),
            "date": self.date.to_iso_string(),
            "declared_month": self.reporting_month.to_string(),
            "category_id": self.category_id,
            "category_name": self.category_name,
            "subcategory_id": self.subcategory_id,
            "subcategory_name": self.subcategory_name,
            "tag_id": self.tag_id,
            "tag_name": self.tag_name,
            "comment": self.comment,
            "participants": [p.to_dict() for p in self.participants],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TransactionRecord":
        """
        Create a TransactionRecord from an export row.

        Args:
            data: Row with id, kind, amount, date and optional relations

        Returns:
            TransactionRecord instance

        Raises:
            InvalidRecordError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise InvalidRecordError(f"Transaction row must be a mapping, got {type(data).__name__}")

        record_id = data.get("id")
        try:
            if record_id is None or record_id == "":
                raise ValueError("Missing id")
            declared = data.get("declared_month")
            return cls(
                id=str(record_id),
                kind=TransactionKind.parse(data["kind"]),
                amount=_parse_money(data["amount"]),
                date=FinancialDate.from_string(str(data["date"])),
                participants=tuple(Participant.from_dict(p) for p in data.get("participants") or []),
                declared_month=DeclaredMonth.from_string(str(declared)) if declared else None,
                category_id=_optional_str(data.get("category_id")),
                category_name=data.get("category_name"),
                subcategory_id=_optional_str(data.get("subcategory_id")),
                subcategory_name=data.get("subcategory_name"),
                tag_id=_optional_str(data.get("tag_id")),
                tag_name=data.get("tag_name"),
                comment=data.get("comment"),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidRecordError(f"Invalid transaction row {record_id!r}: {e}") from e


def _parse_money(value: Any) -> Money:
    if isinstance(value, Money):
        return value
    if isinstance(value, float):
        # JSON numbers arrive as floats; their repr is the shortest exact text
        value = Decimal(repr(value))
    if value is None:
        raise ValueError("Missing amount")
    return Money.from_amount(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


# Type aliases for common data structures
TransactionList = list[TransactionRecord]


def validate_record(record: TransactionRecord) -> bool:
    """
    Validate a record satisfies the ledger invariants.

    Checks a non-empty id, a non-negative amount, and a non-empty participant
    list with non-negative shares summing exactly to the amount.
    """
    if not record.id or record.amount.to_cents() < 0:
        return False
    if not record.participants:
        return False
    if any(p.allocated_amount.to_cents() < 0 for p in record.participants):
        return False
    allocated = sum(p.allocated_amount.to_cents() for p in record.participants)
    return allocated == record.amount.to_cents()


@dataclass(frozen=True)
class LoadResult:
    """Outcome of loading a batch of transaction rows."""

    records: tuple[TransactionRecord, ...]
    skipped: int = 0
    errors: tuple[str, ...] = field(default_factory=tuple)

    @property
    def total_processed(self) -> int:
        return len(self.records) + self.skipped
