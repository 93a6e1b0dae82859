#!/usr/bin/env python3
"""
Date Primitive Types

Immutable date wrappers with consistent formatting for ledger operations.

- FinancialDate: the calendar date a transaction happened on
- DeclaredMonth: the year-month bucket a transaction is reported under
"""

import re
from dataclasses import dataclass
from datetime import date, datetime

_STORAGE_MONTH = re.compile(r"^(\d{4})-(\d{2})$")
_FORM_MONTH = re.compile(r"^(\d{2})-(\d{4})$")


@dataclass(frozen=True)
class FinancialDate:
    """Immutable financial date wrapper with consistent formatting."""

    date: date

    @classmethod
    def from_string(cls, date_str: str, format: str = "%Y-%m-%d") -> "FinancialDate":
        """
        Parse from string in specified format.

        Args:
            date_str: Date string to parse
            format: Date format (default: ISO format "%Y-%m-%d")

        Returns:
            FinancialDate object
        """
        return cls(date=datetime.strptime(date_str, format).date())

    @classmethod
    def today(cls) -> "FinancialDate":
        """Get today's date."""
        return cls(date=date.today())

    def to_iso_string(self) -> str:
        """Format as YYYY-MM-DD."""
        return self.date.isoformat()

    def __str__(self) -> str:
        """String representation."""
        return self.to_iso_string()

    def __lt__(self, other: "FinancialDate") -> bool:
        """Less than comparison."""
        return self.date < other.date

    def __le__(self, other: "FinancialDate") -> bool:
        """Less than or equal comparison."""
        return self.date <= other.date

    def __gt__(self, other: "FinancialDate") -> bool:
        """Greater than comparison."""
        return self.date > other.date

    def __ge__(self, other: "FinancialDate") -> bool:
        """Greater than or equal comparison."""
        return self.date >= other.date

    def __repr__(self) -> str:
        """Repr format."""
        return f"FinancialDate(date={self.date!r})"


@dataclass(frozen=True, order=True)
class DeclaredMonth:
    """
    Year-month reporting bucket.

    Stored as ``YYYY-MM``; entry forms use ``MM-YYYY``. Both are accepted by
    ``from_string``. Ordering is chronological.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")
        if not 1 <= self.year <= 9999:
            raise ValueError(f"Year out of range: {self.year}")

    @classmethod
    def from_string(cls, value: str) -> "DeclaredMonth":
        """
        Parse ``YYYY-MM`` or ``MM-YYYY``.

        Raises:
            ValueError: If the value matches neither format
        """
        value = value.strip()
        match = _STORAGE_MONTH.match(value)
        if match:
            return cls(year=int(match.group(1)), month=int(match.group(2)))
        match = _FORM_MONTH.match(value)
        if match:
            return cls(year=int(match.group(2)), month=int(match.group(1)))
        raise ValueError(f"Invalid month format: {value!r} (expected YYYY-MM or MM-YYYY)")

    @classmethod
    def from_date(cls, value: date | FinancialDate) -> "DeclaredMonth":
        """Month bucket containing a calendar date."""
        if isinstance(value, FinancialDate):
            value = value.date
        return cls(year=value.year, month=value.month)

    def to_string(self) -> str:
        """Storage format, YYYY-MM."""
        return f"{self.year:04d}-{self.month:02d}"

    def display(self) -> str:
        """Form/display format, MM-YYYY."""
        return f"{self.month:02d}-{self.year:04d}"

    def next(self) -> "DeclaredMonth":
        """The following month."""
        if self.month == 12:
            return DeclaredMonth(year=self.year + 1, month=1)
        return DeclaredMonth(year=self.year, month=self.month + 1)

    def __str__(self) -> str:
        return self.to_string()
