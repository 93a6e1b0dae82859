#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value wrapper that uses integer cents internally.
Prevents floating-point errors and provides type-safe currency operations.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    cents_to_amount_str,
    cents_to_decimal,
    decimal_to_cents,
    format_cents,
    parse_amount_to_cents,
)


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in cents.

    Transaction amounts and allocations are always non-negative; derived values
    such as a monthly benefit can be negative.

    Examples:
        >>> amount = Money.from_decimal(Decimal("12.34"))
        >>> amount.to_cents()
        1234

        >>> benefit = Money.from_cents(1000) - Money.from_cents(2550)
        >>> str(benefit)
        '€-15.50'

        >>> sum([Money.from_cents(1), Money.from_cents(2)], Money.zero())
        Money(cents=3)
    """

    cents: int

    @classmethod
    def zero(cls) -> "Money":
        """Money value of 0.00."""
        return cls(cents=0)

    @classmethod
    def from_cents(cls, cents: int) -> "Money":
        """Create Money from cents."""
        return cls(cents=cents)

    @classmethod
    def from_decimal(cls, amount: Decimal) -> "Money":
        """
        Create Money from a Decimal with at most 2 fractional digits.

        Raises:
            ValueError: If the Decimal has sub-cent precision or is not finite
        """
        return cls(cents=decimal_to_cents(amount))

    @classmethod
    def from_amount(cls, amount: str | int | Decimal) -> "Money":
        """
        Parse from an amount string like '€123.45', integer units or Decimal.

        Args:
            amount: String like "12.34", integer like 12, or Decimal

        Returns:
            Money object
        """
        return cls(cents=parse_amount_to_cents(amount))

    def to_cents(self) -> int:
        """Get value in cents."""
        return self.cents

    def to_decimal(self) -> Decimal:
        """Get value as a Decimal quantized to 2 places."""
        return cents_to_decimal(self.cents)

    def to_amount_str(self) -> str:
        """Get value as a plain amount string like '12.34'."""
        return cents_to_amount_str(self.cents)

    def format(self, symbol: str = "€") -> str:
        """Format with a currency symbol prefix."""
        return format_cents(self.cents, symbol)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(cents=abs(self.cents))

    def is_zero(self) -> bool:
        """Check whether this is 0.00."""
        return self.cents == 0

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects."""
        return Money(cents=self.cents + other.cents)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects."""
        return Money(cents=self.cents - other.cents)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(cents=self.cents * scalar)

    def __neg__(self) -> "Money":
        return Money(cents=-self.cents)

    def __eq__(self, other: object) -> bool:
        """Check equality."""
        if not isinstance(other, Money):
            return NotImplemented
        return self.cents == other.cents

    def __hash__(self) -> int:
        return hash(self.cents)

    def __lt__(self, other: "Money") -> bool:
        """Less than comparison."""
        return self.cents < other.cents

    def __le__(self, other: "Money") -> bool:
        """Less than or equal comparison."""
        return self.cents <= other.cents

    def __gt__(self, other: "Money") -> bool:
        """Greater than comparison."""
        return self.cents > other.cents

    def __ge__(self, other: "Money") -> bool:
        """Greater than or equal comparison."""
        return self.cents >= other.cents

    def __str__(self) -> str:
        """Format as amount string with the default symbol."""
        return format_cents(self.cents)

    def __repr__(self) -> str:
        """Repr format."""
        return f"Money(cents={self.cents})"
