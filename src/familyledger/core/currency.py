#!/usr/bin/env python3
"""
Currency Handling Utilities

Integer-cent helpers for the family ledger.
All money arithmetic uses integer cents (or Decimal at the boundaries) to avoid
floating-point errors.

Representations:
- Internal calculations use cents: 100 cents = 1.00
- Boundaries (exports, forms) use decimal strings: "12.34"
- Display uses a symbol prefix: "€12.34"

Key Principles:
- Never use floating-point arithmetic for currency calculations
- Always use integer arithmetic (cents)
- Validate calculations with sum checks
"""

from decimal import Decimal, InvalidOperation

CENTS_PER_UNIT = 100
DEFAULT_CURRENCY_SYMBOL = "€"


def cents_to_amount_str(cents: int) -> str:
    """
    Convert cents to an amount string using pure integer arithmetic.

    Args:
        cents: Amount in cents

    Returns:
        Formatted amount string

    Example:
        cents_to_amount_str(4599) -> "45.99"
    """
    is_negative = cents < 0
    abs_cents = abs(int(cents))

    units = abs_cents // CENTS_PER_UNIT
    remainder = abs_cents % CENTS_PER_UNIT

    if is_negative:
        return f"-{units}.{remainder:02d}"
    return f"{units}.{remainder:02d}"


def decimal_to_cents(amount: Decimal) -> int:
    """
    Convert a Decimal with at most 2 fractional digits to integer cents.

    Works on the digit tuple, so no decimal context precision or rounding is
    involved. Trailing zeros past the cent are accepted ("1.230").

    Raises:
        ValueError: If the amount is not finite or carries sub-cent precision
    """
    if not amount.is_finite():
        raise ValueError(f"Amount must be finite, got {amount}")

    sign, digits, exponent = amount.as_tuple()
    coefficient = int("".join(str(d) for d in digits) or "0")
    shift = int(exponent) + 2

    if shift >= 0:
        cents = coefficient * 10**shift
    else:
        divisor = 10**-shift
        if coefficient % divisor:
            raise ValueError(f"Amount {amount} has more than 2 decimal places")
        cents = coefficient // divisor

    return -cents if sign else cents


def cents_to_decimal(cents: int) -> Decimal:
    """Convert integer cents to an exact two-place Decimal."""
    return Decimal(cents_to_amount_str(cents))


def parse_amount_to_cents(amount: str | int | Decimal) -> int:
    """
    Parse an amount (string, integer units or Decimal) to integer cents.

    Accepts thousands separators and a leading currency symbol.

    Args:
        amount: Value like "12.34", "€1,234.50", 12 or Decimal("12.3")

    Returns:
        Amount in cents

    Raises:
        ValueError: If the value is not a valid amount with at most 2 decimals

    Examples:
        parse_amount_to_cents("12.34") -> 1234
        parse_amount_to_cents("€1,234.56") -> 123456
        parse_amount_to_cents("12.5") -> 1250
        parse_amount_to_cents(12) -> 1200
    """
    if isinstance(amount, bool):
        raise ValueError(f"Invalid amount: {amount!r}")
    if isinstance(amount, int):
        return amount * CENTS_PER_UNIT
    if isinstance(amount, Decimal):
        return decimal_to_cents(amount)
    if not isinstance(amount, str):
        raise ValueError(f"Unsupported amount type: {type(amount).__name__}")

    clean = amount.replace("$", "").replace("€", "").replace(",", "").strip()
    if not clean:
        raise ValueError("Empty amount")

    try:
        return decimal_to_cents(Decimal(clean))
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e


def format_cents(cents: int, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format cents as an amount string with currency symbol prefix."""
    return f"{symbol}{cents_to_amount_str(cents)}"


def validate_sum_equals_total(amounts: list[int], total: int, tolerance: int = 0) -> bool:
    """
    Validate that cent amounts sum exactly to a total.

    Args:
        amounts: Amounts in cents
        total: Expected total in cents
        tolerance: Allowed difference in cents (default: 0 for exact match)

    Returns:
        True if sum matches within tolerance
    """
    return abs(sum(amounts) - total) <= tolerance


def allocate_remainder(amounts: list[int], total: int) -> list[int]:
    """
    Replace the last amount so the list sums exactly to the total.

    The last item absorbs any remainder left by truncating division.

    Args:
        amounts: Amounts calculated before remainder allocation
        total: Target total that amounts should sum to

    Returns:
        New list with remainder allocated to the last item
    """
    if not amounts:
        return amounts

    amounts_copy = amounts.copy()
    amounts_copy[-1] = total - sum(amounts_copy[:-1])
    return amounts_copy


def apportion_largest_remainder(weights: list[int], total: int) -> list[int]:
    """
    Distribute an integer total proportionally to non-negative weights.

    Each share is floor(weight * total / sum(weights)); the units lost to
    truncation go one at a time to the largest fractional remainders, earlier
    positions winning ties. The result always sums exactly to ``total``.

    Returns all zeros when the weights sum to zero.

    Example:
        apportion_largest_remainder([1, 1, 1], 10000) -> [3334, 3333, 3333]
    """
    weight_sum = sum(weights)
    if weight_sum == 0:
        return [0] * len(weights)

    shares = [(weight * total) // weight_sum for weight in weights]
    remainders = [(weight * total) % weight_sum for weight in weights]

    leftover = total - sum(shares)
    order = sorted(range(len(weights)), key=lambda i: (-remainders[i], i))
    for i in order[:leftover]:
        shares[i] += 1

    return shares
