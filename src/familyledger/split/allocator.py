#!/usr/bin/env python3
"""
Split Allocator for Shared Transactions.

Divides a transaction amount across the family members it applies to.
Uses integer arithmetic throughout to avoid floating-point precision errors.

Rules:
- Every participant but the last receives the amount divided evenly,
  truncated to the cent
- The last participant absorbs the residual so the shares sum exactly
- Participant order is the caller's order; reordering moves the residual
"""

import logging
from decimal import Decimal
from typing import Sequence, overload

from ..core.currency import allocate_remainder, cents_to_decimal, decimal_to_cents, validate_sum_equals_total
from ..core.models import Participant
from ..core.money import Money

logger = logging.getLogger(__name__)


class AllocationError(ValueError):
    """Raised when an amount cannot be split across participants"""

    pass


class InvalidAmount(AllocationError):
    """Amount is negative, not finite, or has sub-cent precision"""

    pass


class InvalidParticipants(AllocationError):
    """Participant list is empty or contains duplicates"""

    pass


def _amount_to_cents(amount: Decimal | Money) -> int:
    if isinstance(amount, Money):
        cents = amount.to_cents()
    elif isinstance(amount, Decimal):
        try:
            cents = decimal_to_cents(amount)
        except ValueError as e:
            raise InvalidAmount(str(e)) from e
    else:
        raise InvalidAmount(f"Amount must be a Decimal or Money, got {type(amount).__name__}")

    if cents < 0:
        raise InvalidAmount(f"Amount must be non-negative, got {amount}")
    return cents


def split_cents(total_cents: int, count: int) -> list[int]:
    """
    Split integer cents into ``count`` shares, residual on the last share.

    Args:
        total_cents: Non-negative amount in cents
        count: Number of shares (at least 1)

    Returns:
        Shares in cents, summing exactly to ``total_cents``

    Example:
        split_cents(1000, 3) -> [333, 333, 334]
    """
    if count < 1:
        raise InvalidParticipants("At least one participant is required")
    if total_cents < 0:
        raise InvalidAmount(f"Amount must be non-negative, got {total_cents} cents")

    base = total_cents // count
    shares = allocate_remainder([base] * count, total_cents)

    if not validate_sum_equals_total(shares, total_cents):
        raise AllocationError(f"Shares total {sum(shares)} doesn't match amount {total_cents}")

    return shares


@overload
def allocate(amount: Decimal, participant_ids: Sequence[str]) -> list[Decimal]: ...


@overload
def allocate(amount: Money, participant_ids: Sequence[str]) -> list[Money]: ...


def allocate(amount: Decimal | Money, participant_ids: Sequence[str]) -> list[Decimal] | list[Money]:
    """
    Divide an amount across participants with an exact-sum guarantee.

    Supports two amount types:
    1. Decimal amount -> list of Decimals quantized to 2 places
    2. Money amount -> list of Money

    Args:
        amount: Non-negative amount with at most 2 decimal places
        participant_ids: Non-empty ordered participant ids

    Returns:
        One share per participant, in the same order

    Raises:
        InvalidAmount: If the amount is negative, not finite, or over-precise
        InvalidParticipants: If the participant list is empty
    """
    cents = _amount_to_cents(amount)
    if not participant_ids:
        raise InvalidParticipants("At least one participant is required")

    shares = split_cents(cents, len(participant_ids))
    logger.debug("Allocated %d cents across %d participants: %s", cents, len(participant_ids), shares)

    if isinstance(amount, Money):
        return [Money.from_cents(share) for share in shares]
    return [cents_to_decimal(share) for share in shares]


def allocate_participants(
    amount: Decimal | Money,
    participant_ids: Sequence[str],
    user_names: dict[str, str] | None = None,
) -> tuple[Participant, ...]:
    """
    Build the participant allocation rows for a transaction write.

    Args:
        amount: Transaction amount
        participant_ids: Ordered participant ids, no duplicates
        user_names: Optional display names by user id

    Returns:
        Participant rows whose shares sum exactly to the amount

    Raises:
        InvalidAmount: If the amount is invalid
        InvalidParticipants: If the list is empty or contains duplicates
    """
    if len(set(participant_ids)) != len(participant_ids):
        raise InvalidParticipants(f"Duplicate participants in {list(participant_ids)}")

    money = amount if isinstance(amount, Money) else Money.from_cents(_amount_to_cents(amount))
    shares = allocate(money, participant_ids)
    names = user_names or {}

    return tuple(
        Participant(user_id=user_id, allocated_amount=share, user_name=names.get(user_id))
        for user_id, share in zip(participant_ids, shares)
    )
