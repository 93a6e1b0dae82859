"""
Split Allocation Package

Exact cent-level division of a transaction amount across the family members
it applies to. Invoked by the transaction write flow before allocation rows
are persisted.

Key Components:
- allocator: allocate / allocate_participants and their rejection errors
"""

from .allocator import (
    AllocationError,
    InvalidAmount,
    InvalidParticipants,
    allocate,
    allocate_participants,
    split_cents,
)

__all__ = [
    "AllocationError",
    "InvalidAmount",
    "InvalidParticipants",
    "allocate",
    "allocate_participants",
    "split_cents",
]
