"""
Core Utilities Package

Shared value types, data models and utilities used by the split and reporting
engine.

This package provides:
- Currency handling with integer arithmetic for precision
- The TransactionRecord contract and its supporting types
- Configuration management for environment-specific settings
"""

from .config import (
    Config,
    Environment,
    get_config,
    reload_config,
)
from .currency import (
    allocate_remainder,
    apportion_largest_remainder,
    cents_to_amount_str,
    format_cents,
    parse_amount_to_cents,
    validate_sum_equals_total,
)
from .dates import DeclaredMonth, FinancialDate
from .models import (
    InvalidRecordError,
    Participant,
    TransactionKind,
    TransactionRecord,
    validate_record,
)
from .money import Money

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "reload_config",
    # Currency utilities
    "allocate_remainder",
    "apportion_largest_remainder",
    "cents_to_amount_str",
    "format_cents",
    "parse_amount_to_cents",
    "validate_sum_equals_total",
    # Value types
    "DeclaredMonth",
    "FinancialDate",
    "Money",
    # Data models
    "InvalidRecordError",
    "Participant",
    "TransactionKind",
    "TransactionRecord",
    "validate_record",
]
