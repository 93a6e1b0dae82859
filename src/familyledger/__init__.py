"""
Family Ledger - Split and Aggregate Engine

Exact per-member splitting of family transactions and the reports built on
top of them.

Key Features:
- Cent-exact allocation of a transaction across family members
- Period, monthly, category and subcategory summaries
- Median monthly benefit and KPI projections
- Side-by-side comparison of filter cases

Domain Packages:
- core: Currency handling, value types, data models, configuration
- split: Transaction split allocation
- analysis: Aggregation, comparison, filters and loading
- cli: Command-line interface

Example Usage:
    from decimal import Decimal
    from familyledger.split import allocate
    from familyledger.analysis import load_records, total_summary

    allocate(Decimal("10.00"), ["ana", "luis", "sara"])
    total_summary(load_records("transactions.json"))
"""

__version__ = "0.1.0"
__author__ = "Family Ledger Developers"

from .core.config import Environment, get_config
from .core.models import Participant, TransactionKind, TransactionRecord
from .core.money import Money

__all__ = [
    # Core models
    "Money",
    "Participant",
    "TransactionKind",
    "TransactionRecord",
    # Configuration
    "Environment",
    "get_config",
]
