#!/usr/bin/env python3
"""
Multi-Case Comparator

Evaluates several independent filter cases against the same record list and
lays the results side by side: per-case totals, top-N rankings and a
category-by-case matrix.

The comparator is a reporting convenience. Unknown ids in a case simply match
nothing and produce an all-zero case; it never raises on missing data.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from ..core.dates import DeclaredMonth
from ..core.models import TransactionKind, TransactionRecord
from ..core.money import Money
from .aggregator import BreakdownRow, category_summary, subcategory_summary, top_transactions, total_summary
from .filters import GlobalFilters, apply_global_filters

logger = logging.getLogger(__name__)

MIN_CASES = 2
DEFAULT_TOP_N = 5


@dataclass(frozen=True)
class CaseDefinition:
    """
    A named slice of the ledger.

    Every set field must match (AND). ``participant_ids`` matches a record
    that shares at least one participant with it.
    """

    id: str
    label: str | None = None
    month_declared: DeclaredMonth | None = None
    category_id: str | None = None
    subcategory_id: str | None = None
    tag_id: str | None = None
    participant_ids: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        """A case takes part in a comparison only if it sets at least one filter."""
        return any(
            value is not None
            for value in (self.month_declared, self.category_id, self.subcategory_id, self.tag_id)
        ) or bool(self.participant_ids)

    def matches(self, record: TransactionRecord) -> bool:
        if self.month_declared is not None and record.reporting_month != self.month_declared:
            return False
        if self.category_id is not None and record.category_id != self.category_id:
            return False
        if self.subcategory_id is not None and record.subcategory_id != self.subcategory_id:
            return False
        if self.tag_id is not None and record.tag_id != self.tag_id:
            return False
        if self.participant_ids and not set(self.participant_ids) & set(record.participant_ids):
            return False
        return True

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "month_declared": self.month_declared.to_string() if self.month_declared else None,
            "category_id": self.category_id,
            "subcategory_id": self.subcategory_id,
            "tag_id": self.tag_id,
            "participant_ids": list(self.participant_ids),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CaseDefinition":
        """
        Create a CaseDefinition from a mapping (e.g. a YAML case file entry).

        Args:
            data: Mapping with an ``id`` and optional filter fields

        Returns:
            CaseDefinition instance
        """
        month = data.get("month_declared")
        participants = data.get("participant_ids") or ()
        return cls(
            id=str(data["id"]),
            label=data.get("label"),
            month_declared=DeclaredMonth.from_string(str(month)) if month else None,
            category_id=_optional_str(data.get("category_id")),
            subcategory_id=_optional_str(data.get("subcategory_id")),
            tag_id=_optional_str(data.get("tag_id")),
            participant_ids=tuple(str(p) for p in participants),
        )


def _optional_str(value: Any) -> str | None:
    return None if value is None or value == "" else str(value)


@dataclass(frozen=True)
class CaseResult:
    """Totals and rankings for one case."""

    case: CaseDefinition
    income: Money
    expense: Money
    benefit: Money
    top5_expenses: tuple[TransactionRecord, ...]
    top5_incomes: tuple[TransactionRecord, ...]
    top5_categories: tuple[BreakdownRow, ...]
    top5_subcategories: tuple[BreakdownRow, ...]
    category_distribution: tuple[BreakdownRow, ...]
    subcategory_distribution: tuple[BreakdownRow, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "case": self.case.to_dict(),
            "income": self.income.to_amount_str(),
            "expense": self.expense.to_amount_str(),
            "benefit": self.benefit.to_amount_str(),
            "top5_expenses": [r.to_dict() for r in self.top5_expenses],
            "top5_incomes": [r.to_dict() for r in self.top5_incomes],
            "top5_categories": [row.to_dict() for row in self.top5_categories],
            "top5_subcategories": [row.to_dict() for row in self.top5_subcategories],
        }


@dataclass(frozen=True)
class CategoryComparisonRow:
    """One category's expense total in every case (0 where absent)."""

    category_id: str
    category_name: str | None
    values: dict[str, Money] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "values": {case_id: value.to_amount_str() for case_id, value in self.values.items()},
        }


@dataclass(frozen=True)
class ComparisonResult:
    """Side-by-side comparison of two or more cases."""

    cases: tuple[CaseResult, ...]
    category_comparison: tuple[CategoryComparisonRow, ...]

    def case_result(self, case_id: str) -> CaseResult | None:
        return next((c for c in self.cases if c.case.id == case_id), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cases": [c.to_dict() for c in self.cases],
            "category_comparison": [row.to_dict() for row in self.category_comparison],
        }


def evaluate_case(
    records: Sequence[TransactionRecord],
    case: CaseDefinition,
    top_n: int = DEFAULT_TOP_N,
) -> CaseResult:
    """
    Filter records by one case and compute its totals and rankings.

    Breakdown percentages are relative to this case's own grouping totals.
    """
    matched = [r for r in records if case.matches(r)]
    summary = total_summary(matched)
    categories = category_summary(matched, kind=TransactionKind.EXPENSE)
    subcategories = subcategory_summary(matched)

    logger.debug("Case %s matched %d records", case.id, len(matched))

    return CaseResult(
        case=case,
        income=summary.income,
        expense=summary.expense,
        benefit=summary.benefit,
        top5_expenses=tuple(top_transactions(matched, TransactionKind.EXPENSE, top_n)),
        top5_incomes=tuple(top_transactions(matched, TransactionKind.INCOME, top_n)),
        top5_categories=tuple(categories[:top_n]),
        top5_subcategories=tuple(subcategories[:top_n]),
        category_distribution=tuple(categories),
        subcategory_distribution=tuple(subcategories),
    )


def build_category_comparison(results: Sequence[CaseResult]) -> list[CategoryComparisonRow]:
    """
    Category-by-case expense matrix over the union of categories in any case.

    Rows are in order of first appearance across the cases' distributions.
    """
    names: dict[str, str | None] = {}
    totals: dict[str, dict[str, Money]] = {}

    for result in results:
        for row in result.category_distribution:
            names.setdefault(row.id, row.name)
            totals.setdefault(row.id, {})[result.case.id] = row.total

    return [
        CategoryComparisonRow(
            category_id=category_id,
            category_name=name,
            values={r.case.id: totals[category_id].get(r.case.id, Money.zero()) for r in results},
        )
        for category_id, name in names.items()
    ]


def compare_cases(
    records: Sequence[TransactionRecord],
    cases: Sequence[CaseDefinition],
    global_filters: GlobalFilters | None = None,
    top_n: int = DEFAULT_TOP_N,
) -> ComparisonResult | None:
    """
    Compare several cases over the same records.

    Args:
        records: Family records
        cases: Case definitions; cases with no filter set are dropped
        global_filters: Date/month bounds applied once before any case
        top_n: Length of the per-case rankings

    Returns:
        ComparisonResult, or None when fewer than 2 valid cases remain
    """
    valid_cases = [case for case in cases if case.is_valid]
    if len(valid_cases) < MIN_CASES:
        logger.debug("Only %d valid cases of %d; nothing to compare", len(valid_cases), len(cases))
        return None

    candidates = apply_global_filters(records, global_filters)
    results = [evaluate_case(candidates, case, top_n) for case in valid_cases]

    return ComparisonResult(
        cases=tuple(results),
        category_comparison=tuple(build_category_comparison(results)),
    )


@dataclass(frozen=True)
class CategoryDifference:
    """Change in one category's expense between two months."""

    category_id: str
    category_name: str | None
    month_a: Money
    month_b: Money
    difference: Money
    difference_percent: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "category_id": self.category_id,
            "category_name": self.category_name,
            "month_a": self.month_a.to_amount_str(),
            "month_b": self.month_b.to_amount_str(),
            "difference": self.difference.to_amount_str(),
            "difference_percent": str(self.difference_percent),
        }


@dataclass(frozen=True)
class MonthComparison:
    """Two reporting months compared case-by-case plus category deltas."""

    month_a: DeclaredMonth
    month_b: DeclaredMonth
    result_a: CaseResult
    result_b: CaseResult
    category_differences: tuple[CategoryDifference, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "month_a": self.month_a.to_string(),
            "month_b": self.month_b.to_string(),
            "result_a": self.result_a.to_dict(),
            "result_b": self.result_b.to_dict(),
            "category_differences": [d.to_dict() for d in self.category_differences],
        }


def _difference_percent(value_a: Money, value_b: Money) -> Decimal:
    if value_a.is_zero():
        return Decimal("100.00") if value_b.to_cents() > 0 else Decimal("0.00")
    ratio = Decimal((value_b - value_a).to_cents()) * 100 / Decimal(value_a.to_cents())
    return ratio.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def compare_months(
    records: Sequence[TransactionRecord],
    month_a: DeclaredMonth,
    month_b: DeclaredMonth,
    top_n: int = DEFAULT_TOP_N,
) -> MonthComparison:
    """
    Compare two reporting months.

    Category differences are B - A, sorted by absolute difference descending.
    """
    result_a = evaluate_case(records, CaseDefinition(id="A", month_declared=month_a), top_n)
    result_b = evaluate_case(records, CaseDefinition(id="B", month_declared=month_b), top_n)

    differences = []
    for row in build_category_comparison([result_a, result_b]):
        value_a = row.values["A"]
        value_b = row.values["B"]
        differences.append(
            CategoryDifference(
                category_id=row.category_id,
                category_name=row.category_name,
                month_a=value_a,
                month_b=value_b,
                difference=value_b - value_a,
                difference_percent=_difference_percent(value_a, value_b),
            )
        )

    differences.sort(key=lambda d: -abs(d.difference.to_cents()))

    return MonthComparison(
        month_a=month_a,
        month_b=month_b,
        result_a=result_a,
        result_b=result_b,
        category_differences=tuple(differences),
    )
