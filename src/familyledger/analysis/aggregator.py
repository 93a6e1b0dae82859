#!/usr/bin/env python3
"""
Ledger Aggregation Module

Turns a list of TransactionRecords into financial reports: period totals,
monthly summaries, category and subcategory breakdowns, median monthly benefit,
KPIs and month-by-month evolution.

Every function is pure: it takes an already-filtered record list and returns
new summary values. Money stays in integer cents; percentages are Decimals
with 2 places.
"""

import logging
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any

from ..core.currency import apportion_largest_remainder
from ..core.dates import DeclaredMonth
from ..core.models import TransactionKind, TransactionRecord
from ..core.money import Money

logger = logging.getLogger(__name__)

# Percentages are apportioned in hundredths of a percent
_PERCENT_UNITS = 10000
_TWO_PLACES = Decimal("0.01")


class BreakdownKind(Enum):
    """Discriminant for breakdown rows."""

    CATEGORY = "category"
    SUBCATEGORY = "subcategory"


@dataclass(frozen=True)
class TotalSummary:
    """Income, expense and benefit over a set of records."""

    income: Money
    expense: Money
    benefit: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "income": self.income.to_amount_str(),
            "expense": self.expense.to_amount_str(),
            "benefit": self.benefit.to_amount_str(),
        }


@dataclass(frozen=True)
class MonthlySummary:
    """Totals for one reporting month."""

    month: DeclaredMonth
    income: Money
    expense: Money
    benefit: Money

    @property
    def month_display(self) -> str:
        return self.month.display()

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month.to_string(),
            "month_display": self.month_display,
            "income": self.income.to_amount_str(),
            "expense": self.expense.to_amount_str(),
            "benefit": self.benefit.to_amount_str(),
        }


@dataclass(frozen=True)
class BreakdownRow:
    """
    One row of a category or subcategory breakdown.

    ``kind`` tells the two apart. For CATEGORY rows ``category_id`` equals
    ``id``; for SUBCATEGORY rows it is the parent category.
    """

    kind: BreakdownKind
    id: str
    name: str | None
    total: Money
    percentage: Decimal
    transactions: int
    category_id: str | None = None
    category_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "name": self.name,
            "total": self.total.to_amount_str(),
            "percentage": str(self.percentage),
            "transactions": self.transactions,
            "category_id": self.category_id,
            "category_name": self.category_name,
        }


@dataclass(frozen=True)
class MonthlySavings:
    """Benefit of one month and the running total up to it."""

    month: DeclaredMonth
    savings: Money
    cumulative_savings: Money
    income: Money
    expense: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month.to_string(),
            "savings": self.savings.to_amount_str(),
            "cumulative_savings": self.cumulative_savings.to_amount_str(),
            "income": self.income.to_amount_str(),
            "expense": self.expense.to_amount_str(),
        }


@dataclass(frozen=True)
class KPISummary:
    """Headline figures for the analytics dashboard, based on monthly medians."""

    benefit: Money
    savings_rate: Decimal  # median benefit / median income, in %
    savings_rate_amount: Money
    projected_december: Money
    projected_months: int
    median_monthly_savings: Money
    average_monthly_income: Money
    average_monthly_expense: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "benefit": self.benefit.to_amount_str(),
            "savings_rate": str(self.savings_rate),
            "savings_rate_amount": self.savings_rate_amount.to_amount_str(),
            "projected_december": self.projected_december.to_amount_str(),
            "projected_months": self.projected_months,
            "median_monthly_savings": self.median_monthly_savings.to_amount_str(),
            "average_monthly_income": self.average_monthly_income.to_amount_str(),
            "average_monthly_expense": self.average_monthly_expense.to_amount_str(),
        }


@dataclass(frozen=True)
class MonthlyProjection:
    """Projected benefit for a future month of the current year."""

    month: DeclaredMonth
    projected_benefit: Money
    cumulative_projected: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month.to_string(),
            "projected_benefit": self.projected_benefit.to_amount_str(),
            "cumulative_projected": self.cumulative_projected.to_amount_str(),
        }


@dataclass(frozen=True)
class EvolutionPoint:
    """A group's total in one month and its share of that month's total."""

    month: DeclaredMonth
    total: Money
    percentage: Decimal


@dataclass(frozen=True)
class GroupEvolution:
    """Month-by-month totals for one category or subcategory."""

    kind: BreakdownKind
    id: str
    name: str | None
    monthly: tuple[EvolutionPoint, ...]
    total: Money
    average_monthly: Money
    category_id: str | None = None
    category_name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "id": self.id,
            "name": self.name,
            "category_id": self.category_id,
            "category_name": self.category_name,
            "monthly": [
                {
                    "month": point.month.to_string(),
                    "total": point.total.to_amount_str(),
                    "percentage": str(point.percentage),
                }
                for point in self.monthly
            ],
            "total": self.total.to_amount_str(),
            "average_monthly": self.average_monthly.to_amount_str(),
        }


@dataclass(frozen=True)
class MonthAnalysis:
    """Full breakdown of a single reporting month."""

    month: DeclaredMonth
    income: Money
    expense: Money
    benefit: Money
    transactions: tuple[TransactionRecord, ...]
    category_distribution: tuple[BreakdownRow, ...]
    subcategory_distribution: tuple[BreakdownRow, ...]
    top5_expenses: tuple[TransactionRecord, ...]
    top5_incomes: tuple[TransactionRecord, ...]
    top5_categories: tuple[BreakdownRow, ...]
    top5_subcategories: tuple[BreakdownRow, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month.to_string(),
            "income": self.income.to_amount_str(),
            "expense": self.expense.to_amount_str(),
            "benefit": self.benefit.to_amount_str(),
            "transactions": [r.to_dict() for r in self.transactions],
            "category_distribution": [row.to_dict() for row in self.category_distribution],
            "subcategory_distribution": [row.to_dict() for row in self.subcategory_distribution],
            "top5_expenses": [r.to_dict() for r in self.top5_expenses],
            "top5_incomes": [r.to_dict() for r in self.top5_incomes],
            "top5_categories": [row.to_dict() for row in self.top5_categories],
            "top5_subcategories": [row.to_dict() for row in self.top5_subcategories],
        }


def _sum(values: Iterable[Money]) -> Money:
    return sum(values, Money.zero())


def _round_to_cent(value: Decimal) -> Money:
    return Money.from_cents(int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)))


def _percent_of(part: Money, whole: Money) -> Decimal:
    """100 * part / whole to 2 places; 0 when whole is 0."""
    if whole.is_zero():
        return Decimal("0.00")
    ratio = Decimal(part.to_cents()) * 100 / Decimal(whole.to_cents())
    return ratio.quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


def total_summary(records: Sequence[TransactionRecord]) -> TotalSummary:
    """
    Sum income and expense over the records.

    Args:
        records: Already-filtered records

    Returns:
        TotalSummary with benefit = income - expense
    """
    income = _sum(r.amount for r in records if r.is_income)
    expense = _sum(r.amount for r in records if r.is_expense)
    return TotalSummary(income=income, expense=expense, benefit=income - expense)


def monthly_summary(records: Sequence[TransactionRecord]) -> list[MonthlySummary]:
    """
    Group records by reporting month.

    Months with no records are not emitted; output is chronological.
    """
    monthly: dict[DeclaredMonth, list[int]] = {}

    for record in records:
        totals = monthly.setdefault(record.reporting_month, [0, 0])
        if record.is_income:
            totals[0] += record.amount.to_cents()
        elif record.is_expense:
            totals[1] += record.amount.to_cents()

    return [
        MonthlySummary(
            month=month,
            income=Money.from_cents(income),
            expense=Money.from_cents(expense),
            benefit=Money.from_cents(income - expense),
        )
        for month, (income, expense) in sorted(monthly.items())
    ]


def _group_breakdown(
    records: Iterable[TransactionRecord],
    kind: BreakdownKind,
    key: Callable[[TransactionRecord], str | None],
    name: Callable[[TransactionRecord], str | None],
) -> list[BreakdownRow]:
    groups: dict[str, dict[str, Any]] = {}

    for record in records:
        group_id = key(record)
        # Rows without a group id and negative amounts stay out of the breakdown
        if group_id is None or record.amount.to_cents() < 0:
            continue

        group = groups.get(group_id)
        if group is None:
            group = {
                "name": name(record),
                "total": 0,
                "count": 0,
                "category_id": record.category_id,
                "category_name": record.category_name,
            }
            groups[group_id] = group

        group["total"] += record.amount.to_cents()
        group["count"] += 1

    # sorted() is stable, so equal totals keep first-appearance order
    ordered = sorted(groups.items(), key=lambda item: -item[1]["total"])
    shares = apportion_largest_remainder([data["total"] for _, data in ordered], _PERCENT_UNITS)

    return [
        BreakdownRow(
            kind=kind,
            id=group_id,
            name=data["name"],
            total=Money.from_cents(data["total"]),
            percentage=(Decimal(share) / 100).quantize(_TWO_PLACES),
            transactions=data["count"],
            category_id=data["category_id"],
            category_name=data["category_name"],
        )
        for (group_id, data), share in zip(ordered, shares)
    ]


def category_summary(
    records: Sequence[TransactionRecord],
    kind: TransactionKind | None = None,
    tag_id: str | None = None,
) -> list[BreakdownRow]:
    """
    Break records down by category.

    Percentages are shares of the grouping total and sum to exactly 100.00
    when that total is nonzero; all are 0.00 otherwise.

    Args:
        records: Already-filtered records
        kind: Restrict to one transaction kind (both kinds if None)
        tag_id: Restrict to records carrying this tag

    Returns:
        Rows sorted by total descending
    """
    selected = (
        r
        for r in records
        if (kind is None or r.kind is kind) and (tag_id is None or r.tag_id == tag_id)
    )
    return _group_breakdown(
        selected,
        BreakdownKind.CATEGORY,
        key=lambda r: r.category_id,
        name=lambda r: r.category_name,
    )


def subcategory_summary(
    records: Sequence[TransactionRecord],
    tag_id: str | None = None,
) -> list[BreakdownRow]:
    """
    Break expense records down by subcategory.

    Records without a subcategory are left out rather than bucketed.
    """
    selected = (r for r in records if r.is_expense and (tag_id is None or r.tag_id == tag_id))
    return _group_breakdown(
        selected,
        BreakdownKind.SUBCATEGORY,
        key=lambda r: r.subcategory_id,
        name=lambda r: r.subcategory_name,
    )


def median(values: Sequence[Money]) -> Money:
    """
    Median of money values.

    The mean of the two middle values is used for even counts, rounded half-up
    to the cent. Returns 0 for no values.
    """
    if not values:
        return Money.zero()

    ordered = sorted(v.to_cents() for v in values)
    middle = len(ordered) // 2

    if len(ordered) % 2 == 0:
        return _round_to_cent(Decimal(ordered[middle - 1] + ordered[middle]) / 2)
    return Money.from_cents(ordered[middle])


def _mean(values: Sequence[Money]) -> Money:
    if not values:
        return Money.zero()
    return _round_to_cent(Decimal(_sum(values).to_cents()) / len(values))


def median_monthly_benefit(records: Sequence[TransactionRecord]) -> Money:
    """Median of the monthly benefit values; 0 for no records."""
    return median([m.benefit for m in monthly_summary(records)])


def monthly_savings(records: Sequence[TransactionRecord]) -> list[MonthlySavings]:
    """Monthly benefit with a running cumulative total."""
    cumulative = Money.zero()
    savings = []

    for month in monthly_summary(records):
        cumulative = cumulative + month.benefit
        savings.append(
            MonthlySavings(
                month=month.month,
                savings=month.benefit,
                cumulative_savings=cumulative,
                income=month.income,
                expense=month.expense,
            )
        )

    return savings


def kpi_summary(records: Sequence[TransactionRecord], as_of: date) -> KPISummary:
    """
    Compute headline KPIs from monthly medians.

    The year-end projection adds, for each month left after ``as_of``'s month,
    the median benefit of the months other than ``as_of``'s month.

    Args:
        records: Already-filtered records
        as_of: Reference date for the projection

    Returns:
        KPISummary (all zeros for no records)
    """
    months = monthly_summary(records)
    if not months:
        zero = Money.zero()
        return KPISummary(
            benefit=zero,
            savings_rate=Decimal("0.00"),
            savings_rate_amount=zero,
            projected_december=zero,
            projected_months=0,
            median_monthly_savings=zero,
            average_monthly_income=zero,
            average_monthly_expense=zero,
        )

    net = _sum(m.benefit for m in months)
    benefits = [m.benefit for m in months]
    incomes = [m.income for m in months]

    median_savings = median(benefits)
    median_income = median(incomes)
    savings_rate = (
        _percent_of(median_savings, median_income) if median_income.to_cents() > 0 else Decimal("0.00")
    )

    current = DeclaredMonth.from_date(as_of)
    previous_benefits = [m.benefit for m in months if m.month != current]
    median_previous = median(previous_benefits) if previous_benefits else median_savings

    months_remaining = 12 - as_of.month
    logger.debug(
        "KPI projection: net %s, median %s over %d months remaining",
        net,
        median_previous,
        months_remaining,
    )

    return KPISummary(
        benefit=net,
        savings_rate=savings_rate,
        savings_rate_amount=median_savings,
        projected_december=net + median_previous * months_remaining,
        projected_months=months_remaining,
        median_monthly_savings=median_savings,
        average_monthly_income=_mean(incomes),
        average_monthly_expense=_mean([m.expense for m in months]),
    )


def monthly_projection(records: Sequence[TransactionRecord], as_of: date) -> list[MonthlyProjection]:
    """
    Project monthly benefit from the month after ``as_of`` through December.

    Each future month is credited with the median benefit of the months other
    than the current one; the cumulative total starts from the current month's
    benefit.
    """
    months = monthly_summary(records)
    current = DeclaredMonth.from_date(as_of)

    previous_benefits = [m.benefit for m in months if m.month != current]
    projected = median(previous_benefits)
    cumulative = next((m.benefit for m in months if m.month == current), Money.zero())

    projections = []
    month = current
    while month.month < 12:
        month = month.next()
        cumulative = cumulative + projected
        projections.append(
            MonthlyProjection(month=month, projected_benefit=projected, cumulative_projected=cumulative)
        )

    return projections


def _monthly_evolution(
    records: Sequence[TransactionRecord],
    kind: TransactionKind,
    breakdown: BreakdownKind,
    key: Callable[[TransactionRecord], str | None],
    name: Callable[[TransactionRecord], str | None],
) -> list[GroupEvolution]:
    months = [m.month for m in monthly_summary(records)]

    month_totals: dict[DeclaredMonth, int] = {}
    for record in records:
        if record.kind is kind:
            month_totals[record.reporting_month] = (
                month_totals.get(record.reporting_month, 0) + record.amount.to_cents()
            )

    groups: dict[str, dict[str, Any]] = {}
    for record in records:
        group_id = key(record)
        if record.kind is not kind or group_id is None:
            continue
        group = groups.setdefault(
            group_id,
            {
                "name": name(record),
                "category_id": record.category_id,
                "category_name": record.category_name,
                "monthly": {},
            },
        )
        month = record.reporting_month
        group["monthly"][month] = group["monthly"].get(month, 0) + record.amount.to_cents()

    evolution = []
    for group_id, data in groups.items():
        points = tuple(
            EvolutionPoint(
                month=month,
                total=Money.from_cents(data["monthly"].get(month, 0)),
                percentage=_percent_of(
                    Money.from_cents(data["monthly"].get(month, 0)),
                    Money.from_cents(month_totals.get(month, 0)),
                ),
            )
            for month in months
        )
        total = Money.from_cents(sum(data["monthly"].values()))
        average = _round_to_cent(Decimal(total.to_cents()) / len(months)) if months else Money.zero()

        evolution.append(
            GroupEvolution(
                kind=breakdown,
                id=group_id,
                name=data["name"],
                monthly=points,
                total=total,
                average_monthly=average,
                category_id=data["category_id"],
                category_name=data["category_name"],
            )
        )

    return sorted(evolution, key=lambda g: -g.total.to_cents())


def category_monthly_evolution(
    records: Sequence[TransactionRecord],
    kind: TransactionKind = TransactionKind.EXPENSE,
) -> list[GroupEvolution]:
    """
    Month-by-month totals per category.

    Every reported month appears in every group (0 where the category had no
    records), with the category's share of that month's total for ``kind``.
    """
    return _monthly_evolution(
        records,
        kind,
        BreakdownKind.CATEGORY,
        key=lambda r: r.category_id,
        name=lambda r: r.category_name,
    )


def subcategory_monthly_evolution(records: Sequence[TransactionRecord]) -> list[GroupEvolution]:
    """Month-by-month expense totals per subcategory."""
    return _monthly_evolution(
        records,
        TransactionKind.EXPENSE,
        BreakdownKind.SUBCATEGORY,
        key=lambda r: r.subcategory_id,
        name=lambda r: r.subcategory_name,
    )


def top_transactions(
    records: Sequence[TransactionRecord],
    kind: TransactionKind,
    limit: int = 5,
) -> list[TransactionRecord]:
    """Largest records of one kind; ties keep input order."""
    matching = [r for r in records if r.kind is kind]
    return sorted(matching, key=lambda r: -r.amount.to_cents())[:limit]


def analyze_month(
    records: Sequence[TransactionRecord],
    month: DeclaredMonth,
    top_n: int = 5,
) -> MonthAnalysis | None:
    """
    Full analysis of one reporting month.

    Returns:
        MonthAnalysis, or None if no record reports under ``month``
    """
    month_records = [r for r in records if r.reporting_month == month]
    if not month_records:
        return None

    summary = total_summary(month_records)
    categories = category_summary(month_records, kind=TransactionKind.EXPENSE)
    subcategories = subcategory_summary(month_records)

    return MonthAnalysis(
        month=month,
        income=summary.income,
        expense=summary.expense,
        benefit=summary.benefit,
        transactions=tuple(sorted(month_records, key=lambda r: r.date.date, reverse=True)),
        category_distribution=tuple(categories),
        subcategory_distribution=tuple(subcategories),
        top5_expenses=tuple(top_transactions(month_records, TransactionKind.EXPENSE, top_n)),
        top5_incomes=tuple(top_transactions(month_records, TransactionKind.INCOME, top_n)),
        top5_categories=tuple(categories[:top_n]),
        top5_subcategories=tuple(subcategories[:top_n]),
    )


def search_transactions(
    records: Sequence[TransactionRecord],
    text: str | None,
    limit: int | None = None,
) -> list[TransactionRecord]:
    """
    Case-insensitive search over comment, category, subcategory and tag names
    and the amount.

    Args:
        records: Records to search
        text: Search text (no filtering when empty)
        limit: Maximum number of results

    Returns:
        Matching records in input order
    """
    matched = list(records)

    if text:
        needle = text.lower()
        matched = [
            r
            for r in matched
            if any(
                needle in (field or "").lower()
                for field in (r.comment, r.category_name, r.subcategory_name, r.tag_name)
            )
            or needle in r.amount.to_amount_str()
        ]

    if limit is not None:
        matched = matched[:limit]

    return matched
