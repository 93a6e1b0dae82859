"""
Ledger Analysis Package

Reporting over a family's transaction records: totals, monthly summaries,
category and subcategory breakdowns, medians, KPIs and multi-case comparison.

Key Components:
- aggregator: single-view reports over a record list
- comparator: side-by-side comparison of filter cases
- filters: global and analytics filters
- loader: JSON/CSV/YAML loading and DataFrame export
"""

from .aggregator import (
    BreakdownKind,
    BreakdownRow,
    GroupEvolution,
    KPISummary,
    MonthAnalysis,
    MonthlyProjection,
    MonthlySavings,
    MonthlySummary,
    TotalSummary,
    analyze_month,
    category_monthly_evolution,
    category_summary,
    kpi_summary,
    median,
    median_monthly_benefit,
    monthly_projection,
    monthly_savings,
    monthly_summary,
    search_transactions,
    subcategory_monthly_evolution,
    subcategory_summary,
    top_transactions,
    total_summary,
)
from .comparator import (
    CaseDefinition,
    CaseResult,
    CategoryComparisonRow,
    CategoryDifference,
    ComparisonResult,
    MonthComparison,
    compare_cases,
    compare_months,
    evaluate_case,
)
from .filters import AnalyticsFilters, GlobalFilters, apply_filters, apply_global_filters
from .loader import (
    load_cases,
    load_records,
    load_records_csv,
    load_transactions,
    records_from_dicts,
    records_to_dataframe,
    summaries_to_dataframe,
)

__all__ = [
    # Aggregation
    "BreakdownKind",
    "BreakdownRow",
    "GroupEvolution",
    "KPISummary",
    "MonthAnalysis",
    "MonthlyProjection",
    "MonthlySavings",
    "MonthlySummary",
    "TotalSummary",
    "analyze_month",
    "category_monthly_evolution",
    "category_summary",
    "kpi_summary",
    "median",
    "median_monthly_benefit",
    "monthly_projection",
    "monthly_savings",
    "monthly_summary",
    "search_transactions",
    "subcategory_monthly_evolution",
    "subcategory_summary",
    "top_transactions",
    "total_summary",
    # Comparison
    "CaseDefinition",
    "CaseResult",
    "CategoryComparisonRow",
    "CategoryDifference",
    "ComparisonResult",
    "MonthComparison",
    "compare_cases",
    "compare_months",
    "evaluate_case",
    # Filters
    "AnalyticsFilters",
    "GlobalFilters",
    "apply_filters",
    "apply_global_filters",
    # Loading
    "load_cases",
    "load_records",
    "load_records_csv",
    "load_transactions",
    "records_from_dicts",
    "records_to_dataframe",
    "summaries_to_dataframe",
]
