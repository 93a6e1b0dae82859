#!/usr/bin/env python3
"""
Report CLI - Ledger Summary Commands

Command-line interface for single-view reports over a transactions file.
"""

from datetime import date
from pathlib import Path
from typing import Any

import click

from ..analysis import (
    analyze_month,
    category_monthly_evolution,
    category_summary,
    kpi_summary,
    median_monthly_benefit,
    monthly_projection,
    monthly_savings,
    monthly_summary,
    search_transactions,
    subcategory_monthly_evolution,
    subcategory_summary,
    summaries_to_dataframe,
    total_summary,
)
from ..core.config import get_config
from ..core.models import TransactionKind
from .options import (
    currency_symbol,
    echo_json,
    filter_options,
    format_option,
    load_filtered,
    parse_date_option,
    parse_month_option,
    transactions_option,
)


@click.group()
def report() -> None:
    """Ledger summary reports."""
    pass


@report.command()
@transactions_option
@filter_options
@format_option
def totals(transactions_path: Path | None, output_format: str, **options: Any) -> None:
    """Total income, expense and benefit."""
    records = load_filtered(transactions_path, options)
    summary = total_summary(records)

    if output_format == "json":
        echo_json(summary.to_dict())
        return

    symbol = currency_symbol()
    click.echo(f"Transactions: {len(records)}")
    click.echo(f"Income:  {summary.income.format(symbol)}")
    click.echo(f"Expense: {summary.expense.format(symbol)}")
    click.echo(f"Benefit: {summary.benefit.format(symbol)}")


@report.command()
@transactions_option
@filter_options
@format_option
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), help="Also write CSV here")
def monthly(transactions_path: Path | None, output_format: str, csv_path: Path | None, **options: Any) -> None:
    """
    Income, expense and benefit per declared month.

    Examples:
      ledger report monthly
      ledger report monthly --month-from 2024-01 --month-to 2024-06 --csv monthly.csv
    """
    months = monthly_summary(load_filtered(transactions_path, options))

    if csv_path:
        csv_path.parent.mkdir(parents=True, exist_ok=True)
        summaries_to_dataframe(months).to_csv(csv_path, index=False)
        click.echo(f"✅ Monthly summary saved to: {csv_path}", err=output_format == "json")

    if output_format == "json":
        echo_json([m.to_dict() for m in months])
        return

    if not months:
        click.echo("No transactions found.")
        return

    symbol = currency_symbol()
    for month in months:
        click.echo(
            f"{month.month_display}  income {month.income.format(symbol):>12}  "
            f"expense {month.expense.format(symbol):>12}  benefit {month.benefit.format(symbol):>12}"
        )


@report.command()
@transactions_option
@filter_options
@format_option
@click.option(
    "--kind",
    type=click.Choice(["expense", "income", "all"]),
    default="expense",
    help="Transaction kind to break down (default: expense)",
)
@click.option("--evolution", is_flag=True, help="Show month-by-month totals per category")
def categories(
    transactions_path: Path | None,
    output_format: str,
    kind: str,
    evolution: bool,
    **options: Any,
) -> None:
    """Breakdown by category with percentage of the total."""
    records = load_filtered(transactions_path, options)
    kind_filter = None if kind == "all" else TransactionKind.parse(kind)

    if evolution:
        _echo_evolution(category_monthly_evolution(records, kind_filter or TransactionKind.EXPENSE), output_format)
        return

    rows = category_summary(records, kind=kind_filter)
    _echo_breakdown(rows, output_format)


@report.command()
@transactions_option
@filter_options
@format_option
@click.option("--evolution", is_flag=True, help="Show month-by-month totals per subcategory")
def subcategories(transactions_path: Path | None, output_format: str, evolution: bool, **options: Any) -> None:
    """Expense breakdown by subcategory."""
    records = load_filtered(transactions_path, options)

    if evolution:
        _echo_evolution(subcategory_monthly_evolution(records), output_format)
        return

    _echo_breakdown(subcategory_summary(records), output_format)


def _echo_evolution(groups: list, output_format: str) -> None:
    if output_format == "json":
        echo_json([g.to_dict() for g in groups])
        return

    symbol = currency_symbol()
    for group in groups:
        click.echo(f"{group.name or group.id}: {group.total.format(symbol)} (avg {group.average_monthly.format(symbol)}/month)")
        for point in group.monthly:
            click.echo(f"   {point.month.display()}  {point.total.format(symbol):>12}  {point.percentage:>6}%")


def _echo_breakdown(rows: list, output_format: str) -> None:
    if output_format == "json":
        echo_json([row.to_dict() for row in rows])
        return

    if not rows:
        click.echo("No transactions found.")
        return

    symbol = currency_symbol()
    for row in rows:
        click.echo(f"{row.name or row.id:<30} {row.total.format(symbol):>12} {row.percentage:>7}%  ({row.transactions})")


@report.command()
@transactions_option
@filter_options
@format_option
def median(transactions_path: Path | None, output_format: str, **options: Any) -> None:
    """Median monthly benefit."""
    value = median_monthly_benefit(load_filtered(transactions_path, options))

    if output_format == "json":
        echo_json({"median_monthly_benefit": value.to_amount_str()})
        return

    click.echo(f"Median monthly benefit: {value.format(currency_symbol())}")


@report.command()
@transactions_option
@filter_options
@format_option
@click.option("--as-of", help="Reference date for projections (YYYY-MM-DD), defaults to today")
def kpis(transactions_path: Path | None, output_format: str, as_of: str | None, **options: Any) -> None:
    """Headline KPIs and year-end projection."""
    reference = parse_date_option(as_of, "--as-of") or date.today()
    records = load_filtered(transactions_path, options)
    summary = kpi_summary(records, reference)
    projection = monthly_projection(records, reference)

    if output_format == "json":
        echo_json(
            {
                "kpis": summary.to_dict(),
                "savings": [s.to_dict() for s in monthly_savings(records)],
                "projection": [p.to_dict() for p in projection],
            }
        )
        return

    symbol = currency_symbol()
    click.echo(f"Benefit:                 {summary.benefit.format(symbol)}")
    click.echo(f"Savings rate:            {summary.savings_rate}% ({summary.savings_rate_amount.format(symbol)})")
    click.echo(f"Median monthly savings:  {summary.median_monthly_savings.format(symbol)}")
    click.echo(f"Average monthly income:  {summary.average_monthly_income.format(symbol)}")
    click.echo(f"Average monthly expense: {summary.average_monthly_expense.format(symbol)}")
    click.echo(
        f"Projected December:      {summary.projected_december.format(symbol)} "
        f"({summary.projected_months} months remaining)"
    )


@report.command()
@click.argument("month")
@transactions_option
@filter_options
@format_option
def month(month: str, transactions_path: Path | None, output_format: str, **options: Any) -> None:
    """
    Full analysis of one declared MONTH (YYYY-MM or MM-YYYY).
    """
    target = parse_month_option(month, "MONTH")
    analysis = analyze_month(load_filtered(transactions_path, options), target, get_config().reports.top_n)  # type: ignore[arg-type]

    if analysis is None:
        if output_format == "json":
            echo_json(None)
        else:
            click.echo(f"No transactions declared in {target.display()}.")  # type: ignore[union-attr]
        return

    if output_format == "json":
        echo_json(analysis.to_dict())
        return

    symbol = currency_symbol()
    click.echo(f"Month {analysis.month.display()}")
    click.echo(f"   Income:  {analysis.income.format(symbol)}")
    click.echo(f"   Expense: {analysis.expense.format(symbol)}")
    click.echo(f"   Benefit: {analysis.benefit.format(symbol)}")
    click.echo("   Top expenses:")
    for record in analysis.top5_expenses:
        click.echo(f"      {record.date}  {record.amount.format(symbol):>12}  {record.category_name or ''}")
    click.echo("   Top categories:")
    for row in analysis.top5_categories:
        click.echo(f"      {row.name or row.id:<28} {row.total.format(symbol):>12} {row.percentage:>7}%")


@report.command()
@click.argument("text")
@transactions_option
@filter_options
@format_option
@click.option("--limit", type=int, help="Maximum number of results")
def search(
    text: str,
    transactions_path: Path | None,
    output_format: str,
    limit: int | None,
    **options: Any,
) -> None:
    """Search transactions by comment, category, subcategory, tag or amount."""
    found = search_transactions(load_filtered(transactions_path, options), text, limit)

    if output_format == "json":
        echo_json([r.to_dict() for r in found])
        return

    symbol = currency_symbol()
    for record in found:
        click.echo(
            f"{record.date}  {record.kind.value:<7} {record.amount.format(symbol):>12}  "
            f"{record.category_name or ''}  {record.comment or ''}"
        )
    click.echo(f"{len(found)} transactions")
