#!/usr/bin/env python3
"""
Compare CLI - Side-by-Side Case Comparison

Command-line interface for comparing filter cases and reporting months.
"""

import logging
from pathlib import Path
from typing import Any

import click

from ..analysis import GlobalFilters, compare_cases, compare_months, load_cases
from ..core.config import get_config
from .options import (
    currency_symbol,
    echo_json,
    format_option,
    load_for_command,
    parse_date_option,
    parse_month_option,
    range_options,
    transactions_option,
)

logger = logging.getLogger(__name__)


def _merge_global_filters(file_filters: GlobalFilters | None, options: dict[str, Any]) -> GlobalFilters | None:
    """Command-line range options override the case file's global filters."""
    base = file_filters or GlobalFilters()
    merged = GlobalFilters(
        date_from=parse_date_option(options.get("date_from"), "--date-from") or base.date_from,
        date_to=parse_date_option(options.get("date_to"), "--date-to") or base.date_to,
        month_from=parse_month_option(options.get("month_from"), "--month-from") or base.month_from,
        month_to=parse_month_option(options.get("month_to"), "--month-to") or base.month_to,
    )
    return None if merged == GlobalFilters() else merged


@click.command()
@click.option(
    "--cases",
    "cases_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="YAML file with a 'cases' list",
)
@transactions_option
@range_options
@format_option
def compare(cases_path: Path, transactions_path: Path | None, output_format: str, **options: Any) -> None:
    """
    Compare two or more filter cases side by side.

    Examples:
      ledger compare --cases cases.yaml
      ledger compare --cases cases.yaml --month-from 2024-01 --format json
    """
    try:
        cases, file_filters = load_cases(cases_path)
    except (FileNotFoundError, ValueError, KeyError) as e:
        raise click.ClickException(str(e)) from e

    records = load_for_command(transactions_path)
    result = compare_cases(
        records,
        cases,
        global_filters=_merge_global_filters(file_filters, options),
        top_n=get_config().reports.top_n,
    )

    if result is None:
        raise click.ClickException("At least 2 cases with a filter set are required for a comparison")

    if output_format == "json":
        echo_json(result.to_dict())
        return

    symbol = currency_symbol()
    for case_result in result.cases:
        case = case_result.case
        click.echo(f"📊 {case.label or case.id}")
        click.echo(f"   Income:  {case_result.income.format(symbol)}")
        click.echo(f"   Expense: {case_result.expense.format(symbol)}")
        click.echo(f"   Benefit: {case_result.benefit.format(symbol)}")
        for row in case_result.top5_categories:
            click.echo(f"      {row.name or row.id:<28} {row.total.format(symbol):>12} {row.percentage:>7}%")
        click.echo()

    if result.category_comparison:
        case_ids = [c.case.id for c in result.cases]
        click.echo("Category comparison:")
        click.echo(f"   {'category':<28}" + "".join(f"{case_id:>14}" for case_id in case_ids))
        for comparison_row in result.category_comparison:
            values = "".join(f"{comparison_row.values[case_id].format(symbol):>14}" for case_id in case_ids)
            click.echo(f"   {comparison_row.category_name or comparison_row.category_id:<28}{values}")


@click.command(name="compare-months")
@click.argument("month_a")
@click.argument("month_b")
@transactions_option
@format_option
def compare_months_command(month_a: str, month_b: str, transactions_path: Path | None, output_format: str) -> None:
    """
    Compare reporting MONTH_A with MONTH_B (YYYY-MM or MM-YYYY).

    Differences are MONTH_B minus MONTH_A.
    """
    first = parse_month_option(month_a, "MONTH_A")
    second = parse_month_option(month_b, "MONTH_B")

    comparison = compare_months(
        load_for_command(transactions_path),
        first,  # type: ignore[arg-type]
        second,  # type: ignore[arg-type]
        get_config().reports.top_n,
    )

    if output_format == "json":
        echo_json(comparison.to_dict())
        return

    symbol = currency_symbol()
    for label, result in ((comparison.month_a, comparison.result_a), (comparison.month_b, comparison.result_b)):
        click.echo(
            f"{label.display()}  income {result.income.format(symbol):>12}  "
            f"expense {result.expense.format(symbol):>12}  benefit {result.benefit.format(symbol):>12}"
        )

    if comparison.category_differences:
        click.echo("Category differences:")
    for diff in comparison.category_differences:
        click.echo(
            f"   {diff.category_name or diff.category_id:<28} {diff.month_a.format(symbol):>12} "
            f"{diff.month_b.format(symbol):>12} {diff.difference.format(symbol):>12} {diff.difference_percent:>8}%"
        )
