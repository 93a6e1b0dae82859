#!/usr/bin/env python3
"""
Shared CLI Options

Option decorators and parsing helpers reused by the report and compare
commands.
"""

from collections.abc import Callable
from datetime import date
from pathlib import Path
from typing import Any

import click

from ..analysis import AnalyticsFilters, apply_filters, load_transactions
from ..core.config import get_config
from ..core.dates import DeclaredMonth
from ..core.json_utils import format_json
from ..core.models import TransactionRecord


def transactions_option(func: Callable) -> Callable:
    """Add --transactions (defaults to the configured transactions file)."""
    return click.option(
        "--transactions",
        "-t",
        "transactions_path",
        type=click.Path(dir_okay=False, path_type=Path),
        help="Transactions JSON or CSV file (default: <data_dir>/transactions.json)",
    )(func)


def format_option(func: Callable) -> Callable:
    """Add --format text|json."""
    return click.option(
        "--format",
        "output_format",
        type=click.Choice(["text", "json"]),
        default="text",
        help="Output format (default: text)",
    )(func)


def range_options(func: Callable) -> Callable:
    """Add date and declared-month range options."""
    for option in reversed(
        [
            click.option("--date-from", help="Earliest transaction date (YYYY-MM-DD)"),
            click.option("--date-to", help="Latest transaction date (YYYY-MM-DD)"),
            click.option("--month-from", help="Earliest declared month (YYYY-MM)"),
            click.option("--month-to", help="Latest declared month (YYYY-MM)"),
        ]
    ):
        func = option(func)
    return func


def filter_options(func: Callable) -> Callable:
    """Add analytics filter options (multi-select plus ranges)."""
    for option in reversed(
        [
            click.option("--participant", "participants", multiple=True, help="Only these members' shares"),
            click.option("--category", "categories", multiple=True, help="Category id"),
            click.option("--subcategory", "subcategories", multiple=True, help="Subcategory id"),
            click.option("--tag", "tags", multiple=True, help="Tag id"),
            click.option("--month", "months", multiple=True, help="Declared month (YYYY-MM or MM-YYYY)"),
        ]
    ):
        func = option(func)
    return range_options(func)


def parse_date_option(value: str | None, name: str) -> date | None:
    """Parse an ISO date option, raising a usage error on bad input."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise click.BadParameter(f"Invalid date {value!r}, expected YYYY-MM-DD", param_hint=name) from e


def parse_month_option(value: str | None, name: str) -> DeclaredMonth | None:
    """Parse a declared-month option, raising a usage error on bad input."""
    if not value:
        return None
    try:
        return DeclaredMonth.from_string(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint=name) from e


def build_filters(options: dict[str, Any]) -> AnalyticsFilters:
    """Build AnalyticsFilters from parsed command options."""
    return AnalyticsFilters(
        participant_ids=tuple(options.get("participants") or ()),
        category_ids=tuple(options.get("categories") or ()),
        subcategory_ids=tuple(options.get("subcategories") or ()),
        tag_ids=tuple(options.get("tags") or ()),
        months_declared=tuple(
            parse_month_option(m, "--month") for m in options.get("months") or ()  # type: ignore[misc]
        ),
        date_from=parse_date_option(options.get("date_from"), "--date-from"),
        date_to=parse_date_option(options.get("date_to"), "--date-to"),
        month_from=parse_month_option(options.get("month_from"), "--month-from"),
        month_to=parse_month_option(options.get("month_to"), "--month-to"),
    )


def load_for_command(transactions_path: Path | None) -> list[TransactionRecord]:
    """
    Load records for a command.

    Raises:
        click.ClickException: If the file is missing or unreadable
    """
    path = transactions_path or get_config().reports.transactions_file
    try:
        return load_transactions(path)
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e)) from e


def load_filtered(transactions_path: Path | None, options: dict[str, Any]) -> list[TransactionRecord]:
    """Load records and apply the command's analytics filters."""
    return apply_filters(load_for_command(transactions_path), build_filters(options))


def echo_json(data: Any) -> None:
    """Print data as pretty JSON."""
    click.echo(format_json(data))


def currency_symbol() -> str:
    return get_config().reports.currency_symbol
