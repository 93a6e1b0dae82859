#!/usr/bin/env python3
"""
Transaction Loader Module

Loads TransactionRecords from JSON and CSV exports of the persistence layer,
loads comparator case files, and converts results to DataFrames for CSV export.

Malformed rows are skipped with a warning rather than failing the whole load.
"""

import logging
from collections.abc import Iterable, Sequence
from datetime import date
from pathlib import Path
from typing import Any

import pandas as pd
import yaml

from ..core.dates import DeclaredMonth
from ..core.json_utils import read_json
from ..core.models import InvalidRecordError, LoadResult, TransactionRecord, validate_record
from .comparator import CaseDefinition
from .filters import GlobalFilters

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "id",
    "kind",
    "amount",
    "date",
    "declared_month",
    "category_id",
    "category_name",
    "subcategory_id",
    "subcategory_name",
    "tag_id",
    "tag_name",
    "comment",
    "participants",
]


def records_from_dicts(rows: Iterable[dict[str, Any]]) -> LoadResult:
    """
    Convert export rows to TransactionRecords.

    Rows that fail to parse, or that break the ledger invariants (participants
    must sum to the amount), are skipped and reported in the result.

    Args:
        rows: Export rows

    Returns:
        LoadResult with the parsed records and skip details
    """
    records = []
    errors = []

    for row in rows:
        try:
            record = TransactionRecord.from_dict(row)
        except InvalidRecordError as e:
            logger.warning("Skipping transaction row: %s", e)
            errors.append(str(e))
            continue

        if not validate_record(record):
            message = f"Transaction {record.id!r} violates ledger invariants"
            logger.warning("Skipping transaction row: %s", message)
            errors.append(message)
            continue

        records.append(record)

    return LoadResult(records=tuple(records), skipped=len(errors), errors=tuple(errors))


def load_records(path: str | Path) -> list[TransactionRecord]:
    """
    Load records from a JSON export.

    Accepts either a list of rows or an object with a ``transactions`` list.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the JSON has neither shape
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transactions file not found: {path}")

    data = read_json(path)
    if isinstance(data, dict):
        data = data.get("transactions")
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of transactions in {path}")

    result = records_from_dicts(data)
    logger.info("Loaded %d transactions from %s (%d skipped)", len(result.records), path, result.skipped)
    return list(result.records)


def parse_participants_cell(cell: str) -> list[dict[str, str]]:
    """
    Parse the CSV participants cell.

    Format: ``user:amount`` pairs separated by ``;``

    Example:
        parse_participants_cell("ana:5.00;luis:5.00")
        -> [{"user_id": "ana", "amount": "5.00"}, {"user_id": "luis", "amount": "5.00"}]
    """
    participants = []
    for entry in cell.split(";"):
        entry = entry.strip()
        if not entry:
            continue
        user_id, _, amount = entry.partition(":")
        participants.append({"user_id": user_id.strip(), "amount": amount.strip()})
    return participants


def load_records_csv(path: str | Path) -> list[TransactionRecord]:
    """
    Load records from a flat CSV export.

    All cells are read as strings so amounts keep their exact decimal text.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Transactions file not found: {path}")

    df = pd.read_csv(path, dtype=str, keep_default_na=False)

    rows = []
    for raw in df.to_dict(orient="records"):
        row: dict[str, Any] = {key: (value if value != "" else None) for key, value in raw.items()}
        row["participants"] = parse_participants_cell(raw.get("participants", ""))
        rows.append(row)

    result = records_from_dicts(rows)
    logger.info("Loaded %d transactions from %s (%d skipped)", len(result.records), path, result.skipped)
    return list(result.records)


def load_transactions(path: str | Path) -> list[TransactionRecord]:
    """Load records from a ``.csv`` or JSON file based on its suffix."""
    if Path(path).suffix.lower() == ".csv":
        return load_records_csv(path)
    return load_records(path)


def records_to_dataframe(records: Sequence[TransactionRecord]) -> pd.DataFrame:
    """
    Convert records to a DataFrame in the CSV export layout.

    Amounts are exact decimal strings; participants use the ``user:amount``
    cell format.
    """
    rows = []
    for record in records:
        row = record.to_dict()
        row["participants"] = ";".join(
            f"{p.user_id}:{p.allocated_amount.to_amount_str()}" for p in record.participants
        )
        rows.append(row)

    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    if not df.empty:
        df = df.sort_values(["date", "id"], kind="stable")
    return df


def summaries_to_dataframe(rows: Sequence[Any]) -> pd.DataFrame:
    """Convert summary dataclasses (anything with ``to_dict``) to a DataFrame."""
    return pd.DataFrame([row.to_dict() for row in rows])


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _parse_month(value: Any) -> DeclaredMonth | None:
    if value is None or value == "":
        return None
    return DeclaredMonth.from_string(str(value))


def global_filters_from_dict(data: dict[str, Any] | None) -> GlobalFilters | None:
    """Build GlobalFilters from a mapping; None when nothing is set."""
    if not data:
        return None
    return GlobalFilters(
        date_from=_parse_date(data.get("date_from")),
        date_to=_parse_date(data.get("date_to")),
        month_from=_parse_month(data.get("month_from")),
        month_to=_parse_month(data.get("month_to")),
    )


def load_cases(path: str | Path) -> tuple[list[CaseDefinition], GlobalFilters | None]:
    """
    Load comparator cases from a YAML file.

    Expected layout::

        cases:
          - id: groceries
            label: Groceries
            category_id: cat-food
          - id: march
            month_declared: 2024-03
        global_filters:
          date_from: 2024-01-01

    Returns:
        Tuple of (case definitions, global filters or None)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not a mapping with a ``cases`` list of
            mappings that each carry an ``id``
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Cases file not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")

    raw_cases = data.get("cases")
    if not isinstance(raw_cases, list):
        raise ValueError(f"Expected a 'cases' list in {path}")

    for index, entry in enumerate(raw_cases):
        if not isinstance(entry, dict) or entry.get("id") in (None, ""):
            raise ValueError(f"Case {index + 1} in {path} must be a mapping with an 'id'")

    raw_filters = data.get("global_filters")
    if raw_filters is not None and not isinstance(raw_filters, dict):
        raise ValueError(f"Expected 'global_filters' to be a mapping in {path}")

    cases = [CaseDefinition.from_dict(entry) for entry in raw_cases]
    logger.info("Loaded %d comparator cases from %s", len(cases), path)
    return cases, global_filters_from_dict(raw_filters)
