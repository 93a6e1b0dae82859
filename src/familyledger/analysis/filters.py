#!/usr/bin/env python3
"""
Report Filters

Immutable filter values applied to a record list before aggregation.

- GlobalFilters: date and declared-month ranges shared by every comparator case
- AnalyticsFilters: the analytics page's multi-select filters, including the
  per-member view where each record is reduced to the selected members' share
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date

from ..core.dates import DeclaredMonth
from ..core.models import TransactionRecord
from ..core.money import Money

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlobalFilters:
    """Inclusive date and declared-month bounds."""

    date_from: date | None = None
    date_to: date | None = None
    month_from: DeclaredMonth | None = None
    month_to: DeclaredMonth | None = None

    def matches(self, record: TransactionRecord) -> bool:
        record_date = record.date.date
        if self.date_from is not None and record_date < self.date_from:
            return False
        if self.date_to is not None and record_date > self.date_to:
            return False
        month = record.reporting_month
        if self.month_from is not None and month < self.month_from:
            return False
        if self.month_to is not None and month > self.month_to:
            return False
        return True


def apply_global_filters(
    records: Sequence[TransactionRecord],
    filters: GlobalFilters | None,
) -> list[TransactionRecord]:
    """Keep records inside every set bound; all records when filters is None."""
    if filters is None:
        return list(records)
    return [r for r in records if filters.matches(r)]


@dataclass(frozen=True)
class AnalyticsFilters:
    """
    Multi-select analytics filters.

    Empty tuples mean "no restriction". A participant filter also rewrites each
    kept record's amount to the selected participants' combined share.
    """

    participant_ids: tuple[str, ...] = ()
    category_ids: tuple[str, ...] = ()
    subcategory_ids: tuple[str, ...] = ()
    tag_ids: tuple[str, ...] = ()
    months_declared: tuple[DeclaredMonth, ...] = ()
    date_from: date | None = None
    date_to: date | None = None
    month_from: DeclaredMonth | None = None
    month_to: DeclaredMonth | None = None

    @property
    def global_filters(self) -> GlobalFilters:
        return GlobalFilters(
            date_from=self.date_from,
            date_to=self.date_to,
            month_from=self.month_from,
            month_to=self.month_to,
        )


def restrict_to_participants(
    record: TransactionRecord,
    participant_ids: Sequence[str],
) -> TransactionRecord | None:
    """
    View of a record limited to some participants.

    Returns:
        A new record whose amount is the selected participants' combined share,
        or None when none of them has a nonzero share
    """
    selected = tuple(p for p in record.participants if p.user_id in participant_ids)
    if not selected:
        return None

    share = sum(p.allocated_amount.to_cents() for p in selected)
    if share == 0:
        return None

    return replace(record, amount=Money.from_cents(share), participants=selected)


def apply_filters(
    records: Sequence[TransactionRecord],
    filters: AnalyticsFilters,
) -> list[TransactionRecord]:
    """
    Apply analytics filters to a record list.

    Args:
        records: Family records
        filters: Filters to apply

    Returns:
        New list of (possibly participant-restricted) records
    """
    result = []

    for record in apply_global_filters(records, filters.global_filters):
        if filters.category_ids and record.category_id not in filters.category_ids:
            continue
        if filters.subcategory_ids and record.subcategory_id not in filters.subcategory_ids:
            continue
        if filters.tag_ids and record.tag_id not in filters.tag_ids:
            continue
        if filters.months_declared and record.reporting_month not in filters.months_declared:
            continue

        if filters.participant_ids:
            restricted = restrict_to_participants(record, filters.participant_ids)
            if restricted is None:
                continue
            record = restricted

        result.append(record)

    logger.debug("Filtered %d records down to %d", len(records), len(result))
    return result
