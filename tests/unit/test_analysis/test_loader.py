#!/usr/bin/env python3
"""Unit tests for loading transactions and comparator cases."""

import json
from datetime import date

import pandas as pd
import pytest

from familyledger.analysis import (
    load_cases,
    load_records,
    load_records_csv,
    load_transactions,
    monthly_summary,
    records_from_dicts,
    records_to_dataframe,
    summaries_to_dataframe,
)
from familyledger.analysis.loader import CSV_COLUMNS, parse_participants_cell
from familyledger.core.dates import DeclaredMonth
from familyledger.core.money import Money
from tests.fixtures.synthetic_data import make_row


class TestRecordsFromDicts:
    @pytest.mark.analysis
    def test_all_valid(self, sample_rows):
        result = records_from_dicts(sample_rows)
        assert len(result.records) == len(sample_rows)
        assert result.skipped == 0

    @pytest.mark.analysis
    def test_bad_rows_are_skipped(self, sample_rows, caplog):
        rows = [
            *sample_rows,
            make_row("bad-kind", "Transfer", "1.00", "2024-01-01"),
            make_row("bad-sum", "Expense", "10.00", "2024-01-01", [("ana", "3.33"), ("luis", "3.33")]),
            make_row("bad-month", "Expense", "1.00", "2024-01-01", declared_month=202401),
            None,
            "not-a-row",
        ]
        result = records_from_dicts(rows)

        assert len(result.records) == len(sample_rows)
        assert result.skipped == 5
        assert result.total_processed == len(rows)
        assert any("bad-sum" in error for error in result.errors)
        assert "Skipping transaction row" in caplog.text


class TestLoadJson:
    @pytest.mark.analysis
    def test_wrapped_shape(self, transactions_file, sample_rows):
        assert len(load_records(transactions_file)) == len(sample_rows)

    @pytest.mark.analysis
    def test_list_shape(self, temp_dir, sample_rows):
        path = temp_dir / "list.json"
        path.write_text(json.dumps(sample_rows), encoding="utf-8")
        assert [r.id for r in load_transactions(path)] == [row["id"] for row in sample_rows]

    @pytest.mark.analysis
    def test_missing_file(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            load_records(temp_dir / "missing.json")

    @pytest.mark.analysis
    def test_unexpected_shape(self, temp_dir):
        path = temp_dir / "bad.json"
        path.write_text(json.dumps({"rows": []}), encoding="utf-8")
        with pytest.raises(ValueError):
            load_records(path)


class TestLoadCsv:
    @pytest.mark.analysis
    def test_parse_participants_cell(self):
        assert parse_participants_cell("ana:5.00; luis:5.00;") == [
            {"user_id": "ana", "amount": "5.00"},
            {"user_id": "luis", "amount": "5.00"},
        ]

    @pytest.mark.analysis
    def test_load_csv(self, temp_dir):
        path = temp_dir / "transactions.csv"
        path.write_text(
            "id,kind,amount,date,declared_month,category_id,category_name,participants\n"
            "t1,Expense,10.00,2024-03-15,2024-03,cat-food,Food,ana:3.33;luis:3.33;sara:3.34\n"
            "t2,Income,0.10,2024-03-01,,,,ana:0.10\n",
            encoding="utf-8",
        )
        records = load_transactions(path)

        assert [r.id for r in records] == ["t1", "t2"]
        assert records[0].amount == Money.from_cents(1000)
        assert records[0].participant_ids == ("ana", "luis", "sara")
        # amounts stay exact text, not floats
        assert records[1].amount == Money.from_cents(10)
        assert records[1].category_id is None
        assert records[1].reporting_month == DeclaredMonth(2024, 3)

    @pytest.mark.analysis
    def test_csv_row_without_id_is_skipped(self, temp_dir):
        path = temp_dir / "transactions.csv"
        path.write_text(
            "id,kind,amount,date,participants\n"
            ",Expense,10.00,2024-03-15,ana:10.00\n"
            "t2,Expense,5.00,2024-03-16,ana:5.00\n",
            encoding="utf-8",
        )
        result = load_records_csv(path)

        assert [r.id for r in result] == ["t2"]

    @pytest.mark.analysis
    def test_csv_export_round_trip(self, temp_dir, sample_records):
        path = temp_dir / "export.csv"
        df = records_to_dataframe(sample_records)
        assert list(df.columns) == CSV_COLUMNS
        df.to_csv(path, index=False)

        reloaded = load_records_csv(path)
        assert sorted(r.id for r in reloaded) == sorted(r.id for r in sample_records)
        by_id = {r.id: r for r in reloaded}
        assert by_id["exp-feb-home"].reporting_month == DeclaredMonth(2024, 2)
        assert by_id["inc-jan"].participants == sample_records[0].participants


class TestDataFrames:
    @pytest.mark.analysis
    def test_summaries_to_dataframe(self, sample_records):
        df = summaries_to_dataframe(monthly_summary(sample_records))
        assert isinstance(df, pd.DataFrame)
        assert list(df["month"]) == ["2024-01", "2024-02"]
        assert list(df["benefit"]) == ["1600.00", "1600.00"]

    @pytest.mark.analysis
    def test_empty_records(self):
        assert records_to_dataframe([]).empty


class TestLoadCases:
    @pytest.mark.analysis
    def test_load_cases(self, temp_dir):
        path = temp_dir / "cases.yaml"
        path.write_text(
            "cases:\n"
            "  - id: groceries\n"
            "    label: Groceries\n"
            "    category_id: cat-food\n"
            "  - id: march\n"
            "    month_declared: '2024-03'\n"
            "    participant_ids: [ana]\n"
            "global_filters:\n"
            "  date_from: 2024-01-01\n"
            "  month_to: '2024-06'\n",
            encoding="utf-8",
        )
        cases, global_filters = load_cases(path)

        assert [c.id for c in cases] == ["groceries", "march"]
        assert cases[1].month_declared == DeclaredMonth(2024, 3)
        assert cases[1].participant_ids == ("ana",)
        assert global_filters.date_from == date(2024, 1, 1)
        assert global_filters.month_to == DeclaredMonth(2024, 6)

    @pytest.mark.analysis
    def test_no_global_filters(self, temp_dir):
        path = temp_dir / "cases.yaml"
        path.write_text("cases:\n  - id: a\n    tag_id: t\n", encoding="utf-8")
        cases, global_filters = load_cases(path)
        assert len(cases) == 1
        assert global_filters is None

    @pytest.mark.analysis
    def test_missing_cases_list(self, temp_dir):
        path = temp_dir / "cases.yaml"
        path.write_text("global_filters: {}\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_cases(path)

    @pytest.mark.analysis
    @pytest.mark.parametrize(
        "content",
        [
            "- id: a\n  tag_id: t\n",
            "cases:\n  - groceries\n  - id: b\n    tag_id: t\n",
            "cases:\n  - label: No id\n    tag_id: t\n",
            "cases:\n  - id: a\n    tag_id: t\nglobal_filters: [2024-01-01]\n",
            "cases: [unclosed\n",
        ],
        ids=["top_level_list", "case_not_mapping", "case_without_id", "filters_not_mapping", "bad_yaml"],
    )
    def test_malformed_case_files(self, temp_dir, content):
        path = temp_dir / "cases.yaml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError):
            load_cases(path)
