#!/usr/bin/env python3
"""Unit tests for multi-case and month-over-month comparison."""

from datetime import date
from decimal import Decimal

import pytest

from familyledger.analysis import CaseDefinition, GlobalFilters, compare_cases, compare_months, evaluate_case
from familyledger.core.dates import DeclaredMonth
from familyledger.core.money import Money


def cents(value: str) -> Money:
    return Money.from_amount(value)


class TestCaseDefinition:
    @pytest.mark.analysis
    def test_case_without_filters_is_invalid(self):
        assert not CaseDefinition(id="empty").is_valid
        assert CaseDefinition(id="food", category_id="cat-food").is_valid
        assert CaseDefinition(id="ana", participant_ids=("ana",)).is_valid

    @pytest.mark.analysis
    def test_from_dict(self):
        case = CaseDefinition.from_dict(
            {"id": "march", "label": "March", "month_declared": "03-2024", "participant_ids": ["ana", "luis"]}
        )
        assert case.month_declared == DeclaredMonth(2024, 3)
        assert case.participant_ids == ("ana", "luis")
        assert case.to_dict()["month_declared"] == "2024-03"

    @pytest.mark.analysis
    def test_participant_match_is_any(self, sample_records):
        case = CaseDefinition(id="ana-only", participant_ids=("nobody", "ana"))
        assert all(case.matches(r) for r in sample_records)


class TestCompareCases:
    @pytest.mark.analysis
    def test_fewer_than_two_valid_cases(self, sample_records):
        cases = [CaseDefinition(id="food", category_id="cat-food"), CaseDefinition(id="empty")]
        assert compare_cases(sample_records, cases) is None
        assert compare_cases(sample_records, []) is None

    @pytest.mark.analysis
    def test_invalid_cases_are_dropped(self, sample_records):
        cases = [
            CaseDefinition(id="food", category_id="cat-food"),
            CaseDefinition(id="empty"),
            CaseDefinition(id="home", category_id="cat-home"),
        ]
        result = compare_cases(sample_records, cases)

        assert result is not None
        assert [c.case.id for c in result.cases] == ["food", "home"]

    @pytest.mark.analysis
    def test_disjoint_categories(self, sample_records):
        cases = [CaseDefinition(id="food", category_id="cat-food"), CaseDefinition(id="home", category_id="cat-home")]
        result = compare_cases(sample_records, cases)

        assert result is not None
        food = result.case_result("food")
        home = result.case_result("home")
        assert food.expense == cents("1000.00")
        assert food.income.is_zero()
        assert home.benefit == cents("-2000.00")

        # each case's top categories are relative to its own total
        assert food.top5_categories[0].percentage == Decimal("100.00")
        assert home.top5_categories[0].percentage == Decimal("100.00")

        assert [(row.category_id, row.values) for row in result.category_comparison] == [
            ("cat-food", {"food": cents("1000.00"), "home": Money.zero()}),
            ("cat-home", {"food": Money.zero(), "home": cents("2000.00")}),
        ]

    @pytest.mark.analysis
    def test_case_with_unknown_ids_is_all_zero(self, sample_records):
        cases = [CaseDefinition(id="food", category_id="cat-food"), CaseDefinition(id="ghost", tag_id="tag-none")]
        ghost = compare_cases(sample_records, cases).case_result("ghost")

        assert ghost.income.is_zero() and ghost.expense.is_zero()
        assert ghost.top5_expenses == ()
        assert ghost.top5_categories == ()

    @pytest.mark.analysis
    def test_global_filters_apply_to_every_case(self, sample_records):
        cases = [CaseDefinition(id="food", category_id="cat-food"), CaseDefinition(id="home", category_id="cat-home")]
        result = compare_cases(sample_records, cases, global_filters=GlobalFilters(date_from=date(2024, 2, 1)))

        assert result.case_result("food").expense == cents("600.00")
        # exp-feb-home is dated 2024-01-31
        assert result.case_result("home").expense.is_zero()

    @pytest.mark.analysis
    def test_top_n_limits_rankings(self, sample_records):
        cases = [CaseDefinition(id="jan", month_declared=DeclaredMonth(2024, 1)),
                 CaseDefinition(id="feb", month_declared=DeclaredMonth(2024, 2))]
        result = compare_cases(sample_records, cases, top_n=1)

        jan = result.case_result("jan")
        assert [r.id for r in jan.top5_expenses] == ["exp-jan-home"]
        assert [r.id for r in jan.top5_incomes] == ["inc-jan"]
        assert len(jan.category_distribution) == 2

    @pytest.mark.analysis
    def test_evaluate_case_matches_and(self, sample_records):
        case = CaseDefinition(id="x", category_id="cat-food", month_declared=DeclaredMonth(2024, 2))
        assert evaluate_case(sample_records, case).expense == cents("600.00")

    @pytest.mark.analysis
    def test_to_dict(self, sample_records):
        cases = [CaseDefinition(id="food", category_id="cat-food"), CaseDefinition(id="home", category_id="cat-home")]
        data = compare_cases(sample_records, cases).to_dict()
        assert data["category_comparison"][0]["values"] == {"food": "1000.00", "home": "0.00"}


class TestCompareMonths:
    @pytest.mark.analysis
    def test_category_differences(self, sample_records):
        comparison = compare_months(sample_records, DeclaredMonth(2024, 1), DeclaredMonth(2024, 2))

        assert comparison.result_a.expense == cents("1400.00")
        assert comparison.result_b.expense == cents("1600.00")

        food, home = comparison.category_differences
        assert food.category_id == "cat-food"
        assert food.difference == cents("200.00")
        assert food.difference_percent == Decimal("50.00")
        assert home.difference.is_zero()
        assert home.difference_percent == Decimal("0.00")

    @pytest.mark.analysis
    def test_new_category_is_100_percent(self, sample_records):
        comparison = compare_months(sample_records, DeclaredMonth(2023, 12), DeclaredMonth(2024, 1))
        assert all(d.difference_percent == Decimal("100.00") for d in comparison.category_differences)
