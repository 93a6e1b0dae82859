#!/usr/bin/env python3
"""Tests for Money primitive type."""

from decimal import Decimal

import pytest

from familyledger.core.money import Money


class TestMoneyConstruction:
    """Test Money class construction."""

    @pytest.mark.currency
    def test_from_cents(self):
        """Test creating Money from cents."""
        m = Money.from_cents(1234)
        assert m.to_cents() == 1234

    @pytest.mark.currency
    def test_from_decimal(self):
        """Test creating Money from a two-place Decimal."""
        assert Money.from_decimal(Decimal("12.34")).to_cents() == 1234
        assert Money.from_decimal(Decimal("12.3")).to_cents() == 1230

    @pytest.mark.currency
    def test_from_decimal_rejects_sub_cent(self):
        """Test that sub-cent precision is rejected rather than rounded."""
        with pytest.raises(ValueError):
            Money.from_decimal(Decimal("1.005"))

    @pytest.mark.currency
    def test_from_amount_string(self):
        """Test parsing from amount strings."""
        assert Money.from_amount("€12.34").to_cents() == 1234
        assert Money.from_amount("12.34").to_cents() == 1234
        assert Money.from_amount("1,234.50").to_cents() == 123450

    @pytest.mark.currency
    def test_from_amount_int(self):
        """Test creating from integer units."""
        assert Money.from_amount(12).to_cents() == 1200

    @pytest.mark.currency
    def test_zero(self):
        """Test the zero constructor."""
        assert Money.zero().is_zero()


class TestMoneyArithmetic:
    """Test Money arithmetic operations."""

    @pytest.mark.currency
    def test_addition(self):
        """Test adding Money objects."""
        assert (Money.from_cents(100) + Money.from_cents(50)).to_cents() == 150

    @pytest.mark.currency
    def test_subtraction_can_go_negative(self):
        """Test subtracting Money objects below zero."""
        assert (Money.from_cents(30) - Money.from_cents(100)).to_cents() == -70

    @pytest.mark.currency
    def test_multiplication(self):
        """Test multiplying Money by scalar."""
        assert (Money.from_cents(50) * 3).to_cents() == 150

    @pytest.mark.currency
    def test_negation_and_abs(self):
        """Test unary minus and absolute value."""
        m = Money.from_cents(250)
        assert (-m).to_cents() == -250
        assert (-m).abs() == m

    @pytest.mark.currency
    def test_sum_with_zero_start(self):
        """Test summing a list of Money values."""
        values = [Money.from_cents(1), Money.from_cents(2), Money.from_cents(3)]
        assert sum(values, Money.zero()) == Money.from_cents(6)


class TestMoneyComparison:
    """Test Money comparison operations."""

    @pytest.mark.currency
    def test_equality_and_hash(self):
        """Test equal Money values compare and hash equal."""
        assert Money.from_cents(100) == Money.from_amount("1.00")
        assert len({Money.from_cents(100), Money.from_cents(100)}) == 1

    @pytest.mark.currency
    def test_not_equal_to_int(self):
        """Test Money does not compare equal to plain integers."""
        assert Money.from_cents(100) != 100

    @pytest.mark.currency
    def test_ordering(self):
        """Test ordering comparisons."""
        small = Money.from_cents(50)
        large = Money.from_cents(100)
        assert small < large
        assert large > small
        assert small <= Money.from_cents(50)
        assert large >= small


class TestMoneyFormatting:
    """Test Money formatting."""

    @pytest.mark.currency
    def test_to_amount_str(self):
        assert Money.from_cents(4599).to_amount_str() == "45.99"
        assert Money.from_cents(-5).to_amount_str() == "-0.05"

    @pytest.mark.currency
    def test_to_decimal(self):
        assert Money.from_cents(1000).to_decimal() == Decimal("10.00")
        assert str(Money.from_cents(1000).to_decimal()) == "10.00"

    @pytest.mark.currency
    def test_str_and_format(self):
        """Test string output with default and custom symbols."""
        m = Money.from_cents(1234)
        assert str(m) == "€12.34"
        assert m.format("$") == "$12.34"
        assert repr(m) == "Money(cents=1234)"

    @pytest.mark.currency
    def test_immutable(self):
        """Test Money is frozen."""
        m = Money.from_cents(1)
        with pytest.raises(AttributeError):
            m.cents = 2  # type: ignore[misc]
