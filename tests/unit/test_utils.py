"""
Unit tests for utils.py module.

Tests lenient input coercion, rate helpers, and formatting utilities.
"""

import math

import pytest

from goalplan.utils import (
    coerce_number,
    coerce_optional_number,
    pct_to_fraction,
    power,
    safe_divide,
    compound,
    finite_or_zero,
    format_amount,
)


class TestCoercion:
    """Test lenient numeric coercion."""

    @pytest.mark.parametrize("value, expected", [
        (5, 5.0),
        (2.5, 2.5),
        ("3", 3.0),
        (" 4.5 ", 4.5),
        ("5,000", 5000.0),
        ("-1,234.5", -1234.5),
    ])
    def test_coerce_number_valid(self, value, expected):
        """Numbers and numeric strings convert to float."""
        assert coerce_number(value) == expected

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", float("nan"), True, [], {}])
    def test_coerce_number_invalid_is_zero(self, value):
        """Missing or invalid input becomes 0.0."""
        assert coerce_number(value) == 0.0

    def test_coerce_optional_keeps_zero(self):
        """An explicit zero stays distinguishable from unset."""
        assert coerce_optional_number(0) == 0.0
        assert coerce_optional_number("0") == 0.0

    @pytest.mark.parametrize("value", [None, "", "n/a", float("nan")])
    def test_coerce_optional_invalid_is_none(self, value):
        """Missing or invalid optional input becomes None."""
        assert coerce_optional_number(value) is None


class TestRates:
    """Test percent conversion and compounding."""

    def test_pct_to_fraction(self):
        assert pct_to_fraction(2.5) == pytest.approx(0.025)
        assert pct_to_fraction(0) == 0.0

    def test_compound_growth(self):
        """5,000 at 2.5% for 3 years."""
        assert compound(5000, 0.025, 3) == pytest.approx(5384.453125)

    def test_compound_zero_periods(self):
        assert compound(1234.0, 0.07, 0) == 1234.0

    def test_compound_negative_periods_discounts(self):
        assert compound(110.0, 0.10, -1) == pytest.approx(100.0)


class TestIEEEArithmetic:
    """Degenerate powers and quotients return inf or NaN, never raise."""

    def test_power_regular(self):
        assert power(2.0, 3) == 8.0
        assert power(1.1, -1) == pytest.approx(1 / 1.1)

    def test_zero_to_negative_power_is_inf(self):
        assert power(0.0, -2.0) == math.inf

    def test_negative_base_fractional_exponent_is_nan(self):
        assert math.isnan(power(-0.5, 2.5))

    def test_overflow_is_inf(self):
        assert power(1.025, 100_000) == math.inf

    def test_safe_divide(self):
        assert safe_divide(6.0, 3.0) == 2.0
        assert safe_divide(1.0, 0.0) == math.inf
        assert safe_divide(-1.0, 0.0) == -math.inf
        assert math.isnan(safe_divide(0.0, 0.0))

    def test_compound_overflow(self):
        assert compound(5000, 0.025, 100_000) == math.inf

    def test_compound_total_loss_fractional_years(self):
        assert math.isnan(compound(1000, -1.5, 2.5))

    def test_compound_returns_float(self):
        assert type(compound(5000, 0.025, 3)) is float


class TestFormatting:
    """Test finiteness guard and display formatting."""

    def test_finite_or_zero(self):
        assert finite_or_zero(3.5) == 3.5
        assert finite_or_zero(float("nan")) == 0.0
        assert finite_or_zero(float("inf")) == 0.0
        assert finite_or_zero(-math.inf) == 0.0

    def test_format_amount_rounds_with_separators(self):
        assert format_amount(5384.4531) == "5,384"
        assert format_amount(1_234_567.89) == "1,234,568"

    def test_format_amount_non_finite(self):
        """Non-finite values render as zero."""
        assert format_amount(float("nan")) == "0"
        assert format_amount(float("inf")) == "0"

    def test_format_amount_no_negative_zero(self):
        assert format_amount(-0.3) == "0"

    def test_format_amount_symbol_and_decimals(self):
        assert format_amount(1234.5, symbol="$", decimals=2) == "$1,234.50"
