"""
Unit tests for iconset.rendering.dimensions module.

Tests:
- Number formatting
- Scaling plain numbers
- Scaling strings with units and calc() expressions
- Values passed through unchanged
"""

import pytest

from iconset.rendering.dimensions import calculate_dimension, format_number


class TestFormatNumber:
    """Tests for format_number."""

    def test_integral_float(self):
        """Integral floats drop the fraction."""
        assert format_number(12.0) == "12"

    def test_fraction_kept(self):
        """Non-integral floats keep their digits."""
        assert format_number(17.78) == "17.78"

    def test_int_and_string(self):
        """Ints and strings pass through str()."""
        assert format_number(24) == "24"
        assert format_number("1em") == "1em"


class TestCalculateNumbers:
    """Tests for scaling numeric sizes."""

    def test_ratio_one_returns_input(self):
        """A ratio of 1 returns the value untouched."""
        assert calculate_dimension(24, 1) == 24
        assert calculate_dimension("24px", 1) == "24px"

    def test_exact_scale(self):
        """Exact results are not rounded."""
        assert calculate_dimension(48, 36 / 48) == 36

    def test_rounds_up(self):
        """Results are rounded up to the precision."""
        assert calculate_dimension(16, 10 / 9) == 17.78

    def test_custom_precision(self):
        """Precision 1000 keeps three decimals."""
        assert calculate_dimension(16, 10 / 9, 1000) == 17.778

    def test_float_input(self):
        """Float sizes scale like ints."""
        assert calculate_dimension(1.5, 2) == 3


class TestCalculateStrings:
    """Tests for scaling sizes given as strings."""

    def test_em(self):
        """Units are kept around the scaled number."""
        assert calculate_dimension("1em", 20 / 24) == "0.84em"

    def test_rounds_up_in_string(self):
        """String tokens are rounded up like numbers."""
        assert calculate_dimension("1em", 48 / 36) == "1.34em"

    def test_px(self):
        """Integral results lose their fraction inside strings."""
        assert calculate_dimension("48px", 0.75) == "36px"

    def test_plain_number_string(self):
        """Unitless strings stay strings."""
        assert calculate_dimension("48", 0.75) == "36"

    def test_calc_expression(self):
        """Every number in an expression is scaled in place."""
        assert calculate_dimension("calc(100% - 48px)", 0.75) == "calc(75% - 36px)"

    def test_decimal_token(self):
        """Decimal tokens are parsed completely."""
        assert calculate_dimension("1.5em", 2) == "3em"

    def test_string_without_numbers(self):
        """Strings without numbers are returned unchanged."""
        assert calculate_dimension("auto", 2) == "auto"


class TestCalculatePassThrough:
    """Tests for values that are not scaled."""

    @pytest.mark.parametrize("value", [True, False, None, [16], {"w": 1}])
    def test_unscalable_values(self, value):
        """Booleans, None and containers are returned as given."""
        assert calculate_dimension(value, 2) == value
