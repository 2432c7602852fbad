"""Tests for currency and percentage display formatting."""

from decimal import Decimal

import pytest

from prosperity_core.formatting import format_currency, format_percentage, round_dollars


class TestFormatCurrency:
    """Test suite for format_currency."""

    @pytest.mark.parametrize(
        "amount,expected",
        [
            (1234, "$1,234"),
            (1234.5, "$1,235"),
            (Decimal("1234.49"), "$1,234"),
            ("2500000", "$2,500,000"),
            (0.5, "$1"),
            (-250.4, "-$250"),
            (-0.5, "-$1"),
        ],
    )
    def test_whole_dollar_formatting(self, amount, expected):
        """Amounts round to whole dollars with ties away from zero."""
        assert format_currency(amount) == expected

    @pytest.mark.parametrize("amount", [0, None, "abc", -0.4])
    def test_zero_and_unparsable(self, amount):
        assert format_currency(amount) == "$0"


class TestRoundDollars:
    def test_half_up(self):
        assert round_dollars("2.5") == Decimal("3")
        assert round_dollars("-2.5") == Decimal("-3")


class TestFormatPercentage:
    """Test suite for format_percentage."""

    def test_as_entered(self):
        """Trailing zeros are dropped without a digit count."""
        assert format_percentage("6") == "6%"
        assert format_percentage(Decimal("6.50")) == "6.5%"
        assert format_percentage(None) == "0%"

    def test_fixed_digits(self):
        assert format_percentage(6, 1) == "6.0%"
        assert format_percentage(Decimal("37.5"), 0) == "38%"
        assert format_percentage(Decimal("33.333"), 1) == "33.3%"
