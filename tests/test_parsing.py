"""Tests for lenient record value coercion."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from prosperity_core.parsing import is_blank, to_date, to_decimal, to_int


class TestToDecimal:
    """Test suite for to_decimal."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (100, Decimal("100")),
            (0.1, Decimal("0.1")),
            (Decimal("12.50"), Decimal("12.50")),
            ("250", Decimal("250")),
            ("  42.5  ", Decimal("42.5")),
            ("-3", Decimal("-3")),
            (".5", Decimal("0.5")),
            ("1e3", Decimal("1E+3")),
        ],
    )
    def test_numeric_values(self, value, expected):
        """Numbers and numeric strings parse to their Decimal value."""
        assert to_decimal(value) == expected

    def test_numeric_prefix_is_honoured(self):
        """Text after a leading number is ignored."""
        assert to_decimal("12.5abc") == Decimal("12.5")
        assert to_decimal("1,000") == Decimal("1")

    @pytest.mark.parametrize("value", [None, "", "   ", "abc", "$100", True, False, [], {}])
    def test_unparsable_values_default_to_zero(self, value):
        """Anything without a leading number becomes zero."""
        assert to_decimal(value) == Decimal("0")

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), "Infinity"])
    def test_non_finite_values_default(self, value):
        """NaN and infinities never leak into totals."""
        assert to_decimal(value) == Decimal("0")

    @pytest.mark.parametrize("value", ["9e999999", "-2e308", Decimal("1e400"), 10 ** 400])
    def test_out_of_range_values_default(self, value):
        """Values past the largest double read as infinite."""
        assert to_decimal(value) == Decimal("0")

    def test_largest_double_is_kept(self):
        assert to_decimal("1.7e308") == Decimal("1.7e308")

    def test_custom_default(self):
        """The default is returned for unparsable input."""
        assert to_decimal("n/a", default=Decimal("6")) == Decimal("6")


class TestToInt:
    """Test suite for to_int."""

    def test_truncates(self):
        """Fractional values truncate toward zero."""
        assert to_int("20.9") == 20
        assert to_int(-2.7) == -2

    def test_unparsable_is_zero(self):
        assert to_int("twenty") == 0


class TestToDate:
    """Test suite for to_date."""

    def test_iso_string(self):
        assert to_date("2035-01-01") == date(2035, 1, 1)

    def test_iso_string_with_time(self):
        """Timestamps keep only their date."""
        assert to_date("2035-01-01T12:30:00Z") == date(2035, 1, 1)

    def test_date_and_datetime(self):
        assert to_date(date(2030, 6, 15)) == date(2030, 6, 15)
        assert to_date(datetime(2030, 6, 15, 9, 0)) == date(2030, 6, 15)

    @pytest.mark.parametrize("value", [None, "", "soon", "2035-13-01", 20350101])
    def test_invalid_dates_are_none(self, value):
        assert to_date(value) is None


class TestIsBlank:
    def test_blank_values(self):
        assert is_blank(None)
        assert is_blank("  ")
        assert not is_blank("0")
        assert not is_blank(0)
