"""Tests for cashflow and balance sheet aggregates."""

from decimal import Decimal

import pytest

from prosperity_core.models import LineItem
from prosperity_core.totals import (
    BalanceSheetSummary,
    CashflowSummary,
    largest_items,
    sum_amounts,
    summarize_balance_sheet,
    summarize_cashflow,
)


@pytest.fixture
def income() -> list:
    return [
        {"category": "salary", "description": "Primary Salary", "amount": "8500", "frequency": "monthly"},
        {"category": "rental", "description": "Rental Income", "amount": "1500", "frequency": "monthly"},
    ]


@pytest.fixture
def expenses() -> list:
    return [
        {"category": "housing", "description": "Mortgage", "amount": "3200"},
        {"category": "food", "description": "Groceries", "amount": "900"},
        {"category": "other", "description": "Unknown", "amount": "abc"},
    ]


class TestSumAmounts:
    """Test suite for sum_amounts."""

    def test_malformed_amount_contributes_zero(self):
        """An unparsable amount is skipped rather than failing the total."""
        assert sum_amounts([{"amount": "100"}, {"amount": "abc"}, {"amount": 50}]) == Decimal("150")

    def test_mixed_models_and_mappings(self):
        entries = [LineItem(amount=Decimal("10")), {"amount": "5"}, {"description": "no amount"}]

        assert sum_amounts(entries) == Decimal("15")

    def test_out_of_range_amounts_contribute_zero(self):
        assert sum_amounts([{"amount": "9e999999"}] * 2 + [{"amount": "10"}]) == Decimal("10")

    def test_empty_and_none(self):
        assert sum_amounts([]) == Decimal("0")
        assert sum_amounts(None) == Decimal("0")

    def test_other_field_in_camel_case(self):
        assert sum_amounts([{"coverageAmount": "250000"}], field="coverage_amount") == Decimal("250000")


class TestCashflow:
    """Test suite for summarize_cashflow."""

    def test_totals(self, income: list, expenses: list):
        summary = summarize_cashflow(income, expenses)

        assert summary.total_income == Decimal("10000")
        assert summary.total_expenses == Decimal("4100")
        assert summary.net_income == Decimal("5900")
        assert summary.savings_rate == Decimal("59")

    def test_negative_cashflow(self):
        summary = summarize_cashflow([{"amount": 1000}], [{"amount": 1500}])

        assert summary.net_income == Decimal("-500")
        assert summary.savings_rate == Decimal("-50")

    def test_no_income_has_zero_savings_rate(self):
        summary = CashflowSummary(total_income=Decimal("0"), total_expenses=Decimal("200"))

        assert summary.savings_rate == Decimal("0")

    def test_computed_fields_serialize(self, income: list, expenses: list):
        dumped = summarize_cashflow(income, expenses).model_dump()

        assert dumped["net_income"] == Decimal("5900")
        assert "savings_rate" in dumped


class TestBalanceSheet:
    """Test suite for summarize_balance_sheet."""

    def test_totals(self):
        summary = summarize_balance_sheet(
            [{"amount": "450000"}, {"amount": "50000"}],
            [{"amount": "300000"}],
        )

        assert summary.total_assets == Decimal("500000")
        assert summary.net_worth == Decimal("200000")
        assert summary.debt_to_asset_ratio == Decimal("60")

    def test_negative_net_worth(self):
        summary = summarize_balance_sheet([], [{"amount": 20000}])

        assert summary.net_worth == Decimal("-20000")
        assert summary.debt_to_asset_ratio == Decimal("0")

    def test_no_assets_ratio_guard(self):
        summary = BalanceSheetSummary(total_assets=Decimal("0"), total_liabilities=Decimal("0"))

        assert summary.debt_to_asset_ratio == Decimal("0")


class TestLargestItems:
    """Test suite for largest_items."""

    def test_sorted_descending(self, expenses: list):
        items = largest_items(expenses)

        assert [item.description for item in items] == ["Mortgage", "Groceries", "Unknown"]
        assert items[-1].amount == Decimal("0")

    def test_limit(self, expenses: list):
        assert len(largest_items(expenses, 2)) == 2

    def test_skips_non_records(self):
        items = largest_items([{"amount": 1}, "junk", 3])

        assert [item.amount for item in items] == [Decimal("1")]
