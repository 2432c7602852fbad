"""Tests for insurance needs and coverage gap."""

from decimal import Decimal

import pytest

from prosperity_core.insurance import (
    calculate_insurance_needs,
    coverage_gap,
    total_coverage,
    total_premiums,
)
from prosperity_core.models import InsuranceNeedsInput, InsurancePolicy


@pytest.fixture
def needs_record() -> dict:
    return {
        "annualIncome": "100000",
        "yearsToReplace": "10",
        "finalExpenses": "15000",
        "educationFund": "85000",
        "existingCoverage": "250000",
        "liquidAssets": "50000",
        "retirementAccounts": "100000",
    }


class TestCalculateInsuranceNeeds:
    """Test suite for calculate_insurance_needs."""

    def test_needs_and_resources(self, needs_record: dict):
        result = calculate_insurance_needs(needs_record)

        assert result.total_needs == Decimal("1100000")
        assert result.total_resources == Decimal("400000")
        assert result.additional_coverage_needed == Decimal("700000")

    def test_resources_exceeding_needs_floor_at_zero(self):
        """Over-insured clients need no additional coverage."""
        result = calculate_insurance_needs({
            "annual_income": 50000,
            "years_to_replace": 2,
            "existing_coverage": 1000000,
        })

        assert result.additional_coverage_needed == Decimal("0")
        assert result.total_resources > result.total_needs

    def test_missing_section_is_all_zero(self):
        result = calculate_insurance_needs(None)

        assert result.total_needs == Decimal("0")
        assert result.additional_coverage_needed == Decimal("0")

    def test_malformed_values_count_as_zero(self):
        result = calculate_insurance_needs({"annualIncome": "lots", "yearsToReplace": "10", "finalExpenses": "9000"})

        assert result.total_needs == Decimal("9000")

    def test_out_of_range_income_counts_as_zero(self):
        result = calculate_insurance_needs({"annualIncome": "9e999999", "yearsToReplace": "10", "finalExpenses": "500"})

        assert result.total_needs == Decimal("500")

    def test_accepts_model(self):
        needs = InsuranceNeedsInput(annual_income=Decimal("1000"), years_to_replace=Decimal("3"))

        assert calculate_insurance_needs(needs).total_needs == Decimal("3000")


class TestPolicies:
    """Coverage from in-force policies."""

    @pytest.fixture
    def policies(self) -> list:
        return [
            {"carrier": "Ethos", "policyType": "term_life", "coverageAmount": "500000", "annualPremium": "600"},
            InsurancePolicy(carrier="Ameritas", coverage_amount=Decimal("100000"), annual_premium=Decimal("1200")),
            {"carrier": "Unknown", "coverageAmount": "n/a"},
        ]

    def test_total_coverage(self, policies: list):
        assert total_coverage(policies) == Decimal("600000")

    def test_total_premiums(self, policies: list):
        assert total_premiums(policies) == Decimal("1800")

    def test_coverage_gap(self, needs_record: dict, policies: list):
        """Gap is the remaining need after policies."""
        assert coverage_gap(needs_record, policies) == Decimal("100000")

    def test_coverage_gap_can_be_negative(self, policies: list):
        assert coverage_gap({}, policies) == Decimal("-600000")

    def test_no_policies(self, needs_record: dict):
        assert coverage_gap(needs_record, []) == Decimal("700000")
