"""Tests for client financial report assembly."""

from datetime import date
from decimal import Decimal

import pytest

from prosperity_core.config import ProjectionSettings
from prosperity_core.report import FinancialReport, FinancialReportBuilder, RecommendationSeverity

TODAY = date(2025, 1, 1)


@pytest.fixture
def builder() -> FinancialReportBuilder:
    return FinancialReportBuilder(ProjectionSettings())


@pytest.fixture
def client_record() -> dict:
    return {
        "id": "0a1b2c3d4e5f-client",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "dateOfBirth": "1980-06-15",
        "spouse": {"name": "John Doe"},
    }


@pytest.fixture
def strong_analysis() -> dict:
    """An analysis that triggers no warnings."""
    return {
        "income_sources": [{"description": "Salary", "amount": "10000"}],
        "expenses": [{"description": "Mortgage", "amount": "3000"}, {"description": "Food", "amount": "1000"}],
        "assets": [{"description": "Home", "amount": "500000"}, {"description": "401k", "amount": "200000"}],
        "liabilities": [{"description": "Mortgage", "amount": "250000"}],
        "insurance_calculator": {
            "annual_income": "120000",
            "years_to_replace": "10",
            "existing_coverage": "0",
        },
        "insurance_policies": [{"carrier": "Ethos", "coverage_amount": "1500000", "annual_premium": "900"}],
        "financial_goals": [{"title": "College", "target_amount": "100000", "current_amount": "40000",
                             "target_date": "2030-01-01"}],
        "estate_checklist": {
            "will": {"completed": True},
            "emergency_fund": {"completed": True},
        },
        "legacy_wishes": "Fund a scholarship.",
    }


@pytest.fixture
def weak_analysis() -> dict:
    """An analysis that triggers every warning."""
    return {
        "income_sources": [{"amount": "4000"}],
        "expenses": [{"amount": "4500"}],
        "assets": [{"amount": "10000"}],
        "liabilities": [{"amount": "30000"}],
        "insurance_calculator": {"annual_income": "48000", "years_to_replace": "10"},
        "insurance_policies": [{"coverage_amount": "100000"}],
    }


def _keys(report: FinancialReport) -> list:
    return [rec.key for rec in report.recommendations]


class TestFinancialReportBuilder:
    """Test suite for FinancialReportBuilder."""

    def test_summary_figures(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert report.cashflow.net_income == Decimal("6000")
        assert report.balance_sheet.net_worth == Decimal("450000")
        assert report.financial_independence_number == Decimal("250000")
        assert report.client_age == 44
        assert report.client.spouse_name == "John Doe"
        assert report.report_date == TODAY
        assert report.legacy_wishes == "Fund a scholarship."

    def test_insurance_section(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert report.insurance.needs.additional_coverage_needed == Decimal("1200000")
        assert report.insurance.total_coverage == Decimal("1500000")
        assert report.insurance.coverage_gap == Decimal("-300000")
        assert report.insurance.total_premiums == Decimal("900")

    def test_line_items_sorted(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert [item.description for item in report.expenses] == ["Mortgage", "Food"]
        assert report.assets[0].amount == Decimal("500000")

    def test_goals_and_estate(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert report.goals.goals[0].progress == Decimal("40")
        assert report.estate.completed == 2
        assert report.estate.total == 8

    def test_document_id(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert report.document_id == "FIN-0a1b2c3d"

    def test_advisor_defaults(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert report.advisor.name == "Not Assigned"

    def test_empty_analysis(self, builder: FinancialReportBuilder):
        report = builder.build(None, None, today=TODAY)

        assert report.financial_independence_number == Decimal("0")
        assert report.client_age is None
        assert report.document_id == "FIN-"


class TestRecommendations:
    """Recommendation rules."""

    def test_strong_foundation(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert _keys(report) == ["strong_foundation"]
        assert report.recommendations[0].severity == RecommendationSeverity.POSITIVE
        assert report.recommendations[0].title == "Strong Financial Foundation"

    def test_every_warning(self, builder: FinancialReportBuilder, client_record: dict, weak_analysis: dict):
        report = builder.build(client_record, weak_analysis, today=TODAY)

        assert _keys(report) == [
            "negative_cash_flow",
            "life_insurance_gap",
            "create_will",
            "debt_reduction",
            "build_emergency_fund",
        ]
        negative = report.recommendations[0]
        assert "$500" in negative.message
        gap = report.recommendations[1]
        assert "$380,000" in gap.message
        debt = report.recommendations[3]
        assert "300%" in debt.message

    def test_low_savings_rate(self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict):
        strong_analysis["expenses"] = [{"amount": "9000"}]
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert _keys(report) == ["improve_savings_rate"]
        assert "10%" in report.recommendations[0].message
        assert "20%" in report.recommendations[0].message

    def test_break_even_gets_no_foundation_note(
        self, builder: FinancialReportBuilder, client_record: dict, strong_analysis: dict
    ):
        """Zero net income is neither a warning nor a strong foundation."""
        strong_analysis["expenses"] = [{"amount": "10000"}]
        report = builder.build(client_record, strong_analysis, today=TODAY)

        assert report.recommendations == []

    def test_liabilities_without_assets(self, builder: FinancialReportBuilder, strong_analysis: dict):
        strong_analysis["assets"] = []
        report = builder.build({}, strong_analysis, today=TODAY)
        debt = next(rec for rec in report.recommendations if rec.key == "debt_reduction")

        assert "no recorded assets" in debt.message

    def test_thresholds_follow_settings(self, client_record: dict, strong_analysis: dict):
        settings = ProjectionSettings(savings_rate_target=Decimal("70"), fin_multiplier=Decimal("30"))
        report = FinancialReportBuilder(settings).build(client_record, strong_analysis, today=TODAY)

        assert _keys(report) == ["improve_savings_rate"]
        assert report.financial_independence_number == Decimal("300000")
