"""Tests for the FinancialEngine service."""

import logging
from datetime import date
from decimal import Decimal

import pytest
import structlog

from prosperity_core import FinancialEngine
from prosperity_core.config import ProjectionSettings, ProsperityConfig, ReportSettings
from prosperity_core.exceptions import ConfigurationError, ProsperityError

TODAY = date(2025, 1, 1)


@pytest.fixture
def config() -> ProsperityConfig:
    return ProsperityConfig(
        env="test",
        log_level="WARNING",
        projection=ProjectionSettings(),
        report=ReportSettings(firm_name="Acme Wealth"),
    )


@pytest.fixture
def engine(config: ProsperityConfig) -> FinancialEngine:
    return FinancialEngine(config)


class TestConstruction:
    """Engine construction and logging setup."""

    def test_rejects_wrong_config_type(self):
        with pytest.raises(ConfigurationError) as exc_info:
            FinancialEngine({"env": "test"})

        assert exc_info.value.details["actual"] == "dict"
        assert isinstance(exc_info.value, ProsperityError)
        assert exc_info.value.recoverable is False

    def test_logging_not_configured_on_construction(self, engine: FinancialEngine):
        assert engine.logging_configured is False

    def test_logging_configured_once(self, engine: FinancialEngine, monkeypatch):
        calls = []
        monkeypatch.setattr("prosperity_core.engine.configure_logging", calls.append)

        engine.project({"yearsToPay": 1})
        engine.project({"yearsToPay": 2})
        engine.insurance_needs({})

        assert calls == [engine.config]
        assert engine.logging_configured is True

    def test_guard_is_per_instance(self, config: ProsperityConfig, monkeypatch):
        calls = []
        monkeypatch.setattr("prosperity_core.engine.configure_logging", calls.append)

        FinancialEngine(config).ensure_configured()
        FinancialEngine(config).ensure_configured()

        assert len(calls) == 2

    def test_last_configured_engine_sets_process_level(self):
        """structlog configuration is shared by every engine in the process."""
        quiet = FinancialEngine(ProsperityConfig(env="test", log_level="ERROR"))
        chatty = FinancialEngine(ProsperityConfig(env="test", log_level="DEBUG"))
        try:
            quiet.ensure_configured()
            chatty.ensure_configured()

            wrapper = structlog.get_config()["wrapper_class"]
            assert wrapper is structlog.make_filtering_bound_logger(logging.DEBUG)
            assert quiet.logging_configured is True
        finally:
            structlog.reset_defaults()


class TestOperations:
    """Engine operations delegate to the calculators."""

    def test_project(self, engine: FinancialEngine):
        result = engine.project({
            "initialLumpSum": 10000,
            "yearsToPay": 1,
            "averageReturnPercentage": 10,
        })

        assert result.final_value == Decimal("11000")

    def test_insurance_needs(self, engine: FinancialEngine):
        result = engine.insurance_needs({"annualIncome": 50000, "yearsToReplace": 10, "liquidAssets": 100000})

        assert result.additional_coverage_needed == Decimal("400000")

    def test_evaluate_goals(self, engine: FinancialEngine):
        summary = engine.evaluate_goals([{"targetAmount": 1000, "currentAmount": 250}], TODAY)

        assert summary.overall_progress == Decimal("25")

    def test_build_and_render_report(self, engine: FinancialEngine):
        report = engine.build_report(
            {"id": "client-0001", "name": "Jane Doe"},
            {"income_sources": [{"amount": 5000}], "expenses": [{"amount": 2000}]},
            today=TODAY,
        )
        text = engine.render_report(report, format="text")

        assert report.financial_independence_number == Decimal("125000")
        assert "Generated by Acme Wealth" in text
        assert "Acme Wealth™ is not responsible" in text

    def test_render_report_from_dump(self, engine: FinancialEngine):
        report = engine.build_report({"name": "Jane Doe"}, {}, today=TODAY)
        html = engine.render_report(report.model_dump(), format="html")

        assert "Jane Doe" in html

    def test_render_proposal(self, engine: FinancialEngine):
        text = engine.render_proposal({"id": "p-123456789", "monthlyContribution": 100}, today=TODAY)

        assert "Document ID: #p-123456" in text
        assert "Acme Wealth" in text
