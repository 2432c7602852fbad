"""Engine service tying configuration to the calculators and renderers.

A FinancialEngine owns one ProsperityConfig and applies its logging setup
the first time the engine does any work. Nothing is configured at import.

Usage:
    engine = FinancialEngine()
    result = engine.project({"monthlyContribution": "500", "yearsToPay": "10"})
    text = engine.render_proposal(proposal_record, client=client_record)
"""

from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any, Optional, Union

import structlog

from .config import ProsperityConfig, ReportFormat, configure_logging
from .exceptions import ConfigurationError
from .goals import GoalProgressCalculator, GoalsSummary
from .insurance import InsuranceNeedsResult, calculate_insurance_needs
from .models import ProjectionResult
from .projection import ProposalProjectionCalculator, ProjectionSource
from .report import FinancialReport, FinancialReportBuilder
from .report_generator import FinancialReportGenerator, ProposalReportGenerator

logger = structlog.get_logger()


class FinancialEngine:
    """
    Entry point for projections, analyses and rendered reports.

    Args:
        config: Engine configuration (default: loaded from environment)

    Raises:
        ConfigurationError: If ``config`` is not a ProsperityConfig
    """

    def __init__(self, config: Optional[ProsperityConfig] = None):
        if config is not None and not isinstance(config, ProsperityConfig):
            raise ConfigurationError(
                "Engine configuration must be a ProsperityConfig",
                config_key="config",
                expected="ProsperityConfig",
                actual=type(config).__name__,
            )
        self.config = config or ProsperityConfig()
        self._logging_configured = False

        projection_settings = self.config.projection
        self.projection_calculator = ProposalProjectionCalculator(projection_settings)
        self.goal_calculator = GoalProgressCalculator(projection_settings)
        self.report_builder = FinancialReportBuilder(projection_settings)
        self.proposal_renderer = ProposalReportGenerator(self.config.report, projection_settings)
        self.report_renderer = FinancialReportGenerator(self.config.report)

    @property
    def logging_configured(self) -> bool:
        return self._logging_configured

    def ensure_configured(self) -> None:
        """Apply the logging configuration once for this engine.

        The guard is per engine, but ``structlog.configure`` is process-wide:
        the most recently configured engine's log level and renderer apply
        to every logger in the process.
        """
        if self._logging_configured:
            return
        configure_logging(self.config)
        self._logging_configured = True
        logger.debug("engine_configured", env=self.config.env, log_level=self.config.log_level)

    def project(self, data: ProjectionSource) -> ProjectionResult:
        """Run the compound projection for a proposal or its inputs."""
        self.ensure_configured()
        return self.projection_calculator.calculate(data)

    def insurance_needs(self, needs: Any) -> InsuranceNeedsResult:
        """Income-replacement insurance needs for a calculator record."""
        self.ensure_configured()
        return calculate_insurance_needs(needs)

    def evaluate_goals(
        self, goals: Optional[Iterable[Any]], today: Optional[date] = None
    ) -> GoalsSummary:
        """Progress and required savings for every goal."""
        self.ensure_configured()
        return self.goal_calculator.summarize(goals, today)

    def build_report(
        self,
        client: Any,
        analysis: Any,
        advisor: Any = None,
        today: Optional[date] = None,
    ) -> FinancialReport:
        """Assemble a client's financial report."""
        self.ensure_configured()
        return self.report_builder.build(client, analysis, advisor=advisor, today=today)

    def render_proposal(
        self,
        proposal: Any,
        client: Any = None,
        advisor: Any = None,
        format: Union[str, ReportFormat, None] = None,
        today: Optional[date] = None,
    ) -> Union[str, bytes]:
        """Render a proposal with its projection."""
        self.ensure_configured()
        return self.proposal_renderer.generate(
            proposal, client=client, advisor=advisor, format=format, today=today
        )

    def render_report(
        self,
        report: Union[FinancialReport, Mapping[str, Any]],
        format: Union[str, ReportFormat, None] = None,
    ) -> Union[str, bytes]:
        """Render a financial report built by ``build_report``."""
        self.ensure_configured()
        if not isinstance(report, FinancialReport):
            report = FinancialReport.model_validate(report)
        return self.report_renderer.generate(report, format=format)


__all__ = ["FinancialEngine"]
