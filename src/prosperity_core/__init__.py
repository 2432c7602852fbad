"""Prosperity Core - financial projection and analysis engine.

This package provides the calculations behind the ProsperityFIN advisory
portal: compound proposal projections, insurance needs, goal progress,
cashflow and balance sheet totals, and client financial reports.
"""

from prosperity_core.config import ProsperityConfig, ReportFormat, configure_logging
from prosperity_core.engine import FinancialEngine
from prosperity_core.exceptions import (
    ConfigurationError,
    ProsperityError,
    ReportError,
    ValidationError,
)
from prosperity_core.goals import (
    GoalProgressCalculator,
    calculate_progress,
    evaluate_goal,
    monthly_required,
    months_remaining,
    summarize_goals,
)
from prosperity_core.insurance import calculate_insurance_needs, coverage_gap
from prosperity_core.projection import ProposalProjectionCalculator, calculate_projections
from prosperity_core.report import FinancialReport, FinancialReportBuilder
from prosperity_core.report_generator import FinancialReportGenerator, ProposalReportGenerator
from prosperity_core.totals import summarize_balance_sheet, summarize_cashflow, sum_amounts

__version__ = "0.1.0"

__all__ = [
    # Engine
    "FinancialEngine",
    "ProsperityConfig",
    "ReportFormat",
    "configure_logging",
    # Calculators
    "ProposalProjectionCalculator",
    "calculate_projections",
    "calculate_insurance_needs",
    "coverage_gap",
    "GoalProgressCalculator",
    "calculate_progress",
    "months_remaining",
    "monthly_required",
    "evaluate_goal",
    "summarize_goals",
    "sum_amounts",
    "summarize_cashflow",
    "summarize_balance_sheet",
    # Reports
    "FinancialReport",
    "FinancialReportBuilder",
    "ProposalReportGenerator",
    "FinancialReportGenerator",
    # Errors
    "ProsperityError",
    "ValidationError",
    "ReportError",
    "ConfigurationError",
]
