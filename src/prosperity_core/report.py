"""Client financial report assembly.

Combines every section calculator into one report summary:
- Cashflow and balance sheet totals
- Financial Independence Number (FIN): total income times a multiplier
- Insurance needs and the gap left after in-force policies
- Goal progress
- Estate planning progress
- Recommendations triggered by the figures above
"""

from collections.abc import Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field

from .config import ProjectionSettings
from .estate import EstateProgress, completion, is_completed
from .formatting import format_currency
from .goals import GoalProgressCalculator, GoalsSummary
from .insurance import (
    InsuranceNeedsResult,
    calculate_insurance_needs,
    total_coverage,
    total_premiums,
)
from .models import AdvisorProfile, ClientProfile, FinancialAnalysis, InsurancePolicy, LineItem
from .totals import (
    BalanceSheetSummary,
    CashflowSummary,
    largest_items,
    summarize_balance_sheet,
    summarize_cashflow,
)

logger = structlog.get_logger()

HUNDRED = Decimal("100")

AnalysisSource = Union[FinancialAnalysis, Mapping[str, Any], None]
ClientSource = Union[ClientProfile, Mapping[str, Any], None]
AdvisorSource = Union[AdvisorProfile, Mapping[str, Any], None]


class RecommendationSeverity(str, Enum):
    """How urgently a recommendation should be presented."""

    CRITICAL = "critical"
    ADVISORY = "advisory"
    SUGGESTION = "suggestion"
    POSITIVE = "positive"


class Recommendation(BaseModel):
    key: str
    title: str
    message: str
    severity: RecommendationSeverity


class InsuranceSummary(BaseModel):
    """Needs analysis alongside the policies already in force."""

    needs: InsuranceNeedsResult
    total_coverage: Decimal
    total_premiums: Decimal
    coverage_gap: Decimal = Field(description="Additional need minus in-force coverage; may be negative")
    policies: list[InsurancePolicy] = Field(default_factory=list)


class FinancialReport(BaseModel):
    """Everything printed on a client's financial report."""

    client: ClientProfile
    advisor: AdvisorProfile
    report_date: date
    client_age: Optional[int] = None
    financial_independence_number: Decimal
    cashflow: CashflowSummary
    balance_sheet: BalanceSheetSummary
    income_sources: list[LineItem] = Field(default_factory=list)
    expenses: list[LineItem] = Field(default_factory=list)
    assets: list[LineItem] = Field(default_factory=list)
    liabilities: list[LineItem] = Field(default_factory=list)
    insurance: InsuranceSummary
    goals: GoalsSummary
    estate: EstateProgress
    legacy_wishes: str = ""
    recommendations: list[Recommendation] = Field(default_factory=list)

    @property
    def document_id(self) -> str:
        """Identifier printed in the report footer."""
        return f"FIN-{(self.client.id or '')[:8]}"


def _whole_percent(value: Decimal) -> Decimal:
    return value.quantize(Decimal("1"), rounding=ROUND_HALF_UP)


class FinancialReportBuilder:
    """
    Build a client's financial report from their analysis record.

    Thresholds for the savings-rate and debt recommendations and the FIN
    multiplier come from ProjectionSettings.
    """

    def __init__(self, settings: Optional[ProjectionSettings] = None):
        self.settings = settings or ProjectionSettings()
        self._goal_calculator = GoalProgressCalculator(self.settings)

    def build(
        self,
        client: ClientSource,
        analysis: AnalysisSource,
        advisor: AdvisorSource = None,
        today: Optional[date] = None,
    ) -> FinancialReport:
        """
        Assemble the report.

        Args:
            client: Client profile or stored client record
            analysis: Financial analysis or stored analysis record
            advisor: Advisor profile or stored user record
            today: Reference date for ages and goal deadlines (default: today)

        Returns:
            FinancialReport with every section and its recommendations
        """
        today = today or date.today()
        if not isinstance(client, ClientProfile):
            client = ClientProfile.model_validate(client or {})
        if not isinstance(advisor, AdvisorProfile):
            advisor = AdvisorProfile.model_validate(advisor or {})
        if not isinstance(analysis, FinancialAnalysis):
            analysis = FinancialAnalysis.from_record(analysis)

        cashflow = summarize_cashflow(analysis.income_sources, analysis.expenses)
        balance_sheet = summarize_balance_sheet(analysis.assets, analysis.liabilities)
        fin = cashflow.total_income * self.settings.fin_multiplier

        needs = calculate_insurance_needs(analysis.insurance_calculator)
        coverage = total_coverage(analysis.insurance_policies)
        insurance = InsuranceSummary(
            needs=needs,
            total_coverage=coverage,
            total_premiums=total_premiums(analysis.insurance_policies),
            coverage_gap=needs.additional_coverage_needed - coverage,
            policies=analysis.insurance_policies,
        )

        goals = self._goal_calculator.summarize(analysis.financial_goals, today)
        estate = completion(analysis.estate_checklist)

        report = FinancialReport(
            client=client,
            advisor=advisor,
            report_date=today,
            client_age=client.age_on(today),
            financial_independence_number=fin,
            cashflow=cashflow,
            balance_sheet=balance_sheet,
            income_sources=largest_items(analysis.income_sources),
            expenses=largest_items(analysis.expenses),
            assets=largest_items(analysis.assets),
            liabilities=largest_items(analysis.liabilities),
            insurance=insurance,
            goals=goals,
            estate=estate,
            legacy_wishes=analysis.legacy_wishes,
            recommendations=self.recommend(cashflow, balance_sheet, insurance, analysis),
        )

        logger.info(
            "financial_report_built",
            client_id=client.id,
            recommendations=len(report.recommendations),
            fin=str(fin),
        )
        return report

    def recommend(
        self,
        cashflow: CashflowSummary,
        balance_sheet: BalanceSheetSummary,
        insurance: InsuranceSummary,
        analysis: FinancialAnalysis,
    ) -> list[Recommendation]:
        """Derive recommendations from the report figures."""
        recommendations: list[Recommendation] = []
        net_income = cashflow.net_income
        savings_floor = cashflow.total_income * self.settings.savings_rate_target / HUNDRED
        debt_ceiling = balance_sheet.total_assets * self.settings.debt_to_asset_threshold / HUNDRED
        has_will = is_completed(analysis.estate_checklist, "will")
        has_emergency_fund = is_completed(analysis.estate_checklist, "emergency_fund")

        if net_income < 0:
            recommendations.append(
                Recommendation(
                    key="negative_cash_flow",
                    title="Negative Cash Flow",
                    message=(
                        f"Your expenses exceed your income by {format_currency(abs(net_income))} monthly. "
                        "Consider reviewing discretionary spending to balance your budget."
                    ),
                    severity=RecommendationSeverity.CRITICAL,
                )
            )

        if 0 < net_income < savings_floor:
            target = _whole_percent(self.settings.savings_rate_target)
            recommendations.append(
                Recommendation(
                    key="improve_savings_rate",
                    title="Improve Savings Rate",
                    message=(
                        f"Your current savings rate is {_whole_percent(cashflow.savings_rate)}%. "
                        f"Consider increasing to {target}% or more for long-term financial independence."
                    ),
                    severity=RecommendationSeverity.ADVISORY,
                )
            )

        if insurance.coverage_gap > 0:
            recommendations.append(
                Recommendation(
                    key="life_insurance_gap",
                    title="Life Insurance Gap",
                    message=(
                        "Your current life insurance coverage may be insufficient by approximately "
                        f"{format_currency(insurance.coverage_gap)}. "
                        "Consider additional coverage to protect your family."
                    ),
                    severity=RecommendationSeverity.CRITICAL,
                )
            )

        if not has_will:
            recommendations.append(
                Recommendation(
                    key="create_will",
                    title="Create a Will",
                    message=(
                        "You don't have a will in place. This is a fundamental estate planning document "
                        "that ensures your assets are distributed according to your wishes."
                    ),
                    severity=RecommendationSeverity.ADVISORY,
                )
            )

        if balance_sheet.total_liabilities > debt_ceiling:
            if balance_sheet.total_assets > 0:
                detail = f"Your debt-to-asset ratio is {_whole_percent(balance_sheet.debt_to_asset_ratio)}%."
            else:
                detail = "You have liabilities but no recorded assets."
            recommendations.append(
                Recommendation(
                    key="debt_reduction",
                    title="Debt Reduction Strategy",
                    message=(
                        f"{detail} Consider prioritizing debt reduction to improve your financial stability."
                    ),
                    severity=RecommendationSeverity.ADVISORY,
                )
            )

        if not has_emergency_fund:
            recommendations.append(
                Recommendation(
                    key="build_emergency_fund",
                    title="Build Emergency Fund",
                    message=(
                        "An emergency fund of 3-6 months of expenses will provide financial security in case "
                        "of unexpected events. Consider making this a priority."
                    ),
                    severity=RecommendationSeverity.SUGGESTION,
                )
            )

        strong_foundation = (
            net_income >= savings_floor
            and insurance.coverage_gap <= 0
            and has_will
            and balance_sheet.total_liabilities <= debt_ceiling
            and has_emergency_fund
        )
        if strong_foundation:
            recommendations.append(
                Recommendation(
                    key="strong_foundation",
                    title="Strong Financial Foundation",
                    message=(
                        "You've established a solid financial foundation. Consider optimizing your investment "
                        "strategy to accelerate progress toward your long-term goals and financial independence."
                    ),
                    severity=RecommendationSeverity.POSITIVE,
                )
            )

        return recommendations


__all__ = [
    "RecommendationSeverity",
    "Recommendation",
    "InsuranceSummary",
    "FinancialReport",
    "FinancialReportBuilder",
]
