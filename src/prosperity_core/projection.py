"""Compound-growth projection for insurance and annuity proposals.

The projection compounds a contribution schedule year by year:

    account_value = initial_lump_sum + first_year_bonus
    for each year 1..years_to_pay:
        account_value += monthly_contribution * 12
        account_value *= 1 + average_return_percentage / 100
        account_value -= annual_coi
        account_value = max(0, account_value)

The order inside a year matters and the floor at zero is applied every year,
so an account drained by fees stays at zero rather than going negative.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Union

import structlog

from .config import ProjectionSettings
from .models import (
    CalculationStep,
    ProjectionInput,
    ProjectionResult,
    Proposal,
    YearProjection,
)
from .parsing import ZERO

logger = structlog.get_logger()

MONTHS_PER_YEAR = 12
HUNDRED = Decimal("100")

ProjectionSource = Union[ProjectionInput, Proposal, Mapping[str, Any], None]


class ProposalProjectionCalculator:
    """
    Project the account value of a proposal's contribution schedule.

    Each run records its intermediate values in an audit log that is
    returned with the result, so printed projections can be traced back to
    their inputs.
    """

    def __init__(self, settings: Optional[ProjectionSettings] = None):
        """
        Initialize the calculator.

        Args:
            settings: Projection defaults (default: loaded from environment)
        """
        self.settings = settings or ProjectionSettings()
        self._audit_log: list[CalculationStep] = []

    def _log_step(
        self,
        step: str,
        input_value: str,
        output_value: str,
        source: str,
        notes: Optional[str] = None,
    ) -> None:
        """Add an entry to the audit log."""
        entry = CalculationStep(
            step=step,
            input_value=input_value,
            output_value=output_value,
            source=source,
            notes=notes,
        )
        self._audit_log.append(entry)
        logger.debug(
            "calculation_step",
            step=step,
            input=input_value,
            output=output_value,
            source=source,
        )

    @staticmethod
    def _coerce_input(data: ProjectionSource) -> ProjectionInput:
        if isinstance(data, ProjectionInput):
            return data
        if isinstance(data, Proposal):
            return data.projection
        return ProjectionInput.model_validate(data or {})

    def calculate(self, data: ProjectionSource) -> ProjectionResult:
        """
        Run the year-by-year projection.

        Args:
            data: A ProjectionInput, a Proposal, or a raw proposal record

        Returns:
            ProjectionResult with totals, a per-year schedule and audit log
        """
        self._audit_log = []
        projection = self._coerce_input(data)

        years = projection.years_to_pay
        if years is None:
            years = self.settings.default_years_to_pay
        return_percentage = projection.average_return_percentage
        if return_percentage is None:
            return_percentage = self.settings.default_return_percentage
        return_rate = return_percentage / HUNDRED

        lump_sum = projection.initial_lump_sum
        bonus = projection.first_year_bonus
        annual_contributions = projection.monthly_contribution * MONTHS_PER_YEAR
        annual_coi = projection.annual_coi

        total_contributions = lump_sum + bonus + annual_contributions * years
        self._log_step(
            step="total_contributions",
            input_value=f"{lump_sum} + {bonus} + ({projection.monthly_contribution} * 12 * {years})",
            output_value=str(total_contributions),
            source="Lump sum + first year bonus + monthly contributions",
        )

        total_coi = annual_coi * years
        self._log_step(
            step="total_coi",
            input_value=f"{annual_coi} * {years}",
            output_value=str(total_coi),
            source="Annual COI/fees over the payment period",
        )

        account_value = lump_sum + bonus
        schedule: list[YearProjection] = []

        for year in range(1, years + 1):
            account_value += annual_contributions
            before_growth = account_value
            account_value = account_value * (1 + return_rate)
            year_growth = account_value - before_growth
            account_value -= annual_coi

            notes = None
            if account_value < 0:
                account_value = ZERO
                notes = "Account value floored at zero"

            schedule.append(
                YearProjection(
                    year=year,
                    contributions=annual_contributions,
                    growth=year_growth,
                    coi=annual_coi,
                    end_value=account_value,
                )
            )
            self._log_step(
                step=f"year_{year}",
                input_value=f"({before_growth}) * (1 + {return_rate}) - {annual_coi}",
                output_value=str(account_value),
                source="Annual compounding with COI deduction",
                notes=notes,
            )

        final_value = account_value
        growth = max(ZERO, final_value - total_contributions)
        self._log_step(
            step="growth",
            input_value=f"max(0, {final_value} - {total_contributions})",
            output_value=str(growth),
            source="Final value less total contributions",
        )

        logger.info(
            "projection_complete",
            years=years,
            return_percentage=str(return_percentage),
            final_value=str(final_value),
            growth=str(growth),
        )

        return ProjectionResult(
            total_contributions=total_contributions,
            total_coi=total_coi,
            final_value=final_value,
            growth=growth,
            years_to_pay=years,
            average_return_percentage=return_percentage,
            schedule=schedule,
            audit_log=self._audit_log,
        )


def calculate_projections(
    data: ProjectionSource,
    settings: Optional[ProjectionSettings] = None,
) -> ProjectionResult:
    """Project a proposal's account value with a one-off calculator."""
    return ProposalProjectionCalculator(settings).calculate(data)


__all__ = [
    "MONTHS_PER_YEAR",
    "ProposalProjectionCalculator",
    "calculate_projections",
]
