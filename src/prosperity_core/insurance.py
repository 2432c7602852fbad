"""Insurance needs and coverage gap calculations.

The needs analysis is income-replacement based:

    needs     = annual_income * years_to_replace + final_expenses + education_fund
    resources = existing_coverage + liquid_assets + retirement_accounts
    additional_coverage_needed = max(0, needs - resources)
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Union

import structlog
from pydantic import BaseModel

from .models import InsuranceNeedsInput, InsurancePolicy
from .parsing import ZERO
from .totals import sum_amounts

logger = structlog.get_logger()

NeedsSource = Union[InsuranceNeedsInput, Mapping[str, Any], None]
PolicySource = Union[InsurancePolicy, Mapping[str, Any]]


class InsuranceNeedsResult(BaseModel):
    """Outcome of the insurance needs calculation."""

    total_needs: Decimal
    total_resources: Decimal
    additional_coverage_needed: Decimal


def _coerce_needs(needs: NeedsSource) -> InsuranceNeedsInput:
    if isinstance(needs, InsuranceNeedsInput):
        return needs
    return InsuranceNeedsInput.model_validate(needs or {})


def calculate_insurance_needs(needs: NeedsSource) -> InsuranceNeedsResult:
    """Compute the coverage still needed after counting existing resources.

    Never negative: resources beyond the need leave nothing to cover.
    """
    needs = _coerce_needs(needs)
    total_needs = (
        needs.annual_income * needs.years_to_replace
        + needs.final_expenses
        + needs.education_fund
    )
    total_resources = (
        needs.existing_coverage + needs.liquid_assets + needs.retirement_accounts
    )
    additional = max(ZERO, total_needs - total_resources)

    logger.debug(
        "insurance_needs_calculated",
        total_needs=str(total_needs),
        total_resources=str(total_resources),
        additional_coverage_needed=str(additional),
    )
    return InsuranceNeedsResult(
        total_needs=total_needs,
        total_resources=total_resources,
        additional_coverage_needed=additional,
    )


def total_coverage(policies: Iterable[PolicySource]) -> Decimal:
    """Sum the face amounts of in-force policies."""
    return sum_amounts(policies, field="coverage_amount")


def total_premiums(policies: Iterable[PolicySource]) -> Decimal:
    """Sum the annual premiums of in-force policies."""
    return sum_amounts(policies, field="annual_premium")


def coverage_gap(needs: NeedsSource, policies: Iterable[PolicySource]) -> Decimal:
    """Coverage needed beyond the policies already in force.

    May be negative when the client is over-insured; callers decide whether
    to surface it.
    """
    policies = list(policies)
    return calculate_insurance_needs(needs).additional_coverage_needed - total_coverage(policies)


__all__ = [
    "InsuranceNeedsResult",
    "calculate_insurance_needs",
    "total_coverage",
    "total_premiums",
    "coverage_gap",
]
