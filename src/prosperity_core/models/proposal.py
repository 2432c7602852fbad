"""Proposal and projection models.

A proposal pairs a client with a strategy, product and carrier, and carries
the contribution schedule that feeds the compound projection. Numeric fields
are coerced leniently, as they are everywhere in the engine.
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..parsing import ZERO, is_blank, to_decimal, to_int
from .audit import CalculationStep
from .records import RecordModel, snake_keys, to_text


class ProjectionInput(RecordModel):
    """Inputs to the compound-growth proposal projection.

    ``years_to_pay`` and ``average_return_percentage`` stay None when the
    proposal leaves them blank; the calculator then applies the configured
    form defaults. Explicit values, including zero, are used as given.
    """

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "initialLumpSum": "10000",
                    "monthlyContribution": "500",
                    "annualCOI": "1200",
                    "yearsToPay": "20",
                    "averageReturnPercentage": "6",
                    "firstYearBonus": "0",
                }
            ]
        }
    }

    initial_lump_sum: Decimal = ZERO
    monthly_contribution: Decimal = ZERO
    annual_coi: Decimal = Field(
        default=ZERO,
        description="Annual cost of insurance / fee deducted after growth each year",
    )
    years_to_pay: Optional[int] = Field(
        default=None,
        description="Number of annual compounding periods; None uses the configured default",
    )
    average_return_percentage: Optional[Decimal] = Field(
        default=None,
        description="Average annual return in percent (6 means 6%); None uses the configured default",
    )
    first_year_bonus: Decimal = ZERO

    @field_validator(
        "initial_lump_sum",
        "monthly_contribution",
        "annual_coi",
        "first_year_bonus",
        mode="before",
    )
    @classmethod
    def coerce_money(cls, v):
        """Contributions, fees and bonuses are never negative; below zero reads as zero."""
        return max(ZERO, to_decimal(v))

    @field_validator("years_to_pay", mode="before")
    @classmethod
    def coerce_years(cls, v):
        """Blank means unspecified; negative or unparsable years become zero.

        Years are whole compounding periods, so fractions truncate: ``"2.5"``
        runs two years and counts two years of contributions.
        """
        if is_blank(v):
            return None
        return max(0, to_int(v))

    @field_validator("average_return_percentage", mode="before")
    @classmethod
    def coerce_return(cls, v):
        if is_blank(v):
            return None
        return to_decimal(v)


class YearProjection(BaseModel):
    """One simulated year of a projection."""

    year: int = Field(ge=1)
    contributions: Decimal = Field(description="Contributions added during the year")
    growth: Decimal = Field(description="Return credited during the year (negative for losses)")
    coi: Decimal = Field(description="Cost of insurance deducted during the year")
    end_value: Decimal = Field(ge=Decimal("0"), description="Account value after the year's deduction")


class ProjectionResult(BaseModel):
    """Totals produced by the compound projection.

    ``growth`` is never negative: a projection that ends below what was paid
    in reports zero growth rather than a loss.
    """

    total_contributions: Decimal
    total_coi: Decimal
    final_value: Decimal = Field(ge=Decimal("0"))
    growth: Decimal = Field(ge=Decimal("0"))
    years_to_pay: int = Field(ge=0)
    average_return_percentage: Decimal
    schedule: list[YearProjection] = Field(default_factory=list)
    audit_log: list[CalculationStep] = Field(default_factory=list)


class Proposal(RecordModel):
    """A proposal prepared for a client.

    The projection inputs live alongside the descriptive fields in the stored
    record; they are gathered into ``projection`` on validation.
    """

    id: Optional[str] = None
    client_id: Optional[str] = None
    title: str = ""
    description: str = ""
    strategy: str = ""
    product_type: str = ""
    carrier: str = ""
    status: str = "draft"

    projection: ProjectionInput = Field(default_factory=ProjectionInput)

    death_benefit_amount: Decimal = ZERO
    living_benefits: Decimal = ZERO
    terminal_illness_benefit: Decimal = ZERO
    chronic_illness_benefit: Decimal = ZERO
    critical_illness_benefit: Decimal = ZERO
    average_monthly_cost: Decimal = ZERO
    ten_year_income: Decimal = ZERO
    lifetime_income: Decimal = ZERO

    @model_validator(mode="before")
    @classmethod
    def gather_projection_inputs(cls, data: Any) -> Any:
        """Build ``projection`` from the flat record when it is not nested."""
        if not isinstance(data, dict):
            return data
        data = snake_keys(data)
        if not isinstance(data.get("projection"), (dict, ProjectionInput)):
            data["projection"] = {
                key: data[key]
                for key in ProjectionInput.model_fields
                if key in data
            }
        return data

    @field_validator("id", "client_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return None if v is None else str(v)

    @field_validator(
        "title", "description", "strategy", "product_type", "carrier", mode="before"
    )
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)

    @field_validator("status", mode="before")
    @classmethod
    def coerce_status(cls, v):
        return to_text(v) or "draft"

    @field_validator(
        "death_benefit_amount",
        "living_benefits",
        "terminal_illness_benefit",
        "chronic_illness_benefit",
        "critical_illness_benefit",
        "average_monthly_cost",
        "ten_year_income",
        "lifetime_income",
        mode="before",
    )
    @classmethod
    def coerce_money(cls, v):
        return to_decimal(v)

    @property
    def document_id(self) -> str:
        """Short identifier printed on proposal documents."""
        return (self.id or "")[:8]


__all__ = [
    "ProjectionInput",
    "YearProjection",
    "ProjectionResult",
    "Proposal",
]
