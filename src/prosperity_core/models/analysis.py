"""Financial analysis record models.

This module defines the canonical shape of a client's financial analysis:
- Cashflow (income sources and expenses)
- Balance sheet (assets and liabilities)
- Insurance policies and the insurance needs calculator
- Financial goals
- Estate planning checklist and legacy wishes

Every field has an explicit default, so calculators can rely on a fully
populated record no matter how sparse the stored row was. Numeric fields are
coerced leniently: anything unparsable becomes zero instead of failing
validation.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import Field, field_validator, model_validator

from ..parsing import ZERO, is_blank, to_date, to_decimal, to_int
from .records import RecordModel, mapping_items, snake_keys, to_identifier, to_text


class GoalPriority(str, Enum):
    """Priority assigned to a financial goal."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class LineItem(RecordModel):
    """A single cashflow or balance sheet entry.

    Income sources, expenses, assets and liabilities all share this shape.
    Totals are plain sums of ``amount``; ``frequency`` is informational.
    """

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "category": "housing",
                    "description": "Mortgage or Rent",
                    "amount": "3200",
                    "frequency": "monthly",
                }
            ]
        }
    }

    id: Optional[Union[int, str]] = None
    category: str = ""
    description: str = ""
    amount: Decimal = Field(
        default=ZERO,
        description="Entry amount; unparsable values are treated as zero",
    )
    frequency: Optional[str] = None
    interest_rate: Optional[Decimal] = Field(
        default=None,
        description="Annual interest rate (percent) for liabilities",
    )

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return to_identifier(v)

    @field_validator("category", "description", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, v):
        """Coerce amounts to Decimal, defaulting to zero."""
        return to_decimal(v)

    @field_validator("interest_rate", mode="before")
    @classmethod
    def coerce_interest_rate(cls, v):
        if is_blank(v):
            return None
        return to_decimal(v)


class InsurancePolicy(RecordModel):
    """An in-force insurance policy held by the client."""

    id: Optional[Union[int, str]] = None
    carrier: str = ""
    policy_type: str = ""
    coverage_amount: Decimal = ZERO
    annual_premium: Decimal = ZERO
    issue_date: Optional[date] = None
    beneficiary: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return to_identifier(v)

    @field_validator("carrier", "policy_type", "beneficiary", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)

    @field_validator("coverage_amount", "annual_premium", mode="before")
    @classmethod
    def coerce_money(cls, v):
        return to_decimal(v)

    @field_validator("issue_date", mode="before")
    @classmethod
    def coerce_issue_date(cls, v):
        return to_date(v)


class InsuranceNeedsInput(RecordModel):
    """Inputs to the income-replacement insurance needs calculation.

    Needs are ``annual_income * years_to_replace + final_expenses +
    education_fund``; resources are ``existing_coverage + liquid_assets +
    retirement_accounts``. Missing values count as zero.
    """

    annual_income: Decimal = ZERO
    years_to_replace: Decimal = ZERO
    final_expenses: Decimal = ZERO
    education_fund: Decimal = ZERO
    existing_coverage: Decimal = ZERO
    liquid_assets: Decimal = ZERO
    retirement_accounts: Decimal = ZERO

    @field_validator(
        "annual_income",
        "years_to_replace",
        "final_expenses",
        "education_fund",
        "existing_coverage",
        "liquid_assets",
        "retirement_accounts",
        mode="before",
    )
    @classmethod
    def coerce_money(cls, v):
        return to_decimal(v)


class Goal(RecordModel):
    """A savings goal with a target amount and date."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "title": "College Fund",
                    "target_amount": "300000",
                    "current_amount": "85000",
                    "target_date": "2028-09-01",
                    "priority": "medium",
                    "category": "Education",
                }
            ]
        }
    }

    id: Optional[Union[int, str]] = None
    title: str = ""
    description: str = ""
    category: str = ""
    target_amount: Decimal = ZERO
    current_amount: Decimal = ZERO
    target_date: Optional[date] = None
    priority: GoalPriority = GoalPriority.MEDIUM

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return to_identifier(v)

    @field_validator("title", "description", "category", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)

    @field_validator("target_amount", "current_amount", mode="before")
    @classmethod
    def coerce_money(cls, v):
        return to_decimal(v)

    @field_validator("target_date", mode="before")
    @classmethod
    def coerce_target_date(cls, v):
        return to_date(v)

    @field_validator("priority", mode="before")
    @classmethod
    def coerce_priority(cls, v):
        """Unknown or missing priorities fall back to medium."""
        if isinstance(v, GoalPriority):
            return v
        text = to_text(v).strip().lower()
        try:
            return GoalPriority(text)
        except ValueError:
            return GoalPriority.MEDIUM


class ChecklistItem(RecordModel):
    """State of one estate planning checklist item."""

    completed: bool = False
    last_updated: Optional[date] = None
    notes: str = ""

    @field_validator("completed", mode="before")
    @classmethod
    def coerce_completed(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in {"true", "yes", "1", "y"}
        return bool(v)

    @field_validator("last_updated", mode="before")
    @classmethod
    def coerce_last_updated(cls, v):
        return to_date(v)

    @field_validator("notes", mode="before")
    @classmethod
    def coerce_notes(cls, v):
        return to_text(v)


ESTATE_CHECKLIST_LABELS: dict[str, str] = {
    "will": "Last Will & Testament",
    "power_of_attorney": "Power of Attorney",
    "healthcare_directive": "Healthcare Directive",
    "trust": "Trust Documents",
    "beneficiary_designations": "Beneficiary Designations",
    "guardianship": "Guardianship Documents",
    "emergency_fund": "Emergency Fund",
    "tax_planning": "Tax Planning Strategy",
}


class EstateChecklist(RecordModel):
    """The eight estate planning items tracked for every client."""

    will: ChecklistItem = Field(default_factory=ChecklistItem)
    power_of_attorney: ChecklistItem = Field(default_factory=ChecklistItem)
    healthcare_directive: ChecklistItem = Field(default_factory=ChecklistItem)
    trust: ChecklistItem = Field(default_factory=ChecklistItem)
    beneficiary_designations: ChecklistItem = Field(default_factory=ChecklistItem)
    guardianship: ChecklistItem = Field(default_factory=ChecklistItem)
    emergency_fund: ChecklistItem = Field(default_factory=ChecklistItem)
    tax_planning: ChecklistItem = Field(default_factory=ChecklistItem)

    @model_validator(mode="before")
    @classmethod
    def drop_malformed_items(cls, data: Any) -> Any:
        """Replace non-mapping item values with an empty item."""
        if isinstance(data, dict):
            data = snake_keys(data)
            return {
                key: value
                for key, value in data.items()
                if key not in ESTATE_CHECKLIST_LABELS
                or isinstance(value, (dict, ChecklistItem))
            }
        if data is None:
            return {}
        return data

    def items(self) -> list[tuple[str, ChecklistItem]]:
        """Return (key, item) pairs in checklist order."""
        return [(key, getattr(self, key)) for key in ESTATE_CHECKLIST_LABELS]


class ClientProfile(RecordModel):
    """Client identity details printed on reports."""

    id: Optional[str] = None
    name: str = ""
    email: str = ""
    phone: str = ""
    date_of_birth: Optional[date] = None
    spouse_name: Optional[str] = None
    children: int = 0

    @model_validator(mode="before")
    @classmethod
    def collect_spouse_and_children(cls, data: Any) -> Any:
        """Read the spouse name from any of the shapes clients are stored in."""
        if not isinstance(data, dict):
            return data
        data = snake_keys(data)
        if not data.get("spouse_name"):
            for key in ("spouse", "spouse_info"):
                nested = data.get(key)
                if isinstance(nested, dict) and nested.get("name"):
                    data["spouse_name"] = nested["name"]
                    break
        children = data.get("children")
        if isinstance(children, (list, tuple)):
            data["children"] = len(children)
        return data

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, v):
        return None if v is None else str(v)

    @field_validator("name", "email", "phone", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def coerce_date_of_birth(cls, v):
        return to_date(v)

    @field_validator("children", mode="before")
    @classmethod
    def coerce_children(cls, v):
        return max(0, to_int(v))

    def age_on(self, today: date) -> Optional[int]:
        """Age in whole years on ``today``, or None without a birth date."""
        if self.date_of_birth is None:
            return None
        born = self.date_of_birth
        age = today.year - born.year
        if (today.month, today.day) < (born.month, born.day):
            age -= 1
        return age


class AdvisorProfile(RecordModel):
    """The financial professional presenting a proposal."""

    name: str = "Not Assigned"
    email: str = ""
    phone: str = ""

    @model_validator(mode="before")
    @classmethod
    def fall_back_to_full_name(cls, data: Any) -> Any:
        if isinstance(data, dict):
            data = snake_keys(data)
            if not data.get("name") and data.get("full_name"):
                data["name"] = data["full_name"]
            if not data.get("name"):
                data.pop("name", None)
        return data

    @field_validator("email", "phone", mode="before")
    @classmethod
    def coerce_text(cls, v):
        return to_text(v)


class FinancialAnalysis(RecordModel):
    """A client's complete financial analysis record.

    Build one from a stored row with ``FinancialAnalysis.from_record``; any
    missing section is default-constructed.
    """

    id: Optional[str] = None
    client_id: Optional[str] = None
    income_sources: list[LineItem] = Field(default_factory=list)
    expenses: list[LineItem] = Field(default_factory=list)
    assets: list[LineItem] = Field(default_factory=list)
    liabilities: list[LineItem] = Field(default_factory=list)
    insurance_policies: list[InsurancePolicy] = Field(default_factory=list)
    insurance_calculator: InsuranceNeedsInput = Field(default_factory=InsuranceNeedsInput)
    financial_goals: list[Goal] = Field(default_factory=list)
    estate_checklist: EstateChecklist = Field(default_factory=EstateChecklist)
    legacy_wishes: str = ""

    @field_validator("id", "client_id", mode="before")
    @classmethod
    def coerce_ids(cls, v):
        return None if v is None else str(v)

    @field_validator(
        "income_sources",
        "expenses",
        "assets",
        "liabilities",
        "insurance_policies",
        "financial_goals",
        mode="before",
    )
    @classmethod
    def keep_record_entries(cls, v):
        return mapping_items(v)

    @field_validator("insurance_calculator", "estate_checklist", mode="before")
    @classmethod
    def default_missing_section(cls, v):
        if v is None or not isinstance(v, (dict, RecordModel)):
            return {}
        return v

    @field_validator("legacy_wishes", mode="before")
    @classmethod
    def coerce_legacy_wishes(cls, v):
        return to_text(v)

    @classmethod
    def from_record(cls, record: Optional[dict[str, Any]]) -> "FinancialAnalysis":
        """Build an analysis from a stored record, tolerating any key style."""
        return cls.model_validate(record or {})


__all__ = [
    "GoalPriority",
    "LineItem",
    "InsurancePolicy",
    "InsuranceNeedsInput",
    "Goal",
    "ChecklistItem",
    "ESTATE_CHECKLIST_LABELS",
    "EstateChecklist",
    "ClientProfile",
    "AdvisorProfile",
    "FinancialAnalysis",
]
