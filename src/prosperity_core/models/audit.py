"""Audit trail models for calculation steps.

Calculators record each intermediate value they derive so a projection
printed on a proposal can be traced back to its inputs.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field


def _utc_now() -> datetime:
    """Return current UTC datetime with timezone info."""
    return datetime.now(timezone.utc)


class CalculationStep(BaseModel):
    """Single recorded calculation step.

    Attributes:
        timestamp: When this step was recorded (UTC)
        step: Name of the step (e.g., "year_3", "total_contributions")
        input_value: Expression or inputs the step was computed from
        output_value: Resulting value
        source: Rule or formula applied
        notes: Additional context, such as a clamp being applied
    """

    timestamp: datetime = Field(default_factory=_utc_now)
    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None

    def model_post_init(self, __context) -> None:
        """Ensure timestamp is timezone-aware."""
        if self.timestamp.tzinfo is None:
            object.__setattr__(
                self,
                "timestamp",
                self.timestamp.replace(tzinfo=timezone.utc),
            )


__all__ = ["CalculationStep"]
