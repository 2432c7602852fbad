"""Goal progress and required savings.

Months remaining use a fixed 30-day month, not calendar months, so a goal
due in 31 days counts as two months. The same approximation is used when
the required monthly savings are derived from it.
"""

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

import structlog
from pydantic import BaseModel, Field

from .config import ProjectionSettings
from .models import Goal
from .parsing import ZERO, to_date, to_decimal

logger = structlog.get_logger()

HUNDRED = Decimal("100")
DAYS_PER_MONTH = 30

GoalSource = Union[Goal, Mapping[str, Any]]


class GoalStatus(str, Enum):
    """Where a goal stands relative to its target date.

    A zero ``monthly_required`` means different things for a funded goal
    and a missed one; the status tells them apart.
    """

    COMPLETE = "complete"
    ON_TRACK = "on_track"
    DUE = "due"
    OVERDUE = "overdue"
    UNSCHEDULED = "unscheduled"


def calculate_progress(current_amount: Any, target_amount: Any) -> Decimal:
    """Percent of the target already saved, capped at 100.

    Returns 0 when either amount is missing or zero.
    """
    current = to_decimal(current_amount)
    target = to_decimal(target_amount)
    if not current or not target:
        return ZERO
    return min(HUNDRED, current / target * HUNDRED)


def months_remaining(
    target_date: Any,
    today: Optional[date] = None,
    days_per_month: int = DAYS_PER_MONTH,
) -> int:
    """Whole months left until the target date, rounded up, never negative.

    A missing or unreadable target date leaves no months.
    """
    target = to_date(target_date)
    if target is None:
        return 0
    today = today or date.today()
    days = (target - today).days
    months = -(-days // days_per_month)
    return max(0, months)


def monthly_required(
    current_amount: Any,
    target_amount: Any,
    target_date: Any,
    today: Optional[date] = None,
    days_per_month: int = DAYS_PER_MONTH,
) -> Decimal:
    """Monthly savings needed to reach the target by its date.

    Returns 0 when no months remain, including goals whose date has passed.
    """
    months = months_remaining(target_date, today, days_per_month)
    if months == 0:
        return ZERO
    needed = to_decimal(target_amount) - to_decimal(current_amount)
    return max(ZERO, needed / months)


class GoalProgress(BaseModel):
    """Derived metrics for a single goal."""

    goal: Goal
    progress: Decimal = Field(description="Percent of target saved, capped at 100")
    months_remaining: int = Field(ge=0)
    monthly_required: Decimal = Field(ge=Decimal("0"))
    amount_remaining: Decimal = Field(ge=Decimal("0"))
    status: GoalStatus


class GoalsSummary(BaseModel):
    """All goals of an analysis with combined totals."""

    goals: list[GoalProgress] = Field(default_factory=list)
    total_target: Decimal = ZERO
    total_saved: Decimal = ZERO
    overall_progress: Decimal = ZERO


class GoalProgressCalculator:
    """Evaluate goals against a reference date."""

    def __init__(self, settings: Optional[ProjectionSettings] = None):
        self.settings = settings or ProjectionSettings()

    def _status(self, goal: Goal, today: date) -> GoalStatus:
        if goal.target_amount > 0 and goal.current_amount >= goal.target_amount:
            return GoalStatus.COMPLETE
        if goal.target_date is None:
            return GoalStatus.UNSCHEDULED
        if goal.target_date == today:
            return GoalStatus.DUE
        if goal.target_date < today:
            return GoalStatus.OVERDUE
        return GoalStatus.ON_TRACK

    def evaluate(self, goal: GoalSource, today: Optional[date] = None) -> GoalProgress:
        """Compute progress, time left and required savings for one goal."""
        if not isinstance(goal, Goal):
            goal = Goal.model_validate(goal)
        today = today or date.today()
        days_per_month = self.settings.days_per_month

        return GoalProgress(
            goal=goal,
            progress=calculate_progress(goal.current_amount, goal.target_amount),
            months_remaining=months_remaining(goal.target_date, today, days_per_month),
            monthly_required=monthly_required(
                goal.current_amount,
                goal.target_amount,
                goal.target_date,
                today,
                days_per_month,
            ),
            amount_remaining=max(ZERO, goal.target_amount - goal.current_amount),
            status=self._status(goal, today),
        )

    def summarize(
        self, goals: Optional[Iterable[GoalSource]], today: Optional[date] = None
    ) -> GoalsSummary:
        """Evaluate every goal and total the targets and savings."""
        today = today or date.today()
        results = [
            self.evaluate(goal, today)
            for goal in (goals or [])
            if isinstance(goal, (Goal, Mapping))
        ]
        total_target = sum((r.goal.target_amount for r in results), ZERO)
        total_saved = sum((r.goal.current_amount for r in results), ZERO)

        overdue = sum(1 for r in results if r.status == GoalStatus.OVERDUE)
        if overdue:
            logger.info("goals_overdue", count=overdue, total=len(results))

        return GoalsSummary(
            goals=results,
            total_target=total_target,
            total_saved=total_saved,
            overall_progress=calculate_progress(total_saved, total_target),
        )


def evaluate_goal(
    goal: GoalSource,
    today: Optional[date] = None,
    settings: Optional[ProjectionSettings] = None,
) -> GoalProgress:
    """Convenience wrapper around GoalProgressCalculator.evaluate."""
    return GoalProgressCalculator(settings).evaluate(goal, today)


def summarize_goals(
    goals: Optional[Iterable[GoalSource]],
    today: Optional[date] = None,
    settings: Optional[ProjectionSettings] = None,
) -> GoalsSummary:
    """Convenience wrapper around GoalProgressCalculator.summarize."""
    return GoalProgressCalculator(settings).summarize(goals, today)


__all__ = [
    "DAYS_PER_MONTH",
    "GoalStatus",
    "GoalProgress",
    "GoalsSummary",
    "GoalProgressCalculator",
    "calculate_progress",
    "months_remaining",
    "monthly_required",
    "evaluate_goal",
    "summarize_goals",
]
