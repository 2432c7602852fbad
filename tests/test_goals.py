"""Tests for goal progress, time remaining and required savings."""

from datetime import date
from decimal import Decimal

import pytest

from prosperity_core.config import ProjectionSettings
from prosperity_core.goals import (
    GoalProgressCalculator,
    GoalStatus,
    calculate_progress,
    evaluate_goal,
    monthly_required,
    months_remaining,
    summarize_goals,
)
from prosperity_core.models import Goal, GoalPriority

TODAY = date(2025, 1, 1)


@pytest.fixture
def calculator() -> GoalProgressCalculator:
    return GoalProgressCalculator(ProjectionSettings())


@pytest.fixture
def goal_records() -> list:
    return [
        {
            "title": "College Fund",
            "targetAmount": "300000",
            "currentAmount": "85000",
            "targetDate": "2028-09-01",
            "priority": "high",
        },
        {
            "title": "Emergency Savings",
            "targetAmount": "30000",
            "currentAmount": "30000",
            "targetDate": "2024-06-01",
        },
        {
            "title": "Boat",
            "targetAmount": "50000",
            "currentAmount": "5000",
            "targetDate": "2024-12-01",
        },
    ]


class TestCalculateProgress:
    """Test suite for calculate_progress."""

    def test_partial_progress(self):
        assert calculate_progress(25, 100) == Decimal("25")

    def test_progress_is_capped(self):
        """Saving past the target reports 100, not more."""
        assert calculate_progress(150, 100) == Decimal("100")

    def test_zero_target_is_zero(self):
        assert calculate_progress(50, 0) == Decimal("0")

    @pytest.mark.parametrize("current,target", [(0, 100), (None, 100), ("abc", 100), (50, None)])
    def test_missing_values_are_zero(self, current, target):
        assert calculate_progress(current, target) == Decimal("0")


class TestMonthsRemaining:
    """Test suite for months_remaining."""

    @pytest.mark.parametrize(
        "target,expected",
        [
            ("2025-01-31", 1),
            ("2025-02-01", 2),
            ("2025-03-02", 2),
            ("2025-01-02", 1),
            ("2025-01-01", 0),
            ("2024-06-01", 0),
        ],
    )
    def test_thirty_day_months_rounded_up(self, target, expected):
        assert months_remaining(target, TODAY) == expected

    def test_missing_date_is_zero(self):
        assert months_remaining(None, TODAY) == 0
        assert months_remaining("someday", TODAY) == 0

    def test_custom_month_length(self):
        assert months_remaining("2025-01-31", TODAY, days_per_month=31) == 1
        assert months_remaining("2025-02-01", TODAY, days_per_month=31) == 1


class TestMonthlyRequired:
    """Test suite for monthly_required."""

    def test_spreads_remaining_amount(self):
        assert monthly_required(1000, 4000, "2025-03-02", TODAY) == Decimal("1500")

    def test_past_date_is_zero(self):
        """No months remain once the date has passed."""
        assert monthly_required(0, 4000, "2024-01-01", TODAY) == Decimal("0")

    def test_already_funded_is_zero(self):
        assert monthly_required(5000, 4000, "2026-01-01", TODAY) == Decimal("0")


class TestGoalProgressCalculator:
    """Per-goal evaluation and summaries."""

    def test_evaluate_record(self, calculator: GoalProgressCalculator, goal_records: list):
        result = calculator.evaluate(goal_records[0], TODAY)

        assert result.goal.priority == GoalPriority.HIGH
        assert result.amount_remaining == Decimal("215000")
        assert result.status == GoalStatus.ON_TRACK
        assert result.months_remaining > 0
        assert result.monthly_required == Decimal("215000") / result.months_remaining

    def test_complete_goal(self, calculator: GoalProgressCalculator, goal_records: list):
        result = calculator.evaluate(goal_records[1], TODAY)

        assert result.status == GoalStatus.COMPLETE
        assert result.progress == Decimal("100")
        assert result.monthly_required == Decimal("0")

    def test_overdue_goal(self, calculator: GoalProgressCalculator, goal_records: list):
        """Overdue and funded goals both need nothing monthly; status tells them apart."""
        result = calculator.evaluate(goal_records[2], TODAY)

        assert result.status == GoalStatus.OVERDUE
        assert result.monthly_required == Decimal("0")
        assert result.amount_remaining == Decimal("45000")

    def test_due_today(self, calculator: GoalProgressCalculator):
        result = calculator.evaluate({"targetAmount": 100, "targetDate": "2025-01-01"}, TODAY)

        assert result.status == GoalStatus.DUE

    def test_unscheduled_goal(self, calculator: GoalProgressCalculator):
        result = calculator.evaluate(Goal(title="Someday", target_amount=Decimal("100")), TODAY)

        assert result.status == GoalStatus.UNSCHEDULED
        assert result.months_remaining == 0

    def test_summarize(self, calculator: GoalProgressCalculator, goal_records: list):
        summary = calculator.summarize(goal_records, TODAY)

        assert len(summary.goals) == 3
        assert summary.total_target == Decimal("380000")
        assert summary.total_saved == Decimal("120000")
        assert summary.overall_progress == Decimal("120000") / Decimal("380000") * 100

    def test_summarize_skips_malformed_entries(self, calculator: GoalProgressCalculator):
        summary = calculator.summarize([{"targetAmount": 10}, "junk", None], TODAY)

        assert len(summary.goals) == 1

    def test_summarize_empty(self, calculator: GoalProgressCalculator):
        summary = calculator.summarize(None, TODAY)

        assert summary.goals == []
        assert summary.overall_progress == Decimal("0")

    def test_module_helpers(self, goal_records: list):
        assert evaluate_goal(goal_records[1], TODAY).status == GoalStatus.COMPLETE
        assert len(summarize_goals(goal_records, TODAY).goals) == 3

    def test_unknown_priority_defaults_to_medium(self):
        assert Goal.model_validate({"priority": "urgent"}).priority == GoalPriority.MEDIUM
