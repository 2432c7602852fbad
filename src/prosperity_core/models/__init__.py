"""Record and result models for prosperity-core.

This package provides:
- Financial analysis records: cashflow, balance sheet, insurance, goals,
  estate checklist (analysis.py)
- Proposal records and projection inputs/results (proposal.py)
- Calculation audit trail (audit.py)
- Record key normalization shared by all record models (records.py)
"""

from prosperity_core.models.audit import CalculationStep
from prosperity_core.models.analysis import (
    ESTATE_CHECKLIST_LABELS,
    AdvisorProfile,
    ChecklistItem,
    ClientProfile,
    EstateChecklist,
    FinancialAnalysis,
    Goal,
    GoalPriority,
    InsuranceNeedsInput,
    InsurancePolicy,
    LineItem,
)
from prosperity_core.models.proposal import (
    ProjectionInput,
    ProjectionResult,
    Proposal,
    YearProjection,
)
from prosperity_core.models.records import RecordModel, snake_key, snake_keys

__all__ = [
    # Audit
    "CalculationStep",
    # Analysis records
    "ESTATE_CHECKLIST_LABELS",
    "AdvisorProfile",
    "ChecklistItem",
    "ClientProfile",
    "EstateChecklist",
    "FinancialAnalysis",
    "Goal",
    "GoalPriority",
    "InsuranceNeedsInput",
    "InsurancePolicy",
    "LineItem",
    # Proposals
    "ProjectionInput",
    "ProjectionResult",
    "Proposal",
    "YearProjection",
    # Record helpers
    "RecordModel",
    "snake_key",
    "snake_keys",
]
