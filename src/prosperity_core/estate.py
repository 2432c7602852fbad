"""Estate planning checklist progress."""

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional, Union

from pydantic import BaseModel, Field

from .models import ESTATE_CHECKLIST_LABELS, EstateChecklist

HUNDRED = Decimal("100")

ChecklistSource = Union[EstateChecklist, Mapping[str, Any], None]


class OutstandingItem(BaseModel):
    key: str
    label: str
    notes: str = ""


class EstateProgress(BaseModel):
    """How many of the checklist items are in place."""

    completed: int = Field(ge=0)
    total: int = Field(ge=0)
    percentage: Decimal
    outstanding: list[OutstandingItem] = Field(default_factory=list)


def _coerce_checklist(checklist: ChecklistSource) -> EstateChecklist:
    if isinstance(checklist, EstateChecklist):
        return checklist
    return EstateChecklist.model_validate(checklist or {})


def outstanding_items(checklist: ChecklistSource) -> list[OutstandingItem]:
    """Checklist items not yet completed, in checklist order."""
    checklist = _coerce_checklist(checklist)
    return [
        OutstandingItem(key=key, label=ESTATE_CHECKLIST_LABELS[key], notes=item.notes)
        for key, item in checklist.items()
        if not item.completed
    ]


def completion(checklist: ChecklistSource) -> EstateProgress:
    """Count completed items out of the fixed checklist."""
    checklist = _coerce_checklist(checklist)
    total = len(ESTATE_CHECKLIST_LABELS)
    completed = sum(1 for _, item in checklist.items() if item.completed)
    return EstateProgress(
        completed=completed,
        total=total,
        percentage=Decimal(completed) / Decimal(total) * HUNDRED,
        outstanding=outstanding_items(checklist),
    )


def is_completed(checklist: ChecklistSource, key: str) -> bool:
    """Whether a single checklist item is done; unknown keys are not."""
    checklist = _coerce_checklist(checklist)
    item: Optional[Any] = getattr(checklist, key, None) if key in ESTATE_CHECKLIST_LABELS else None
    return bool(item and item.completed)


__all__ = [
    "OutstandingItem",
    "EstateProgress",
    "completion",
    "outstanding_items",
    "is_completed",
]
