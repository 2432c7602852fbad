"""Cashflow and balance sheet aggregates.

Totals are plain sums over record lists. Entries may be models or raw
mappings in any key style, and a malformed amount contributes zero instead
of failing the whole total.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, computed_field

from .models import LineItem
from .models.records import snake_key
from .parsing import ZERO, to_decimal

HUNDRED = Decimal("100")


def _field_value(entry: Any, field: str) -> Any:
    if isinstance(entry, Mapping):
        for key, value in entry.items():
            if isinstance(key, str) and snake_key(key) == field:
                return value
        return None
    return getattr(entry, field, None)


def sum_amounts(entries: Optional[Iterable[Any]], field: str = "amount") -> Decimal:
    """Sum one numeric field across a list of entries.

    >>> sum_amounts([{"amount": "100"}, {"amount": "abc"}, {"amount": 50}])
    Decimal('150')
    """
    if entries is None:
        return ZERO
    return sum((to_decimal(_field_value(entry, field)) for entry in entries), ZERO)


class CashflowSummary(BaseModel):
    """Income and expense totals."""

    total_income: Decimal
    total_expenses: Decimal

    @computed_field
    @property
    def net_income(self) -> Decimal:
        """Income minus expenses; negative when spending exceeds income."""
        return self.total_income - self.total_expenses

    @computed_field
    @property
    def savings_rate(self) -> Decimal:
        """Net income as a percentage of income (0 without income)."""
        if self.total_income == 0:
            return ZERO
        return (self.net_income / self.total_income) * HUNDRED


class BalanceSheetSummary(BaseModel):
    """Asset and liability totals."""

    total_assets: Decimal
    total_liabilities: Decimal

    @computed_field
    @property
    def net_worth(self) -> Decimal:
        """Assets minus liabilities; may be negative."""
        return self.total_assets - self.total_liabilities

    @computed_field
    @property
    def debt_to_asset_ratio(self) -> Decimal:
        """Liabilities as a percentage of assets (0 without assets)."""
        if self.total_assets == 0:
            return ZERO
        return (self.total_liabilities / self.total_assets) * HUNDRED


def summarize_cashflow(
    income: Optional[Iterable[Any]], expenses: Optional[Iterable[Any]]
) -> CashflowSummary:
    """Total a client's income sources and expenses."""
    return CashflowSummary(
        total_income=sum_amounts(income),
        total_expenses=sum_amounts(expenses),
    )


def summarize_balance_sheet(
    assets: Optional[Iterable[Any]], liabilities: Optional[Iterable[Any]]
) -> BalanceSheetSummary:
    """Total a client's assets and liabilities."""
    return BalanceSheetSummary(
        total_assets=sum_amounts(assets),
        total_liabilities=sum_amounts(liabilities),
    )


def largest_items(entries: Optional[Iterable[Any]], n: Optional[int] = None) -> list[LineItem]:
    """Return entries as LineItems, largest amount first.

    Args:
        entries: Line items or raw mappings.
        n: Keep only the first ``n`` items (all when None).
    """
    items = [
        entry if isinstance(entry, LineItem) else LineItem.model_validate(entry)
        for entry in (entries or [])
        if isinstance(entry, (LineItem, Mapping))
    ]
    items.sort(key=lambda item: item.amount, reverse=True)
    return items if n is None else items[:n]


__all__ = [
    "sum_amounts",
    "CashflowSummary",
    "BalanceSheetSummary",
    "summarize_cashflow",
    "summarize_balance_sheet",
    "largest_items",
]
