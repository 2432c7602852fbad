"""Shared base for models built from stored analysis and proposal records.

Records come back from the data store keyed in snake_case, from the portal's
forms keyed in camelCase, and some analysis tables carry an ``_fa7`` suffix
(``income_sources_fa7``). ``RecordModel`` folds all of these onto the
snake_case field names before validation so every section has one schema and
one set of defaults.
"""

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

TABLE_SUFFIX = "_fa7"

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z]+)([A-Z][a-z])")


def snake_key(key: str) -> str:
    """Convert a record key to snake_case.

    >>> snake_key("averageReturnPercentage")
    'average_return_percentage'
    >>> snake_key("annualCOI")
    'annual_coi'
    >>> snake_key("income_sources_fa7")
    'income_sources'
    """
    if key.endswith(TABLE_SUFFIX):
        key = key[: -len(TABLE_SUFFIX)]
    key = _ACRONYM_WORD.sub(r"\1_\2", key)
    key = _LOWER_UPPER.sub(r"\1_\2", key)
    return key.lower()


def snake_keys(value: Any) -> Any:
    """Recursively convert mapping keys to snake_case."""
    if isinstance(value, Mapping):
        return {
            snake_key(k) if isinstance(k, str) else k: snake_keys(v)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [snake_keys(item) for item in value]
    return value


def mapping_items(value: Any) -> list:
    """Keep only record-shaped entries of a list field.

    None becomes an empty list; entries that are neither mappings nor models
    are dropped rather than failing the whole record.
    """
    if value is None:
        return []
    if isinstance(value, (Mapping, BaseModel)):
        return [value]
    if not isinstance(value, (list, tuple)):
        return []
    return [item for item in value if isinstance(item, (Mapping, BaseModel))]


def to_identifier(value: Any) -> Any:
    """Keep int and str record ids; stringify anything else."""
    if value is None or isinstance(value, (int, str)):
        return value
    return str(value)


def to_text(value: Any) -> str:
    """Coerce an optional text field to a string."""
    if value is None:
        return ""
    return str(value)


class RecordModel(BaseModel):
    """Base model accepting snake_case, camelCase and suffixed record keys."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def normalize_record_keys(cls, data: Any) -> Any:
        """Fold record keys onto field names."""
        if isinstance(data, Mapping):
            return snake_keys(data)
        return data


__all__ = [
    "TABLE_SUFFIX",
    "snake_key",
    "snake_keys",
    "mapping_items",
    "to_identifier",
    "to_text",
    "RecordModel",
]
