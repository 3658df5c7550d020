"""Compiler utility functions.

Helpers for normalizing compiler input, resolving the identity key and
classifying shorthand field-query literals.
"""

import re
from datetime import date
from numbers import Number
from typing import Any, Dict, Mapping

from ...settings import settings as api_settings


def normalize_where_input(where: Any) -> Dict[str, Any]:
    """Normalize Q object or mapping to a query expression dict.

    Args:
        where: Q object (with .to_dict() method) or mapping

    Returns:
        Query expression dict ready for compilation

    Raises:
        TypeError: If input is neither Q object nor mapping
    """
    if hasattr(where, "to_dict") and callable(where.to_dict):
        return where.to_dict()
    elif isinstance(where, Mapping):
        return dict(where)
    else:
        raise TypeError(f"where parameter must be a Q object or dict, got {type(where).__name__}")


def get_actual_key(key: str, virtual_key: str) -> str:
    """Rewrite the virtual identity key to the backend identity field."""
    return api_settings.IDENTITY_FIELD if key == virtual_key else key


def field_path(key: str, virtual_key: str) -> str:
    """Return the `$`-prefixed aggregation path for a field name."""
    return "$" + get_actual_key(key, virtual_key)


def is_scalar(value: Any) -> bool:
    """Whether a field-query value is an equality shorthand (string, number, bool or date)."""
    return isinstance(value, (str, Number, date))


def is_pattern(value: Any) -> bool:
    return isinstance(value, re.Pattern)
