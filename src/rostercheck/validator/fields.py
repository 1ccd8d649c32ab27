# src/rostercheck/validator/fields.py
"""
Shape predicates shared by the validation passes.

Entities may arrive as pydantic models, unvalidated `model_construct()`
instances or plain mappings; every check reads fields through read_field().
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def read_field(entity: Any, name: str) -> Any:
    if isinstance(entity, Mapping):
        return entity.get(name)
    return getattr(entity, name, None)


def is_list_shaped(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_positive_int(value: Any) -> bool:
    """1, 7 and 3.0 qualify; 0, -2, 1.5, True and '3' do not."""
    if not is_number(value):
        return False
    if isinstance(value, float) and not value.is_integer():
        return False
    return value >= 1


def hashable_key(value: Any) -> Any:
    """Key for set membership; unhashable or exotic values fall back to repr()."""
    if value is None or isinstance(value, (str, int, float)):
        return value
    return repr(value)


def phase_key(value: Any) -> int | float | None:
    """Numeric phase as a dict key (2.0 → 2); non-numeric phases give None."""
    if not is_number(value):
        return None
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value
