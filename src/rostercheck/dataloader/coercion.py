# src/rostercheck/dataloader/coercion.py
"""
@brief
Best-effort conversion of raw cell values into typed entity fields.

@details
Every coercer first normalizes the cell to a trimmed string and then never
raises: unparseable input degrades to an empty or default value. Correctness
of the resulting value is the validator's job (coerce-then-validate).
"""

from __future__ import annotations

import json
import math
import re
from collections.abc import Callable, Mapping
from typing import Any

from rostercheck.schemas.variants import RANGE_PATTERN

_LEADING_INT = re.compile(r"^[+-]?\d+")

DEFAULT_INT = 1


def normalize_cell(value: Any) -> str:
    """
    @brief
    Render any cell value as a trimmed string.

    @details
    None and NaN (empty spreadsheet cells) become "". Integral floats lose
    their ".0" so "3.0" from a spreadsheet reads as "3". Lists and dicts are
    serialized as JSON so the JSON-first coercers can read them back.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        if value.is_integer():
            return str(int(value))
    if isinstance(value, (list, tuple, dict)):
        try:
            return json.dumps(value)
        except (TypeError, ValueError):
            return str(value).strip()
    return str(value).strip()


def parse_int(text: str) -> int | None:
    """Leading-integer parse: '7' → 7, ' 3.0 ' → 3, '12abc' → 12, 'abc' → None."""
    match = _LEADING_INT.match(text.strip())
    if not match:
        return None
    try:
        return int(match.group())
    except ValueError:
        # beyond the interpreter's int string conversion limit
        return None


def _to_number(item: Any) -> int | float | None:
    if isinstance(item, bool):
        return int(item)
    if isinstance(item, int):
        return item
    if isinstance(item, str):
        try:
            item = float(item.strip())
        except ValueError:
            return None
    if isinstance(item, float):
        if math.isnan(item) or math.isinf(item):
            return None
        return int(item) if item.is_integer() else item
    return None


def _stringify(item: Any) -> str:
    if isinstance(item, str):
        return item
    if item is None:
        return "null"
    if isinstance(item, (list, dict)):
        return json.dumps(item)
    return normalize_cell(item)


def _json_array(text: str) -> list[Any] | None:
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, list) else None


def _split_commas(text: str) -> list[str]:
    return [piece.strip() for piece in text.split(",") if piece.strip()]


def coerce_string_list(value: Any) -> list[str]:
    """JSON array first, else comma-separated; '["a", "b"]' and 'a, b' both → ['a', 'b']."""
    text = normalize_cell(value)
    if not text:
        return []
    parsed = _json_array(text)
    if parsed is not None:
        return [_stringify(item) for item in parsed]
    return _split_commas(text)


def coerce_int_list(value: Any) -> list[int | float]:
    """
    JSON array first (non-numeric elements dropped), else comma-separated
    integers (unparseable pieces dropped).
    """
    text = normalize_cell(value)
    if not text:
        return []
    parsed = _json_array(text)
    if parsed is not None:
        return [n for n in (_to_number(item) for item in parsed) if n is not None]
    return [n for n in (parse_int(piece) for piece in _split_commas(text)) if n is not None]


def coerce_phases(value: Any) -> list[int | float] | str:
    """
    @brief
    Resolve a PreferredPhases cell.

    @details
    (a) "<start>-<end>" is kept verbatim as a range literal (not expanded).
    (b) A JSON array is read as numbers.
    (c) Otherwise comma-separated integers. If that yields nothing, the raw
        string is returned unchanged so the validator can flag it.
    An empty cell gives [].
    """
    text = normalize_cell(value)
    if not text:
        return []
    if RANGE_PATTERN.match(text):
        return text
    parsed = _json_array(text)
    if parsed is not None:
        return [n for n in (_to_number(item) for item in parsed) if n is not None]
    numbers = [n for n in (parse_int(piece) for piece in _split_commas(text)) if n is not None]
    return numbers if numbers else text


def coerce_int(value: Any, default: int = DEFAULT_INT) -> int:
    """Integer scalar; unparseable input becomes the default (1)."""
    parsed = parse_int(normalize_cell(value))
    return default if parsed is None else parsed


def coerce_text(value: Any) -> str:
    return normalize_cell(value)


FIELD_COERCERS: dict[str, Callable[[Any], Any]] = {
    # client
    "ClientID": coerce_text,
    "ClientName": coerce_text,
    "PriorityLevel": coerce_int,
    "RequestedTaskIDs": coerce_string_list,
    "GroupTag": coerce_text,
    "AttributesJSON": coerce_text,  # parsed later by the validator
    # worker
    "WorkerID": coerce_text,
    "WorkerName": coerce_text,
    "Skills": coerce_string_list,
    "AvailableSlots": coerce_int_list,
    "MaxLoadPerPhase": coerce_int,
    "WorkerGroup": coerce_text,
    "QualificationLevel": coerce_int,
    # task
    "TaskID": coerce_text,
    "TaskName": coerce_text,
    "Category": coerce_text,
    "Duration": coerce_int,
    "RequiredSkills": coerce_string_list,
    "PreferredPhases": coerce_phases,
    "MaxConcurrent": coerce_int,
}


def coerce_fields(fields: tuple[str, ...], raw: Mapping[str, Any]) -> dict[str, Any]:
    """
    @brief
    Coerce one canonical-keyed raw row into typed field values.

    @details
    Fields absent from the row are coerced from an empty cell, which yields
    the documented default ("" / [] / 1).
    """
    return {name: FIELD_COERCERS[name](raw.get(name)) for name in fields}


__all__ = [
    "FIELD_COERCERS",
    "coerce_fields",
    "coerce_int",
    "coerce_int_list",
    "coerce_phases",
    "coerce_string_list",
    "coerce_text",
    "normalize_cell",
    "parse_int",
]
