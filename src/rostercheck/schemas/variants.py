# src/rostercheck/schemas/variants.py
"""
@brief
Tagged variants for the two string-or-structure entity fields.

@details
Task.PreferredPhases is either a range literal ("2-5") or an explicit phase
list; Client.AttributesJSON is either a raw JSON string or a parsed object.
Consumers go through as_phase_spec() / as_attributes() and branch on the
variant type instead of probing the raw value.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

RANGE_PATTERN = re.compile(r"^\d+-\d+$")


@dataclass(frozen=True, slots=True)
class RangeLiteral:
    """PreferredPhases given as text, e.g. "2-5" (inclusive)."""

    text: str

    @property
    def is_well_formed(self) -> bool:
        return bool(RANGE_PATTERN.match(self.text))

    def expand(self) -> list[int]:
        """Inclusive expansion; malformed or descending ranges expand to []."""
        if not self.is_well_formed:
            return []
        try:
            start, end = (int(part) for part in self.text.split("-"))
        except ValueError:
            return []
        return list(range(start, end + 1))


@dataclass(frozen=True, slots=True)
class ExplicitPhases:
    """PreferredPhases given as an explicit list of phase numbers."""

    phases: tuple[Any, ...]


@dataclass(frozen=True, slots=True)
class UnknownPhases:
    """PreferredPhases that is neither text nor a list."""

    value: Any


PhaseSpec = RangeLiteral | ExplicitPhases | UnknownPhases


@dataclass(frozen=True, slots=True)
class RawJsonString:
    """AttributesJSON still in its serialized form."""

    text: str

    def is_valid(self) -> bool:
        try:
            json.loads(self.text)
        except (ValueError, RecursionError):
            return False
        return True


@dataclass(frozen=True, slots=True)
class ParsedObject:
    """AttributesJSON already deserialized by the caller."""

    data: Any


AttributesSpec = RawJsonString | ParsedObject


def as_phase_spec(value: Any) -> PhaseSpec:
    if isinstance(value, str):
        return RangeLiteral(value)
    if isinstance(value, (list, tuple)):
        return ExplicitPhases(tuple(value))
    return UnknownPhases(value)


def as_attributes(value: Any) -> AttributesSpec:
    if isinstance(value, str):
        return RawJsonString(value)
    return ParsedObject(value)


def expand_phase_range(value: str | Sequence[int]) -> list[int]:
    """
    @brief
    Resolve a PreferredPhases value to an explicit phase list.

    @details
    Lists pass through unchanged. Range literals expand inclusively
    ("2-5" → [2, 3, 4, 5]). Other strings are tried as a JSON array of
    integers; anything unparseable yields [].
    """
    spec = as_phase_spec(value)
    if isinstance(spec, ExplicitPhases):
        return list(spec.phases)
    if isinstance(spec, UnknownPhases):
        return []
    if spec.is_well_formed:
        return spec.expand()
    try:
        parsed = json.loads(spec.text)
    except (ValueError, RecursionError):
        return []
    if not isinstance(parsed, list):
        return []
    return [p for p in parsed if isinstance(p, int) and not isinstance(p, bool)]


__all__ = [
    "RANGE_PATTERN",
    "AttributesSpec",
    "ExplicitPhases",
    "ParsedObject",
    "PhaseSpec",
    "RangeLiteral",
    "RawJsonString",
    "UnknownPhases",
    "as_attributes",
    "as_phase_spec",
    "expand_phase_range",
]
