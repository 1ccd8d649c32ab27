# src/rostercheck/dataloader/schema_inference.py
"""
@brief
Entity-type detection and header-to-field mapping for uploaded tables.

@details
Both operations are deterministic pure functions of the header list.
Headers are compared after normalization (lowercase, no underscores,
whitespace or hyphens), so "Client ID", "client_id" and "ClientID" all
match the canonical ClientID field.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from rostercheck.schemas.models import EntityType

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[_\s\-]+")

EXPECTED_FIELDS: dict[str, tuple[str, ...]] = {
    "client": (
        "ClientID",
        "ClientName",
        "PriorityLevel",
        "RequestedTaskIDs",
        "GroupTag",
        "AttributesJSON",
    ),
    "worker": (
        "WorkerID",
        "WorkerName",
        "Skills",
        "AvailableSlots",
        "MaxLoadPerPhase",
        "WorkerGroup",
        "QualificationLevel",
    ),
    "task": (
        "TaskID",
        "TaskName",
        "Category",
        "Duration",
        "RequiredSkills",
        "PreferredPhases",
        "MaxConcurrent",
    ),
}

# Disjoint marker sets, checked in this order; first hit wins. Name, group-tag,
# attribute, qualification and category headers are not markers.
ENTITY_MARKERS: tuple[tuple[EntityType, frozenset[str]], ...] = (
    ("client", frozenset({"clientid", "prioritylevel", "requestedtaskids"})),
    (
        "worker",
        frozenset({"workerid", "skills", "availableslots", "maxloadperphase", "workergroup"}),
    ),
    (
        "task",
        frozenset({"taskid", "duration", "requiredskills", "preferredphases", "maxconcurrent"}),
    ),
)

# Second-tier aliases, consulted only for fields the exact match left unmapped.
HEADER_SYNONYMS: dict[str, dict[str, tuple[str, ...]]] = {
    "client": {
        "ClientID": ("id",),
        "ClientName": ("name",),
        "PriorityLevel": ("priority",),
        "RequestedTaskIDs": ("tasks", "taskids"),
        "GroupTag": ("group",),
        "AttributesJSON": ("attributes",),
    },
    "worker": {
        "WorkerID": ("id",),
        "WorkerName": ("name",),
        "AvailableSlots": ("slots",),
        "MaxLoadPerPhase": ("maxload",),
        "WorkerGroup": ("group",),
        "QualificationLevel": ("level", "qualification"),
    },
    "task": {
        "TaskID": ("id",),
        "TaskName": ("name",),
        "RequiredSkills": ("skills",),
        "PreferredPhases": ("phases",),
        "MaxConcurrent": ("concurrent",),
    },
}


def normalize_header(header: Any) -> str:
    """Lowercase and drop separators: 'Max_Load Per-Phase' → 'maxloadperphase'."""
    if header is None:
        return ""
    return _SEPARATORS.sub("", str(header).strip().lower())


def detect_entity_type(headers: Iterable[Any], default: EntityType = "client") -> EntityType:
    """
    @brief
    Decide which entity a table holds from its header row.

    @details
    Marker sets are tested client → worker → task and the first set with any
    normalized header in it wins. A header row that weakly matches several
    entities therefore resolves to the earliest one. No match returns the
    default ("client" unless configured otherwise).
    """
    normalized = {normalize_header(h) for h in headers}
    for entity, markers in ENTITY_MARKERS:
        if normalized & markers:
            return entity
    logger.debug("No entity markers in headers; defaulting to %s", default)
    return default


def expected_fields(entity: str) -> tuple[str, ...]:
    return EXPECTED_FIELDS.get(entity, ())


def build_header_mapping(
    headers: Sequence[Any], entity: str, *, use_synonyms: bool = True
) -> dict[str, str]:
    """
    @brief
    Map canonical field names onto the header strings actually present.

    @details
    (1) Exact tier: a header whose normalized form equals the normalized
        canonical name. The first such header wins.
    (2) Synonym tier (optional): for fields still unmapped, the first unclaimed
        header matching one of the field's aliases.
    Fields with no match are left out of the mapping; coercion substitutes
    defaults for them.

    @returns
        dict canonical_field → provided header, in canonical field order.
    """
    present: list[tuple[str, str]] = [
        (str(h), normalize_header(h)) for h in headers if normalize_header(h)
    ]
    fields = expected_fields(entity)
    mapping: dict[str, str] = {}

    # (1) Exact normalized match
    for name in fields:
        target = normalize_header(name)
        for original, norm in present:
            if norm == target:
                mapping[name] = original
                break

    # (2) Synonym fallback for the remaining fields
    if use_synonyms:
        claimed = set(mapping.values())
        for name, aliases in HEADER_SYNONYMS.get(entity, {}).items():
            if name in mapping:
                continue
            for original, norm in present:
                if original not in claimed and norm in aliases:
                    mapping[name] = original
                    claimed.add(original)
                    logger.debug("Header %r mapped to %s via synonym", original, name)
                    break

    missing = [name for name in fields if name not in mapping]
    if missing:
        logger.warning("Unmapped %s fields (defaults will apply): %s", entity, ", ".join(missing))

    return {name: mapping[name] for name in fields if name in mapping}


def sanitize_mapping(mapping: Mapping[str, Any], entity: str) -> dict[str, str]:
    """
    @brief
    Clean an externally supplied mapping (e.g. from an AI assistant).

    @details
    Keeps only canonical fields of the entity whose target is a non-empty
    string; null or blank targets are dropped exactly as unmapped fields.
    Targets are trimmed, matching the trimmed header names of the rows.
    """
    fields = expected_fields(entity)
    return {
        name: value.strip()
        for name, value in mapping.items()
        if name in fields and isinstance(value, str) and value.strip()
    }


__all__ = [
    "ENTITY_MARKERS",
    "EXPECTED_FIELDS",
    "HEADER_SYNONYMS",
    "build_header_mapping",
    "detect_entity_type",
    "expected_fields",
    "normalize_header",
    "sanitize_mapping",
]
