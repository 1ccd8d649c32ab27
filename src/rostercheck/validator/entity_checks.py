# src/rostercheck/validator/entity_checks.py
"""
@brief
Per-entity structural checks (clients, workers, tasks).

@details
Every applicable check runs for every row; a missing id never prevents the
range or shape checks on the same row. Row indices are zero-based positions
in the respective collection. Duplicate ids are tracked with a running set,
so an id seen k times yields k-1 duplicate errors.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rostercheck.schemas.models import ValidationConfig
from rostercheck.schemas.variants import (
    RangeLiteral,
    RawJsonString,
    UnknownPhases,
    as_attributes,
    as_phase_spec,
)
from rostercheck.validator.fields import (
    hashable_key,
    is_list_shaped,
    is_number,
    is_positive_int,
    read_field,
)
from rostercheck.validator.issues import IssueCollector


def _check_identity(
    row: Any,
    index: int,
    issues: IssueCollector,
    seen: set[Any],
    *,
    entity: str,
    id_field: str,
    name_field: str,
    cfg: ValidationConfig,
) -> None:
    # (1) Missing id
    row_id = read_field(row, id_field)
    if not row_id:
        issues.error(
            f"Missing {id_field}",
            entity=entity,
            field=id_field,
            row_index=index,
            suggestions=[f"Provide a unique, non-empty {id_field}"],
        )

    # (2) Optional display-name requirement
    if cfg.require_display_names and not read_field(row, name_field):
        issues.error(
            f"Missing {name_field}",
            entity=entity,
            field=name_field,
            row_index=index,
            suggestions=[f"Fill in {name_field}"],
        )

    # (3) Duplicate id against the rows seen so far
    key = hashable_key(row_id)
    if key in seen:
        issues.error(
            f"Duplicate {id_field}: {row_id}",
            entity=entity,
            field=id_field,
            row_index=index,
            suggestions=[f"Rename or remove the repeated {id_field}"],
        )
    seen.add(key)


def check_clients(
    clients: Sequence[Any], issues: IssueCollector, cfg: ValidationConfig
) -> None:
    seen: set[Any] = set()
    low, high = cfg.priority_min, cfg.priority_max

    for index, client in enumerate(clients):
        _check_identity(
            client,
            index,
            issues,
            seen,
            entity="client",
            id_field="ClientID",
            name_field="ClientName",
            cfg=cfg,
        )

        priority = read_field(client, "PriorityLevel")
        if not (is_number(priority) and low <= priority <= high):
            issues.error(
                f"PriorityLevel must be between {low}-{high}",
                entity="client",
                field="PriorityLevel",
                row_index=index,
                suggestions=[f"Use an integer from {low} to {high}"],
            )

        if not is_list_shaped(read_field(client, "RequestedTaskIDs")):
            issues.error(
                "RequestedTaskIDs must be an array",
                entity="client",
                field="RequestedTaskIDs",
                row_index=index,
                suggestions=['Use a comma-separated list or JSON array, e.g. "T1,T2"'],
            )

        attributes = as_attributes(read_field(client, "AttributesJSON"))
        if isinstance(attributes, RawJsonString) and not attributes.is_valid():
            issues.error(
                "Invalid JSON in AttributesJSON",
                entity="client",
                field="AttributesJSON",
                row_index=index,
                suggestions=['Use a JSON object such as {"location": "NY"}'],
            )


def check_workers(
    workers: Sequence[Any], issues: IssueCollector, cfg: ValidationConfig
) -> None:
    seen: set[Any] = set()

    for index, worker in enumerate(workers):
        _check_identity(
            worker,
            index,
            issues,
            seen,
            entity="worker",
            id_field="WorkerID",
            name_field="WorkerName",
            cfg=cfg,
        )

        if not is_list_shaped(read_field(worker, "Skills")):
            issues.error(
                "Skills must be an array",
                entity="worker",
                field="Skills",
                row_index=index,
                suggestions=['Use a comma-separated list, e.g. "coding,testing"'],
            )

        slots = read_field(worker, "AvailableSlots")
        if not is_list_shaped(slots):
            issues.error(
                "AvailableSlots must be an array",
                entity="worker",
                field="AvailableSlots",
                row_index=index,
                suggestions=['Use a JSON array of phase numbers, e.g. "[1,2,3]"'],
            )
        elif not all(is_positive_int(slot) for slot in slots):
            issues.error(
                "AvailableSlots must contain positive integers",
                entity="worker",
                field="AvailableSlots",
                row_index=index,
                suggestions=["Remove zero, negative or fractional phase numbers"],
            )

        max_load = read_field(worker, "MaxLoadPerPhase")
        if not is_positive_int(max_load):
            issues.error(
                "MaxLoadPerPhase must be a positive integer",
                entity="worker",
                field="MaxLoadPerPhase",
                row_index=index,
                suggestions=["Use an integer of at least 1"],
            )

        # Nominal over-commitment against the worker's own availability
        if is_list_shaped(slots) and is_number(max_load) and len(slots) < max_load:
            issues.warning(
                "Worker has more max load than available slots",
                entity="worker",
                field="MaxLoadPerPhase",
                row_index=index,
                suggestions=["Lower MaxLoadPerPhase or add AvailableSlots"],
            )


def check_tasks(tasks: Sequence[Any], issues: IssueCollector, cfg: ValidationConfig) -> None:
    seen: set[Any] = set()

    for index, task in enumerate(tasks):
        _check_identity(
            task,
            index,
            issues,
            seen,
            entity="task",
            id_field="TaskID",
            name_field="TaskName",
            cfg=cfg,
        )

        if not is_positive_int(read_field(task, "Duration")):
            issues.error(
                "Duration must be a positive integer",
                entity="task",
                field="Duration",
                row_index=index,
                suggestions=["Use a whole number of phases, at least 1"],
            )

        if not is_list_shaped(read_field(task, "RequiredSkills")):
            issues.error(
                "RequiredSkills must be an array",
                entity="task",
                field="RequiredSkills",
                row_index=index,
                suggestions=['Use a comma-separated list, e.g. "coding,testing"'],
            )

        if not is_positive_int(read_field(task, "MaxConcurrent")):
            issues.error(
                "MaxConcurrent must be a positive integer",
                entity="task",
                field="MaxConcurrent",
                row_index=index,
                suggestions=["Use an integer of at least 1"],
            )

        phases = as_phase_spec(read_field(task, "PreferredPhases"))
        if isinstance(phases, RangeLiteral) and not phases.is_well_formed:
            issues.error(
                "Invalid PreferredPhases format",
                entity="task",
                field="PreferredPhases",
                row_index=index,
                suggestions=['Use a range like "1-3" or a list like "[1,2,3]"'],
            )
        elif isinstance(phases, UnknownPhases):
            issues.error(
                "PreferredPhases must be an array or range string",
                entity="task",
                field="PreferredPhases",
                row_index=index,
                suggestions=['Use a range like "1-3" or a list like "[1,2,3]"'],
            )


def validate_entities(
    clients: Sequence[Any],
    workers: Sequence[Any],
    tasks: Sequence[Any],
    issues: IssueCollector,
    cfg: ValidationConfig,
) -> None:
    """Run the client, worker and task passes in that order."""
    check_clients(clients, issues, cfg)
    check_workers(workers, issues, cfg)
    check_tasks(tasks, issues, cfg)
