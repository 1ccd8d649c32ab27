# src/rostercheck/validator/cross_reference.py
"""
@brief
Referential integrity across entity collections.

@details
Needs the complete worker and task collections, so it runs after the
per-entity pass. One aggregated error per offending row lists all of its
unresolved references.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rostercheck.validator.fields import hashable_key, is_list_shaped, read_field
from rostercheck.validator.issues import IssueCollector


def _unresolved(values: Sequence[Any], known: set[Any]) -> list[str]:
    """Values missing from `known`, first-seen order, without repeats."""
    missing: list[str] = []
    reported: set[Any] = set()
    for value in values:
        key = hashable_key(value)
        if key in known or key in reported:
            continue
        reported.add(key)
        missing.append(str(value))
    return missing


def check_cross_references(
    clients: Sequence[Any],
    workers: Sequence[Any],
    tasks: Sequence[Any],
    issues: IssueCollector,
) -> None:
    # (1) Client → task references
    task_ids = {hashable_key(read_field(t, "TaskID")) for t in tasks}
    for index, client in enumerate(clients):
        requested = read_field(client, "RequestedTaskIDs")
        if not is_list_shaped(requested):
            continue
        unknown = _unresolved(requested, task_ids)
        if unknown:
            issues.error(
                f"Unknown task references: {', '.join(unknown)}",
                entity="client",
                field="RequestedTaskIDs",
                row_index=index,
                suggestions=["Remove the references or add the missing tasks"],
            )

    # (2) Task → worker skill coverage
    skills: set[Any] = set()
    for worker in workers:
        held = read_field(worker, "Skills")
        if is_list_shaped(held):
            skills.update(hashable_key(s) for s in held)

    for index, task in enumerate(tasks):
        required = read_field(task, "RequiredSkills")
        if not is_list_shaped(required):
            continue
        unmet = _unresolved(required, skills)
        if unmet:
            issues.error(
                f"No workers have required skills: {', '.join(unmet)}",
                entity="task",
                field="RequiredSkills",
                row_index=index,
                suggestions=["Add a worker with these skills or relax the requirement"],
            )
