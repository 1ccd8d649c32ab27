# src/rostercheck/validator/issues.py
from __future__ import annotations

from collections import Counter

from rostercheck.schemas.models import EntityType, Severity, ValidationIssue


class IssueCollector:
    """
    @brief
    Explicit accumulator threaded through the validation passes.

    @details
    Each validation run creates its own collector, so no issue list outlives
    or is shared between runs. Issue ids are generated on append.
    """

    def __init__(self) -> None:
        self.issues: list[ValidationIssue] = []

    def add(
        self,
        severity: Severity,
        message: str,
        *,
        entity: EntityType,
        field: str | None = None,
        row_index: int | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.issues.append(
            ValidationIssue(
                severity=severity,
                message=message,
                entity=entity,
                field=field,
                row_index=row_index,
                suggestions=list(suggestions or []),
            )
        )

    def error(self, message: str, **context) -> None:
        self.add("error", message, **context)

    def warning(self, message: str, **context) -> None:
        self.add("warning", message, **context)

    def info(self, message: str, **context) -> None:
        self.add("info", message, **context)

    def __len__(self) -> int:
        return len(self.issues)


def count_by_severity(issues: list[ValidationIssue]) -> dict[str, int]:
    counts = Counter(i.severity for i in issues)
    return {sev: counts.get(sev, 0) for sev in ("error", "warning", "info")}


def count_by_entity(issues: list[ValidationIssue]) -> dict[str, int]:
    counts = Counter(i.entity for i in issues)
    return {ent: counts.get(ent, 0) for ent in ("client", "worker", "task")}
