# src/rostercheck/validator/validator.py
from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rostercheck.errors import ValidationError
from rostercheck.metrics.logger import atomic_write_text
from rostercheck.schemas.models import Config, ValidationConfig, ValidationIssue
from rostercheck.validator.capacity import check_capacity
from rostercheck.validator.cross_reference import check_cross_references
from rostercheck.validator.entity_checks import validate_entities
from rostercheck.validator.issues import IssueCollector, count_by_entity, count_by_severity

logger = logging.getLogger(__name__)


def _validation_cfg(cfg: Config | ValidationConfig | None) -> ValidationConfig:
    if cfg is None:
        return ValidationConfig()
    if isinstance(cfg, Config):
        return cfg.validation
    return cfg


def _require_collection(value: Any, name: str) -> Sequence[Any]:
    """
    @brief
    Guard the collection contract of the validation boundary.

    @details
    Entity collections must be sequences of rows. Anything else (None, a
    dict, a bare string) is a caller bug, not a data-quality finding, and
    raises instead of being turned into an issue.
    """
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        raise ValidationError(
            message=f"{name} must be a sequence of records, got {type(value).__name__}",
            source="validator._require_collection",
            suggested_action=f"Pass {name} as a list (use [] when the table is absent).",
        )
    return value


# ---------------------------
# VALIDATOR CLASS
# ----------------------------
class DataValidator:
    """
    @brief
    Full-dataset validator for clients, workers and tasks.

    @details
    Runs, in order: per-entity checks → cross-reference checks → capacity
    check, and returns the concatenated issues. The instance only holds its
    inputs; every validate_all() call builds a fresh issue list with fresh
    ids, so repeated calls (or concurrent ones on shared inputs) do not
    interfere. Input collections are never mutated.

    Raises ValidationError only when a collection is not a sequence.
    """

    def __init__(
        self,
        clients: Sequence[Any],
        workers: Sequence[Any],
        tasks: Sequence[Any],
        cfg: Config | ValidationConfig | None = None,
    ) -> None:
        self.clients = _require_collection(clients, "clients")
        self.workers = _require_collection(workers, "workers")
        self.tasks = _require_collection(tasks, "tasks")
        self.cfg = _validation_cfg(cfg)

    def validate_all(self) -> list[ValidationIssue]:
        issues = IssueCollector()

        # (1) Structural checks per entity
        validate_entities(self.clients, self.workers, self.tasks, issues, self.cfg)

        # (2) Referential integrity across the full collections
        check_cross_references(self.clients, self.workers, self.tasks, issues)

        # (3) Phase saturation
        check_capacity(self.workers, self.tasks, issues, self.cfg)

        counts = count_by_severity(issues.issues)
        logger.info(
            "Validation finished: %d error(s), %d warning(s), %d info over %d/%d/%d rows",
            counts["error"],
            counts["warning"],
            counts["info"],
            len(self.clients),
            len(self.workers),
            len(self.tasks),
        )
        return issues.issues


def validate_dataset(
    clients: Sequence[Any],
    workers: Sequence[Any],
    tasks: Sequence[Any],
    cfg: Config | ValidationConfig | None = None,
) -> list[ValidationIssue]:
    """Validation boundary: three entity collections → list of ValidationIssue."""
    return DataValidator(clients, workers, tasks, cfg).validate_all()


def build_report(
    issues: Sequence[ValidationIssue], cfg: Config | ValidationConfig | None = None
) -> dict[str, Any]:
    """
    @brief
    Assemble validation results into a serializable dictionary.

    @details
    The dataset is valid when there are no errors, and additionally no
    warnings when fail_on_warnings is set. Info issues never invalidate.
    """
    vcfg = _validation_cfg(cfg)
    by_severity = count_by_severity(list(issues))
    valid = by_severity["error"] == 0 and not (vcfg.fail_on_warnings and by_severity["warning"])

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(timespec="seconds"),
        "valid": bool(valid),
        "counts": by_severity,
        "by_entity": count_by_entity(list(issues)),
        "issues": [issue.model_dump() for issue in issues],
    }


def save_report(
    report: dict[str, Any],
    out_dir: Path | None = None,
    filename: str = "validation_report.json",
) -> Path:
    """
    Writes the report atomically to disk.

    Args:
        report: Validation report dictionary.
        out_dir: Target directory (defaults to 'data/output').
        filename: Target filename (default 'validation_report.json').

    Returns:
        Path to the written JSON file.
    """
    target = (out_dir or Path("data/output")) / filename
    atomic_write_text(target, json.dumps(report, indent=2, ensure_ascii=False))
    logger.info("Validation report saved: %s", target)
    return target


__all__ = ["DataValidator", "build_report", "save_report", "validate_dataset"]
