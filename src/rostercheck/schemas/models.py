# src/rostercheck/schemas/models.py
"""
@brief
Pydantic data models for the rostercheck project.

@details
Defines the canonical model types:
    - Client, Worker, Task: typed entity records produced by ingestion
    - ValidationIssue: one finding reported by the validator
    - Config: runtime configuration (from config.yaml) with nested sections

Entity field names are the canonical spreadsheet column names. Field types are
lenient: out-of-domain values (PriorityLevel = 0, Duration = -1,
fractional slots) must survive model construction so that the validator, not
pydantic, reports them as issues.
"""

from __future__ import annotations

from typing import Any, Literal
from uuid import uuid4

from pydantic import BaseModel, Field

EntityType = Literal["client", "worker", "task"]
Severity = Literal["error", "warning", "info"]

ENTITY_TYPES: tuple[str, ...] = ("client", "worker", "task")


class _StrictBaseModel(BaseModel):
    """
    @brief
    Base model enforcing strict defaults for configuration and data contracts.

    @details
    Forbids unknown fields and preserves exact naming rules.
    """

    model_config = {
        "extra": "forbid",  # Reject unknown fields
        "populate_by_name": True,  # Allow population by field name
        "use_enum_values": True,  # Export raw enum values if enums appear later
    }


class Client(_StrictBaseModel):
    """
    @brief
    One row of the clients table.

    @params
        ClientID : str
            Unique, non-empty identifier.
        PriorityLevel : int
            Priority in 1..5 (range is checked by the validator).
        RequestedTaskIDs : list[str]
            Ordered TaskID references; each must exist in the tasks table.
        AttributesJSON : str | dict
            Raw JSON string (validated later) or an already parsed object.
    """

    ClientID: str = Field("", description="Unique client identifier")
    ClientName: str = Field("", description="Display name")
    PriorityLevel: int = Field(1, description="Priority level (1..5)")
    RequestedTaskIDs: list[str] = Field(default_factory=list, description="Requested TaskIDs")
    GroupTag: str = Field("", description="Free-form group tag")
    AttributesJSON: str | dict[str, Any] = Field(
        default_factory=dict, description="JSON attributes payload; {} when none was supplied"
    )


class Worker(_StrictBaseModel):
    """
    @brief
    One row of the workers table.

    @details
    AvailableSlots lists the phases the worker can serve; MaxLoadPerPhase is
    the number of concurrent units it contributes to each of those phases.
    """

    WorkerID: str = Field("", description="Unique worker identifier")
    WorkerName: str = Field("", description="Display name")
    Skills: list[str] = Field(default_factory=list, description="Skill tags")
    AvailableSlots: list[int | float] = Field(
        default_factory=list, description="Available phase numbers (positive integers)"
    )
    MaxLoadPerPhase: int = Field(1, description="Maximum load per phase (positive integer)")
    WorkerGroup: str = Field("", description="Worker group tag")
    QualificationLevel: int = Field(1, description="Qualification level")


class Task(_StrictBaseModel):
    """
    @brief
    One row of the tasks table.

    @details
    PreferredPhases is either an explicit list of phase numbers or a compact
    inclusive range literal such as "2-5". Ingestion never expands ranges.
    """

    TaskID: str = Field("", description="Unique task identifier")
    TaskName: str = Field("", description="Display name")
    Category: str = Field("", description="Category label")
    Duration: int = Field(1, description="Duration in phase units (>= 1)")
    RequiredSkills: list[str] = Field(default_factory=list, description="Required skill tags")
    PreferredPhases: list[int | float] | str = Field(
        default_factory=list, description="Phase list or '<start>-<end>' range"
    )
    MaxConcurrent: int = Field(1, description="Maximum concurrency (>= 1)")


class ValidationIssue(BaseModel):
    """
    @brief
    A single data-quality finding.

    @details
    The id is random and only unique within one validation run; compare issues
    across runs with content_key() instead.
    """

    id: str = Field(default_factory=lambda: uuid4().hex, description="Run-local identifier")
    severity: Severity = Field(..., description="error | warning | info")
    message: str = Field(..., description="Human-readable message")
    field: str | None = Field(None, description="Field the issue pertains to")
    row_index: int | None = Field(None, description="Zero-based row in the entity collection")
    entity: EntityType = Field(..., description="Entity collection concerned")
    suggestions: list[str] = Field(default_factory=list, description="Remediation hints")

    def content_key(self) -> tuple[str, str | None, int | None, str]:
        return (self.entity, self.field, self.row_index, self.message)


# ------------------------------------------------------------
# Runtime configuration
# ------------------------------------------------------------
class IngestionConfig(BaseModel):
    """
    @brief
    Controls header mapping during ingestion.
    """

    use_header_synonyms: bool = Field(
        True, description="Fall back to synonym headers (id, priority, slots, ...) when unmapped"
    )
    default_entity: EntityType = Field(
        "client", description="Entity assumed when no header marker matches"
    )


class ValidationConfig(BaseModel):
    """
    @brief
    Controls behavior of the validation subsystem.

    @details
    Priority bounds, optional display-name checks, the range-literal policy
    of the capacity check, and whether warnings invalidate the report.
    """

    priority_min: int = Field(1, ge=0, description="Lowest accepted PriorityLevel")
    priority_max: int = Field(5, ge=1, description="Highest accepted PriorityLevel")
    require_display_names: bool = Field(
        False, description="Report missing ClientName/WorkerName/TaskName as errors"
    )
    expand_phase_ranges: bool = Field(
        False, description="Count range-literal PreferredPhases as demand in the capacity check"
    )
    report_unexpanded_ranges: bool = Field(
        True, description="Emit an info issue for range literals skipped by the capacity check"
    )
    fail_on_warnings: bool = False
    write_report: bool = True


class MetricsConfig(BaseModel):
    """
    @brief
    Controls metrics persistence.
    """

    save_metrics: bool = True


class Config(_StrictBaseModel):
    """
    @brief
    Represents the full runtime configuration loaded from config.yaml.
    """

    clients_csv: str | None = None
    workers_csv: str | None = None
    tasks_csv: str | None = None
    output_dir: str | None = "data/output"
    ingestion: IngestionConfig = Field(default_factory=IngestionConfig.model_construct)
    validation: ValidationConfig = Field(default_factory=ValidationConfig.model_construct)
    metrics: MetricsConfig = Field(default_factory=MetricsConfig.model_construct)


__all__ = [
    "ENTITY_TYPES",
    "Client",
    "Config",
    "EntityType",
    "IngestionConfig",
    "MetricsConfig",
    "Severity",
    "Task",
    "ValidationConfig",
    "ValidationIssue",
    "Worker",
]
