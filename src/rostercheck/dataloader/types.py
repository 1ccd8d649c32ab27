# src/rostercheck/dataloader/types.py
from __future__ import annotations

from dataclasses import dataclass, field

from rostercheck.dataloader.schema_inference import expected_fields
from rostercheck.schemas.models import Client, EntityType, Task, Worker

Entity = Client | Worker | Task


@dataclass(slots=True)
class IngestResult:
    """
    Structured result of ingesting one table.

    Fields:
        entity_type: Detected (or defaulted) entity of the table.
        mapping: Canonical field → header actually used for it.
        records: Typed entity records, one per input row, in input order.
        headers: Header row as received (trimmed).
        total_rows: Number of data rows observed (excludes header).
        source: File path or other label of the table, when known.
    """

    entity_type: EntityType
    mapping: dict[str, str] = field(default_factory=dict)
    records: list[Entity] = field(default_factory=list)
    headers: list[str] = field(default_factory=list)
    total_rows: int = 0
    source: str | None = None

    @property
    def unmapped_fields(self) -> list[str]:
        return [name for name in expected_fields(self.entity_type) if name not in self.mapping]


@dataclass(slots=True)
class DatasetBundle:
    """
    The three entity collections assembled from one or more tables.

    Tables of the same entity are concatenated in load order, so row indices
    reported by the validator are positions in these combined lists.
    """

    clients: list[Client] = field(default_factory=list)
    workers: list[Worker] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    sources: dict[str, list[str]] = field(
        default_factory=lambda: {"client": [], "worker": [], "task": []}
    )

    def add(self, result: IngestResult) -> None:
        target: list = {"client": self.clients, "worker": self.workers, "task": self.tasks}[
            result.entity_type
        ]
        target.extend(result.records)
        if result.source:
            self.sources[result.entity_type].append(result.source)

    def counts(self) -> dict[str, int]:
        return {"client": len(self.clients), "worker": len(self.workers), "task": len(self.tasks)}
