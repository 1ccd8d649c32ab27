# src/rostercheck/validator/capacity.py
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from rostercheck.schemas.models import ValidationConfig
from rostercheck.schemas.variants import ExplicitPhases, RangeLiteral, as_phase_spec
from rostercheck.validator.fields import is_list_shaped, is_number, phase_key, read_field
from rostercheck.validator.issues import IssueCollector

Number = int | float


@dataclass(slots=True)
class PhaseCapacityLedger:
    """
    Per-phase supply and demand, rebuilt on every validation run.

    Fields:
        supply: phase → sum of MaxLoadPerPhase over workers available in it.
        demand: phase → sum of Duration over tasks preferring it.
        unexpanded: (task row, range text) for range literals left out of demand.
    """

    supply: dict[Number, Number] = field(default_factory=dict)
    demand: dict[Number, Number] = field(default_factory=dict)
    unexpanded: list[tuple[int, str]] = field(default_factory=list)

    def available(self, phase: Number) -> Number:
        return self.supply.get(phase, 0)

    def saturated(self) -> list[tuple[Number, Number, Number]]:
        """(phase, demand, available) for every over-demanded phase, in demand order."""
        return [
            (phase, need, self.available(phase))
            for phase, need in self.demand.items()
            if need > self.available(phase)
        ]

    def phases(self) -> list[Number]:
        return sorted(set(self.supply) | set(self.demand))


def build_ledger(
    workers: Sequence[Any], tasks: Sequence[Any], *, expand_ranges: bool = False
) -> PhaseCapacityLedger:
    """
    @brief
    Aggregate worker supply and task demand per phase.

    @details
    Supply: MaxLoadPerPhase for each phase in a worker's AvailableSlots.
    Demand: Duration for each phase of an explicit PreferredPhases list.
    Well-formed range literals count towards demand only with expand_ranges;
    otherwise they are recorded in `unexpanded`. Non-numeric loads, durations
    and phase entries are skipped.
    """
    ledger = PhaseCapacityLedger()

    # (1) Supply
    for worker in workers:
        slots = read_field(worker, "AvailableSlots")
        load = read_field(worker, "MaxLoadPerPhase")
        if not is_list_shaped(slots) or not is_number(load):
            continue
        for slot in slots:
            phase = phase_key(slot)
            if phase is not None:
                ledger.supply[phase] = ledger.supply.get(phase, 0) + load

    # (2) Demand
    for index, task in enumerate(tasks):
        duration = read_field(task, "Duration")
        if not is_number(duration):
            continue
        spec = as_phase_spec(read_field(task, "PreferredPhases"))
        if isinstance(spec, ExplicitPhases):
            phases = spec.phases
        elif isinstance(spec, RangeLiteral) and spec.is_well_formed:
            if not expand_ranges:
                ledger.unexpanded.append((index, spec.text))
                continue
            phases = tuple(spec.expand())
        else:
            continue
        for raw in phases:
            phase = phase_key(raw)
            if phase is not None:
                ledger.demand[phase] = ledger.demand.get(phase, 0) + duration

    return ledger


def check_capacity(
    workers: Sequence[Any],
    tasks: Sequence[Any],
    issues: IssueCollector,
    cfg: ValidationConfig,
) -> PhaseCapacityLedger:
    """
    @brief
    Flag phases whose task demand exceeds worker supply.

    @details
    Always warning severity: saturation is a planning concern, not a data
    defect. Range literals skipped by the ledger get an info issue each when
    report_unexpanded_ranges is on.
    """
    ledger = build_ledger(workers, tasks, expand_ranges=cfg.expand_phase_ranges)

    for phase, need, available in ledger.saturated():
        issues.warning(
            f"Phase {phase} is oversaturated: {need} duration needed, {available} slots available",
            entity="task",
            suggestions=[
                f"Add worker availability in phase {phase}",
                "Move tasks to other phases or shorten them",
            ],
        )

    if cfg.report_unexpanded_ranges:
        for index, text in ledger.unexpanded:
            issues.info(
                f"PreferredPhases range {text} not counted in capacity check",
                entity="task",
                field="PreferredPhases",
                row_index=index,
                suggestions=["List the phases explicitly or enable expand_phase_ranges"],
            )

    return ledger
