from __future__ import annotations

from rostercheck.schemas.models import Task, ValidationConfig, Worker
from rostercheck.validator.capacity import build_ledger, check_capacity
from rostercheck.validator.issues import IssueCollector


def run_capacity(workers, tasks, cfg: ValidationConfig | None = None):
    issues = IssueCollector()
    ledger = check_capacity(workers, tasks, issues, cfg or ValidationConfig())
    return issues.issues, ledger


# -----------------------------
# Ledger
# -----------------------------
def test_supply_sums_max_load_per_available_phase() -> None:
    # --- Arrange ---
    workers = [
        Worker(WorkerID="W1", AvailableSlots=[1, 2], MaxLoadPerPhase=2),
        Worker(WorkerID="W2", AvailableSlots=[2.0, 3], MaxLoadPerPhase=1),
    ]

    # --- Act ---
    ledger = build_ledger(workers, [])

    # --- Assert ---
    assert ledger.supply == {1: 2, 2: 3, 3: 1}
    assert ledger.available(4) == 0


def test_demand_sums_duration_per_preferred_phase() -> None:
    tasks = [
        Task(TaskID="T1", Duration=2, PreferredPhases=[1, 2]),
        Task(TaskID="T2", Duration=3, PreferredPhases=[2]),
    ]

    ledger = build_ledger([], tasks)

    assert ledger.demand == {1: 2, 2: 5}
    assert ledger.phases() == [1, 2]


def test_range_literals_are_recorded_not_counted_by_default() -> None:
    # --- Arrange ---
    tasks = [
        Task(TaskID="T1", Duration=4, PreferredPhases="2-3"),
        Task(TaskID="T2", Duration=1, PreferredPhases=[2]),
    ]

    # --- Act ---
    ledger = build_ledger([], tasks)

    # --- Assert ---
    assert ledger.demand == {2: 1}
    assert ledger.unexpanded == [(0, "2-3")]


def test_range_literals_counted_when_expansion_enabled() -> None:
    tasks = [Task(TaskID="T1", Duration=4, PreferredPhases="2-3")]

    ledger = build_ledger([], tasks, expand_ranges=True)

    assert ledger.demand == {2: 4, 3: 4}
    assert ledger.unexpanded == []


def test_non_numeric_values_are_skipped() -> None:
    # --- Arrange ---
    workers = [Worker.model_construct(WorkerID="W1", AvailableSlots=["x", 1], MaxLoadPerPhase="2")]
    tasks = [
        Task.model_construct(TaskID="T1", Duration=None, PreferredPhases=[1]),
        Task.model_construct(TaskID="T2", Duration=1, PreferredPhases=["a", 1]),
    ]

    # --- Act ---
    ledger = build_ledger(workers, tasks)

    # --- Assert ---
    assert ledger.supply == {}
    assert ledger.demand == {1: 1}


# -----------------------------
# check_capacity
# -----------------------------
def test_oversaturated_phase_yields_warning() -> None:
    """
    @brief
    Demand 10 against supply 3 in phase 1 is reported as a task warning.
    """
    # --- Arrange ---
    workers = [Worker(WorkerID="W1", AvailableSlots=[1, 2, 3], MaxLoadPerPhase=3)]
    tasks = [Task(TaskID="T1", Duration=10, PreferredPhases=[1])]

    # --- Act ---
    issues, _ = run_capacity(workers, tasks)

    # --- Assert ---
    assert len(issues) == 1
    issue = issues[0]
    assert issue.severity == "warning"
    assert issue.entity == "task"
    assert issue.message == "Phase 1 is oversaturated: 10 duration needed, 3 slots available"
    assert issue.field is None
    assert issue.row_index is None


def test_demand_equal_to_supply_is_not_saturated() -> None:
    workers = [Worker(WorkerID="W1", AvailableSlots=[1], MaxLoadPerPhase=3)]
    tasks = [Task(TaskID="T1", Duration=3, PreferredPhases=[1])]

    issues, _ = run_capacity(workers, tasks)

    assert issues == []


def test_phase_without_supply_reports_zero_available() -> None:
    tasks = [Task(TaskID="T1", Duration=1, PreferredPhases=[7])]

    issues, _ = run_capacity([], tasks)

    assert [i.message for i in issues] == [
        "Phase 7 is oversaturated: 1 duration needed, 0 slots available"
    ]


def test_unexpanded_range_reported_as_info() -> None:
    # --- Arrange ---
    tasks = [Task(TaskID="T1", Duration=50, PreferredPhases="1-2")]

    # --- Act ---
    issues, ledger = run_capacity([], tasks)

    # --- Assert ---
    assert [(i.severity, i.message, i.row_index) for i in issues] == [
        ("info", "PreferredPhases range 1-2 not counted in capacity check", 0)
    ]
    assert ledger.demand == {}


def test_unexpanded_range_info_can_be_silenced() -> None:
    tasks = [Task(TaskID="T1", Duration=50, PreferredPhases="1-2")]

    issues, _ = run_capacity([], tasks, ValidationConfig(report_unexpanded_ranges=False))

    assert issues == []


def test_expanded_range_can_saturate() -> None:
    # --- Arrange ---
    workers = [Worker(WorkerID="W1", AvailableSlots=[1, 2], MaxLoadPerPhase=1)]
    tasks = [Task(TaskID="T1", Duration=2, PreferredPhases="1-2")]

    # --- Act ---
    issues, _ = run_capacity(workers, tasks, ValidationConfig(expand_phase_ranges=True))

    # --- Assert ---
    assert [i.message for i in issues] == [
        "Phase 1 is oversaturated: 2 duration needed, 1 slots available",
        "Phase 2 is oversaturated: 2 duration needed, 1 slots available",
    ]
