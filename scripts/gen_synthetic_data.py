# scripts/gen_synthetic_data.py
from __future__ import annotations

import csv
import json
import random
import sys
from dataclasses import dataclass
from pathlib import Path

"""
Synthetic roster generator (single run → clients/workers/tasks CSV files).

- Parameters are hard-coded as constants below (no CLI args).
- Task ids are T1..T{TASKS}, worker skills are drawn from SKILLS, phases are 1..PHASES.
- Every task requires at least one skill some worker has, so a clean run with
  DEFECT_RATE = 0 produces only capacity findings at most.
- With DEFECT_RATE > 0 a fraction of rows gets one seeded defect each
  (missing id, out-of-range priority, broken JSON, unknown task reference,
  unowned skill, zero duration). Defects are listed on stdout.

Edit the constants in the "CONFIG" section to produce different datasets.
"""

# =========================
# CONFIG: EDIT THESE
# =========================
CLIENTS: int = 20
WORKERS: int = 10
TASKS: int = 15
PHASES: int = 6
SKILLS: tuple[str, ...] = ("coding", "design", "testing", "ops", "writing")
OUTPUT_DIR: str = "data/input"
DEFECT_RATE: float = 0.1  # 0.0 .. 1.0, share of rows that get a seeded defect
RANDOM_SEED: int = 42
# =========================


@dataclass(frozen=True, slots=True)
class Tables:
    clients: list[dict[str, str]]
    workers: list[dict[str, str]]
    tasks: list[dict[str, str]]


CLIENT_HEADERS = [
    "ClientID",
    "ClientName",
    "PriorityLevel",
    "RequestedTaskIDs",
    "GroupTag",
    "AttributesJSON",
]
WORKER_HEADERS = [
    "WorkerID",
    "WorkerName",
    "Skills",
    "AvailableSlots",
    "MaxLoadPerPhase",
    "WorkerGroup",
    "QualificationLevel",
]
TASK_HEADERS = [
    "TaskID",
    "TaskName",
    "Category",
    "Duration",
    "RequiredSkills",
    "PreferredPhases",
    "MaxConcurrent",
]


def _validate_config() -> None:
    if CLIENTS < 1 or WORKERS < 1 or TASKS < 1:
        raise ValueError("CLIENTS, WORKERS and TASKS must be >= 1")
    if PHASES < 1:
        raise ValueError("PHASES must be >= 1")
    if not SKILLS:
        raise ValueError("SKILLS must not be empty")
    if not 0.0 <= DEFECT_RATE <= 1.0:
        raise ValueError("DEFECT_RATE must be within [0, 1]")


def _phase_list(rng: random.Random) -> list[int]:
    k = rng.randint(1, PHASES)
    return sorted(rng.sample(range(1, PHASES + 1), k))


def _gen_workers(rng: random.Random) -> list[dict[str, str]]:
    rows = []
    for i in range(1, WORKERS + 1):
        slots = _phase_list(rng)
        rows.append(
            {
                "WorkerID": f"W{i}",
                "WorkerName": f"Worker {i}",
                "Skills": ",".join(rng.sample(SKILLS, rng.randint(1, min(3, len(SKILLS))))),
                "AvailableSlots": json.dumps(slots),
                "MaxLoadPerPhase": str(rng.randint(1, len(slots))),
                "WorkerGroup": rng.choice(["GroupA", "GroupB", "GroupC"]),
                "QualificationLevel": str(rng.randint(1, 5)),
            }
        )
    return rows


def _gen_tasks(rng: random.Random, owned_skills: list[str]) -> list[dict[str, str]]:
    rows = []
    for i in range(1, TASKS + 1):
        if rng.random() < 0.3:
            start = rng.randint(1, PHASES)
            end = rng.randint(start, PHASES)
            phases = f"{start}-{end}"
        else:
            phases = json.dumps(_phase_list(rng))
        rows.append(
            {
                "TaskID": f"T{i}",
                "TaskName": f"Task {i}",
                "Category": rng.choice(["ETL", "Analytics", "ML", "Infra"]),
                "Duration": str(rng.randint(1, 3)),
                "RequiredSkills": ",".join(rng.sample(owned_skills, rng.randint(1, min(2, len(owned_skills))))),
                "PreferredPhases": phases,
                "MaxConcurrent": str(rng.randint(1, 3)),
            }
        )
    return rows


def _gen_clients(rng: random.Random, task_ids: list[str]) -> list[dict[str, str]]:
    rows = []
    for i in range(1, CLIENTS + 1):
        rows.append(
            {
                "ClientID": f"C{i}",
                "ClientName": f"Client {i}",
                "PriorityLevel": str(rng.randint(1, 5)),
                "RequestedTaskIDs": ",".join(rng.sample(task_ids, rng.randint(1, min(3, len(task_ids))))),
                "GroupTag": rng.choice(["GroupA", "GroupB", "GroupC"]),
                "AttributesJSON": json.dumps({"location": rng.choice(["NYC", "SF", "LDN"])}),
            }
        )
    return rows


def _seed_defects(rng: random.Random, tables: Tables) -> list[str]:
    """Mutate a DEFECT_RATE share of rows in place; return a description per defect."""
    notes: list[str] = []
    for row in tables.clients:
        if rng.random() >= DEFECT_RATE:
            continue
        kind = rng.choice(["missing_id", "priority", "json", "unknown_task"])
        if kind == "missing_id":
            notes.append(f"client {row['ClientID']}: id blanked")
            row["ClientID"] = ""
        elif kind == "priority":
            row["PriorityLevel"] = rng.choice(["0", "6", "9"])
            notes.append(f"client {row['ClientID']}: priority {row['PriorityLevel']}")
        elif kind == "json":
            row["AttributesJSON"] = "{broken"
            notes.append(f"client {row['ClientID']}: invalid AttributesJSON")
        else:
            row["RequestedTaskIDs"] += ",TX99"
            notes.append(f"client {row['ClientID']}: references TX99")

    for row in tables.tasks:
        if rng.random() >= DEFECT_RATE:
            continue
        if rng.random() < 0.5:
            row["RequiredSkills"] += ",quantum"
            notes.append(f"task {row['TaskID']}: requires unowned skill 'quantum'")
        else:
            row["Duration"] = "0"
            notes.append(f"task {row['TaskID']}: zero duration")
    return notes


def _write_csv(path: Path, headers: list[str], rows: list[dict[str, str]]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers)
        w.writeheader()
        w.writerows(rows)


def generate(out_dir: Path = Path(OUTPUT_DIR), seed: int = RANDOM_SEED) -> dict[str, Path]:
    _validate_config()
    rng = random.Random(seed)

    workers = _gen_workers(rng)
    owned = sorted({s for w in workers for s in w["Skills"].split(",")})
    tasks = _gen_tasks(rng, owned)
    clients = _gen_clients(rng, [t["TaskID"] for t in tasks])
    tables = Tables(clients=clients, workers=workers, tasks=tasks)

    for note in _seed_defects(rng, tables):
        print(f"[DEFECT] {note}")

    paths = {
        "clients": out_dir / "clients.csv",
        "workers": out_dir / "workers.csv",
        "tasks": out_dir / "tasks.csv",
    }
    _write_csv(paths["clients"], CLIENT_HEADERS, tables.clients)
    _write_csv(paths["workers"], WORKER_HEADERS, tables.workers)
    _write_csv(paths["tasks"], TASK_HEADERS, tables.tasks)
    return paths


def main() -> int:
    try:
        paths = generate()
    except Exception as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1
    for name, path in paths.items():
        print(f"[OK] {name}: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
