# src/rostercheck/metrics/metrics.py
from __future__ import annotations

import json
import math
from collections.abc import Sequence
from datetime import datetime, timezone
from typing import Any

import pandas as pd

from rostercheck.dataloader.types import DatasetBundle
from rostercheck.errors import DataError
from rostercheck.schemas.models import ValidationIssue
from rostercheck.validator.capacity import PhaseCapacityLedger
from rostercheck.validator.issues import count_by_entity, count_by_severity

_PHASE_COLUMNS = ["phase", "supply", "demand", "utilization"]


def collect_metrics(
    bundle: DatasetBundle,
    issues: Sequence[ValidationIssue],
    ledger: PhaseCapacityLedger,
) -> dict[str, Any]:
    """
    @brief
    Builds a JSON-serializable summary of one validation run.

    @details
    Row counts per entity, issue counts per severity and entity, and the
    per-phase capacity table (supply, demand, demand/supply utilization).
    """
    # (1) Per-phase table
    df = ledger_frame(ledger)
    phases = [
        {
            "phase": _num(row.phase),
            "supply": _num(row.supply),
            "demand": _num(row.demand),
            "utilization": _f(row.utilization),
        }
        for row in df.itertuples(index=False)
    ]

    # (2) Aggregates over the table
    saturated = int((df["demand"] > df["supply"]).sum()) if not df.empty else 0
    peak = _f(df["utilization"].max()) if not df.empty else None

    # (3) Assemble
    metrics = {
        "timestamp": _utc_now_iso(),
        "rows": bundle.counts(),
        "issues": count_by_severity(list(issues)),
        "issues_by_entity": count_by_entity(list(issues)),
        "phases": phases,
        "num_phases": len(phases),
        "num_saturated_phases": saturated,
        "peak_utilization": peak,
        "unexpanded_ranges": len(ledger.unexpanded),
    }

    # (4) Validate serializability before handing off to the writer
    _assert_no_nans(metrics)
    json.dumps(metrics, ensure_ascii=False)
    return metrics


def ledger_frame(ledger: PhaseCapacityLedger) -> pd.DataFrame:
    """
    @brief
    Phase ledger as a DataFrame sorted by phase.

    @details
    Phases missing on one side get 0. Utilization is demand / supply and is
    NaN where there is no supply.
    """
    phases = ledger.phases()
    if not phases:
        return pd.DataFrame(columns=_PHASE_COLUMNS)

    df = pd.DataFrame(
        {
            "phase": phases,
            "supply": [ledger.supply.get(p, 0) for p in phases],
            "demand": [ledger.demand.get(p, 0) for p in phases],
        }
    )
    df["utilization"] = (df["demand"] / df["supply"]).where(df["supply"] > 0)
    return df


# ----------------- internal -----------------
def _num(x: Any) -> int | float:
    value = float(x)
    return int(value) if value.is_integer() else value


def _f(x: Any) -> float | None:
    if x is None or pd.isna(x):
        return None
    return round(float(x), 6)


def _assert_no_nans(obj: Any) -> None:
    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        raise DataError(
            "metrics contain NaN/inf",
            source="metrics.collect_metrics",
            suggested_action="Check the phase ledger for zero or missing supply values.",
        )
    if isinstance(obj, dict):
        for v in obj.values():
            _assert_no_nans(v)
    elif isinstance(obj, list):
        for v in obj:
            _assert_no_nans(v)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")
