from rostercheck.validator.capacity import PhaseCapacityLedger, build_ledger
from rostercheck.validator.validator import (
    DataValidator,
    build_report,
    save_report,
    validate_dataset,
)

__all__ = [
    "DataValidator",
    "PhaseCapacityLedger",
    "build_ledger",
    "build_report",
    "save_report",
    "validate_dataset",
]
