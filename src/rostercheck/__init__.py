"""Ingestion and validation core for client / worker / task planning tables."""

from rostercheck.dataloader.table_loader import ingest_table
from rostercheck.validator.validator import validate_dataset

__version__ = "0.1.0"

__all__ = ["__version__", "ingest_table", "validate_dataset"]
