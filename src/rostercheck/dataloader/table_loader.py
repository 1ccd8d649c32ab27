# src/rostercheck/dataloader/table_loader.py
from __future__ import annotations

import csv
import logging
from collections.abc import Iterable, Mapping, Sequence
from pathlib import Path
from typing import Any

import pandas as pd

from rostercheck.dataloader.coercion import coerce_fields
from rostercheck.dataloader.schema_inference import (
    build_header_mapping,
    detect_entity_type,
    expected_fields,
    sanitize_mapping,
)
from rostercheck.dataloader.types import DatasetBundle, IngestResult
from rostercheck.errors import DataError
from rostercheck.schemas.models import Client, Config, Task, Worker

logger = logging.getLogger(__name__)

ENTITY_MODELS: dict[str, type[Client] | type[Worker] | type[Task]] = {
    "client": Client,
    "worker": Worker,
    "task": Task,
}

CSV_SUFFIXES = {".csv"}
EXCEL_SUFFIXES = {".xlsx", ".xls"}


def ingest_table(
    headers: Sequence[Any] | None,
    rows: Iterable[Mapping[str, Any]],
    *,
    mapping: Mapping[str, Any] | None = None,
    cfg: Config | None = None,
) -> IngestResult:
    """
    @brief
    Ingestion boundary: header row + raw rows → typed entity records.

    @details
    (1) Detect the entity type from the headers.
    (2) Use the caller's mapping if given (e.g. AI-assisted), otherwise build
        the deterministic normalized-name mapping. Both are treated alike.
    (3) Coerce each row field by field and build the entity model.
    Malformed or missing headers never raise; they degrade to the default
    entity and default field values. A row that is not a mapping is a caller
    bug and raises DataError.
    """
    cfg = cfg or Config()
    header_list = [str(h).strip() for h in (headers or []) if h is not None]

    # (1) Entity detection
    entity = detect_entity_type(header_list, default=cfg.ingestion.default_entity)

    # (2) Header mapping, from caller or computed
    if mapping is not None:
        field_map = sanitize_mapping(mapping, entity)
    else:
        field_map = build_header_mapping(
            header_list, entity, use_synonyms=cfg.ingestion.use_header_synonyms
        )

    # (3) Coerce rows into typed records
    fields = expected_fields(entity)
    model = ENTITY_MODELS[entity]
    records = []
    for idx, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise DataError(
                message=f"Row {idx} is not a mapping (got {type(row).__name__})",
                source="table_loader.ingest_table",
                suggested_action="Pass rows as dicts keyed by header name.",
            )
        # Overflow cells from csv.DictReader sit under the None key
        cells = {str(k).strip(): v for k, v in row.items() if k is not None}
        raw = {name: cells.get(header) for name, header in field_map.items()}
        values = coerce_fields(fields, raw)
        # No attributes column at all: nothing was supplied, not an empty JSON text
        if "AttributesJSON" in values and "AttributesJSON" not in field_map:
            values["AttributesJSON"] = {}
        records.append(model(**values))

    return IngestResult(
        entity_type=entity,
        mapping=field_map,
        records=records,
        headers=header_list,
        total_rows=len(records),
    )


class TableLoader:
    """
    File → IngestResult.

    Rules:
      - .csv is read with csv.DictReader (UTF-8, BOM tolerated, delimiter=',').
      - .xlsx / .xls is read with pandas (first sheet, all cells as text).
      - Headers are trimmed; rows are handed to ingest_table() unchanged.

    Fatal errors (raise DataError):
      - path is not a pathlib.Path, or the file is missing / unreadable
      - unsupported extension
      - no header row
    """

    def __init__(self, cfg: Config | None = None) -> None:
        self.cfg = cfg or Config()

    def load(self, path: Path, mapping: Mapping[str, Any] | None = None) -> IngestResult:
        headers, rows = self._read_table(path)
        result = ingest_table(headers, rows, mapping=mapping, cfg=self.cfg)
        result.source = str(path)
        self._report_summary(path, result)
        return result

    # ------------------------------
    # Internal helpers
    # ------------------------------
    def _read_table(self, path: Path) -> tuple[list[str], list[dict[str, Any]]]:
        if not isinstance(path, Path):
            raise DataError(
                message=f"Invalid path type: expected pathlib.Path, got {type(path).__name__}",
                source="TableLoader._read_table",
                suggested_action="Pass a pathlib.Path pointing to a CSV or XLSX file",
            )
        if not path.exists():
            raise DataError(
                message=f"Input table not found: {path}",
                source="TableLoader._read_table",
                suggested_action="Verify file path and ensure the file is present.",
            )

        suffix = path.suffix.lower()
        if suffix in CSV_SUFFIXES:
            return self._read_csv(path)
        if suffix in EXCEL_SUFFIXES:
            return self._read_excel(path)
        raise DataError(
            message=f"Unsupported file format: {suffix or '(none)'}",
            source="TableLoader._read_table",
            suggested_action="Please use CSV or XLSX files.",
        )

    def _read_csv(self, path: Path) -> tuple[list[str], list[dict[str, Any]]]:
        try:
            with path.open("r", encoding="utf-8-sig", newline="") as f:
                reader = csv.DictReader(f, delimiter=",")
                if reader.fieldnames is None:
                    raise DataError(
                        message="CSV has no header row.",
                        source="TableLoader._read_csv",
                        suggested_action="Ensure the first line contains column names.",
                    )
                headers = [(name or "").strip() for name in reader.fieldnames]
                rows = [r for r in reader if self._has_values(r)]
                return headers, rows
        except OSError as e:
            raise DataError(
                message=f"Unable to read CSV: {e}",
                source="TableLoader._read_csv",
                suggested_action="Check file permissions and that the file is not locked.",
            ) from e

    def _read_excel(self, path: Path) -> tuple[list[str], list[dict[str, Any]]]:
        try:
            df = pd.read_excel(path, sheet_name=0, dtype=str)
        except (OSError, ValueError, ImportError) as e:
            raise DataError(
                message=f"Unable to read spreadsheet: {e}",
                source="TableLoader._read_excel",
                suggested_action=(
                    "Check that the file is a valid workbook; .xlsx needs openpyxl, "
                    ".xls needs the xls extra (xlrd)."
                ),
            ) from e

        if len(df.columns) == 0:
            raise DataError(
                message="Spreadsheet has no header row.",
                source="TableLoader._read_excel",
                suggested_action="Ensure the first row of the first sheet contains column names.",
            )

        headers = [str(c).strip() for c in df.columns]
        df.columns = headers
        df = df.dropna(how="all").fillna("")
        return headers, df.to_dict(orient="records")

    def _has_values(self, row: dict[str | None, Any]) -> bool:
        return any(isinstance(v, str) and v.strip() for v in row.values())

    def _report_summary(self, path: Path, result: IngestResult) -> None:
        logger.info(
            "TableLoader OK: %d %s row(s) from %s (mapped %d/%d fields)",
            result.total_rows,
            result.entity_type,
            path,
            len(result.mapping),
            len(expected_fields(result.entity_type)),
        )


def load_dataset(paths: Iterable[Path], cfg: Config | None = None) -> DatasetBundle:
    """
    @brief
    Load several tables and bucket them by detected entity type.
    """
    loader = TableLoader(cfg)
    bundle = DatasetBundle()
    for path in paths:
        bundle.add(loader.load(Path(path)))
    logger.info(
        "Dataset loaded: clients=%d workers=%d tasks=%d",
        len(bundle.clients),
        len(bundle.workers),
        len(bundle.tasks),
    )
    return bundle


__all__ = ["ENTITY_MODELS", "TableLoader", "ingest_table", "load_dataset"]
