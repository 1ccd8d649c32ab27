# scripts/run.py
from __future__ import annotations

import argparse
import logging
import sys
import time
import traceback
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rostercheck.dataloader.config_loader import ConfigLoader
from rostercheck.dataloader.table_loader import load_dataset
from rostercheck.errors import DataError, RostercheckError
from rostercheck.metrics.logger import write_metrics
from rostercheck.metrics.metrics import collect_metrics
from rostercheck.schemas.models import Config
from rostercheck.validator import build_ledger, build_report, save_report, validate_dataset


def _setup_logging() -> None:
    """
    @brief
    Initializes global logging configuration.
    """
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    @brief
    Parses command-line arguments for the validation pipeline.

    @details
    Positional inputs override the table paths from the config file. The
    entity type of each table is detected from its header row, so inputs can
    be given in any order.
    """
    parser = argparse.ArgumentParser(
        prog="rostercheck-run",
        description="Validate client/worker/task tables: load → validate → metrics → report",
    )
    parser.add_argument(
        "inputs",
        nargs="*",
        help="CSV/XLSX tables to validate (default: *_csv paths from the config)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config YAML (default: built-in defaults)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output directory for artifacts (default: output_dir from the config)",
    )
    return parser.parse_args(argv)


def _resolve_inputs(cfg: Config, config_path: Path | None, inputs: Sequence[Path]) -> list[Path]:
    """
    @brief
    Decide which tables to load.

    @details
    Explicit inputs win. Otherwise the clients/workers/tasks paths from the
    config are used; relative ones are taken relative to the config file.
    """
    if inputs:
        return [Path(p) for p in inputs]

    base = config_path.parent if config_path is not None else Path.cwd()
    paths: list[Path] = []
    for raw in (cfg.clients_csv, cfg.workers_csv, cfg.tasks_csv):
        if raw:
            p = Path(raw)
            paths.append(p if p.is_absolute() else base / p)
    return paths


def run_pipeline(
    config_path: Path | None,
    inputs: Sequence[Path] = (),
    output_dir: Path | None = None,
) -> dict[str, Any]:
    """
    @brief
    Executes the full validation pipeline.

    @details
    (1) Load configuration and every input table.
    (2) Validate the assembled dataset.
    (3) Build the capacity ledger and collect metrics.
    (4) Write validation_report.json and metrics.json as configured.

    @returns
        Dictionary with the validity flag, issue counts and artifact paths.

    @raises
        RostercheckError
            On configuration or input file problems.
    """
    t0 = time.perf_counter()

    # (1) Configuration and inputs
    cfg = ConfigLoader().load_or_default(config_path)
    paths = _resolve_inputs(cfg, config_path, inputs)
    if not paths:
        raise DataError(
            message="No input tables given",
            source="scripts.run",
            suggested_action="Pass table paths as arguments or set *_csv in config.yaml.",
        )
    out_dir = output_dir or Path(cfg.output_dir or "data/output")

    bundle = load_dataset(paths, cfg)

    # (2) Validation
    logging.info("Validating dataset…")
    issues = validate_dataset(bundle.clients, bundle.workers, bundle.tasks, cfg)
    report = build_report(issues, cfg)

    report_path: Path | None = None
    if cfg.validation.write_report:
        report_path = save_report(report, out_dir=out_dir)

    # (3) Metrics
    metrics_path: Path | None = None
    if cfg.metrics.save_metrics:
        ledger = build_ledger(
            bundle.workers, bundle.tasks, expand_ranges=cfg.validation.expand_phase_ranges
        )
        metrics_path = write_metrics(collect_metrics(bundle, issues, ledger), out_dir=out_dir)

    logging.info("Pipeline finished in %.2f s", time.perf_counter() - t0)

    return {
        "valid": report["valid"],
        "counts": report["counts"],
        "rows": bundle.counts(),
        "artifacts": {"validation_report": report_path, "metrics": metrics_path},
    }


def main(argv: Sequence[str] | None = None) -> int:
    """
    @brief
    CLI entry point.

    @details
    Exit codes:
      0 – dataset valid
      1 – invalid dataset or controlled failure (data/config)
      2 – unexpected crash
    """
    _setup_logging()
    args = _parse_args(argv)

    config_path = Path(args.config) if args.config else None
    output_dir = Path(args.output) if args.output else None

    try:
        result = run_pipeline(config_path, [Path(p) for p in args.inputs], output_dir)
        counts = result["counts"]
        logging.info(
            "valid=%s errors=%d warnings=%d info=%d",
            result["valid"],
            counts["error"],
            counts["warning"],
            counts["info"],
        )
        return 0 if result["valid"] else 1

    except RostercheckError as e:
        logging.error(str(e))
        return 1
    except Exception:
        logging.error("Unexpected error occurred:")
        traceback.print_exc()
        return 2


if __name__ == "__main__":
    sys.exit(main())
