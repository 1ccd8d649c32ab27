from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from rostercheck.errors import ConfigError
from rostercheck.schemas.models import Config

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class ConfigLoader:
    """
    @brief
    config.yaml → validated `Config`.

    @details
    (1) check the path, (2) parse with `yaml.safe_load`, (3) require a
    non-empty mapping root, (4) validate against the pydantic schema.
    Every failure is reported as `ConfigError` with a source and a fix.
    """

    source = "ConfigLoader"

    def load(self, path: Path) -> Config:
        self._check_path(path)
        data = self._parse(path)
        cfg = self._validate(data)
        logger.info(
            "Configuration loaded from %s (synonyms=%s, expand_ranges=%s)",
            path,
            cfg.ingestion.use_header_synonyms,
            cfg.validation.expand_phase_ranges,
        )
        return cfg

    def load_or_default(self, path: Path | None) -> Config:
        """Like load(), but no path means built-in defaults."""
        if path is None:
            logger.info("No configuration file given; using defaults")
            return Config()
        return self.load(path)

    # ------------------------------
    # Steps
    # ------------------------------
    def _fail(self, step: str, message: str, action: str) -> ConfigError:
        return ConfigError(message=message, source=f"{self.source}.{step}", suggested_action=action)

    def _check_path(self, path: Any) -> None:
        if not isinstance(path, Path):
            raise self._fail(
                "_check_path",
                f"Invalid path type: expected pathlib.Path, got {type(path).__name__}",
                "Pass a pathlib.Path pointing to config.yaml.",
            )
        if not path.exists():
            raise self._fail(
                "_check_path",
                f"Configuration file not found: {path}",
                "Check the --config argument or create config/config.yaml.",
            )
        if path.suffix.lower() not in YAML_SUFFIXES:
            raise self._fail(
                "_check_path",
                f"Invalid configuration file extension: {path.suffix or '(none)'}",
                "Rename the file to .yaml or .yml.",
            )

    def _parse(self, path: Path) -> dict[str, Any]:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise self._fail(
                "_parse", f"YAML parsing failed: {e}", "Fix YAML syntax or indentation."
            ) from e
        except OSError as e:
            raise self._fail(
                "_parse",
                f"Unable to read configuration file: {e}",
                "Check that the file is readable.",
            ) from e

        if data is None:
            raise self._fail(
                "_parse",
                "Configuration file is empty.",
                "Add settings to the file or omit --config to run with defaults.",
            )
        if not isinstance(data, Mapping):
            raise self._fail(
                "_parse",
                f"Configuration root must be a mapping, got {type(data).__name__}",
                "Write the top level as key: value pairs.",
            )
        return dict(data)

    def _validate(self, data: dict[str, Any]) -> Config:
        try:
            return Config(**data)
        except ValidationError as e:
            raise self._fail(
                "_validate",
                f"Invalid configuration structure: {e}",
                "Compare keys and values with the Config schema (scripts/gen_schemas.py); "
                "unknown keys are rejected.",
            ) from e


__all__ = ["ConfigLoader", "YAML_SUFFIXES"]
