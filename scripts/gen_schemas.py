# scripts/gen_schemas.py
"""
Generate JSON Schemas for rostercheck data models.

This script exports JSON Schema files for:
    - Client, Worker, Task
    - ValidationIssue
    - Config

Output directory: schemas/
"""

import json
from pathlib import Path

from rostercheck.schemas.models import Client, Config, Task, ValidationIssue, Worker

MODELS = {
    "client": Client,
    "worker": Worker,
    "task": Task,
    "validation_issue": ValidationIssue,
    "config": Config,
}


def export_schema(model_cls, name: str, out_dir: Path) -> Path:
    """
    @brief
    Exports the JSON schema of a given Pydantic model.

    @returns
        Path of the written "<name>.schema.json" file.
    """
    out_dir.mkdir(parents=True, exist_ok=True)
    schema_path = (out_dir / f"{name}.schema.json").resolve()

    with schema_path.open("w", encoding="utf-8") as f:
        json.dump(model_cls.model_json_schema(), f, indent=2, ensure_ascii=False)
        f.write("\n")

    try:
        rel = schema_path.relative_to(Path.cwd())
    except ValueError:
        rel = schema_path
    print(f"[OK] {rel}")
    return schema_path


def main(out_dir: Path = Path("schemas")) -> int:
    for name, model_cls in MODELS.items():
        export_schema(model_cls, name, out_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
