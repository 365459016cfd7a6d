"""JSON output for moderation exports: one array holding every row with all its fields."""

import json
import uuid
from collections.abc import Iterable
from datetime import date
from pathlib import Path
from typing import Any


def _to_json(value: object) -> str:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    msg = f"{type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def write_json(output_path: Path, records: Iterable[dict[str, Any]]) -> int:
    rows = list(records)
    with output_path.open("w", encoding="utf-8") as f:
        json.dump(rows, f, default=_to_json, indent=2, ensure_ascii=False)
        f.write("\n")
    return len(rows)
