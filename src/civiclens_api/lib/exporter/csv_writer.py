"""CSV writer for moderation export rows."""

import csv
import io
from collections.abc import Iterable
from pathlib import Path
from typing import Any, TextIO

# Characters that trigger formula execution in spreadsheet applications
_FORMULA_PREFIXES = ("=", "+", "-", "@", "\t", "\r")

EXPORT_COLUMNS = [
    "representative",
    "position",
    "average_rating",
    "rating_count",
    "comment",
]


def _sanitize_cell(value: object) -> object:
    """Prefix formula-triggering strings with a single quote.

    Comment bodies are user-written, so every string cell is treated as
    untrusted.
    """
    if isinstance(value, str) and value and value[0] in _FORMULA_PREFIXES:
        return f"'{value}"
    return value


def _write_rows(f: TextIO, records: Iterable[dict[str, Any]], columns: list[str]) -> int:
    writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
    writer.writeheader()
    count = 0
    for record in records:
        writer.writerow({k: _sanitize_cell(v) for k, v in record.items()})
        count += 1
    return count


def write_csv(
    output_path: Path,
    records: Iterable[dict[str, Any]],
    *,
    columns: list[str] | None = None,
) -> int:
    """Write export rows to a CSV file.

    Args:
        output_path: Path to write the CSV file.
        records: Iterable of flattened row dicts.
        columns: Column names to include. Defaults to EXPORT_COLUMNS.

    Returns:
        Number of records written.
    """
    with output_path.open("w", newline="", encoding="utf-8") as f:
        return _write_rows(f, records, columns or EXPORT_COLUMNS)


def render_csv(records: Iterable[dict[str, Any]], *, columns: list[str] | None = None) -> str:
    """Render export rows as CSV text (for HTTP downloads)."""
    buffer = io.StringIO(newline="")
    _write_rows(buffer, records, columns or EXPORT_COLUMNS)
    return buffer.getvalue()
