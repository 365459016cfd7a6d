"""Moderation export writers.

``export_rows`` writes the flattened rows from
``moderation_service.flatten_for_export`` to a file; ``render_csv``
produces the same CSV in memory for the HTTP download.
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from civiclens_api.lib.exporter.csv_writer import EXPORT_COLUMNS, render_csv, write_csv
from civiclens_api.lib.exporter.json_writer import write_json

Writer = Callable[[Path, Iterable[dict[str, Any]]], int]

_WRITERS: dict[str, Writer] = {"csv": write_csv, "json": write_json}
SUPPORTED_FORMATS = list(_WRITERS)


@dataclass(frozen=True)
class ExportResult:
    record_count: int
    output_path: Path
    file_size_bytes: int


def export_rows(records: Iterable[dict[str, Any]], output_format: str, output_path: Path) -> ExportResult:
    """Write ``records`` to ``output_path``, creating parent directories.

    Raises:
        ValueError: ``output_format`` is not one of ``SUPPORTED_FORMATS``.
    """
    writer = _WRITERS.get(output_format)
    if writer is None:
        msg = f"Unsupported format: {output_format}. Supported: {', '.join(SUPPORTED_FORMATS)}"
        raise ValueError(msg)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    count = writer(output_path, records)
    return ExportResult(record_count=count, output_path=output_path, file_size_bytes=output_path.stat().st_size)


__all__ = ["EXPORT_COLUMNS", "SUPPORTED_FORMATS", "ExportResult", "export_rows", "render_csv"]
