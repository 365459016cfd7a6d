"""CSV loader for administrative hierarchy reference data.

Expects one row per local unit with ``region``, ``sub_region`` and
``local_unit`` columns. Rows may leave ``local_unit`` (or both lower
columns) blank to declare a unit without children.
"""

import csv
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

REQUIRED_COLUMNS = ("region", "sub_region", "local_unit")


@dataclass(frozen=True)
class HierarchyRow:
    """One normalized row of the hierarchy file."""

    region: str
    sub_region: str | None
    local_unit: str | None


def parse_hierarchy_csv(file_path: Path) -> list[HierarchyRow]:
    """Parse a hierarchy CSV into deduplicated rows, preserving file order.

    Raises:
        ValueError: If the header is missing, a required column is absent,
            or a row names a local unit without a sub-region.
    """
    logger.info(f"Parsing hierarchy CSV: {file_path}")

    seen: set[HierarchyRow] = set()
    rows: list[HierarchyRow] = []

    with Path.open(file_path, newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)

        if reader.fieldnames is None:
            msg = f"CSV file has no header row: {file_path}"
            raise ValueError(msg)

        fieldnames = {name.strip().lower() for name in reader.fieldnames}
        missing = set(REQUIRED_COLUMNS) - fieldnames
        if missing:
            msg = f"CSV missing expected columns: {sorted(missing)}"
            raise ValueError(msg)

        for line_number, raw in enumerate(reader, start=2):
            record = {k.strip().lower(): (v or "").strip() for k, v in raw.items() if k is not None}
            region = record["region"]
            if not region:
                continue
            sub_region = record["sub_region"] or None
            local_unit = record["local_unit"] or None
            if local_unit and not sub_region:
                msg = f"Line {line_number}: local_unit {local_unit!r} has no sub_region"
                raise ValueError(msg)

            row = HierarchyRow(region=region, sub_region=sub_region, local_unit=local_unit)
            if row not in seen:
                seen.add(row)
                rows.append(row)

    logger.info(f"Parsed {len(rows)} hierarchy rows")
    return rows
