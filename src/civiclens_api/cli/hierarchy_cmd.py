"""CLI commands for loading the administrative hierarchy."""

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from loguru import logger

if TYPE_CHECKING:
    from civiclens_api.lib.hierarchy import HierarchyRow
    from civiclens_api.services.hierarchy_service import HierarchyImportSummary

hierarchy_app = typer.Typer()


@hierarchy_app.command("load")
def load(
    csv_path: Annotated[Path, typer.Argument(help="CSV with region, sub_region, local_unit columns")],
) -> None:
    """Create regions, sub-regions and local units listed in a CSV file.

    Units that already exist are left alone, so the same file can be
    loaded repeatedly.
    """
    from civiclens_api.lib.hierarchy import parse_hierarchy_csv

    if not csv_path.exists():
        typer.echo(f"Error: {csv_path} does not exist", err=True)
        raise typer.Exit(code=1)
    try:
        rows = parse_hierarchy_csv(csv_path)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    logger.info("Parsed {} hierarchy rows from {}", len(rows), csv_path)

    summary = asyncio.run(_load_impl(rows))
    typer.echo(
        f"Loaded {csv_path.name}\n"
        f"  Regions created: {summary.regions_created}\n"
        f"  Sub-regions created: {summary.sub_regions_created}\n"
        f"  Local units created: {summary.local_units_created}"
    )


async def _load_impl(rows: list["HierarchyRow"]) -> "HierarchyImportSummary":
    from civiclens_api.core.config import get_settings
    from civiclens_api.core.database import standalone_session
    from civiclens_api.services.hierarchy_service import import_hierarchy

    settings = get_settings()
    async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
        return await import_hierarchy(session, rows)
