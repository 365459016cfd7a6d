"""Moderation export CLI command.

The caller is named explicitly with ``--admin`` and must hold the
administrator role, exactly as over HTTP.
"""

import asyncio
import uuid
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated

import typer

from civiclens_api.core.config import get_settings
from civiclens_api.lib.representatives import Position

moderation_app = typer.Typer()


@moderation_app.command("export")
def export(
    admin: Annotated[str, typer.Option("--admin", help="Username of the administrator running the export")],
    output: Annotated[
        Path | None, typer.Option("--output", "-o", help="Output file (default: under EXPORT_DIR)")
    ] = None,
    output_format: Annotated[str, typer.Option("--format", "-f", help="Output format (csv or json)")] = "csv",
    region: Annotated[str | None, typer.Option("--region", help="Only representatives in this region id")] = None,
    position: Annotated[str | None, typer.Option("--position", help="Only this position")] = None,
) -> None:
    """Export every representative's score and comments, one row per comment."""
    try:
        region_id = uuid.UUID(region) if region else None
        position_filter = Position(position.lower()) if position else None
    except ValueError as e:
        typer.echo(f"Error: invalid filter: {e}", err=True)
        raise typer.Exit(code=1) from e

    if output is None:
        output = default_export_path(Path(get_settings().export_dir), output_format)

    asyncio.run(_export_impl(output, admin, output_format, region_id, position_filter))


def default_export_path(export_dir: Path, output_format: str) -> Path:
    """``export_dir/moderation-YYYYmmddTHHMMSSZ.<format>`` for the current UTC time."""
    stamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")
    return export_dir / f"moderation-{stamp}.{output_format}"


async def _export_impl(
    output: Path,
    admin_username: str,
    output_format: str,
    region_id: uuid.UUID | None,
    position: Position | None,
) -> None:
    from civiclens_api.core.database import standalone_session
    from civiclens_api.core.errors import UnauthorizedError
    from civiclens_api.services.auth_service import get_user_by_username
    from civiclens_api.services.moderation_service import export_stats

    settings = get_settings()
    try:
        async with standalone_session(settings.database_url, schema=settings.database_schema) as session:
            caller = await get_user_by_username(session, admin_username)
            result = await export_stats(
                session,
                caller,
                output,
                output_format=output_format,
                region_id=region_id,
                position=position,
            )
    except UnauthorizedError as e:
        typer.echo(f"Error: {admin_username}: {e}", err=True)
        raise typer.Exit(code=1) from e
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
    typer.echo(f"Exported {result.record_count} rows to {result.output_path} ({result.file_size_bytes} bytes)")
