"""``civiclens`` command line entry point."""

from typing import Annotated

import typer

from civiclens_api.core.config import get_settings
from civiclens_api.core.logging import setup_logging

app = typer.Typer(name="civiclens", help="Operate the CivicLens representative feedback service.", no_args_is_help=True)


@app.callback()
def _main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log at DEBUG regardless of LOG_LEVEL")] = False,
) -> None:
    """Configure logging before any subcommand runs."""
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level, log_dir=settings.log_dir)


@app.command()
def serve(
    host: Annotated[str, typer.Option("--host", help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option("--port", help="Bind port")] = 8000,
    reload: Annotated[bool, typer.Option("--reload", help="Restart on code changes")] = False,
) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("civiclens_api.main:create_app", factory=True, host=host, port=port, reload=reload)


def _register_subcommands() -> None:
    from civiclens_api.cli.db_cmd import db_app
    from civiclens_api.cli.hierarchy_cmd import hierarchy_app
    from civiclens_api.cli.moderation_cmd import moderation_app
    from civiclens_api.cli.user_cmd import user_app

    app.add_typer(db_app, name="db", help="Schema migrations")
    app.add_typer(user_app, name="user", help="Accounts and roles")
    app.add_typer(hierarchy_app, name="hierarchy", help="Region / sub-region / local unit reference data")
    app.add_typer(moderation_app, name="moderation", help="Moderation reports")


_register_subcommands()
