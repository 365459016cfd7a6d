"""Schema migration commands backed by Alembic.

The connection string always comes from ``DATABASE_URL`` (see
``alembic/env.py``); ``--config`` only selects the ini file.
"""

from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

db_app = typer.Typer()

ConfigPath = Annotated[Path, typer.Option("--config", "-c", help="Path to alembic.ini")]


def _alembic_config(path: Path):  # noqa: ANN202
    from alembic.config import Config

    if not path.exists():
        typer.echo(f"Error: {path} does not exist", err=True)
        raise typer.Exit(code=1)
    return Config(str(path))


@db_app.command()
def upgrade(
    revision: Annotated[str, typer.Argument(help="Target revision")] = "head",
    config: ConfigPath = Path("alembic.ini"),
    sql: Annotated[bool, typer.Option("--sql", help="Print the SQL instead of executing it")] = False,
) -> None:
    """Migrate the schema forward to ``revision``."""
    from alembic import command

    alembic_config = _alembic_config(config)
    logger.info(f"Upgrading schema to {revision}{' (offline)' if sql else ''}")
    command.upgrade(alembic_config, revision, sql=sql)


@db_app.command()
def downgrade(
    revision: Annotated[str, typer.Argument(help="Target revision")] = "-1",
    config: ConfigPath = Path("alembic.ini"),
) -> None:
    """Roll the schema back to ``revision``."""
    from alembic import command

    alembic_config = _alembic_config(config)
    logger.info(f"Downgrading schema to {revision}")
    command.downgrade(alembic_config, revision)


@db_app.command()
def current(config: ConfigPath = Path("alembic.ini")) -> None:
    """Show the revision the database is at."""
    from alembic import command

    command.current(_alembic_config(config), verbose=True)
