"""Engine and session lifecycle for the async SQLAlchemy stack.

The API process creates one engine in its lifespan. CLI commands open a
short-lived engine around a single session with ``standalone_session``.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None

_NOT_INITIALIZED = "Database engine not initialized. Call init_engine() first."


def get_engine() -> AsyncEngine:
    """Return the process engine, raising ``RuntimeError`` before ``init_engine``."""
    if _engine is None:
        raise RuntimeError(_NOT_INITIALIZED)
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Return the process session factory, raising ``RuntimeError`` before ``init_engine``."""
    if _session_factory is None:
        raise RuntimeError(_NOT_INITIALIZED)
    return _session_factory


def engine_options(database_url: str, schema: str | None = None) -> dict[str, Any]:
    """Backend-specific keyword arguments for ``create_async_engine``.

    PostgreSQL gets a bounded, pre-pinged pool and, when ``schema`` is set,
    a search path that puts that schema ahead of ``public``. SQLite (tests
    and local tooling) gets the driver defaults.
    """
    if database_url.startswith("sqlite"):
        return {}
    options: dict[str, Any] = {"pool_size": 10, "max_overflow": 5, "pool_pre_ping": True}
    if schema is not None:
        options["connect_args"] = {"server_settings": {"search_path": f"{schema},public"}}
    return options


def init_engine(database_url: str, *, schema: str | None = None, **kwargs: Any) -> AsyncEngine:
    """Create the process engine and session factory.

    Args:
        database_url: Async connection string.
        schema: Optional PostgreSQL schema for isolated environments.
        **kwargs: Overrides for ``engine_options``.

    Returns:
        The created engine.
    """
    global _engine, _session_factory  # noqa: PLW0603
    options = engine_options(database_url, schema)
    options.update(kwargs)
    _engine = create_async_engine(database_url, **options)
    _session_factory = async_sessionmaker(_engine, expire_on_commit=False)
    return _engine


async def dispose_engine() -> None:
    """Dispose of the process engine and forget the session factory."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None


@asynccontextmanager
async def standalone_session(database_url: str, *, schema: str | None = None) -> AsyncIterator[AsyncSession]:
    """One session on a freshly created engine, disposed on exit.

    Used by CLI commands, which run outside the API lifespan.
    """
    init_engine(database_url, schema=schema)
    try:
        async with get_session_factory()() as session:
            yield session
    finally:
        await dispose_engine()
