"""Shared test fixtures for async database, sessions, seeded hierarchy, and auth tokens."""

import uuid
from collections.abc import AsyncGenerator
from dataclasses import dataclass

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from civiclens_api.core.config import Settings
from civiclens_api.core.security import create_access_token, hash_password
from civiclens_api.models import LocalUnit, Region, Representative, SubRegion, User
from civiclens_api.models.base import Base
from civiclens_api.services.hierarchy_service import invalidate_hierarchy_cache

_MEMORY_DB = "sqlite+aiosqlite:///:memory:"


@dataclass
class SeededHierarchy:
    """Two regions; the first with two sub-regions, one of which has two local units."""

    region: Region
    other_region: Region
    sub_region: SubRegion
    sibling_sub_region: SubRegion
    other_sub_region: SubRegion
    local_unit: LocalUnit
    sibling_local_unit: LocalUnit


@pytest.fixture(autouse=True)
def _reset_hierarchy_cache() -> None:
    """Each test starts without a cached hierarchy index."""
    invalidate_hierarchy_cache()


@pytest.fixture
def settings() -> Settings:
    return Settings(database_url=_MEMORY_DB, jwt_secret_key="test-secret-key-not-for-production")


@pytest.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory SQLite database with every table created."""
    engine = create_async_engine(_MEMORY_DB)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def async_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    async with async_sessionmaker(async_engine, expire_on_commit=False)() as session:
        yield session


async def _make_user(session: AsyncSession, username: str, role: str) -> User:
    user = User(
        id=uuid.uuid4(),
        username=username,
        email=f"{username}@test.com",
        hashed_password=hash_password("testpassword123"),
        role=role,
    )
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@pytest.fixture
async def admin_user(async_session: AsyncSession) -> User:
    """An administrator account."""
    return await _make_user(async_session, "testadmin", "admin")


@pytest.fixture
async def citizen_user(async_session: AsyncSession) -> User:
    """An ordinary citizen account."""
    return await _make_user(async_session, "testcitizen", "citizen")


@pytest.fixture
async def other_citizen(async_session: AsyncSession) -> User:
    """A second citizen account."""
    return await _make_user(async_session, "othercitizen", "citizen")


@pytest.fixture
async def hierarchy(async_session: AsyncSession) -> SeededHierarchy:
    """Nairobi (Westlands, Langata) and Mombasa (Nyali) with two Westlands wards."""
    region = Region(id=uuid.uuid4(), name="Nairobi")
    other_region = Region(id=uuid.uuid4(), name="Mombasa")
    sub_region = SubRegion(id=uuid.uuid4(), name="Westlands", region_id=region.id)
    sibling_sub_region = SubRegion(id=uuid.uuid4(), name="Langata", region_id=region.id)
    other_sub_region = SubRegion(id=uuid.uuid4(), name="Nyali", region_id=other_region.id)
    local_unit = LocalUnit(id=uuid.uuid4(), name="Parklands", sub_region_id=sub_region.id)
    sibling_local_unit = LocalUnit(id=uuid.uuid4(), name="Kangemi", sub_region_id=sub_region.id)
    async_session.add_all(
        [region, other_region, sub_region, sibling_sub_region, other_sub_region, local_unit, sibling_local_unit]
    )
    await async_session.commit()
    return SeededHierarchy(
        region=region,
        other_region=other_region,
        sub_region=sub_region,
        sibling_sub_region=sibling_sub_region,
        other_sub_region=other_sub_region,
        local_unit=local_unit,
        sibling_local_unit=sibling_local_unit,
    )


@pytest.fixture
async def representatives(async_session: AsyncSession, hierarchy: SeededHierarchy) -> dict[str, Representative]:
    """One representative per position, all covering the seeded Parklands ward."""
    reps = {
        "president": Representative(full_name="Amina Head", position="president"),
        "governor": Representative(full_name="Brian Governor", position="governor", region_id=hierarchy.region.id),
        "senator": Representative(full_name="Carol Senator", position="senator", region_id=hierarchy.region.id),
        "mp": Representative(full_name="David Member", position="mp", sub_region_id=hierarchy.sub_region.id),
        "mca": Representative(full_name="Esther Ward", position="mca", local_unit_id=hierarchy.local_unit.id),
        "other_governor": Representative(
            full_name="Faith Coast", position="governor", region_id=hierarchy.other_region.id
        ),
    }
    async_session.add_all(reps.values())
    await async_session.commit()
    return reps


@pytest.fixture
def admin_token(settings: Settings) -> str:
    """Generate a JWT access token for an admin user."""
    return create_access_token(
        subject=str(uuid.uuid4()),
        role="admin",
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
