"""Administrative hierarchy service: cached read-only index and reference-data import.

The index is cached per process and keyed by the row counts of the three
unit tables. Units are only ever added, so a changed count means another
process (usually ``civiclens hierarchy load``) has imported data and the
index is rebuilt on the next read.
"""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.lib.hierarchy import AdministrativeTier, AdministrativeUnit, HierarchyIndex, HierarchyRow
from civiclens_api.models.administrative_unit import LocalUnit, Region, SubRegion

HierarchyStamp = tuple[int, int, int]

_index_cache: tuple[HierarchyStamp, HierarchyIndex] | None = None


def invalidate_hierarchy_cache() -> None:
    """Drop the cached index so the next read reloads from the database."""
    global _index_cache  # noqa: PLW0603
    _index_cache = None


async def _hierarchy_stamp(session: AsyncSession) -> HierarchyStamp:
    counts = select(
        *(select(func.count()).select_from(model).scalar_subquery() for model in (Region, SubRegion, LocalUnit))
    )
    regions, sub_regions, local_units = (await session.execute(counts)).one()
    return regions, sub_regions, local_units


async def load_hierarchy_index(session: AsyncSession, *, refresh: bool = False) -> HierarchyIndex:
    """Return the process-wide hierarchy index.

    The cached index is reused while the unit tables are unchanged and
    rebuilt as soon as they grow.

    Args:
        session: Database session.
        refresh: Force a reload even if the cached index is current.
    """
    global _index_cache  # noqa: PLW0603
    stamp = await _hierarchy_stamp(session)
    if _index_cache is not None and not refresh and _index_cache[0] == stamp:
        return _index_cache[1]

    regions = (await session.execute(select(Region))).scalars().all()
    sub_regions = (await session.execute(select(SubRegion))).scalars().all()
    local_units = (await session.execute(select(LocalUnit))).scalars().all()

    units: list[AdministrativeUnit] = [
        AdministrativeUnit(id=r.id, name=r.name, tier=AdministrativeTier.REGION) for r in regions
    ]
    units.extend(
        AdministrativeUnit(id=s.id, name=s.name, tier=AdministrativeTier.SUB_REGION, parent_id=s.region_id)
        for s in sub_regions
    )
    units.extend(
        AdministrativeUnit(id=u.id, name=u.name, tier=AdministrativeTier.LOCAL_UNIT, parent_id=u.sub_region_id)
        for u in local_units
    )
    index = HierarchyIndex(units)
    _index_cache = (stamp, index)
    logger.debug(f"Loaded hierarchy index with {len(index)} units")
    return index


async def list_regions(session: AsyncSession) -> list[AdministrativeUnit]:
    """All regions ordered by name."""
    return (await load_hierarchy_index(session)).regions()


async def children_of(session: AsyncSession, unit_id: uuid.UUID, tier: AdministrativeTier) -> list[AdministrativeUnit]:
    """Children of a unit ordered by name; unknown units yield an empty list."""
    return (await load_hierarchy_index(session)).children_of(unit_id, tier)


async def validate_path(
    session: AsyncSession,
    region_id: uuid.UUID | None,
    sub_region_id: uuid.UUID | None = None,
    local_unit_id: uuid.UUID | None = None,
) -> bool:
    """True iff each present level descends from the previous one."""
    return (await load_hierarchy_index(session)).validate_path(region_id, sub_region_id, local_unit_id)


@dataclass
class HierarchyImportSummary:
    """Counts of units created by an import (existing units are reused)."""

    regions_created: int = 0
    sub_regions_created: int = 0
    local_units_created: int = 0

    @property
    def total_created(self) -> int:
        return self.regions_created + self.sub_regions_created + self.local_units_created


async def import_hierarchy(session: AsyncSession, rows: Iterable[HierarchyRow]) -> HierarchyImportSummary:
    """Create any units named in ``rows`` that do not exist yet.

    Matching is by name within the parent, so re-running an import is a
    no-op. Commits once at the end and invalidates the cached index.
    """
    summary = HierarchyImportSummary()

    regions = {r.name: r for r in (await session.execute(select(Region))).scalars().all()}
    sub_regions = {(s.region_id, s.name): s for s in (await session.execute(select(SubRegion))).scalars().all()}
    local_units = {
        (u.sub_region_id, u.name): u for u in (await session.execute(select(LocalUnit))).scalars().all()
    }

    for row in rows:
        region = regions.get(row.region)
        if region is None:
            region = Region(id=uuid.uuid4(), name=row.region)
            session.add(region)
            regions[row.region] = region
            summary.regions_created += 1

        if row.sub_region is None:
            continue
        sub_region = sub_regions.get((region.id, row.sub_region))
        if sub_region is None:
            sub_region = SubRegion(id=uuid.uuid4(), name=row.sub_region, region_id=region.id)
            session.add(sub_region)
            sub_regions[(region.id, row.sub_region)] = sub_region
            summary.sub_regions_created += 1

        if row.local_unit is None:
            continue
        if (sub_region.id, row.local_unit) not in local_units:
            local_unit = LocalUnit(id=uuid.uuid4(), name=row.local_unit, sub_region_id=sub_region.id)
            session.add(local_unit)
            local_units[(sub_region.id, row.local_unit)] = local_unit
            summary.local_units_created += 1

    await session.commit()
    invalidate_hierarchy_cache()
    logger.info(
        f"Hierarchy import created {summary.regions_created} regions, "
        f"{summary.sub_regions_created} sub-regions, {summary.local_units_created} local units"
    )
    return summary
