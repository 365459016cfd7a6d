"""Representative admin CRUD and location-based resolution."""

import uuid

from loguru import logger
from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.errors import InvalidJurisdictionError, NotFoundError
from civiclens_api.lib.hierarchy import LocationSelection
from civiclens_api.lib.representatives import Position, resolve_representatives, validate_jurisdiction
from civiclens_api.lib.representatives.resolver import LocationLike
from civiclens_api.models.administrative_unit import LocalUnit, SubRegion
from civiclens_api.models.representative import Representative
from civiclens_api.services.hierarchy_service import load_hierarchy_index

# Fields that may be set via the update endpoint. Position and
# jurisdiction are fixed at creation.
_UPDATABLE_FIELDS: frozenset[str] = frozenset({"full_name", "bio", "manifesto", "photo_url"})

# ---------------------------------------------------------------------------
# Read operations (public)
# ---------------------------------------------------------------------------


def _region_scope(region_id: uuid.UUID):  # noqa: ANN202
    """WHERE clause matching representatives whose jurisdiction lies in a region."""
    sub_regions = select(SubRegion.id).where(SubRegion.region_id == region_id)
    local_units = select(LocalUnit.id).join(SubRegion, LocalUnit.sub_region_id == SubRegion.id).where(
        SubRegion.region_id == region_id
    )
    return or_(
        Representative.region_id == region_id,
        Representative.sub_region_id.in_(sub_regions),
        Representative.local_unit_id.in_(local_units),
    )


async def list_representatives(
    session: AsyncSession,
    *,
    region_id: uuid.UUID | None = None,
    position: Position | None = None,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[Representative], int]:
    """List representatives ordered by name with optional filters.

    Args:
        session: Database session.
        region_id: Only representatives whose jurisdiction lies in this region.
        position: Only representatives holding this position.
        page: Page number.
        page_size: Items per page.

    Returns:
        Tuple of (representatives, total count).
    """
    query = select(Representative)
    count_query = select(func.count(Representative.id))

    if region_id:
        clause = _region_scope(region_id)
        query = query.where(clause)
        count_query = count_query.where(clause)
    if position:
        query = query.where(Representative.position == position.value)
        count_query = count_query.where(Representative.position == position.value)

    total = (await session.execute(count_query)).scalar_one()
    offset = (page - 1) * page_size
    query = query.order_by(Representative.full_name, Representative.id).offset(offset).limit(page_size)
    result = await session.execute(query)
    return list(result.scalars().all()), total


async def list_all_representatives(
    session: AsyncSession,
    *,
    region_id: uuid.UUID | None = None,
    position: Position | None = None,
) -> list[Representative]:
    """Unpaginated variant of ``list_representatives`` for moderation and export."""
    query = select(Representative)
    if region_id:
        query = query.where(_region_scope(region_id))
    if position:
        query = query.where(Representative.position == position.value)
    result = await session.execute(query.order_by(Representative.full_name, Representative.id))
    return list(result.scalars().all())


async def get_representative(session: AsyncSession, representative_id: uuid.UUID) -> Representative | None:
    """Get a representative by ID."""
    result = await session.execute(select(Representative).where(Representative.id == representative_id))
    return result.scalar_one_or_none()


async def require_representative(session: AsyncSession, representative_id: uuid.UUID) -> Representative:
    """Get a representative by ID or raise ``NotFoundError``."""
    representative = await get_representative(session, representative_id)
    if representative is None:
        raise NotFoundError("Representative", representative_id)
    return representative


async def resolve_for_location(session: AsyncSession, location: LocationLike | None) -> list[Representative]:
    """Representatives covering a citizen's location, in tier order.

    A missing profile or partial location still yields the Head-of-State
    and whatever levels are known.

    Args:
        session: Database session.
        location: A CitizenProfile (or anything with the three location ids), or None.

    Returns:
        Head-of-State, region leaders, sub-region leader, local-unit leader.
    """
    region_id = location.region_id if location is not None else None
    sub_region_id = location.sub_region_id if location is not None else None
    local_unit_id = location.local_unit_id if location is not None else None

    conditions = [Representative.position == Position.PRESIDENT.value]
    if region_id is not None:
        conditions.append(Representative.region_id == region_id)
        if sub_region_id is not None:
            conditions.append(Representative.sub_region_id == sub_region_id)
        if local_unit_id is not None:
            conditions.append(Representative.local_unit_id == local_unit_id)

    result = await session.execute(select(Representative).where(or_(*conditions)))
    candidates = list(result.scalars().all())

    target = LocationSelection(region_id=region_id, sub_region_id=sub_region_id, local_unit_id=local_unit_id)
    return resolve_representatives(target, candidates)


# ---------------------------------------------------------------------------
# Write operations (admin)
# ---------------------------------------------------------------------------


async def create_representative(
    session: AsyncSession,
    *,
    full_name: str,
    position: Position | str,
    region_id: uuid.UUID | None = None,
    sub_region_id: uuid.UUID | None = None,
    local_unit_id: uuid.UUID | None = None,
    bio: str | None = None,
    manifesto: str | None = None,
    photo_url: str | None = None,
) -> Representative:
    """Create a representative after checking its jurisdiction.

    Raises:
        InvalidJurisdictionError: If the jurisdiction ids do not match the
            position tier or reference an unknown unit.
    """
    position = validate_jurisdiction(
        position, region_id=region_id, sub_region_id=sub_region_id, local_unit_id=local_unit_id
    )
    jurisdiction_id = region_id or sub_region_id or local_unit_id
    if jurisdiction_id is not None:
        index = await load_hierarchy_index(session)
        unit = index.get(jurisdiction_id)
        if unit is None or unit.tier.value != position.level.value:
            msg = f"{position.level} {jurisdiction_id} does not exist"
            raise InvalidJurisdictionError(msg)

    representative = Representative(
        full_name=full_name.strip(),
        position=position.value,
        region_id=region_id,
        sub_region_id=sub_region_id,
        local_unit_id=local_unit_id,
        bio=bio,
        manifesto=manifesto,
        photo_url=photo_url,
    )
    session.add(representative)
    await session.commit()
    await session.refresh(representative)
    logger.info(f"Created representative {representative.id} ({position}) for jurisdiction {jurisdiction_id}")
    return representative


async def update_representative(
    session: AsyncSession,
    representative: Representative,
    updates: dict,
) -> Representative:
    """Apply allow-listed field updates to a representative.

    Args:
        session: Database session.
        representative: The representative to update.
        updates: Dict of field_name -> new_value; unknown fields are ignored.

    Returns:
        The updated Representative.
    """
    applied = []
    for field_name, value in updates.items():
        if field_name in _UPDATABLE_FIELDS:
            setattr(representative, field_name, value)
            applied.append(field_name)
    await session.commit()
    await session.refresh(representative)
    logger.info(f"Updated representative {representative.id}: {', '.join(sorted(applied)) or 'no changes'}")
    return representative


async def delete_representative(session: AsyncSession, representative: Representative) -> None:
    """Delete a representative along with its ratings and comments."""
    await session.delete(representative)
    await session.commit()
    logger.info(f"Deleted representative {representative.id}")
