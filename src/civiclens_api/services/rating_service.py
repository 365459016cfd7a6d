"""One review per (citizen, representative), and score aggregation."""

import uuid
from collections.abc import Iterable

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.lib.ratings import EMPTY_SUMMARY, NoRatings, RatingSummary, validate_rating_value
from civiclens_api.models.base import utcnow
from civiclens_api.models.rating import Rating
from civiclens_api.services.representative_service import require_representative

_INSERTS = {"postgresql": pg_insert, "sqlite": sqlite_insert}


async def submit_rating(
    session: AsyncSession,
    citizen_id: uuid.UUID,
    representative_id: uuid.UUID,
    value: int,
) -> Rating:
    """Insert or replace the citizen's rating of a representative.

    Uses INSERT .. ON CONFLICT (citizen_id, representative_id) DO UPDATE so
    concurrent submissions collapse to the last committed value.

    Args:
        session: Database session.
        citizen_id: The rating citizen's user id.
        representative_id: The rated representative.
        value: Integer score, 1..5.

    Returns:
        The stored Rating.

    Raises:
        InvalidRatingValueError: If ``value`` is not an integer in 1..5.
        NotFoundError: If the representative does not exist.
    """
    value = validate_rating_value(value)
    await require_representative(session, representative_id)

    dialect = session.get_bind().dialect.name
    insert = _INSERTS.get(dialect)
    if insert is None:
        msg = f"Rating upsert is not supported on dialect {dialect!r}"
        raise RuntimeError(msg)

    now = utcnow()
    stmt = insert(Rating).values(
        id=uuid.uuid4(),
        citizen_id=citizen_id,
        representative_id=representative_id,
        value=value,
        created_at=now,
        updated_at=now,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Rating.citizen_id, Rating.representative_id],
        set_={"value": value, "updated_at": now},
    )
    await session.execute(stmt)
    await session.commit()

    rating = await get_rating(session, citizen_id, representative_id)
    if rating is None:  # pragma: no cover - the upsert above guarantees a row
        msg = "Rating upsert did not persist a row"
        raise RuntimeError(msg)
    logger.info(f"Citizen {citizen_id} rated representative {representative_id}: {value}")
    return rating


async def get_rating(session: AsyncSession, citizen_id: uuid.UUID, representative_id: uuid.UUID) -> Rating | None:
    """The citizen's current rating of a representative, freshly read."""
    result = await session.execute(
        select(Rating)
        .where(Rating.citizen_id == citizen_id, Rating.representative_id == representative_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def has_rated(session: AsyncSession, citizen_id: uuid.UUID, representative_id: uuid.UUID) -> bool:
    """Whether the citizen already holds a rating for the representative."""
    result = await session.execute(
        select(func.count(Rating.id)).where(
            Rating.citizen_id == citizen_id, Rating.representative_id == representative_id
        )
    )
    return result.scalar_one() > 0


async def rating_summary(session: AsyncSession, representative_id: uuid.UUID) -> RatingSummary:
    """Count and sum of all ratings for one representative."""
    result = await session.execute(
        select(func.count(Rating.id), func.coalesce(func.sum(Rating.value), 0)).where(
            Rating.representative_id == representative_id
        )
    )
    count, total = result.one()
    return RatingSummary(rating_count=int(count), rating_sum=int(total))


async def average_for(session: AsyncSession, representative_id: uuid.UUID) -> float | NoRatings:
    """Mean rating of a representative, or ``NO_RATINGS`` when it has none."""
    return (await rating_summary(session, representative_id)).average


async def rating_summaries(
    session: AsyncSession, representative_ids: Iterable[uuid.UUID]
) -> dict[uuid.UUID, RatingSummary]:
    """Summaries for many representatives in one grouped query.

    Representatives without ratings map to an empty summary.
    """
    ids = list(dict.fromkeys(representative_ids))
    if not ids:
        return {}
    result = await session.execute(
        select(Rating.representative_id, func.count(Rating.id), func.sum(Rating.value))
        .where(Rating.representative_id.in_(ids))
        .group_by(Rating.representative_id)
    )
    summaries = {rep_id: EMPTY_SUMMARY for rep_id in ids}
    for rep_id, count, total in result.all():
        summaries[rep_id] = RatingSummary(rating_count=int(count), rating_sum=int(total or 0))
    return summaries
