"""Citizen profile completion and location selection."""

import uuid
from collections.abc import Mapping

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.errors import InvalidLocationError
from civiclens_api.lib.hierarchy import LocationSelection
from civiclens_api.models.citizen_profile import CitizenProfile
from civiclens_api.schemas.profile import ASPIRANT_POSITION, ProfileCompletionRequest
from civiclens_api.services.hierarchy_service import validate_path


async def get_profile(session: AsyncSession, user_id: uuid.UUID) -> CitizenProfile | None:
    """Get a citizen profile by its owner's user id."""
    result = await session.execute(select(CitizenProfile).where(CitizenProfile.id == user_id))
    return result.scalar_one_or_none()


async def _require_valid_path(session: AsyncSession, selection: LocationSelection) -> None:
    if not await validate_path(session, selection.region_id, selection.sub_region_id, selection.local_unit_id):
        msg = "Selected sub-region and local unit must belong to the selected region and sub-region"
        raise InvalidLocationError(msg)


async def complete_profile(
    session: AsyncSession,
    user_id: uuid.UUID,
    request: ProfileCompletionRequest,
    *,
    photo_url: str,
) -> CitizenProfile:
    """Create or overwrite the caller's profile from the completion form.

    Args:
        session: Database session.
        user_id: The profile owner.
        request: Validated form data.
        photo_url: Public URL of the uploaded photo.

    Returns:
        The stored profile.

    Raises:
        InvalidLocationError: If the location ids do not form a valid path.
    """
    selection = LocationSelection(
        region_id=request.region_id,
        sub_region_id=request.sub_region_id,
        local_unit_id=request.local_unit_id,
    )
    await _require_valid_path(session, selection)

    profile = await get_profile(session, user_id)
    if profile is None:
        profile = CitizenProfile(id=user_id)
        session.add(profile)

    profile.full_name = request.full_name
    profile.phone = request.phone
    profile.national_id = request.national_id
    profile.photo_url = photo_url
    profile.region_id = selection.region_id
    profile.sub_region_id = selection.sub_region_id
    profile.local_unit_id = selection.local_unit_id
    profile.is_aspirant = request.position == ASPIRANT_POSITION
    profile.is_representative = request.position is not None and not profile.is_aspirant

    await session.commit()
    await session.refresh(profile)
    logger.info(f"Completed profile {user_id}")
    return profile


async def update_location(
    session: AsyncSession,
    user_id: uuid.UUID,
    changes: Mapping[str, uuid.UUID | None],
) -> CitizenProfile:
    """Change the caller's location, clearing descendants of any changed level.

    Levels absent from ``changes`` keep their current value unless a level
    above them changes. A user without a profile gets a bare one.

    Raises:
        InvalidLocationError: If the resulting path is not a true descent.
    """
    profile = await get_profile(session, user_id)
    current = (
        LocationSelection(
            region_id=profile.region_id,
            sub_region_id=profile.sub_region_id,
            local_unit_id=profile.local_unit_id,
        )
        if profile is not None
        else LocationSelection()
    )
    selection = current.apply(changes)
    await _require_valid_path(session, selection)

    if profile is None:
        profile = CitizenProfile(id=user_id)
        session.add(profile)
    profile.region_id = selection.region_id
    profile.sub_region_id = selection.sub_region_id
    profile.local_unit_id = selection.local_unit_id

    await session.commit()
    await session.refresh(profile)
    logger.info(f"Profile {user_id} location set to {selection}")
    return profile
