"""Citizen profile API endpoints.

GET /profile/me, PUT /profile/me, PUT /profile/me/location.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.api.errors import to_http_exception
from civiclens_api.core.config import Settings, get_settings
from civiclens_api.core.dependencies import get_async_session, get_current_user
from civiclens_api.core.errors import InvalidLocationError
from civiclens_api.models.citizen_profile import CitizenProfile
from civiclens_api.models.user import User
from civiclens_api.schemas.profile import LocationUpdateRequest, ProfileCompletionRequest, ProfileResponse
from civiclens_api.services import profile_service

profiles_router = APIRouter(prefix="/profile", tags=["profile"])


@profiles_router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> CitizenProfile:
    """Return the caller's profile."""
    profile = await profile_service.get_profile(session, current_user.id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not completed")
    return profile


@profiles_router.put("/me", response_model=ProfileResponse)
async def complete_my_profile(
    request: ProfileCompletionRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> CitizenProfile:
    """Complete or overwrite the caller's profile."""
    try:
        return await profile_service.complete_profile(
            session,
            current_user.id,
            request,
            photo_url=settings.photo_url_for(request.photo_url),
        )
    except InvalidLocationError as e:
        raise to_http_exception(e) from e


@profiles_router.put("/me/location", response_model=ProfileResponse)
async def update_my_location(
    request: LocationUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> CitizenProfile:
    """Change one or more location levels; lower levels reset unless supplied."""
    try:
        return await profile_service.update_location(session, current_user.id, request.changes())
    except InvalidLocationError as e:
        raise to_http_exception(e) from e
