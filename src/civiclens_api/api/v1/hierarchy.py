"""Administrative hierarchy API endpoints (public, read-only)."""

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.dependencies import get_async_session
from civiclens_api.lib.hierarchy import AdministrativeTier
from civiclens_api.schemas.hierarchy import AdministrativeUnitResponse, LocationPath, PathValidationResponse
from civiclens_api.services import hierarchy_service

hierarchy_router = APIRouter(tags=["hierarchy"])


def _internal_error(what: str, exc: Exception) -> HTTPException:
    logger.error(f"Unexpected error {what}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Internal server error {what}.",
    )


@hierarchy_router.get("/regions", response_model=list[AdministrativeUnitResponse])
async def list_regions(
    session: AsyncSession = Depends(get_async_session),
) -> list[AdministrativeUnitResponse]:
    """All regions ordered by name."""
    try:
        units = await hierarchy_service.list_regions(session)
    except Exception as e:
        raise _internal_error("listing regions", e) from e
    return [AdministrativeUnitResponse.model_validate(u) for u in units]


@hierarchy_router.get("/regions/{region_id}/sub-regions", response_model=list[AdministrativeUnitResponse])
async def list_sub_regions(
    region_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> list[AdministrativeUnitResponse]:
    """Sub-regions of a region ordered by name; empty for an unknown region."""
    try:
        units = await hierarchy_service.children_of(session, region_id, AdministrativeTier.REGION)
    except Exception as e:
        raise _internal_error("listing sub-regions", e) from e
    return [AdministrativeUnitResponse.model_validate(u) for u in units]


@hierarchy_router.get("/sub-regions/{sub_region_id}/local-units", response_model=list[AdministrativeUnitResponse])
async def list_local_units(
    sub_region_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> list[AdministrativeUnitResponse]:
    """Local units of a sub-region ordered by name; empty for an unknown sub-region."""
    try:
        units = await hierarchy_service.children_of(session, sub_region_id, AdministrativeTier.SUB_REGION)
    except Exception as e:
        raise _internal_error("listing local units", e) from e
    return [AdministrativeUnitResponse.model_validate(u) for u in units]


@hierarchy_router.post("/hierarchy/validate", response_model=PathValidationResponse)
async def validate_location_path(
    body: LocationPath,
    session: AsyncSession = Depends(get_async_session),
) -> PathValidationResponse:
    """Check that each supplied level descends from the one above it."""
    try:
        valid = await hierarchy_service.validate_path(
            session, body.region_id, body.sub_region_id, body.local_unit_id
        )
    except Exception as e:
        raise _internal_error("validating location", e) from e
    return PathValidationResponse(valid=valid)
