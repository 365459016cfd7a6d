"""Pydantic v2 schemas for the administrative hierarchy."""

import uuid

from pydantic import BaseModel

from civiclens_api.lib.hierarchy import AdministrativeTier


class AdministrativeUnitResponse(BaseModel):
    """A region, sub-region or local unit."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    name: str
    tier: AdministrativeTier
    parent_id: uuid.UUID | None = None


class LocationPath(BaseModel):
    """A region / sub-region / local-unit path."""

    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None


class PathValidationResponse(BaseModel):
    valid: bool
