"""Pydantic v2 schemas for representatives."""

import uuid
from datetime import datetime

from pydantic import BaseModel, Field

from civiclens_api.lib.representatives import Position
from civiclens_api.schemas.common import PaginationMeta


class RepresentativeSummaryResponse(BaseModel):
    """Representative summary for list endpoints."""

    model_config = {"from_attributes": True}

    id: uuid.UUID
    full_name: str
    position: Position
    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None
    photo_url: str | None = None


class RepresentativeDetailResponse(RepresentativeSummaryResponse):
    """Full representative record including bio and manifesto."""

    bio: str | None = None
    manifesto: str | None = None
    created_at: datetime
    updated_at: datetime


class PaginatedRepresentativeResponse(BaseModel):
    items: list[RepresentativeSummaryResponse]
    pagination: PaginationMeta


class RatedRepresentativeResponse(RepresentativeSummaryResponse):
    """A resolved representative with its score, as shown on the citizen dashboard."""

    average_rating: float | None = Field(default=None, description="Mean rating; null when never rated")
    rating_count: int = 0


class RepresentativeCreateRequest(BaseModel):
    """Admin request to register a representative.

    Exactly the jurisdiction id matching ``position`` must be supplied.
    """

    full_name: str = Field(min_length=1, max_length=200)
    position: Position
    region_id: uuid.UUID | None = None
    sub_region_id: uuid.UUID | None = None
    local_unit_id: uuid.UUID | None = None
    bio: str | None = None
    manifesto: str | None = None
    photo_url: str | None = None


class RepresentativeUpdateRequest(BaseModel):
    """Admin request to edit a representative's descriptive fields.

    Position and jurisdiction are fixed once created.
    """

    full_name: str | None = Field(default=None, min_length=1, max_length=200)
    bio: str | None = None
    manifesto: str | None = None
    photo_url: str | None = None
