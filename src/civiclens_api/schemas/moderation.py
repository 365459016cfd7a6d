"""Pydantic v2 schemas for the admin moderation view."""

import uuid

from pydantic import BaseModel, Field

from civiclens_api.schemas.representative import RepresentativeSummaryResponse


class ModeratedComment(BaseModel):
    id: uuid.UUID
    text: str
    hidden: bool
    parent_id: uuid.UUID | None = None


class RepresentativeStatsResponse(BaseModel):
    """One representative's score and every comment, hidden ones included."""

    representative: RepresentativeSummaryResponse
    average_rating: float | None = Field(description="Mean rating; null when never rated")
    rating_count: int
    comments: list[ModeratedComment] = Field(default_factory=list)


class HiddenUpdateRequest(BaseModel):
    hidden: bool


class HiddenUpdateResponse(BaseModel):
    id: uuid.UUID
    hidden: bool
