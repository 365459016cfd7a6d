"""Pydantic v2 schemas for reviews, discussion comments, and threads.

Feedback is a tagged union on ``kind``: a review carries only a rating,
a discussion only a body (and optional parent). Unknown fields are
rejected so the two can never be mixed on one record.
"""

import uuid
from datetime import datetime
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, RootModel

from civiclens_api.lib.ratings import MAX_RATING, MIN_RATING
from civiclens_api.lib.threads import ThreadNode


class ReviewSubmission(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["review"]
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING, strict=True)


class DiscussionSubmission(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: Literal["discussion"]
    body: str = Field(max_length=5000)
    parent_id: uuid.UUID | None = None


class FeedbackSubmission(RootModel[Annotated[ReviewSubmission | DiscussionSubmission, Field(discriminator="kind")]]):
    """Request body of the feedback endpoint; ``root`` is the submission picked by ``kind``."""


class RatingResponse(BaseModel):
    """A stored review."""

    model_config = {"from_attributes": True}

    kind: Literal["review"] = "review"
    citizen_id: uuid.UUID
    representative_id: uuid.UUID
    value: int
    updated_at: datetime


class CommentResponse(BaseModel):
    """A stored discussion comment as returned to its author."""

    model_config = {"from_attributes": True}

    kind: Literal["discussion"] = "discussion"
    id: uuid.UUID
    representative_id: uuid.UUID
    author_id: uuid.UUID
    body: str
    parent_id: uuid.UUID | None = None
    created_at: datetime


class RatingSummaryResponse(BaseModel):
    """Aggregate score plus whether the caller has already reviewed."""

    representative_id: uuid.UUID
    average_rating: float | None = Field(description="Mean rating; null when never rated")
    rating_count: int
    has_rated: bool


class PublicReply(BaseModel):
    model_config = {"from_attributes": True}

    id: uuid.UUID
    author_id: uuid.UUID
    body: str
    created_at: datetime


class PublicThreadEntry(PublicReply):
    """A visible top-level comment with its visible replies."""

    replies: list[PublicReply] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: ThreadNode) -> "PublicThreadEntry":
        entry = cls.model_validate(node.comment)
        entry.replies = [PublicReply.model_validate(reply) for reply in node.replies]
        return entry


class ModerationReply(PublicReply):
    hidden: bool


class ModerationThreadEntry(ModerationReply):
    """A top-level comment with all replies, hidden ones flagged."""

    replies: list[ModerationReply] = Field(default_factory=list)

    @classmethod
    def from_node(cls, node: ThreadNode) -> "ModerationThreadEntry":
        entry = cls.model_validate(node.comment)
        entry.replies = [ModerationReply.model_validate(reply) for reply in node.replies]
        return entry
