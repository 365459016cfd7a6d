"""Representative API endpoints: directory, dashboard resolution, and feedback.

Public reads:
    GET /representatives, GET /representatives/{id},
    GET /representatives/{id}/comments
Authenticated:
    GET /representatives/mine, GET /representatives/{id}/rating,
    POST /representatives/{id}/feedback
Admin only:
    POST /representatives, PATCH /representatives/{id},
    DELETE /representatives/{id}
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.api.errors import DOMAIN_ERRORS, to_http_exception
from civiclens_api.core.dependencies import get_async_session, get_current_user, require_role
from civiclens_api.lib.representatives import Position
from civiclens_api.models.representative import Representative
from civiclens_api.models.user import ADMIN_ROLE, User
from civiclens_api.schemas.common import PaginationMeta
from civiclens_api.schemas.feedback import (
    CommentResponse,
    FeedbackSubmission,
    PublicThreadEntry,
    RatingResponse,
    RatingSummaryResponse,
    ReviewSubmission,
)
from civiclens_api.schemas.representative import (
    PaginatedRepresentativeResponse,
    RatedRepresentativeResponse,
    RepresentativeCreateRequest,
    RepresentativeDetailResponse,
    RepresentativeSummaryResponse,
    RepresentativeUpdateRequest,
)
from civiclens_api.services import comment_service, profile_service, rating_service, representative_service

representatives_router = APIRouter(prefix="/representatives", tags=["representatives"])


# ---------------------------------------------------------------------------
# Public directory
# ---------------------------------------------------------------------------


@representatives_router.get("", response_model=PaginatedRepresentativeResponse)
async def list_representatives(
    region_id: uuid.UUID | None = Query(None, description="Jurisdiction lies in this region"),
    position: Position | None = Query(None, description="Filter by position"),
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(20, ge=1, le=100, description="Items per page"),
    session: AsyncSession = Depends(get_async_session),
) -> PaginatedRepresentativeResponse:
    """List representatives ordered by name."""
    try:
        items, total = await representative_service.list_representatives(
            session,
            region_id=region_id,
            position=position,
            page=page,
            page_size=page_size,
        )
    except Exception as e:
        logger.error(f"Unexpected error listing representatives: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error listing representatives.",
        ) from e
    return PaginatedRepresentativeResponse(
        items=[RepresentativeSummaryResponse.model_validate(r) for r in items],
        pagination=PaginationMeta.build(total=total, page=page, page_size=page_size),
    )


@representatives_router.get("/mine", response_model=list[RatedRepresentativeResponse])
async def my_representatives(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> list[RatedRepresentativeResponse]:
    """Representatives covering the caller's location, with their scores.

    Order: Head-of-State, region leaders, sub-region leader, local-unit
    leader. Levels the caller has not chosen are omitted.
    """
    profile = await profile_service.get_profile(session, current_user.id)
    representatives = await representative_service.resolve_for_location(session, profile)
    summaries = await rating_service.rating_summaries(session, [r.id for r in representatives])

    response = []
    for representative in representatives:
        summary = summaries[representative.id]
        item = RatedRepresentativeResponse.model_validate(representative)
        item.average_rating = summary.average_or_none
        item.rating_count = summary.rating_count
        response.append(item)
    return response


@representatives_router.get("/{representative_id}", response_model=RepresentativeDetailResponse)
async def get_representative(
    representative_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> Representative:
    """Get a single representative's full record."""
    representative = await representative_service.get_representative(session, representative_id)
    if representative is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Representative not found")
    return representative


@representatives_router.get("/{representative_id}/comments", response_model=list[PublicThreadEntry])
async def list_comments(
    representative_id: uuid.UUID,
    session: AsyncSession = Depends(get_async_session),
) -> list[PublicThreadEntry]:
    """Visible discussion about a representative, oldest first, replies nested."""
    try:
        await representative_service.require_representative(session, representative_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    thread = await comment_service.list_public(session, representative_id)
    return [PublicThreadEntry.from_node(node) for node in thread]


# ---------------------------------------------------------------------------
# Citizen feedback
# ---------------------------------------------------------------------------


@representatives_router.get("/{representative_id}/rating", response_model=RatingSummaryResponse)
async def get_rating_summary(
    representative_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> RatingSummaryResponse:
    """Average score and count; ``average_rating`` is null when never rated."""
    try:
        await representative_service.require_representative(session, representative_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    summary = await rating_service.rating_summary(session, representative_id)
    return RatingSummaryResponse(
        representative_id=representative_id,
        average_rating=summary.average_or_none,
        rating_count=summary.rating_count,
        has_rated=await rating_service.has_rated(session, current_user.id, representative_id),
    )


@representatives_router.post(
    "/{representative_id}/feedback",
    response_model=RatingResponse | CommentResponse,
    status_code=201,
)
async def submit_feedback(
    representative_id: uuid.UUID,
    submission: FeedbackSubmission,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> RatingResponse | CommentResponse:
    """Submit a review (rating only) or a discussion comment (text only).

    A second review from the same citizen replaces the first.
    """
    feedback = submission.root
    try:
        if isinstance(feedback, ReviewSubmission):
            rating = await rating_service.submit_rating(
                session, current_user.id, representative_id, feedback.rating
            )
            return RatingResponse.model_validate(rating)
        comment = await comment_service.post_comment(
            session,
            representative_id,
            current_user.id,
            feedback.body,
            parent_id=feedback.parent_id,
        )
        return CommentResponse.model_validate(comment)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e


# ---------------------------------------------------------------------------
# Admin management
# ---------------------------------------------------------------------------


@representatives_router.post("", response_model=RepresentativeDetailResponse, status_code=201)
async def create_representative(
    request: RepresentativeCreateRequest,
    _current_user: Annotated[User, Depends(require_role(ADMIN_ROLE))],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> Representative:
    """Register a representative for a jurisdiction (admin only)."""
    try:
        return await representative_service.create_representative(session, **request.model_dump())
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e


@representatives_router.patch("/{representative_id}", response_model=RepresentativeDetailResponse)
async def update_representative(
    representative_id: uuid.UUID,
    request: RepresentativeUpdateRequest,
    _current_user: Annotated[User, Depends(require_role(ADMIN_ROLE))],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> Representative:
    """Edit a representative's descriptive fields (admin only)."""
    try:
        representative = await representative_service.require_representative(session, representative_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return await representative_service.update_representative(
        session, representative, request.model_dump(exclude_unset=True)
    )


@representatives_router.delete("/{representative_id}", status_code=204)
async def delete_representative(
    representative_id: uuid.UUID,
    _current_user: Annotated[User, Depends(require_role(ADMIN_ROLE))],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> None:
    """Delete a representative and its feedback (admin only)."""
    try:
        representative = await representative_service.require_representative(session, representative_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    await representative_service.delete_representative(session, representative)
