"""Admin moderation API endpoints.

GET /moderation/stats, GET /moderation/representatives/{id}/comments,
PUT /moderation/comments/{id}/hidden, GET /moderation/export.

Endpoints only authenticate; the moderation service itself refuses
callers without the administrator capability.
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.api.errors import DOMAIN_ERRORS, to_http_exception
from civiclens_api.core.dependencies import get_async_session, get_current_user
from civiclens_api.lib.exporter import render_csv
from civiclens_api.lib.representatives import Position
from civiclens_api.models.user import User
from civiclens_api.schemas.feedback import ModerationThreadEntry
from civiclens_api.schemas.moderation import (
    HiddenUpdateRequest,
    HiddenUpdateResponse,
    ModeratedComment,
    RepresentativeStatsResponse,
)
from civiclens_api.schemas.representative import RepresentativeSummaryResponse
from civiclens_api.services import moderation_service

moderation_router = APIRouter(prefix="/moderation", tags=["moderation"])


@moderation_router.get("/stats", response_model=list[RepresentativeStatsResponse])
async def moderation_stats(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    region_id: uuid.UUID | None = Query(None, description="Jurisdiction lies in this region"),
    position: Position | None = Query(None, description="Filter by position"),
) -> list[RepresentativeStatsResponse]:
    """Every matching representative with score and all comments."""
    try:
        stats = await moderation_service.stats_for(session, current_user, region_id=region_id, position=position)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return [
        RepresentativeStatsResponse(
            representative=RepresentativeSummaryResponse.model_validate(entry.representative),
            average_rating=entry.summary.average_or_none,
            rating_count=entry.summary.rating_count,
            comments=[
                ModeratedComment(id=c.id, text=c.body, hidden=c.hidden, parent_id=c.parent_id)
                for c in entry.comments
            ],
        )
        for entry in stats
    ]


@moderation_router.get(
    "/representatives/{representative_id}/comments",
    response_model=list[ModerationThreadEntry],
)
async def moderation_thread(
    representative_id: uuid.UUID,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> list[ModerationThreadEntry]:
    """A representative's thread with hidden comments flagged rather than removed."""
    try:
        thread = await moderation_service.moderation_thread(session, current_user, representative_id)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return [ModerationThreadEntry.from_node(node) for node in thread]


@moderation_router.put("/comments/{comment_id}/hidden", response_model=HiddenUpdateResponse)
async def set_comment_hidden(
    comment_id: uuid.UUID,
    request: HiddenUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
) -> HiddenUpdateResponse:
    """Hide or unhide one comment. Setting the current value again is a no-op."""
    try:
        comment = await moderation_service.set_comment_hidden(session, current_user, comment_id, request.hidden)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return HiddenUpdateResponse(id=comment.id, hidden=comment.hidden)


@moderation_router.get("/export")
async def export_moderation_csv(
    current_user: Annotated[User, Depends(get_current_user)],
    session: Annotated[AsyncSession, Depends(get_async_session)],
    region_id: uuid.UUID | None = Query(None, description="Jurisdiction lies in this region"),
    position: Position | None = Query(None, description="Filter by position"),
) -> Response:
    """Download the moderation view as CSV, one row per comment."""
    try:
        stats = await moderation_service.stats_for(session, current_user, region_id=region_id, position=position)
    except DOMAIN_ERRORS as e:
        raise to_http_exception(e) from e
    return Response(
        content=render_csv(moderation_service.flatten_for_export(stats)),
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="moderation-export.csv"'},
    )
