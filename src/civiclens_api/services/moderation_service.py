"""Admin-only composition of ratings and comment threads.

Every entry point takes the calling user explicitly and refuses callers
without the administrator capability before touching any data.
"""

import uuid
from collections import defaultdict
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.errors import UnauthorizedError
from civiclens_api.lib.exporter import ExportResult, export_rows
from civiclens_api.lib.ratings import EMPTY_SUMMARY, RatingSummary
from civiclens_api.lib.representatives import Position
from civiclens_api.lib.threads import ThreadNode, build_thread
from civiclens_api.models.comment import Comment
from civiclens_api.models.representative import Representative
from civiclens_api.models.user import User
from civiclens_api.services import comment_service
from civiclens_api.services.rating_service import rating_summaries
from civiclens_api.services.representative_service import list_all_representatives, require_representative


@dataclass
class RepresentativeStats:
    """A representative's score and its full comment list (parents before their replies)."""

    representative: Representative
    summary: RatingSummary
    comments: list[Comment] = field(default_factory=list)


def ensure_admin(caller: User | None) -> User:
    """Return ``caller`` if it carries the administrator capability.

    Raises:
        UnauthorizedError: For anonymous, inactive, or non-admin callers.
    """
    if caller is None or not caller.is_active or not caller.is_admin:
        raise UnauthorizedError
    return caller


def _flatten_thread(thread: list[ThreadNode]) -> list[Comment]:
    flat: list[Comment] = []
    for node in thread:
        flat.append(node.comment)  # type: ignore[arg-type]
        flat.extend(node.replies)  # type: ignore[arg-type]
    return flat


async def stats_for(
    session: AsyncSession,
    caller: User | None,
    *,
    region_id: uuid.UUID | None = None,
    position: Position | None = None,
) -> list[RepresentativeStats]:
    """Score and comments for every representative matching the filter.

    Args:
        session: Database session.
        caller: The requesting user; must be an admin.
        region_id: Only representatives whose jurisdiction lies in this region.
        position: Only representatives holding this position.

    Returns:
        One entry per representative, ordered by name.

    Raises:
        UnauthorizedError: If the caller is not an admin.
    """
    ensure_admin(caller)
    representatives = await list_all_representatives(session, region_id=region_id, position=position)
    if not representatives:
        return []

    ids = [rep.id for rep in representatives]
    summaries = await rating_summaries(session, ids)

    result = await session.execute(
        select(Comment).where(Comment.representative_id.in_(ids)).order_by(Comment.created_at, Comment.id)
    )
    comments_by_rep: dict[uuid.UUID, list[Comment]] = defaultdict(list)
    for comment in result.scalars().all():
        comments_by_rep[comment.representative_id].append(comment)

    stats = [
        RepresentativeStats(
            representative=rep,
            summary=summaries.get(rep.id, EMPTY_SUMMARY),
            comments=_flatten_thread(build_thread(comments_by_rep.get(rep.id, []), include_hidden=True)),
        )
        for rep in representatives
    ]
    count = len(stats)
    logger.info(f"Admin {caller.id} loaded moderation stats for {count} representatives")  # type: ignore[union-attr]
    return stats


async def moderation_thread(
    session: AsyncSession,
    caller: User | None,
    representative_id: uuid.UUID,
) -> list[ThreadNode]:
    """A representative's full thread, hidden comments included.

    Raises:
        UnauthorizedError: If the caller is not an admin.
        NotFoundError: If the representative does not exist.
    """
    ensure_admin(caller)
    await require_representative(session, representative_id)
    return await comment_service.list_for_moderation(session, representative_id)


async def set_comment_hidden(
    session: AsyncSession,
    caller: User | None,
    comment_id: uuid.UUID,
    hidden: bool,
) -> Comment:
    """Hide or unhide a single comment, addressed by id.

    Raises:
        UnauthorizedError: If the caller is not an admin.
        NotFoundError: If the comment does not exist.
    """
    admin = ensure_admin(caller)
    comment = await comment_service.set_hidden(session, comment_id, hidden)
    logger.info(f"Admin {admin.id} set hidden={hidden} on comment {comment_id}")
    return comment


def flatten_for_export(stats: list[RepresentativeStats]) -> list[dict[str, Any]]:
    """One row per comment; representatives without comments still get one row.

    Rows carry ``representative``, ``position``, ``average_rating``,
    ``rating_count`` and ``comment`` (plus ids and the hidden flag).
    """
    rows: list[dict[str, Any]] = []
    for entry in stats:
        rep = entry.representative
        base = {
            "representative_id": rep.id,
            "representative": rep.full_name,
            "position": Position(rep.position).label,
            "average_rating": (
                round(entry.summary.average_or_none, 2) if entry.summary.average_or_none is not None else None
            ),
            "rating_count": entry.summary.rating_count,
        }
        if not entry.comments:
            rows.append({**base, "comment_id": None, "comment": "", "hidden": None})
            continue
        rows.extend(
            {**base, "comment_id": comment.id, "comment": comment.body, "hidden": comment.hidden}
            for comment in entry.comments
        )
    return rows


async def export_stats(
    session: AsyncSession,
    caller: User | None,
    output_path: Path,
    *,
    output_format: str = "csv",
    region_id: uuid.UUID | None = None,
    position: Position | None = None,
) -> ExportResult:
    """Write the flattened moderation rows to ``output_path``.

    Raises:
        UnauthorizedError: If the caller is not an admin.
        ValueError: If the format is not supported.
    """
    stats = await stats_for(session, caller, region_id=region_id, position=position)
    result = export_rows(flatten_for_export(stats), output_format, output_path)
    logger.info(f"Exported {result.record_count} moderation rows to {output_path}")
    return result
