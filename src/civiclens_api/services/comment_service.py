"""Append-only discussion threads with one level of replies.

Comments are always addressed by id. Hiding is a flag flip; nothing is
ever deleted here.
"""

import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from civiclens_api.core.errors import EmptyCommentBodyError, InvalidParentCommentError, NotFoundError
from civiclens_api.lib.threads import ThreadNode, build_thread
from civiclens_api.models.comment import Comment
from civiclens_api.services.representative_service import require_representative


async def post_comment(
    session: AsyncSession,
    representative_id: uuid.UUID,
    author_id: uuid.UUID,
    body: str,
    parent_id: uuid.UUID | None = None,
) -> Comment:
    """Append a discussion comment, optionally as a reply.

    Args:
        session: Database session.
        representative_id: Representative whose thread receives the comment.
        author_id: The posting user's id.
        body: Comment text; stored trimmed.
        parent_id: Top-level comment being replied to.

    Returns:
        The stored Comment.

    Raises:
        EmptyCommentBodyError: If ``body`` is blank after trimming.
        InvalidParentCommentError: If the parent is missing, is itself a
            reply, or belongs to another representative.
        NotFoundError: If the representative does not exist.
    """
    text = body.strip()
    if not text:
        raise EmptyCommentBodyError

    await require_representative(session, representative_id)

    if parent_id is not None:
        parent = await get_comment(session, parent_id)
        if parent is None:
            msg = f"Parent comment {parent_id} does not exist"
            raise InvalidParentCommentError(msg)
        if parent.parent_id is not None:
            msg = "Replies can only be made to top-level comments"
            raise InvalidParentCommentError(msg)
        if parent.representative_id != representative_id:
            msg = "Parent comment belongs to a different representative"
            raise InvalidParentCommentError(msg)

    comment = Comment(
        representative_id=representative_id,
        author_id=author_id,
        body=text,
        parent_id=parent_id,
        hidden=False,
    )
    session.add(comment)
    await session.commit()
    await session.refresh(comment)
    logger.info(
        f"User {author_id} posted comment {comment.id} on representative {representative_id}"
        + (f" in reply to {parent_id}" if parent_id else "")
    )
    return comment


async def get_comment(session: AsyncSession, comment_id: uuid.UUID) -> Comment | None:
    """Get a comment by ID."""
    result = await session.execute(select(Comment).where(Comment.id == comment_id))
    return result.scalar_one_or_none()


async def _comments_for(session: AsyncSession, representative_id: uuid.UUID) -> list[Comment]:
    result = await session.execute(
        select(Comment)
        .where(Comment.representative_id == representative_id)
        .order_by(Comment.created_at, Comment.id)
    )
    return list(result.scalars().all())


async def list_public(session: AsyncSession, representative_id: uuid.UUID) -> list[ThreadNode]:
    """Visible thread: hidden comments, and replies under hidden parents, are omitted."""
    return build_thread(await _comments_for(session, representative_id), include_hidden=False)


async def list_for_moderation(session: AsyncSession, representative_id: uuid.UUID) -> list[ThreadNode]:
    """Full thread including hidden comments, each carrying its ``hidden`` flag."""
    return build_thread(await _comments_for(session, representative_id), include_hidden=True)


async def set_hidden(session: AsyncSession, comment_id: uuid.UUID, hidden: bool) -> Comment:
    """Set a comment's moderation flag. Setting the current value again is a no-op.

    Callers are responsible for checking the moderator capability.

    Raises:
        NotFoundError: If the comment does not exist.
    """
    comment = await get_comment(session, comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    if comment.hidden != hidden:
        comment.hidden = hidden
        await session.commit()
        logger.info(f"Comment {comment_id} {'hidden' if hidden else 'unhidden'}")
    return comment
