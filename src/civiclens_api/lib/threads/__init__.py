"""Two-level comment thread assembly.

Builds the parent/reply tree from a flat list of comments. Public views
drop hidden comments; a hidden parent takes its replies with it.
"""

import uuid
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol


class CommentLike(Protocol):
    id: uuid.UUID
    representative_id: uuid.UUID
    author_id: uuid.UUID
    body: str
    parent_id: uuid.UUID | None
    hidden: bool
    created_at: datetime


@dataclass
class ThreadNode:
    """A top-level comment with its replies, both oldest first."""

    comment: CommentLike
    replies: list[CommentLike] = field(default_factory=list)


def _order_key(comment: CommentLike) -> tuple[datetime, str]:
    created_at = comment.created_at
    # SQLite hands back naive UTC values
    created_at = created_at.astimezone(UTC) if created_at.tzinfo else created_at.replace(tzinfo=UTC)
    return (created_at, str(comment.id))


def build_thread(comments: Iterable[CommentLike], *, include_hidden: bool) -> list[ThreadNode]:
    """Nest ``comments`` into top-level nodes with their replies.

    Args:
        comments: Comments of a single representative, in any order.
        include_hidden: When False, hidden comments are omitted and so are
            all replies of a hidden parent.

    Returns:
        Top-level nodes ordered oldest first, each with replies oldest first.
        Replies whose parent is absent from ``comments`` are dropped.
    """
    ordered = sorted(comments, key=_order_key)
    nodes: dict[uuid.UUID, ThreadNode] = {}
    thread: list[ThreadNode] = []

    for comment in ordered:
        if comment.parent_id is None and (include_hidden or not comment.hidden):
            node = ThreadNode(comment=comment)
            nodes[comment.id] = node
            thread.append(node)

    for comment in ordered:
        if comment.parent_id is None or (comment.hidden and not include_hidden):
            continue
        parent = nodes.get(comment.parent_id)
        if parent is not None:
            parent.replies.append(comment)

    return thread


__all__ = ["CommentLike", "ThreadNode", "build_thread"]
