"""
Comment service — comment threads under listings and articles.

Both families behave identically and differ only in tables, so each is
described by a ``CommentThread`` and every function takes one.

Threads are read newest first with cursor pagination (see
``app.query.pagination``).  Creating a comment checks that the parent
exists first; the check and the insert are separate statements, so a
parent deleted in between surfaces as a foreign-key failure from the
datastore rather than a ``NotFoundError``.
"""
import logging
from dataclasses import dataclass
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import NotFoundError
from app.models import Article, ArticleComment, Listing, ListingComment
from app.query import CursorWindow
from app.schemas import CommentCreate, CommentUpdate
from app.services.paging import fetch_cursor_page

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommentThread:
    parent_label: str
    parent_model: Any
    comment_model: Any
    parent_key: str

    @property
    def parent_column(self):
        return getattr(self.comment_model, self.parent_key)


LISTING_THREAD = CommentThread("Listing", Listing, ListingComment, "listing_id")
ARTICLE_THREAD = CommentThread("Article", Article, ArticleComment, "article_id")


def _item_to_dict(row) -> dict:
    return {
        "id": row.id,
        "content": row.content,
        "createdAt": row.created_at.isoformat() if row.created_at else None,
    }


def _comment_to_dict(thread: CommentThread, comment) -> dict:
    data = _item_to_dict(comment)
    data[thread.parent_key] = getattr(comment, thread.parent_key)
    data["updatedAt"] = comment.updated_at.isoformat() if comment.updated_at else None
    return data


async def _require_parent(db: AsyncSession, thread: CommentThread, parent_id: int) -> None:
    q = select(thread.parent_model.id).where(thread.parent_model.id == parent_id)
    if (await db.execute(q)).scalar_one_or_none() is None:
        raise NotFoundError(thread.parent_label, parent_id)


async def _get_comment_or_404(db: AsyncSession, thread: CommentThread, comment_id: int):
    comment = await db.get(thread.comment_model, comment_id)
    if comment is None:
        raise NotFoundError("Comment", comment_id)
    return comment


async def list_comments(
    db: AsyncSession,
    thread: CommentThread,
    parent_id: int,
    take: Any = 10,
    cursor: Any = None,
) -> dict:
    """
    Return one page of *parent_id*'s comments, newest first, as
    ``{"items": [...], "nextCursor": id | None}``.
    """
    window = CursorWindow.from_params(take, cursor)
    await _require_parent(db, thread, parent_id)

    model = thread.comment_model
    stmt = select(model.id, model.content, model.created_at).where(thread.parent_column == parent_id)
    rows, next_cursor = await fetch_cursor_page(db, stmt, model.id, window)
    return {"items": [_item_to_dict(r) for r in rows], "nextCursor": next_cursor}


async def add_comment(
    db: AsyncSession,
    thread: CommentThread,
    parent_id: int,
    data: CommentCreate,
) -> dict:
    await _require_parent(db, thread, parent_id)

    comment = thread.comment_model(content=data.content, **{thread.parent_key: parent_id})
    db.add(comment)
    await db.flush()
    logger.info("Added comment id=%d to %s id=%d", comment.id, thread.parent_label, parent_id)
    return _comment_to_dict(thread, comment)


async def update_comment(
    db: AsyncSession,
    thread: CommentThread,
    comment_id: int,
    data: CommentUpdate,
) -> dict:
    comment = await _get_comment_or_404(db, thread, comment_id)
    comment.content = data.content
    await db.flush()
    return _comment_to_dict(thread, comment)


async def delete_comment(db: AsyncSession, thread: CommentThread, comment_id: int) -> None:
    comment = await _get_comment_or_404(db, thread, comment_id)
    await db.delete(comment)
    await db.flush()
    logger.info("Deleted %s comment id=%d", thread.parent_label.lower(), comment_id)
