"""
Article service — the free board.

Mirrors the listing service: search over title + content, ``recent`` or
id ordering, offset windows, Redis-cached detail reads.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.cache import cache
from app.errors import NotFoundError
from app.models import Article
from app.query import OffsetWindow, SortOrder, build_filter, tokenize
from app.schemas import ArticleCreate, ArticleUpdate
from app.services.paging import fetch_offset_page

logger = logging.getLogger(__name__)

CACHE_KIND = "articles"

SEARCH_COLUMNS = (Article.title, Article.content)
SUMMARY_COLUMNS = (Article.id, Article.title, Article.content, Article.created_at)


def _summary_to_dict(row) -> dict:
    return {
        "id": row.id,
        "title": row.title,
        "content": row.content,
        "createdAt": row.created_at.isoformat() if row.created_at else None,
    }


def _article_to_dict(article: Article) -> dict:
    data = _summary_to_dict(article)
    data["updatedAt"] = article.updated_at.isoformat() if article.updated_at else None
    return data


async def _get_or_404(db: AsyncSession, article_id: int) -> Article:
    article = await db.get(Article, article_id)
    if article is None:
        raise NotFoundError("Article", article_id)
    return article


async def get_articles(
    db: AsyncSession,
    q: str | None = None,
    sort: str | None = "recent",
    offset: Any = 0,
    limit: Any = 10,
) -> dict:
    window = OffsetWindow.from_params(offset, limit)
    predicate = build_filter(tokenize(q), SEARCH_COLUMNS)
    rows, total = await fetch_offset_page(
        db, Article, SUMMARY_COLUMNS, predicate, SortOrder.resolve(sort), window
    )
    return {
        "items": [_summary_to_dict(r) for r in rows],
        "pagination": window.meta(total),
    }


async def get_article(db: AsyncSession, article_id: int) -> dict:
    cached = await cache.get_detail(CACHE_KIND, article_id)
    if cached:
        return cached

    data = _summary_to_dict(await _get_or_404(db, article_id))
    await cache.set_detail(CACHE_KIND, article_id, data)
    return data


async def create_article(db: AsyncSession, data: ArticleCreate) -> dict:
    article = Article(title=data.title, content=data.content)
    db.add(article)
    await db.flush()
    logger.info("Created article id=%d", article.id)
    return _article_to_dict(article)


async def update_article(db: AsyncSession, article_id: int, data: ArticleUpdate) -> dict:
    article = await _get_or_404(db, article_id)
    for field, value in data.changes().items():
        setattr(article, field, value)
    await db.flush()
    await cache.invalidate(CACHE_KIND, article_id)
    logger.info("Updated article id=%d", article_id)
    return _article_to_dict(article)


async def delete_article(db: AsyncSession, article_id: int) -> None:
    article = await _get_or_404(db, article_id)
    await db.delete(article)
    await db.flush()
    await cache.invalidate(CACHE_KIND, article_id)
    logger.info("Deleted article id=%d", article_id)
