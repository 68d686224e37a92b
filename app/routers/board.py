from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import CursorParams, ListQueryParams
from app.schemas import (
    ArticleCreate,
    ArticlePage,
    ArticleSummary,
    ArticleUpdate,
    CommentCreate,
    CommentPage,
    CommentUpdate,
)
from app.services import article_service, comment_service
from app.services.comment_service import ARTICLE_THREAD

router = APIRouter(prefix="/api/board", tags=["board"])


@router.post("/articles", status_code=201)
async def create_article(data: ArticleCreate, db: AsyncSession = Depends(get_db)):
    return await article_service.create_article(db, data)


@router.get("/articles", response_model=ArticlePage)
async def list_articles(params: ListQueryParams = Depends(), db: AsyncSession = Depends(get_db)):
    return await article_service.get_articles(db, params.q, params.sort, params.offset, params.limit)


@router.get("/articles/{article_id}", response_model=ArticleSummary)
async def get_article(article_id: int, db: AsyncSession = Depends(get_db)):
    return await article_service.get_article(db, article_id)


@router.patch("/articles/{article_id}")
async def update_article(article_id: int, data: ArticleUpdate, db: AsyncSession = Depends(get_db)):
    return await article_service.update_article(db, article_id, data)


@router.delete("/articles/{article_id}", status_code=204)
async def delete_article(article_id: int, db: AsyncSession = Depends(get_db)):
    await article_service.delete_article(db, article_id)


@router.post("/articles/{article_id}/comments", status_code=201)
async def add_comment(article_id: int, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    return await comment_service.add_comment(db, ARTICLE_THREAD, article_id, data)


@router.get("/articles/{article_id}/comments", response_model=CommentPage)
async def list_comments(
    article_id: int,
    params: CursorParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.list_comments(db, ARTICLE_THREAD, article_id, params.take, params.cursor)


@router.patch("/comments/{comment_id}")
async def update_comment(comment_id: int, data: CommentUpdate, db: AsyncSession = Depends(get_db)):
    return await comment_service.update_comment(db, ARTICLE_THREAD, comment_id, data)


@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(comment_id: int, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, ARTICLE_THREAD, comment_id)
