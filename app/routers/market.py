from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import CursorParams, ListQueryParams
from app.schemas import (
    CommentCreate,
    CommentPage,
    CommentUpdate,
    ListingCreate,
    ListingDetail,
    ListingPage,
    ListingUpdate,
)
from app.services import comment_service, listing_service
from app.services.comment_service import LISTING_THREAD

router = APIRouter(prefix="/api/market", tags=["market"])


@router.post("/products", status_code=201)
async def create_listing(data: ListingCreate, db: AsyncSession = Depends(get_db)):
    return await listing_service.create_listing(db, data)


@router.get("/products", response_model=ListingPage)
async def list_listings(params: ListQueryParams = Depends(), db: AsyncSession = Depends(get_db)):
    return await listing_service.get_listings(db, params.q, params.sort, params.offset, params.limit)


@router.get("/products/{listing_id}", response_model=ListingDetail)
async def get_listing(listing_id: int, db: AsyncSession = Depends(get_db)):
    return await listing_service.get_listing(db, listing_id)


@router.patch("/products/{listing_id}")
async def update_listing(listing_id: int, data: ListingUpdate, db: AsyncSession = Depends(get_db)):
    return await listing_service.update_listing(db, listing_id, data)


@router.delete("/products/{listing_id}", status_code=204)
async def delete_listing(listing_id: int, db: AsyncSession = Depends(get_db)):
    await listing_service.delete_listing(db, listing_id)


@router.post("/products/{listing_id}/comments", status_code=201)
async def add_comment(listing_id: int, data: CommentCreate, db: AsyncSession = Depends(get_db)):
    return await comment_service.add_comment(db, LISTING_THREAD, listing_id, data)


@router.get("/products/{listing_id}/comments", response_model=CommentPage)
async def list_comments(
    listing_id: int,
    params: CursorParams = Depends(),
    db: AsyncSession = Depends(get_db),
):
    return await comment_service.list_comments(db, LISTING_THREAD, listing_id, params.take, params.cursor)


@router.patch("/comments/{comment_id}")
async def update_comment(comment_id: int, data: CommentUpdate, db: AsyncSession = Depends(get_db)):
    return await comment_service.update_comment(db, LISTING_THREAD, comment_id, data)


@router.delete("/comments/{comment_id}", status_code=204)
async def delete_comment(comment_id: int, db: AsyncSession = Depends(get_db)):
    await comment_service.delete_comment(db, LISTING_THREAD, comment_id)
