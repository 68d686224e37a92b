"""
Listing service — marketplace listings.

- ``get_listings`` is the search/list path: ``q`` is tokenized and
  matched against name + description, ``sort`` is resolved through
  ``SortOrder`` and the page is windowed by offset/limit.  Only the
  summary columns are selected.
- ``get_listing`` goes through the Redis detail cache; every write
  invalidates the entry.
- Missing ids raise ``NotFoundError``.  Services flush but never commit;
  ``get_db`` owns the transaction.
"""
import logging
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.cache import cache
from app.errors import NotFoundError
from app.models import Listing
from app.query import OffsetWindow, SortOrder, build_filter, tokenize
from app.schemas import ListingCreate, ListingUpdate
from app.services.paging import fetch_offset_page

logger = logging.getLogger(__name__)

CACHE_KIND = "listings"

SEARCH_COLUMNS = (Listing.name, Listing.description)
SUMMARY_COLUMNS = (Listing.id, Listing.name, Listing.price, Listing.created_at)


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _summary_to_dict(row) -> dict:
    return {
        "id": row.id,
        "name": row.name,
        "price": row.price,
        "createdAt": _iso(row.created_at),
    }


def _detail_to_dict(listing: Listing) -> dict:
    return {
        "id": listing.id,
        "name": listing.name,
        "description": listing.description,
        "price": listing.price,
        "tags": list(listing.tags or []),
        "createdAt": _iso(listing.created_at),
    }


def _listing_to_dict(listing: Listing) -> dict:
    """Full record, returned by create and update."""
    data = _detail_to_dict(listing)
    data["images"] = list(listing.images or [])
    data["updatedAt"] = _iso(listing.updated_at)
    return data


async def _get_or_404(db: AsyncSession, listing_id: int) -> Listing:
    listing = await db.get(Listing, listing_id)
    if listing is None:
        raise NotFoundError("Listing", listing_id)
    return listing


async def get_listings(
    db: AsyncSession,
    q: str | None = None,
    sort: str | None = "recent",
    offset: Any = 0,
    limit: Any = 10,
) -> dict:
    window = OffsetWindow.from_params(offset, limit)
    predicate = build_filter(tokenize(q), SEARCH_COLUMNS)
    rows, total = await fetch_offset_page(
        db, Listing, SUMMARY_COLUMNS, predicate, SortOrder.resolve(sort), window
    )
    return {
        "items": [_summary_to_dict(r) for r in rows],
        "pagination": window.meta(total),
    }


async def get_listing(db: AsyncSession, listing_id: int) -> dict:
    cached = await cache.get_detail(CACHE_KIND, listing_id)
    if cached:
        return cached

    data = _detail_to_dict(await _get_or_404(db, listing_id))
    await cache.set_detail(CACHE_KIND, listing_id, data)
    return data


async def create_listing(db: AsyncSession, data: ListingCreate) -> dict:
    listing = Listing(
        name=data.name,
        description=data.description,
        price=data.price,
        tags=list(data.tags),
        images=list(data.images),
    )
    db.add(listing)
    await db.flush()
    logger.info("Created listing id=%d", listing.id)
    return _listing_to_dict(listing)


async def update_listing(db: AsyncSession, listing_id: int, data: ListingUpdate) -> dict:
    listing = await _get_or_404(db, listing_id)
    for field, value in data.changes().items():
        setattr(listing, field, value)
    await db.flush()
    await cache.invalidate(CACHE_KIND, listing_id)
    logger.info("Updated listing id=%d", listing_id)
    return _listing_to_dict(listing)


async def delete_listing(db: AsyncSession, listing_id: int) -> None:
    listing = await _get_or_404(db, listing_id)
    await db.delete(listing)
    await db.flush()
    await cache.invalidate(CACHE_KIND, listing_id)
    logger.info("Deleted listing id=%d", listing_id)
