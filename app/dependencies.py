from fastapi import Query

from app.config import settings


class ListQueryParams:
    """
    Query parameters shared by the listing and article list endpoints.

    Usage in a router::

        @router.get("/products")
        async def list_products(params: ListQueryParams = Depends()):
            ...

    ``offset`` and ``limit`` are taken as raw strings and coerced by
    ``OffsetWindow``: a malformed value falls back to its default instead
    of failing the request.

    Attributes
    ----------
    offset:
        Rows to skip (default 0).
    limit:
        Page size (default 10, capped at ``settings.MAX_PAGE_SIZE``).
    sort:
        ``"recent"`` for newest first; anything else orders by id.
    q:
        Whitespace-separated search terms; all must match.
    """

    def __init__(
        self,
        offset: str | None = Query(None, description="Rows to skip (default 0)."),
        limit: str | None = Query(
            None, description=f"Page size (default {settings.DEFAULT_PAGE_SIZE}, max {settings.MAX_PAGE_SIZE})."
        ),
        sort: str = Query(
            settings.DEFAULT_SORT,
            description="'recent' for newest first; any other value orders by id.",
        ),
        q: str | None = Query(None, description="Search terms, space separated."),
    ) -> None:
        self.offset = offset
        self.limit = limit
        self.sort = sort
        self.q = q


class CursorParams:
    """``take`` / ``cursor`` for comment threads; coerced by ``CursorWindow``."""

    def __init__(
        self,
        take: str | None = Query(None, description="Page size (default 10, max 100)."),
        cursor: str | None = Query(None, description="nextCursor from the previous page."),
    ) -> None:
        self.take = take
        self.cursor = cursor
