"""
Execution helpers that run the query-engine windows against a session.

Both helpers take an already-filtered ``select`` of the projected columns
and return plain ``Row`` objects; serialisation is left to the caller.
"""
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.query import CursorWindow, OffsetWindow, SortOrder, trim_page


async def fetch_offset_page(
    db: AsyncSession,
    model,
    columns: tuple,
    predicate,
    sort: SortOrder,
    window: OffsetWindow,
) -> tuple[list, int]:
    """
    Return ``(rows, total)`` for one offset page.

    Two statements are issued on the request's session: the page itself
    and a COUNT over the same predicate.  They are independent reads, so
    ``total`` is not guaranteed to be consistent with ``rows`` under
    concurrent writes.
    """
    page_q = (
        select(*columns)
        .where(predicate)
        .order_by(*sort.order_by(model))
        .offset(window.skip)
        .limit(window.take)
    )
    count_q = select(func.count()).select_from(model).where(predicate)

    # Sequential on the request session: the count must see rows this
    # request has flushed but not committed.
    rows = (await db.execute(page_q)).all()
    total: int = (await db.execute(count_q)).scalar_one()
    return rows, total


async def fetch_cursor_page(
    db: AsyncSession,
    stmt: Select,
    id_column,
    window: CursorWindow,
) -> tuple[list, int | None]:
    """Return ``(rows, next_cursor)`` for one page of a newest-first thread."""
    rows = (await db.execute(window.apply(stmt, id_column))).all()
    return trim_page(rows, window.take)
