"""
Pagination windows.

Two strategies are used side by side:

Offset windows (listings, articles)
    ``offset``/``limit`` become a ``(skip, take)`` pair.  The page is read
    together with a COUNT over the same predicate so the response can carry
    ``total``.  The two reads share no snapshot; under concurrent writes
    ``total`` may disagree with ``items`` by a few rows, which is accepted.

Cursor windows (comment threads)
    Comments are read newest first (``id DESC``).  We ask for ``take + 1``
    rows starting at the cursor id; if the extra row comes back it is
    trimmed and its id becomes ``nextCursor``.  A client that keeps
    passing ``nextCursor`` back sees every comment exactly once and stops
    when it is ``None``.

Query-string values arrive as raw strings.  Garbage never raises for
offset/limit/take: it falls back to the default instead.
"""
from dataclasses import dataclass
from typing import Any, Sequence

from app.config import settings
from app.errors import InvalidInputError

# OFFSET is a signed 64-bit value on every backend we run on; anything
# larger is past the end of any table anyway.
MAX_OFFSET = 2**63 - 1
# Comment ids are 32-bit INTEGER columns.
MAX_CURSOR = 2**31 - 1


def _coerce_int(value: Any) -> int | None:
    """Parse *value* as an integer, truncating decimals; ``None`` if it isn't numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    try:
        number = float(str(value).strip())
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number)


def coerce_page_size(value: Any, default: int | None = None, cap: int | None = None) -> int:
    """
    Effective page size for ``limit`` / ``take``.

    Non-numeric or non-positive input gives *default*; anything above *cap*
    is clamped to *cap*.
    """
    default = settings.DEFAULT_PAGE_SIZE if default is None else default
    cap = settings.MAX_PAGE_SIZE if cap is None else cap
    size = _coerce_int(value)
    if size is None or size <= 0:
        size = default
    return min(size, cap)


@dataclass(frozen=True)
class OffsetWindow:
    skip: int
    take: int

    @classmethod
    def from_params(cls, offset: Any = None, limit: Any = None) -> "OffsetWindow":
        skip = _coerce_int(offset)
        # Negative offsets are not rejected; they read from the start.
        skip = min(max(skip, 0), MAX_OFFSET) if skip is not None else 0
        return cls(skip=skip, take=coerce_page_size(limit))

    def meta(self, total: int) -> dict:
        return {"offset": self.skip, "limit": self.take, "total": total}


@dataclass(frozen=True)
class CursorWindow:
    take: int
    cursor: int | None = None

    @classmethod
    def from_params(cls, take: Any = None, cursor: Any = None) -> "CursorWindow":
        parsed: int | None = None
        if cursor not in (None, ""):
            parsed = _coerce_int(cursor)
            if parsed is None:
                raise InvalidInputError(
                    "cursor must be an integer id", details={"cursor": str(cursor)}
                )
            # Above every id means "from the newest"; below 1 matches nothing.
            parsed = min(max(parsed, 0), MAX_CURSOR)
        return cls(take=coerce_page_size(take), cursor=parsed)

    @property
    def fetch_size(self) -> int:
        """Rows to request: one more than the page, to detect a next page."""
        return self.take + 1

    def apply(self, stmt, id_column):
        """Restrict *stmt* to this window over a thread ordered by *id_column* DESC."""
        if self.cursor is not None:
            stmt = stmt.where(id_column <= self.cursor)
        return stmt.order_by(id_column.desc()).limit(self.fetch_size)


def trim_page(rows: Sequence, take: int, key: str = "id") -> tuple[list, int | None]:
    """
    Over-fetch-and-trim: given up to ``take + 1`` *rows*, return the page
    and the cursor for the next one.

    >>> trim_page([{"id": 3}, {"id": 2}, {"id": 1}], 2)
    ([{'id': 3}, {'id': 2}], 1)
    """
    items = list(rows)
    next_cursor = None
    if len(items) > take:
        extra = items[take]
        del items[take:]
        next_cursor = extra[key] if isinstance(extra, dict) else getattr(extra, key)
    return items, next_cursor
