# Query engine.
#
# Pure building blocks shared by every list endpoint:
#
#   terms       — free-text ``q`` → search terms
#   filters     — terms + columns → AND-of-ORs WHERE predicate
#   sorting     — ``sort`` keyword → ORDER BY
#   pagination  — offset windows for parent resources, cursor windows
#                 (over-fetch by one and trim) for comment threads
from app.query.filters import build_filter
from app.query.pagination import CursorWindow, OffsetWindow, trim_page
from app.query.sorting import SortOrder
from app.query.terms import tokenize

__all__ = [
    "CursorWindow",
    "OffsetWindow",
    "SortOrder",
    "build_filter",
    "tokenize",
    "trim_page",
]
