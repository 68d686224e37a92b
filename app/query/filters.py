from collections.abc import Sequence

from sqlalchemy import and_, or_, true
from sqlalchemy.sql.elements import ColumnElement


def build_filter(terms: Sequence[str], columns: Sequence) -> ColumnElement[bool]:
    """
    Return a predicate matching rows where every term occurs in at least
    one of *columns* (case-insensitive substring).

    ``"laptop used"`` over (name, description) becomes::

        (name ILIKE '%laptop%' OR description ILIKE '%laptop%')
        AND (name ILIKE '%used%' OR description ILIKE '%used%')

    LIKE wildcards inside a term are escaped, so ``50%`` matches the
    literal text.  No terms gives ``true()``.
    """
    if not columns:
        raise ValueError("build_filter needs at least one column")
    if not terms:
        return true()
    return and_(
        *(or_(*(column.icontains(term, autoescape=True) for column in columns)) for term in terms)
    )
