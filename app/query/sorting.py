from enum import Enum


class SortOrder(str, Enum):
    """
    The two supported list orderings.

    ``RECENT`` is newest first by ``created_at``; ``ID`` is ascending by
    primary key.  Only the keyword ``"recent"`` selects ``RECENT``: every
    other keyword, including ones we do not recognise, falls back to
    ``ID`` rather than raising.
    """

    RECENT = "recent"
    ID = "id"

    @classmethod
    def resolve(cls, keyword: str | None) -> "SortOrder":
        if keyword == cls.RECENT.value:
            return cls.RECENT
        # Default branch: unknown or missing keywords sort by id.
        return cls.ID

    def order_by(self, model) -> tuple:
        if self is SortOrder.RECENT:
            # id breaks ties between rows written within the same tick.
            return (model.created_at.desc(), model.id.desc())
        return (model.id.asc(),)
