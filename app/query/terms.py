def tokenize(q: str | None) -> list[str]:
    """
    Split a free-text query on runs of whitespace.

    ``None``, ``""`` and whitespace-only input all give ``[]``, which the
    filter builder treats as "no filter".
    """
    if not q or not isinstance(q, str):
        return []
    return q.split()
