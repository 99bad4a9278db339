"""Offset pagination over SQLAlchemy queries."""

from typing import Any, Iterable, List, Tuple

from sqlalchemy.orm import Query


def paginate(
    query: Query,
    page: int,
    limit: int,
    order_by: Iterable[Any] = (),
    options: Iterable[Any] = (),
) -> Tuple[List[Any], int]:
    """Return one page of ``query`` together with the total match count.

    The count is taken on the filtered query before loader options and
    ordering are applied.

    Args:
        query: Filtered query.
        page: Page number, starting at 1.
        limit: Page size.
        order_by: Ordering clauses for the page query.
        options: Loader options (e.g. ``joinedload``) for the page query.

    Returns:
        Tuple of (items on the page, total number of matches).
    """
    total = query.count()
    items = (
        query.options(*options)
        .order_by(*order_by)
        .offset((page - 1) * limit)
        .limit(limit)
        .all()
    )
    return items, total
