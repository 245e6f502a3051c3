from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence, TypeVar

from growth_dashboard.models import EntitySummary, Page, SortKey

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

SORT_FIELDS = {
    SortKey.followers: "follower_count",
    SortKey.growth: "follower_growth_pct",
    SortKey.posts: "total_posts",
}


def _resolve_sort_key(key: SortKey | str) -> SortKey | None:
    try:
        return SortKey(key)
    except ValueError:
        return None


def rank(entities: Iterable[EntitySummary], key: SortKey | str) -> list[EntitySummary]:
    """Order entities descending by the chosen field; ties keep their input order."""
    collected = list(entities)
    sort_key = _resolve_sort_key(key)
    if sort_key is None:
        LOGGER.warning("Unknown sort key %r, keeping input order", key)
        return collected
    field_name = SORT_FIELDS[sort_key]
    # sorted() stays stable under reverse=True, so equal keys keep input order.
    return sorted(collected, key=lambda entity: getattr(entity, field_name), reverse=True)


def paginate(ranked: Sequence[T], page: int, page_size: int) -> Page:
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    total = len(ranked)
    total_pages = max(1, math.ceil(total / page_size))
    if 1 <= page <= total_pages:
        start = (page - 1) * page_size
        items = tuple(ranked[start : start + page_size])
    else:
        items = ()
    return Page(
        items=items,
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        has_more=page < total_pages,
    )
