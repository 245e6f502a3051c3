from __future__ import annotations

import asyncio
import logging
import math
from dataclasses import dataclass
from typing import Awaitable, Iterable, Protocol, Sequence

from growth_dashboard.config import ComparisonPlatform
from growth_dashboard.models import EntitySummary, Page, SnapshotSeries, SortKey
from growth_dashboard.ranking.engine import rank

LOGGER = logging.getLogger(__name__)


class HistoryFetcher(Protocol):
    def __call__(self, series_id: str, metric: str, range_days: int) -> Awaitable[SnapshotSeries]:
        ...


class EntitySummarySource(Protocol):
    def __call__(
        self, page: int, page_size: int
    ) -> Awaitable[tuple[Sequence[EntitySummary], int]]:
        ...


@dataclass(frozen=True)
class HistoryRequest:
    series_id: str
    metric: str
    label: str

    @classmethod
    def from_platform(cls, platform: ComparisonPlatform) -> HistoryRequest:
        return cls(series_id=platform.slug, metric=platform.metric, label=platform.label)


async def _fetch_one(
    fetcher: HistoryFetcher, request: HistoryRequest, range_days: int
) -> SnapshotSeries:
    series = await fetcher(request.series_id, request.metric, range_days)
    if series.label == request.label:
        return series
    return SnapshotSeries(label=request.label, points=series.points)


async def fetch_histories(
    fetcher: HistoryFetcher,
    requests: Iterable[HistoryRequest],
    range_days: int,
) -> list[SnapshotSeries]:
    """
    Fetch every requested history concurrently.

    A failed fetch is logged and left out of the result; partial data is
    expected and alignment proceeds over whatever resolved. Empty histories are
    dropped as well. Results keep request order and carry the request label.
    """
    pending = list(requests)
    outcomes = await asyncio.gather(
        *(_fetch_one(fetcher, request, range_days) for request in pending),
        return_exceptions=True,
    )

    resolved: list[SnapshotSeries] = []
    for request, outcome in zip(pending, outcomes):
        if isinstance(outcome, BaseException):
            if not isinstance(outcome, Exception):
                raise outcome
            LOGGER.warning(
                "Error loading history for %s/%s: %s", request.series_id, request.metric, outcome
            )
            continue
        if outcome.is_empty:
            LOGGER.debug("No history for %s/%s", request.series_id, request.metric)
            continue
        resolved.append(outcome)
    return resolved


async def fetch_ranked_page(
    source: EntitySummarySource,
    page: int,
    page_size: int,
    key: SortKey | str,
) -> Page:
    """
    Load one server-side page of DAO summaries and rank it.

    The source pages by its own order and reports the overall total, so only
    the returned items are ranked and the page counts come from that total.
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    items, total = await source(page, page_size)
    total_pages = max(1, math.ceil(total / page_size))
    return Page(
        items=tuple(rank(items, key)),
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
        has_more=page < total_pages,
    )
