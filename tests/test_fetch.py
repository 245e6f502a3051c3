from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone

import pytest

from growth_dashboard.config import CatalogConfig, ComparisonConfig
from growth_dashboard.io.fetch import HistoryRequest, fetch_histories, fetch_ranked_page
from growth_dashboard.models import EntitySummary, SnapshotSeries, SortKey
from growth_dashboard.pipeline.platform import load_history
from growth_dashboard.selection.catalog import PlatformCatalog
from growth_dashboard.selection.controller import MetricSelectionController


def _day(day: int) -> datetime:
    return datetime(2025, 3, day, tzinfo=timezone.utc)


def test_fetch_histories_omits_failed_and_empty_fetches() -> None:
    calls: list[tuple[str, str, int]] = []

    async def fetcher(series_id: str, metric: str, range_days: int) -> SnapshotSeries:
        calls.append((series_id, metric, range_days))
        if series_id == "discord":
            raise RuntimeError("API Error: Bad Gateway")
        if series_id == "youtube":
            return SnapshotSeries(label=series_id)
        return SnapshotSeries.from_pairs(series_id, [(_day(1), 10.0), (_day(2), 12.0)])

    requests = [
        HistoryRequest.from_platform(platform) for platform in ComparisonConfig().platforms
    ]
    resolved = asyncio.run(fetch_histories(fetcher, requests, range_days=365))

    assert [series.label for series in resolved] == [
        "Twitter Followers",
        "Telegram Members",
        "LinkedIn Followers",
    ]
    assert len(calls) == 5
    assert all(range_days == 365 for _, _, range_days in calls)


def test_load_history_discards_stale_response() -> None:
    controller = MetricSelectionController(
        catalog=PlatformCatalog.from_config(CatalogConfig()),
        platform="discord",
        time_range_days=365,
    )
    first = controller.initial_mount()
    assert first is not None

    async def fetcher(series_id: str, metric: str, range_days: int) -> SnapshotSeries:
        # The user switches platform while this request is in flight.
        controller.change_platform("twitter")
        return SnapshotSeries.from_pairs(metric, [(_day(1), 1.0)])

    assert asyncio.run(load_history(controller, fetcher, first)) is None


def test_load_history_returns_current_response() -> None:
    controller = MetricSelectionController(
        catalog=PlatformCatalog.from_config(CatalogConfig()),
        platform="twitter",
        time_range_days=90,
    )
    signal = controller.initial_mount()
    assert signal is not None
    requested: list[tuple[str, str, int]] = []

    async def fetcher(series_id: str, metric: str, range_days: int) -> SnapshotSeries:
        requested.append((series_id, metric, range_days))
        return SnapshotSeries.from_pairs(metric, [(_day(1), 1.0), (_day(2), 2.0)])

    series = asyncio.run(load_history(controller, fetcher, signal))

    assert series is not None
    assert series.label == "twitter_follower_count"
    assert requested == [("twitter", "twitter_follower_count", 90)]


def test_load_history_skips_signal_without_metric() -> None:
    controller = MetricSelectionController(
        catalog=PlatformCatalog.from_config(CatalogConfig()),
        platform="twitter",
        time_range_days=90,
    )
    signal = controller.change_platform("myspace")
    assert signal is not None

    async def fetcher(series_id: str, metric: str, range_days: int) -> SnapshotSeries:
        raise AssertionError("fetch should not be issued")

    assert asyncio.run(load_history(controller, fetcher, signal)) is None


def test_load_history_returns_none_when_fetch_fails(
    caplog: pytest.LogCaptureFixture,
) -> None:
    controller = MetricSelectionController(
        catalog=PlatformCatalog.from_config(CatalogConfig()),
        platform="discord",
        time_range_days=365,
    )
    signal = controller.initial_mount()
    assert signal is not None

    async def fetcher(series_id: str, metric: str, range_days: int) -> SnapshotSeries:
        raise RuntimeError("API Error: Bad Gateway")

    with caplog.at_level(logging.WARNING, logger="growth_dashboard.pipeline.platform"):
        assert asyncio.run(load_history(controller, fetcher, signal)) is None
    assert "Error loading history for discord" in caplog.text
    assert "Bad Gateway" in caplog.text


def test_load_history_drops_failed_fetch_after_platform_switch(
    caplog: pytest.LogCaptureFixture,
) -> None:
    controller = MetricSelectionController(
        catalog=PlatformCatalog.from_config(CatalogConfig()),
        platform="discord",
        time_range_days=365,
    )
    first = controller.initial_mount()
    assert first is not None

    async def fetcher(series_id: str, metric: str, range_days: int) -> SnapshotSeries:
        controller.change_platform("twitter")
        raise RuntimeError("API Error: Bad Gateway")

    with caplog.at_level(logging.WARNING, logger="growth_dashboard.pipeline.platform"):
        assert asyncio.run(load_history(controller, fetcher, first)) is None
    assert "Error loading history" not in caplog.text
    assert controller.state.active_platform == "twitter"


def test_fetch_ranked_page_ranks_items_and_uses_reported_total() -> None:
    requested: list[tuple[int, int]] = []

    async def source(page: int, page_size: int) -> tuple[list[EntitySummary], int]:
        requested.append((page, page_size))
        return [
            EntitySummary(id="a", slug="dao-a", name="DAO a", follower_count=10),
            EntitySummary(id="b", slug="dao-b", name="DAO b", follower_count=30),
        ], 25

    result = asyncio.run(fetch_ranked_page(source, page=2, page_size=12, key=SortKey.followers))

    assert requested == [(2, 12)]
    assert [entity.id for entity in result.items] == ["b", "a"]
    assert result.total == 25
    assert result.total_pages == 3
    assert result.has_more is True


def test_fetch_ranked_page_rejects_non_positive_page_size() -> None:
    async def source(page: int, page_size: int) -> tuple[list[EntitySummary], int]:
        raise AssertionError("source should not be called")

    with pytest.raises(ValueError, match="page_size"):
        asyncio.run(fetch_ranked_page(source, page=1, page_size=0, key="followers"))
