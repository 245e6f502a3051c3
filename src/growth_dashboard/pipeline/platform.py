from __future__ import annotations

import logging

from growth_dashboard.io.fetch import HistoryFetcher
from growth_dashboard.models import SnapshotSeries
from growth_dashboard.selection.controller import MetricSelectionController, ReloadSignal

LOGGER = logging.getLogger(__name__)


async def load_history(
    controller: MetricSelectionController,
    fetcher: HistoryFetcher,
    signal: ReloadSignal,
) -> SnapshotSeries | None:
    """
    Fetch the history a reload signal asks for, unless the selection moved on.

    Returns ``None`` when the signal has no metric to fetch, when the fetch
    fails, or when another transition happened while the request was in flight.
    """
    if not signal.fetchable:
        return None
    state = signal.state
    LOGGER.info(
        "Loading history for %s %s over %d days",
        state.active_platform,
        state.selected_metric,
        state.time_range_days,
    )
    try:
        series = await fetcher(state.active_platform, state.selected_metric, state.time_range_days)
    except Exception as exc:
        if not controller.is_current(signal.generation):
            LOGGER.debug(
                "Discarding stale failed history for %s %s: %s",
                state.active_platform,
                state.selected_metric,
                exc,
            )
            return None
        LOGGER.warning(
            "Error loading history for %s %s: %s", state.active_platform, state.selected_metric, exc
        )
        return None
    if not controller.is_current(signal.generation):
        LOGGER.debug(
            "Discarding stale history for %s %s", state.active_platform, state.selected_metric
        )
        return None
    return series
