from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from growth_dashboard.selection.catalog import PlatformCatalog

LOGGER = logging.getLogger(__name__)


class ReloadReason(str, Enum):
    initial_mount = "initial_mount"
    platform_changed = "platform_changed"
    metric_chosen = "metric_chosen"
    range_chosen = "range_chosen"


@dataclass(frozen=True)
class SelectionState:
    active_platform: str
    available_metrics: tuple[str, ...]
    selected_metric: str | None
    time_range_days: int


@dataclass(frozen=True)
class ReloadSignal:
    """
    Emitted whenever the selection changes and the fetch layer should reload.

    ``generation`` identifies the selection the fetch was issued for; responses
    carrying an older generation must be discarded. ``invalidate_cache`` is set
    when the platform changed and previously loaded history no longer applies.
    """

    state: SelectionState
    generation: int
    reason: ReloadReason
    invalidate_cache: bool = False

    @property
    def fetchable(self) -> bool:
        return self.state.selected_metric is not None


ReloadListener = Callable[[ReloadSignal], None]


def _validate_range(days: int) -> int:
    if int(days) != days or days < 1:
        raise ValueError(f"time range must be a positive number of days, got {days!r}")
    return int(days)


class MetricSelectionController:
    def __init__(
        self,
        catalog: PlatformCatalog,
        platform: str,
        time_range_days: int,
        on_reload: ReloadListener | None = None,
    ) -> None:
        self.catalog = catalog
        self.on_reload = on_reload
        self._generation = 0
        self._state = SelectionState(
            active_platform=platform,
            available_metrics=catalog.available_metrics(platform),
            selected_metric=None,
            time_range_days=_validate_range(time_range_days),
        )

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        return generation == self._generation

    def initial_mount(self) -> ReloadSignal | None:
        if self._state.selected_metric is not None:
            return None
        first_metric = self.catalog.default_metric(self._state.active_platform)
        if first_metric is None:
            return None
        LOGGER.debug(
            "Initial load for %s, selecting %s", self._state.active_platform, first_metric
        )
        return self._commit(
            replace(self._state, selected_metric=first_metric), ReloadReason.initial_mount
        )

    def change_platform(self, platform: str) -> ReloadSignal | None:
        if platform == self._state.active_platform:
            return self.initial_mount()
        LOGGER.info("Switching platform from %s to %s", self._state.active_platform, platform)
        new_state = SelectionState(
            active_platform=platform,
            available_metrics=self.catalog.available_metrics(platform),
            selected_metric=self.catalog.default_metric(platform),
            time_range_days=self._state.time_range_days,
        )
        return self._commit(new_state, ReloadReason.platform_changed, invalidate_cache=True)

    def choose_metric(self, metric: str) -> ReloadSignal | None:
        if metric not in self._state.available_metrics:
            raise ValueError(
                f"metric '{metric}' is not offered for platform '{self._state.active_platform}'"
            )
        if metric == self._state.selected_metric:
            return None
        return self._commit(replace(self._state, selected_metric=metric), ReloadReason.metric_chosen)

    def choose_range(self, days: int) -> ReloadSignal | None:
        days = _validate_range(days)
        if days == self._state.time_range_days:
            return None
        return self._commit(replace(self._state, time_range_days=days), ReloadReason.range_chosen)

    def _commit(
        self,
        state: SelectionState,
        reason: ReloadReason,
        *,
        invalidate_cache: bool = False,
    ) -> ReloadSignal:
        self._state = state
        self._generation += 1
        signal = ReloadSignal(
            state=state,
            generation=self._generation,
            reason=reason,
            invalidate_cache=invalidate_cache,
        )
        if self.on_reload is not None:
            self.on_reload(signal)
        return signal
