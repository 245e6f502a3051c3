from __future__ import annotations

import math
from typing import Iterable

from growth_dashboard.models import ABSENT, AlignedSeries, MetricValue, Present, ViewKind

VIEW_AXIS_TITLES = {
    ViewKind.absolute: "Value",
    ViewKind.normalized: "Growth from Start (%)",
    ViewKind.growth: "Period Growth Rate (%)",
}


def _percent_change(current: float, reference: float) -> MetricValue:
    if reference == 0:
        return ABSENT
    result = (current - reference) / reference * 100
    assert math.isfinite(result), f"non-finite percent change: {current} vs {reference}"
    return Present(result)


def _first_present(values: tuple[MetricValue, ...]) -> float | None:
    for value in values:
        if isinstance(value, Present):
            return value.value
    return None


def normalize_from_baseline(aligned: AlignedSeries) -> AlignedSeries:
    """Express every point as a percent change from the first present value."""
    baseline = _first_present(aligned.values)
    if baseline is None or baseline == 0:
        return AlignedSeries(label=aligned.label, values=tuple(ABSENT for _ in aligned.values))
    values = tuple(
        _percent_change(value.value, baseline) if isinstance(value, Present) else ABSENT
        for value in aligned.values
    )
    return AlignedSeries(label=aligned.label, values=values)


def period_over_period_growth(aligned: AlignedSeries) -> AlignedSeries:
    """
    Percent change between consecutive axis points.

    Each output depends only on the source value at ``i`` and ``i - 1``, so one
    missing point blanks at most two growth values and never the rest of the
    series.
    """
    source = aligned.values
    values: list[MetricValue] = [ABSENT] if source else []
    for previous, current in zip(source, source[1:]):
        if isinstance(previous, Present) and isinstance(current, Present):
            values.append(_percent_change(current.value, previous.value))
        else:
            values.append(ABSENT)
    return AlignedSeries(label=aligned.label, values=tuple(values))


def transform(aligned: AlignedSeries, kind: ViewKind | str) -> AlignedSeries:
    view = ViewKind(kind)
    if view is ViewKind.absolute:
        return aligned
    if view is ViewKind.normalized:
        return normalize_from_baseline(aligned)
    return period_over_period_growth(aligned)


def transform_all(aligned: Iterable[AlignedSeries], kind: ViewKind | str) -> list[AlignedSeries]:
    return [transform(item, kind) for item in aligned]
