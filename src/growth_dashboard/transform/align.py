from __future__ import annotations

from typing import Iterable, Sequence

import numpy as np
import pandas as pd

from growth_dashboard.models import ABSENT, AlignedSeries, Present, SnapshotSeries
from growth_dashboard.transform.axis import DateAxis, build_date_axis


def align_series(series: SnapshotSeries, axis: DateAxis) -> AlignedSeries:
    # Exact timestamp matches only: gaps stay gaps, nothing is carried forward.
    by_timestamp = {point.timestamp: point.value for point in series.points}
    values = tuple(
        Present(float(by_timestamp[timestamp])) if timestamp in by_timestamp else ABSENT
        for timestamp in axis
    )
    return AlignedSeries(label=series.label, values=values)


def align_all(series: Iterable[SnapshotSeries]) -> tuple[DateAxis, list[AlignedSeries]]:
    collected = list(series)
    axis = build_date_axis(collected)
    return axis, [align_series(item, axis) for item in collected]


def aligned_frame(axis: DateAxis, aligned: Sequence[AlignedSeries]) -> pd.DataFrame:
    frame = pd.DataFrame({"timestamp": pd.to_datetime(list(axis))})
    for item in aligned:
        if len(item) != len(axis):
            raise ValueError(
                f"aligned series '{item.label}' has {len(item)} values for a {len(axis)}-point axis"
            )
        frame[item.label] = np.array(
            [np.nan if value is None else value for value in item.as_optional()],
            dtype=float,
        )
    return frame
