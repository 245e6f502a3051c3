from __future__ import annotations

from datetime import datetime
from typing import Iterable

from growth_dashboard.models import SnapshotSeries

DateAxis = tuple[datetime, ...]


def build_date_axis(series: Iterable[SnapshotSeries]) -> DateAxis:
    """Sorted union of every timestamp seen in any input series."""
    timestamps = {point.timestamp for item in series for point in item.points}
    return tuple(sorted(timestamps))
