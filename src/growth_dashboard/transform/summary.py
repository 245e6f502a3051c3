from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from growth_dashboard.models import SnapshotSeries


@dataclass(frozen=True)
class GrowthSummary:
    label: str
    first_value: float
    latest_value: float
    latest_at: datetime
    total_growth: float
    growth_pct: float | None
    avg_growth_per_point: float

    def as_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["latest_at"] = self.latest_at.isoformat()
        return payload


def summarize_growth(series: SnapshotSeries) -> GrowthSummary | None:
    if len(series.points) < 2:
        return None
    first = series.points[0]
    latest = series.points[-1]
    total_growth = latest.value - first.value
    growth_pct = None if first.value == 0 else total_growth / first.value * 100
    return GrowthSummary(
        label=series.label,
        first_value=first.value,
        latest_value=latest.value,
        latest_at=latest.timestamp,
        total_growth=total_growth,
        growth_pct=growth_pct,
        avg_growth_per_point=total_growth / len(series.points),
    )
