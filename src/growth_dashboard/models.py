from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Sequence, Union


@dataclass(frozen=True)
class SnapshotPoint:
    timestamp: datetime
    value: float


@dataclass(frozen=True)
class SnapshotSeries:
    """
    One platform/metric history as delivered by the fetch layer.

    Points are stored ascending by timestamp; naive timestamps are taken as
    UTC so series from different sources share one axis. Duplicate timestamps and
    non-finite values are rejected so every downstream transform can assume
    a clean, strictly ordered input.
    """

    label: str
    points: tuple[SnapshotPoint, ...] = ()

    def __post_init__(self) -> None:
        points = (
            SnapshotPoint(timestamp=point.timestamp.replace(tzinfo=timezone.utc), value=point.value)
            if point.timestamp.tzinfo is None
            else point
            for point in self.points
        )
        ordered = tuple(sorted(points, key=lambda point: point.timestamp))
        for previous, current in zip(ordered, ordered[1:]):
            if previous.timestamp == current.timestamp:
                raise ValueError(
                    f"series '{self.label}' has duplicate timestamp {current.timestamp.isoformat()}"
                )
        for point in ordered:
            if not math.isfinite(point.value):
                raise ValueError(
                    f"series '{self.label}' has non-finite value at {point.timestamp.isoformat()}"
                )
        object.__setattr__(self, "points", ordered)

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @classmethod
    def from_pairs(
        cls, label: str, pairs: Iterable[tuple[datetime, float]]
    ) -> SnapshotSeries:
        return cls(
            label=label,
            points=tuple(SnapshotPoint(timestamp=ts, value=float(value)) for ts, value in pairs),
        )


@dataclass(frozen=True)
class Present:
    value: float


@dataclass(frozen=True)
class Absent:
    """No measurement at this axis position. Never equal to ``Present(0)``."""

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT = Absent()

MetricValue = Union[Present, Absent]


def value_or_none(value: MetricValue) -> float | None:
    if isinstance(value, Present):
        return value.value
    return None


@dataclass(frozen=True)
class AlignedSeries:
    label: str
    values: tuple[MetricValue, ...] = ()

    def __len__(self) -> int:
        return len(self.values)

    def as_optional(self) -> list[float | None]:
        return [value_or_none(value) for value in self.values]

    def present_count(self) -> int:
        return sum(1 for value in self.values if isinstance(value, Present))


class ViewKind(str, Enum):
    absolute = "absolute"
    normalized = "normalized"
    growth = "growth"


class SortKey(str, Enum):
    followers = "followers"
    growth = "growth"
    posts = "posts"


@dataclass(frozen=True)
class EntitySummary:
    """Per-DAO row shown on the DAO listing page."""

    id: str
    slug: str
    name: str
    follower_count: float = 0.0
    follower_growth: float = 0.0
    follower_growth_pct: float = 0.0
    total_posts: float = 0.0
    twitter_handle: str | None = None
    last_synced_at: datetime | None = None


@dataclass(frozen=True)
class Page:
    items: Sequence[Any] = field(default_factory=tuple)
    page: int = 1
    page_size: int = 1
    total: int = 0
    total_pages: int = 1
    has_more: bool = False

    def as_dict(self) -> dict[str, Any]:
        return {
            "items": list(self.items),
            "page": self.page,
            "pageSize": self.page_size,
            "total": self.total,
            "totalPages": self.total_pages,
            "hasMore": self.has_more,
        }
