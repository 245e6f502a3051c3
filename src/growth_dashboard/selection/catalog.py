from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from growth_dashboard.config import CatalogConfig


@dataclass(frozen=True)
class PlatformCatalog:
    """Fixed lookup of the metrics each platform offers, first entry is the default."""

    metrics: Mapping[str, tuple[str, ...]]
    display_names: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_config(cls, config: CatalogConfig) -> PlatformCatalog:
        return cls(
            metrics={platform: tuple(names) for platform, names in config.platforms.items()},
            display_names=dict(config.display_names),
        )

    @property
    def platforms(self) -> tuple[str, ...]:
        return tuple(self.metrics)

    def available_metrics(self, platform: str) -> tuple[str, ...]:
        return tuple(self.metrics.get(platform, ()))

    def default_metric(self, platform: str) -> str | None:
        available = self.available_metrics(platform)
        return available[0] if available else None

    def display_name(self, platform: str) -> str:
        return self.display_names.get(platform, platform)
