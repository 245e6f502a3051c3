from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Collection, Iterable

import pandas as pd

from growth_dashboard.config import AppConfig
from growth_dashboard.io.read import load_snapshot_series
from growth_dashboard.io.write import write_summary, write_table
from growth_dashboard.models import AlignedSeries, SnapshotSeries, ViewKind
from growth_dashboard.paths import build_output_paths
from growth_dashboard.transform.align import align_all, aligned_frame
from growth_dashboard.transform.axis import DateAxis
from growth_dashboard.transform.summary import summarize_growth
from growth_dashboard.transform.views import transform_all
from growth_dashboard.viz.time_series import plot_comparison

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Comparison:
    axis: DateAxis
    series: tuple[AlignedSeries, ...]
    view: ViewKind

    @property
    def labels(self) -> list[str]:
        return [item.label for item in self.series]

    def to_frame(self) -> pd.DataFrame:
        return aligned_frame(self.axis, self.series)


def build_comparison(
    series: Iterable[SnapshotSeries],
    view: ViewKind | str = ViewKind.absolute,
    visible_labels: Collection[str] | None = None,
) -> Comparison:
    """
    Align every resolved series onto one axis and apply the chosen view.

    The axis always spans every resolved series; ``visible_labels`` only
    filters which aligned series are emitted, so toggling a platform off does
    not shift the dates of the others. Labels must be unique.
    """
    series = list(series)
    seen: set[str] = set()
    for item in series:
        if item.label in seen:
            raise ValueError(f"duplicate label '{item.label}' in comparison")
        seen.add(item.label)
    axis, aligned = align_all(series)
    if visible_labels is not None:
        visible = set(visible_labels)
        aligned = [item for item in aligned if item.label in visible]
    return Comparison(axis=axis, series=tuple(transform_all(aligned, view)), view=ViewKind(view))


class ComparisonBoard:
    """Holds the histories resolved so far and rebuilds the comparison on demand."""

    def __init__(self) -> None:
        self._resolved: dict[str, SnapshotSeries] = {}

    @property
    def labels(self) -> list[str]:
        return list(self._resolved)

    def resolve(self, series: SnapshotSeries) -> None:
        self._resolved[series.label] = series

    def discard(self, label: str) -> None:
        self._resolved.pop(label, None)

    def clear(self) -> None:
        self._resolved.clear()

    def build(
        self,
        view: ViewKind | str = ViewKind.absolute,
        visible_labels: Collection[str] | None = None,
    ) -> Comparison:
        return build_comparison(self._resolved.values(), view=view, visible_labels=visible_labels)


def run_compare(
    snapshots_path: Path,
    out_dir: Path,
    config: AppConfig,
    *,
    view: ViewKind | None = None,
    visible_labels: Collection[str] | None = None,
) -> dict[str, Path]:
    resolved_view = ViewKind(view or config.comparison.default_view)
    series = load_snapshot_series(snapshots_path, config.columns)
    comparison = build_comparison(series, view=resolved_view, visible_labels=visible_labels)
    LOGGER.info(
        "Built %s comparison over %d axis points for %d series",
        resolved_view.value,
        len(comparison.axis),
        len(comparison.series),
    )

    paths = build_output_paths(out_dir)
    stem = f"comparison_{resolved_view.value}"
    fmt = config.outputs.tables_format
    outputs = {
        "table": write_table(comparison.to_frame(), paths.tables / stem, fmt=fmt),
    }

    shown = set(comparison.labels)
    growth = [summarize_growth(item) for item in series if item.label in shown]
    outputs["summary"] = write_summary(
        {
            "view": resolved_view.value,
            "axis_points": len(comparison.axis),
            "labels": comparison.labels,
            "growth": [summary.as_dict() for summary in growth if summary is not None],
        },
        paths.summary / f"{stem}.json",
    )

    if comparison.axis:
        outputs["figure"] = plot_comparison(
            comparison, paths.figures / f"{stem}.{config.outputs.figures_format}"
        )
    return outputs
