from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.ticker import FuncFormatter

from growth_dashboard.formatting import format_number, format_percentage
from growth_dashboard.models import SnapshotSeries, ViewKind
from growth_dashboard.transform.views import VIEW_AXIS_TITLES
from growth_dashboard.viz.common import save_figure, series_color

if TYPE_CHECKING:
    from growth_dashboard.pipeline.compare import Comparison


def _value_formatter(view: ViewKind) -> FuncFormatter:
    if view is ViewKind.absolute:
        return FuncFormatter(lambda value, _pos: format_number(value))
    return FuncFormatter(lambda value, _pos: format_percentage(value))


def plot_comparison(comparison: Comparison, output_path: Path) -> Path:
    frame = comparison.to_frame()
    fig, ax = plt.subplots(figsize=(12, 5))
    for index, label in enumerate(comparison.labels):
        # NaN breaks the line, so absent points show as gaps.
        ax.plot(
            frame["timestamp"],
            frame[label],
            marker="o",
            markersize=3,
            linewidth=2.0,
            color=series_color(index),
            label=label,
        )

    if comparison.view is not ViewKind.absolute:
        ax.axhline(0.0, color="#6b7280", linewidth=0.8, alpha=0.6)
    ax.yaxis.set_major_formatter(_value_formatter(comparison.view))
    ax.set_title("Platform growth comparison")
    ax.set_xlabel("Date")
    ax.set_ylabel(VIEW_AXIS_TITLES[comparison.view])
    if comparison.labels:
        ax.legend(loc="upper left", fontsize=8)
    return save_figure(output_path)


def plot_history(series: SnapshotSeries, output_path: Path, metric_title: str | None = None) -> Path:
    plt.figure(figsize=(12, 4))
    plt.plot(
        [point.timestamp for point in series.points],
        [point.value for point in series.points],
        linewidth=2.0,
        color=series_color(0),
    )
    plt.gca().yaxis.set_major_formatter(_value_formatter(ViewKind.absolute))
    plt.title(metric_title or series.label)
    plt.xlabel("Date")
    plt.ylabel("Value")
    return save_figure(output_path)
