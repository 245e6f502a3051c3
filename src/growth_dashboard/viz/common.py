from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt

SERIES_COLORS = ["#3b82f6", "#8b5cf6", "#ec4899", "#22c55e", "#fb923c"]


def series_color(index: int) -> str:
    return SERIES_COLORS[index % len(SERIES_COLORS)]


def save_figure(path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    return path
