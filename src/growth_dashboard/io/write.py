from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pandas as pd

TABLE_FORMATS = ("csv", "parquet")


def write_table(df: pd.DataFrame, path: Path, fmt: str = "csv") -> Path:
    """Write ``df`` next to ``path`` with the suffix matching ``fmt``."""
    if fmt not in TABLE_FORMATS:
        raise ValueError(f"Unsupported table format: {fmt}")
    target = path.with_suffix(f".{fmt}")
    target.parent.mkdir(parents=True, exist_ok=True)
    if fmt == "parquet":
        df.to_parquet(target, index=False)
    else:
        df.to_csv(target, index=False)
    return target


def write_summary(data: dict[str, Any], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    # Timestamps and other non-JSON scalars fall back to their string form.
    path.write_text(json.dumps(data, indent=2, sort_keys=True, default=str), encoding="utf-8")
    return path
