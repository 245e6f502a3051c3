from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from growth_dashboard.config import ColumnsConfig
from growth_dashboard.models import EntitySummary, SnapshotSeries

LOGGER = logging.getLogger(__name__)

ENTITY_COLUMN_ALIASES = {
    "followerCount": "follower_count",
    "followerGrowth": "follower_growth",
    "followerGrowthPct": "follower_growth_pct",
    "totalPosts": "total_posts",
    "twitterHandle": "twitter_handle",
    "lastSyncedAt": "last_synced_at",
}
ENTITY_REQUIRED_COLUMNS = ["id", "slug", "name"]
ENTITY_NUMERIC_COLUMNS = ["follower_count", "follower_growth", "follower_growth_pct", "total_posts"]


def load_table(path: Path) -> pd.DataFrame:
    if path.suffix == ".parquet":
        return pd.read_parquet(path)
    if path.suffix == ".csv":
        # utf-8-sig strips BOM-prefixed headers commonly found in exported CSV files.
        return pd.read_csv(path, encoding="utf-8-sig")
    if path.suffix == ".json":
        return pd.read_json(path, orient="records")
    raise ValueError(f"Unsupported table file type: {path.suffix}")


def _require_columns(df: pd.DataFrame, required: list[str], source: Path) -> None:
    missing = [column for column in required if column not in df.columns]
    if missing:
        raise ValueError(f"{source.name} is missing required column(s): {', '.join(missing)}")


def load_snapshot_series(path: Path, columns: ColumnsConfig | None = None) -> list[SnapshotSeries]:
    """Load a long-format snapshot table into one series per label, in file order."""
    columns = columns or ColumnsConfig()
    df = load_table(path)
    _require_columns(df, [columns.label, columns.timestamp, columns.value], path)

    working = pd.DataFrame(
        {
            "label": df[columns.label].astype(str),
            "timestamp": pd.to_datetime(df[columns.timestamp], utc=True, errors="coerce"),
            "value": pd.to_numeric(df[columns.value], errors="coerce"),
        }
    )
    invalid = working["timestamp"].isna() | working["value"].isna()
    if invalid.any():
        LOGGER.warning(
            "Dropping %d snapshot row(s) with unparseable timestamp or value from %s",
            int(invalid.sum()),
            path.name,
        )
        working = working.loc[~invalid]

    series: list[SnapshotSeries] = []
    for label, group in working.groupby("label", sort=False):
        series.append(
            SnapshotSeries.from_pairs(
                str(label),
                zip(
                    [timestamp.to_pydatetime() for timestamp in group["timestamp"]],
                    group["value"].astype(float),
                ),
            )
        )
    LOGGER.info("Loaded %d series from %s", len(series), path.name)
    return series


def _optional_text(value: object) -> str | None:
    if value is None or pd.isna(value):
        return None
    text = str(value).strip()
    return text or None


def load_entity_summaries(path: Path) -> list[EntitySummary]:
    df = load_table(path).rename(columns=ENTITY_COLUMN_ALIASES)
    _require_columns(df, ENTITY_REQUIRED_COLUMNS, path)
    for column in ENTITY_NUMERIC_COLUMNS:
        if column in df.columns:
            df[column] = pd.to_numeric(df[column], errors="coerce").fillna(0.0)
        else:
            df[column] = 0.0
    synced = (
        pd.to_datetime(df["last_synced_at"], utc=True, errors="coerce")
        if "last_synced_at" in df.columns
        else pd.Series(pd.NaT, index=df.index)
    )

    entities: list[EntitySummary] = []
    for index, row in enumerate(df.itertuples(index=False)):
        synced_at = synced.iloc[index]
        entities.append(
            EntitySummary(
                id=str(row.id),
                slug=str(row.slug),
                name=str(row.name),
                follower_count=float(row.follower_count),
                follower_growth=float(row.follower_growth),
                follower_growth_pct=float(row.follower_growth_pct),
                total_posts=float(row.total_posts),
                twitter_handle=_optional_text(getattr(row, "twitter_handle", None)),
                last_synced_at=None if pd.isna(synced_at) else synced_at.to_pydatetime(),
            )
        )
    return entities
