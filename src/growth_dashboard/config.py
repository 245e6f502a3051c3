from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field

from growth_dashboard.logging import LOG_LEVEL_ENV
from growth_dashboard.models import SortKey, ViewKind

STANDARD_TIME_RANGE_DAYS = [90, 180, 365]

DEFAULT_PLATFORM_METRICS: dict[str, list[str]] = {
    "discord": ["discord_member_count", "discord_message_count"],
    "telegram": ["telegram_member_count", "telegram_message_count"],
    "twitter": ["twitter_follower_count", "twitter_impression_count"],
    "youtube": ["youtube_subscriber_count", "youtube_view_count"],
    "email_newsletter": ["email_newsletter_signup_count"],
    "luma": ["luma_subscriber_count", "luma_page_views"],
    "linkedin": ["linkedin_follower_count"],
    "website_bio": ["website_page_views", "website_active_users", "website_new_users"],
    "website_app": ["website_page_views", "website_active_users", "website_new_users"],
}

DEFAULT_PLATFORM_NAMES: dict[str, str] = {
    "discord": "Discord",
    "telegram": "Telegram",
    "twitter": "Twitter",
    "youtube": "YouTube",
    "email_newsletter": "Email Newsletter",
    "luma": "Luma",
    "linkedin": "LinkedIn",
    "website_bio": "Website (bio.xyz)",
    "website_app": "Website (app.bio.xyz)",
}


class ColumnsConfig(BaseModel):
    label: str = "label"
    timestamp: str = "snapshot_at"
    value: str = "value"


class CatalogConfig(BaseModel):
    platforms: dict[str, list[str]] = Field(
        default_factory=lambda: {key: list(value) for key, value in DEFAULT_PLATFORM_METRICS.items()}
    )
    display_names: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_PLATFORM_NAMES))


class SelectionConfig(BaseModel):
    default_platform: str = "twitter"
    default_time_range_days: int = Field(default=365, ge=1)
    time_range_presets: list[int] = Field(default_factory=lambda: list(STANDARD_TIME_RANGE_DAYS))


class ComparisonPlatform(BaseModel):
    slug: str
    metric: str
    label: str


def _default_comparison_platforms() -> list[ComparisonPlatform]:
    return [
        ComparisonPlatform(slug="twitter", metric="twitter_follower_count", label="Twitter Followers"),
        ComparisonPlatform(slug="discord", metric="discord_member_count", label="Discord Members"),
        ComparisonPlatform(slug="telegram", metric="telegram_member_count", label="Telegram Members"),
        ComparisonPlatform(
            slug="youtube", metric="youtube_subscriber_count", label="YouTube Subscribers"
        ),
        ComparisonPlatform(
            slug="linkedin", metric="linkedin_follower_count", label="LinkedIn Followers"
        ),
    ]


class ComparisonConfig(BaseModel):
    platforms: list[ComparisonPlatform] = Field(default_factory=_default_comparison_platforms)
    history_range_days: int = Field(default=365, ge=1)
    default_view: ViewKind = ViewKind.absolute


class RankingConfig(BaseModel):
    page_size: int = Field(default=12, ge=1)
    default_sort: SortKey = SortKey.followers
    top_n: int = Field(default=5, ge=1)


class OutputsConfig(BaseModel):
    tables_format: Literal["csv", "parquet"] = "csv"
    figures_format: str = "png"


class LoggingConfig(BaseModel):
    level: str = "INFO"


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    selection: SelectionConfig = Field(default_factory=SelectionConfig)
    comparison: ComparisonConfig = Field(default_factory=ComparisonConfig)
    ranking: RankingConfig = Field(default_factory=RankingConfig)
    outputs: OutputsConfig = Field(default_factory=OutputsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


DEFAULT_CONFIG_PATH = Path("configs/default.yaml")


def load_config(path: Path) -> AppConfig:
    with path.open("r", encoding="utf-8") as handle:
        data = yaml.safe_load(handle) or {}

    config = AppConfig.model_validate(data)
    if config.selection.default_platform not in config.catalog.platforms:
        raise ValueError(
            f"selection.default_platform '{config.selection.default_platform}' "
            "is not defined in catalog.platforms"
        )
    config.logging.level = os.getenv(LOG_LEVEL_ENV) or config.logging.level
    return config
