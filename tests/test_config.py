from __future__ import annotations

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from growth_dashboard.config import load_config
from growth_dashboard.models import SortKey, ViewKind


def test_load_config_defaults_from_empty_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("", encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg.catalog.platforms["twitter"][0] == "twitter_follower_count"
    assert cfg.selection.default_time_range_days == 365
    assert cfg.selection.time_range_presets == [90, 180, 365]
    assert cfg.comparison.default_view is ViewKind.absolute
    assert [platform.label for platform in cfg.comparison.platforms][:2] == [
        "Twitter Followers",
        "Discord Members",
    ]
    assert cfg.ranking.page_size == 12
    assert cfg.ranking.default_sort is SortKey.followers


def test_load_config_overrides(tmp_path: Path) -> None:
    config_data = {
        "catalog": {"platforms": {"farcaster": ["farcaster_follower_count"]}},
        "selection": {"default_platform": "farcaster", "default_time_range_days": 30},
        "comparison": {"default_view": "growth"},
        "ranking": {"page_size": 24, "default_sort": "posts"},
        "outputs": {"tables_format": "parquet"},
    }
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump(config_data), encoding="utf-8")

    cfg = load_config(config_path)

    assert cfg.catalog.platforms == {"farcaster": ["farcaster_follower_count"]}
    assert cfg.selection.default_time_range_days == 30
    assert cfg.comparison.default_view is ViewKind.growth
    assert cfg.ranking.page_size == 24
    assert cfg.ranking.default_sort is SortKey.posts
    assert cfg.outputs.tables_format == "parquet"


def test_load_config_rejects_unknown_default_platform(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        yaml.safe_dump({"selection": {"default_platform": "myspace"}}), encoding="utf-8"
    )
    with pytest.raises(ValueError, match="myspace"):
        load_config(config_path)


def test_load_config_rejects_unknown_sections(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"persistence": {"enabled": True}}), encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(config_path)


def test_load_config_log_level_from_env(monkeypatch, tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.safe_dump({"logging": {"level": "WARNING"}}), encoding="utf-8")

    assert load_config(config_path).logging.level == "WARNING"
    monkeypatch.setenv("GROWTH_DASHBOARD_LOG_LEVEL", "DEBUG")
    assert load_config(config_path).logging.level == "DEBUG"


def test_repository_default_config_loads() -> None:
    default_path = Path(__file__).resolve().parents[1] / "configs" / "default.yaml"
    cfg = load_config(default_path)
    assert cfg.selection.default_platform == "twitter"
    assert len(cfg.comparison.platforms) == 5
