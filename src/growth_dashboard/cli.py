from __future__ import annotations

import json
from pathlib import Path

import typer

from growth_dashboard.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from growth_dashboard.formatting import format_number, format_percentage, metric_label
from growth_dashboard.io.read import load_entity_summaries, load_snapshot_series
from growth_dashboard.logging import configure_logging
from growth_dashboard.models import SortKey, ViewKind
from growth_dashboard.paths import build_output_paths
from growth_dashboard.pipeline.compare import run_compare
from growth_dashboard.ranking.ecosystem import summarize_ecosystem
from growth_dashboard.ranking.engine import paginate, rank
from growth_dashboard.selection.catalog import PlatformCatalog
from growth_dashboard.transform.summary import summarize_growth
from growth_dashboard.viz.time_series import plot_history

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path | None) -> AppConfig:
    if config_path is None:
        return AppConfig()
    return load_config(config_path)


def _default_config_option() -> Path | None:
    return DEFAULT_CONFIG_PATH if DEFAULT_CONFIG_PATH.exists() else None


@app.command()
def compare(
    snapshots: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path | None = typer.Option(
        _default_config_option(), exists=True, readable=True, resolve_path=True
    ),
    view: ViewKind | None = typer.Option(None, help="Chart view; defaults to comparison.default_view."),
    label: list[str] | None = typer.Option(
        None,
        help="Only emit these series. Repeat for several labels; the date axis still spans all.",
    ),
) -> None:
    """Align snapshot histories on one date axis and write the chart-ready table."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    outputs = run_compare(
        snapshots_path=snapshots,
        out_dir=out,
        config=cfg,
        view=view,
        visible_labels=label or None,
    )
    for name, path in sorted(outputs.items()):
        typer.echo(f"{name}: {path}")


@app.command()
def history(
    snapshots: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    label: str = typer.Option(..., help="Series label to summarize."),
    out: Path = typer.Option(Path("out"), resolve_path=True),
    config: Path | None = typer.Option(
        _default_config_option(), exists=True, readable=True, resolve_path=True
    ),
) -> None:
    """Summarize growth for one series and plot its history."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    matches = [item for item in load_snapshot_series(snapshots, cfg.columns) if item.label == label]
    if not matches:
        raise typer.BadParameter(f"No series labelled '{label}' in {snapshots.name}")
    series = matches[0]

    paths = build_output_paths(out)
    figure = plot_history(
        series,
        paths.figures / f"history_{label}.{cfg.outputs.figures_format}",
        metric_title=metric_label(label),
    )
    summary = summarize_growth(series)
    if summary is None:
        typer.echo(f"{label}: not enough snapshots for a growth summary")
    else:
        typer.echo(f"latest: {format_number(summary.latest_value)}")
        typer.echo(f"total_growth: {format_number(summary.total_growth)}")
        typer.echo(
            "growth_pct: "
            + ("N/A" if summary.growth_pct is None else format_percentage(summary.growth_pct))
        )
    typer.echo(f"figure: {figure}")


@app.command("rank")
def rank_command(
    summaries: Path = typer.Option(..., exists=True, readable=True, resolve_path=True),
    config: Path | None = typer.Option(
        _default_config_option(), exists=True, readable=True, resolve_path=True
    ),
    sort: SortKey | None = typer.Option(None, help="Defaults to ranking.default_sort."),
    page: int = typer.Option(1, min=1),
    page_size: int | None = typer.Option(None, min=1, help="Defaults to ranking.page_size."),
    ecosystem: bool = typer.Option(False, help="Also print ecosystem totals and leaders."),
) -> None:
    """Rank DAO summaries and print one page as JSON."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    entities = load_entity_summaries(summaries)
    ranked = rank(entities, sort or cfg.ranking.default_sort)
    result = paginate(ranked, page=page, page_size=page_size or cfg.ranking.page_size)
    payload = result.as_dict()
    payload["items"] = [
        {
            "id": entity.id,
            "slug": entity.slug,
            "name": entity.name,
            "followerCount": entity.follower_count,
            "followerGrowthPct": entity.follower_growth_pct,
            "totalPosts": entity.total_posts,
        }
        for entity in result.items
    ]
    if ecosystem:
        payload["ecosystem"] = summarize_ecosystem(entities, top_n=cfg.ranking.top_n).as_dict()
    typer.echo(json.dumps(payload, indent=2))


@app.command()
def platforms(
    config: Path | None = typer.Option(
        _default_config_option(), exists=True, readable=True, resolve_path=True
    ),
) -> None:
    """List each platform and the metrics it offers (first is the default)."""
    cfg = _load_app_config(config)
    catalog = PlatformCatalog.from_config(cfg.catalog)
    for platform in catalog.platforms:
        metrics = ", ".join(catalog.available_metrics(platform)) or "-"
        typer.echo(f"{platform} ({catalog.display_name(platform)}): {metrics}")


if __name__ == "__main__":  # pragma: no cover
    app()
