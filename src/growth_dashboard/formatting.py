from __future__ import annotations


def format_number(num: float | None) -> str:
    if num is None:
        return "0"
    if num >= 1_000_000:
        return f"{num / 1_000_000:.1f}M"
    if num >= 1_000:
        return f"{num / 1_000:.1f}K"
    if float(num).is_integer():
        return f"{int(num):,}"
    return f"{num:,}"


def format_percentage(num: float | None) -> str:
    if num is None:
        return "0%"
    sign = "+" if num > 0 else ""
    return f"{sign}{num:.1f}%"


def metric_label(metric: str) -> str:
    """``discord_member_count`` -> ``Discord member count``."""
    text = metric.replace("_", " ")
    return text[:1].upper() + text[1:]
