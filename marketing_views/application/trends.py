"""Weekly trend windowing and week-over-week growth."""

from __future__ import annotations

from typing import Any, Dict, Tuple

import polars as pl

from marketing_views.application.reporting.metrics import growth_pct, safe_ratio_expr

WEEK_WINDOW = 8


def _week_date_expr() -> pl.Expr:
    return pl.col("week_start").str.slice(0, 10).str.to_date("%Y-%m-%d", strict=False)


def sort_weeks(frame: pl.DataFrame) -> pl.DataFrame:
    return (
        frame.with_columns(_week_date_expr().alias("_week_date"))
        .sort(["_week_date", "week_start"], nulls_last=False)
        .drop("_week_date")
    )


def weekly_window(frame: pl.DataFrame, size: int = WEEK_WINDOW) -> pl.DataFrame:
    """Sort weeks ascending by start date and keep the most recent ``size``."""
    if size <= 0:
        raise ValueError(f"window size must be positive, got {size}")
    return sort_weeks(frame).tail(size)


def week_over_week(frame: pl.DataFrame, metric: str, alias: str | None = None) -> pl.DataFrame:
    name = alias or f"{metric}_growth"
    previous = pl.col(metric).shift(1)
    growth = (safe_ratio_expr(pl.col(metric) - previous, previous) * 100).fill_null(0.0)
    return frame.with_columns(growth.alias(name))


def latest_pair(frame: pl.DataFrame) -> Tuple[Dict[str, Any] | None, Dict[str, Any] | None]:
    rows = frame.to_dicts()
    latest = rows[-1] if rows else None
    previous = rows[-2] if len(rows) >= 2 else None
    return latest, previous


def latest_growth(frame: pl.DataFrame, metric: str) -> float | None:
    latest, previous = latest_pair(frame)
    if latest is None or previous is None:
        return None
    return growth_pct(latest.get(metric), previous.get(metric))
