"""Derived-metric calculation and display formatting.

Every ratio is computed from already-summed additive counters. A zero (or
negative) denominator resolves to ``0.0`` so NaN/inf never reach sorting or
colour scaling.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping

import polars as pl

ADDITIVE_FIELDS: tuple[str, ...] = ("impressions", "clicks", "conversions", "spend", "revenue")


def to_float(value: Any, default: float = 0.0) -> float:
    if value is None:
        return default
    return float(value)


def safe_ratio(num: float, den: float) -> float:
    if den <= 0:
        return 0.0
    return num / den


def growth_pct(curr: float | None, prev: float | None) -> float:
    if curr is None or prev is None or prev <= 0:
        return 0.0
    return (curr - prev) / prev * 100


def safe_ratio_expr(num: pl.Expr, den: pl.Expr) -> pl.Expr:
    return pl.when(den > 0).then(num / den).otherwise(pl.lit(0.0))


def derive_metrics(totals: Mapping[str, Any]) -> dict[str, float]:
    impressions = to_float(totals.get("impressions"))
    clicks = to_float(totals.get("clicks"))
    conversions = to_float(totals.get("conversions"))
    spend = to_float(totals.get("spend"))
    revenue = to_float(totals.get("revenue"))
    return {
        "ctr": safe_ratio(clicks, impressions) * 100,
        "conversion_rate": safe_ratio(conversions, clicks) * 100,
        "cpc": safe_ratio(spend, clicks),
        "cpa": safe_ratio(spend, conversions),
        "roas": safe_ratio(revenue, spend),
    }


def derived_metric_exprs() -> list[pl.Expr]:
    return [
        (safe_ratio_expr(pl.col("clicks"), pl.col("impressions")) * 100).alias("ctr"),
        (safe_ratio_expr(pl.col("conversions"), pl.col("clicks")) * 100).alias("conversion_rate"),
        safe_ratio_expr(pl.col("spend"), pl.col("clicks")).alias("cpc"),
        safe_ratio_expr(pl.col("spend"), pl.col("conversions")).alias("cpa"),
        safe_ratio_expr(pl.col("revenue"), pl.col("spend")).alias("roas"),
    ]


def with_derived_metrics(frame: pl.DataFrame) -> pl.DataFrame:
    """Append ratio columns computed from the frame's summed counters."""
    missing = [name for name in ADDITIVE_FIELDS if name not in frame.columns]
    if missing:
        raise ValueError(f"Missing additive columns: {missing}")
    return frame.with_columns(derived_metric_exprs())


def fmt_money(value: float | None, digits: int = 0) -> str:
    if value is None:
        return "$0"
    return f"${value:,.{digits}f}"


def fmt_money_compact(value: float | None) -> str:
    if value is None:
        return "$0"
    abs_value = abs(value)
    sign = "-" if value < 0 else ""
    if abs_value >= 1_000_000:
        return f"{sign}${abs_value / 1_000_000:.1f}M"
    if abs_value >= 1_000:
        return f"{sign}${abs_value / 1_000:.0f}K"
    return f"{sign}${abs_value:.0f}"


def fmt_count(value: float | None) -> str:
    if value is None:
        return "0"
    return f"{value:,.0f}"


def fmt_pct(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{digits}f}%"


def fmt_growth(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:+.1f}%"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f}x"


def fmt_share(num: float, den: float, digits: int = 1) -> str:
    if den <= 0:
        return "N/A"
    return f"{num / den * 100:.{digits}f}%"


def fmt_week_label(value: str | date) -> str:
    if isinstance(value, date):
        parsed = value
    else:
        try:
            parsed = datetime.strptime(str(value)[:10], "%Y-%m-%d").date()
        except ValueError:
            return str(value)
    return f"{parsed.strftime('%b')} {parsed.day}"
