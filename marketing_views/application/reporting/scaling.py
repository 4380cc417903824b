"""Linear min-max normalisation onto visual ranges."""

from __future__ import annotations

from typing import Iterable, List, Tuple

import polars as pl

Range = Tuple[float, float]

BUBBLE_SIZE_RANGE: Range = (40.0, 120.0)
GEO_RADIUS_RANGE: Range = (10_000.0, 200_000.0)
OPACITY_RANGE: Range = (0.3, 1.0)
INTENSITY_RANGE: Range = (0.0, 100.0)
DEGENERATE_POSITION = 0.5


def value_range(values: Iterable[float]) -> Range:
    items = [float(value) for value in values]
    if not items:
        return 0.0, 0.0
    return min(items), max(items)


def normalize(value: float, lo: float, hi: float, degenerate: float = DEGENERATE_POSITION) -> float:
    if hi == lo:
        return degenerate
    return (value - lo) / (hi - lo)


def scale(normalized: float, out_range: Range) -> float:
    out_lo, out_hi = out_range
    return out_lo + normalized * (out_hi - out_lo)


def normalize_values(values: Iterable[float], out_range: Range | None = None) -> List[float]:
    items = [float(value) for value in values]
    lo, hi = value_range(items)
    normalized = [normalize(value, lo, hi) for value in items]
    if out_range is None:
        return normalized
    return [scale(position, out_range) for position in normalized]


def normalized_expr(metric: str, lo: float, hi: float) -> pl.Expr:
    if hi == lo:
        return pl.lit(DEGENERATE_POSITION)
    return (pl.col(metric) - lo) / (hi - lo)


def with_normalized(frame: pl.DataFrame, metric: str, out_range: Range | None = None, alias: str | None = None) -> pl.DataFrame:
    """Add a column placing ``metric`` within the frame's own [min, max]."""
    name = alias or f"{metric}_scaled"
    if frame.is_empty():
        return frame.with_columns(pl.lit(None, dtype=pl.Float64).alias(name))
    lo, hi = value_range(frame.get_column(metric).fill_null(0.0).to_list())
    expr = normalized_expr(metric, lo, hi)
    if out_range is not None:
        out_lo, out_hi = out_range
        expr = out_lo + expr * (out_hi - out_lo)
    return frame.with_columns(expr.cast(pl.Float64).alias(name))
