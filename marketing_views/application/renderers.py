"""Chart adapters turning aggregated groups into visual parameters.

The bubble and geographic heat maps are two renderers over the same region
groups; neither re-aggregates.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Sequence

from marketing_views.application.reporting.metrics import fmt_money, fmt_money_compact, to_float
from marketing_views.application.reporting.scaling import (
    BUBBLE_SIZE_RANGE,
    GEO_RADIUS_RANGE,
    INTENSITY_RANGE,
    OPACITY_RANGE,
    normalize_values,
    scale,
    value_range,
)

logger = logging.getLogger(__name__)

HEAT_MAP_METRICS: tuple[str, ...] = ("revenue", "spend")
METRIC_FILL_RGB: Dict[str, str] = {"revenue": "34, 197, 94", "spend": "59, 130, 246"}
METRIC_BORDER_RGB: Dict[str, str] = {"revenue": "21, 128, 61", "spend": "37, 99, 235"}
EMPTY_REGION_MESSAGE = "No regional data available"
EMPTY_CHART_MESSAGE = "No data available"

# Line chart geometry inside a 100x100 SVG viewBox.
CHART_PADDING: Dict[str, float] = {"top": 40.0, "right": 20.0, "bottom": 40.0, "left": 40.0}
CHART_GRID_RATIOS: tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 1.0)


def _check_metric(metric: str) -> None:
    if metric not in HEAT_MAP_METRICS:
        raise ValueError(f"Unsupported heat map metric: {metric!r} (expected one of {list(HEAT_MAP_METRICS)})")


def _title(metric: str) -> str:
    return f"Regional {metric.capitalize()} Heat Map"


def bubble_heat_map(groups: Sequence[Mapping[str, Any]], metric: str = "revenue") -> Dict[str, Any]:
    _check_metric(metric)
    if not groups:
        return {"title": _title(metric), "bubbles": [], "legend": None, "message": EMPTY_REGION_MESSAGE}

    values = [to_float(group.get(metric)) for group in groups]
    lo, hi = value_range(values)
    fill_rgb = METRIC_FILL_RGB[metric]
    border_rgb = METRIC_BORDER_RGB[metric]

    bubbles: List[Dict[str, Any]] = []
    for group, value, position in zip(groups, values, normalize_values(values)):
        intensity = int(scale(position, INTENSITY_RANGE))
        size = scale(position, BUBBLE_SIZE_RANGE)
        region = str(group.get("region", ""))
        bubbles.append(
            {
                "region": region,
                "country": str(group.get("country", "")),
                "value": value,
                "size": size,
                "intensity": intensity,
                "fill": f"rgba({fill_rgb}, {intensity / 100 + 0.3:.2f})",
                "border": f"rgba({border_rgb}, {intensity / 100 + 0.5:.2f})",
                "title": f"{region}: {fmt_money(value)}",
            }
        )

    return {
        "title": _title(metric),
        "subtitle": f"Bubble size represents {metric} amount",
        "bubbles": bubbles,
        "legend": {
            "min_label": fmt_money_compact(lo),
            "max_label": fmt_money_compact(hi),
            "sizes": {"small": BUBBLE_SIZE_RANGE[0], "medium": sum(BUBBLE_SIZE_RANGE) / 2, "large": BUBBLE_SIZE_RANGE[1]},
        },
        "message": None,
    }


def geo_heat_map(
    groups: Sequence[Mapping[str, Any]],
    metric: str,
    coordinates: Mapping[str, Mapping[str, Any]],
) -> Dict[str, Any]:
    """Place one circle per region whose city is in the coordinate table."""
    _check_metric(metric)
    placed: List[tuple[Mapping[str, Any], Mapping[str, Any], float]] = []
    unplaced: List[str] = []
    for group in groups:
        region = str(group.get("region", ""))
        location = coordinates.get(region)
        if location is None:
            unplaced.append(region)
            continue
        placed.append((group, location, to_float(group.get(metric))))

    if unplaced:
        logger.info("No coordinates for %d region(s): %s", len(unplaced), ", ".join(unplaced))

    positions = normalize_values(value for _, _, value in placed)
    circles: List[Dict[str, Any]] = []
    for (group, location, value), position in zip(placed, positions):
        circles.append(
            {
                "region": str(group.get("region", "")),
                "country": str(group.get("country", "") or location.get("country", "")),
                "lat": to_float(location.get("lat")),
                "lng": to_float(location.get("lng")),
                "value": value,
                "radius": scale(position, GEO_RADIUS_RANGE),
                "opacity": scale(position, OPACITY_RANGE),
                "color": f"rgb({METRIC_FILL_RGB[metric]})",
            }
        )
    return {
        "title": _title(metric),
        "circles": circles,
        "unplaced": unplaced,
        "message": None if circles else EMPTY_REGION_MESSAGE,
    }


def line_chart(points: Sequence[Mapping[str, Any]], title: str = "", height: int = 300) -> Dict[str, Any]:
    """Project labelled values onto SVG viewBox coordinates."""
    if not points:
        return {"title": title, "height": height, "points": [], "path": "", "grid": [], "message": EMPTY_CHART_MESSAGE}

    pad = CHART_PADDING
    x_left = pad["left"] / 5
    x_span = 100 - (pad["left"] + pad["right"]) / 5
    y_top = pad["top"] / 3
    y_span = 100 - (pad["top"] + pad["bottom"]) / 3

    values = [to_float(point.get("value")) for point in points]
    lo, hi = value_range(values)
    value_span = hi - lo
    count = len(points)

    projected: List[Dict[str, Any]] = []
    for index, (point, value) in enumerate(zip(points, values)):
        x = x_left + (index / (count - 1)) * x_span if count > 1 else 50.0
        y = (hi - value) / value_span * y_span + y_top if value_span > 0 else 50.0
        projected.append({"x": x, "y": y, "value": value, "label": str(point.get("label", ""))})

    path = " ".join(
        f"{'M' if index == 0 else 'L'} {point['x']:.2f} {point['y']:.2f}" for index, point in enumerate(projected)
    )
    grid = [y_top + ratio * y_span for ratio in CHART_GRID_RATIOS]
    color = points[0].get("color") or "#3B82F6"
    return {
        "title": title,
        "height": height,
        "points": projected,
        "path": path,
        "grid": grid,
        "color": color,
        "message": None,
    }


def bar_series(
    rows: Sequence[Mapping[str, Any]],
    label_key: str,
    value_key: str,
    color: str | None = None,
) -> List[Dict[str, Any]]:
    return [
        {
            "label": str(row.get(label_key, "")),
            "value": to_float(row.get(value_key)),
            "color": color or str(row.get("color", "#3B82F6")),
        }
        for row in rows
    ]
