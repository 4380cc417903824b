"""View builders: one summary payload per dashboard page."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import polars as pl

from marketing_views.application.aggregation import (
    DEMOGRAPHIC_RULE,
    DEVICE_RULE,
    REGION_RULE,
    WEEKLY_RULE,
    additive_totals,
    aggregate,
    group_mapping,
)
from marketing_views.application.renderers import bar_series, bubble_heat_map, geo_heat_map, line_chart
from marketing_views.application.reporting.metrics import (
    derive_metrics,
    fmt_money,
    fmt_roas,
    fmt_share,
    fmt_week_label,
    to_float,
)
from marketing_views.application.reporting.scaling import INTENSITY_RANGE, with_normalized
from marketing_views.application.trends import WEEK_WINDOW, latest_growth, latest_pair, sort_weeks, week_over_week, weekly_window
from marketing_views.domain.bands import (
    REGION_ROAS_BANDS,
    WEEKLY_BAND_COLORS,
    WEEKLY_ROAS_BANDS,
    age_group_color,
    band_color,
    classify_roas,
)
from marketing_views.domain.models import MarketingDataset

TOP_REGION_LIMIT = 6
GENDERS: tuple[str, ...] = ("Male", "Female")
DEMOGRAPHIC_TABLE_COLUMNS: List[str] = [
    "age_group",
    "impressions",
    "clicks",
    "conversions",
    "spend",
    "revenue",
    "ctr",
    "conversion_rate",
]
DEVICE_CHARTS: tuple[tuple[str, str, str, str], ...] = (
    ("revenue_by_device", "Revenue by Device", "revenue", "#10B981|#3B82F6"),
    ("conversion_rate_by_device", "Conversion Rates by Device", "conversion_rate", "#F59E0B|#EF4444"),
    ("traffic_distribution", "Traffic Distribution", "percentage_of_traffic", "#8B5CF6|#06B6D4"),
    ("ctr_by_device", "Click-Through Rates (CTR)", "ctr", "#84CC16|#F97316"),
)


def _gender_frame(groups: pl.DataFrame, gender: str) -> pl.DataFrame:
    return groups.filter(pl.col("gender") == gender)


def build_demographic_view(dataset: MarketingDataset) -> Dict[str, Any]:
    groups = aggregate(dataset, DEMOGRAPHIC_RULE)

    genders: Dict[str, Any] = {}
    gender_frames: List[pl.DataFrame] = []
    for gender in GENDERS:
        scoped = _gender_frame(groups, gender)
        gender_frames.append(scoped)
        genders[gender.lower()] = {
            "rows": scoped.select(DEMOGRAPHIC_TABLE_COLUMNS).to_dicts(),
            "totals": additive_totals(scoped, ("clicks", "spend", "revenue")),
        }

    by_age = [
        {**row, "color": age_group_color(str(row["age_group"]))}
        for row in pl.concat(gender_frames)
        .group_by("age_group", maintain_order=True)
        .agg(pl.col("spend").sum(), pl.col("revenue").sum())
        .to_dicts()
    ]

    male_clicks = genders["male"]["totals"]["clicks"]
    female_clicks = genders["female"]["totals"]["clicks"]
    return {
        "male": genders["male"],
        "female": genders["female"],
        "age_group_spend": bar_series(by_age, "age_group", "spend"),
        "age_group_revenue": bar_series(by_age, "age_group", "revenue"),
        "female_to_male_clicks": fmt_share(female_clicks, male_clicks),
    }


def build_device_view(dataset: MarketingDataset) -> Dict[str, Any]:
    groups = aggregate(dataset, DEVICE_RULE)
    by_device = group_mapping(groups)
    mobile = by_device.get("Mobile")
    desktop = by_device.get("Desktop")

    charts: Dict[str, Any] = {}
    for key, title, metric, palette in DEVICE_CHARTS:
        mobile_color, desktop_color = palette.split("|")
        charts[key] = {
            "title": title,
            "data": [
                {"label": "Mobile", "value": to_float((mobile or {}).get(metric)), "color": mobile_color},
                {"label": "Desktop", "value": to_float((desktop or {}).get(metric)), "color": desktop_color},
            ],
        }

    return {"devices": groups.to_dicts(), "mobile": mobile, "desktop": desktop, "charts": charts}


def _with_roas_band(row: Mapping[str, Any]) -> Dict[str, Any]:
    band = classify_roas(to_float(row.get("roas")), REGION_ROAS_BANDS)
    return {**row, "roas_band": band, "color": band_color(band)}


def build_region_view(
    dataset: MarketingDataset,
    metric: str = "revenue",
    coordinates: Mapping[str, Mapping[str, Any]] | None = None,
) -> Dict[str, Any]:
    groups = aggregate(dataset, REGION_RULE)
    bubble_map = bubble_heat_map(groups.to_dicts(), metric)

    ordered = with_normalized(groups, "revenue", INTENSITY_RANGE, alias="revenue_intensity").sort(
        "revenue", descending=True, maintain_order=True
    )
    regions = [_with_roas_band(row) for row in ordered.to_dicts()]
    top_regions = regions[:TOP_REGION_LIMIT]
    totals = additive_totals(groups)

    return {
        "regions": regions,
        "total_regions": len(regions),
        "total_revenue": totals["revenue"],
        "total_spend": totals["spend"],
        "top_region": regions[0]["region"] if regions else "N/A",
        "top_regions": top_regions,
        "charts": {
            "top_regions_by_revenue": bar_series(top_regions, "region", "revenue"),
            "regional_roas": bar_series(top_regions, "region", "roas"),
            "regional_conversions": bar_series(top_regions, "region", "conversions", color="#8B5CF6"),
            "regional_ctr": bar_series(top_regions, "region", "ctr", color="#EC4899"),
        },
        "bubble_map": bubble_map,
        "geo_map": geo_heat_map(groups.to_dicts(), metric, coordinates or {}),
    }


def _weekly_table_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    band = classify_roas(to_float(row.get("roas")), WEEKLY_ROAS_BANDS)
    return {
        **row,
        "label": fmt_week_label(str(row.get("week_start", ""))),
        "roas_band": band,
        "roas_color": band_color(band, WEEKLY_BAND_COLORS),
    }


def _week_card(title: str, metric: str, weeks: pl.DataFrame) -> Dict[str, Any]:
    latest, previous = latest_pair(weeks)
    value = to_float((latest or {}).get(metric))
    trend = None
    growth = latest_growth(weeks, metric)
    if growth is not None:
        trend = {"value": growth, "is_positive": value >= to_float((previous or {}).get(metric))}
    return {"title": title, "value": value, "trend": trend}


def build_weekly_view(dataset: MarketingDataset, window: int = WEEK_WINDOW) -> Dict[str, Any]:
    # growth over the full history, window cut afterwards
    history = week_over_week(sort_weeks(aggregate(dataset, WEEKLY_RULE)), "revenue")
    weeks = weekly_window(history, size=window)
    rows = [_weekly_table_row(row) for row in weeks.to_dicts()]

    def _points(metric: str, color: str) -> List[Dict[str, Any]]:
        return [{"label": row["label"], "value": to_float(row.get(metric)), "color": color} for row in rows]

    latest, _ = latest_pair(weeks)
    cards: List[Dict[str, Any]] = []
    if latest is not None:
        cards = [
            _week_card("Current Week Revenue", "revenue", weeks),
            _week_card("Current Week Spend", "spend", weeks),
            _week_card("Current Week Conversions", "conversions", weeks),
            {
                "title": "Weekly ROAS",
                "value": derive_metrics(latest)["roas"],
                "display": fmt_roas(to_float(latest.get("roas"))),
                "trend": None,
            },
        ]

    return {
        "weeks": rows,
        "cards": cards,
        "latest_week_revenue": fmt_money(to_float(latest.get("revenue"))) if latest else "$0",
        "charts": {
            "revenue_trend": line_chart(_points("revenue", "#10B981"), title="Weekly Revenue Trend"),
            "spend_trend": line_chart(_points("spend", "#3B82F6"), title="Weekly Spend Trend"),
            "conversions_trend": line_chart(_points("conversions", "#8B5CF6"), title="Weekly Conversions Trend"),
            "impressions": bar_series(rows, "label", "impressions", color="#8B5CF6"),
            "ctr": bar_series(rows, "label", "ctr", color="#F59E0B"),
        },
    }
