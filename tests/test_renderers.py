"""Tests for heat map and chart adapters."""

import pytest

from marketing_views.application.renderers import (
    EMPTY_REGION_MESSAGE,
    bar_series,
    bubble_heat_map,
    geo_heat_map,
    line_chart,
)
from marketing_views.infrastructure.coordinates import DEFAULT_CITY_COORDINATES

REGIONS = [
    {"region": "New York", "country": "USA", "revenue": 10.0, "spend": 5.0},
    {"region": "London", "country": "UK", "revenue": 50.0, "spend": 5.0},
    {"region": "Atlantis", "country": "Nowhere", "revenue": 90.0, "spend": 5.0},
]


# ── Bubble heat map ──────────────────────────────────────────────────


def test_bubble_sizes_span_visual_range():
    result = bubble_heat_map(REGIONS, "revenue")
    sizes = [bubble["size"] for bubble in result["bubbles"]]
    assert sizes == pytest.approx([40.0, 80.0, 120.0])
    assert [bubble["intensity"] for bubble in result["bubbles"]] == [0, 50, 100]
    assert result["bubbles"][0]["fill"] == "rgba(34, 197, 94, 0.30)"
    assert result["legend"]["min_label"] == "$10"
    assert result["legend"]["max_label"] == "$90"


def test_bubble_legend_uses_compact_money():
    groups = [{"region": "A", "revenue": 1_500.0}, {"region": "B", "revenue": 2_500_000.0}]
    legend = bubble_heat_map(groups, "revenue")["legend"]
    assert legend["min_label"] == "$2K"
    assert legend["max_label"] == "$2.5M"


def test_bubble_flat_values_are_centred():
    result = bubble_heat_map(REGIONS, "spend")
    assert all(bubble["size"] == pytest.approx(80.0) for bubble in result["bubbles"])
    assert result["bubbles"][0]["fill"].startswith("rgba(59, 130, 246")


def test_bubble_empty_input():
    result = bubble_heat_map([], "revenue")
    assert result["bubbles"] == []
    assert result["message"] == EMPTY_REGION_MESSAGE


def test_bubble_rejects_unknown_metric():
    with pytest.raises(ValueError, match="Unsupported heat map metric"):
        bubble_heat_map(REGIONS, "clicks")


# ── Geographic heat map ──────────────────────────────────────────────


def test_geo_map_uses_injected_coordinates():
    result = geo_heat_map(REGIONS, "revenue", DEFAULT_CITY_COORDINATES)
    assert [circle["region"] for circle in result["circles"]] == ["New York", "London"]
    assert result["unplaced"] == ["Atlantis"]
    new_york, london = result["circles"]
    assert new_york["lat"] == pytest.approx(40.7128)
    assert new_york["radius"] == pytest.approx(10_000.0)
    assert london["radius"] == pytest.approx(200_000.0)
    assert london["opacity"] == pytest.approx(1.0)


def test_geo_map_custom_table():
    table = {"Atlantis": {"lat": 1.0, "lng": 2.0, "country": "Nowhere"}}
    result = geo_heat_map(REGIONS, "revenue", table)
    assert len(result["circles"]) == 1
    # a single placed value is a degenerate range
    assert result["circles"][0]["radius"] == pytest.approx(105_000.0)


def test_geo_map_without_matches():
    result = geo_heat_map(REGIONS, "revenue", {})
    assert result["circles"] == []
    assert result["message"] == EMPTY_REGION_MESSAGE


# ── Line chart ───────────────────────────────────────────────────────


def test_line_chart_projects_points():
    chart = line_chart([{"label": "a", "value": 0}, {"label": "b", "value": 10}])
    first, last = chart["points"]
    assert first["x"] == pytest.approx(8.0)
    assert last["x"] == pytest.approx(96.0)
    assert first["y"] > last["y"]
    assert chart["path"].startswith("M 8.00")
    assert " L " in chart["path"]
    assert len(chart["grid"]) == 5


def test_line_chart_flat_series_is_centred():
    chart = line_chart([{"label": "a", "value": 5}, {"label": "b", "value": 5}])
    assert [point["y"] for point in chart["points"]] == [50.0, 50.0]


def test_line_chart_single_point():
    chart = line_chart([{"label": "a", "value": 5}])
    assert chart["points"][0]["x"] == 50.0
    assert chart["path"] == "M 50.00 50.00"


def test_line_chart_empty():
    chart = line_chart([], title="Revenue")
    assert chart["points"] == []
    assert chart["message"] == "No data available"


def test_bar_series():
    series = bar_series([{"region": "Paris", "revenue": 3}], "region", "revenue", color="#000")
    assert series == [{"label": "Paris", "value": 3.0, "color": "#000"}]
