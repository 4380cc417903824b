"""Static HTML rendering of the dashboard views."""

from __future__ import annotations

from datetime import datetime
from html import escape
from typing import Any, List, Mapping, Sequence, Tuple

from marketing_views.application.reporting.metrics import (
    fmt_count,
    fmt_growth,
    fmt_money,
    fmt_pct,
    fmt_roas,
    to_float,
)

Column = Tuple[str, str, str]

DEMOGRAPHIC_COLUMNS: List[Column] = [
    ("age_group", "Age Group", "text"),
    ("impressions", "Impressions", "count"),
    ("clicks", "Clicks", "count"),
    ("conversions", "Conversions", "count"),
    ("ctr", "CTR", "pct"),
    ("conversion_rate", "Conv. Rate", "pct"),
]
DEVICE_COLUMNS: List[Column] = [
    ("device", "Device", "text"),
    ("impressions", "Impressions", "count"),
    ("clicks", "Clicks", "count"),
    ("conversions", "Conversions", "count"),
    ("spend", "Spend", "money"),
    ("revenue", "Revenue", "money"),
    ("ctr", "CTR", "pct"),
    ("conversion_rate", "Conv. Rate", "pct"),
    ("percentage_of_traffic", "Traffic Share", "pct1"),
]
REGION_COLUMNS: List[Column] = [
    ("region", "Region", "text"),
    ("country", "Country", "text"),
    ("impressions", "Impressions", "count"),
    ("clicks", "Clicks", "count"),
    ("conversions", "Conversions", "count"),
    ("spend", "Spend", "money"),
    ("revenue", "Revenue", "money"),
    ("ctr", "CTR", "pct"),
    ("roas", "ROAS", "roas"),
]
WEEKLY_COLUMNS: List[Column] = [
    ("label", "Week", "text"),
    ("impressions", "Impressions", "count"),
    ("clicks", "Clicks", "count"),
    ("conversions", "Conversions", "count"),
    ("spend", "Spend", "money"),
    ("revenue", "Revenue", "money"),
    ("revenue_growth", "Revenue WoW", "growth"),
    ("roas", "ROAS", "roas"),
]


def _format_cell(value: Any, kind: str) -> str:
    if kind == "text":
        return escape(str(value if value is not None else ""))
    number = to_float(value)
    if kind == "count":
        return fmt_count(number)
    if kind == "money":
        return fmt_money(number)
    if kind == "pct":
        return fmt_pct(number)
    if kind == "pct1":
        return fmt_pct(number, digits=1)
    if kind == "growth":
        return fmt_growth(number)
    if kind == "roas":
        return fmt_roas(number)
    return escape(str(value))


def _render_table(title: str, rows: Sequence[Mapping[str, Any]], columns: Sequence[Column], empty: str) -> str:
    if not rows:
        return f"<h3>{escape(title)}</h3><p class=\"muted\">{escape(empty)}</p>"
    head = "".join(f"<th>{escape(label)}</th>" for _, label, _ in columns)
    body_rows: List[str] = []
    for row in rows:
        cells: List[str] = []
        for key, _, kind in columns:
            style = ""
            if key == "roas" and row.get("color"):
                style = f" style=\"color: {escape(str(row['color']))}\""
            elif key == "roas" and row.get("roas_color"):
                style = f" style=\"color: {escape(str(row['roas_color']))}\""
            cells.append(f"<td{style}>{_format_cell(row.get(key), kind)}</td>")
        body_rows.append(f"<tr>{''.join(cells)}</tr>")
    return f"<h3>{escape(title)}</h3><table><thead><tr>{head}</tr></thead><tbody>{''.join(body_rows)}</tbody></table>"


def _render_cards(cards: Sequence[Tuple[str, str, str]]) -> str:
    items = "".join(
        f"<div class=\"card\"><div class=\"card-title\">{escape(title)}</div>"
        f"<div class=\"card-value\">{escape(value)}</div>"
        f"<div class=\"card-trend\">{escape(trend)}</div></div>"
        for title, value, trend in cards
    )
    return f"<div class=\"cards\">{items}</div>"


def _render_line_chart(chart: Mapping[str, Any]) -> str:
    title = escape(str(chart.get("title", "")))
    if not chart.get("points"):
        return f"<div class=\"chart\"><h4>{title}</h4><p class=\"muted\">{escape(str(chart.get('message', '')))}</p></div>"
    color = escape(str(chart.get("color", "#3B82F6")))
    grid = "".join(
        f"<line x1=\"8\" y1=\"{y:.2f}\" x2=\"96\" y2=\"{y:.2f}\" stroke=\"#374151\" stroke-width=\"0.5\" stroke-dasharray=\"1,2\" />"
        for y in chart.get("grid", [])
    )
    dots = "".join(
        f"<circle cx=\"{point['x']:.2f}\" cy=\"{point['y']:.2f}\" r=\"1.2\" fill=\"{color}\"><title>{escape(point['label'])}: {fmt_count(point['value'])}</title></circle>"
        for point in chart["points"]
    )
    return (
        f"<div class=\"chart\"><h4>{title}</h4>"
        f"<svg width=\"100%\" height=\"{int(chart.get('height', 300))}\" viewBox=\"0 0 100 100\" preserveAspectRatio=\"none\">"
        f"{grid}<path d=\"{escape(str(chart['path']))}\" fill=\"none\" stroke=\"{color}\" stroke-width=\"0.8\" />{dots}"
        "</svg></div>"
    )


def _render_bubble_map(bubble_map: Mapping[str, Any]) -> str:
    title = escape(str(bubble_map.get("title", "")))
    bubbles = bubble_map.get("bubbles") or []
    if not bubbles:
        return f"<h3>{title}</h3><p class=\"muted\">{escape(str(bubble_map.get('message', '')))}</p>"
    items = "".join(
        "<div class=\"bubble-cell\">"
        f"<div class=\"bubble\" title=\"{escape(bubble['title'])}\" style=\"width: {bubble['size']:.0f}px; "
        f"height: {bubble['size']:.0f}px; background-color: {bubble['fill']}; border: 3px solid {bubble['border']};\">"
        f"<span>{escape(bubble['region'])}</span></div>"
        f"<div class=\"muted\">{escape(bubble['country'])}</div></div>"
        for bubble in bubbles
    )
    legend = bubble_map.get("legend") or {}
    return (
        f"<h3>{title}</h3><p class=\"muted\">{escape(str(bubble_map.get('subtitle', '')))}</p>"
        f"<div class=\"bubbles\">{items}</div>"
        f"<p class=\"muted\">Small: {escape(str(legend.get('min_label', '')))} | Large: {escape(str(legend.get('max_label', '')))}</p>"
    )


def _demographic_section(view: Mapping[str, Any]) -> str:
    parts: List[str] = []
    for gender in ("male", "female"):
        block = view.get(gender) or {}
        totals = block.get("totals") or {}
        label = gender.capitalize()
        parts.append(
            _render_cards(
                [
                    (f"{label} Clicks", fmt_count(totals.get("clicks")), ""),
                    (f"{label} Spend", fmt_money(totals.get("spend")), ""),
                    (f"{label} Revenue", fmt_money(totals.get("revenue")), ""),
                ]
            )
        )
        parts.append(
            _render_table(f"{label} Age Groups", block.get("rows") or [], DEMOGRAPHIC_COLUMNS, "No demographic data available")
        )
    parts.append(_render_cards([("Female to Male Clicks", str(view.get("female_to_male_clicks", "N/A")), "")]))
    return "".join(parts)


def _device_section(view: Mapping[str, Any]) -> str:
    cards: List[Tuple[str, str, str]] = []
    for name in ("mobile", "desktop"):
        row = view.get(name) or {}
        cards.append((f"{name.capitalize()} Revenue", fmt_money(row.get("revenue")), ""))
        cards.append((f"{name.capitalize()} Conversions", fmt_count(row.get("conversions")), ""))
    return _render_cards(cards) + _render_table(
        "Device Performance Details", view.get("devices") or [], DEVICE_COLUMNS, "No device data available"
    )


def _region_section(view: Mapping[str, Any]) -> str:
    cards = [
        ("Total Regions", str(view.get("total_regions", 0)), ""),
        ("Total Revenue", fmt_money(view.get("total_revenue")), ""),
        ("Total Spend", fmt_money(view.get("total_spend")), ""),
        ("Top Region", str(view.get("top_region", "N/A")), ""),
    ]
    return (
        _render_cards(cards)
        + _render_bubble_map(view.get("bubble_map") or {})
        + _render_table(
            "Detailed Regional Performance",
            view.get("regions") or [],
            REGION_COLUMNS,
            "No regional performance data available",
        )
    )


def _weekly_section(view: Mapping[str, Any]) -> str:
    cards: List[Tuple[str, str, str]] = []
    for card in view.get("cards") or []:
        trend = card.get("trend")
        value = card.get("display")
        if value is None:
            value = fmt_count(card.get("value")) if "Conversions" in card["title"] else fmt_money(card.get("value"))
        cards.append((card["title"], value, fmt_growth(trend["value"]) if trend else ""))
    charts = view.get("charts") or {}
    line_charts = "".join(
        _render_line_chart(charts[key]) for key in ("revenue_trend", "spend_trend", "conversions_trend") if key in charts
    )
    return (
        _render_cards(cards)
        + f"<div class=\"grid\">{line_charts}</div>"
        + _render_table("Weekly Performance Details", view.get("weeks") or [], WEEKLY_COLUMNS, "No weekly data available")
    )


SECTIONS: Tuple[Tuple[str, str, Any], ...] = (
    ("demographic", "Demographic Insights", _demographic_section),
    ("device", "Device Performance", _device_section),
    ("region", "Regional Performance", _region_section),
    ("weekly", "Weekly Performance", _weekly_section),
)


def render_dashboard_html(views: Mapping[str, Any], error: str | None = None) -> str:
    generated_at = datetime.now().strftime("%Y-%m-%d %H:%M")
    blocks: List[str] = []
    if error:
        blocks.append(f"<section class=\"panel error\">Error loading data: {escape(error)}</section>")
    for key, title, render in SECTIONS:
        view = views.get(key)
        if not view:
            continue
        blocks.append(f"<section class=\"panel\"><h2>{escape(title)}</h2>{render(view)}</section>")

    return f"""<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Marketing Performance Views</title>
  <style>
    body {{ margin: 0; background: #111827; color: #f9fafb; font-family: "Segoe UI", sans-serif; }}
    .wrap {{ max-width: 1400px; margin: 0 auto; padding: 20px; }}
    .panel {{ background: #1f2937; border: 1px solid #374151; border-radius: 12px; padding: 14px 18px; margin-bottom: 14px; }}
    .error {{ background: #7f1d1d; border-color: #b91c1c; color: #fecaca; }}
    .cards {{ display: grid; grid-template-columns: repeat(4, minmax(160px, 1fr)); gap: 10px; margin-bottom: 12px; }}
    .card {{ background: #374151; border-radius: 8px; padding: 10px; }}
    .card-title {{ color: #9ca3af; font-size: 12px; }}
    .card-value {{ font-size: 20px; font-weight: 700; }}
    .card-trend {{ font-size: 12px; color: #9ca3af; }}
    .grid {{ display: grid; grid-template-columns: repeat(3, minmax(240px, 1fr)); gap: 10px; }}
    .bubbles {{ display: flex; flex-wrap: wrap; gap: 24px; justify-content: center; }}
    .bubble-cell {{ display: flex; flex-direction: column; align-items: center; }}
    .bubble {{ border-radius: 50%; display: flex; align-items: center; justify-content: center; font-size: 12px; }}
    table {{ width: 100%; border-collapse: collapse; font-size: 12px; }}
    th, td {{ border: 1px solid #374151; padding: 6px 8px; text-align: right; }}
    th:first-child, td:first-child {{ text-align: left; }}
    .muted {{ color: #9ca3af; }}
  </style>
</head>
<body>
  <div class="wrap">
    <section class="panel">
      <h1>Marketing Performance Views</h1>
      <div class="muted">Generated: {escape(generated_at)}</div>
    </section>
    {''.join(blocks)}
  </div>
</body>
</html>
"""
