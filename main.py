"""Marketing views entrypoint."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List

from marketing_views.application.dashboard_service import DashboardSession
from marketing_views.config import REGION_METRICS, Settings
from marketing_views.infrastructure.coordinates import load_city_coordinates
from marketing_views.infrastructure.data_source import fetch_marketing_data
from marketing_views.infrastructure.report_exporter import save_summary_html, save_summary_json, save_views_workbook

logger = logging.getLogger(__name__)


def _parse_args(argv: List[str] | None, settings: Settings) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Build demographic, device, region and weekly marketing views.")
    parser.add_argument("--source", default=settings.data_source, help="JSON file path or http(s) URL")
    parser.add_argument("--output-dir", type=Path, default=settings.output_dir)
    parser.add_argument("--metric", choices=REGION_METRICS, default=settings.region_metric, help="heat map metric")
    parser.add_argument("--window", type=int, default=settings.week_window, help="number of recent weeks to keep")
    args = parser.parse_args(argv)
    if args.window <= 0:
        parser.error("--window must be a positive integer")
    return args


def main(argv: List[str] | None = None) -> int:
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(levelname)s - %(name)s - %(message)s")
    args = _parse_args(argv, settings)

    output_dir: Path = args.output_dir
    output_json_path = output_dir / "summary.json"
    output_html_path = output_dir / "summary.html"
    output_excel_path = output_dir / "summary.xlsx"

    session = DashboardSession(
        fetcher=lambda: fetch_marketing_data(args.source, timeout=settings.fetch_timeout),
        coordinates=load_city_coordinates(settings.city_coordinates_path),
        week_window=args.window,
    )
    state = session.load()

    views: Dict[str, Any] = {}
    if state.ok:
        views = session.all_views(region_metric=args.metric)

    summary = {
        "source": str(args.source),
        "error": state.error,
        "campaign_count": len(state.dataset) if state.dataset is not None else 0,
        "region_metric": args.metric,
        "week_window": args.window,
        "views": views,
    }
    save_summary_json(output_json_path, summary)
    save_summary_html(output_html_path, views, error=state.error)
    print(f"Saved JSON: {output_json_path}")
    print(f"Saved HTML: {output_html_path}")

    if views:
        excel_saved, excel_error_message = save_views_workbook(output_excel_path, views)
        if excel_saved:
            print(f"Saved Excel: {output_excel_path}")
        else:
            print(f"Excel save skipped (file may be open/locked): {excel_error_message}")

    if state.error:
        print(f"Error loading data: {state.error}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
