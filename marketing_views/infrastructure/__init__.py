"""Infrastructure layer package."""

from .coordinates import DEFAULT_CITY_COORDINATES, load_city_coordinates
from .data_source import DataLoadError, fetch_marketing_data
from .report_exporter import save_summary_html, save_summary_json, save_views_workbook

__all__ = [
    "DEFAULT_CITY_COORDINATES",
    "load_city_coordinates",
    "DataLoadError",
    "fetch_marketing_data",
    "save_summary_json",
    "save_summary_html",
    "save_views_workbook",
]
