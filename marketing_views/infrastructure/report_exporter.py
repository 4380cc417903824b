"""Infrastructure adapter for summary export targets."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping

import polars as pl

from marketing_views.application.reporting.rendering import render_dashboard_html

logger = logging.getLogger(__name__)


def _import_openpyxl() -> Any:
    try:
        from openpyxl import Workbook
    except Exception as exc:  # pragma: no cover
        raise RuntimeError("openpyxl is required for Excel fallback I/O.") from exc
    return Workbook


def _excel_cell_value(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (int, bool, str)):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return None
        return value
    if isinstance(value, (list, dict)):
        return json.dumps(value, ensure_ascii=False)
    return value


def _scalar_rows(rows: Any, extra: Mapping[str, Any] | None = None) -> List[Dict[str, Any]]:
    if not isinstance(rows, list):
        return []
    output: List[Dict[str, Any]] = []
    for row in rows:
        if not isinstance(row, dict):
            continue
        flat = {key: value for key, value in row.items() if isinstance(value, (int, float, str)) or value is None}
        output.append({**(extra or {}), **flat})
    return output


def views_to_sheets(views: Mapping[str, Any]) -> Dict[str, pl.DataFrame]:
    demographic = views.get("demographic") or {}
    demographic_rows = _scalar_rows((demographic.get("male") or {}).get("rows"), {"gender": "Male"})
    demographic_rows += _scalar_rows((demographic.get("female") or {}).get("rows"), {"gender": "Female"})
    sheets = {
        "demographic": demographic_rows,
        "device": _scalar_rows((views.get("device") or {}).get("devices")),
        "region": _scalar_rows((views.get("region") or {}).get("regions")),
        "weekly": _scalar_rows((views.get("weekly") or {}).get("weeks")),
    }
    return {name: pl.DataFrame(rows) for name, rows in sheets.items() if rows}


def _write_with_polars(path: Path, sheets: Dict[str, pl.DataFrame]) -> bool:
    if not sheets:
        return False
    try:
        import xlsxwriter

        with xlsxwriter.Workbook(str(path)) as workbook:
            for sheet_name, frame in sheets.items():
                frame.write_excel(workbook=workbook, worksheet=sheet_name)
        return True
    except Exception as exc:
        logger.debug("polars Excel writer unavailable, using openpyxl: %s", exc)
        return False


def _write_with_openpyxl(path: Path, sheets: Dict[str, pl.DataFrame]) -> None:
    Workbook = _import_openpyxl()
    workbook = Workbook()
    default_sheet = workbook.active
    workbook.remove(default_sheet)

    for sheet_name, frame in sheets.items():
        worksheet = workbook.create_sheet(title=str(sheet_name)[:31])
        worksheet.append(frame.columns)
        for row in frame.iter_rows(named=False):
            worksheet.append([_excel_cell_value(value) for value in row])

    workbook.save(path)


def save_summary_json(path: Path, summary: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(summary, indent=2, ensure_ascii=False), encoding="utf-8")


def save_summary_html(path: Path, views: Mapping[str, Any], error: str | None = None) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_dashboard_html(views, error=error), encoding="utf-8")


def save_views_workbook(path: Path, views: Mapping[str, Any]) -> tuple[bool, str]:
    """Write one sheet per view; a locked or unwritable file is reported, not raised."""
    sheets = views_to_sheets(views)
    if not sheets:
        return False, "no rows to export"
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        if not _write_with_polars(path, sheets):
            _write_with_openpyxl(path, sheets)
    except PermissionError as exc:
        return False, str(exc)
    return True, ""
