"""Adapter loading the precomputed marketing dataset."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import requests

from marketing_views.domain.models import MarketingDataset

logger = logging.getLogger(__name__)


class DataLoadError(RuntimeError):
    """Raised when the marketing dataset cannot be fetched or parsed."""


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _read_url(source: str, timeout: float) -> Any:
    try:
        response = requests.get(source, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as exc:
        raise DataLoadError(f"Failed to fetch marketing data from {source}: {exc}") from exc
    try:
        return response.json()
    except ValueError as exc:
        raise DataLoadError(f"Response from {source} is not valid JSON") from exc


def _read_file(path: Path) -> Any:
    if not path.exists():
        raise DataLoadError(f"Marketing data file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc


def fetch_marketing_data(source: str | Path, timeout: float = 30.0) -> MarketingDataset:
    source_text = str(source)
    if _is_url(source_text):
        payload = _read_url(source_text, timeout=timeout)
    else:
        payload = _read_file(Path(source_text))

    dataset = MarketingDataset.from_payload(payload)
    logger.info("Loaded %d campaigns from %s", len(dataset), source_text)
    return dataset
