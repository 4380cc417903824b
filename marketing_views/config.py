"""Environment-driven settings for the dashboard pipeline."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_DATA_SOURCE = str(PROJECT_ROOT / "data" / "marketing_data.json")
DEFAULT_OUTPUT_DIR = str(PROJECT_ROOT / "output")
DEFAULT_WEEK_WINDOW = 8
DEFAULT_FETCH_TIMEOUT = 30.0
REGION_METRICS: tuple[str, ...] = ("revenue", "spend")
LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        value = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


def _positive_float(name: str, default: float) -> float:
    raw = os.getenv(name, str(default))
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _choice(name: str, default: str, choices: tuple[str, ...], upper: bool = False) -> str:
    raw = os.getenv(name, default).strip()
    value = raw.upper() if upper else raw.lower()
    if value not in choices:
        raise ValueError(f"{name} must be one of {list(choices)}, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    data_source: str
    output_dir: Path
    week_window: int
    region_metric: str
    city_coordinates_path: Path | None
    fetch_timeout: float
    log_level: str

    @classmethod
    def from_env(cls) -> "Settings":
        coordinates = os.getenv("MARKETING_CITY_COORDINATES", "").strip()
        return cls(
            data_source=os.getenv("MARKETING_DATA_SOURCE", DEFAULT_DATA_SOURCE),
            output_dir=Path(os.getenv("MARKETING_OUTPUT_DIR", DEFAULT_OUTPUT_DIR)),
            week_window=_positive_int("MARKETING_WEEK_WINDOW", DEFAULT_WEEK_WINDOW),
            region_metric=_choice("MARKETING_REGION_METRIC", "revenue", REGION_METRICS),
            city_coordinates_path=Path(coordinates) if coordinates else None,
            fetch_timeout=_positive_float("MARKETING_FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT),
            log_level=_choice("MARKETING_LOG_LEVEL", "INFO", LOG_LEVELS, upper=True),
        )
