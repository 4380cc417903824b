"""Fixed colour classification policies for chart encodings."""

from __future__ import annotations

from dataclasses import dataclass

BAND_HIGH = "high"
BAND_MEDIUM = "medium"
BAND_LOW = "low"

BAND_COLORS: dict[str, str] = {
    BAND_HIGH: "#10B981",
    BAND_MEDIUM: "#3B82F6",
    BAND_LOW: "#F59E0B",
}
WEEKLY_BAND_COLORS: dict[str, str] = {
    BAND_HIGH: "#4ADE80",
    BAND_MEDIUM: "#FACC15",
    BAND_LOW: "#F87171",
}

AGE_GROUP_COLORS: tuple[tuple[str, str], ...] = (
    ("18-24", "#3B82F6"),
    ("25-34", "#10B981"),
    ("35-44", "#F59E0B"),
    ("45-54", "#EF4444"),
)
DEFAULT_AGE_GROUP_COLOR = "#8B5CF6"


@dataclass(frozen=True)
class RoasBands:
    """Two fixed ROAS thresholds splitting values into three bands."""

    high: float
    medium: float
    inclusive: bool = False

    def __post_init__(self) -> None:
        if self.medium > self.high:
            raise ValueError(f"medium threshold {self.medium} exceeds high threshold {self.high}")


REGION_ROAS_BANDS = RoasBands(high=80.0, medium=50.0)
WEEKLY_ROAS_BANDS = RoasBands(high=3.0, medium=1.0, inclusive=True)


def classify_roas(value: float | None, bands: RoasBands = REGION_ROAS_BANDS) -> str:
    if value is None:
        return BAND_LOW
    if bands.inclusive:
        if value >= bands.high:
            return BAND_HIGH
        if value >= bands.medium:
            return BAND_MEDIUM
        return BAND_LOW
    if value > bands.high:
        return BAND_HIGH
    if value > bands.medium:
        return BAND_MEDIUM
    return BAND_LOW


def band_color(band: str, palette: dict[str, str] | None = None) -> str:
    colors = palette or BAND_COLORS
    return colors.get(band, colors[BAND_LOW])


def age_group_color(age_group: str) -> str:
    for token, color in AGE_GROUP_COLORS:
        if token in age_group:
            return color
    return DEFAULT_AGE_GROUP_COLOR
