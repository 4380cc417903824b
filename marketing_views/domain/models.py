"""Domain records for the loaded marketing dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, TypeVar

T = TypeVar("T")


def _to_float(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _category(value: Any) -> str:
    """Canonical spelling for a categorical key such as gender or device."""
    return _to_text(value).strip().title()


def _entries(raw: Any, factory: Callable[[Mapping[str, Any]], T]) -> tuple[T, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(factory(item) for item in raw if isinstance(item, Mapping))


@dataclass(frozen=True)
class DemographicEntry:
    age_group: str
    gender: str
    percentage_of_audience: float
    impressions: float
    clicks: float
    conversions: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DemographicEntry":
        perf = row.get("performance")
        counters: Mapping[str, Any] = perf if isinstance(perf, Mapping) else row
        return cls(
            age_group=_to_text(row.get("age_group")),
            gender=_category(row.get("gender")),
            percentage_of_audience=_to_float(row.get("percentage_of_audience")),
            impressions=_to_float(counters.get("impressions")),
            clicks=_to_float(counters.get("clicks")),
            conversions=_to_float(counters.get("conversions")),
        )


@dataclass(frozen=True)
class DeviceEntry:
    device: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float
    percentage_of_traffic: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DeviceEntry":
        return cls(
            device=_category(row.get("device")),
            impressions=_to_float(row.get("impressions")),
            clicks=_to_float(row.get("clicks")),
            conversions=_to_float(row.get("conversions")),
            spend=_to_float(row.get("spend")),
            revenue=_to_float(row.get("revenue")),
            percentage_of_traffic=_to_float(row.get("percentage_of_traffic")),
        )


@dataclass(frozen=True)
class RegionalEntry:
    region: str
    country: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "RegionalEntry":
        return cls(
            region=_to_text(row.get("region")),
            country=_to_text(row.get("country")),
            impressions=_to_float(row.get("impressions")),
            clicks=_to_float(row.get("clicks")),
            conversions=_to_float(row.get("conversions")),
            spend=_to_float(row.get("spend")),
            revenue=_to_float(row.get("revenue")),
        )


@dataclass(frozen=True)
class WeeklyEntry:
    week_start: str
    week_end: str
    impressions: float
    clicks: float
    conversions: float
    spend: float
    revenue: float

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "WeeklyEntry":
        return cls(
            week_start=_to_text(row.get("week_start")),
            week_end=_to_text(row.get("week_end")),
            impressions=_to_float(row.get("impressions")),
            clicks=_to_float(row.get("clicks")),
            conversions=_to_float(row.get("conversions")),
            spend=_to_float(row.get("spend")),
            revenue=_to_float(row.get("revenue")),
        )


@dataclass(frozen=True)
class CampaignRecord:
    """One campaign with its per-dimension breakdown arrays."""

    campaign_id: str
    name: str
    spend: float
    revenue: float
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    demographic_breakdown: tuple[DemographicEntry, ...] = ()
    device_performance: tuple[DeviceEntry, ...] = ()
    regional_performance: tuple[RegionalEntry, ...] = ()
    weekly_performance: tuple[WeeklyEntry, ...] = ()

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "CampaignRecord":
        return cls(
            campaign_id=_to_text(row.get("id")),
            name=_to_text(row.get("name")),
            spend=_to_float(row.get("spend")),
            revenue=_to_float(row.get("revenue")),
            impressions=_to_float(row.get("impressions")),
            clicks=_to_float(row.get("clicks")),
            conversions=_to_float(row.get("conversions")),
            demographic_breakdown=_entries(row.get("demographic_breakdown"), DemographicEntry.from_row),
            device_performance=_entries(row.get("device_performance"), DeviceEntry.from_row),
            regional_performance=_entries(row.get("regional_performance"), RegionalEntry.from_row),
            weekly_performance=_entries(row.get("weekly_performance"), WeeklyEntry.from_row),
        )


@dataclass(frozen=True)
class MarketingDataset:
    campaigns: tuple[CampaignRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: Any) -> "MarketingDataset":
        if not isinstance(payload, Mapping):
            return cls()
        return cls(campaigns=_entries(payload.get("campaigns"), CampaignRecord.from_row))

    def __len__(self) -> int:
        return len(self.campaigns)
