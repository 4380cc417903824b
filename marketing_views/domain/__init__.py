"""Domain layer package."""

from .bands import REGION_ROAS_BANDS, WEEKLY_ROAS_BANDS, RoasBands, age_group_color, band_color, classify_roas
from .models import CampaignRecord, DemographicEntry, DeviceEntry, MarketingDataset, RegionalEntry, WeeklyEntry

__all__ = [
    "CampaignRecord",
    "DemographicEntry",
    "DeviceEntry",
    "RegionalEntry",
    "WeeklyEntry",
    "MarketingDataset",
    "RoasBands",
    "REGION_ROAS_BANDS",
    "WEEKLY_ROAS_BANDS",
    "classify_roas",
    "band_color",
    "age_group_color",
]
