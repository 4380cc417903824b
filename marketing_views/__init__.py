"""Marketing views package."""

from .application import DashboardSession, ViewState, aggregate
from .config import Settings
from .domain import MarketingDataset
from .infrastructure import DataLoadError, fetch_marketing_data

__all__ = [
    "DashboardSession",
    "ViewState",
    "aggregate",
    "Settings",
    "MarketingDataset",
    "DataLoadError",
    "fetch_marketing_data",
]
