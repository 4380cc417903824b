"""Application layer package."""

from .aggregation import RULES, GroupingRule, aggregate, allocate_share
from .dashboard_service import DashboardSession, ViewState
from .views import build_demographic_view, build_device_view, build_region_view, build_weekly_view

__all__ = [
    "GroupingRule",
    "RULES",
    "aggregate",
    "allocate_share",
    "DashboardSession",
    "ViewState",
    "build_demographic_view",
    "build_device_view",
    "build_region_view",
    "build_weekly_view",
]
