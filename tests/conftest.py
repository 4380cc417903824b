"""Shared fixtures: small in-code marketing payloads."""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from marketing_views.domain.models import MarketingDataset


def demographic(age_group, gender, pct, impressions=1000, clicks=100, conversions=10):
    return {
        "age_group": age_group,
        "gender": gender,
        "percentage_of_audience": pct,
        "performance": {"impressions": impressions, "clicks": clicks, "conversions": conversions},
    }


def device(name, impressions, clicks, conversions, spend, revenue, traffic):
    return {
        "device": name,
        "impressions": impressions,
        "clicks": clicks,
        "conversions": conversions,
        "spend": spend,
        "revenue": revenue,
        "percentage_of_traffic": traffic,
    }


def region(name, country, impressions, clicks, conversions, spend, revenue):
    return {
        "region": name,
        "country": country,
        "impressions": impressions,
        "clicks": clicks,
        "conversions": conversions,
        "spend": spend,
        "revenue": revenue,
    }


def week(start, end, impressions=1000, clicks=50, conversions=5, spend=100.0, revenue=400.0):
    return {
        "week_start": start,
        "week_end": end,
        "impressions": impressions,
        "clicks": clicks,
        "conversions": conversions,
        "spend": spend,
        "revenue": revenue,
    }


@pytest.fixture
def sample_payload():
    return {
        "campaigns": [
            {
                "id": "c1",
                "name": "Search",
                "spend": 1000,
                "revenue": 4000,
                "demographic_breakdown": [
                    demographic("18-24", "Male", 25, impressions=2000, clicks=200, conversions=20),
                    demographic("25-34", "Female", 75, impressions=6000, clicks=300, conversions=15),
                ],
                "device_performance": [
                    device("Mobile", 5000, 250, 20, 600, 2400, 60),
                    device("Desktop", 3000, 150, 15, 400, 1600, 40),
                ],
                "regional_performance": [
                    region("New York", "USA", 4000, 200, 20, 500, 2500),
                    region("London", "UK", 4000, 200, 15, 500, 1500),
                ],
                "weekly_performance": [
                    week("2024-01-01", "2024-01-07", spend=200, revenue=800),
                    week("2024-01-08", "2024-01-14", spend=300, revenue=900),
                ],
            },
            {
                "id": "c2",
                "name": "Social",
                "spend": 2000,
                "revenue": 3000,
                "demographic_breakdown": [
                    demographic("18-24", "Male", 50, impressions=1000, clicks=100, conversions=5),
                ],
                "device_performance": [
                    device("Mobile", 1000, 50, 5, 1500, 2000, 80),
                ],
                "regional_performance": [
                    region("New York", "USA", 1000, 100, 5, 1000, 1000),
                ],
                "weekly_performance": [
                    week("2024-01-08", "2024-01-14", spend=100, revenue=100),
                ],
            },
        ]
    }


@pytest.fixture
def sample_dataset(sample_payload):
    return MarketingDataset.from_payload(sample_payload)
