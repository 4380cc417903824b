"""Tests for loading campaign records from the JSON payload shape."""

from marketing_views.domain.models import CampaignRecord, DemographicEntry, MarketingDataset


def test_payload_without_campaigns_is_empty():
    assert len(MarketingDataset.from_payload({})) == 0
    assert len(MarketingDataset.from_payload({"campaigns": None})) == 0
    assert len(MarketingDataset.from_payload(None)) == 0


def test_missing_breakdowns_become_empty_tuples():
    campaign = CampaignRecord.from_row({"id": "x", "spend": 10, "revenue": 20, "regional_performance": None})
    assert campaign.demographic_breakdown == ()
    assert campaign.device_performance == ()
    assert campaign.regional_performance == ()
    assert campaign.weekly_performance == ()


def test_non_mapping_entries_are_skipped():
    campaign = CampaignRecord.from_row({"device_performance": ["bad", None, {"device": "Mobile", "clicks": 3}]})
    assert len(campaign.device_performance) == 1
    assert campaign.device_performance[0].clicks == 3.0


def test_demographic_counters_read_from_nested_performance():
    entry = DemographicEntry.from_row(
        {"age_group": "18-24", "gender": "Male", "percentage_of_audience": 30, "performance": {"clicks": 12}}
    )
    assert entry.clicks == 12.0
    assert entry.impressions == 0.0
    assert entry.percentage_of_audience == 30.0


def test_demographic_counters_fall_back_to_flat_fields():
    entry = DemographicEntry.from_row({"age_group": "18-24", "gender": "Female", "clicks": 7})
    assert entry.clicks == 7.0


def test_category_keys_are_canonicalised():
    entry = DemographicEntry.from_row({"age_group": "18-24", "gender": " male "})
    assert entry.gender == "Male"
    campaign = CampaignRecord.from_row({"device_performance": [{"device": "DESKTOP"}]})
    assert campaign.device_performance[0].device == "Desktop"


def test_unparsable_numbers_become_zero():
    campaign = CampaignRecord.from_row({"spend": "n/a", "revenue": None})
    assert campaign.spend == 0.0
    assert campaign.revenue == 0.0


def test_sample_payload_loads_all_campaigns(sample_dataset):
    assert len(sample_dataset) == 2
    assert sample_dataset.campaigns[0].name == "Search"
    assert len(sample_dataset.campaigns[0].weekly_performance) == 2
