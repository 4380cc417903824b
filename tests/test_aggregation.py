"""Tests for the grouping aggregator across all breakdown dimensions."""

import pytest
from conftest import device

from marketing_views.application.aggregation import (
    DEMOGRAPHIC_RULE,
    DEVICE_RULE,
    GROUP_KEY,
    REGION_RULE,
    RULES,
    WEEKLY_RULE,
    additive_totals,
    aggregate,
    allocate_share,
    flatten_entries,
    group_mapping,
)
from marketing_views.domain.models import MarketingDataset


# ── Empty input ──────────────────────────────────────────────────────


@pytest.mark.parametrize("rule", [DEMOGRAPHIC_RULE, DEVICE_RULE, REGION_RULE, WEEKLY_RULE])
def test_absent_breakdowns_yield_empty_groups(rule):
    dataset = MarketingDataset.from_payload({"campaigns": [{"id": "a", "spend": 100, "revenue": 200}]})
    result = aggregate(dataset, rule)
    assert result.is_empty()
    assert GROUP_KEY in result.columns
    assert "roas" in result.columns


def test_empty_dataset_yields_empty_groups():
    assert aggregate(MarketingDataset(), REGION_RULE).height == 0


# ── Demographic allocation ───────────────────────────────────────────


def test_allocate_share():
    assert allocate_share(1000, 25) == 250


def test_demographic_spend_is_allocated_by_audience_share():
    payload = {
        "campaigns": [
            {
                "spend": 1000,
                "revenue": 2000,
                "demographic_breakdown": [
                    {"age_group": "25-34", "gender": "Female", "percentage_of_audience": 25, "performance": {}}
                ],
            }
        ]
    }
    entries = flatten_entries(MarketingDataset.from_payload(payload), DEMOGRAPHIC_RULE)
    row = entries.row(0, named=True)
    assert row["spend"] == pytest.approx(250.0)
    assert row["revenue"] == pytest.approx(500.0)


def test_demographic_groups_merge_across_campaigns(sample_dataset):
    groups = group_mapping(aggregate(sample_dataset, DEMOGRAPHIC_RULE))
    male = groups["18-24, Male"]
    # 25% of 1000 from c1 plus 50% of 2000 from c2
    assert male["spend"] == pytest.approx(1250.0)
    assert male["revenue"] == pytest.approx(1000.0 + 1500.0)
    assert male["clicks"] == 300
    assert male["ctr"] == pytest.approx(300 / 3000 * 100)


# ── Direct sums ──────────────────────────────────────────────────────


def test_device_groups_sum_traffic_share(sample_dataset):
    groups = group_mapping(aggregate(sample_dataset, DEVICE_RULE))
    assert set(groups) == {"Mobile", "Desktop"}
    assert groups["Mobile"]["percentage_of_traffic"] == pytest.approx(140.0)
    assert groups["Mobile"]["spend"] == pytest.approx(2100.0)


def test_region_ratios_recomputed_from_merged_sums(sample_dataset):
    groups = group_mapping(aggregate(sample_dataset, REGION_RULE))
    new_york = groups["New York, USA"]
    assert new_york["spend"] == pytest.approx(1500.0)
    assert new_york["revenue"] == pytest.approx(3500.0)
    # per-campaign ROAS are 5.0 and 1.0; averaging would give 3.0
    assert new_york["roas"] == pytest.approx(3500 / 1500)
    assert new_york["cpc"] == pytest.approx(1500 / 300)
    assert new_york["cpa"] == pytest.approx(1500 / 25)


def test_weekly_groups_keep_first_week_end(sample_dataset):
    groups = group_mapping(aggregate(sample_dataset, WEEKLY_RULE))
    assert groups["2024-01-08"]["week_end"] == "2024-01-14"
    assert groups["2024-01-08"]["spend"] == pytest.approx(400.0)


def test_groups_keep_first_appearance_order(sample_dataset):
    result = aggregate(sample_dataset, REGION_RULE)
    assert result.get_column(GROUP_KEY).to_list() == ["New York, USA", "London, UK"]


def test_group_keys_are_unique(sample_dataset):
    result = aggregate(sample_dataset, DEMOGRAPHIC_RULE)
    keys = result.get_column(GROUP_KEY).to_list()
    assert len(keys) == len(set(keys))


# ── Conservation ─────────────────────────────────────────────────────


@pytest.mark.parametrize("rule", [DEMOGRAPHIC_RULE, DEVICE_RULE, REGION_RULE, WEEKLY_RULE])
def test_group_sums_equal_entry_sums(sample_dataset, rule):
    entries = flatten_entries(sample_dataset, rule)
    groups = aggregate(sample_dataset, rule)
    entry_totals = additive_totals(entries)
    group_totals = additive_totals(groups)
    for name, value in entry_totals.items():
        assert group_totals[name] == pytest.approx(value)


def test_additive_totals_of_empty_frame_are_zero():
    totals = additive_totals(aggregate(MarketingDataset(), DEVICE_RULE))
    assert totals == {"impressions": 0.0, "clicks": 0.0, "conversions": 0.0, "spend": 0.0, "revenue": 0.0}


# ── Rule lookup ──────────────────────────────────────────────────────


def test_rules_are_keyed_by_name():
    assert RULES["device"] is DEVICE_RULE
    assert set(RULES) == {"demographic", "device", "region", "weekly"}


def test_mixed_case_device_names_share_one_group():
    payload = {
        "campaigns": [
            {"device_performance": [device("Mobile", 100, 10, 1, 50, 200, 60), device(" mobile", 100, 10, 1, 50, 100, 40)]}
        ]
    }
    groups = group_mapping(aggregate(MarketingDataset.from_payload(payload), DEVICE_RULE))
    assert list(groups) == ["Mobile"]
    assert groups["Mobile"]["revenue"] == pytest.approx(300.0)


def test_aggregate_without_derived_columns(sample_dataset):
    result = aggregate(sample_dataset, DEVICE_RULE, with_derived=False)
    assert "ctr" not in result.columns
