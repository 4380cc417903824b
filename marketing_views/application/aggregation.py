"""Grouping aggregator: flattens campaign breakdowns and sums them per key."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Sequence

import polars as pl

from marketing_views.application.reporting.metrics import ADDITIVE_FIELDS, to_float, with_derived_metrics
from marketing_views.domain.models import CampaignRecord, MarketingDataset

logger = logging.getLogger(__name__)

GROUP_KEY = "group_key"
EntryRows = List[Dict[str, Any]]


def allocate_share(total: float, percentage: float) -> float:
    """Portion of a campaign-level amount attributed to an audience slice."""
    return total * (percentage / 100)


def _demographic_rows(campaign: CampaignRecord) -> EntryRows:
    rows: EntryRows = []
    for entry in campaign.demographic_breakdown:
        rows.append(
            {
                "age_group": entry.age_group,
                "gender": entry.gender,
                "impressions": entry.impressions,
                "clicks": entry.clicks,
                "conversions": entry.conversions,
                "spend": allocate_share(campaign.spend, entry.percentage_of_audience),
                "revenue": allocate_share(campaign.revenue, entry.percentage_of_audience),
            }
        )
    return rows


def _device_rows(campaign: CampaignRecord) -> EntryRows:
    return [
        {
            "device": entry.device,
            "impressions": entry.impressions,
            "clicks": entry.clicks,
            "conversions": entry.conversions,
            "spend": entry.spend,
            "revenue": entry.revenue,
            "percentage_of_traffic": entry.percentage_of_traffic,
        }
        for entry in campaign.device_performance
    ]


def _regional_rows(campaign: CampaignRecord) -> EntryRows:
    return [
        {
            "region": entry.region,
            "country": entry.country,
            "impressions": entry.impressions,
            "clicks": entry.clicks,
            "conversions": entry.conversions,
            "spend": entry.spend,
            "revenue": entry.revenue,
        }
        for entry in campaign.regional_performance
    ]


def _weekly_rows(campaign: CampaignRecord) -> EntryRows:
    return [
        {
            "week_start": entry.week_start,
            "week_end": entry.week_end,
            "impressions": entry.impressions,
            "clicks": entry.clicks,
            "conversions": entry.conversions,
            "spend": entry.spend,
            "revenue": entry.revenue,
        }
        for entry in campaign.weekly_performance
    ]


@dataclass(frozen=True)
class GroupingRule:
    """How one breakdown dimension is flattened, keyed and summed."""

    name: str
    key_columns: tuple[str, ...]
    flatten: Callable[[CampaignRecord], EntryRows]
    additive_columns: tuple[str, ...] = ADDITIVE_FIELDS
    first_columns: tuple[str, ...] = ()
    label_separator: str = ", "

    def schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {name: pl.Utf8 for name in self.key_columns}
        schema.update({name: pl.Float64 for name in self.additive_columns})
        schema.update({name: pl.Utf8 for name in self.first_columns})
        return schema

    def label(self, row: Dict[str, Any]) -> str:
        return self.label_separator.join(str(row.get(name, "")) for name in self.key_columns)


DEMOGRAPHIC_RULE = GroupingRule(name="demographic", key_columns=("age_group", "gender"), flatten=_demographic_rows)
DEVICE_RULE = GroupingRule(
    name="device",
    key_columns=("device",),
    flatten=_device_rows,
    additive_columns=(*ADDITIVE_FIELDS, "percentage_of_traffic"),
)
REGION_RULE = GroupingRule(name="region", key_columns=("region", "country"), flatten=_regional_rows)
WEEKLY_RULE = GroupingRule(
    name="weekly",
    key_columns=("week_start",),
    flatten=_weekly_rows,
    first_columns=("week_end",),
)
RULES: Dict[str, GroupingRule] = {
    rule.name: rule for rule in (DEMOGRAPHIC_RULE, DEVICE_RULE, REGION_RULE, WEEKLY_RULE)
}


def flatten_entries(dataset: MarketingDataset, rule: GroupingRule) -> pl.DataFrame:
    rows: EntryRows = []
    for campaign in dataset.campaigns:
        rows.extend(rule.flatten(campaign))
    schema = rule.schema()
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema)


def aggregate(dataset: MarketingDataset, rule: GroupingRule, with_derived: bool = True) -> pl.DataFrame:
    """Sum additive fields per key, then derive ratios once from the sums.

    Rows keep the first-appearance order of their key.
    """
    entries = flatten_entries(dataset, rule)
    grouped = entries.group_by(list(rule.key_columns), maintain_order=True).agg(
        [pl.col(name).sum() for name in rule.additive_columns]
        + [pl.col(name).first() for name in rule.first_columns]
    )
    grouped = grouped.with_columns(
        pl.concat_str([pl.col(name) for name in rule.key_columns], separator=rule.label_separator).alias(GROUP_KEY)
    ).select([GROUP_KEY, *rule.key_columns, *rule.additive_columns, *rule.first_columns])
    if with_derived:
        grouped = with_derived_metrics(grouped)
    logger.debug("Aggregated %d %s entries into %d groups", entries.height, rule.name, grouped.height)
    return grouped


def group_mapping(frame: pl.DataFrame) -> Dict[str, Dict[str, Any]]:
    return {str(row[GROUP_KEY]): row for row in frame.to_dicts()}


def additive_totals(frame: pl.DataFrame, columns: Sequence[str] = ADDITIVE_FIELDS) -> Dict[str, float]:
    if frame.is_empty():
        return {name: 0.0 for name in columns}
    row = frame.select([pl.col(name).sum() for name in columns]).row(0, named=True)
    return {name: to_float(row.get(name)) for name in columns}
