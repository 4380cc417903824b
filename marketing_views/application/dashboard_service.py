"""Page-boundary service: one fetch per load, views memoised per dataset."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping

from marketing_views.application.trends import WEEK_WINDOW
from marketing_views.application.views import (
    build_demographic_view,
    build_device_view,
    build_region_view,
    build_weekly_view,
)
from marketing_views.domain.models import MarketingDataset

logger = logging.getLogger(__name__)

DEFAULT_LOAD_ERROR = "Failed to load data"
Fetcher = Callable[[], MarketingDataset]


@dataclass(frozen=True)
class ViewState:
    dataset: MarketingDataset | None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.dataset is not None and self.error is None


@dataclass
class DashboardSession:
    """Owns one fetched copy of the dataset and the views derived from it."""

    fetcher: Fetcher
    coordinates: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)
    week_window: int = WEEK_WINDOW
    state: ViewState = field(default_factory=lambda: ViewState(dataset=None))
    _memo_source: MarketingDataset | None = field(default=None, init=False, repr=False)
    _memo: Dict[tuple[str, ...], Dict[str, Any]] = field(default_factory=dict, init=False, repr=False)

    def load(self) -> ViewState:
        try:
            dataset = self.fetcher()
        except Exception as exc:
            logger.error("Error loading marketing data: %s", exc)
            self.state = ViewState(dataset=None, error=str(exc) or DEFAULT_LOAD_ERROR)
            return self.state
        self.state = ViewState(dataset=dataset)
        return self.state

    def _cached(self, key: tuple[str, ...], build: Callable[[MarketingDataset], Dict[str, Any]]) -> Dict[str, Any] | None:
        dataset = self.state.dataset
        if dataset is None:
            return None
        if self._memo_source is not dataset:
            self._memo = {}
            self._memo_source = dataset
        if key not in self._memo:
            logger.debug("Building %s view", key[0])
            self._memo[key] = build(dataset)
        return self._memo[key]

    def demographic_view(self) -> Dict[str, Any] | None:
        return self._cached(("demographic",), build_demographic_view)

    def device_view(self) -> Dict[str, Any] | None:
        return self._cached(("device",), build_device_view)

    def region_view(self, metric: str = "revenue") -> Dict[str, Any] | None:
        return self._cached(
            ("region", metric),
            lambda dataset: build_region_view(dataset, metric=metric, coordinates=self.coordinates),
        )

    def weekly_view(self) -> Dict[str, Any] | None:
        return self._cached(("weekly",), lambda dataset: build_weekly_view(dataset, window=self.week_window))

    def all_views(self, region_metric: str = "revenue") -> Dict[str, Any]:
        return {
            "demographic": self.demographic_view(),
            "device": self.device_view(),
            "region": self.region_view(region_metric),
            "weekly": self.weekly_view(),
        }
