"""Domain models for campaign performance aggregation."""

from __future__ import annotations

import datetime
from dataclasses import asdict, dataclass, field, replace
from typing import Any

from roas_dashboard.domain.channels import ChannelType
from roas_dashboard.domain.signals import SignalThreshold, Status


@dataclass(frozen=True)
class AdChannel:
    id: str
    channel_type: ChannelType
    channel_name: str = ""


@dataclass(frozen=True)
class DailySpendRecord:
    """One channel/campaign/day row with every metric already null-coalesced."""

    channel_id: str
    campaign_id: str
    campaign_name: str = ""
    channel_type: ChannelType = ChannelType.UNKNOWN
    date: datetime.date | None = None
    spend: float = 0.0
    impressions: float = 0.0
    clicks: float = 0.0
    conversions: float = 0.0
    conversion_value: float = 0.0

    @property
    def key(self) -> tuple[str, str]:
        return (self.channel_id, self.campaign_id)


@dataclass(frozen=True)
class CampaignAggregate:
    channel_id: str
    campaign_id: str
    campaign_name: str
    channel_type: ChannelType
    spend: float
    impressions: float
    clicks: float
    conversions: float
    conversion_value: float
    ctr: float
    cpc: int
    roas: int
    status: Status
    thumbnail_url: str | None = None
    creative_type: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.channel_id, self.campaign_id)

    @property
    def revenue(self) -> float:
        return self.conversion_value

    def with_creative(self, thumbnail_url: str | None, creative_type: str | None) -> "CampaignAggregate":
        return replace(self, thumbnail_url=thumbnail_url, creative_type=creative_type)

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["channel_type"] = self.channel_type.value
        payload["channel_label"] = self.channel_type.label
        payload["status"] = self.status.value
        return payload


@dataclass(frozen=True)
class AttributionLink:
    """Manually tracked link; counts as a single-row campaign when summed."""

    id: str
    name: str = ""
    clicks: float = 0.0
    conversions: float = 0.0
    revenue: float = 0.0
    ad_spend: float = 0.0
    green_threshold: float | None = None
    yellow_threshold: float | None = None
    status: str = "active"

    @property
    def is_active(self) -> bool:
        return self.status == "active"

    def threshold(self, default: SignalThreshold) -> SignalThreshold:
        green = default.green if self.green_threshold is None else self.green_threshold
        yellow = default.yellow if self.yellow_threshold is None else self.yellow_threshold
        return SignalThreshold(green=green, yellow=yellow)


@dataclass(frozen=True)
class LinkPerformance:
    link: AttributionLink
    roas: int
    conversion_rate: float
    threshold: SignalThreshold
    status: Status

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self.link)
        payload.update(
            {
                "roas": self.roas,
                "conversion_rate": self.conversion_rate,
                "green_threshold": self.threshold.green,
                "yellow_threshold": self.threshold.yellow,
                "signal": self.status.value,
            }
        )
        return payload


@dataclass(frozen=True)
class PortfolioTotal:
    total_spend: float
    total_clicks: float
    total_conversions: float
    total_revenue: float
    overall_roas: int
    overall_status: Status
    profit: float
    conversion_rate: float

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["overall_status"] = self.overall_status.value
        return payload


@dataclass(frozen=True)
class CreativeInfo:
    creative_type: str | None = None
    thumbnail_url: str | None = None
    image_urls: tuple[str, ...] = field(default_factory=tuple)
