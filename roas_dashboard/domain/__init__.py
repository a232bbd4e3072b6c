"""Domain layer package."""

from .channels import ChannelType, channel_label
from .models import (
    AdChannel,
    AttributionLink,
    CampaignAggregate,
    CreativeInfo,
    DailySpendRecord,
    LinkPerformance,
    PortfolioTotal,
)
from .signals import SignalThreshold, Status, classify, classify_with, count_signals, validate_thresholds

__all__ = [
    "AdChannel",
    "AttributionLink",
    "CampaignAggregate",
    "ChannelType",
    "CreativeInfo",
    "DailySpendRecord",
    "LinkPerformance",
    "PortfolioTotal",
    "SignalThreshold",
    "Status",
    "channel_label",
    "classify",
    "classify_with",
    "count_signals",
    "validate_thresholds",
]
