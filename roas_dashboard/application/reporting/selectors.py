"""Ordering and selection helpers for dashboard lists."""

from __future__ import annotations

from typing import Iterable, List

from roas_dashboard.domain.models import AttributionLink, CampaignAggregate, LinkPerformance
from roas_dashboard.domain.signals import Status


def sort_by_spend(aggregates: Iterable[CampaignAggregate]) -> List[CampaignAggregate]:
    """Highest spend first; ties keep a stable order by channel and campaign id."""
    return sorted(aggregates, key=lambda item: (-item.spend, item.channel_id, item.campaign_id))


def active_links(links: Iterable[AttributionLink]) -> List[AttributionLink]:
    return [link for link in links if link.is_active]


def top_links(performances: Iterable[LinkPerformance], limit: int) -> List[LinkPerformance]:
    return list(performances)[: max(limit, 0)]


def critical_links(performances: Iterable[LinkPerformance], limit: int) -> List[LinkPerformance]:
    """Red-light links, worst ROAS first."""
    flagged = [item for item in performances if item.status is Status.CRITICAL]
    flagged.sort(key=lambda item: (item.roas, item.link.id))
    return flagged[: max(limit, 0)]
