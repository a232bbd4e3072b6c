"""Application service for portfolio totals and attribution-link signals."""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from roas_dashboard.application.normalizer import normalize_link
from roas_dashboard.application.reporting.metrics import conversion_rate, roas
from roas_dashboard.config import DEFAULT_THRESHOLDS
from roas_dashboard.domain.models import AttributionLink, CampaignAggregate, LinkPerformance, PortfolioTotal
from roas_dashboard.domain.signals import SignalThreshold, Status, classify_with, count_signals
from roas_dashboard.log_config import get_logger

logger = get_logger(__name__)

# spend, clicks, conversions, revenue
BaseFields = tuple[float, float, float, float]


def _campaign_fields(aggregate: CampaignAggregate) -> BaseFields:
    return (aggregate.spend, aggregate.clicks, aggregate.conversions, aggregate.conversion_value)


def _link_fields(link: AttributionLink) -> BaseFields:
    return (link.ad_spend, link.clicks, link.conversions, link.revenue)


def summarize_portfolio(
    campaign_aggregates: Iterable[CampaignAggregate],
    attribution_links: Iterable[Mapping[str, Any] | AttributionLink],
) -> PortfolioTotal:
    """Sum campaigns and attribution links into one portfolio signal.

    The overall status always uses the global thresholds; per-link overrides
    only apply to the links' own signals (see ``evaluate_links``).
    """
    campaigns = list(campaign_aggregates)
    links = [normalize_link(link) for link in attribution_links]
    contributions = [_campaign_fields(item) for item in campaigns]
    contributions.extend(_link_fields(link) for link in links)

    total_spend = sum(fields[0] for fields in contributions)
    total_clicks = sum(fields[1] for fields in contributions)
    total_conversions = sum(fields[2] for fields in contributions)
    total_revenue = sum(fields[3] for fields in contributions)

    overall_roas = roas(total_revenue, total_spend)
    portfolio = PortfolioTotal(
        total_spend=float(total_spend),
        total_clicks=float(total_clicks),
        total_conversions=float(total_conversions),
        total_revenue=float(total_revenue),
        overall_roas=overall_roas,
        overall_status=classify_with(overall_roas, DEFAULT_THRESHOLDS),
        profit=float(total_revenue - total_spend),
        conversion_rate=conversion_rate(total_conversions, total_clicks),
    )
    logger.debug(
        "Summarized portfolio",
        campaign_count=len(campaigns),
        link_count=len(links),
        overall_roas=overall_roas,
        overall_status=portfolio.overall_status.value,
    )
    return portfolio


def evaluate_link(link: Mapping[str, Any] | AttributionLink, defaults: SignalThreshold | None = None) -> LinkPerformance:
    normalized = normalize_link(link)
    threshold = normalized.threshold(defaults or DEFAULT_THRESHOLDS)
    link_roas = roas(normalized.revenue, normalized.ad_spend)
    return LinkPerformance(
        link=normalized,
        roas=link_roas,
        conversion_rate=conversion_rate(normalized.conversions, normalized.clicks),
        threshold=threshold,
        status=classify_with(link_roas, threshold),
    )


def evaluate_links(
    links: Iterable[Mapping[str, Any] | AttributionLink],
    defaults: SignalThreshold | None = None,
) -> list[LinkPerformance]:
    """Classify each link against its own thresholds, falling back to ``defaults``."""
    return [evaluate_link(link, defaults=defaults) for link in links]


def signal_counts(items: Iterable[CampaignAggregate | LinkPerformance]) -> dict[Status, int]:
    return count_signals(item.status for item in items)
