"""Dashboard pipeline: aggregate, classify, summarize and shape output tables."""

from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter
from typing import Any, Dict, Iterable, List, Mapping, Sequence

import polars as pl

from roas_dashboard.application.aggregation_service import aggregate_campaigns
from roas_dashboard.application.creative_service import CreativeFetcher, enrich_creatives
from roas_dashboard.application.normalizer import normalize_link
from roas_dashboard.application.portfolio_service import evaluate_links, signal_counts, summarize_portfolio
from roas_dashboard.application.reporting.metrics import fmt_pct, fmt_roas, fmt_won
from roas_dashboard.application.reporting.selectors import active_links, critical_links, sort_by_spend, top_links
from roas_dashboard.config import CRITICAL_LINK_LIMIT, DEFAULT_THRESHOLDS, TOP_LINK_LIMIT
from roas_dashboard.domain.models import (
    AdChannel,
    AttributionLink,
    CampaignAggregate,
    DailySpendRecord,
    LinkPerformance,
    PortfolioTotal,
)
from roas_dashboard.domain.signals import SignalThreshold, Status
from roas_dashboard.log_config import get_logger

logger = get_logger(__name__)

CAMPAIGN_COLUMNS: List[str] = [
    "channel_id",
    "channel_type",
    "channel_label",
    "campaign_id",
    "campaign_name",
    "spend",
    "impressions",
    "clicks",
    "conversions",
    "conversion_value",
    "ctr",
    "cpc",
    "roas",
    "status",
    "thumbnail_url",
    "creative_type",
]
CAMPAIGN_VIEW_COLUMNS: List[str] = ["channel", "campaign", "spend", "ctr", "cpc", "revenue", "roas", "signal"]
LINK_COLUMNS: List[str] = [
    "id",
    "name",
    "status",
    "clicks",
    "conversions",
    "revenue",
    "ad_spend",
    "conversion_rate",
    "roas",
    "green_threshold",
    "yellow_threshold",
    "signal",
]


@dataclass(frozen=True)
class DashboardReport:
    campaigns: List[CampaignAggregate]
    links: List[LinkPerformance]
    portfolio: PortfolioTotal
    campaign_signals: Dict[Status, int]
    link_signals: Dict[Status, int]
    critical_links: List[LinkPerformance]


def run_dashboard_pipeline(
    records: Iterable[Mapping[str, Any] | DailySpendRecord],
    channels: Sequence[Mapping[str, Any] | AdChannel],
    links: Iterable[Mapping[str, Any] | AttributionLink],
    thresholds: SignalThreshold | None = None,
    creative_fetcher: CreativeFetcher | None = None,
) -> DashboardReport:
    """Build every dashboard figure from date-filtered spend rows and tracking links.

    Inactive links are left out of both the link list and the portfolio total.
    """
    started = perf_counter()
    policy = thresholds or DEFAULT_THRESHOLDS

    campaigns = sort_by_spend(aggregate_campaigns(records, channels, thresholds=policy))
    if creative_fetcher is not None:
        campaigns = enrich_creatives(campaigns, creative_fetcher)

    scoped_links = active_links(normalize_link(link) for link in links)
    link_performances = evaluate_links(scoped_links, defaults=policy)
    portfolio = summarize_portfolio(campaigns, scoped_links)

    report = DashboardReport(
        campaigns=campaigns,
        links=link_performances,
        portfolio=portfolio,
        campaign_signals=signal_counts(campaigns),
        link_signals=signal_counts(link_performances),
        critical_links=critical_links(link_performances, CRITICAL_LINK_LIMIT),
    )
    logger.info(
        "Dashboard pipeline finished",
        campaign_count=len(campaigns),
        link_count=len(link_performances),
        overall_roas=portfolio.overall_roas,
        overall_status=portfolio.overall_status.value,
        elapsed_ms=round((perf_counter() - started) * 1000, 2),
    )
    return report


def _signal_dict(counts: Mapping[Status, int]) -> Dict[str, int]:
    return {status.light: counts.get(status, 0) for status in Status}


def build_summary(report: DashboardReport) -> Dict[str, Any]:
    portfolio = report.portfolio
    return {
        "totals": portfolio.to_dict(),
        "totals_display": {
            "spend": fmt_won(portfolio.total_spend),
            "revenue": fmt_won(portfolio.total_revenue),
            "profit": fmt_won(portfolio.profit),
            "roas": fmt_roas(portfolio.overall_roas),
            "conversion_rate": fmt_pct(portfolio.conversion_rate),
            "signal": portfolio.overall_status.light,
        },
        "campaign_signal_counts": _signal_dict(report.campaign_signals),
        "link_signal_counts": _signal_dict(report.link_signals),
        "campaigns": [campaign.to_dict() for campaign in report.campaigns],
        "tracking_links": [item.to_dict() for item in top_links(report.links, TOP_LINK_LIMIT)],
        "red_light_links": [item.to_dict() for item in report.critical_links],
    }


def campaign_sheet_df(campaigns: Sequence[CampaignAggregate]) -> pl.DataFrame:
    if not campaigns:
        return pl.DataFrame({col: [] for col in CAMPAIGN_COLUMNS})
    rows = [campaign.to_dict() for campaign in campaigns]
    return pl.DataFrame([{col: row.get(col) for col in CAMPAIGN_COLUMNS} for row in rows]).select(CAMPAIGN_COLUMNS)


def campaign_view_sheet_df(campaigns: Sequence[CampaignAggregate]) -> pl.DataFrame:
    if not campaigns:
        return pl.DataFrame({col: [] for col in CAMPAIGN_VIEW_COLUMNS})

    pretty_rows: List[Dict[str, Any]] = []
    for campaign in campaigns:
        pretty_rows.append(
            {
                "channel": campaign.channel_type.badge,
                "campaign": campaign.campaign_name or campaign.campaign_id,
                "spend": fmt_won(campaign.spend),
                "ctr": fmt_pct(campaign.ctr),
                "cpc": fmt_won(campaign.cpc),
                "revenue": fmt_won(campaign.conversion_value),
                "roas": fmt_roas(campaign.roas),
                "signal": campaign.status.light,
            }
        )
    return pl.DataFrame(pretty_rows).select(CAMPAIGN_VIEW_COLUMNS)


def link_sheet_df(links: Sequence[LinkPerformance]) -> pl.DataFrame:
    if not links:
        return pl.DataFrame({col: [] for col in LINK_COLUMNS})
    rows = [item.to_dict() for item in links]
    return pl.DataFrame([{col: row.get(col) for col in LINK_COLUMNS} for row in rows]).select(LINK_COLUMNS)


def portfolio_sheet_df(portfolio: PortfolioTotal) -> pl.DataFrame:
    return pl.DataFrame([portfolio.to_dict()])
