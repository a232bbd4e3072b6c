"""Application layer package."""

from .aggregation_service import aggregate_campaign_frame, aggregate_campaigns
from .creative_service import attach_creative, enrich_creatives
from .normalizer import normalize_channel, normalize_link, normalize_record
from .portfolio_service import evaluate_links, signal_counts, summarize_portfolio
from .report_service import DashboardReport, build_summary, run_dashboard_pipeline

__all__ = [
    "aggregate_campaigns",
    "aggregate_campaign_frame",
    "attach_creative",
    "enrich_creatives",
    "normalize_record",
    "normalize_link",
    "normalize_channel",
    "summarize_portfolio",
    "evaluate_links",
    "signal_counts",
    "DashboardReport",
    "build_summary",
    "run_dashboard_pipeline",
]
