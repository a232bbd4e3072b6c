"""ROAS dashboard package: campaign aggregation and traffic-light signals."""

from .application import (
    DashboardReport,
    aggregate_campaigns,
    build_summary,
    evaluate_links,
    run_dashboard_pipeline,
    summarize_portfolio,
)
from .domain import SignalThreshold, Status, classify

__all__ = [
    "aggregate_campaigns",
    "classify",
    "summarize_portfolio",
    "evaluate_links",
    "run_dashboard_pipeline",
    "build_summary",
    "DashboardReport",
    "SignalThreshold",
    "Status",
]
