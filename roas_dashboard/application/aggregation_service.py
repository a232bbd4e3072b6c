"""Application service for per-campaign aggregation of daily spend rows."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence

import polars as pl

from roas_dashboard.application.normalizer import RECORD_METRICS, normalize_channel, normalize_record
from roas_dashboard.application.reporting.metrics import cpc, ctr, roas
from roas_dashboard.config import DEFAULT_THRESHOLDS
from roas_dashboard.domain.channels import ChannelType
from roas_dashboard.domain.models import AdChannel, CampaignAggregate, DailySpendRecord
from roas_dashboard.domain.signals import SignalThreshold, classify_with
from roas_dashboard.log_config import get_logger

logger = get_logger(__name__)

KEY_COLUMNS: list[str] = ["channel_id", "campaign_id"]
METRICS: list[str] = list(RECORD_METRICS)
RECORD_SCHEMA: dict[str, Any] = {
    "channel_id": pl.Utf8,
    "campaign_id": pl.Utf8,
    "campaign_name": pl.Utf8,
    "channel_type": pl.Utf8,
    **{metric: pl.Float64 for metric in METRICS},
}


def records_to_frame(records: Iterable[Mapping[str, Any] | DailySpendRecord]) -> pl.DataFrame:
    normalized = [normalize_record(record) for record in records]
    columns: dict[str, list[Any]] = {name: [] for name in RECORD_SCHEMA}
    for record in normalized:
        columns["channel_id"].append(record.channel_id)
        columns["campaign_id"].append(record.campaign_id)
        columns["campaign_name"].append(record.campaign_name)
        columns["channel_type"].append(record.channel_type.value)
        for metric in METRICS:
            columns[metric].append(getattr(record, metric))
    return pl.DataFrame(columns, schema=RECORD_SCHEMA)


def _sum_aggregations() -> list[pl.Expr]:
    return [pl.col(metric).fill_nan(0.0).fill_null(0.0).sum().alias(metric) for metric in METRICS]


def aggregate_campaign_frame(df: pl.DataFrame) -> pl.DataFrame:
    """Group spend rows by ``(channel_id, campaign_id)`` and sum every metric.

    Name and channel type come from the first row seen for each key.
    """
    missing = sorted(set(RECORD_SCHEMA).difference(df.columns))
    if missing:
        raise ValueError(f"Missing required columns: {missing}")
    if df.is_empty():
        return pl.DataFrame(schema=RECORD_SCHEMA)

    return (
        df.group_by(KEY_COLUMNS, maintain_order=True)
        .agg(
            [
                pl.col("campaign_name").first(),
                pl.col("channel_type").first(),
            ]
            + _sum_aggregations()
        )
        .select(list(RECORD_SCHEMA))
    )


def _resolve_channel_type(row: Mapping[str, Any], channel_types: Mapping[str, ChannelType]) -> ChannelType:
    resolved = channel_types.get(str(row.get("channel_id", "")))
    if resolved is not None:
        return resolved
    return ChannelType.from_value(row.get("channel_type"))


def build_campaign_aggregate(
    row: Mapping[str, Any],
    channel_type: ChannelType,
    thresholds: SignalThreshold,
) -> CampaignAggregate:
    spend = float(row["spend"])
    clicks = float(row["clicks"])
    impressions = float(row["impressions"])
    conversion_value = float(row["conversion_value"])
    campaign_roas = roas(conversion_value, spend)
    return CampaignAggregate(
        channel_id=str(row["channel_id"]),
        campaign_id=str(row["campaign_id"]),
        campaign_name=str(row.get("campaign_name") or ""),
        channel_type=channel_type,
        spend=spend,
        impressions=impressions,
        clicks=clicks,
        conversions=float(row["conversions"]),
        conversion_value=conversion_value,
        ctr=ctr(clicks, impressions),
        cpc=cpc(spend, clicks),
        roas=campaign_roas,
        status=classify_with(campaign_roas, thresholds),
    )


def aggregate_campaigns(
    records: Iterable[Mapping[str, Any] | DailySpendRecord],
    channels: Sequence[Mapping[str, Any] | AdChannel] = (),
    thresholds: SignalThreshold | None = None,
) -> list[CampaignAggregate]:
    """Collapse date-filtered spend rows into one classified aggregate per campaign.

    ``channels`` resolves each campaign's channel type by ``channel_id``; rows
    whose channel is not listed keep their own ``channel_type`` or fall back to
    ``ChannelType.UNKNOWN``. Inputs are never mutated and output order carries
    no meaning.
    """
    policy = thresholds or DEFAULT_THRESHOLDS
    channel_types = {channel.id: channel.channel_type for channel in map(normalize_channel, channels)}

    frame = records_to_frame(records)
    grouped = aggregate_campaign_frame(frame)
    aggregates = [
        build_campaign_aggregate(row, _resolve_channel_type(row, channel_types), policy)
        for row in grouped.iter_rows(named=True)
    ]
    logger.debug(
        "Aggregated spend records",
        record_count=frame.height,
        campaign_count=len(aggregates),
    )
    return aggregates
