"""Normalize raw spend rows and attribution links into domain records.

Raw rows come from sync jobs, the database and spreadsheets, so the same field
may be spelled in snake_case, camelCase or with a ``total_`` prefix. Missing,
null, NaN and unparsable metrics become ``0``; negative metrics are kept as-is.
"""

from __future__ import annotations

import datetime
from dataclasses import replace
from typing import Any, Mapping

from roas_dashboard.application.reporting.metrics import to_metric, to_optional_float
from roas_dashboard.domain.channels import ChannelType
from roas_dashboard.domain.models import AdChannel, AttributionLink, DailySpendRecord

RECORD_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "channel_id": ("channel_id", "ad_channel_id", "channelId"),
    "channel_type": ("channel_type", "channelType"),
    "campaign_id": ("campaign_id", "campaignId"),
    "campaign_name": ("campaign_name", "campaignName"),
    "date": ("date",),
    "spend": ("spend", "total_spend"),
    "impressions": ("impressions", "total_impressions"),
    "clicks": ("clicks", "total_clicks"),
    "conversions": ("conversions", "total_conversions"),
    "conversion_value": ("conversion_value", "conversionValue", "total_conversion_value"),
}
LINK_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "link_id"),
    "name": ("name", "post_name", "utm_campaign"),
    "clicks": ("clicks",),
    "conversions": ("conversions",),
    "revenue": ("revenue",),
    "ad_spend": ("ad_spend", "adSpend"),
    "green_threshold": ("green_threshold", "greenThreshold", "target_roas_green", "targetRoasGreen"),
    "yellow_threshold": ("yellow_threshold", "yellowThreshold", "target_roas_yellow", "targetRoasYellow"),
    "status": ("status",),
}
RECORD_METRICS: tuple[str, ...] = ("spend", "impressions", "clicks", "conversions", "conversion_value")
LINK_METRICS: tuple[str, ...] = ("clicks", "conversions", "revenue", "ad_spend")
CHANNEL_FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("id", "channel_id"),
    "channel_type": ("channel_type", "channelType"),
    "channel_name": ("channel_name", "channelName", "account_name"),
}


def _pick(row: Mapping[str, Any], aliases: tuple[str, ...]) -> Any:
    for name in aliases:
        value = row.get(name)
        if value is not None:
            return value
    return None


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        # Spreadsheet ids often arrive as 123.0
        return str(int(value))
    return str(value).strip()


def _to_date(value: Any) -> datetime.date | None:
    if value is None:
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        return datetime.date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        return None


def normalize_record(raw: Mapping[str, Any] | DailySpendRecord) -> DailySpendRecord:
    if isinstance(raw, DailySpendRecord):
        # Built elsewhere; metrics may still hold None, NaN or inf
        return replace(raw, **{name: to_metric(getattr(raw, name)) for name in RECORD_METRICS})
    fields = {name: _pick(raw, aliases) for name, aliases in RECORD_FIELD_ALIASES.items()}
    return DailySpendRecord(
        channel_id=_to_text(fields["channel_id"]),
        campaign_id=_to_text(fields["campaign_id"]),
        campaign_name=_to_text(fields["campaign_name"]),
        channel_type=ChannelType.from_value(fields["channel_type"]),
        date=_to_date(fields["date"]),
        spend=to_metric(fields["spend"]),
        impressions=to_metric(fields["impressions"]),
        clicks=to_metric(fields["clicks"]),
        conversions=to_metric(fields["conversions"]),
        conversion_value=to_metric(fields["conversion_value"]),
    )


def normalize_link(raw: Mapping[str, Any] | AttributionLink) -> AttributionLink:
    if isinstance(raw, AttributionLink):
        return replace(
            raw,
            green_threshold=to_optional_float(raw.green_threshold),
            yellow_threshold=to_optional_float(raw.yellow_threshold),
            **{name: to_metric(getattr(raw, name)) for name in LINK_METRICS},
        )
    fields = {name: _pick(raw, aliases) for name, aliases in LINK_FIELD_ALIASES.items()}
    status = _to_text(fields["status"]).lower() or "active"
    return AttributionLink(
        id=_to_text(fields["id"]),
        name=_to_text(fields["name"]),
        clicks=to_metric(fields["clicks"]),
        conversions=to_metric(fields["conversions"]),
        revenue=to_metric(fields["revenue"]),
        ad_spend=to_metric(fields["ad_spend"]),
        green_threshold=to_optional_float(fields["green_threshold"]),
        yellow_threshold=to_optional_float(fields["yellow_threshold"]),
        status=status,
    )


def normalize_channel(raw: Mapping[str, Any] | AdChannel) -> AdChannel:
    if isinstance(raw, AdChannel):
        return raw
    fields = {name: _pick(raw, aliases) for name, aliases in CHANNEL_FIELD_ALIASES.items()}
    return AdChannel(
        id=_to_text(fields["id"]),
        channel_type=ChannelType.from_value(fields["channel_type"]),
        channel_name=_to_text(fields["channel_name"]),
    )
