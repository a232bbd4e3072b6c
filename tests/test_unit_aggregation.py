import copy
import math

import polars as pl
import pytest

from roas_dashboard.application.aggregation_service import (
    METRICS,
    aggregate_campaign_frame,
    aggregate_campaigns,
)
from roas_dashboard.domain.channels import ChannelType
from roas_dashboard.domain.models import DailySpendRecord
from roas_dashboard.domain.signals import SignalThreshold, Status


def _by_key(aggregates):
    return {item.key: item for item in aggregates}


def _sums(aggregates):
    return {item.key: tuple(getattr(item, metric) for metric in METRICS) for item in aggregates}


def test_reference_campaign_scenario(camp1_records, channels):
    aggregates = aggregate_campaigns(camp1_records, channels)
    assert len(aggregates) == 1
    result = aggregates[0]
    assert result.key == ("c1", "camp1")
    assert result.spend == 1500
    assert result.clicks == 15
    assert result.impressions == 800
    assert result.conversions == 1
    assert result.conversion_value == 2000
    assert result.ctr == pytest.approx(1.875)
    assert result.cpc == 100
    assert result.roas == 133
    assert result.status is Status.CRITICAL


def test_first_campaign_name_wins(camp1_records, channels):
    result = aggregate_campaigns(camp1_records, channels)[0]
    assert result.campaign_name == "Spring Sale"


def test_key_is_channel_and_campaign_pair(mixed_records, channels):
    aggregates = _by_key(aggregate_campaigns(mixed_records, channels))
    assert set(aggregates) == {("c1", "camp1"), ("c2", "camp1"), ("c2", "camp2")}

    search = aggregates[("c2", "camp1")]
    assert search.channel_type is ChannelType.NAVER_SEARCH
    assert search.ctr == pytest.approx(1.0)
    assert search.cpc == 5
    assert search.roas == 450
    assert search.status is Status.GOOD


def test_all_null_campaign_is_zero_safe(mixed_records, channels):
    result = _by_key(aggregate_campaigns(mixed_records, channels))[("c2", "camp2")]
    assert result.spend == 0
    assert result.impressions == 100
    assert result.ctr == 0
    assert result.cpc == 0
    assert result.roas == 0
    assert result.status is Status.CRITICAL


def test_empty_input_yields_empty_list():
    assert aggregate_campaigns([], []) == []


def test_idempotent(mixed_records, channels):
    first = aggregate_campaigns(mixed_records, channels)
    second = aggregate_campaigns(mixed_records, channels)
    assert _by_key(first) == _by_key(second)


def test_inputs_are_not_mutated(mixed_records, channels):
    snapshot = copy.deepcopy(mixed_records)
    aggregate_campaigns(mixed_records, channels)
    assert mixed_records == snapshot


def test_additive_over_partitions(mixed_records, channels):
    full = _sums(aggregate_campaigns(mixed_records, channels))
    left = _sums(aggregate_campaigns(mixed_records[:1] + mixed_records[3:], channels))
    right = _sums(aggregate_campaigns(mixed_records[1:3], channels))

    combined = {}
    for part in (left, right):
        for key, values in part.items():
            base = combined.get(key, (0.0,) * len(METRICS))
            combined[key] = tuple(a + b for a, b in zip(base, values))
    assert combined == full


def test_order_does_not_change_sums(mixed_records, channels):
    forward = _sums(aggregate_campaigns(mixed_records, channels))
    backward = _sums(aggregate_campaigns(list(reversed(mixed_records)), channels))
    assert forward == backward


def test_unlisted_channel_keeps_record_type_or_unknown():
    records = [
        {"channel_id": "x1", "campaign_id": "a", "channel_type": "kakao", "spend": 10},
        {"channel_id": "x2", "campaign_id": "a", "spend": 10},
    ]
    aggregates = _by_key(aggregate_campaigns(records))
    assert aggregates[("x1", "a")].channel_type is ChannelType.KAKAO
    assert aggregates[("x2", "a")].channel_type is ChannelType.UNKNOWN


def test_channel_list_overrides_record_type(channels):
    records = [{"channel_id": "c1", "campaign_id": "a", "channel_type": "google", "spend": 10}]
    assert aggregate_campaigns(records, channels)[0].channel_type is ChannelType.META


def test_custom_thresholds(camp1_records):
    result = aggregate_campaigns(camp1_records, thresholds=SignalThreshold(green=130, yellow=100))[0]
    assert result.status is Status.GOOD


def test_aggregates_are_frozen(camp1_records):
    result = aggregate_campaigns(camp1_records)[0]
    with pytest.raises(AttributeError):
        result.spend = 0  # type: ignore[misc]


def test_frame_requires_columns():
    with pytest.raises(ValueError):
        aggregate_campaign_frame(pl.DataFrame({"channel_id": ["c1"]}))


def test_non_finite_record_metrics_aggregate_as_zero():
    records = [
        DailySpendRecord(channel_id="c1", campaign_id="a", spend=100, conversion_value=math.inf),
        DailySpendRecord(channel_id="c1", campaign_id="a", spend=None, clicks=math.nan, conversion_value=50),
    ]
    result = aggregate_campaigns(records)[0]
    assert result.spend == 100
    assert result.clicks == 0
    assert result.conversion_value == 50
    assert result.roas == 50
    assert result.status is Status.CRITICAL


def test_overflowing_ratio_is_zero():
    records = [{"channel_id": "c1", "campaign_id": "a", "spend": 1e-300, "conversion_value": 1e10}]
    result = aggregate_campaigns(records)[0]
    assert result.roas == 0
    assert result.status is Status.CRITICAL
