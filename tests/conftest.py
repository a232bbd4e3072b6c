"""Pytest fixtures shared by the engine and workbook tests."""
import sys
from pathlib import Path

import pytest

# Ensure project root on sys.path so 'roas_dashboard' resolves without an install
ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from roas_dashboard.domain.channels import ChannelType  # noqa: E402
from roas_dashboard.domain.models import AdChannel, AttributionLink  # noqa: E402


@pytest.fixture
def camp1_records():
    return [
        {
            "channel_id": "c1",
            "campaign_id": "camp1",
            "campaign_name": "Spring Sale",
            "date": "2026-10-01",
            "spend": 1000,
            "clicks": 10,
            "impressions": 500,
            "conversions": 1,
            "conversion_value": 2000,
        },
        {
            "channel_id": "c1",
            "campaign_id": "camp1",
            "campaign_name": "Spring Sale (renamed)",
            "date": "2026-10-02",
            "spend": 500,
            "clicks": 5,
            "impressions": 300,
            "conversions": 0,
            "conversion_value": 0,
        },
    ]


@pytest.fixture
def mixed_records(camp1_records):
    return camp1_records + [
        {
            "channel_id": "c2",
            "campaign_id": "camp1",
            "campaign_name": "Search Brand",
            "date": "2026-10-01",
            "spend": 200,
            "clicks": 40,
            "impressions": 4000,
            "conversions": 3,
            "conversion_value": 900,
        },
        {
            "channel_id": "c2",
            "campaign_id": "camp2",
            "campaign_name": "Search Generic",
            "date": "2026-10-03",
            "spend": None,
            "clicks": None,
            "impressions": 100,
            "conversions": None,
            "conversion_value": None,
        },
    ]


@pytest.fixture
def channels():
    return [
        AdChannel(id="c1", channel_type=ChannelType.META, channel_name="Meta main"),
        AdChannel(id="c2", channel_type=ChannelType.NAVER_SEARCH, channel_name="Naver SA"),
    ]


@pytest.fixture
def links():
    return [
        AttributionLink(id="l1", name="insta-bio", clicks=100, conversions=4, revenue=1000, ad_spend=500),
        AttributionLink(
            id="l2",
            name="influencer-a",
            clicks=50,
            conversions=1,
            revenue=300,
            ad_spend=200,
            green_threshold=140,
            yellow_threshold=100,
        ),
        AttributionLink(id="l3", name="paused", clicks=10, revenue=0, ad_spend=100, status="inactive"),
    ]
