import math

import pytest

from roas_dashboard.application.reporting.metrics import (
    conversion_rate,
    cpc,
    ctr,
    fmt_pct,
    fmt_roas,
    fmt_won,
    roas,
    round_half_away,
    to_metric,
    to_optional_float,
)


def test_ratios_degrade_to_zero_on_zero_denominator():
    assert roas(revenue=12345, spend=0) == 0
    assert ctr(clicks=99, impressions=0) == 0
    assert cpc(spend=5000, clicks=0) == 0
    assert conversion_rate(conversions=3, clicks=0) == 0


def test_ratios_that_overflow_become_zero():
    assert roas(revenue=1e10, spend=1e-300) == 0
    assert cpc(spend=1e308, clicks=1e-10) == 0
    assert ctr(clicks=1e307, impressions=0.01) == 0
    assert roas(revenue=math.inf, spend=100) == 0
    assert roas(revenue=math.nan, spend=100) == 0
    assert fmt_won(math.inf) == "0원"


def test_derived_metrics_for_reference_campaign():
    assert ctr(15, 800) == pytest.approx(1.875)
    assert cpc(1500, 15) == 100
    assert roas(2000, 1500) == 133


def test_roas_is_integer_percent():
    assert roas(3000, 2000) == 150
    assert isinstance(roas(1, 3), int)
    assert roas(1, 3) == 33


def test_round_half_away_from_zero():
    assert round_half_away(2.5) == 3
    assert round_half_away(3.5) == 4
    assert round_half_away(-2.5) == -3
    assert round_half_away(132.4999) == 132
    assert round_half_away(0) == 0


def test_cpc_rounds_ties_up():
    # 25 / 10 = 2.5 -> 3
    assert cpc(25, 10) == 3


def test_to_metric_coalesces_unusable_values():
    assert to_metric(None) == 0
    assert to_metric(float("nan")) == 0
    assert to_metric(float("inf")) == 0
    assert to_metric("") == 0
    assert to_metric("n/a") == 0
    assert to_metric(True) == 0
    assert to_metric("1,234") == 1234.0
    assert to_metric(" 42 ") == 42.0


def test_to_metric_keeps_negative_values():
    assert to_metric(-150) == -150.0


def test_to_optional_float():
    assert to_optional_float(None) is None
    assert to_optional_float("") is None
    assert to_optional_float("abc") is None
    assert to_optional_float("250") == 250.0
    assert not math.isnan(to_optional_float(0))


def test_formatters():
    assert fmt_won(1500) == "1,500원"
    assert fmt_won(None) == "0원"
    assert fmt_roas(133) == "133%"
    assert fmt_roas(None) == "N/A"
    assert fmt_pct(12.3456) == "12.35%"
