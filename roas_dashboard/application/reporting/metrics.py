"""Shared numeric/formatting utilities for reporting."""

from __future__ import annotations

import math
from typing import Any


def to_metric(value: Any, default: float = 0.0) -> float:
    """Coerce a raw metric cell to a finite float; anything unusable becomes ``default``."""
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return default
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if not math.isfinite(number):
        return default
    return number


def to_optional_float(value: Any) -> float | None:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    number = to_metric(value, default=math.nan)
    return None if math.isnan(number) else number


def safe_ratio(num: float, den: float) -> float | None:
    if den <= 0:
        return None
    ratio = num / den
    return ratio if math.isfinite(ratio) else None


def _percent(num: float, den: float) -> float | None:
    ratio = safe_ratio(num, den)
    if ratio is None:
        return None
    value = ratio * 100
    return value if math.isfinite(value) else None


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    magnitude = math.floor(abs(value) + 0.5)
    return int(-magnitude if value < 0 else magnitude)


def ctr(clicks: float, impressions: float) -> float:
    value = _percent(clicks, impressions)
    return 0.0 if value is None else value


def cpc(spend: float, clicks: float) -> int:
    ratio = safe_ratio(spend, clicks)
    return 0 if ratio is None else round_half_away(ratio)


def roas(revenue: float, spend: float) -> int:
    value = _percent(revenue, spend)
    return 0 if value is None else round_half_away(value)


def conversion_rate(conversions: float, clicks: float) -> float:
    value = _percent(conversions, clicks)
    return 0.0 if value is None else value


def fmt_won(value: float | None) -> str:
    if value is None or not math.isfinite(value):
        return "0원"
    return f"{round_half_away(value):,}원"


def fmt_pct(value: float | None, digits: int = 2) -> str:
    if value is None:
        return "N/A"
    return f"{value:.{digits}f}%"


def fmt_roas(value: float | None) -> str:
    if value is None:
        return "N/A"
    return f"{value:.0f}%"
