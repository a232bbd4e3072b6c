"""Runtime configuration for ROAS signals, date windows and logging.

Every value can be overridden through the environment. Values are parsed and
validated once at import time so a bad deployment fails fast instead of
silently classifying against a broken policy.
"""

from __future__ import annotations

import os
from typing import Mapping

from roas_dashboard.domain.signals import SignalThreshold

DEFAULT_GREEN_THRESHOLD = 300.0
DEFAULT_YELLOW_THRESHOLD = 150.0

# Dashboard list sizes
TOP_LINK_LIMIT = 20
CRITICAL_LINK_LIMIT = 5


def _env_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid {name}: {raw}") from exc


def load_thresholds(environ: Mapping[str, str] | None = None) -> SignalThreshold:
    env = os.environ if environ is None else environ
    threshold = SignalThreshold(
        green=_env_float(env, "ROAS_GREEN_THRESHOLD", DEFAULT_GREEN_THRESHOLD),
        yellow=_env_float(env, "ROAS_YELLOW_THRESHOLD", DEFAULT_YELLOW_THRESHOLD),
    )
    return threshold.validate()


def load_lookback_days(environ: Mapping[str, str] | None = None) -> int:
    env = os.environ if environ is None else environ
    raw = env.get("ROAS_LOOKBACK_DAYS", "30")
    try:
        days = int(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid ROAS_LOOKBACK_DAYS: {raw}") from exc
    if days <= 0:
        raise ValueError(f"ROAS_LOOKBACK_DAYS must be positive, got {days}")
    return days


def load_parse_error_threshold(environ: Mapping[str, str] | None = None) -> float:
    env = os.environ if environ is None else environ
    raw = env.get("ROAS_PARSE_ERROR_THRESHOLD", "0.01")
    try:
        threshold = float(raw)
    except ValueError as exc:
        raise ValueError(f"Invalid ROAS_PARSE_ERROR_THRESHOLD: {raw}") from exc
    if threshold < 0 or threshold > 1:
        raise ValueError(f"ROAS_PARSE_ERROR_THRESHOLD must be in [0, 1], got {threshold}")
    return threshold


DEFAULT_THRESHOLDS: SignalThreshold = load_thresholds()
LOOKBACK_DAYS: int = load_lookback_days()
METRIC_PARSE_ERROR_THRESHOLD: float = load_parse_error_threshold()
LOG_LEVEL: str = os.getenv("ROAS_LOG_LEVEL", "INFO").upper()
LOG_FILE: str | None = os.getenv("ROAS_LOG_FILE") or None
