"""Traffic-light signal policy for ROAS values."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable


class Status(str, enum.Enum):
    GOOD = "GOOD"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

    @property
    def light(self) -> str:
        return _LIGHTS[self]


_LIGHTS: dict[Status, str] = {
    Status.GOOD: "green",
    Status.WARNING: "yellow",
    Status.CRITICAL: "red",
}


def validate_thresholds(green: float, yellow: float) -> None:
    """Reject threshold pairs that break ``green > yellow >= 0``.

    Classification itself never validates; this is meant for the surfaces that
    accept thresholds from users or the environment.
    """
    if green < 0 or yellow < 0:
        raise ValueError(f"ROAS thresholds must be non-negative, got green={green}, yellow={yellow}")
    if green <= yellow:
        raise ValueError(f"Green ROAS threshold must exceed yellow, got green={green}, yellow={yellow}")


@dataclass(frozen=True)
class SignalThreshold:
    """ROAS tier boundaries in percent units (300 means revenue is 3x spend)."""

    green: float
    yellow: float

    def validate(self) -> "SignalThreshold":
        validate_thresholds(self.green, self.yellow)
        return self


def classify(roas: float, green: float, yellow: float) -> Status:
    """Map a ROAS percentage to a tier; each tier includes its lower edge."""
    if roas >= green:
        return Status.GOOD
    if roas >= yellow:
        return Status.WARNING
    return Status.CRITICAL


def classify_with(roas: float, threshold: SignalThreshold) -> Status:
    return classify(roas, threshold.green, threshold.yellow)


def count_signals(statuses: Iterable[Status]) -> dict[Status, int]:
    counts = {status: 0 for status in Status}
    for status in statuses:
        counts[status] += 1
    return counts
