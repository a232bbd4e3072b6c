import pytest

from roas_dashboard.domain.signals import (
    SignalThreshold,
    Status,
    classify,
    classify_with,
    count_signals,
    validate_thresholds,
)


@pytest.mark.parametrize(
    "roas_value, expected",
    [
        (300, Status.GOOD),
        (299, Status.WARNING),
        (150, Status.WARNING),
        (149, Status.CRITICAL),
        (0, Status.CRITICAL),
        (1000, Status.GOOD),
    ],
)
def test_classify_boundaries_are_inclusive_on_lower_edge(roas_value, expected):
    assert classify(roas_value, 300, 150) is expected


def test_classify_uses_supplied_thresholds():
    assert classify(120, 120, 80) is Status.GOOD
    assert classify(80, 120, 80) is Status.WARNING
    assert classify(79, 120, 80) is Status.CRITICAL


def test_classify_with_threshold_object():
    threshold = SignalThreshold(green=200, yellow=100)
    assert classify_with(199, threshold) is Status.WARNING


def test_classify_does_not_validate_inverted_thresholds():
    # Broken policy still yields a deterministic tier
    assert classify(120, 100, 200) is Status.GOOD
    assert classify(50, 100, 200) is Status.CRITICAL


def test_validate_thresholds_rejects_broken_pairs():
    with pytest.raises(ValueError):
        validate_thresholds(150, 150)
    with pytest.raises(ValueError):
        validate_thresholds(100, 200)
    with pytest.raises(ValueError):
        validate_thresholds(100, -1)
    validate_thresholds(300, 0)


def test_signal_threshold_validate_returns_self():
    threshold = SignalThreshold(green=300, yellow=150)
    assert threshold.validate() is threshold
    with pytest.raises(ValueError):
        SignalThreshold(green=100, yellow=100).validate()


def test_count_signals_includes_every_tier():
    counts = count_signals([Status.GOOD, Status.CRITICAL, Status.CRITICAL])
    assert counts == {Status.GOOD: 1, Status.WARNING: 0, Status.CRITICAL: 2}


def test_status_light_colors():
    assert Status.GOOD.light == "green"
    assert Status.WARNING.light == "yellow"
    assert Status.CRITICAL.light == "red"
