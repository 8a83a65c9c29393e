"""Tests for confidence ramping, hybrid mode and drift detection."""

import pytest
from conftest import make_signal

from nosh.core.config import PolicyConfig
from nosh.models import Archetype, HybridMode
from nosh.profile.confidence import (
    ConfidenceMilestone,
    classify_by_time,
    compute_confidence,
    crossed_milestones,
    detect_drift,
    detect_hybrid_mode,
)
from nosh.profile.signals import SignalSummary


def summary_of(signals, **kwargs) -> SignalSummary:
    signals = tuple(signals)
    return SignalSummary(
        total_cooks=len(signals),
        recent_cooks=signals,
        weekday_cooks=tuple(s for s in signals if not s.is_weekend),
        weekend_cooks=tuple(s for s in signals if s.is_weekend),
        **kwargs,
    )


def test_dna_reveal_scenario():
    """Three fully matching cooks lift 0.65 to 0.80 and cross the DNA reveal threshold."""
    cooks = [make_signal(cook_time=30, ingredients=6, personality_fit=True) for _ in range(3)]

    new = compute_confidence(0.65, summary_of(cooks), Archetype.HUMPDAY_NOSHER)

    assert new == pytest.approx(0.80)
    assert crossed_milestones(0.65, new) == [ConfidenceMilestone.DNA_REVEAL]
    assert ConfidenceMilestone.DNA_REVEAL.threshold == 0.7


def test_non_matching_cook_still_counts():
    """A cook that fits nothing adds the 0.01 floor."""
    cooks = [make_signal(cook_time=100, ingredients=20, personality_fit=False)]

    new = compute_confidence(0.4, summary_of(cooks), Archetype.THRILL_SEEKER)

    assert new == pytest.approx(0.41)


def test_weekend_cook_judged_against_weekend_limit():
    """A 60 minute Saturday cook fits the warrior's 90 minute weekend ceiling."""
    cooks = [make_signal(cook_time=60, ingredients=20, is_weekend=True)]

    new = compute_confidence(0.4, summary_of(cooks), Archetype.WEEKEND_WARRIOR)

    assert new == pytest.approx(0.44)


def test_no_recent_cooks_keeps_confidence():
    assert compute_confidence(0.5, SignalSummary(), Archetype.OCD_PLANNER) == 0.5


@pytest.mark.parametrize("current", [0.4, 0.55, 0.8, 0.94, 0.95])
@pytest.mark.parametrize("count", [0, 1, 2, 5, 20])
@pytest.mark.parametrize("fit", [True, False])
def test_confidence_bounds(current, count, fit):
    """Confidence never drops, never exceeds 0.95, and moves at most 0.15 per call."""
    cooks = [
        make_signal(cook_time=10 if fit else 200, ingredients=4 if fit else 30, personality_fit=fit)
        for _ in range(count)
    ]

    new = compute_confidence(current, summary_of(cooks), Archetype.THRILL_SEEKER)

    assert current <= new <= 0.95
    assert new - current <= 0.15 + 1e-9


def test_crossed_milestones_multiple():
    assert crossed_milestones(0.45, 0.92) == [
        ConfidenceMilestone.CONFIDENCE_50,
        ConfidenceMilestone.DNA_REVEAL,
        ConfidenceMilestone.FULLY_KNOWN,
    ]
    assert crossed_milestones(0.7, 0.75) == []
    assert crossed_milestones(0.69, 0.7) == [ConfidenceMilestone.DNA_REVEAL]


@pytest.mark.parametrize(
    "minutes,expected",
    [
        (5, Archetype.THRILL_SEEKER),
        (15, Archetype.THRILL_SEEKER),
        (16, Archetype.WEEKEND_WARRIOR),
        (30, Archetype.WEEKEND_WARRIOR),
        (45, Archetype.HUMPDAY_NOSHER),
        (46, Archetype.OCD_PLANNER),
    ],
)
def test_classify_by_time(minutes, expected):
    assert classify_by_time(minutes) is expected


def test_classify_by_time_custom_breakpoints():
    policy = PolicyConfig(breakpoint_sprint=10, breakpoint_weekend=20, breakpoint_weekday=30)
    assert classify_by_time(15, policy) is Archetype.WEEKEND_WARRIOR
    assert classify_by_time(31, policy) is Archetype.OCD_PLANNER


def test_hybrid_mode_detected():
    cooks = [make_signal(cook_time=10) for _ in range(3)]
    cooks += [make_signal(cook_time=80, is_weekend=True) for _ in range(3)]

    assert detect_hybrid_mode(summary_of(cooks)) == HybridMode(
        weekday_archetype=Archetype.THRILL_SEEKER,
        weekend_archetype=Archetype.OCD_PLANNER,
    )


@pytest.mark.parametrize("weekday_count,weekend_count", [(2, 5), (5, 2), (0, 0), (2, 2)])
@pytest.mark.parametrize("weekday_time,weekend_time", [(10, 80), (80, 10), (40, 40)])
def test_hybrid_mode_needs_three_samples_each_side(
    weekday_count, weekend_count, weekday_time, weekend_time
):
    cooks = [make_signal(cook_time=weekday_time) for _ in range(weekday_count)]
    cooks += [make_signal(cook_time=weekend_time, is_weekend=True) for _ in range(weekend_count)]

    assert detect_hybrid_mode(summary_of(cooks)) is None


def test_hybrid_mode_same_classification():
    cooks = [make_signal(cook_time=20) for _ in range(3)]
    cooks += [make_signal(cook_time=25, is_weekend=True) for _ in range(3)]

    assert detect_hybrid_mode(summary_of(cooks)) is None


def test_drift_detected():
    """Five quick, small cooks drift an OCD planner towards thrill seeker."""
    cooks = [make_signal(cook_time=10, ingredients=4) for _ in range(5)]

    assert detect_drift(summary_of(cooks), Archetype.OCD_PLANNER) is Archetype.THRILL_SEEKER


def test_drift_requires_four_agreeing_cooks():
    """The mean classifies as thrill seeker but only 3 of 5 cooks fit its ingredient ceiling."""
    cooks = [make_signal(cook_time=10, ingredients=4) for _ in range(3)]
    cooks += [make_signal(cook_time=14, ingredients=20) for _ in range(2)]

    assert detect_drift(summary_of(cooks), Archetype.OCD_PLANNER) is None


def test_drift_uses_last_five_only():
    """Older slow cooks outside the last five do not block drift."""
    cooks = [make_signal(cook_time=120, ingredients=15) for _ in range(4)]
    cooks += [make_signal(cook_time=10, ingredients=4) for _ in range(5)]

    assert detect_drift(summary_of(cooks), Archetype.OCD_PLANNER) is Archetype.THRILL_SEEKER


def test_no_drift_when_matching_or_short():
    quick = [make_signal(cook_time=10, ingredients=4) for _ in range(5)]
    assert detect_drift(summary_of(quick), Archetype.THRILL_SEEKER) is None
    assert detect_drift(summary_of(quick[:4]), Archetype.OCD_PLANNER) is None


@pytest.mark.parametrize("current", [0.0, 0.39, 0.96, 1.0])
def test_confidence_outside_range_rejected(current):
    with pytest.raises(ValueError, match="Confidence must be"):
        compute_confidence(current, SignalSummary(), Archetype.THRILL_SEEKER)
