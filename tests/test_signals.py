"""Tests for building signal summaries from the cook log."""

from datetime import date, datetime, timedelta, timezone

from conftest import make_signal

from nosh.models import Archetype
from nosh.profile.signals import (
    DEFAULT_COOK_TIME,
    DEFAULT_INGREDIENT_COUNT,
    CookLogEntry,
    build_signal_summary,
    compute_streak,
)

NOW = datetime(2026, 10, 19, 20, 0)  # Monday evening


def entry(recipe_id, when, minutes=None, ingredients=None, cuisine=None):
    return CookLogEntry(
        recipe_id=recipe_id,
        cooked_at=when,
        cook_time_minutes=minutes,
        ingredient_count=ingredients,
        cuisine=cuisine,
    )


def test_summary_partitions_and_order():
    """Signals are chronological and split by weekend from the cook date."""
    log = [
        entry("c", datetime(2026, 10, 19, 19), 10, 4, "thai"),   # Monday
        entry("a", datetime(2026, 10, 17, 19), 50, 9, "thai"),   # Saturday
        entry("b", datetime(2026, 10, 18, 19), 12, 5, "italian"),  # Sunday
    ]

    summary = build_signal_summary(log, Archetype.THRILL_SEEKER, NOW)

    assert summary.total_cooks == 3
    assert [s.recipe_id for s in summary.recent_cooks] == ["a", "b", "c"]
    assert [s.recipe_id for s in summary.weekend_cooks] == ["a", "b"]
    assert [s.recipe_id for s in summary.weekday_cooks] == ["c"]
    assert summary.top_cuisines[0] == "thai"
    assert summary.avg_cook_time == 24


def test_personality_fit_uses_declared_archetype():
    """A cook fits when it stays inside the archetype's time and ingredient ceilings."""
    log = [
        entry("quick", datetime(2026, 10, 19, 19), 14, 6),
        entry("slow", datetime(2026, 10, 19, 20), 40, 6),
    ]

    summary = build_signal_summary(log, Archetype.THRILL_SEEKER, NOW)

    fits = {s.recipe_id: s.personality_fit for s in summary.recent_cooks}
    assert fits == {"quick": True, "slow": False}
    assert summary.personality_fit_rate == 0.5


def test_missing_details_use_defaults():
    summary = build_signal_summary([entry("x", datetime(2026, 10, 19, 18))], "humpday_nosher", NOW)

    signal = summary.recent_cooks[0]
    assert signal.cook_time == DEFAULT_COOK_TIME
    assert signal.ingredients == DEFAULT_INGREDIENT_COUNT
    assert signal.cuisine == "unknown"


def test_recent_window_excludes_old_cooks():
    log = [
        entry("old", datetime(2026, 9, 1, 19), 20, 5),
        entry("new", datetime(2026, 10, 15, 19), 20, 5),
    ]

    summary = build_signal_summary(log, Archetype.HUMPDAY_NOSHER, NOW)

    assert summary.total_cooks == 2
    assert [s.recipe_id for s in summary.recent_cooks] == ["new"]


def test_counters_pass_through():
    summary = build_signal_summary(
        [], Archetype.OCD_PLANNER, NOW, feed_likes=4, feed_dismisses=2, social_events_created=1
    )

    assert summary.total_cooks == 0
    assert summary.avg_cook_time == 0.0
    assert (summary.feed_likes, summary.feed_dismisses) == (4, 2)
    assert summary.social_events_created == 1


def test_streak_counts_consecutive_days():
    cooks = [
        make_signal(cooked_at=datetime(2026, 10, 19, 19)),
        make_signal(cooked_at=datetime(2026, 10, 18, 19)),
        make_signal(cooked_at=datetime(2026, 10, 17, 19)),
        make_signal(cooked_at=datetime(2026, 10, 15, 19)),
    ]
    assert compute_streak(cooks, date(2026, 10, 19)) == 3


def test_streak_tolerates_not_cooked_yet_today():
    cooks = [
        make_signal(cooked_at=datetime(2026, 10, 18, 19)),
        make_signal(cooked_at=datetime(2026, 10, 17, 19)),
    ]
    assert compute_streak(cooks, date(2026, 10, 19)) == 2


def test_streak_broken():
    cooks = [make_signal(cooked_at=datetime(2026, 10, 16, 19))]
    assert compute_streak(cooks, date(2026, 10, 19)) == 0
    assert compute_streak([], date(2026, 10, 19)) == 0


def test_utc_timestamps_compare_with_naive_now():
    """Stored ISO timestamps with a Z suffix work against a naive evaluation time."""
    log = [
        CookLogEntry(recipe_id="a", cooked_at="2026-10-18T19:00:00Z", cook_time_minutes=10),
        entry("b", datetime(2026, 10, 19, 18), 12, 5),
    ]

    summary = build_signal_summary(log, Archetype.THRILL_SEEKER, NOW)

    assert log[0].cooked_at == datetime(2026, 10, 18, 19)
    assert [s.recipe_id for s in summary.recent_cooks] == ["a", "b"]
    assert [s.recipe_id for s in summary.weekend_cooks] == ["a"]
    assert summary.streak_days == 2


def test_aware_now_with_offset_timestamps():
    """Offsets are converted to UTC before windowing and ordering."""
    log = [
        entry("offset", datetime(2026, 10, 19, 1, tzinfo=timezone(timedelta(hours=10)))),
        entry("naive", datetime(2026, 10, 18, 16)),
    ]

    summary = build_signal_summary(
        log, Archetype.HUMPDAY_NOSHER, datetime(2026, 10, 19, 9, tzinfo=timezone.utc)
    )

    # 01:00 at +10:00 is 15:00 UTC the day before
    assert [s.recipe_id for s in summary.recent_cooks] == ["offset", "naive"]
    assert summary.recent_cooks[0].cooked_at == datetime(2026, 10, 18, 15)
