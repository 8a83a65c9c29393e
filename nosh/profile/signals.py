"""Roll raw cooking events up into a signal summary.

The summary is a derived view; it is rebuilt from the cook log on every
evaluation and carries no identity between calls.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone

from pydantic import BaseModel, field_validator

from nosh.core.config import PolicyConfig, config
from nosh.models.meal_plan import DayOfWeek
from nosh.models.personality import Archetype, PersonalityConstraints
from nosh.profile.personality import get_constraints

# Defaults when the cook log lacks details
DEFAULT_COOK_TIME = 30
DEFAULT_INGREDIENT_COUNT = 8

# Longest streak we look back for
MAX_STREAK_DAYS = 365


def to_naive_utc(value: datetime) -> datetime:
    """Convert an aware datetime to naive UTC; naive values pass through unchanged."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class CookLogEntry(BaseModel):
    """One completed cook, as stored by the persistence layer."""

    recipe_id: str
    cooked_at: datetime
    cook_time_minutes: int | None = None
    ingredient_count: int | None = None
    cuisine: str | None = None

    class Config:
        frozen = True

    @field_validator("cooked_at")
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


@dataclass(frozen=True)
class CookSignal:
    """A single cook, reduced to what the profile model needs."""

    recipe_id: str
    cook_time: int
    ingredients: int
    cuisine: str
    personality_fit: bool
    is_weekend: bool
    cooked_at: datetime


@dataclass(frozen=True)
class SignalSummary:
    """Rolled-up view over a window of cook signals plus engagement counters.

    All signal sequences are in chronological order.
    """

    total_cooks: int = 0
    recent_cooks: tuple[CookSignal, ...] = ()
    weekday_cooks: tuple[CookSignal, ...] = ()
    weekend_cooks: tuple[CookSignal, ...] = ()
    avg_cook_time: float = 0.0
    avg_ingredients: float = 0.0
    top_cuisines: tuple[str, ...] = ()
    personality_fit_rate: float = 0.0
    feed_likes: int = 0
    feed_dismisses: int = 0
    nosh_runs_completed: int = 0
    social_events_created: int = 0
    streak_days: int = 0


def cook_fits_personality(
    cook_time: int,
    ingredients: int,
    constraints: PersonalityConstraints,
    is_weekend: bool,
) -> bool:
    """True if a cook stays within an archetype's time and ingredient ceilings."""
    return (
        cook_time <= constraints.max_cook_time(is_weekend)
        and ingredients <= constraints.max_ingredients
    )


def to_cook_signal(entry: CookLogEntry, archetype: Archetype | str) -> CookSignal:
    """Convert a cook log entry to a signal judged against ``archetype``."""
    constraints = get_constraints(archetype)
    weekend = DayOfWeek.from_date(entry.cooked_at.date()).is_weekend
    cook_time = entry.cook_time_minutes if entry.cook_time_minutes is not None else DEFAULT_COOK_TIME
    ingredients = (
        entry.ingredient_count if entry.ingredient_count is not None else DEFAULT_INGREDIENT_COUNT
    )
    return CookSignal(
        recipe_id=entry.recipe_id,
        cook_time=cook_time,
        ingredients=ingredients,
        cuisine=entry.cuisine or "unknown",
        personality_fit=cook_fits_personality(cook_time, ingredients, constraints, weekend),
        is_weekend=weekend,
        cooked_at=entry.cooked_at,
    )


def compute_streak(cooks: list[CookSignal] | tuple[CookSignal, ...], today: date) -> int:
    """Count consecutive cooking days ending today.

    Today itself may be missing (the user hasn't cooked yet today).
    """
    if not cooks:
        return 0

    cooked_dates = {c.cooked_at.date() for c in cooks}
    streak = 0
    for i in range(MAX_STREAK_DAYS):
        day = today - timedelta(days=i)
        if day in cooked_dates:
            streak += 1
        elif i > 0:
            break
    return streak


def build_signal_summary(
    cook_log: list[CookLogEntry],
    archetype: Archetype | str,
    now: datetime,
    feed_likes: int = 0,
    feed_dismisses: int = 0,
    nosh_runs_completed: int = 0,
    social_events_created: int = 0,
    policy: PolicyConfig | None = None,
) -> SignalSummary:
    """Build a signal summary from the raw cook log.

    Args:
        cook_log: Completed cooks, in any order
        archetype: Declared archetype the cooks are judged against
        now: Evaluation time; cooks within the recent window of it are "recent".
            Aware values are compared in UTC, like the log timestamps
        feed_likes: Liked feed cards
        feed_dismisses: Dismissed feed cards
        nosh_runs_completed: Completed nosh runs
        social_events_created: Social cooking events hosted
        policy: Policy override (recent window length)

    Returns:
        SignalSummary with chronologically ordered signals
    """
    policy = policy or config
    signals = sorted(
        (to_cook_signal(entry, archetype) for entry in cook_log),
        key=lambda s: s.cooked_at,
    )
    return summarize_signals(
        signals,
        now=now,
        feed_likes=feed_likes,
        feed_dismisses=feed_dismisses,
        nosh_runs_completed=nosh_runs_completed,
        social_events_created=social_events_created,
        recent_window_days=policy.recent_window_days,
    )


def summarize_signals(
    signals: list[CookSignal],
    now: datetime,
    feed_likes: int = 0,
    feed_dismisses: int = 0,
    nosh_runs_completed: int = 0,
    social_events_created: int = 0,
    recent_window_days: int = 14,
) -> SignalSummary:
    """Summarize already-converted, chronologically ordered signals."""
    now = to_naive_utc(now)
    cutoff = now - timedelta(days=recent_window_days)
    total = len(signals)

    cuisine_counts = Counter(s.cuisine for s in signals)
    fit_count = sum(1 for s in signals if s.personality_fit)

    return SignalSummary(
        total_cooks=total,
        recent_cooks=tuple(s for s in signals if s.cooked_at >= cutoff),
        weekday_cooks=tuple(s for s in signals if not s.is_weekend),
        weekend_cooks=tuple(s for s in signals if s.is_weekend),
        avg_cook_time=sum(s.cook_time for s in signals) / total if total else 0.0,
        avg_ingredients=sum(s.ingredients for s in signals) / total if total else 0.0,
        top_cuisines=tuple(c for c, _ in cuisine_counts.most_common(3)),
        personality_fit_rate=fit_count / total if total else 0.0,
        feed_likes=feed_likes,
        feed_dismisses=feed_dismisses,
        nosh_runs_completed=nosh_runs_completed,
        social_events_created=social_events_created,
        streak_days=compute_streak(signals, now.date()),
    )
