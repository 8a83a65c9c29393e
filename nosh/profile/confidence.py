"""Confidence ramping, hybrid-mode and drift detection.

Confidence starts at 0.4 when the user picks an archetype during
onboarding and ramps towards 0.95 as cooking behaviour confirms it. It
never goes down here; only an accepted drift resets it (see
``nosh.profile.personality.accept_drift``).
"""

import logging
from enum import StrEnum

from nosh.core.config import PolicyConfig, config
from nosh.models.personality import Archetype, HybridMode
from nosh.profile.personality import INITIAL_CONFIDENCE, MAX_CONFIDENCE, get_constraints
from nosh.profile.signals import CookSignal, SignalSummary, cook_fits_personality

_LOGGER = logging.getLogger(__name__)

# Per-cook confidence increments
TIME_FIT_DELTA = 0.04
INGREDIENT_FIT_DELTA = 0.02
PERSONALITY_FIT_DELTA = 0.02
NON_MATCHING_DELTA = 0.01
MAX_PER_COOK_DELTA = 0.08

# Damping: maximum increase per evaluation
MAX_DELTA_PER_CALL = 0.15

# Minimum samples for the detectors
HYBRID_MIN_SAMPLES = 3
DRIFT_WINDOW = 5
DRIFT_MIN_AGREEING = 4


class ConfidenceMilestone(StrEnum):
    """Named events fired when confidence crosses a threshold."""

    CONFIDENCE_50 = "confidence_50"
    DNA_REVEAL = "dna_reveal"
    FULLY_KNOWN = "fully_known"

    @property
    def threshold(self) -> float:
        return MILESTONE_THRESHOLDS[self]


MILESTONE_THRESHOLDS: dict[ConfidenceMilestone, float] = {
    ConfidenceMilestone.CONFIDENCE_50: 0.5,
    ConfidenceMilestone.DNA_REVEAL: 0.7,
    ConfidenceMilestone.FULLY_KNOWN: 0.9,
}


def has_crossed(old_confidence: float, new_confidence: float, threshold: float) -> bool:
    """True if ``old < threshold <= new``."""
    return old_confidence < threshold <= new_confidence


def crossed_milestones(old_confidence: float, new_confidence: float) -> list[ConfidenceMilestone]:
    """Milestones crossed between two confidence values, lowest first."""
    return [
        milestone
        for milestone, threshold in MILESTONE_THRESHOLDS.items()
        if has_crossed(old_confidence, new_confidence, threshold)
    ]


def _cook_delta(cook: CookSignal, archetype: Archetype | str) -> float:
    constraints = get_constraints(archetype)

    per_cook = 0.0
    if cook.cook_time <= constraints.max_cook_time(cook.is_weekend):
        per_cook += TIME_FIT_DELTA
    if cook.ingredients <= constraints.max_ingredients:
        per_cook += INGREDIENT_FIT_DELTA
    if cook.personality_fit:
        per_cook += PERSONALITY_FIT_DELTA

    # Non-matching cooks still nudge confidence so it never stalls entirely
    if per_cook == 0:
        per_cook = NON_MATCHING_DELTA

    return min(per_cook, MAX_PER_COOK_DELTA)


def compute_confidence(
    current: float,
    summary: SignalSummary,
    archetype: Archetype | str,
) -> float:
    """Compute the new confidence from recent cook signals.

    Each recent cook adds up to 0.08; the total increase per call is capped
    at 0.15 and the result is clamped to ``[current, 0.95]``.

    Args:
        current: Current confidence
        summary: Signal summary; only ``recent_cooks`` are considered
        archetype: Declared archetype

    Raises:
        ValueError: If ``current`` is outside [0.4, 0.95]

    Returns:
        New confidence, never lower than ``current``
    """
    if not INITIAL_CONFIDENCE <= current <= MAX_CONFIDENCE:
        raise ValueError(
            f"Confidence must be {INITIAL_CONFIDENCE}-{MAX_CONFIDENCE}, got {current}"
        )

    delta = sum(_cook_delta(cook, archetype) for cook in summary.recent_cooks)
    delta = min(delta, MAX_DELTA_PER_CALL)

    if delta == 0:
        return current

    return min(max(current, round(current + delta, 4)), MAX_CONFIDENCE)


def classify_by_time(avg_time: float, policy: PolicyConfig | None = None) -> Archetype:
    """Map an average cook time onto an archetype via the time breakpoints."""
    policy = policy or config
    if avg_time <= policy.breakpoint_sprint:
        return Archetype.THRILL_SEEKER
    if avg_time <= policy.breakpoint_weekend:
        return Archetype.WEEKEND_WARRIOR
    if avg_time <= policy.breakpoint_weekday:
        return Archetype.HUMPDAY_NOSHER
    return Archetype.OCD_PLANNER


def _mean_cook_time(cooks: tuple[CookSignal, ...] | list[CookSignal]) -> float:
    return sum(c.cook_time for c in cooks) / len(cooks)


def detect_hybrid_mode(
    summary: SignalSummary,
    policy: PolicyConfig | None = None,
) -> HybridMode | None:
    """Detect a weekday/weekend split between two archetypes.

    Needs at least 3 cooks on each side; returns None when either side is
    short of samples or both sides classify the same.
    """
    if (
        len(summary.weekday_cooks) < HYBRID_MIN_SAMPLES
        or len(summary.weekend_cooks) < HYBRID_MIN_SAMPLES
    ):
        return None

    weekday_archetype = classify_by_time(_mean_cook_time(summary.weekday_cooks), policy)
    weekend_archetype = classify_by_time(_mean_cook_time(summary.weekend_cooks), policy)

    if weekday_archetype is weekend_archetype:
        return None

    return HybridMode(
        weekday_archetype=weekday_archetype,
        weekend_archetype=weekend_archetype,
    )


def detect_drift(
    summary: SignalSummary,
    declared: Archetype | str,
    policy: PolicyConfig | None = None,
) -> Archetype | None:
    """Detect sustained behaviour that fits a different archetype.

    Classifies the mean cook time of the last 5 recent cooks. A differing
    classification only counts as drift when at least 4 of those 5 cooks
    individually fit the other archetype's time and ingredient ceilings,
    so a single outlier never triggers a profile change.

    Returns:
        The drifted-to archetype, or None
    """
    if len(summary.recent_cooks) < DRIFT_WINDOW:
        return None

    declared = Archetype(declared)
    last_cooks = summary.recent_cooks[-DRIFT_WINDOW:]
    actual = classify_by_time(_mean_cook_time(last_cooks), policy)
    if actual is declared:
        return None

    actual_constraints = get_constraints(actual)
    agreeing = sum(
        1
        for c in last_cooks
        if cook_fits_personality(c.cook_time, c.ingredients, actual_constraints, c.is_weekend)
    )
    if agreeing < DRIFT_MIN_AGREEING:
        return None

    _LOGGER.info(
        "Drift detected: declared=%s actual=%s (%d/%d cooks agree)",
        declared.value,
        actual.value,
        agreeing,
        DRIFT_WINDOW,
    )
    return actual
