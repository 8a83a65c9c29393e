"""Decide whether (and how) to nudge the user about their cooking profile.

Delivery (companion pop-ups, push) belongs to the caller; this module only
returns a decision. Priority, highest first:

1. DNA reveal (confidence crosses 0.7)
2. Confidence milestones (0.5, 0.9)
3. Streak celebrations (25, 10, 5 days) when the streak achievement is new
4. Personality shift (drift)
5. Hybrid mode detected
6. Try something new (last 10 recent cooks all one cuisine)
7. Social prompt (10+ cooks, no social events hosted)
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import StrEnum

from nosh.models.personality import Archetype, HybridMode, PersonalityProfile
from nosh.profile.confidence import ConfidenceMilestone, has_crossed
from nosh.profile.signals import SignalSummary

# Minimum time between two nudges
NUDGE_COOLDOWN = timedelta(hours=24)

STREAK_MILESTONES = (25, 10, 5)
STREAK_MESSAGES = {
    5: "5-day streak! You're on fire!",
    10: "10-day streak! Unstoppable!",
    25: "25-day streak! You're a legend!",
}

SINGLE_CUISINE_WINDOW = 10
SOCIAL_PROMPT_MIN_COOKS = 10


class NudgeType(StrEnum):
    CONFIDENCE_MILESTONE = "confidence_milestone"
    PERSONALITY_SHIFT = "personality_shift"
    TRY_SOMETHING_NEW = "try_something_new"
    STREAK_CELEBRATION = "streak_celebration"
    HYBRID_DETECTED = "hybrid_detected"
    SOCIAL_PROMPT = "social_prompt"
    DNA_REVEAL = "dna_reveal"


@dataclass(frozen=True)
class NudgeState:
    """Throttling state persisted by the caller."""

    last_nudge_at: datetime | None = None
    nudge_paused: bool = False
    nudges_sent: int = 0
    nudges_accepted: int = 0
    nudges_declined: int = 0


@dataclass(frozen=True)
class NudgePayload:
    type: NudgeType
    message: str
    achievement_key: str | None = None
    open_overlay: str | None = None
    drift_to: Archetype | None = None
    actions: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class NudgeDecision:
    should_nudge: bool
    payload: NudgePayload | None = None


NO_NUDGE = NudgeDecision(should_nudge=False)


def _nudge(payload: NudgePayload) -> NudgeDecision:
    return NudgeDecision(should_nudge=True, payload=payload)


def evaluate_nudge(
    summary: SignalSummary,
    profile: PersonalityProfile,
    nudge_state: NudgeState,
    new_confidence: float,
    old_confidence: float,
    hybrid_mode: HybridMode | None,
    drift: Archetype | None,
    now: datetime,
    new_achievements: frozenset[str] | set[str] = frozenset(),
) -> NudgeDecision:
    """Pick at most one nudge for this session.

    Args:
        summary: Current signal summary
        profile: User's profile (before this evaluation's confidence update)
        nudge_state: Throttling state
        new_confidence: Confidence after ``compute_confidence``
        old_confidence: Confidence before
        hybrid_mode: Result of ``detect_hybrid_mode``
        drift: Result of ``detect_drift``
        now: Evaluation time
        new_achievements: Achievement keys unlocked in this evaluation

    Returns:
        NudgeDecision; ``should_nudge`` is False when throttled or nothing applies
    """
    if nudge_state.nudge_paused:
        return NO_NUDGE
    if nudge_state.last_nudge_at and now - nudge_state.last_nudge_at < NUDGE_COOLDOWN:
        return NO_NUDGE
    if summary.total_cooks == 0:
        return NO_NUDGE

    if has_crossed(old_confidence, new_confidence, ConfidenceMilestone.DNA_REVEAL.threshold):
        return _nudge(NudgePayload(
            type=NudgeType.DNA_REVEAL,
            message="Your cooking DNA is ready! Want to see what I found?",
            achievement_key="identity_found",
            open_overlay="nosh_dna",
            actions=("open_nosh_dna", "dismiss_nudge"),
        ))

    if has_crossed(old_confidence, new_confidence, ConfidenceMilestone.CONFIDENCE_50.threshold):
        return _nudge(NudgePayload(
            type=NudgeType.CONFIDENCE_MILESTONE,
            message="I'm getting to know your cooking style! 50% confidence and climbing.",
            actions=("open_nosh_dna",),
        ))
    if has_crossed(old_confidence, new_confidence, ConfidenceMilestone.FULLY_KNOWN.threshold):
        return _nudge(NudgePayload(
            type=NudgeType.CONFIDENCE_MILESTONE,
            message="I know you really well now, 90% confidence! Your feed is fully tuned to you.",
            achievement_key="fully_known",
            open_overlay="nosh_dna",
            actions=("open_nosh_dna",),
        ))

    for days in STREAK_MILESTONES:
        key = f"streak_{days}"
        if summary.streak_days >= days and key in new_achievements:
            return _nudge(NudgePayload(
                type=NudgeType.STREAK_CELEBRATION,
                message=STREAK_MESSAGES[days],
                achievement_key=key,
                actions=("open_nosh_dna",),
            ))

    if drift is not None and drift is not profile.primary:
        return _nudge(NudgePayload(
            type=NudgeType.PERSONALITY_SHIFT,
            message=(
                f"Hmm, you've been cooking more like a {drift.label} lately. "
                "Want to update your profile?"
            ),
            drift_to=drift,
            actions=("accept_shift", "dismiss_nudge"),
        ))

    if hybrid_mode is not None:
        return _nudge(NudgePayload(
            type=NudgeType.HYBRID_DETECTED,
            message=(
                f"Interesting, you cook like a {hybrid_mode.weekday_archetype.label} on weekdays "
                f"and a {hybrid_mode.weekend_archetype.label} on weekends! "
                "I'll tune your feed for both."
            ),
            actions=("dismiss_nudge", "open_nosh_dna"),
        ))

    if len(summary.recent_cooks) >= SINGLE_CUISINE_WINDOW:
        cuisines = {c.cuisine for c in summary.recent_cooks[-SINGLE_CUISINE_WINDOW:]}
        if len(cuisines) == 1:
            return _nudge(NudgePayload(
                type=NudgeType.TRY_SOMETHING_NEW,
                message=(
                    "You've been on a single-cuisine streak! "
                    "Want to explore something different tonight?"
                ),
                actions=("random_recipe", "dismiss_nudge"),
            ))

    if summary.total_cooks >= SOCIAL_PROMPT_MIN_COOKS and summary.social_events_created == 0:
        return _nudge(NudgePayload(
            type=NudgeType.SOCIAL_PROMPT,
            message="You've cooked 10+ recipes. Ever thought about hosting a cook night with friends?",
            actions=("open_social_cooking", "dismiss_nudge"),
        ))

    return NO_NUDGE
