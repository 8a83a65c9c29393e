"""Cooking personality profile model."""

from nosh.profile.confidence import (
    MILESTONE_THRESHOLDS,
    ConfidenceMilestone,
    classify_by_time,
    compute_confidence,
    crossed_milestones,
    detect_drift,
    detect_hybrid_mode,
    has_crossed,
)
from nosh.profile.nudges import NudgeDecision, NudgeState, NudgeType, evaluate_nudge
from nosh.profile.personality import (
    INITIAL_CONFIDENCE,
    MAX_CONFIDENCE,
    PERSONALITY_CONSTRAINTS,
    WEEKDAY_TIME_TABLE,
    accept_drift,
    classify_from_onboarding,
    get_constraints,
    get_daily_constraints,
)
from nosh.profile.signals import (
    CookLogEntry,
    CookSignal,
    SignalSummary,
    build_signal_summary,
    summarize_signals,
)

__all__ = [
    # Personality
    "classify_from_onboarding",
    "get_constraints",
    "get_daily_constraints",
    "accept_drift",
    "INITIAL_CONFIDENCE",
    "MAX_CONFIDENCE",
    "PERSONALITY_CONSTRAINTS",
    "WEEKDAY_TIME_TABLE",
    # Signals
    "CookLogEntry",
    "CookSignal",
    "SignalSummary",
    "build_signal_summary",
    "summarize_signals",
    # Confidence
    "compute_confidence",
    "detect_hybrid_mode",
    "detect_drift",
    "classify_by_time",
    "crossed_milestones",
    "has_crossed",
    "ConfidenceMilestone",
    "MILESTONE_THRESHOLDS",
    # Nudges
    "evaluate_nudge",
    "NudgeDecision",
    "NudgeState",
    "NudgeType",
]
