"""Personality types shared by the profile model, scorer and planner."""

from dataclasses import dataclass
from enum import StrEnum


class Archetype(StrEnum):
    """The four fixed cooking personalities."""

    THRILL_SEEKER = "thrill_seeker"
    WEEKEND_WARRIOR = "weekend_warrior"
    HUMPDAY_NOSHER = "humpday_nosher"
    OCD_PLANNER = "ocd_planner"

    @property
    def label(self) -> str:
        """Display name used in nudge messages."""
        return ARCHETYPE_LABELS[self]


ARCHETYPE_LABELS: dict[Archetype, str] = {
    Archetype.THRILL_SEEKER: "Thrill Seeker",
    Archetype.WEEKEND_WARRIOR: "Weekend Warrior",
    Archetype.HUMPDAY_NOSHER: "Humpday Nosher",
    Archetype.OCD_PLANNER: "OCD Planner",
}


class CookingStyle(StrEnum):
    """Preferred cooking style, derived 1:1 from the primary archetype."""

    SPRINT = "sprint"
    PROJECT = "project"
    MIDWEEK = "midweek"
    BATCH = "batch"


@dataclass(frozen=True)
class PersonalityConstraints:
    """Fixed cooking ceilings for one archetype."""

    max_cook_time_weekday: int
    max_cook_time_weekend: int
    max_steps: int
    max_ingredients: int
    style: CookingStyle

    def max_cook_time(self, is_weekend: bool) -> int:
        """Cook time ceiling for a weekday or weekend cook."""
        return self.max_cook_time_weekend if is_weekend else self.max_cook_time_weekday


@dataclass(frozen=True)
class PersonalityProfile:
    """A confidence-weighted behavioural profile.

    Attributes:
        primary: Declared (or accepted) archetype
        primary_weight: Weight of the primary archetype (0.4 at onboarding)
        confidence: Evidence strength, 0.4-0.95
        style: Cooking style derived from ``primary``
        secondary: Optional secondary archetype
        secondary_weight: Weight of the secondary archetype
    """

    primary: Archetype
    primary_weight: float
    confidence: float
    style: CookingStyle
    secondary: Archetype | None = None
    secondary_weight: float | None = None


@dataclass(frozen=True)
class HybridMode:
    """Detected weekday/weekend split between two archetypes."""

    weekday_archetype: Archetype
    weekend_archetype: Archetype
