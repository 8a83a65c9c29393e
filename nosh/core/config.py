"""Configuration management for nosh-planner.

Product policy constants (time breakpoints, cooldown durations, feed batch
size) live here so they can be tuned per deployment via environment
variables or a ``.env`` file at the project root.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Load .env file
load_dotenv(PROJECT_ROOT / ".env")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {value!r}") from e


@dataclass(frozen=True)
class PolicyConfig:
    """Tunable product policy.

    Attributes:
        breakpoint_sprint: Average cook time (min) at or below which a cook
            reads as a thrill seeker
        breakpoint_weekend: Upper bound (min) for the weekend warrior band
        breakpoint_weekday: Upper bound (min) for the humpday nosher band;
            anything slower reads as an OCD planner
        cooldown_dismissed_days: Suppression after a feed dismiss
        cooldown_loved_days: Suppression after cooking with rating >= 4
        cooldown_neutral_days: Suppression after cooking with rating 3
        cooldown_disliked_days: Suppression after cooking with rating <= 2
        cooldown_favourited_days: Suppression for favourites (effectively forever)
        feed_batch_size: Maximum cards per assembled feed batch
        recent_window_days: Window for "recent" cook signals
    """

    breakpoint_sprint: int = 15
    breakpoint_weekend: int = 30
    breakpoint_weekday: int = 45
    cooldown_dismissed_days: int = 14
    cooldown_loved_days: int = 21
    cooldown_neutral_days: int = 30
    cooldown_disliked_days: int = 60
    cooldown_favourited_days: int = 3650
    feed_batch_size: int = 30
    recent_window_days: int = 14

    def __post_init__(self):
        if not self.breakpoint_sprint < self.breakpoint_weekend < self.breakpoint_weekday:
            raise ValueError(
                "Time breakpoints must be strictly increasing "
                f"({self.breakpoint_sprint}/{self.breakpoint_weekend}/{self.breakpoint_weekday})"
            )
        if self.feed_batch_size < 1:
            raise ValueError("feed_batch_size must be at least 1")

    @classmethod
    def from_env(cls) -> "PolicyConfig":
        """Load policy from environment variables, falling back to defaults."""
        defaults = cls()
        return cls(
            breakpoint_sprint=_env_int("NOSH_BREAKPOINT_SPRINT", defaults.breakpoint_sprint),
            breakpoint_weekend=_env_int("NOSH_BREAKPOINT_WEEKEND", defaults.breakpoint_weekend),
            breakpoint_weekday=_env_int("NOSH_BREAKPOINT_WEEKDAY", defaults.breakpoint_weekday),
            cooldown_dismissed_days=_env_int(
                "NOSH_COOLDOWN_DISMISSED_DAYS", defaults.cooldown_dismissed_days
            ),
            cooldown_loved_days=_env_int("NOSH_COOLDOWN_LOVED_DAYS", defaults.cooldown_loved_days),
            cooldown_neutral_days=_env_int(
                "NOSH_COOLDOWN_NEUTRAL_DAYS", defaults.cooldown_neutral_days
            ),
            cooldown_disliked_days=_env_int(
                "NOSH_COOLDOWN_DISLIKED_DAYS", defaults.cooldown_disliked_days
            ),
            cooldown_favourited_days=_env_int(
                "NOSH_COOLDOWN_FAVOURITED_DAYS", defaults.cooldown_favourited_days
            ),
            feed_batch_size=_env_int("NOSH_FEED_BATCH_SIZE", defaults.feed_batch_size),
            recent_window_days=_env_int("NOSH_RECENT_WINDOW_DAYS", defaults.recent_window_days),
        )


# Global config instance
config = PolicyConfig.from_env()
