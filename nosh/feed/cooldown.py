"""Cooldown policy: how long a recipe stays out of the feed.

Durations come from :class:`nosh.core.config.PolicyConfig`:

- dismissed: 14 days
- cooked and rated 4-5: 21 days
- cooked and rated 3 (or unrated): 30 days
- cooked and rated 1-2: 60 days
- favourited: effectively permanent (about 10 years)

Favourited recipes never resurface, whatever their cooldown date says.
"""

from datetime import date, timedelta
from enum import StrEnum

from pydantic import BaseModel

from nosh.core.config import PolicyConfig, config


class CooldownReason(StrEnum):
    DISMISSED = "dismissed"
    COOKED = "cooked"
    FAVOURITED = "favourited"


class RecipeCooldown(BaseModel):
    """A recipe suppressed from the feed until ``cooldown_until``."""

    recipe_id: str
    reason: CooldownReason
    rating: int | None = None
    cooldown_until: date

    class Config:
        frozen = True


def cooldown_days(
    reason: CooldownReason | str,
    rating: int | None = None,
    policy: PolicyConfig | None = None,
) -> int:
    """Number of days a recipe is suppressed for ``reason``."""
    policy = policy or config
    reason = CooldownReason(reason)

    if reason is CooldownReason.DISMISSED:
        return policy.cooldown_dismissed_days
    if reason is CooldownReason.FAVOURITED:
        return policy.cooldown_favourited_days

    if rating is None or rating == 3:
        return policy.cooldown_neutral_days
    if rating >= 4:
        return policy.cooldown_loved_days
    return policy.cooldown_disliked_days


def calculate_cooldown_date(
    reason: CooldownReason | str,
    rating: int | None = None,
    today: date | None = None,
    policy: PolicyConfig | None = None,
) -> date:
    """Date until which a recipe stays out of the feed.

    Args:
        reason: Why the recipe is cooling down
        rating: Cook rating (1-5), only used for ``cooked``
        today: Reference date, defaults to today
        policy: Policy override

    Returns:
        ``today`` plus the cooldown duration
    """
    today = today or date.today()
    return today + timedelta(days=cooldown_days(reason, rating, policy))


def make_cooldown(
    recipe_id: str,
    reason: CooldownReason | str,
    rating: int | None = None,
    today: date | None = None,
    policy: PolicyConfig | None = None,
) -> RecipeCooldown:
    """Build the cooldown record the caller persists."""
    return RecipeCooldown(
        recipe_id=recipe_id,
        reason=CooldownReason(reason),
        rating=rating,
        cooldown_until=calculate_cooldown_date(reason, rating, today, policy),
    )


def is_recipe_in_cooldown(
    recipe_id: str,
    cooldowns: dict[str, RecipeCooldown],
    today: date | None = None,
) -> bool:
    """True if ``recipe_id`` must not resurface on ``today``."""
    cooldown = cooldowns.get(recipe_id)
    if cooldown is None:
        return False
    if cooldown.reason is CooldownReason.FAVOURITED:
        return True
    return cooldown.cooldown_until > (today or date.today())
