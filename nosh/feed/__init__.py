"""Feed assembly and cooldown policy."""

from nosh.feed.assembler import (
    FeedContext,
    assemble_feed,
    build_expiry_cards,
    planner_preview_card,
    recipe_card,
)
from nosh.feed.cooldown import (
    CooldownReason,
    RecipeCooldown,
    calculate_cooldown_date,
    cooldown_days,
    is_recipe_in_cooldown,
    make_cooldown,
)

__all__ = [
    "FeedContext",
    "assemble_feed",
    "build_expiry_cards",
    "planner_preview_card",
    "recipe_card",
    "CooldownReason",
    "RecipeCooldown",
    "calculate_cooldown_date",
    "cooldown_days",
    "is_recipe_in_cooldown",
    "make_cooldown",
]
