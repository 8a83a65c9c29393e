"""Weekly dinner plan generation."""

from nosh.planner.weekly_plan import (
    generate_weekly_plan,
    missing_ingredients_for_plan,
    score_recipe_for_day,
    swap_day,
)

__all__ = [
    "generate_weekly_plan",
    "swap_day",
    "score_recipe_for_day",
    "missing_ingredients_for_plan",
]
