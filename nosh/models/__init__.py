"""Data models shared across the profile model, scorer, feed and planner."""

from nosh.models.feed import CardType, FeedCard, content_card
from nosh.models.meal_plan import (
    DayMode,
    DayOfWeek,
    PlanConstraints,
    PlanDay,
    WeeklyPlanProposal,
    is_weekend,
)
from nosh.models.personality import (
    Archetype,
    CookingStyle,
    HybridMode,
    PersonalityConstraints,
    PersonalityProfile,
)
from nosh.models.recipe import PantryItem, PersonalityTag, Recipe, RecipeIngredient

__all__ = [
    # Recipes
    "Recipe",
    "RecipeIngredient",
    "PersonalityTag",
    "PantryItem",
    # Personality
    "Archetype",
    "CookingStyle",
    "PersonalityProfile",
    "PersonalityConstraints",
    "HybridMode",
    # Feed
    "CardType",
    "FeedCard",
    "content_card",
    # Meal plan
    "DayOfWeek",
    "DayMode",
    "PlanConstraints",
    "PlanDay",
    "WeeklyPlanProposal",
    "is_weekend",
]
