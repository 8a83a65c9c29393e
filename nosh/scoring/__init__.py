"""Recipe scoring system."""

from nosh.scoring.pantry import (
    ExpiryAlert,
    IngredientMatch,
    get_expiry_alerts,
    match_recipes_to_pantry,
    missing_ingredients,
    normalise,
    pantry_match,
)
from nosh.scoring.recipe_scorer import (
    BudgetPreference,
    ScoreBreakdown,
    ScoringContext,
    calculate_score,
    score_personality_fit,
    score_recipe,
    score_recipes,
)
from nosh.scoring.seasonality import get_current_seasons, matches_season

__all__ = [
    "BudgetPreference",
    "ScoringContext",
    "ScoreBreakdown",
    "calculate_score",
    "score_recipe",
    "score_recipes",
    "score_personality_fit",
    "normalise",
    "pantry_match",
    "match_recipes_to_pantry",
    "missing_ingredients",
    "get_expiry_alerts",
    "IngredientMatch",
    "ExpiryAlert",
    "get_current_seasons",
    "matches_season",
]
