"""Recipe scoring for the feed.

The score is a sum of independent, individually capped components so no
single signal can dominate:

- Relevance (0-30): preferred cuisine, previously liked cuisine, time budget
- Pantry match (0-20): share of non-staple ingredients already at home
- Freshness (-15): cooked in the last 14 days
- Engagement (0-15): rating, cook count, likes
- Diversity (0-10): weekend adventure, tight-budget value
- Seasonality (0-10): season tag matches the current month
- Time of day (0-10): dinner slot, weeknight quick meal
- Spice match (0-3)
- Personality fit (0-20): archetype time and ingredient ceilings, precomputed tag

The total is floored at 0. Scoring is pure: the same recipe and context
always produce the same breakdown.

Example usage:
    >>> from nosh.scoring.recipe_scorer import ScoringContext, calculate_score
    >>> context = ScoringContext(hour=18, day_of_week=2, month=6, cuisine_prefs=["thai"])
    >>> score = calculate_score(recipe, context)
    >>> print(f"{recipe.title}: {score.total_score} - {score.reasoning}")
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from nosh.models.meal_plan import DayOfWeek, is_weekend
from nosh.models.personality import Archetype, PersonalityConstraints
from nosh.models.recipe import PantryItem, Recipe
from nosh.profile.personality import get_constraints
from nosh.scoring.pantry import pantry_match
from nosh.scoring.seasonality import matches_season

_LOGGER = logging.getLogger(__name__)

# Relevance
CUISINE_PREF_POINTS = 15
LIKED_CUISINE_POINTS = 10
TIME_BUDGET_POINTS = 5

# Pantry match
PANTRY_MATCH_MAX = 20

# Freshness
RECENTLY_COOKED_PENALTY = -15

# Engagement prediction
HIGH_RATING_THRESHOLD = 4
HIGH_RATING_POINTS = 8
POPULAR_COOKED_THRESHOLD = 50
POPULAR_COOKED_POINTS = 4
POPULAR_LIKES_THRESHOLD = 20
POPULAR_LIKES_POINTS = 3

# Diversity
WEEKEND_ADVENTURE_LEVEL = 3
WEEKEND_ADVENTURE_POINTS = 6
TIGHT_BUDGET_MAX_COST = 4
TIGHT_BUDGET_POINTS = 4

SEASONALITY_POINTS = 10

# Time of day
DINNER_HOURS = range(17, 22)
DINNER_POINTS = 5
QUICK_MEAL_FROM_HOUR = 18
QUICK_MEAL_MAX_MINUTES = 20
QUICK_MEAL_POINTS = 5

SPICE_TOLERANCE = 1
SPICE_MATCH_POINTS = 3

# Personality fit
PERSONALITY_TIME_POINTS = 8
PERSONALITY_NEAR_TIME_POINTS = 4
PERSONALITY_NEAR_TIME_GRACE = 10
PERSONALITY_INGREDIENT_POINTS = 4
PERSONALITY_TAG_POINTS = 8
DEFAULT_INGREDIENT_COUNT = 8


class BudgetPreference(StrEnum):
    TIGHT = "tight"
    MODERATE = "moderate"
    FLEXIBLE = "flexible"


@dataclass
class ScoringContext:
    """Context for scoring a recipe.

    ``hour``, ``day_of_week`` and ``month`` fall back to the wall clock when
    omitted. Pass them explicitly for reproducible scores.

    Attributes:
        hour: Hour of day (0-23), defaults to now
        day_of_week: 0=Sunday .. 6=Saturday, defaults to today
        month: Month (0-11), defaults to the current month
        cuisine_prefs: Cuisines picked during onboarding
        adventure_level: Adventure target (1-4)
        spice_level: Spice target (0-4)
        weeknight_max_minutes: Time budget on weekdays
        weekend_max_minutes: Time budget on Saturday and Sunday
        budget_preference: tight, moderate or flexible
        pantry_items: Current pantry contents
        recent_cook_ids: Recipes cooked in the last 14 days
        liked_cuisines: Cuisines of recipes the user rated 4 or higher
        archetype: User's primary archetype, if onboarded
        personality_constraints: Constraints for ``archetype``; looked up when omitted
    """

    hour: int | None = None
    day_of_week: int | None = None
    month: int | None = None
    cuisine_prefs: list[str] = field(default_factory=list)
    adventure_level: int = 2
    spice_level: int = 2
    weeknight_max_minutes: int = 30
    weekend_max_minutes: int = 60
    budget_preference: BudgetPreference = BudgetPreference.MODERATE
    pantry_items: list[PantryItem] = field(default_factory=list)
    recent_cook_ids: set[str] = field(default_factory=set)
    liked_cuisines: list[str] = field(default_factory=list)
    archetype: Archetype | None = None
    personality_constraints: PersonalityConstraints | None = None

    def __post_init__(self):
        now = datetime.now()
        if self.hour is None:
            self.hour = now.hour
        if self.day_of_week is None:
            self.day_of_week = int(DayOfWeek.from_date(now.date()))
        if self.month is None:
            self.month = now.month - 1

        if not 0 <= self.hour <= 23:
            raise ValueError(f"Hour must be 0-23, got {self.hour}")
        if not 0 <= self.day_of_week <= 6:
            raise ValueError(f"Day of week must be 0-6, got {self.day_of_week}")
        if not 0 <= self.month <= 11:
            raise ValueError(f"Month must be 0-11, got {self.month}")

        self.budget_preference = BudgetPreference(self.budget_preference)
        if self.archetype is not None:
            self.archetype = Archetype(self.archetype)
            if self.personality_constraints is None:
                self.personality_constraints = get_constraints(self.archetype)

    @property
    def is_weekend(self) -> bool:
        return is_weekend(self.day_of_week)

    @property
    def max_minutes(self) -> int:
        """Time budget for today."""
        return self.weekend_max_minutes if self.is_weekend else self.weeknight_max_minutes


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of a recipe's score."""

    total_score: int
    relevance: int = 0
    pantry_match: int = 0
    freshness: int = 0
    engagement: int = 0
    diversity: int = 0
    seasonality: int = 0
    time_of_day: int = 0
    spice_match: int = 0
    personality_fit: int = 0
    reasoning: str = ""

    # Pantry coverage for the recipe card
    pantry_have: int = 0
    pantry_total: int = 0


def score_personality_fit(
    recipe: Recipe,
    archetype: Archetype | str | None,
    constraints: PersonalityConstraints | None,
) -> int:
    """Score how well a recipe fits an archetype (0-20).

    Up to 8 for cook time against the weekday ceiling (4 within 10 minutes
    over), 4 if the ingredient count fits, 8 if the recipe's precomputed tag
    for the archetype is eligible. Missing personality data scores 0.
    """
    if archetype is None or constraints is None:
        return 0

    score = 0
    if recipe.total_time_minutes <= constraints.max_cook_time_weekday:
        score += PERSONALITY_TIME_POINTS
    elif recipe.total_time_minutes <= constraints.max_cook_time_weekday + PERSONALITY_NEAR_TIME_GRACE:
        score += PERSONALITY_NEAR_TIME_POINTS

    ingredient_count = (
        len(recipe.ingredients) if recipe.ingredients is not None else DEFAULT_INGREDIENT_COUNT
    )
    if ingredient_count <= constraints.max_ingredients:
        score += PERSONALITY_INGREDIENT_POINTS

    tag = recipe.tag_for(Archetype(archetype))
    if tag is not None and tag.eligible:
        score += PERSONALITY_TAG_POINTS

    return score


def _relevance(recipe: Recipe, context: ScoringContext) -> int:
    score = 0
    if recipe.cuisine in context.cuisine_prefs:
        score += CUISINE_PREF_POINTS
    if recipe.cuisine in context.liked_cuisines:
        score += LIKED_CUISINE_POINTS
    if recipe.total_time_minutes <= context.max_minutes:
        score += TIME_BUDGET_POINTS
    return score


def _engagement(recipe: Recipe) -> int:
    score = 0
    if recipe.avg_rating >= HIGH_RATING_THRESHOLD:
        score += HIGH_RATING_POINTS
    if recipe.cooked_count > POPULAR_COOKED_THRESHOLD:
        score += POPULAR_COOKED_POINTS
    if recipe.likes_count > POPULAR_LIKES_THRESHOLD:
        score += POPULAR_LIKES_POINTS
    return score


def _diversity(recipe: Recipe, context: ScoringContext) -> int:
    score = 0
    if context.is_weekend and recipe.adventure_level >= WEEKEND_ADVENTURE_LEVEL:
        score += WEEKEND_ADVENTURE_POINTS
    if (
        context.budget_preference is BudgetPreference.TIGHT
        and recipe.cost_per_serve
        and recipe.cost_per_serve <= TIGHT_BUDGET_MAX_COST
    ):
        score += TIGHT_BUDGET_POINTS
    return score


def _time_of_day(recipe: Recipe, context: ScoringContext) -> int:
    score = 0
    if context.hour in DINNER_HOURS:
        score += DINNER_POINTS
    if (
        not context.is_weekend
        and context.hour >= QUICK_MEAL_FROM_HOUR
        and recipe.total_time_minutes <= QUICK_MEAL_MAX_MINUTES
    ):
        score += QUICK_MEAL_POINTS
    return score


def generate_reasoning(score: ScoreBreakdown) -> str:
    """Generate a human-readable explanation of the score.

    Args:
        score: ScoreBreakdown with component scores

    Returns:
        English reasoning string
    """
    reasons = []

    if score.relevance >= CUISINE_PREF_POINTS:
        reasons.append("Matches your favourite cuisines")
    elif score.relevance >= LIKED_CUISINE_POINTS:
        reasons.append("Similar to dishes you rated highly")

    if score.pantry_total:
        if score.pantry_have == score.pantry_total:
            reasons.append("Everything is already in your pantry")
        elif score.pantry_have:
            reasons.append(f"{score.pantry_have}/{score.pantry_total} ingredients in your pantry")

    if score.freshness < 0:
        reasons.append("Cooked recently")

    if score.engagement >= HIGH_RATING_POINTS:
        reasons.append("Highly rated by the community")

    if score.seasonality:
        reasons.append("In season")

    if score.personality_fit >= 16:
        reasons.append("Perfect fit for your cooking style")
    elif score.personality_fit >= 8:
        reasons.append("Fits your cooking style")

    return ". ".join(reasons) + "." if reasons else "Nothing stands out."


def calculate_score(
    recipe: Recipe,
    context: ScoringContext,
) -> ScoreBreakdown:
    """Calculate the overall score for a recipe in the given context.

    Args:
        recipe: Recipe to score
        context: Scoring context

    Returns:
        ScoreBreakdown with total score and component scores
    """
    have, total = pantry_match(recipe, context.pantry_items)
    pantry_score = round(have / total * PANTRY_MATCH_MAX) if total else 0

    freshness = RECENTLY_COOKED_PENALTY if recipe.id in context.recent_cook_ids else 0

    seasonality = (
        SEASONALITY_POINTS if matches_season(recipe.season_tags, context.month) else 0
    )

    spice = (
        SPICE_MATCH_POINTS
        if abs(recipe.spice_level - context.spice_level) <= SPICE_TOLERANCE
        else 0
    )

    score = ScoreBreakdown(
        total_score=0,
        relevance=_relevance(recipe, context),
        pantry_match=pantry_score,
        freshness=freshness,
        engagement=_engagement(recipe),
        diversity=_diversity(recipe, context),
        seasonality=seasonality,
        time_of_day=_time_of_day(recipe, context),
        spice_match=spice,
        personality_fit=score_personality_fit(
            recipe, context.archetype, context.personality_constraints
        ),
        pantry_have=have,
        pantry_total=total,
    )

    score.total_score = max(0, (
        score.relevance
        + score.pantry_match
        + score.freshness
        + score.engagement
        + score.diversity
        + score.seasonality
        + score.time_of_day
        + score.spice_match
        + score.personality_fit
    ))
    score.reasoning = generate_reasoning(score)

    return score


def score_recipe(recipe: Recipe, context: ScoringContext) -> int:
    """Total score only."""
    return calculate_score(recipe, context).total_score


def score_recipes(
    recipes: list[Recipe],
    context: ScoringContext,
    top_n: int | None = None,
) -> list[tuple[Recipe, ScoreBreakdown]]:
    """Score multiple recipes and return sorted by score.

    Equal scores are ordered by recipe id so the ranking is reproducible.

    Args:
        recipes: List of recipes to score
        context: Scoring context
        top_n: If set, return only top N results

    Returns:
        List of (recipe, score) tuples, sorted by total_score descending
    """
    scored = [(recipe, calculate_score(recipe, context)) for recipe in recipes]
    scored.sort(key=lambda x: (-x[1].total_score, x[0].id))

    _LOGGER.debug("Scored %d recipes", len(scored))

    if top_n:
        return scored[:top_n]
    return scored
