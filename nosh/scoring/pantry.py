"""Pantry matching helpers.

Matching is by normalised name only: lowercased, trimmed, and with a single
trailing "s" dropped, so "Tomatoes" never matches "tomato" but "Eggs" does
match "egg". Pantry staples (salt, oil, ...) are ignored throughout.

Example usage:
    >>> from nosh.scoring.pantry import normalise, match_recipes_to_pantry
    >>> normalise("  Onions ")
    'onion'
    >>> matches = match_recipes_to_pantry(recipes, pantry_items)
    >>> [(m.recipe.title, m.match_percent) for m in matches[:3]]
"""

from dataclasses import dataclass, field
from datetime import date

from nosh.models.recipe import PantryItem, Recipe

# Days ahead an expiring item triggers an alert
EXPIRY_DAYS_THRESHOLD = 3

# Recipes suggested per expiring item
MAX_EXPIRY_SUGGESTIONS = 3

# A recipe missing at most this many ingredients is "near complete"
NEAR_COMPLETE_MAX_MISSING = 2


@dataclass(frozen=True)
class IngredientMatch:
    """How well a recipe is covered by the pantry.

    Attributes:
        recipe: The matched recipe
        have: Non-staple ingredient names already in the pantry
        missing: Non-staple ingredient names to buy
        match_percent: 0-100
        near_complete: True if at most two ingredients are missing
    """

    recipe: Recipe
    have: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    match_percent: int = 0
    near_complete: bool = False


@dataclass(frozen=True)
class ExpiryAlert:
    """A pantry item about to expire plus recipes that would use it up."""

    item: PantryItem
    days_until_expiry: int
    suggested_recipes: tuple[Recipe, ...] = field(default_factory=tuple)


def normalise(name: str) -> str:
    """Normalise an ingredient name for fuzzy pantry matching."""
    name = name.strip().lower()
    return name[:-1] if name.endswith("s") else name


def _pantry_names(pantry_items: list[PantryItem]) -> set[str]:
    return {normalise(item.name) for item in pantry_items}


def pantry_match(recipe: Recipe, pantry_items: list[PantryItem]) -> tuple[int, int]:
    """Count non-staple ingredients already in the pantry.

    Returns:
        Tuple of (have, total); (0, 0) for a recipe without ingredients
    """
    non_staple = recipe.non_staple_ingredients
    if not non_staple:
        return 0, 0

    pantry = _pantry_names(pantry_items)
    have = sum(1 for ing in non_staple if normalise(ing.name) in pantry)
    return have, len(non_staple)


def match_recipe(recipe: Recipe, pantry: set[str]) -> IngredientMatch:
    """Match one recipe against an already normalised pantry name set."""
    have: list[str] = []
    missing: list[str] = []
    for ing in recipe.non_staple_ingredients:
        if normalise(ing.name) in pantry:
            have.append(ing.name)
        else:
            missing.append(ing.name)

    total = len(have) + len(missing) or 1
    return IngredientMatch(
        recipe=recipe,
        have=tuple(have),
        missing=tuple(missing),
        match_percent=round(len(have) / total * 100),
        near_complete=len(missing) <= NEAR_COMPLETE_MAX_MISSING,
    )


def match_recipes_to_pantry(
    recipes: list[Recipe],
    pantry_items: list[PantryItem],
) -> list[IngredientMatch]:
    """Match every recipe against the pantry.

    Args:
        recipes: Recipes to match
        pantry_items: Current pantry contents

    Returns:
        Matches sorted by match percent, best first (stable for ties)
    """
    pantry = _pantry_names(pantry_items)
    matches = [match_recipe(recipe, pantry) for recipe in recipes]
    matches.sort(key=lambda m: m.match_percent, reverse=True)
    return matches


def missing_ingredients(recipe: Recipe, pantry_items: list[PantryItem]) -> list[str]:
    """Non-staple ingredient names of ``recipe`` not in the pantry."""
    return list(match_recipe(recipe, _pantry_names(pantry_items)).missing)


def get_expiry_alerts(
    recipes: list[Recipe],
    pantry_items: list[PantryItem],
    today: date,
    days_threshold: int = EXPIRY_DAYS_THRESHOLD,
) -> list[ExpiryAlert]:
    """Find recipes that use pantry items about to expire.

    Items expiring between today and ``days_threshold`` days out (inclusive)
    produce an alert when at least one recipe uses them. Items already past
    their expiry date are ignored.

    Returns:
        Alerts sorted by days until expiry, soonest first
    """
    alerts = []
    for item in pantry_items:
        if item.expiry_date is None:
            continue

        days_until = (item.expiry_date - today).days
        if not 0 <= days_until <= days_threshold:
            continue

        name = normalise(item.name)
        matching = [
            recipe
            for recipe in recipes
            if any(normalise(ing.name) == name for ing in recipe.ingredients or ())
        ]
        if matching:
            alerts.append(ExpiryAlert(
                item=item,
                days_until_expiry=days_until,
                suggested_recipes=tuple(matching[:MAX_EXPIRY_SUGGESTIONS]),
            ))

    alerts.sort(key=lambda a: a.days_until_expiry)
    return alerts
