"""Shared fixtures for the nosh test suite."""

from datetime import date, datetime

import pytest

from nosh.models import Archetype, PantryItem, PlanConstraints, Recipe, RecipeIngredient
from nosh.profile.personality import get_constraints
from nosh.profile.signals import CookSignal

# Monday
WEEK_START = date(2026, 10, 19)


def make_recipe(recipe_id: str, **kwargs) -> Recipe:
    """Recipe with neutral defaults; ingredients may be given as plain names."""
    ingredients = kwargs.pop("ingredients", None)
    if ingredients is not None:
        ingredients = [
            ing if isinstance(ing, RecipeIngredient) else RecipeIngredient(name=ing)
            for ing in ingredients
        ]
    kwargs.setdefault("title", recipe_id.title())
    kwargs.setdefault("total_time_minutes", 20)
    return Recipe(id=recipe_id, ingredients=ingredients, **kwargs)


def make_signal(
    cook_time: int = 20,
    ingredients: int = 6,
    is_weekend: bool = False,
    personality_fit: bool = False,
    cuisine: str = "thai",
    cooked_at: datetime | None = None,
) -> CookSignal:
    return CookSignal(
        recipe_id="r",
        cook_time=cook_time,
        ingredients=ingredients,
        cuisine=cuisine,
        personality_fit=personality_fit,
        is_weekend=is_weekend,
        cooked_at=cooked_at or datetime(2026, 10, 19, 19, 0),
    )


def plan_constraints(
    archetype: Archetype = Archetype.HUMPDAY_NOSHER,
    day_modes: dict | None = None,
    exclude: set[str] | None = None,
) -> PlanConstraints:
    return PlanConstraints(
        archetype=archetype,
        personality_constraints=get_constraints(archetype),
        day_modes=day_modes or {},
        exclude_recipe_ids=frozenset(exclude or ()),
    )


@pytest.fixture
def pantry() -> list[PantryItem]:
    return [
        PantryItem(name="Onions"),
        PantryItem(name="chicken"),
        PantryItem(name="Rice", expiry_date=date(2026, 10, 21)),
    ]


@pytest.fixture
def catalogue() -> list[Recipe]:
    """A small mixed catalogue."""
    return [
        make_recipe(
            "green_curry",
            title="Green Curry",
            cuisine="thai",
            total_time_minutes=25,
            avg_rating=4.5,
            ingredients=["chicken", "coconut milk", "onion", RecipeIngredient(name="salt", is_pantry_staple=True)],
            leftover_ideas=["curry fried rice"],
        ),
        make_recipe(
            "carbonara",
            title="Carbonara",
            cuisine="italian",
            total_time_minutes=20,
            ingredients=["spaghetti", "eggs", "bacon"],
        ),
        make_recipe(
            "tacos",
            title="Tacos",
            cuisine="mexican",
            total_time_minutes=30,
            adventure_level=2,
            ingredients=["tortillas", "beef", "onion"],
        ),
        make_recipe(
            "pho",
            title="Pho",
            cuisine="vietnamese",
            total_time_minutes=40,
            adventure_level=3,
            ingredients=["rice noodles", "beef", "star anise"],
        ),
        make_recipe(
            "fried_rice",
            title="Fried Rice",
            cuisine="chinese",
            total_time_minutes=15,
            ingredients=["rice", "eggs", "peas"],
        ),
    ]
