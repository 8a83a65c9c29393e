"""Pydantic models for recipes and pantry contents."""

from datetime import date

from pydantic import BaseModel, Field

from nosh.models.personality import Archetype


class RecipeIngredient(BaseModel):
    """A single ingredient line of a recipe."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    is_pantry_staple: bool = Field(
        default=False, description="Salt, oil and the like; ignored for pantry matching"
    )

    class Config:
        frozen = True


class PersonalityTag(BaseModel):
    """Precomputed fit of a recipe for one archetype."""

    eligible: bool = False
    sprint_time: int | None = Field(default=None, description="Minutes when cooked sprint-style")
    batch_prep_steps: int | None = None
    notes: str | None = None

    class Config:
        frozen = True


class Recipe(BaseModel):
    """A recipe as supplied by the content pipeline. Read-only here."""

    id: str
    title: str = ""
    description: str | None = None
    cuisine: str = ""
    total_time_minutes: int = 30
    adventure_level: int = Field(default=1, ge=1, le=4)
    spice_level: int = Field(default=0, ge=0, le=4)
    cost_per_serve: float | None = None
    serves: int | None = None
    avg_rating: float = 0.0
    cooked_count: int = 0
    likes_count: int = 0
    season_tags: frozenset[str] = Field(default_factory=frozenset)
    ingredients: tuple[RecipeIngredient, ...] | None = None
    leftover_ideas: tuple[str, ...] = ()
    personality_tags: dict[Archetype, PersonalityTag] | None = None

    class Config:
        frozen = True

    @property
    def non_staple_ingredients(self) -> list[RecipeIngredient]:
        """Ingredients that count towards pantry matching."""
        return [i for i in self.ingredients or () if not i.is_pantry_staple]

    def tag_for(self, archetype: Archetype) -> PersonalityTag | None:
        """Personality tag for ``archetype``, if the pipeline computed one."""
        if not self.personality_tags:
            return None
        return self.personality_tags.get(archetype)


class PantryItem(BaseModel):
    """An item currently in the user's pantry."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    expiry_date: date | None = None

    class Config:
        frozen = True
