"""Weekly plan generator.

Builds a personality-aware 7-day dinner plan with a greedy fill: each day
takes the highest scoring recipe that is still unused, fits the day's cook
time ceiling (with 15 minutes grace) and does not repeat the same cuisine a
third day running. A third day of one cuisine is ruled out, not merely
penalised, so this can pick differently from a penalty-only scheduler. When
nothing qualifies, the day is retried once with the cuisine history ignored
before it is left empty.

Day score (``score_recipe_for_day``), -1 meaning ineligible:

- Personality fit: 0-20
- Pantry match: 0-20 (match percent / 5)
- Day mode bonus: 0-20
- Variety penalty: -10 per repeat of the cuisine in the last two days;
  a cuisine that filled both of them is ineligible until the relaxed pass
- Time efficiency: +3 within the daily ceiling

Proposals are immutable; ``swap_day`` returns a new proposal.

Example usage:
    >>> from datetime import date
    >>> from nosh.models import Archetype, DayMode, PlanConstraints
    >>> from nosh.profile.personality import get_constraints
    >>> constraints = PlanConstraints(
    ...     archetype=Archetype.HUMPDAY_NOSHER,
    ...     personality_constraints=get_constraints(Archetype.HUMPDAY_NOSHER),
    ...     day_modes={3: DayMode.SKIP, 6: DayMode.GO_NUTS},
    ... )
    >>> plan = generate_weekly_plan(recipes, pantry, constraints, date(2026, 3, 2))
    >>> print(plan.summary())
"""

import logging
from dataclasses import dataclass
from datetime import date, timedelta

from nosh.models.meal_plan import (
    DayMode,
    DayOfWeek,
    PlanConstraints,
    PlanDay,
    WeeklyPlanProposal,
    is_weekend,
)
from nosh.models.recipe import PantryItem, Recipe
from nosh.profile.personality import get_daily_constraints
from nosh.scoring.pantry import match_recipes_to_pantry, normalise
from nosh.scoring.recipe_scorer import score_personality_fit

_LOGGER = logging.getLogger(__name__)

DAYS_IN_WEEK = 7

# Minutes a recipe may exceed the daily ceiling before it is ruled out
TIME_GRACE_MINUTES = 15

TIME_EFFICIENCY_BONUS = 3
CUISINE_REPEAT_PENALTY = 10
CUISINE_HISTORY = 2

# Estimated cost defaults when a recipe lacks pricing
DEFAULT_COST_PER_SERVE = 5
DEFAULT_SERVES = 2


@dataclass(frozen=True)
class _Pick:
    recipe: Recipe
    score: int


def _cuisine_key(recipe: Recipe) -> str:
    return (recipe.cuisine or "").lower()


def _day_mode_bonus(recipe: Recipe, day_mode: DayMode) -> int:
    if day_mode is DayMode.MIX_IT_UP:
        if recipe.adventure_level >= 3:
            return 15
        if recipe.adventure_level >= 2:
            return 5
    elif day_mode is DayMode.GO_NUTS:
        if recipe.adventure_level >= 4:
            return 20
        if recipe.spice_level >= 3:
            return 15
        if recipe.adventure_level >= 3:
            return 10
    elif day_mode is DayMode.USUAL:
        if recipe.adventure_level <= 2:
            return 5
    return 0


def score_recipe_for_day(
    recipe: Recipe,
    day_of_week: int,
    constraints: PlanConstraints,
    pantry_match_percent: int,
    used_cuisines: list[str],
    used_recipe_ids: set[str],
    strict: bool = True,
) -> int:
    """Score a recipe for one plan day.

    Args:
        recipe: Candidate recipe
        day_of_week: 0=Sunday .. 6=Saturday
        constraints: Plan constraints
        pantry_match_percent: 0-100 pantry coverage of the recipe
        used_cuisines: Lowercased cuisines of the days assigned so far, oldest first
        used_recipe_ids: Recipes already in the plan
        strict: Rule out a cuisine that filled both of the last two days

    Returns:
        Score >= 0, or -1 if the recipe cannot go on this day
    """
    if recipe.id in used_recipe_ids:
        return -1

    weekend = is_weekend(day_of_week)
    daily = get_daily_constraints(constraints.archetype, day_of_week, weekend)
    max_time = daily.max_cook_time(weekend)
    if recipe.total_time_minutes > max_time + TIME_GRACE_MINUTES:
        return -1

    cuisine = _cuisine_key(recipe)
    last_two = used_cuisines[-CUISINE_HISTORY:]
    if strict and len(last_two) == CUISINE_HISTORY and all(c == cuisine for c in last_two):
        return -1

    score = score_personality_fit(
        recipe, constraints.archetype, constraints.personality_constraints
    )
    score += round(pantry_match_percent / 5)
    score += _day_mode_bonus(recipe, constraints.mode_for(day_of_week))
    score -= CUISINE_REPEAT_PENALTY * sum(1 for c in last_two if c == cuisine)

    if recipe.total_time_minutes <= max_time:
        score += TIME_EFFICIENCY_BONUS

    return max(score, 0)


def _pick_best_recipe(
    pool: list[Recipe],
    day_of_week: int,
    constraints: PlanConstraints,
    pantry_map: dict[str, int],
    used_cuisines: list[str],
    used_recipe_ids: set[str],
) -> _Pick | None:
    """Best recipe for a day, retrying once with the cuisine history relaxed."""
    for relaxed in (False, True):
        best: _Pick | None = None
        for recipe in pool:
            score = score_recipe_for_day(
                recipe,
                day_of_week,
                constraints,
                pantry_map.get(recipe.id, 0),
                [] if relaxed else used_cuisines,
                used_recipe_ids,
                strict=not relaxed,
            )
            if score < 0:
                continue
            if best is None or score > best.score:
                best = _Pick(recipe, score)

        if best is not None:
            if relaxed:
                _LOGGER.debug(
                    "Day %d: picked %s with relaxed cuisine history", day_of_week, best.recipe.id
                )
            return best

    return None


def _pantry_map(recipes: list[Recipe], pantry_items: list[PantryItem]) -> dict[str, int]:
    return {m.recipe.id: m.match_percent for m in match_recipes_to_pantry(recipes, pantry_items)}


def _recompute_stats(
    days: list[PlanDay] | tuple[PlanDay, ...],
    recipes_by_id: dict[str, Recipe],
    pantry_map: dict[str, int],
) -> WeeklyPlanProposal:
    """Build a proposal with cost and pantry utilisation for ``days``."""
    cooked = [d for d in days if d.assigned_recipe_id in recipes_by_id]

    total_cost = 0.0
    for day in cooked:
        recipe = recipes_by_id[day.assigned_recipe_id]
        cost = recipe.cost_per_serve if recipe.cost_per_serve is not None else DEFAULT_COST_PER_SERVE
        serves = recipe.serves if recipe.serves is not None else DEFAULT_SERVES
        total_cost += cost * serves

    utilisation = 0.0
    if cooked:
        total_match = sum(pantry_map.get(d.assigned_recipe_id, 0) for d in cooked)
        utilisation = round(total_match / len(cooked) * 100) / 10000

    return WeeklyPlanProposal(
        days=tuple(days),
        total_estimated_cost=round(total_cost, 2),
        pantry_utilisation=utilisation,
    )


def generate_weekly_plan(
    recipes: list[Recipe],
    pantry_items: list[PantryItem],
    constraints: PlanConstraints,
    week_start: date,
) -> WeeklyPlanProposal:
    """Generate a 7-day plan proposal.

    Args:
        recipes: Recipe catalogue
        pantry_items: Current pantry contents
        constraints: Archetype, day modes and excluded recipes
        week_start: First date of the plan (usually a Monday)

    Returns:
        Proposal with exactly seven days starting at ``week_start``
    """
    pantry_map = _pantry_map(recipes, pantry_items)
    pool = [r for r in recipes if r.id not in constraints.exclude_recipe_ids]

    used_recipe_ids: set[str] = set()
    used_cuisines: list[str] = []
    last_cooked: Recipe | None = None
    days: list[PlanDay] = []

    for offset in range(DAYS_IN_WEEK):
        day_date = week_start + timedelta(days=offset)
        day_of_week = DayOfWeek.from_date(day_date)
        day_mode = constraints.mode_for(day_of_week)

        if day_mode is DayMode.SKIP:
            days.append(PlanDay(date=day_date, day_of_week=day_of_week, day_mode=day_mode))
            continue

        if day_mode is DayMode.LEFTOVER and last_cooked and last_cooked.leftover_ideas:
            days.append(PlanDay(
                date=day_date,
                day_of_week=day_of_week,
                day_mode=day_mode,
                leftover_source_title=last_cooked.title,
            ))
            continue

        best = _pick_best_recipe(
            pool, day_of_week, constraints, pantry_map, used_cuisines, used_recipe_ids
        )
        if best is None:
            _LOGGER.debug("%s %s: no eligible recipe", day_of_week.name, day_date)
            days.append(PlanDay(date=day_date, day_of_week=day_of_week, day_mode=day_mode))
            continue

        used_recipe_ids.add(best.recipe.id)
        used_cuisines.append(_cuisine_key(best.recipe))
        last_cooked = best.recipe
        _LOGGER.debug(
            "%s %s: %s (%d)", day_of_week.name, day_date, best.recipe.id, best.score
        )
        days.append(PlanDay(
            date=day_date,
            day_of_week=day_of_week,
            # A leftover day without a source is planned as a usual day
            day_mode=DayMode.USUAL if day_mode is DayMode.LEFTOVER else day_mode,
            assigned_recipe_id=best.recipe.id,
            recipe_title=best.recipe.title,
            score=best.score,
        ))

    proposal = _recompute_stats(days, {r.id: r for r in recipes}, pantry_map)
    _LOGGER.info(
        "Generated plan from %s: %d/%d days assigned, cost %.2f",
        week_start,
        len(proposal.assigned_recipe_ids),
        DAYS_IN_WEEK,
        proposal.total_estimated_cost,
    )
    return proposal


def swap_day(
    proposal: WeeklyPlanProposal,
    day_index: int,
    recipes: list[Recipe],
    pantry_items: list[PantryItem],
    constraints: PlanConstraints,
) -> WeeklyPlanProposal:
    """Replace one day with the next-best alternative recipe.

    The recipe currently on that day and every recipe used elsewhere in the
    week are excluded. Skip and leftover days, an out-of-range index or a
    missing alternative return ``proposal`` unchanged.

    Returns:
        A new proposal; ``proposal`` itself is never modified
    """
    if not 0 <= day_index < len(proposal.days):
        return proposal
    day = proposal.days[day_index]
    if day.day_mode in (DayMode.SKIP, DayMode.LEFTOVER):
        return proposal

    recipes_by_id = {r.id: r for r in recipes}
    pantry_map = _pantry_map(recipes, pantry_items)

    used_recipe_ids = {
        d.assigned_recipe_id
        for i, d in enumerate(proposal.days)
        if i != day_index and d.assigned_recipe_id
    }
    if day.assigned_recipe_id:
        used_recipe_ids.add(day.assigned_recipe_id)

    used_cuisines = [
        _cuisine_key(recipes_by_id[d.assigned_recipe_id])
        for d in proposal.days[max(0, day_index - CUISINE_HISTORY):day_index]
        if d.assigned_recipe_id in recipes_by_id
    ]

    pool = [r for r in recipes if r.id not in constraints.exclude_recipe_ids]
    best = _pick_best_recipe(
        pool, day.day_of_week, constraints, pantry_map, used_cuisines, used_recipe_ids
    )
    if best is None:
        _LOGGER.debug("Swap %s: no alternative recipe", day.date)
        return proposal

    days = list(proposal.days)
    days[day_index] = day.with_recipe(best.recipe.id, best.recipe.title, best.score)
    return _recompute_stats(days, recipes_by_id, pantry_map)


def missing_ingredients_for_plan(
    proposal: WeeklyPlanProposal,
    recipes: list[Recipe],
    pantry_items: list[PantryItem],
) -> list[str]:
    """Non-staple ingredients the plan needs that the pantry lacks.

    Returns:
        Display names, one per normalised ingredient, sorted alphabetically
    """
    recipes_by_id = {r.id: r for r in recipes}
    pantry = {normalise(item.name) for item in pantry_items}

    needed: dict[str, str] = {}
    for recipe_id in proposal.assigned_recipe_ids:
        recipe = recipes_by_id.get(recipe_id)
        if recipe is None:
            continue
        for ing in recipe.non_staple_ingredients:
            key = normalise(ing.name)
            if key not in pantry:
                needed.setdefault(key, ing.name.strip())

    return sorted(needed.values(), key=str.lower)
