"""Tests for the weekly plan generator."""

from datetime import timedelta

import pytest
from conftest import WEEK_START, make_recipe, plan_constraints

from nosh.models import Archetype, DayMode, DayOfWeek, PantryItem, WeeklyPlanProposal
from nosh.planner.weekly_plan import (
    generate_weekly_plan,
    missing_ingredients_for_plan,
    score_recipe_for_day,
    swap_day,
)


def pool(n: int, **kwargs):
    cuisines = ["thai", "italian", "mexican", "indian", "greek"]
    return [
        make_recipe(f"r{i:02d}", cuisine=cuisines[i % len(cuisines)], **kwargs)
        for i in range(n)
    ]


@pytest.mark.parametrize("n_recipes", [0, 1, 3, 7, 20])
def test_always_seven_days(n_recipes):
    plan = generate_weekly_plan(pool(n_recipes), [], plan_constraints(), WEEK_START)

    assert len(plan.days) == 7
    assert [d.date for d in plan.days] == [WEEK_START + timedelta(days=i) for i in range(7)]
    assert [int(d.day_of_week) for d in plan.days] == [1, 2, 3, 4, 5, 6, 0]


def test_empty_pool_yields_unassigned_week():
    plan = generate_weekly_plan([], [], plan_constraints(), WEEK_START)

    assert all(d.assigned_recipe_id is None and d.score == 0 for d in plan.days)
    assert plan.total_estimated_cost == 0
    assert plan.pantry_utilisation == 0


def test_skip_day():
    """A skipped Wednesday stays empty regardless of the pool."""
    plan = generate_weekly_plan(
        pool(20), [], plan_constraints(day_modes={3: DayMode.SKIP}), WEEK_START
    )

    wednesday = next(d for d in plan.days if d.day_of_week is DayOfWeek.WEDNESDAY)
    assert wednesday.day_mode is DayMode.SKIP
    assert wednesday.assigned_recipe_id is None
    assert wednesday.score == 0
    assert sum(1 for d in plan.days if d.is_assigned) == 6


def test_no_recipe_used_twice():
    plan = generate_weekly_plan(pool(20), [], plan_constraints(), WEEK_START)

    ids = plan.assigned_recipe_ids
    assert len(ids) == 7
    assert len(set(ids)) == len(ids)


def test_excluded_recipes_never_planned():
    plan = generate_weekly_plan(
        pool(10), [], plan_constraints(exclude={"r00", "r01"}), WEEK_START
    )
    assert not {"r00", "r01"} & set(plan.assigned_recipe_ids)


def test_leftover_day_links_previous_recipe():
    recipes = pool(10, leftover_ideas=["fried rice"])

    plan = generate_weekly_plan(
        recipes, [], plan_constraints(day_modes={2: DayMode.LEFTOVER}), WEEK_START
    )

    monday, tuesday = plan.days[0], plan.days[1]
    assert tuesday.day_mode is DayMode.LEFTOVER
    assert tuesday.assigned_recipe_id is None
    assert tuesday.leftover_source_title == monday.recipe_title
    assert tuesday.score == 0


def test_leftover_without_source_is_planned_as_usual():
    plan = generate_weekly_plan(
        pool(10), [], plan_constraints(day_modes={1: DayMode.LEFTOVER}), WEEK_START
    )

    monday = plan.days[0]
    assert monday.is_assigned
    assert monday.day_mode is DayMode.USUAL


def test_time_ceiling_with_grace():
    """A 51 minute recipe misses Monday (35+15) but fits Tuesday (40+15)."""
    slow = make_recipe("slow", total_time_minutes=51)

    plan = generate_weekly_plan([slow], [], plan_constraints(), WEEK_START)

    assert plan.days[0].assigned_recipe_id is None
    assert plan.days[1].assigned_recipe_id == "slow"


def test_no_three_in_a_row_same_cuisine():
    tags = {"humpday_nosher": {"eligible": True}}
    recipes = [
        make_recipe("a", cuisine="thai", personality_tags=tags),
        make_recipe("b", cuisine="thai", personality_tags=tags),
        make_recipe("c", cuisine="thai", personality_tags=tags),
        make_recipe("d", cuisine="italian", adventure_level=3),
    ]

    plan = generate_weekly_plan(recipes, [], plan_constraints(), WEEK_START)

    assert [d.assigned_recipe_id for d in plan.days[:4]] == ["a", "b", "d", "c"]


def test_relaxed_pass_fills_day():
    """With only one cuisine available the third day is filled after relaxing the history."""
    recipes = [make_recipe(x, cuisine="thai") for x in "abc"]

    plan = generate_weekly_plan(recipes, [], plan_constraints(), WEEK_START)

    assert [d.assigned_recipe_id for d in plan.days[:3]] == ["a", "b", "c"]
    assert plan.days[2].score == 20


def test_day_scores():
    constraints = plan_constraints(day_modes={6: DayMode.GO_NUTS, 5: DayMode.MIX_IT_UP})
    wild = make_recipe("wild", adventure_level=4)

    # personality 12 + go nuts 20 + time efficiency 3
    assert score_recipe_for_day(wild, 6, constraints, 0, [], set()) == 35
    # personality 12 + mix it up 15 + time 3 + pantry 100/5
    assert score_recipe_for_day(wild, 5, constraints, 100, [], set()) == 50
    assert score_recipe_for_day(wild, 5, constraints, 0, [], {"wild"}) == -1


def test_cuisine_repeat_penalty():
    constraints = plan_constraints()
    recipe = make_recipe("r", cuisine="Thai")

    assert score_recipe_for_day(recipe, 1, constraints, 0, [], set()) == 20
    assert score_recipe_for_day(recipe, 1, constraints, 0, ["italian", "thai"], set()) == 10
    assert score_recipe_for_day(recipe, 1, constraints, 0, ["thai", "thai"], set()) == -1
    assert score_recipe_for_day(recipe, 1, constraints, 0, ["thai", "thai"], set(), strict=False) == 0


def test_totals():
    recipes = [
        make_recipe("a", cost_per_serve=3, serves=4, ingredients=["rice", "tofu"]),
        make_recipe("b", cuisine="greek", ingredients=["rice"]),
    ]
    pantry = [PantryItem(name="rice")]

    plan = generate_weekly_plan(recipes, pantry, plan_constraints(), WEEK_START)

    assert sorted(plan.assigned_recipe_ids) == ["a", "b"]
    assert plan.total_estimated_cost == 22
    assert plan.pantry_utilisation == 0.75


def test_swap_day_returns_new_proposal():
    recipes = pool(12)
    constraints = plan_constraints()
    plan = generate_weekly_plan(recipes, [], constraints, WEEK_START)
    before = plan.to_dict()

    swapped = swap_day(plan, 0, recipes, [], constraints)

    assert plan.to_dict() == before
    new_id = swapped.days[0].assigned_recipe_id
    assert new_id is not None
    assert new_id not in plan.assigned_recipe_ids
    assert swapped.days[1:] == plan.days[1:]
    assert len(set(swapped.assigned_recipe_ids)) == 7


def test_swap_day_unchanged_cases():
    recipes = pool(8)
    constraints = plan_constraints(day_modes={3: DayMode.SKIP})
    plan = generate_weekly_plan(recipes, [], constraints, WEEK_START)

    assert swap_day(plan, 2, recipes, [], constraints) is plan
    assert swap_day(plan, 7, recipes, [], constraints) is plan
    assert swap_day(plan, -1, recipes, [], constraints) is plan

    only = [make_recipe("only")]
    single = generate_weekly_plan(only, [], plan_constraints(), WEEK_START)
    assert swap_day(single, 0, only, [], plan_constraints()) is single


def test_missing_ingredients_for_plan():
    recipes = [
        make_recipe("a", ingredients=["Tofu", "rice", "peas"]),
        make_recipe("b", cuisine="greek", ingredients=["tofu", "Feta"]),
    ]
    plan = generate_weekly_plan(recipes, [PantryItem(name="rice")], plan_constraints(), WEEK_START)

    assert missing_ingredients_for_plan(plan, recipes, [PantryItem(name="rice")]) == [
        "Feta",
        "peas",
        "Tofu",
    ]


def test_proposal_serialisation():
    plan = generate_weekly_plan(
        pool(5), [], plan_constraints(Archetype.THRILL_SEEKER, {0: DayMode.SKIP}), WEEK_START
    )

    restored = WeeklyPlanProposal.from_dict(plan.to_dict())

    assert restored == plan
    assert "skipped" in plan.summary()
