"""Command line interface over JSON recipe and pantry files.

Usage:
    python -m nosh plan --recipes catalogue.json --pantry pantry.json --archetype humpday_nosher
    python -m nosh feed --recipes catalogue.json --archetype thrill_seeker --cuisine thai
"""

import argparse
import json
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

from nosh.feed.assembler import FeedContext, assemble_feed, build_expiry_cards
from nosh.models import Archetype, DayMode, PantryItem, PlanConstraints, Recipe
from nosh.planner.weekly_plan import generate_weekly_plan, missing_ingredients_for_plan
from nosh.profile.personality import get_constraints


def load_recipes(path: Path) -> list[Recipe]:
    """Load a recipe catalogue (a JSON list of recipe objects)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    return [Recipe.model_validate(item) for item in data]


def load_pantry(path: Path | None) -> list[PantryItem]:
    """Load pantry contents; no file means an empty pantry."""
    if path is None:
        return []
    data = json.loads(path.read_text(encoding="utf-8"))
    return [PantryItem.model_validate(item) for item in data]


def _parse_day_mode(value: str) -> tuple[int, DayMode]:
    day, _, mode = value.partition("=")
    try:
        day_of_week = int(day)
        day_mode = DayMode(mode)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"expected DAY=MODE with DAY 0-6 and MODE one of {', '.join(DayMode)}, got {value!r}"
        ) from e
    if not 0 <= day_of_week <= 6:
        raise argparse.ArgumentTypeError(f"day must be 0-6, got {day_of_week}")
    return day_of_week, day_mode


def run_plan(args: argparse.Namespace) -> None:
    recipes = load_recipes(args.recipes)
    pantry = load_pantry(args.pantry)

    week_start = args.week_start or date.today() - timedelta(days=date.today().weekday())
    constraints = PlanConstraints(
        archetype=args.archetype,
        personality_constraints=get_constraints(args.archetype),
        day_modes=dict(args.mode),
        exclude_recipe_ids=frozenset(args.exclude),
    )

    plan = generate_weekly_plan(recipes, pantry, constraints, week_start)

    if args.json:
        print(plan.to_json())
        return

    print(plan.summary())
    shopping = missing_ingredients_for_plan(plan, recipes, pantry)
    if shopping:
        print(f"\nTo buy ({len(shopping)}): {', '.join(shopping)}")


def run_feed(args: argparse.Namespace) -> None:
    recipes = load_recipes(args.recipes)
    pantry = load_pantry(args.pantry)

    ctx = FeedContext(
        hour=args.hour,
        day_of_week=args.day,
        month=args.month,
        cuisine_prefs=args.cuisine,
        pantry_items=pantry,
        archetype=args.archetype,
    )
    feed = assemble_feed(
        recipes,
        ctx,
        expiry_cards=build_expiry_cards(recipes, pantry, ctx.today),
    )

    for i, card in enumerate(feed):
        if card.is_recipe:
            title = card.data.get("title") or card.id
            print(f"{i:2}. recipe  {title[:40]:<40} {card.score:5}")
        else:
            print(f"{i:2}. {card.type.value}")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="nosh meal planner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--recipes", type=Path, required=True, help="Recipe catalogue JSON file")
    common.add_argument("--pantry", type=Path, help="Pantry contents JSON file")
    common.add_argument(
        "--archetype",
        type=Archetype,
        choices=list(Archetype),
        required=True,
        help="Cooking personality",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Plan command
    plan_parser = subparsers.add_parser("plan", parents=[common], help="Generate a weekly plan")
    plan_parser.add_argument(
        "--week-start",
        type=date.fromisoformat,
        help="First day of the plan, YYYY-MM-DD (default: this week's Monday)",
    )
    plan_parser.add_argument(
        "--mode",
        type=_parse_day_mode,
        action="append",
        default=[],
        help="Day mode as DAY=MODE, 0=Sunday (repeatable), e.g. 3=skip",
    )
    plan_parser.add_argument(
        "--exclude", action="append", default=[], help="Recipe id to leave out (repeatable)"
    )
    plan_parser.add_argument("--json", action="store_true", help="Print the plan as JSON")

    # Feed command
    feed_parser = subparsers.add_parser("feed", parents=[common], help="Assemble a feed batch")
    feed_parser.add_argument("--cuisine", action="append", default=[], help="Preferred cuisine")
    feed_parser.add_argument("--hour", type=int, help="Hour of day 0-23 (default: now)")
    feed_parser.add_argument("--day", type=int, help="Day of week, 0=Sunday (default: today)")
    feed_parser.add_argument("--month", type=int, help="Month 0-11 (default: this month)")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "plan":
        run_plan(args)
    elif args.command == "feed":
        run_feed(args)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
