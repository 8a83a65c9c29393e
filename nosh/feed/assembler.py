"""Feed assembly: interleave scored recipe cards with content cards.

Ordering is structural, not purely score driven:

1. Dismissed recipes and recipes in cooldown are dropped.
2. The remaining recipes are scored and sorted, best first.
3. The first card is always the best recipe ("tonight's pick").
4. A fixed block of static cards follows: one expiry alert, the lifecycle
   guide, DNA milestone cards, up to two group shares, the weekly planner
   preview and the photo gallery.
5. The rest of the batch is filled from the sorted recipes. A vendor card
   may only take a position ending in 9 (at most one per ten cards), and
   after three recipes in a row the next card is a drink, else a tip,
   else a built-in house tip.

Example usage:
    >>> from nosh.feed.assembler import FeedContext, assemble_feed
    >>> ctx = FeedContext(hour=18, day_of_week=3, month=4, dismissed_ids={"r9"})
    >>> feed = assemble_feed(recipes, ctx, vendor_cards=vendors, tip_cards=tips)
    >>> feed[0].type
    <CardType.RECIPE: 'recipe'>
"""

import logging
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import date, timedelta

from nosh.core.config import PolicyConfig, config
from nosh.feed.cooldown import RecipeCooldown, is_recipe_in_cooldown
from nosh.models.feed import CardType, FeedCard, content_card
from nosh.models.recipe import PantryItem, Recipe
from nosh.scoring.pantry import get_expiry_alerts
from nosh.scoring.recipe_scorer import ScoreBreakdown, ScoringContext, score_recipes

_LOGGER = logging.getLogger(__name__)

MAX_CONSECUTIVE_RECIPES = 3
VENDOR_SPACING = 10
VENDOR_SLOT = 9
MAX_GROUP_SHARES = 2
PLANNER_PREVIEW_RECIPES = 4

# Preview slots Mon, Tue, Thu, Sat as offsets from Monday
PLANNER_PREVIEW_OFFSETS = (0, 1, 3, 5)

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

# Separators used once drink and tip pools run dry
HOUSE_TIPS = (
    "Read the whole recipe once before you start cooking.",
    "Salt pasta water until it tastes like the sea.",
    "Let meat rest for a few minutes before slicing.",
    "A squeeze of lemon wakes up almost any dish.",
    "Prep everything before the pan gets hot.",
    "Taste as you go and adjust the seasoning at the end.",
)


@dataclass
class FeedContext(ScoringContext):
    """Scoring context plus the feed-only inputs.

    ``today`` falls back to ``date.today()`` when omitted; pass it, along with
    the clock fields, for a reproducible feed.

    Attributes:
        dismissed_ids: Recipes the user swiped away
        cooldowns: recipe_id -> cooldown record
        today: Reference date for cooldowns and the planner preview
        group_share_cards: Cards shared by the user's cook groups
        dna_cards: Nosh DNA milestone cards to surface
    """

    dismissed_ids: set[str] = field(default_factory=set)
    cooldowns: dict[str, RecipeCooldown] = field(default_factory=dict)
    today: date | None = None
    group_share_cards: list[FeedCard] = field(default_factory=list)
    dna_cards: list[FeedCard] = field(default_factory=list)

    def __post_init__(self):
        super().__post_init__()
        if self.today is None:
            self.today = date.today()


def recipe_card(recipe: Recipe, score: ScoreBreakdown) -> FeedCard:
    """Build the scored card for a recipe."""
    pantry = (
        {"have": score.pantry_have, "total": score.pantry_total}
        if score.pantry_total
        else None
    )
    return FeedCard(
        id=recipe.id,
        type=CardType.RECIPE,
        score=score.total_score,
        data={
            "id": recipe.id,
            "title": recipe.title,
            "description": recipe.description,
            "cuisine": recipe.cuisine,
            "total_time_minutes": recipe.total_time_minutes,
            "serves": recipe.serves,
            "cost_per_serve": recipe.cost_per_serve,
            "spice_level": recipe.spice_level,
            "avg_rating": recipe.avg_rating,
            "cooked_count": recipe.cooked_count,
            "pantry_match": pantry,
            "reasoning": score.reasoning,
        },
    )


def planner_preview_card(top_titles: list[str], today: date) -> FeedCard:
    """Weekly planner card for the week containing ``today``.

    The top recipes are pre-filled on Monday, Tuesday, Thursday and Saturday.
    """
    monday = today - timedelta(days=today.weekday())
    days = []
    for offset, label in enumerate(WEEKDAY_LABELS):
        day = monday + timedelta(days=offset)
        days.append({
            "day": label,
            "date": day.isoformat(),
            "recipe": None,
            "is_today": day == today,
        })

    for title, offset in zip(top_titles, PLANNER_PREVIEW_OFFSETS):
        days[offset]["recipe"] = title

    return content_card(
        CardType.WEEKLY_PLANNER,
        "weekly_planner_1",
        week_label="This Week",
        days=days,
    )


def build_expiry_cards(
    recipes: list[Recipe],
    pantry_items: list[PantryItem],
    today: date,
    days_threshold: int = 3,
) -> list[FeedCard]:
    """Expiry alert cards for pantry items about to go off, soonest first."""
    cards = []
    for alert in get_expiry_alerts(recipes, pantry_items, today, days_threshold):
        cards.append(content_card(
            CardType.EXPIRY_ALERT,
            f"expiry_{alert.item.name.strip().lower().replace(' ', '_')}",
            item_name=alert.item.name,
            days_until_expiry=alert.days_until_expiry,
            recipe_ids=[r.id for r in alert.suggested_recipes],
            recipe_titles=[r.title for r in alert.suggested_recipes],
        ))
    return cards


def _house_tip(n: int) -> FeedCard:
    return content_card(
        CardType.TIP,
        f"house_tip_{n + 1}",
        text=HOUSE_TIPS[n % len(HOUSE_TIPS)],
    )


def _static_cards(
    ctx: FeedContext,
    top_titles: list[str],
    expiry_cards: list[FeedCard],
) -> list[FeedCard]:
    cards = []
    if expiry_cards:
        cards.append(expiry_cards[0])
    cards.append(content_card(CardType.LIFECYCLE_GUIDE, "lifecycle_guide_1"))
    cards.extend(ctx.dna_cards)
    cards.extend(ctx.group_share_cards[:MAX_GROUP_SHARES])
    cards.append(planner_preview_card(top_titles, ctx.today))
    cards.append(content_card(CardType.PHOTO_GALLERY, "photo_gallery_1"))
    return cards


def assemble_feed(
    recipes: list[Recipe],
    ctx: FeedContext,
    vendor_cards: Sequence[FeedCard] = (),
    tip_cards: Sequence[FeedCard] = (),
    drink_cards: Sequence[FeedCard] = (),
    expiry_cards: Sequence[FeedCard] = (),
    policy: PolicyConfig | None = None,
) -> list[FeedCard]:
    """Assemble one batch of the feed.

    Args:
        recipes: Recipe catalogue
        ctx: Feed context
        vendor_cards: Vendor cards, in the order they may appear
        tip_cards: Cooking tip cards
        drink_cards: Drink pairing cards
        expiry_cards: Expiry alert cards; only the first is shown
        policy: Policy override (batch size)

    Returns:
        Ordered feed cards. The first card is the best recipe whenever any
        recipe survives filtering, and the static cards are always present.
    """
    policy = policy or config
    batch_size = policy.feed_batch_size

    candidates = [
        recipe
        for recipe in recipes
        if recipe.id not in ctx.dismissed_ids
        and not is_recipe_in_cooldown(recipe.id, ctx.cooldowns, ctx.today)
    ]
    scored = score_recipes(candidates, ctx)
    remaining = deque(recipe_card(recipe, score) for recipe, score in scored)

    feed: list[FeedCard] = []
    if remaining:
        feed.append(remaining.popleft())

    top_titles = [recipe.title for recipe, _ in scored[:PLANNER_PREVIEW_RECIPES]]
    feed.extend(_static_cards(ctx, top_titles, list(expiry_cards)))

    vendors = deque(vendor_cards)
    separators = deque([*drink_cards, *tip_cards])
    house_tips_used = 0
    run = 0

    while len(feed) < batch_size and remaining:
        if len(feed) % VENDOR_SPACING == VENDOR_SLOT and vendors:
            feed.append(vendors.popleft())
            run = 0
        elif run >= MAX_CONSECUTIVE_RECIPES:
            if separators:
                feed.append(separators.popleft())
            else:
                feed.append(_house_tip(house_tips_used))
                house_tips_used += 1
            run = 0
        else:
            feed.append(remaining.popleft())
            run += 1

    _LOGGER.info(
        "Assembled feed: %d cards, %d recipes of %d candidates",
        len(feed),
        sum(1 for card in feed if card.is_recipe),
        len(candidates),
    )
    return feed
