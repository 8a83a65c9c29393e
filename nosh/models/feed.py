"""Feed card types.

A feed card is a closed tagged union over :class:`CardType`. Only recipe
cards carry a numeric score; every other variant is a static or
caller-supplied content card.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class CardType(StrEnum):
    """All card variants the feed can contain."""

    RECIPE = "recipe"
    VENDOR = "vendor"
    TIP = "tip"
    DRINK = "drink"
    EXPIRY_ALERT = "expiry_alert"
    LIFECYCLE_GUIDE = "lifecycle_guide"
    WEEKLY_PLANNER = "weekly_planner"
    PHOTO_GALLERY = "photo_gallery"
    GROUP_SHARE = "group_share"
    DNA_MILESTONE = "dna_milestone"


@dataclass(frozen=True)
class FeedCard:
    """A single card in the feed.

    Attributes:
        id: Card id; for recipe cards this is the recipe id
        type: Card variant
        data: Variant payload (title, image, days, ...)
        score: Desirability score, recipe cards only
    """

    id: str
    type: CardType
    data: dict[str, Any] = field(default_factory=dict)
    score: float | None = None

    def __post_init__(self):
        if self.type is CardType.RECIPE and self.score is None:
            raise ValueError(f"Recipe card {self.id!r} requires a score")
        if self.type is not CardType.RECIPE and self.score is not None:
            raise ValueError(f"Only recipe cards carry a score, got {self.type.value}")

    @property
    def is_recipe(self) -> bool:
        return self.type is CardType.RECIPE


def content_card(card_type: CardType, card_id: str, **data: Any) -> FeedCard:
    """Build a non-recipe card.

    Example:
        >>> content_card(CardType.TIP, "tip_knife", text="Keep your knife sharp")
    """
    if card_type is CardType.RECIPE:
        raise ValueError("Use a scored recipe card for recipes")
    return FeedCard(id=card_id, type=card_type, data={"id": card_id, **data})
