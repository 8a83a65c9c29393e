"""Seasonality lookup for recipe season tags.

Months are 0-based (0=January, 11=December) and seasons follow the
southern hemisphere, where the app's catalogue is sourced.

Example usage:
    >>> from nosh.scoring.seasonality import get_current_seasons, matches_season
    >>> get_current_seasons(6)  # July
    ('winter',)
    >>> matches_season({"summer", "autumn"}, month=2)  # March
    True
    >>> matches_season({"all-year"}, month=7)
    True
"""

from collections.abc import Iterable

ALL_YEAR_TAG = "all-year"

# Month (0-11) -> seasons that count as current
SEASON_MAP: dict[int, tuple[str, ...]] = {
    0: ("summer",),   # January
    1: ("summer",),   # February
    2: ("autumn",),   # March
    3: ("autumn",),   # April
    4: ("winter",),   # May
    5: ("winter",),   # June
    6: ("winter",),   # July
    7: ("winter",),   # August
    8: ("spring",),   # September
    9: ("spring",),   # October
    10: ("summer",),  # November
    11: ("summer",),  # December
}


def get_current_seasons(month: int) -> tuple[str, ...]:
    """Seasons for a 0-based month.

    Raises:
        ValueError: If month is not in 0-11
    """
    if not 0 <= month <= 11:
        raise ValueError(f"Month must be 0-11, got {month}")
    return SEASON_MAP[month]


def matches_season(season_tags: Iterable[str], month: int) -> bool:
    """True if any tag is in season for ``month`` or the recipe is all-year."""
    tags = set(season_tags)
    if ALL_YEAR_TAG in tags:
        return True
    return any(season in tags for season in get_current_seasons(month))
