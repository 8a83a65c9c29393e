"""Cooking personality classification and constraint lookup.

Every user declares one of four archetypes at onboarding. Each archetype
carries fixed ceilings for cook time, steps and ingredient count, which
the scorer, the confidence model and the weekly planner all read from here.

Example usage:
    >>> from nosh.profile.personality import classify_from_onboarding, get_daily_constraints
    >>> profile = classify_from_onboarding("humpday_nosher")
    >>> profile.confidence
    0.4
    >>> get_daily_constraints("humpday_nosher", day_of_week=3, is_weekend=False).max_cook_time_weekday
    45
"""

from dataclasses import replace

from nosh.models.personality import (
    Archetype,
    CookingStyle,
    PersonalityConstraints,
    PersonalityProfile,
)

# Confidence bounds
INITIAL_CONFIDENCE = 0.4
MAX_CONFIDENCE = 0.95

ARCHETYPE_STYLES: dict[Archetype, CookingStyle] = {
    Archetype.THRILL_SEEKER: CookingStyle.SPRINT,
    Archetype.WEEKEND_WARRIOR: CookingStyle.PROJECT,
    Archetype.HUMPDAY_NOSHER: CookingStyle.MIDWEEK,
    Archetype.OCD_PLANNER: CookingStyle.BATCH,
}

PERSONALITY_CONSTRAINTS: dict[Archetype, PersonalityConstraints] = {
    Archetype.THRILL_SEEKER: PersonalityConstraints(
        max_cook_time_weekday=15,
        max_cook_time_weekend=20,
        max_steps=5,
        max_ingredients=6,
        style=CookingStyle.SPRINT,
    ),
    Archetype.WEEKEND_WARRIOR: PersonalityConstraints(
        max_cook_time_weekday=30,
        max_cook_time_weekend=90,
        max_steps=10,
        max_ingredients=12,
        style=CookingStyle.PROJECT,
    ),
    Archetype.HUMPDAY_NOSHER: PersonalityConstraints(
        max_cook_time_weekday=45,
        max_cook_time_weekend=60,
        max_steps=8,
        max_ingredients=10,
        style=CookingStyle.MIDWEEK,
    ),
    Archetype.OCD_PLANNER: PersonalityConstraints(
        max_cook_time_weekday=60,
        max_cook_time_weekend=120,
        max_steps=15,
        max_ingredients=15,
        style=CookingStyle.BATCH,
    ),
}

# Weekday cook time ceilings Monday..Friday, indexed by day_of_week - 1
# (0=Sunday convention, so Sunday and Saturday fall outside the table).
WEEKDAY_TIME_TABLE: dict[Archetype, tuple[int, int, int, int, int]] = {
    Archetype.THRILL_SEEKER: (15, 15, 15, 15, 20),
    Archetype.WEEKEND_WARRIOR: (30, 25, 30, 25, 35),
    Archetype.HUMPDAY_NOSHER: (35, 40, 45, 40, 35),
    Archetype.OCD_PLANNER: (60, 45, 60, 45, 60),
}


def _to_archetype(archetype: Archetype | str) -> Archetype:
    try:
        return Archetype(archetype)
    except ValueError as e:
        valid = ", ".join(a.value for a in Archetype)
        raise ValueError(f"Unknown archetype: {archetype!r}. Must be one of: {valid}") from e


def classify_from_onboarding(selection: Archetype | str) -> PersonalityProfile:
    """Build the initial profile for a user-chosen archetype.

    Args:
        selection: Archetype picked during onboarding

    Returns:
        Profile at the fixed initial confidence of 0.4
    """
    archetype = _to_archetype(selection)
    return PersonalityProfile(
        primary=archetype,
        primary_weight=INITIAL_CONFIDENCE,
        confidence=INITIAL_CONFIDENCE,
        style=ARCHETYPE_STYLES[archetype],
    )


def get_constraints(archetype: Archetype | str) -> PersonalityConstraints:
    """Look up the constant constraints for an archetype.

    Raises:
        ValueError: If ``archetype`` is not one of the four archetypes
    """
    return PERSONALITY_CONSTRAINTS[_to_archetype(archetype)]


def get_daily_constraints(
    archetype: Archetype | str,
    day_of_week: int,
    is_weekend: bool,
) -> PersonalityConstraints:
    """Constraints for a specific day.

    On weekdays (Monday-Friday, ``day_of_week`` 1-5) the weekday cook time
    ceiling comes from the finer per-weekday table; weekends and any index
    outside the table keep the base constraint.

    Args:
        archetype: User's archetype
        day_of_week: 0=Sunday .. 6=Saturday
        is_weekend: Whether the day is treated as a weekend

    Returns:
        PersonalityConstraints for that day
    """
    archetype = _to_archetype(archetype)
    base = PERSONALITY_CONSTRAINTS[archetype]
    if is_weekend:
        return base

    table = WEEKDAY_TIME_TABLE[archetype]
    index = day_of_week - 1
    if not 0 <= index < len(table):
        return base

    return replace(base, max_cook_time_weekday=table[index])


def accept_drift(profile: PersonalityProfile, new_archetype: Archetype | str) -> PersonalityProfile:
    """Switch a profile to a drifted archetype after the user accepts it.

    This is the only path on which confidence goes down: the new primary
    starts over at the onboarding confidence and the previous primary is
    kept as the secondary archetype.
    """
    new_archetype = _to_archetype(new_archetype)
    if new_archetype is profile.primary:
        return profile

    fresh = classify_from_onboarding(new_archetype)
    return replace(
        fresh,
        secondary=profile.primary,
        secondary_weight=round(1 - fresh.primary_weight, 2),
    )
