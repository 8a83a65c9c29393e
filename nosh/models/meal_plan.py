"""Data models for weekly dinner plans."""

import json
from dataclasses import dataclass, field, replace
from datetime import date
from enum import IntEnum, StrEnum

from nosh.models.personality import Archetype, PersonalityConstraints


class DayOfWeek(IntEnum):
    """Days of the week (0=Sunday, 6=Saturday)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    @property
    def is_weekend(self) -> bool:
        return self in (DayOfWeek.SATURDAY, DayOfWeek.SUNDAY)

    @classmethod
    def from_date(cls, d: date) -> "DayOfWeek":
        """Convert a date (Python weekday 0=Monday) to this enum."""
        return cls((d.weekday() + 1) % 7)


def is_weekend(day_of_week: int) -> bool:
    """True for Saturday (6) and Sunday (0)."""
    return day_of_week in (DayOfWeek.SUNDAY, DayOfWeek.SATURDAY)


class DayMode(StrEnum):
    """Per-weekday scheduling hint."""

    USUAL = "usual"
    MIX_IT_UP = "mix_it_up"
    GO_NUTS = "go_nuts"
    SKIP = "skip"
    LEFTOVER = "leftover"


@dataclass(frozen=True)
class PlanConstraints:
    """Inputs that shape a weekly plan.

    Attributes:
        archetype: User's primary archetype
        personality_constraints: Constraints for ``archetype``
        day_modes: day_of_week (0=Sunday) -> DayMode; missing days are USUAL
        exclude_recipe_ids: Recipes never to schedule (blacklist)
    """

    archetype: Archetype
    personality_constraints: PersonalityConstraints
    day_modes: dict[int, DayMode] = field(default_factory=dict)
    exclude_recipe_ids: frozenset[str] = frozenset()

    def mode_for(self, day_of_week: int) -> DayMode:
        return DayMode(self.day_modes.get(day_of_week, DayMode.USUAL))


@dataclass(frozen=True)
class PlanDay:
    """One calendar day of a plan proposal."""

    date: date
    day_of_week: DayOfWeek
    day_mode: DayMode
    assigned_recipe_id: str | None = None
    recipe_title: str | None = None
    leftover_source_title: str | None = None
    score: float = 0

    @property
    def is_assigned(self) -> bool:
        return self.assigned_recipe_id is not None

    def with_recipe(self, recipe_id: str, title: str, score: float) -> "PlanDay":
        """Copy of this day with a different recipe."""
        return replace(self, assigned_recipe_id=recipe_id, recipe_title=title, score=score)

    def __str__(self) -> str:
        name = self.day_of_week.name.capitalize()
        if self.day_mode is DayMode.SKIP:
            return f"{name} {self.date}: skipped"
        if self.leftover_source_title:
            return f"{name} {self.date}: leftovers from {self.leftover_source_title}"
        if self.assigned_recipe_id is None:
            return f"{name} {self.date}: no recipe"
        return f"{name} {self.date}: {self.recipe_title or self.assigned_recipe_id} ({self.score:.0f}pt)"


@dataclass(frozen=True)
class WeeklyPlanProposal:
    """A transient 7-day plan: generated, optionally swapped, then accepted or dropped."""

    days: tuple[PlanDay, ...]
    total_estimated_cost: float = 0.0
    pantry_utilisation: float = 0.0

    @property
    def assigned_recipe_ids(self) -> list[str]:
        return [d.assigned_recipe_id for d in self.days if d.assigned_recipe_id]

    def summary(self) -> str:
        """Generate a human-readable summary of the plan."""
        lines = [
            f"Weekly plan starting {self.days[0].date if self.days else '-'}",
            f"Estimated cost: {self.total_estimated_cost:.2f}",
            f"Pantry utilisation: {self.pantry_utilisation:.0%}",
            "",
        ]
        lines.extend(str(day) for day in self.days)
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_estimated_cost": self.total_estimated_cost,
            "pantry_utilisation": self.pantry_utilisation,
            "days": [
                {
                    "date": d.date.isoformat(),
                    "day_of_week": int(d.day_of_week),
                    "day_mode": d.day_mode.value,
                    "assigned_recipe_id": d.assigned_recipe_id,
                    "recipe_title": d.recipe_title,
                    "leftover_source_title": d.leftover_source_title,
                    "score": d.score,
                }
                for d in self.days
            ],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, data: dict) -> "WeeklyPlanProposal":
        """Create from dictionary."""
        days = tuple(
            PlanDay(
                date=date.fromisoformat(d["date"]),
                day_of_week=DayOfWeek(d["day_of_week"]),
                day_mode=DayMode(d.get("day_mode", DayMode.USUAL)),
                assigned_recipe_id=d.get("assigned_recipe_id"),
                recipe_title=d.get("recipe_title"),
                leftover_source_title=d.get("leftover_source_title"),
                score=d.get("score", 0),
            )
            for d in data.get("days", [])
        )
        return cls(
            days=days,
            total_estimated_cost=data.get("total_estimated_cost", 0.0),
            pantry_utilisation=data.get("pantry_utilisation", 0.0),
        )
