"""Domain models for daily goals."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum


@dataclass(frozen=True)
class Goal:
    """Calorie and macro targets for a day."""

    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    day: date | None = None


DEFAULT_GOAL = Goal(calories=2000, protein=50, carbs=250, fat=65)


class GoalStatus(StrEnum):
    """Position of an actual value relative to its target."""

    UNDER = "under"
    MET = "met"
    OVER = "over"


@dataclass(frozen=True)
class MacroProgress:
    """Progress of one macro against its target."""

    actual: float
    target: float
    status: GoalStatus
    percent: float


@dataclass(frozen=True)
class GoalComparison:
    """Per-macro progress for a day."""

    calories: MacroProgress
    protein: MacroProgress
    carbs: MacroProgress
    fat: MacroProgress

    @property
    def calories_over(self) -> bool:
        return self.calories.status is GoalStatus.OVER

    @property
    def protein_met(self) -> bool:
        return self.protein.status is GoalStatus.MET
