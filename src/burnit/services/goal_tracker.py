"""Per-day goals with a default fallback and goal comparison."""

from dataclasses import dataclass, field, replace
from datetime import date

from burnit.domain.entries import Totals
from burnit.domain.goals import (
    DEFAULT_GOAL,
    Goal,
    GoalComparison,
    GoalStatus,
    MacroProgress,
)
from burnit.services.sync import SyncAdapter
from burnit.services.validation import parse_day, validate_goal


@dataclass
class GoalTracker:
    """Keeps at most one goal per day, synchronized through an adapter."""

    sync: SyncAdapter
    default: Goal = DEFAULT_GOAL
    _goals: dict[date, Goal] = field(default_factory=dict, init=False, repr=False)

    def get_goal(self, day: date | str) -> Goal:
        """Return the stored goal, or the default stamped with the day."""
        resolved = parse_day(day)
        return self._goals.get(resolved) or replace(self.default, day=resolved)

    def has_goal(self, day: date | str) -> bool:
        return parse_day(day) in self._goals

    def goals(self) -> list[Goal]:
        return [self._goals[day] for day in sorted(self._goals)]

    async def set_goal(self, day: date | str, goal: Goal) -> Goal:
        """Validate, persist and upsert the goal for a day."""
        resolved = parse_day(day)
        candidate = validate_goal(replace(goal, day=resolved))
        stored = await self.sync.set_goal(candidate)
        self._goals[resolved] = replace(stored, day=resolved)
        return self._goals[resolved]

    async def load_goal(self, day: date | str) -> Goal:
        """Fetch the goal for a day through the adapter and keep it."""
        resolved = parse_day(day)
        fetched = await self.sync.get_goal(resolved)
        self._goals[resolved] = replace(fetched, day=resolved)
        return self._goals[resolved]

    def replace_goals(self, goals: list[Goal]) -> None:
        """Install goals wholesale (used by backup import)."""
        self._goals = {goal.day: goal for goal in goals if goal.day is not None}

    @staticmethod
    def compare(totals: Totals, goal: Goal) -> GoalComparison:
        """Compare totals to a goal.

        Calories, carbs and fat are ceilings: over means strictly above the
        target. Protein is a floor: met means at or above the target.
        """
        return GoalComparison(
            calories=_ceiling(totals.calories, goal.calories),
            protein=_floor(totals.protein, goal.protein),
            carbs=_ceiling(totals.carbs, goal.carbs),
            fat=_ceiling(totals.fat, goal.fat),
        )


def _percent(actual: float, target: float) -> float:
    if target <= 0:
        return 100.0
    return min(actual / target * 100, 100.0)


def _ceiling(actual: float, target: float) -> MacroProgress:
    if actual > target:
        status = GoalStatus.OVER
    elif actual == target:
        status = GoalStatus.MET
    else:
        status = GoalStatus.UNDER
    return MacroProgress(actual, target, status, _percent(actual, target))


def _floor(actual: float, target: float) -> MacroProgress:
    status = GoalStatus.MET if actual >= target else GoalStatus.UNDER
    return MacroProgress(actual, target, status, _percent(actual, target))
