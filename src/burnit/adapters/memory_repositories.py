"""In-memory store used for local development and tests."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime

from burnit.domain.entries import FoodEntry, Persisted
from burnit.domain.goals import Goal
from burnit.services.food_log import EntryRepository, GoalRepository
from burnit.services.validation import apply_patch


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """Dict-backed entry store with sequential integer ids."""

    entries: dict[int, FoodEntry] = field(default_factory=dict)
    next_id: int = 1

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        now = datetime.now(tz=UTC)
        created = replace(
            entry, key=Persisted(self.next_id), created_at=now, updated_at=now
        )
        self.entries[self.next_id] = created
        self.next_id += 1
        return created

    def get_entry(self, entry_id: int) -> FoodEntry | None:
        return self.entries.get(entry_id)

    def list_entries(
        self,
        day: date | None = None,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        return [
            entry
            for _, entry in sorted(self.entries.items())
            if (day is None or entry.day == day)
            and (meal_type is None or entry.meal_type == meal_type)
            and (is_favorite is None or entry.is_favorite == is_favorite)
        ]

    def update_entry(self, entry_id: int, changes: dict[str, object]) -> bool:
        current = self.entries.get(entry_id)
        if current is None:
            return False
        updated = apply_patch(current, changes)
        self.entries[entry_id] = replace(updated, updated_at=datetime.now(tz=UTC))
        return True

    def delete_entry(self, entry_id: int) -> bool:
        return self.entries.pop(entry_id, None) is not None


@dataclass
class InMemoryGoalRepository(GoalRepository):
    """Dict-backed goal store keyed by day."""

    goals: dict[date, Goal] = field(default_factory=dict)

    def list_goals(self) -> list[Goal]:
        return [self.goals[day] for day in sorted(self.goals, reverse=True)]

    def get_goal(self, day: date) -> Goal | None:
        return self.goals.get(day)

    def upsert_goal(self, goal: Goal) -> Goal:
        if goal.day is None:
            raise ValueError("Goal day is required")
        self.goals[goal.day] = goal
        return goal
