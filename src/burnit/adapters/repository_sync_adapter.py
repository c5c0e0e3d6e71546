"""Embedded sync adapter that talks to the store without going over HTTP."""

from dataclasses import dataclass
from datetime import date

from burnit.domain.entries import FoodEntry
from burnit.domain.favorites import FavoriteFood, favorite_from_entry
from burnit.domain.goals import Goal
from burnit.serialization import entry_create_payload, goal_to_dict
from burnit.services.food_log import FoodLogService
from burnit.services.sync import SyncAdapter


@dataclass
class RepositorySyncAdapter(SyncAdapter):
    """Runs tracker writes straight through a ``FoodLogService``."""

    service: FoodLogService

    async def create_entry(self, entry: FoodEntry) -> FoodEntry:
        return self.service.create_entry(entry_create_payload(entry))

    async def update_entry(self, entry_id: int, patch: dict[str, object]) -> None:
        self.service.update_entry(entry_id, patch)

    async def delete_entry(self, entry_id: int) -> None:
        self.service.delete_entry(entry_id)

    async def list_entries(
        self,
        day: date,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        return self.service.list_entries(
            day=day, meal_type=meal_type, is_favorite=is_favorite
        )

    async def get_goal(self, day: date) -> Goal:
        return self.service.get_goal(day)

    async def set_goal(self, goal: Goal) -> Goal:
        return self.service.set_goal(goal_to_dict(goal))

    async def list_favorites(self) -> list[FavoriteFood]:
        return [
            favorite_from_entry(entry)
            for entry in self.service.list_entries(is_favorite=True)
        ]
