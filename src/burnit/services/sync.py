"""Boundary between the tracker core and wherever entries are persisted."""

from datetime import date
from typing import Protocol

from burnit.domain.entries import FoodEntry
from burnit.domain.favorites import FavoriteFood
from burnit.domain.goals import Goal


class SyncAdapter(Protocol):
    """Async persistence interface used by the ledger, goals and favorites.

    Every call either returns or raises one of ``NetworkError``,
    ``NotFoundError``, ``ValidationError`` or ``ServerError``. Implementations
    own timeouts so that a pending call always settles.
    """

    async def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Persist a draft entry and return it with its persisted key."""

    async def update_entry(self, entry_id: int, patch: dict[str, object]) -> None:
        """Merge supplied fields into a persisted entry."""

    async def delete_entry(self, entry_id: int) -> None:
        """Delete a persisted entry."""

    async def list_entries(
        self,
        day: date,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        """Return persisted entries for a day."""

    async def get_goal(self, day: date) -> Goal:
        """Return the goal for a day (the default when none is stored)."""

    async def set_goal(self, goal: Goal) -> Goal:
        """Upsert a goal."""

    async def list_favorites(self) -> list[FavoriteFood]:
        """Return remotely stored favorites."""
