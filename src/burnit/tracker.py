"""Tracker session: the state a presentation layer renders and mutates."""

from dataclasses import dataclass
from datetime import date

from burnit.domain.entries import FoodEntry, Totals
from burnit.domain.errors import NotFoundError
from burnit.domain.goals import Goal, GoalComparison
from burnit.services.favorites import FavoritesRegistry
from burnit.services.goal_tracker import GoalTracker
from burnit.services.ledger import LedgerService
from burnit.services.sync import SyncAdapter


@dataclass(frozen=True)
class DayView:
    """Everything needed to render one day."""

    day: date
    entries: list[FoodEntry]
    totals: Totals
    goal: Goal
    comparison: GoalComparison


@dataclass
class TrackerSession:
    """Ledger, goals and favorites sharing one sync adapter."""

    sync: SyncAdapter
    ledger: LedgerService
    goals: GoalTracker
    favorites: FavoritesRegistry

    @classmethod
    def create(cls, sync: SyncAdapter) -> "TrackerSession":
        return cls(
            sync=sync,
            ledger=LedgerService(sync),
            goals=GoalTracker(sync),
            favorites=FavoritesRegistry(),
        )

    async def open_day(self, day: date | str) -> DayView:
        """Pull a day's entries and goal from the adapter and return its view."""
        ledger = await self.ledger.load_day(day)
        await self.goals.load_goal(ledger.day)
        return self.view(ledger.day)

    async def load_favorites(self) -> int:
        return await self.favorites.load(self.sync)

    def view(self, day: date | str) -> DayView:
        ledger = self.ledger.day(day)
        goal = self.goals.get_goal(ledger.day)
        return DayView(
            day=ledger.day,
            entries=list(ledger.entries),
            totals=ledger.totals,
            goal=goal,
            comparison=GoalTracker.compare(ledger.totals, goal),
        )

    async def log_favorite(
        self, day: date | str, favorite_id: str, meal_type: str = "snack"
    ) -> FoodEntry:
        """Add a favorite (user or preset) to a day."""
        for favorite in self.favorites.list_favorites():
            if favorite.id == favorite_id:
                ledger = self.ledger.day(day)
                return await self.ledger.add_entry(
                    ledger.day, favorite.to_entry(ledger.day, meal_type=meal_type)
                )
        raise NotFoundError(f"Favorite {favorite_id} not found")
