"""Food log service backing the REST API."""

import logging
from dataclasses import dataclass, replace
from datetime import date
from typing import Protocol

from burnit.domain.entries import DailySummary, FoodEntry, compute_totals
from burnit.domain.errors import NotFoundError
from burnit.domain.goals import DEFAULT_GOAL, Goal
from burnit.services.validation import (
    normalize_patch,
    parse_day,
    parse_goal,
    parse_new_entry,
)

FOOD_NOT_FOUND = "Food not found"

_logger = logging.getLogger(__name__)


class EntryRepository(Protocol):
    """Persistence interface for food entries."""

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Insert an entry and return it with its persisted key."""

    def get_entry(self, entry_id: int) -> FoodEntry | None:
        """Return an entry by id, if present."""

    def list_entries(
        self,
        day: date | None = None,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        """Return entries matching every supplied filter, oldest first."""

    def update_entry(self, entry_id: int, changes: dict[str, object]) -> bool:
        """Apply changes to an entry. Return False when it does not exist."""

    def delete_entry(self, entry_id: int) -> bool:
        """Delete an entry. Return False when it does not exist."""


class GoalRepository(Protocol):
    """Persistence interface for per-day goals."""

    def list_goals(self) -> list[Goal]:
        """Return all stored goals, newest day first."""

    def get_goal(self, day: date) -> Goal | None:
        """Return the goal stored for a day, if any."""

    def upsert_goal(self, goal: Goal) -> Goal:
        """Insert or replace the goal for the goal's day."""


@dataclass
class FoodLogService:
    """Validates requests and delegates to the configured store."""

    entries: EntryRepository
    goals: GoalRepository

    def create_entry(self, payload: dict[str, object]) -> FoodEntry:
        """Validate and persist a new entry."""
        entry = parse_new_entry(payload)
        created = self.entries.create_entry(entry)
        _logger.info("Created food entry id=%s day=%s", created.persisted_id, entry.day)
        return created

    def get_entry(self, entry_id: int) -> FoodEntry:
        """Return an entry or raise NotFoundError."""
        entry = self.entries.get_entry(entry_id)
        if entry is None:
            raise NotFoundError(FOOD_NOT_FOUND)
        return entry

    def list_entries(
        self,
        day: date | str | None = None,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        """List entries with optional filters."""
        resolved_day = parse_day(day) if day else None
        return self.entries.list_entries(
            day=resolved_day, meal_type=meal_type or None, is_favorite=is_favorite
        )

    def update_entry(self, entry_id: int, patch: dict[str, object]) -> None:
        """Merge supplied fields into an entry; unset fields are preserved."""
        changes = normalize_patch(patch)
        if not self.entries.update_entry(entry_id, changes):
            raise NotFoundError(FOOD_NOT_FOUND)

    def delete_entry(self, entry_id: int) -> None:
        """Delete an entry or raise NotFoundError."""
        if not self.entries.delete_entry(entry_id):
            raise NotFoundError(FOOD_NOT_FOUND)

    def summary(self, day: date | str) -> DailySummary:
        """Return the entry count and totals for a day."""
        resolved_day = parse_day(day)
        entries = self.entries.list_entries(day=resolved_day)
        return DailySummary(
            day=resolved_day,
            entries_count=len(entries),
            totals=compute_totals(entries),
        )

    def list_goals(self) -> list[Goal]:
        """Return every stored goal."""
        return self.goals.list_goals()

    def get_goal(self, day: date | str) -> Goal:
        """Return the goal for a day, or the default when none is stored."""
        resolved_day = parse_day(day)
        return self.goals.get_goal(resolved_day) or replace(
            DEFAULT_GOAL, day=resolved_day
        )

    def set_goal(self, payload: dict[str, object]) -> Goal:
        """Validate and upsert the goal for a day."""
        goal = parse_goal(payload)
        return self.goals.upsert_goal(goal)
