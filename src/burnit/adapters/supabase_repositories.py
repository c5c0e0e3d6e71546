"""Supabase implementation of the entry and goal stores."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime

import httpx
from supabase import Client, PostgrestAPIError

from burnit.domain.entries import FoodEntry, Persisted
from burnit.domain.errors import NetworkError, ServerError
from burnit.domain.goals import Goal
from burnit.services.food_log import EntryRepository, GoalRepository

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase-backed repository for the ``foods`` table."""

    client: Client

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Insert an entry and return the stored row."""
        response = _execute(self.client.table("foods").insert(_entry_payload(entry)))
        if not response.data:
            raise ServerError("Failed to create food entry")
        return _parse_entry(response.data[0])

    def get_entry(self, entry_id: int) -> FoodEntry | None:
        """Return an entry by id, if present."""
        response = _execute(
            self.client.table("foods").select("*").eq("id", entry_id).limit(1)
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_entries(
        self,
        day: date | None = None,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        """Return entries matching the filters in insertion order."""
        query = self.client.table("foods").select("*")
        if day is not None:
            query = query.eq("date", day.isoformat())
        if meal_type is not None:
            query = query.eq("meal_type", meal_type)
        if is_favorite is not None:
            query = query.eq("is_favorite", is_favorite)
        response = _execute(query.order("id", desc=False))
        return [_parse_entry(row) for row in response.data or []]

    def update_entry(self, entry_id: int, changes: dict[str, object]) -> bool:
        """Update supplied columns; report whether a row matched."""
        payload = {
            key: value.isoformat() if isinstance(value, date) else value
            for key, value in changes.items()
        }
        payload["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = _execute(
            self.client.table("foods").update(payload).eq("id", entry_id)
        )
        return bool(response.data)

    def delete_entry(self, entry_id: int) -> bool:
        """Delete an entry; report whether a row matched."""
        response = _execute(self.client.table("foods").delete().eq("id", entry_id))
        return bool(response.data)


@dataclass
class SupabaseGoalRepository(GoalRepository):
    """Supabase-backed repository for the ``daily_goals`` table."""

    client: Client

    def list_goals(self) -> list[Goal]:
        response = _execute(
            self.client.table("daily_goals").select("*").order("date", desc=True)
        )
        return [_parse_goal(row) for row in response.data or []]

    def get_goal(self, day: date) -> Goal | None:
        response = _execute(
            self.client.table("daily_goals")
            .select("*")
            .eq("date", day.isoformat())
            .limit(1)
        )
        if not response.data:
            return None
        return _parse_goal(response.data[0])

    def upsert_goal(self, goal: Goal) -> Goal:
        if goal.day is None:
            raise ValueError("Goal day is required")
        response = _execute(
            self.client.table("daily_goals").upsert(
                {
                    "date": goal.day.isoformat(),
                    "calories": goal.calories,
                    "protein": goal.protein,
                    "carbs": goal.carbs,
                    "fat": goal.fat,
                },
                on_conflict="date",
            )
        )
        if not response.data:
            raise ServerError("Failed to save goal")
        return _parse_goal(response.data[0])


def _execute(query):  # type: ignore[no-untyped-def]
    """Run a query builder, translating driver failures into tracker errors."""
    try:
        return query.execute()
    except PostgrestAPIError as exc:
        _logger.exception("Supabase request failed")
        raise ServerError(str(exc.message or exc)) from exc
    except httpx.HTTPError as exc:
        raise NetworkError(f"Supabase unreachable: {exc}") from exc


def _entry_payload(entry: FoodEntry) -> dict[str, object]:
    return {
        "name": entry.name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "date": entry.day.isoformat(),
        "meal_type": entry.meal_type,
        "is_favorite": entry.is_favorite,
        "usda_id": entry.usda_id,
    }


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    return FoodEntry(
        key=Persisted(int(row["id"])),
        name=str(row.get("name", "")),
        calories=float(row.get("calories") or 0.0),
        day=date.fromisoformat(str(row["date"])),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        quantity=float(row.get("quantity") or 1.0),
        unit=str(row.get("unit") or "serving"),
        meal_type=str(row.get("meal_type") or "snack"),
        is_favorite=bool(row.get("is_favorite")),
        usda_id=row.get("usda_id"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _parse_goal(row: dict[str, object]) -> Goal:
    return Goal(
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        day=date.fromisoformat(str(row["date"])),
    )
