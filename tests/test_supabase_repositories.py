"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

import httpx
import pytest
from supabase import PostgrestAPIError

from burnit.adapters.supabase_repositories import (
    SupabaseEntryRepository,
    SupabaseGoalRepository,
)
from burnit.domain.entries import FoodEntry, Persisted
from burnit.domain.errors import NetworkError, ServerError
from burnit.domain.goals import Goal
from tests.conftest import DAY, OTHER_DAY


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "delete": [],
            "upsert": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None
    upsert_conflict: str | None = None
    error: Exception | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(  # type: ignore[no-untyped-def]
        self, payload, on_conflict: str = ""
    ) -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.upsert_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        if self.error is not None:
            raise self.error
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(food_id: int, name: str, **overrides: object) -> dict[str, object]:
    row: dict[str, object] = {
        "id": food_id,
        "name": name,
        "calories": 100,
        "protein": 5,
        "carbs": 10,
        "fat": 2,
        "quantity": 1,
        "unit": "serving",
        "date": DAY.isoformat(),
        "meal_type": "lunch",
        "is_favorite": False,
        "usda_id": None,
        "created_at": "2024-01-15T12:00:00+00:00",
        "updated_at": "2024-01-15T12:00:00+00:00",
    }
    row.update(overrides)
    return row


def test_supabase_entry_repository_create_and_get() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("insert", [_food_row(7, "Salad")])
    foods.queue("select", [_food_row(7, "Salad")])

    repository = SupabaseEntryRepository(client)
    created = repository.create_entry(
        FoodEntry(name="Salad", calories=100, day=DAY, meal_type="lunch")
    )
    fetched = repository.get_entry(7)

    assert created.key == Persisted(7)
    assert foods.last_payload["date"] == DAY.isoformat()
    assert foods.last_payload["meal_type"] == "lunch"
    assert fetched == created
    assert ("id", 7) in foods.last_filters


def test_supabase_entry_repository_list_filters() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("select", [_food_row(1, "Salad"), _food_row(2, "Soup")])

    entries = SupabaseEntryRepository(client).list_entries(
        day=OTHER_DAY, meal_type="lunch", is_favorite=True
    )

    assert [entry.name for entry in entries] == ["Salad", "Soup"]
    assert foods.last_filters == [
        ("date", OTHER_DAY.isoformat()),
        ("meal_type", "lunch"),
        ("is_favorite", True),
    ]
    assert foods.last_order == ("id", False)


def test_supabase_entry_repository_update_and_delete() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    foods.queue("update", [_food_row(1, "Salad", calories=150)])
    foods.queue("update", [])
    foods.queue("delete", [_food_row(1, "Salad")])

    repository = SupabaseEntryRepository(client)

    assert repository.update_entry(1, {"calories": 150.0, "date": OTHER_DAY})
    assert foods.last_payload["date"] == OTHER_DAY.isoformat()
    assert "updated_at" in foods.last_payload
    assert not repository.update_entry(2, {"calories": 1.0})
    assert repository.delete_entry(1)
    assert not repository.delete_entry(1)


def test_supabase_entry_repository_missing_insert_data() -> None:
    client = FakeSupabaseClient()

    with pytest.raises(ServerError):
        SupabaseEntryRepository(client).create_entry(
            FoodEntry(name="Salad", calories=100, day=DAY)
        )


def test_supabase_goal_repository_upserts_on_date() -> None:
    client = FakeSupabaseClient()
    goals = client.table("daily_goals")
    goals.queue("upsert", [{"date": DAY.isoformat(), "calories": 1800, "protein": 120}])
    goals.queue(
        "select",
        [
            {"date": OTHER_DAY.isoformat(), "calories": 1500},
            {"date": DAY.isoformat(), "calories": 1800, "protein": 120},
        ],
    )

    repository = SupabaseGoalRepository(client)
    saved = repository.upsert_goal(Goal(calories=1800, protein=120, day=DAY))
    listed = repository.list_goals()

    assert saved == Goal(calories=1800, protein=120, day=DAY)
    assert goals.upsert_conflict == "date"
    assert goals.last_payload["date"] == DAY.isoformat()
    assert [goal.day for goal in listed] == [OTHER_DAY, DAY]
    assert goals.last_order == ("date", True)
    assert repository.get_goal(DAY) is None


def test_supabase_errors_are_translated() -> None:
    client = FakeSupabaseClient()
    foods = client.table("foods")
    repository = SupabaseEntryRepository(client)

    foods.error = PostgrestAPIError({"message": "permission denied", "code": "42501"})
    with pytest.raises(ServerError, match="permission denied"):
        repository.list_entries()

    foods.error = httpx.ConnectError("unreachable")
    with pytest.raises(NetworkError):
        repository.get_entry(1)
