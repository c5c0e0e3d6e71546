"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field, replace
from datetime import date

import pytest

from burnit.adapters.fdc_client import FdcClient
from burnit.adapters.memory_repositories import (
    InMemoryEntryRepository,
    InMemoryGoalRepository,
)
from burnit.config import Settings
from burnit.containers import AppContainer
from burnit.domain.entries import FoodEntry, Persisted
from burnit.domain.errors import NotFoundError
from burnit.domain.favorites import FavoriteFood
from burnit.domain.goals import DEFAULT_GOAL, Goal
from burnit.services.cache import InMemoryCache
from burnit.services.food_log import FoodLogService
from burnit.services.nutrition import NutritionService
from burnit.services.sync import SyncAdapter
from burnit.services.validation import apply_patch
from burnit.tracker import TrackerSession

DAY = date(2024, 1, 15)
OTHER_DAY = date(2024, 1, 16)


@dataclass
class FakeSyncAdapter(SyncAdapter):
    """In-memory sync adapter with scripted failures and an optional gate.

    ``fail(method, exc)`` queues an exception for the next call of ``method``.
    When ``gate`` is set, every call waits on it before doing anything, which
    lets a test observe state while a write is in flight.
    """

    entries: dict[int, FoodEntry] = field(default_factory=dict)
    goals: dict[date, Goal] = field(default_factory=dict)
    favorites: list[FavoriteFood] = field(default_factory=list)
    failures: dict[str, list[BaseException]] = field(default_factory=dict)
    gate: asyncio.Event | None = None
    calls: list[str] = field(default_factory=list)
    next_id: int = 1

    def fail(self, method: str, exc: BaseException) -> None:
        self.failures.setdefault(method, []).append(exc)

    async def _enter(self, method: str) -> None:
        self.calls.append(method)
        if self.gate is not None:
            await self.gate.wait()
        queued = self.failures.get(method)
        if queued:
            raise queued.pop(0)

    async def create_entry(self, entry: FoodEntry) -> FoodEntry:
        await self._enter("create_entry")
        stored = replace(entry, key=Persisted(self.next_id))
        self.entries[self.next_id] = stored
        self.next_id += 1
        return stored

    async def update_entry(self, entry_id: int, patch: dict[str, object]) -> None:
        await self._enter("update_entry")
        if entry_id not in self.entries:
            raise NotFoundError("Food not found")
        self.entries[entry_id] = apply_patch(self.entries[entry_id], patch)

    async def delete_entry(self, entry_id: int) -> None:
        await self._enter("delete_entry")
        if self.entries.pop(entry_id, None) is None:
            raise NotFoundError("Food not found")

    async def list_entries(
        self,
        day: date,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        await self._enter("list_entries")
        return [
            entry
            for _, entry in sorted(self.entries.items())
            if entry.day == day
            and (meal_type is None or entry.meal_type == meal_type)
            and (is_favorite is None or entry.is_favorite == is_favorite)
        ]

    async def get_goal(self, day: date) -> Goal:
        await self._enter("get_goal")
        return self.goals.get(day) or replace(DEFAULT_GOAL, day=day)

    async def set_goal(self, goal: Goal) -> Goal:
        await self._enter("set_goal")
        if goal.day is not None:
            self.goals[goal.day] = goal
        return goal

    async def list_favorites(self) -> list[FavoriteFood]:
        await self._enter("list_favorites")
        return list(self.favorites)


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client returning a fixed payload, optionally failing first."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171077,
                    "description": "Chicken breast, roasted",
                    "brandOwner": "Kirkland",
                    "servingSize": 85,
                    "servingSizeUnit": "g",
                    "foodNutrients": [
                        {"nutrientId": 1008, "value": 140.4},
                        {"nutrientId": 1003, "value": 26.3},
                        {"nutrientId": 1004, "value": 3.1},
                        {"nutrientId": 1005, "value": 0},
                    ],
                }
            ]
        }
    )
    errors: list[Exception] = field(default_factory=list)
    search_calls: int = 0

    async def search_foods(self, query: str, page_size: int = 15) -> dict[str, object]:
        self.search_calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.search_payload


def food_payload(**overrides: object) -> dict[str, object]:
    """Return a valid create payload for ``DAY``."""
    payload: dict[str, object] = {
        "name": "Oatmeal",
        "calories": 150,
        "protein": 5,
        "carbs": 27,
        "fat": 3,
        "date": DAY.isoformat(),
        "meal_type": "breakfast",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        store_backend="memory",
        fdc_api_key="fdc-key",
        cors_origins="*",
    )


@pytest.fixture
def sync() -> FakeSyncAdapter:
    return FakeSyncAdapter()


@pytest.fixture
def session(sync: FakeSyncAdapter) -> TrackerSession:
    return TrackerSession.create(sync)


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def food_log_service() -> FoodLogService:
    return FoodLogService(
        entries=InMemoryEntryRepository(),
        goals=InMemoryGoalRepository(),
    )


@pytest.fixture
def container(
    settings: Settings,
    food_log_service: FoodLogService,
    fdc_client: FakeFdcClient,
) -> AppContainer:
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        food_log_service=food_log_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
