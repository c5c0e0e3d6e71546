"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from burnit.adapters.fdc_client import HttpxFdcClient
from burnit.adapters.memory_repositories import (
    InMemoryEntryRepository,
    InMemoryGoalRepository,
)
from burnit.adapters.sqlite_database import SqliteDatabase
from burnit.adapters.sqlite_repositories import (
    SqliteEntryRepository,
    SqliteGoalRepository,
)
from burnit.adapters.supabase_repositories import (
    SupabaseEntryRepository,
    SupabaseGoalRepository,
)
from burnit.config import Settings
from burnit.services.cache import InMemoryCache
from burnit.services.food_log import EntryRepository, FoodLogService, GoalRepository
from burnit.services.nutrition import NutritionService


@dataclass
class Repositories:
    """The configured entry store and how to release it."""

    entries: EntryRepository
    goals: GoalRepository
    close: Callable[[], None]


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    food_log_service: FoodLogService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_repositories(settings: Settings) -> Repositories:
    """Create the entry store selected by ``settings.store_backend``."""
    if settings.store_backend == "memory":
        return Repositories(
            entries=InMemoryEntryRepository(),
            goals=InMemoryGoalRepository(),
            close=lambda: None,
        )
    if settings.store_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required "
                "for the supabase store"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return Repositories(
            entries=SupabaseEntryRepository(client),
            goals=SupabaseGoalRepository(client),
            close=lambda: None,
        )
    database = SqliteDatabase(settings.database_path).open()
    return Repositories(
        entries=SqliteEntryRepository(database),
        goals=SqliteGoalRepository(database),
        close=database.close,
    )


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    repositories = build_repositories(resolved_settings)
    food_log_service = FoodLogService(
        entries=repositories.entries,
        goals=repositories.goals,
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
    )

    async def close_resources() -> None:
        await fdc_client.close()
        repositories.close()

    return AppContainer(
        settings=resolved_settings,
        food_log_service=food_log_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
