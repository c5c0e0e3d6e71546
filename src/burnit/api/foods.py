"""Food entry and daily summary endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from burnit.api.schemas import FoodCreateRequest, FoodUpdateRequest
from burnit.serialization import entry_to_dict, summary_to_dict

if TYPE_CHECKING:
    from burnit.containers import AppContainer

router = APIRouter(tags=["foods"])


@router.get("/foods")
async def list_foods(
    request: Request,
    date: str | None = None,
    meal_type: str | None = None,
    is_favorite: bool | None = None,
) -> list[dict[str, object]]:
    """List entries, optionally filtered by date, meal type and favorite flag."""
    container: AppContainer = request.app.state.container
    entries = container.food_log_service.list_entries(
        day=date, meal_type=meal_type, is_favorite=is_favorite
    )
    return [entry_to_dict(entry) for entry in entries]


@router.get("/foods/{food_id}")
async def get_food(food_id: int, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return entry_to_dict(container.food_log_service.get_entry(food_id))


@router.post("/foods", status_code=status.HTTP_201_CREATED)
async def create_food(body: FoodCreateRequest, request: Request) -> dict[str, object]:
    """Create an entry; name, calories and date are required."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.create_entry(body.model_dump(exclude_unset=True))
    return entry_to_dict(entry)


@router.put("/foods/{food_id}")
async def update_food(
    food_id: int, body: FoodUpdateRequest, request: Request
) -> dict[str, object]:
    """Merge supplied fields into an entry."""
    container: AppContainer = request.app.state.container
    container.food_log_service.update_entry(
        food_id, body.model_dump(exclude_unset=True)
    )
    return {"id": food_id, "message": "Food updated successfully"}


@router.delete("/foods/{food_id}")
async def delete_food(food_id: int, request: Request) -> dict[str, str]:
    container: AppContainer = request.app.state.container
    container.food_log_service.delete_entry(food_id)
    return {"message": "Food deleted successfully"}


@router.get("/summary/{day}")
async def daily_summary(day: str, request: Request) -> dict[str, object]:
    """Entry count and macro totals for a day (zeros when empty)."""
    container: AppContainer = request.app.state.container
    return summary_to_dict(container.food_log_service.summary(day))
