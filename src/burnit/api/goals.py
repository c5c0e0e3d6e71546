"""Daily goal endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from burnit.api.schemas import GoalRequest
from burnit.serialization import goal_to_dict

if TYPE_CHECKING:
    from burnit.containers import AppContainer

router = APIRouter(prefix="/goals", tags=["goals"])


@router.get("")
async def list_goals(request: Request) -> list[dict[str, object]]:
    container: AppContainer = request.app.state.container
    return [goal_to_dict(goal) for goal in container.food_log_service.list_goals()]


@router.get("/{day}")
async def get_goal(day: str, request: Request) -> dict[str, object]:
    """Return the goal for a day, falling back to the default."""
    container: AppContainer = request.app.state.container
    return goal_to_dict(container.food_log_service.get_goal(day))


@router.post("", status_code=status.HTTP_201_CREATED)
async def set_goal(body: GoalRequest, request: Request) -> dict[str, object]:
    """Insert or replace the goal for a day."""
    container: AppContainer = request.app.state.container
    goal = container.food_log_service.set_goal(body.model_dump(exclude_unset=True))
    return {**goal_to_dict(goal), "message": "Goals updated successfully"}
