"""Request bodies accepted by the REST API."""

from pydantic import BaseModel, ConfigDict


class FoodCreateRequest(BaseModel):
    """Body of ``POST /foods``. Required fields are checked by the service."""

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    quantity: float | None = None
    unit: str | None = None
    date: str | None = None
    meal_type: str | None = None
    is_favorite: bool | None = None
    usda_id: str | int | None = None


class FoodUpdateRequest(FoodCreateRequest):
    """Body of ``PUT /foods/{id}``; unset or null fields are preserved."""


class GoalRequest(BaseModel):
    """Body of ``POST /goals``."""

    model_config = ConfigDict(extra="ignore")

    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None
    date: str | None = None
