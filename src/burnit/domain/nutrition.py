"""Nutrition lookup domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SearchResult:
    """A food found in USDA FoodData Central with per-serving macros."""

    fdc_id: int
    name: str
    brand: str | None
    calories: float
    protein: float
    carbs: float
    fat: float
    serving_size: str | None
