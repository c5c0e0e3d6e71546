"""Domain models for favorite food templates."""

from dataclasses import dataclass
from datetime import date
from uuid import uuid4

from burnit.domain.entries import DEFAULT_UNIT, FoodEntry
from burnit.domain.nutrition import SearchResult


@dataclass(frozen=True)
class FavoriteFood:
    """A reusable, date-independent food template."""

    id: str
    name: str
    calories: float
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    quantity: float = 1.0
    unit: str = DEFAULT_UNIT
    usda_id: str | None = None
    preset: bool = False

    def to_entry(self, day: date, meal_type: str = "snack") -> FoodEntry:
        """Return a dated draft entry built from this template."""
        return FoodEntry(
            name=self.name,
            calories=self.calories,
            day=day,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            quantity=self.quantity,
            unit=self.unit,
            meal_type=meal_type,
            usda_id=self.usda_id,
        )


def favorite_from_entry(entry: FoodEntry) -> FavoriteFood:
    """Create a user favorite from a logged entry."""
    favorite_id = (
        str(entry.persisted_id) if entry.persisted_id is not None else uuid4().hex
    )
    return FavoriteFood(
        id=favorite_id,
        name=entry.name,
        calories=entry.calories,
        protein=entry.protein,
        carbs=entry.carbs,
        fat=entry.fat,
        quantity=entry.quantity,
        unit=entry.unit,
        usda_id=entry.usda_id,
    )


def favorite_from_search(result: SearchResult) -> FavoriteFood:
    """Create a user favorite from a nutrition search result."""
    return FavoriteFood(
        id=f"usda-{result.fdc_id}",
        name=result.name,
        calories=result.calories,
        protein=result.protein,
        carbs=result.carbs,
        fat=result.fat,
        unit=result.serving_size or DEFAULT_UNIT,
        usda_id=str(result.fdc_id),
    )


PRESET_FAVORITES: tuple[FavoriteFood, ...] = tuple(
    FavoriteFood(
        id=f"preset-{preset_id}",
        name=name,
        calories=calories,
        protein=protein,
        preset=True,
    )
    for preset_id, name, calories, protein in (
        (15, "Yogurt & Beef", 365, 48),
        (8, "Mexican Toppings", 40, 2),
        (9, "Protein Coffee", 130, 30),
        (5, "Protein Bar", 190, 16),
        (12, "Protein Shake", 200, 38),
        (13, "Tortilla Soup 480g", 260, 22),
        (4, "Eggs & Chicken", 640, 47),
        (7, "Chobani Flip", 165, 9),
        (2, "Cottage Cheese", 220, 25),
        (1, "Dessert", 260, 4),
        (19, "4 eggs", 280, 24),
        (3, "Chicken Wrap", 460, 44),
        (18, "Canned Chicken", 210, 46),
        (20, "Ground Beef 4oz", 180, 25),
        (16, "Yogurt 170g", 100, 19),
        (14, "Chicken Meatballs", 160, 17),
    )
)
