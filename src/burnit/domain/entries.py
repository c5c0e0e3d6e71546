"""Domain models for logged food entries."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

MEAL_TYPES = ("breakfast", "lunch", "dinner", "snack")
DEFAULT_MEAL_TYPE = "snack"
DEFAULT_UNIT = "serving"
MACRO_FIELDS = ("calories", "protein", "carbs", "fat")


@dataclass(frozen=True)
class Pending:
    """Local identity of an entry whose save has not been confirmed."""

    temp_id: str


@dataclass(frozen=True)
class Persisted:
    """Identity assigned by the store once an entry is saved."""

    id: int


EntryKey = Pending | Persisted


@dataclass(frozen=True)
class FoodEntry:
    """A single logged food consumption tied to one calendar day."""

    name: str
    calories: float
    day: date
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    quantity: float = 1.0
    unit: str = DEFAULT_UNIT
    meal_type: str = DEFAULT_MEAL_TYPE
    is_favorite: bool = False
    usda_id: str | None = None
    key: EntryKey | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def persisted_id(self) -> int | None:
        """Return the store id, or None while the entry is not persisted."""
        if isinstance(self.key, Persisted):
            return self.key.id
        return None


@dataclass(frozen=True)
class Totals:
    """Summed macros for a set of entries."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0


@dataclass
class DayLedger:
    """Entries logged for one day with their derived totals."""

    day: date
    entries: list[FoodEntry] = field(default_factory=list)
    totals: Totals = field(default_factory=Totals)


def compute_totals(entries: Iterable[FoodEntry]) -> Totals:
    """Fold entries into totals. Always a full recompute."""
    calories = protein = carbs = fat = 0.0
    for entry in entries:
        calories += entry.calories
        protein += entry.protein
        carbs += entry.carbs
        fat += entry.fat
    return Totals(calories=calories, protein=protein, carbs=carbs, fat=fat)


@dataclass(frozen=True)
class DailySummary:
    """Entry count and totals for one day."""

    day: date
    entries_count: int
    totals: Totals
