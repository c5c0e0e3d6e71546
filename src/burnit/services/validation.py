"""Validation and normalization of entry, patch and goal payloads."""

import math
from dataclasses import replace
from datetime import date

from burnit.domain.entries import (
    DEFAULT_MEAL_TYPE,
    DEFAULT_UNIT,
    MEAL_TYPES,
    FoodEntry,
)
from burnit.domain.errors import ValidationError
from burnit.domain.goals import Goal

ENTRY_REQUIRED_MESSAGE = "Name, calories, and date are required"
GOAL_REQUIRED_MESSAGE = "Calories and date are required"

_NUMERIC_FIELDS = ("calories", "protein", "carbs", "fat", "quantity")
_PATCH_FIELDS = frozenset(
    {
        "name",
        "calories",
        "protein",
        "carbs",
        "fat",
        "quantity",
        "unit",
        "date",
        "meal_type",
        "is_favorite",
        "usda_id",
    }
)


def parse_day(value: object) -> date:
    """Parse a YYYY-MM-DD value into a date."""
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            pass
    raise ValidationError(f"Invalid date: {value!r} (expected YYYY-MM-DD)")


def parse_new_entry(payload: dict[str, object]) -> FoodEntry:
    """Validate a create payload and return a draft entry."""
    name = payload.get("name")
    calories = payload.get("calories")
    raw_day = payload.get("date")
    if not isinstance(name, str) or not name.strip() or calories is None or not raw_day:
        raise ValidationError(ENTRY_REQUIRED_MESSAGE)
    return FoodEntry(
        name=name.strip(),
        calories=_number("calories", calories),
        day=parse_day(raw_day),
        protein=_number("protein", payload.get("protein"), default=0.0),
        carbs=_number("carbs", payload.get("carbs"), default=0.0),
        fat=_number("fat", payload.get("fat"), default=0.0),
        quantity=_number("quantity", payload.get("quantity"), default=1.0),
        unit=str(payload.get("unit") or DEFAULT_UNIT),
        meal_type=_meal_type(payload.get("meal_type") or DEFAULT_MEAL_TYPE),
        is_favorite=bool(payload.get("is_favorite", False)),
        usda_id=_optional_text(payload.get("usda_id")),
    )


def validate_entry(entry: FoodEntry) -> FoodEntry:
    """Re-check an already constructed entry and return it normalized."""
    if not isinstance(entry.name, str) or not entry.name.strip():
        raise ValidationError(ENTRY_REQUIRED_MESSAGE)
    numbers = {
        field_name: _number(field_name, getattr(entry, field_name))
        for field_name in _NUMERIC_FIELDS
    }
    return replace(
        entry,
        name=entry.name.strip(),
        meal_type=_meal_type(entry.meal_type),
        **numbers,
    )


def normalize_patch(patch: dict[str, object]) -> dict[str, object]:
    """Return only the supplied fields, validated. None means "keep"."""
    unknown = set(patch) - _PATCH_FIELDS
    if unknown:
        raise ValidationError(f"Unknown fields: {', '.join(sorted(unknown))}")
    normalized: dict[str, object] = {}
    for key, value in patch.items():
        if value is None:
            continue
        if key == "name":
            if not isinstance(value, str) or not value.strip():
                raise ValidationError("Name must not be empty")
            normalized[key] = value.strip()
        elif key in _NUMERIC_FIELDS:
            normalized[key] = _number(key, value)
        elif key == "date":
            normalized[key] = parse_day(value)
        elif key == "meal_type":
            normalized[key] = _meal_type(value)
        elif key == "is_favorite":
            normalized[key] = bool(value)
        else:
            normalized[key] = str(value)
    return normalized


def apply_patch(entry: FoodEntry, patch: dict[str, object]) -> FoodEntry:
    """Merge a normalized patch into an entry; unsupplied fields are kept."""
    changes = dict(patch)
    if "date" in changes:
        changes["day"] = changes.pop("date")
    return replace(entry, **changes)


def parse_goal(payload: dict[str, object]) -> Goal:
    """Validate a goal payload."""
    calories = payload.get("calories")
    raw_day = payload.get("date")
    if calories is None or not raw_day:
        raise ValidationError(GOAL_REQUIRED_MESSAGE)
    return validate_goal(
        Goal(
            calories=_number("calories", calories),
            protein=_number("protein", payload.get("protein"), default=0.0),
            carbs=_number("carbs", payload.get("carbs"), default=0.0),
            fat=_number("fat", payload.get("fat"), default=0.0),
            day=parse_day(raw_day),
        )
    )


def validate_goal(goal: Goal) -> Goal:
    """Goals need a positive calorie target and non-negative macros."""
    calories = _number("calories", goal.calories)
    if calories <= 0:
        raise ValidationError("Calories goal must be positive")
    for field_name in ("protein", "carbs", "fat"):
        _number(field_name, getattr(goal, field_name))
    return goal


def _number(field_name: str, value: object, default: float | None = None) -> float:
    if value is None and default is not None:
        return default
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        raise ValidationError(f"{field_name} must be a number")
    try:
        number = float(value)
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be a number") from exc
    if not math.isfinite(number) or number < 0:
        raise ValidationError(f"{field_name} must be a non-negative number")
    return number


def _meal_type(value: object) -> str:
    if value not in MEAL_TYPES:
        raise ValidationError(f"meal_type must be one of: {', '.join(MEAL_TYPES)}")
    return str(value)


def _optional_text(value: object) -> str | None:
    if value is None or value == "":
        return None
    return str(value)
