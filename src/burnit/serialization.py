"""JSON-shaped conversions shared by the API, the HTTP adapter and backups."""

from datetime import date, datetime

from burnit.domain.entries import DailySummary, FoodEntry, Pending, Persisted
from burnit.domain.favorites import FavoriteFood
from burnit.domain.goals import Goal
from burnit.domain.nutrition import SearchResult
from burnit.services.validation import parse_day


def entry_to_dict(entry: FoodEntry) -> dict[str, object]:
    """Serialize an entry the way the REST API returns it."""
    payload: dict[str, object] = {
        "id": entry.persisted_id,
        "name": entry.name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "date": entry.day.isoformat(),
        "meal_type": entry.meal_type,
        "is_favorite": entry.is_favorite,
        "usda_id": entry.usda_id,
        "created_at": _timestamp(entry.created_at),
        "updated_at": _timestamp(entry.updated_at),
    }
    if isinstance(entry.key, Pending):
        payload["temp_id"] = entry.key.temp_id
    return payload


def entry_from_dict(payload: dict[str, object]) -> FoodEntry:
    """Parse an entry produced by ``entry_to_dict`` or the REST API."""
    key: Pending | Persisted | None = None
    if payload.get("id") is not None:
        key = Persisted(int(payload["id"]))
    elif payload.get("temp_id"):
        key = Pending(str(payload["temp_id"]))
    return FoodEntry(
        key=key,
        name=str(payload.get("name", "")),
        calories=float(payload.get("calories") or 0.0),
        day=parse_day(payload.get("date")),
        protein=float(payload.get("protein") or 0.0),
        carbs=float(payload.get("carbs") or 0.0),
        fat=float(payload.get("fat") or 0.0),
        quantity=float(payload.get("quantity") or 1.0),
        unit=str(payload.get("unit") or "serving"),
        meal_type=str(payload.get("meal_type") or "snack"),
        is_favorite=bool(payload.get("is_favorite", False)),
        usda_id=_optional_str(payload.get("usda_id")),
        created_at=_parse_timestamp(payload.get("created_at")),
        updated_at=_parse_timestamp(payload.get("updated_at")),
    )


def entry_create_payload(entry: FoodEntry) -> dict[str, object]:
    """Request body for creating an entry (no identity, no timestamps)."""
    payload = entry_to_dict(entry)
    for key in ("id", "temp_id", "created_at", "updated_at"):
        payload.pop(key, None)
    return payload


def patch_to_dict(patch: dict[str, object]) -> dict[str, object]:
    return {
        key: value.isoformat() if isinstance(value, date) else value
        for key, value in patch.items()
    }


def goal_to_dict(goal: Goal) -> dict[str, object]:
    return {
        "date": goal.day.isoformat() if goal.day else None,
        "calories": goal.calories,
        "protein": goal.protein,
        "carbs": goal.carbs,
        "fat": goal.fat,
    }


def goal_from_dict(payload: dict[str, object]) -> Goal:
    raw_day = payload.get("date")
    return Goal(
        calories=float(payload.get("calories") or 0.0),
        protein=float(payload.get("protein") or 0.0),
        carbs=float(payload.get("carbs") or 0.0),
        fat=float(payload.get("fat") or 0.0),
        day=parse_day(raw_day) if raw_day else None,
    )


def summary_to_dict(summary: DailySummary) -> dict[str, object]:
    return {
        "date": summary.day.isoformat(),
        "entries_count": summary.entries_count,
        "total_calories": summary.totals.calories,
        "total_protein": summary.totals.protein,
        "total_carbs": summary.totals.carbs,
        "total_fat": summary.totals.fat,
    }


def favorite_to_dict(favorite: FavoriteFood) -> dict[str, object]:
    return {
        "id": favorite.id,
        "name": favorite.name,
        "calories": favorite.calories,
        "protein": favorite.protein,
        "carbs": favorite.carbs,
        "fat": favorite.fat,
        "quantity": favorite.quantity,
        "unit": favorite.unit,
        "usda_id": favorite.usda_id,
        "preset": favorite.preset,
    }


def search_result_to_dict(result: SearchResult) -> dict[str, object]:
    return {
        "fdc_id": result.fdc_id,
        "name": result.name,
        "brand": result.brand,
        "calories": result.calories,
        "protein": result.protein,
        "carbs": result.carbs,
        "fat": result.fat,
        "serving_size": result.serving_size,
    }


def favorite_from_dict(payload: dict[str, object]) -> FavoriteFood:
    return FavoriteFood(
        id=str(payload["id"]),
        name=str(payload.get("name", "")),
        calories=float(payload.get("calories") or 0.0),
        protein=float(payload.get("protein") or 0.0),
        carbs=float(payload.get("carbs") or 0.0),
        fat=float(payload.get("fat") or 0.0),
        quantity=float(payload.get("quantity") or 1.0),
        unit=str(payload.get("unit") or "serving"),
        usda_id=_optional_str(payload.get("usda_id")),
        preset=bool(payload.get("preset", False)),
    )


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _optional_str(value: object) -> str | None:
    return None if value is None else str(value)
