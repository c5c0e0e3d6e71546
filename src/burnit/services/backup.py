"""JSON backup export and import of a tracker session."""

import logging
from datetime import UTC, datetime

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from burnit.domain.entries import FoodEntry
from burnit.domain.errors import ValidationError
from burnit.domain.favorites import FavoriteFood
from burnit.domain.goals import Goal
from burnit.serialization import (
    entry_from_dict,
    entry_to_dict,
    favorite_from_dict,
    favorite_to_dict,
    goal_from_dict,
    goal_to_dict,
)
from burnit.services.validation import parse_day
from burnit.tracker import TrackerSession

INVALID_BACKUP = "Invalid backup file format"

_logger = logging.getLogger(__name__)


class BackupDay(BaseModel):
    """Entries for one day; stored totals are informational only."""

    foods: list[dict[str, object]] = Field(default_factory=list)
    totals: dict[str, float] = Field(default_factory=dict)


class BackupDocument(BaseModel):
    """Top-level backup file layout."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    tracker_data: dict[str, BackupDay] = Field(alias="trackerData")
    goals: list[dict[str, object]]
    favorites: list[dict[str, object]] = Field(default_factory=list)
    export_date: str | None = Field(default=None, alias="exportDate")


def export_backup(session: TrackerSession) -> dict[str, object]:
    """Return the whole session as a JSON-serializable document."""
    tracker_data: dict[str, object] = {}
    for day in session.ledger.days():
        ledger = session.ledger.day(day)
        tracker_data[day.isoformat()] = {
            "foods": [entry_to_dict(entry) for entry in ledger.entries],
            "totals": {
                "calories": ledger.totals.calories,
                "protein": ledger.totals.protein,
                "carbs": ledger.totals.carbs,
                "fat": ledger.totals.fat,
            },
        }
    return {
        "trackerData": tracker_data,
        "goals": [goal_to_dict(goal) for goal in session.goals.goals()],
        "favorites": [
            favorite_to_dict(favorite)
            for favorite in session.favorites.user_favorites()
        ],
        "exportDate": datetime.now(tz=UTC).isoformat(),
    }


def import_backup(session: TrackerSession, data: object) -> None:
    """Replace the session's ledger, goals and user favorites.

    Nothing is changed unless the whole document parses.
    """
    try:
        document = BackupDocument.model_validate(data)
        days: dict[str, list[FoodEntry]] = {
            parse_day(raw_day).isoformat(): [
                entry_from_dict({**food, "date": raw_day}) for food in backup_day.foods
            ]
            for raw_day, backup_day in document.tracker_data.items()
        }
        goals: list[Goal] = [goal_from_dict(goal) for goal in document.goals]
        favorites: list[FavoriteFood] = [
            favorite_from_dict(favorite) for favorite in document.favorites
        ]
    except (
        pydantic.ValidationError, ValidationError, KeyError, TypeError, ValueError
    ) as exc:
        raise ValidationError(INVALID_BACKUP) from exc

    session.ledger.clear()
    for raw_day, entries in days.items():
        session.ledger.replace_day(raw_day, entries)
    session.goals.replace_goals(goals)
    session.favorites.replace_favorites(favorites)
    _logger.info(
        "Imported backup: days=%s goals=%s favorites=%s",
        len(days),
        len(goals),
        len(favorites),
    )
