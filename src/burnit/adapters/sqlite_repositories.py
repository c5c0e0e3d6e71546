"""SQLite implementation of the entry and goal stores."""

import sqlite3
from dataclasses import dataclass
from datetime import date, datetime

from burnit.adapters.sqlite_database import SqliteDatabase
from burnit.domain.entries import FoodEntry, Persisted
from burnit.domain.goals import Goal
from burnit.services.food_log import EntryRepository, GoalRepository

_ENTRY_COLUMNS = (
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
)


@dataclass
class SqliteEntryRepository(EntryRepository):
    """Stores entries in the ``foods`` table."""

    database: SqliteDatabase

    def create_entry(self, entry: FoodEntry) -> FoodEntry:
        """Insert an entry and read it back."""
        placeholders = ", ".join("?" for _ in _ENTRY_COLUMNS)
        with self.database.transaction() as cursor:
            cursor.execute(
                f"INSERT INTO foods ({', '.join(_ENTRY_COLUMNS)}) "
                f"VALUES ({placeholders})",
                _entry_params(entry),
            )
            cursor.execute("SELECT * FROM foods WHERE id = ?", (cursor.lastrowid,))
            row = cursor.fetchone()
        return _parse_entry(row)

    def get_entry(self, entry_id: int) -> FoodEntry | None:
        """Return an entry by id."""
        with self.database.transaction() as cursor:
            cursor.execute("SELECT * FROM foods WHERE id = ?", (entry_id,))
            row = cursor.fetchone()
        return _parse_entry(row) if row else None

    def list_entries(
        self,
        day: date | None = None,
        meal_type: str | None = None,
        is_favorite: bool | None = None,
    ) -> list[FoodEntry]:
        """Return entries matching the filters in insertion order."""
        clauses: list[str] = []
        params: list[object] = []
        if day is not None:
            clauses.append("date = ?")
            params.append(day.isoformat())
        if meal_type is not None:
            clauses.append("meal_type = ?")
            params.append(meal_type)
        if is_favorite is not None:
            clauses.append("is_favorite = ?")
            params.append(1 if is_favorite else 0)
        where = f" WHERE {' AND '.join(clauses)}" if clauses else ""
        with self.database.transaction() as cursor:
            cursor.execute(f"SELECT * FROM foods{where} ORDER BY id ASC", params)
            rows = cursor.fetchall()
        return [_parse_entry(row) for row in rows]

    def update_entry(self, entry_id: int, changes: dict[str, object]) -> bool:
        """Update supplied columns and bump ``updated_at``."""
        columns = [column for column in _ENTRY_COLUMNS if column in changes]
        assignments = [f"{column} = ?" for column in columns]
        assignments.append("updated_at = CURRENT_TIMESTAMP")
        params = [_column_value(column, changes[column]) for column in columns]
        with self.database.transaction() as cursor:
            cursor.execute(
                f"UPDATE foods SET {', '.join(assignments)} WHERE id = ?",
                [*params, entry_id],
            )
            return cursor.rowcount > 0

    def delete_entry(self, entry_id: int) -> bool:
        """Delete an entry by id."""
        with self.database.transaction() as cursor:
            cursor.execute("DELETE FROM foods WHERE id = ?", (entry_id,))
            return cursor.rowcount > 0


@dataclass
class SqliteGoalRepository(GoalRepository):
    """Stores goals in the ``daily_goals`` table, one row per date."""

    database: SqliteDatabase

    def list_goals(self) -> list[Goal]:
        with self.database.transaction() as cursor:
            cursor.execute("SELECT * FROM daily_goals ORDER BY date DESC")
            rows = cursor.fetchall()
        return [_parse_goal(row) for row in rows]

    def get_goal(self, day: date) -> Goal | None:
        with self.database.transaction() as cursor:
            cursor.execute(
                "SELECT * FROM daily_goals WHERE date = ?", (day.isoformat(),)
            )
            row = cursor.fetchone()
        return _parse_goal(row) if row else None

    def upsert_goal(self, goal: Goal) -> Goal:
        if goal.day is None:
            raise ValueError("Goal day is required")
        with self.database.transaction() as cursor:
            cursor.execute(
                "INSERT INTO daily_goals (calories, protein, carbs, fat, date) "
                "VALUES (?, ?, ?, ?, ?) "
                "ON CONFLICT(date) DO UPDATE SET "
                "calories = excluded.calories, protein = excluded.protein, "
                "carbs = excluded.carbs, fat = excluded.fat, "
                "updated_at = CURRENT_TIMESTAMP",
                (
                    goal.calories,
                    goal.protein,
                    goal.carbs,
                    goal.fat,
                    goal.day.isoformat(),
                ),
            )
        return goal


def _entry_params(entry: FoodEntry) -> list[object]:
    values = {
        "name": entry.name,
        "calories": entry.calories,
        "protein": entry.protein,
        "carbs": entry.carbs,
        "fat": entry.fat,
        "quantity": entry.quantity,
        "unit": entry.unit,
        "date": entry.day,
        "meal_type": entry.meal_type,
        "is_favorite": entry.is_favorite,
        "usda_id": entry.usda_id,
    }
    return [_column_value(column, values[column]) for column in _ENTRY_COLUMNS]


def _column_value(column: str, value: object) -> object:
    if column == "date" and isinstance(value, date):
        return value.isoformat()
    if column == "is_favorite":
        return 1 if value else 0
    return value


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def _parse_entry(row: sqlite3.Row) -> FoodEntry:
    return FoodEntry(
        key=Persisted(int(row["id"])),
        name=str(row["name"]),
        calories=float(row["calories"]),
        day=date.fromisoformat(row["date"]),
        protein=float(row["protein"] or 0.0),
        carbs=float(row["carbs"] or 0.0),
        fat=float(row["fat"] or 0.0),
        quantity=float(row["quantity"] if row["quantity"] is not None else 1.0),
        unit=str(row["unit"] or "serving"),
        meal_type=str(row["meal_type"] or "snack"),
        is_favorite=bool(row["is_favorite"]),
        usda_id=row["usda_id"],
        created_at=_parse_timestamp(row["created_at"]),
        updated_at=_parse_timestamp(row["updated_at"]),
    )


def _parse_goal(row: sqlite3.Row) -> Goal:
    return Goal(
        calories=float(row["calories"]),
        protein=float(row["protein"] or 0.0),
        carbs=float(row["carbs"] or 0.0),
        fat=float(row["fat"] or 0.0),
        day=date.fromisoformat(row["date"]),
    )
