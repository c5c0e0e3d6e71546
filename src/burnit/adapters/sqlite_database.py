"""SQLite database handle with an explicit open/close lifecycle."""

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from burnit.domain.errors import ServerError

_logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS foods (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    calories REAL NOT NULL,
    protein REAL DEFAULT 0,
    carbs REAL DEFAULT 0,
    fat REAL DEFAULT 0,
    quantity REAL DEFAULT 1.0,
    unit TEXT DEFAULT 'serving',
    date TEXT NOT NULL,
    meal_type TEXT DEFAULT 'snack',
    is_favorite INTEGER DEFAULT 0,
    usda_id TEXT,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS daily_goals (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    calories REAL NOT NULL,
    protein REAL DEFAULT 0,
    carbs REAL DEFAULT 0,
    fat REAL DEFAULT 0,
    date TEXT UNIQUE NOT NULL,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS foods_date_idx ON foods(date);
CREATE INDEX IF NOT EXISTS foods_meal_type_idx ON foods(meal_type);
CREATE INDEX IF NOT EXISTS foods_favorite_idx ON foods(is_favorite);
"""


@dataclass
class SqliteDatabase:
    """Owns one SQLite connection shared by the repositories."""

    path: str
    _connection: sqlite3.Connection | None = field(default=None, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def open(self) -> "SqliteDatabase":
        """Connect and make sure the schema exists."""
        if self._connection is not None:
            return self
        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)
        connection = sqlite3.connect(self.path, check_same_thread=False)
        connection.row_factory = sqlite3.Row
        connection.executescript(SCHEMA)
        self._connection = connection
        _logger.info("Connected to SQLite database at %s", self.path)
        return self

    def close(self) -> None:
        """Close the connection. Safe to call twice."""
        if self._connection is None:
            return
        self._connection.close()
        self._connection = None

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success, roll back on failure."""
        if self._connection is None:
            raise ServerError("Database is not open")
        with self._lock:
            cursor = self._connection.cursor()
            try:
                yield cursor
                self._connection.commit()
            except sqlite3.Error as exc:
                self._connection.rollback()
                _logger.exception("SQLite statement failed")
                raise ServerError(str(exc)) from exc
            except Exception:
                self._connection.rollback()
                raise
            finally:
                cursor.close()
