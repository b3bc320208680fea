from __future__ import annotations

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from tarrier.errors import InvalidHabitName, StoreError

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 64

SCHEMA = """
CREATE TABLE IF NOT EXISTS habits (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name VARCHAR(64) NOT NULL UNIQUE
);

CREATE TABLE IF NOT EXISTS tracks (
    habit_id INTEGER NOT NULL REFERENCES habits (id) ON DELETE CASCADE,
    mark DATE NOT NULL,

    CONSTRAINT unique_habit_mark PRIMARY KEY (habit_id, mark)
        ON CONFLICT IGNORE
);
"""


def normalize_name(name: str) -> str:
    cleaned = name.strip().lower()
    if not cleaned:
        raise InvalidHabitName("habit name must not be empty")
    if len(cleaned) > MAX_NAME_LENGTH:
        raise InvalidHabitName(
            f"habit name longer than {MAX_NAME_LENGTH} characters: {cleaned!r}"
        )
    return cleaned


class HabitStore:
    """Per-habit completion marks kept in a SQLite file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "HabitStore":
        self.open()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("store is not open")
        return self._conn

    def open(self) -> None:
        if self._conn is not None:
            return
        fresh = not self.path.exists()
        conn: Optional[sqlite3.Connection] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.path))
            conn.execute("PRAGMA foreign_keys = ON;")
            conn.executescript(SCHEMA)
            conn.commit()
        except (OSError, sqlite3.Error) as exc:
            if conn is not None:
                conn.close()
            raise StoreError(f"cannot open database {self.path}: {exc}") from exc
        if fresh:
            logger.debug("Created database %s", self.path)
        self._conn = conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def mark(self, habit: str, day: date) -> None:
        """Record ``habit`` as completed on ``day``. Repeating a mark is a no-op."""
        name = normalize_name(habit)
        if isinstance(day, datetime):
            day = day.date()
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT OR IGNORE INTO habits (name) VALUES (?)",
                    (name,),
                )
                self.conn.execute(
                    """
                    INSERT INTO tracks (habit_id, mark) VALUES (
                        (SELECT id FROM habits WHERE name = ?),
                        ?
                    )
                    """,
                    (name, day.isoformat()),
                )
        except sqlite3.Error as exc:
            raise StoreError(f"cannot mark {name!r} on {day}: {exc}") from exc
        logger.debug("Marked %s on %s", name, day)

    def mark_today(self, habit: str, today: Optional[date] = None) -> None:
        self.mark(habit, today or date.today())

    def marked_days(self, habit: str, year: int) -> set[int]:
        """Day-of-year ordinals (1-based) marked for ``habit`` in ``year``."""
        rows = self._query(
            """
            SELECT CAST(strftime('%j', mark) AS INTEGER) FROM tracks
            JOIN habits ON habits.id = tracks.habit_id
            WHERE strftime('%Y', mark) = ?
            AND habits.name = ?
            """,
            (f"{year:04d}", normalize_name(habit)),
        )
        return {row[0] for row in rows}

    def completion_dates(self, habit: str) -> list[date]:
        rows = self._query(
            """
            SELECT mark FROM tracks
            JOIN habits ON habits.id = tracks.habit_id
            WHERE habits.name = ?
            ORDER BY mark
            """,
            (normalize_name(habit),),
        )
        return [date.fromisoformat(row[0]) for row in rows]

    def habit_names(self) -> list[str]:
        rows = self._query("SELECT name FROM habits ORDER BY name", ())
        return [row[0] for row in rows]

    def _query(self, sql: str, params: tuple) -> list[tuple]:
        try:
            return self.conn.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            raise StoreError(f"query failed: {exc}") from exc
