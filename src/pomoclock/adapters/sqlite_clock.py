"""Local clock log backed by SQLite."""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from pomoclock.errors import TrackingError
from pomoclock.repositories import TrackingBackend

logger = logging.getLogger("pomoclock.clock")


def _now() -> datetime:
    return datetime.now().astimezone()


class SQLiteClockBackend(TrackingBackend):
    """Records clock entries for tasks in a local SQLite database."""

    def __init__(
        self,
        db_path: Path | None = None,
        clock: Callable[[], datetime] = _now,
    ):
        """Initialize the clock log."""
        if db_path is None:
            from platformdirs import user_data_dir

            data_dir = Path(user_data_dir("pomoclock"))
            db_path = data_dir / "clock.db"

        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._clock = clock
        self._init_database()

    def _init_database(self) -> None:
        """Initialize database schema."""
        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS clock_entries (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    task TEXT NOT NULL,
                    start_time TEXT NOT NULL,
                    end_time TEXT,
                    discarded INTEGER DEFAULT 0
                )
                """
            )
            conn.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_clock_entries_task
                ON clock_entries(task)
                """
            )
            conn.commit()

    def begin_tracking(self, task_ref: str) -> None:
        if not task_ref or not task_ref.strip():
            raise TrackingError("Cannot clock in without a task")
        if self.is_tracking_active():
            self.end_tracking(discard=False)

        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "INSERT INTO clock_entries (task, start_time) VALUES (?, ?)",
                (task_ref, self._clock().isoformat()),
            )
            conn.commit()
        logger.info("clocked in: %s", task_ref)

    def end_tracking(self, discard: bool = False) -> None:
        running = self._running_entry()
        if running is None:
            logger.debug("end_tracking called without a running clock")
            return

        with sqlite3.connect(self.db_path) as conn:
            conn.execute(
                "UPDATE clock_entries SET end_time = ?, discarded = ? WHERE id = ?",
                (self._clock().isoformat(), 1 if discard else 0, running["id"]),
            )
            conn.commit()
        logger.info(
            "clocked out: %s%s", running["task"], " (discarded)" if discard else ""
        )

    def is_tracking_active(self) -> bool:
        return self._running_entry() is not None

    def resolve_current_task_context(self) -> str | None:
        running = self._running_entry()
        if running is not None:
            return running["task"]

        with sqlite3.connect(self.db_path) as conn:
            row = conn.execute(
                """
                SELECT task FROM clock_entries
                WHERE discarded = 0
                ORDER BY start_time DESC, id DESC
                LIMIT 1
                """
            ).fetchone()
        return row[0] if row else None

    def extend_last_clock(self) -> dict[str, Any] | None:
        """Stretch the most recent closed entry so it ends now.

        Returns the updated entry, or None when a clock is running or
        there is nothing to extend.
        """
        if self.is_tracking_active():
            return None

        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                """
                SELECT * FROM clock_entries
                WHERE discarded = 0 AND end_time IS NOT NULL
                ORDER BY end_time DESC, id DESC
                LIMIT 1
                """
            ).fetchone()
            if row is None:
                return None

            end_time = self._clock().isoformat()
            conn.execute(
                "UPDATE clock_entries SET end_time = ? WHERE id = ?",
                (end_time, row["id"]),
            )
            conn.commit()

        entry = dict(row)
        entry["end_time"] = end_time
        return entry

    def get_recent_entries(
        self, limit: int = 20, include_discarded: bool = False
    ) -> list[dict[str, Any]]:
        """
        Get recent clock entries, newest first.

        Args:
            limit: Maximum number of entries to return
            include_discarded: Include entries whose time was discarded
        """
        query = "SELECT * FROM clock_entries"
        if not include_discarded:
            query += " WHERE discarded = 0"
        query += " ORDER BY start_time DESC, id DESC LIMIT ?"

        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            rows = conn.execute(query, (limit,)).fetchall()
        return [dict(row) for row in rows]

    def get_task_totals(self) -> dict[str, int]:
        """Total kept seconds per task over all closed entries."""
        totals: dict[str, int] = {}
        with sqlite3.connect(self.db_path) as conn:
            rows = conn.execute(
                """
                SELECT task, start_time, end_time FROM clock_entries
                WHERE discarded = 0 AND end_time IS NOT NULL
                """
            ).fetchall()

        for task, start, end in rows:
            seconds = (
                datetime.fromisoformat(end) - datetime.fromisoformat(start)
            ).total_seconds()
            totals[task] = totals.get(task, 0) + max(0, int(seconds))
        return totals

    def _running_entry(self) -> dict[str, Any] | None:
        with sqlite3.connect(self.db_path) as conn:
            conn.row_factory = sqlite3.Row
            row = conn.execute(
                """
                SELECT * FROM clock_entries
                WHERE end_time IS NULL
                ORDER BY id DESC
                LIMIT 1
                """
            ).fetchone()
        return dict(row) if row else None
