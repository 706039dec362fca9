"""SQLite key/value store for persisted tracker state."""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from pydantic import ValidationError

from ..exceptions import StorageError
from ..models.metrics import DailyMetrics, daily_metrics_from_dict, daily_metrics_to_dict
from ..models.workouts import WorkoutState

logger = logging.getLogger(__name__)


DAILY_METRICS_KEY = "daily-metrics"
WORKOUTS_KEY = "workouts"


class StateStore:
    """Stores JSON documents under string keys.

    Each save replaces the whole value for its key (last write wins).
    """

    def __init__(self, db_path: str = "fittrack.db"):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _init_db(self):
        """Initialize database tables."""
        with self._get_connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS app_state (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        try:
            conn = sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def load(self, key: str) -> Optional[Any]:
        """Load the value stored under ``key``, or None if nothing is stored.

        Raises:
            StorageError: If the stored value is not valid JSON
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT value FROM app_state WHERE key = ?", (key,)
            ).fetchone()

        if not row:
            return None

        try:
            return json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(
                f"Stored value for '{key}' is not valid JSON",
                key=key,
                details={"reason": str(e)},
                integrity=True,
            ) from e

    def save(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``."""
        payload = json.dumps(value, sort_keys=True)
        with self._get_connection() as conn:
            conn.execute("""
                INSERT OR REPLACE INTO app_state (key, value, updated_at)
                VALUES (?, ?, ?)
            """, (key, payload, datetime.now().isoformat()))
        logger.debug(f"Saved '{key}' ({len(payload)} bytes)")

    def delete(self, key: str) -> None:
        with self._get_connection() as conn:
            conn.execute("DELETE FROM app_state WHERE key = ?", (key,))

    def keys(self) -> List[str]:
        with self._get_connection() as conn:
            rows = conn.execute("SELECT key FROM app_state ORDER BY key").fetchall()
        return [row["key"] for row in rows]

    # Typed helpers for the tracker's own documents

    def load_daily_metrics(self) -> DailyMetrics:
        data = self.load(DAILY_METRICS_KEY)
        try:
            return daily_metrics_from_dict(data)
        except (ValidationError, AttributeError) as e:
            raise StorageError(
                "Stored daily metrics are malformed",
                key=DAILY_METRICS_KEY,
                details={"reason": str(e)},
                integrity=True,
            ) from e

    def save_daily_metrics(self, metrics: DailyMetrics) -> None:
        self.save(DAILY_METRICS_KEY, daily_metrics_to_dict(metrics))

    def load_workout_state(self) -> WorkoutState:
        """Load workout state, seeding the default lifts on first use."""
        data = self.load(WORKOUTS_KEY)
        if data is None:
            return WorkoutState.default()
        try:
            return WorkoutState.model_validate(data)
        except ValidationError as e:
            raise StorageError(
                "Stored workout state is malformed",
                key=WORKOUTS_KEY,
                details={"reason": str(e)},
                integrity=True,
            ) from e

    def save_workout_state(self, state: WorkoutState) -> None:
        self.save(WORKOUTS_KEY, state.to_dict())

    def get_stats(self) -> dict:
        """Get database statistics."""
        with self._get_connection() as conn:
            row = conn.execute("""
                SELECT COUNT(*) as cnt, MAX(updated_at) as last_saved
                FROM app_state
            """).fetchone()

        return {
            "keys": row["cnt"],
            "last_saved": row["last_saved"],
            "db_path": str(self.db_path),
        }
