"""SQLite-backed store for running activities and the OAuth token set.

Two tables live in one database file:

- ``activities``: one row per Strava activity, upserted by ``strava_id``
- ``tokens``: at most one row, pinned to ``id = 1``

The schema is created on first use.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from ..models.strava import StravaActivity, TokenRecord

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS activities (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    strava_id           INTEGER UNIQUE NOT NULL,
    name                TEXT,
    distance_meters     REAL,
    moving_time_seconds INTEGER,
    start_date          TEXT,
    type                TEXT
);

CREATE TABLE IF NOT EXISTS tokens (
    id            INTEGER PRIMARY KEY CHECK (id = 1),
    athlete_id    INTEGER,
    access_token  TEXT NOT NULL,
    refresh_token TEXT NOT NULL,
    expires_at    INTEGER NOT NULL
);
"""

UPSERT_ACTIVITY = """
INSERT INTO activities (strava_id, name, distance_meters, moving_time_seconds, start_date, type)
VALUES (?, ?, ?, ?, ?, ?)
ON CONFLICT(strava_id) DO UPDATE SET
    name = excluded.name,
    distance_meters = excluded.distance_meters,
    moving_time_seconds = excluded.moving_time_seconds,
    start_date = excluded.start_date,
    type = excluded.type
"""

UPSERT_TOKEN = """
INSERT INTO tokens (id, athlete_id, access_token, refresh_token, expires_at)
VALUES (1, ?, ?, ?, ?)
ON CONFLICT(id) DO UPDATE SET
    athlete_id = excluded.athlete_id,
    access_token = excluded.access_token,
    refresh_token = excluded.refresh_token,
    expires_at = excluded.expires_at
"""


class ActivityStore:
    """Embedded relational store owned by the running dashboard."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connect() as conn:
            conn.executescript(SCHEMA)

    # Activities

    def upsert_activity(self, activity: StravaActivity) -> None:
        with self._connect() as conn:
            conn.execute(
                UPSERT_ACTIVITY,
                (
                    activity.id,
                    activity.name,
                    activity.distance,
                    activity.moving_time,
                    activity.start_date,
                    activity.type,
                ),
            )

    def upsert_activities(self, activities: List[StravaActivity]) -> None:
        with self._connect() as conn:
            conn.executemany(
                UPSERT_ACTIVITY,
                [
                    (a.id, a.name, a.distance, a.moving_time, a.start_date, a.type)
                    for a in activities
                ],
            )

    def delete_activity(self, strava_id: int) -> bool:
        """Remove the activity with ``strava_id``; return whether a row existed."""

        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM activities WHERE strava_id = ?", (strava_id,))
            return cursor.rowcount > 0

    def get_activity(self, strava_id: int) -> Optional[StravaActivity]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM activities WHERE strava_id = ?", (strava_id,)
            ).fetchone()
        return self._row_to_activity(row) if row else None

    def list_activities(self) -> List[StravaActivity]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM activities ORDER BY start_date ASC"
            ).fetchall()
        return [self._row_to_activity(row) for row in rows]

    @staticmethod
    def _row_to_activity(row: sqlite3.Row) -> StravaActivity:
        return StravaActivity(
            id=row["strava_id"],
            name=row["name"] or "",
            distance=row["distance_meters"] or 0.0,
            moving_time=row["moving_time_seconds"] or 0,
            start_date=row["start_date"],
            type=row["type"] or "",
        )

    # Tokens

    def get_token(self) -> Optional[TokenRecord]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT athlete_id, access_token, refresh_token, expires_at FROM tokens WHERE id = 1"
            ).fetchone()
        if row is None:
            return None
        return TokenRecord(**dict(row))

    def save_token(self, token: TokenRecord) -> None:
        with self._connect() as conn:
            conn.execute(
                UPSERT_TOKEN,
                (token.athlete_id, token.access_token, token.refresh_token, token.expires_at),
            )
        logger.debug("Stored Strava token set expiring at %s", token.expires_at)

    def has_token(self) -> bool:
        return self.get_token() is not None
