"""
Persistent history of planned routes, backed by SQLite.

Keeps the most recent searches (10 by default), newest first. A search
identical to a stored one in start, end, travel mode and preference is not
stored again.
"""

import logging
import sqlite3
import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from ..config.routing_config import RoutingConfig
from ..data.models import RoutingPreference, TravelMode

logger = logging.getLogger(__name__)


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass(frozen=True)
class SavedRoute:
    """One history entry; `timestamp` is milliseconds since the epoch."""
    start_location: str
    end_location: str
    travel_mode: TravelMode
    preference: RoutingPreference
    timestamp: int = field(default_factory=_now_ms)


class RouteHistoryStore:
    """
    Route history in a SQLite database file.

    Each operation opens its own connection, so one store can be shared by
    request handlers.
    """

    def __init__(self, db_path: Optional[Union[str, Path]] = None,
                 config: Optional[RoutingConfig] = None):
        """
        Initialize the history store.

        Args:
            db_path: SQLite database file (if None, uses config.history_db_path)
            config: Routing configuration parameters
        """
        self.config = config or RoutingConfig()
        self.db_path = Path(db_path if db_path is not None else self.config.history_db_path)
        self.limit = self.config.history_limit

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self._init_database()
        logger.info(f"RouteHistoryStore initialized at {self.db_path} (limit {self.limit})")

    def _init_database(self):
        """Initialize the SQLite table for saved routes."""
        with self._get_db_connection() as conn:
            conn.execute('''
                CREATE TABLE IF NOT EXISTS saved_routes (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    start_location TEXT NOT NULL,
                    end_location TEXT NOT NULL,
                    travel_mode TEXT NOT NULL,
                    preference TEXT NOT NULL,
                    timestamp INTEGER NOT NULL
                )
            ''')
            conn.commit()

    @contextmanager
    def _get_db_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def save(self, entry: SavedRoute) -> bool:
        """
        Store a search at the front of the history.

        Args:
            entry: Search to store

        Returns:
            True if stored, False if an identical search was already present
        """
        if not entry.start_location or not entry.end_location:
            logger.debug("Not saving route without start and end text")
            return False

        with self._get_db_connection() as conn:
            duplicate = conn.execute('''
                SELECT 1 FROM saved_routes
                WHERE start_location = ? AND end_location = ?
                  AND travel_mode = ? AND preference = ?
                LIMIT 1
            ''', (entry.start_location, entry.end_location,
                  entry.travel_mode.value, entry.preference.value)).fetchone()

            if duplicate:
                logger.debug(f"Route {entry.start_location} -> {entry.end_location} already saved")
                return False

            conn.execute('''
                INSERT INTO saved_routes
                    (start_location, end_location, travel_mode, preference, timestamp)
                VALUES (?, ?, ?, ?, ?)
            ''', (entry.start_location, entry.end_location,
                  entry.travel_mode.value, entry.preference.value, entry.timestamp))

            # Trim to the most recent entries
            conn.execute('''
                DELETE FROM saved_routes WHERE id NOT IN (
                    SELECT id FROM saved_routes ORDER BY id DESC LIMIT ?
                )
            ''', (self.limit,))
            conn.commit()

        logger.info(f"Saved route {entry.start_location} -> {entry.end_location}")
        return True

    def list_routes(self) -> List[SavedRoute]:
        """Get saved routes, newest first."""
        with self._get_db_connection() as conn:
            rows = conn.execute('''
                SELECT start_location, end_location, travel_mode, preference, timestamp
                FROM saved_routes ORDER BY id DESC
            ''').fetchall()

        return [
            SavedRoute(
                start_location=row['start_location'],
                end_location=row['end_location'],
                travel_mode=TravelMode(row['travel_mode']),
                preference=RoutingPreference(row['preference']),
                timestamp=row['timestamp']
            )
            for row in rows
        ]

    def delete(self, timestamp: int) -> int:
        """
        Delete saved routes with the given timestamp.

        Returns:
            Number of entries removed
        """
        with self._get_db_connection() as conn:
            cursor = conn.execute('DELETE FROM saved_routes WHERE timestamp = ?', (timestamp,))
            conn.commit()
            removed = cursor.rowcount

        logger.info(f"Deleted {removed} saved route(s) with timestamp {timestamp}")
        return removed

    def clear(self) -> None:
        """Remove every saved route."""
        with self._get_db_connection() as conn:
            conn.execute('DELETE FROM saved_routes')
            conn.commit()
        logger.info("Route history cleared")
