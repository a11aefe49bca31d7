"""SQLite match cache for provider results.

One row per (person_id, source_name, external_id). A repeat search replaces
the earlier row instead of appending, so re-running a lookup is idempotent.
A NULL (or empty) person_id marks a mention found by an open search and is
treated as a single key value.
"""
from __future__ import annotations

import signal
import sqlite3
import sys
import threading
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .exceptions import CacheWriteError
from .logging import get_logger
from .models.match import MatchRecord

logger = get_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS external_matches (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    person_id TEXT,
    source_name TEXT NOT NULL,
    external_id TEXT NOT NULL,
    url TEXT,
    title TEXT,
    snippet TEXT,
    match_score REAL NOT NULL,
    raw_json TEXT,
    searched_at TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_external_matches_key
    ON external_matches(COALESCE(person_id, ''), source_name, external_id);
CREATE INDEX IF NOT EXISTS idx_external_matches_person ON external_matches(person_id);
CREATE INDEX IF NOT EXISTS idx_external_matches_source ON external_matches(source_name);
"""


class MatchCache:
    """Persistent table of previously observed provider mentions.

    Holds a single connection for its lifetime. Each upsert runs in its own
    transaction so no reader ever sees a half-written row.
    """

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._lock = threading.Lock()
        self._conn = self._connect()
        self._init_schema()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute("PRAGMA busy_timeout=5000;")
        return conn

    def _init_schema(self) -> None:
        with self._lock:
            self._conn.executescript(SCHEMA)
            self._conn.commit()

    def upsert(
        self,
        person_id: str | None,
        source_name: str,
        external_id: str,
        url: str,
        title: str,
        snippet: str,
        match_score: float,
        raw_json: str,
    ) -> None:
        """Insert a match, replacing any row with the same natural key.

        Raises:
            CacheWriteError: If the row cannot be persisted
        """
        searched_at = datetime.now(UTC).isoformat()
        try:
            with self._lock, self._conn:
                # Same key expression as idx_external_matches_key
                self._conn.execute(
                    """
                    DELETE FROM external_matches
                    WHERE COALESCE(person_id, '') = COALESCE(?, '')
                      AND source_name = ? AND external_id = ?
                    """,
                    (person_id, source_name, external_id),
                )
                self._conn.execute(
                    """
                    INSERT INTO external_matches (
                        person_id, source_name, external_id, url, title,
                        snippet, match_score, raw_json, searched_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (person_id, source_name, external_id, url, title, snippet, match_score, raw_json, searched_at),
                )
        except sqlite3.Error as e:
            logger.error("cache_write_failed", source=source_name, external_id=external_id, error=str(e))
            raise CacheWriteError(f"Failed to cache {source_name}:{external_id}: {e}") from e

        logger.debug("cache_upsert", person_id=person_id, source=source_name, external_id=external_id)

    def query(self, person_id: str, source_name: str | None = None) -> list[MatchRecord]:
        """Get cached matches for a person, best score first.

        Without a source filter, ties are grouped by source name.
        """
        with self._lock:
            if source_name:
                rows = self._conn.execute(
                    """
                    SELECT * FROM external_matches
                    WHERE person_id = ? AND source_name = ?
                    ORDER BY match_score DESC
                    """,
                    (person_id, source_name),
                ).fetchall()
            else:
                rows = self._conn.execute(
                    """
                    SELECT * FROM external_matches
                    WHERE person_id = ?
                    ORDER BY match_score DESC, source_name
                    """,
                    (person_id,),
                ).fetchall()
        return [self._row_to_record(row) for row in rows]

    def count(self) -> int:
        with self._lock:
            row = self._conn.execute("SELECT COUNT(*) FROM external_matches").fetchone()
        return int(row[0])

    @staticmethod
    def _row_to_record(row: sqlite3.Row) -> MatchRecord:
        data: dict[str, Any] = dict(row)
        data["searched_at"] = datetime.fromisoformat(data["searched_at"])
        return MatchRecord(**data)

    def close(self) -> None:
        with self._lock:
            self._conn.close()


# --------------------------- Process-wide handle ---------------------------

_cache: MatchCache | None = None
_cache_lock = threading.Lock()


def get_match_cache(db_path: str | Path | None = None) -> MatchCache:
    """Return the process-wide cache, opening it on first use.

    ``db_path`` only matters for the call that opens the handle; it defaults
    to the configured RESEARCH_SOURCES_DB_PATH.
    """
    global _cache
    if _cache is None:
        with _cache_lock:
            if _cache is None:
                if db_path is None:
                    from .config import load_settings

                    db_path = load_settings().db_path
                _cache = MatchCache(db_path)
                logger.info("match_cache_opened", path=str(_cache.db_path))
    return _cache


def close_match_cache() -> None:
    """Close the process-wide cache if it was opened."""
    global _cache
    with _cache_lock:
        if _cache is not None:
            _cache.close()
            logger.info("match_cache_closed", path=str(_cache.db_path))
            _cache = None


def install_shutdown_handlers() -> None:
    """Close the cache and exit on SIGINT/SIGTERM."""

    def _shutdown(signum: int, frame: object) -> None:
        close_match_cache()
        sys.exit(0)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)
