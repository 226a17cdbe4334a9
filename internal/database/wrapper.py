"""
SQLite database wrapper for the weather cache.
This wrapper provides an abstraction layer that can be easily replaced
with other database backends in the future.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from typing import Optional

logger = logging.getLogger(__name__)

LIKE_ESCAPE_CHAR = "\\"


def escapeLikePattern(value: str) -> str:
    """Escape LIKE wildcards so ``value`` matches literally (use with ESCAPE '\\')."""
    return (
        value.replace(LIKE_ESCAPE_CHAR, LIKE_ESCAPE_CHAR * 2)
        .replace("%", LIKE_ESCAPE_CHAR + "%")
        .replace("_", LIKE_ESCAPE_CHAR + "_")
    )


class DatabaseWrapper:
    """
    A wrapper around SQLite that provides a consistent interface
    that can be easily replaced with other database backends.

    Each thread gets its own connection, so ``:memory:`` databases are
    per-thread: use a file path when the wrapper is shared between threads.
    """

    def __init__(self, dbPath: str, timeout: float = 30.0):
        """
        Initialize database wrapper and create the schema, dood!

        Args:
            dbPath: Path to SQLite database file
            timeout: Connection timeout in seconds (default: 30.0)
        """
        self.dbPath = dbPath
        self.timeout = timeout
        self._local = threading.local()
        self._lock = threading.Lock()
        logger.info(f"Initializing database wrapper, path={dbPath}")
        self._initDatabase()

    def _getConnection(self) -> sqlite3.Connection:
        """Get thread-local connection, creating it on first use"""
        if not hasattr(self._local, "connection"):
            with self._lock:
                logger.debug(f"Creating new connection to {self.dbPath}")
                self._local.connection = sqlite3.connect(
                    self.dbPath,
                    timeout=self.timeout,
                    check_same_thread=False,
                )
                self._local.connection.row_factory = sqlite3.Row

        return self._local.connection

    @contextmanager
    def getCursor(self):
        """
        Context manager for database operations

        Yields:
            sqlite3.Cursor: Database cursor with auto-commit/rollback
        """
        conn = self._getConnection()
        cursor = conn.cursor()
        try:
            yield cursor
            conn.commit()
        except Exception as e:
            conn.rollback()
            logger.error(f"Database operation failed: {e}")
            raise
        finally:
            cursor.close()

    def close(self):
        """Close connection of the current thread"""
        connection = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            del self._local.connection
            logger.debug(f"Closed connection to {self.dbPath}")

    def _initDatabase(self):
        """Create cache table if needed"""
        with self.getCursor() as cursor:
            cursor.execute(
                """
                CREATE TABLE IF NOT EXISTS cache_storage (
                    key TEXT PRIMARY KEY,
                    data TEXT NOT NULL,
                    expires_at REAL,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """
            )
            cursor.execute(
                """
                CREATE INDEX IF NOT EXISTS idx_cache_storage_expires_at
                ON cache_storage (expires_at)
            """
            )

    ###
    # Cache manipulation functions
    ###

    def getCacheEntry(self, key: str, now: float) -> Optional[str]:
        """
        Get cache entry data by key.

        Args:
            key: Cache key
            now: Current unix time, entries with expires_at <= now are ignored

        Returns:
            Stored data or None if not found, expired or on error
        """
        try:
            with self.getCursor() as cursor:
                cursor.execute(
                    """
                    SELECT data
                    FROM cache_storage
                    WHERE key = :key AND
                    (expires_at IS NULL OR expires_at > :now)
                """,
                    {"key": key, "now": now},
                )
                row = cursor.fetchone()
                return row["data"] if row else None
        except sqlite3.Error as e:
            logger.error(f"Failed to get cache entry: {e}")
            return None

    def setCacheEntry(self, key: str, data: str, expiresAt: Optional[float]) -> bool:
        """
        Store cache entry, replacing previous data and expiry.

        Args:
            key: Cache key
            data: Cache data
            expiresAt: Unix time the entry expires at, None for never

        Returns:
            bool: True if successful, False otherwise
        """
        try:
            with self.getCursor() as cursor:
                cursor.execute(
                    """
                    INSERT INTO cache_storage
                        (key, data, expires_at, created_at, updated_at)
                    VALUES
                        (:key, :data, :expiresAt, CURRENT_TIMESTAMP, CURRENT_TIMESTAMP)
                    ON CONFLICT(key) DO UPDATE SET
                        data = :data,
                        expires_at = :expiresAt,
                        updated_at = CURRENT_TIMESTAMP
                """,
                    {"key": key, "data": data, "expiresAt": expiresAt},
                )
                return True
        except sqlite3.Error as e:
            logger.error(f"Failed to set cache entry: {e}")
            return False

    def deleteCacheByPrefix(self, prefix: str) -> int:
        """
        Delete every cache entry whose key starts with prefix.

        Args:
            prefix: Key prefix, matched literally and case-sensitively

        Returns:
            Number of deleted rows (0 on error)
        """
        try:
            with self.getCursor() as cursor:
                # LIKE is case-insensitive for ASCII in SQLite, substr() keeps it exact
                cursor.execute(
                    """
                    DELETE FROM cache_storage
                    WHERE key LIKE :pattern ESCAPE '\\' AND
                    substr(key, 1, :prefixLen) = :prefix
                """,
                    {"pattern": escapeLikePattern(prefix) + "%", "prefix": prefix, "prefixLen": len(prefix)},
                )
                return cursor.rowcount
        except sqlite3.Error as e:
            logger.error(f"Failed to delete cache entries with prefix {prefix}: {e}")
            return 0

    def deleteExpiredCache(self, now: float) -> int:
        """
        Delete cache entries which expired at or before now.

        Returns:
            Number of deleted rows (0 on error)
        """
        try:
            with self.getCursor() as cursor:
                cursor.execute(
                    """
                    DELETE FROM cache_storage
                    WHERE expires_at IS NOT NULL AND expires_at <= :now
                """,
                    {"now": now},
                )
                return cursor.rowcount
        except sqlite3.Error as e:
            logger.error(f"Failed to delete expired cache entries: {e}")
            return 0

    def countCacheEntries(self) -> int:
        """Number of rows in the cache table, including not yet swept expired ones"""
        try:
            with self.getCursor() as cursor:
                cursor.execute("SELECT COUNT(*) AS cnt FROM cache_storage")
                return int(cursor.fetchone()["cnt"])
        except sqlite3.Error as e:
            logger.error(f"Failed to count cache entries: {e}")
            return 0
