"""
Database connection management (DB-API 2.0 over sqlite3).

NOT an ORM: a pooled connection manager and an id generator.
Every store in the project (users, tasks) shares the one DatabaseManager.

Usage:
    from core.db import DatabaseManager

    with DatabaseManager.get_instance().connect() as conn:
        row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
"""

import logging
import queue
import secrets
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate an opaque 24-character hex record identifier."""
    return secrets.token_hex(12)


# =============================================================================
# DatabaseManager: connection pool singleton
# =============================================================================


class DatabaseManager:
    """
    Singleton connection pool for the application database.

    Path comes from settings (TASKS_DB_PATH) unless passed explicitly.

    Usage:
        dm = DatabaseManager.get_instance()
        with dm.connect() as conn:
            conn.execute("SELECT ...")
    """

    _instance: Optional["DatabaseManager"] = None
    _lock = threading.Lock()

    def __init__(self, db_path: Optional[Path] = None, pool_size: Optional[int] = None):
        if db_path is None or pool_size is None:
            from config.settings import get_settings
            db_settings = get_settings().database
            db_path = db_path or db_settings.path
            pool_size = pool_size or db_settings.pool_size

        self._db_path = Path(db_path)
        self._pool_size = pool_size
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._pool: queue.Queue = queue.Queue(maxsize=pool_size)

    @classmethod
    def get_instance(cls, db_path: Optional[Path] = None) -> "DatabaseManager":
        """Get or create the singleton instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = cls(db_path=db_path)
        elif db_path is not None and Path(db_path) != cls._instance.db_path:
            logger.warning(
                f"DatabaseManager already bound to {cls._instance.db_path}; "
                f"ignoring requested path {db_path}"
            )
        return cls._instance

    @classmethod
    def reset(cls):
        """Reset the singleton and drain the pool. For testing only."""
        with cls._lock:
            if cls._instance is not None:
                inst = cls._instance
                while not inst._pool.empty():
                    try:
                        inst._pool.get_nowait().close()
                    except queue.Empty:
                        break
                cls._instance = None

    # ----- connection acquisition / release -----------------------------------

    def get_connection(self) -> sqlite3.Connection:
        """Acquire a connection from the pool."""
        try:
            conn = self._pool.get_nowait()
            # Verify connection is still usable
            conn.execute("SELECT 1")
            return conn
        except queue.Empty:
            pass
        except sqlite3.Error:
            logger.debug("Discarding stale pooled connection")
            conn.close()

        conn = sqlite3.connect(str(self._db_path), check_same_thread=False, timeout=10)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def release_connection(self, conn):
        """Return a connection to the pool."""
        try:
            self._pool.put_nowait(conn)
        except queue.Full:
            conn.close()

    @contextmanager
    def connect(self):
        """Context manager: acquire → yield → commit/rollback → release."""
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            self.release_connection(conn)

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.connect() as conn:
                conn.execute("SELECT 1")
            return True
        except sqlite3.Error as e:
            logger.warning(f"Database ping failed: {e}")
            return False

    @property
    def db_path(self) -> Path:
        """Return the SQLite database path."""
        return self._db_path
