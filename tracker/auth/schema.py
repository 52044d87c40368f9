"""
Auth database schema initialization.

IMPORTANT: initialize() should ONLY be called by:
- tracker/app.py at startup
- Test fixtures

Never call schema initialization from feature code (routes, decorators, etc.).
"""
import logging

from core.db import DatabaseManager

logger = logging.getLogger(__name__)


def _init_database(db: DatabaseManager):
    """Create the users table and its uniqueness indexes."""
    with db.connect() as conn:
        conn.execute("""
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                username TEXT NOT NULL,
                email TEXT NOT NULL,
                password_hash TEXT NOT NULL,
                created_at TEXT NOT NULL
            )
        """)
        conn.execute("CREATE UNIQUE INDEX IF NOT EXISTS ux_users_username ON users (username)")
        conn.execute("CREATE UNIQUE INDEX IF NOT EXISTS ux_users_email ON users (email)")


def initialize(db: DatabaseManager):
    """Initialize the users schema.

    Call this once from the app factory before the task schema, which
    references users(id).
    """
    _init_database(db)
    logger.info(f"User database initialized: {db.db_path}")
