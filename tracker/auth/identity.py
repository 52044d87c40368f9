"""
User identity management: credential store, registration, and login.

Handles:
- UserStore: persistence of identity records (create, lookup by email / id)
- register_user: uniqueness checks, hashing, persistence
- authenticate_user: email + password verification
"""
import logging
import sqlite3

from flask import current_app

from core.db import DatabaseManager, new_id
from core.errors import AuthenticationError, ConflictError
from core.timestamps import isonow
from .passwords import hash_password, verify_password
from .types import UserRecord

logger = logging.getLogger(__name__)

EMAIL_TAKEN = "Email already registered"
USERNAME_TAKEN = "Username already taken"
INVALID_CREDENTIALS = "Invalid credentials"


def _row_to_user(row) -> UserRecord:
    return UserRecord(
        id=row["id"],
        username=row["username"],
        email=row["email"],
        password_hash=row["password_hash"],
        created_at=row["created_at"],
    )


# =============================================================================
# Credential Store
# =============================================================================

class UserStore:
    """SQLite-backed store of user identity records.

    Username and email are unique at the database level; records are never
    updated or deleted here.
    """

    def __init__(self, db: DatabaseManager):
        self._db = db

    def create(self, username: str, email: str, password_hash: str) -> UserRecord:
        """Insert a new identity record.

        Raises:
            ConflictError: username or email already present (email wins
                when both collide)
        """
        user = UserRecord(
            id=new_id(),
            username=username,
            email=email,
            password_hash=password_hash,
            created_at=isonow(),
        )
        try:
            with self._db.connect() as conn:
                conn.execute(
                    "INSERT INTO users (id, username, email, password_hash, created_at) "
                    "VALUES (?, ?, ?, ?, ?)",
                    (user.id, user.username, user.email, user.password_hash, user.created_at),
                )
        except sqlite3.IntegrityError as e:
            # A concurrent insert may have won the race; report the same
            # message the pre-check would have produced
            if self.find_by_email(email) is not None or "users.email" in str(e):
                raise ConflictError(EMAIL_TAKEN)
            raise ConflictError(USERNAME_TAKEN)
        return user

    def find_by_email(self, email: str) -> UserRecord | None:
        with self._db.connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        return _row_to_user(row) if row else None

    def find_by_username(self, username: str) -> UserRecord | None:
        with self._db.connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE username = ?", (username,)).fetchone()
        return _row_to_user(row) if row else None

    def find_by_id(self, user_id: str) -> UserRecord | None:
        with self._db.connect() as conn:
            row = conn.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        return _row_to_user(row) if row else None


def get_user_store() -> UserStore:
    """Return the UserStore registered on the current app."""
    return current_app.extensions["user_store"]


# =============================================================================
# Registration / Authentication
# =============================================================================

def register_user(store: UserStore, username: str, email: str, password: str) -> UserRecord:
    """Create a new account.

    Email collisions are reported ahead of username collisions.

    Raises:
        ConflictError: email or username already taken
    """
    if store.find_by_email(email) is not None:
        raise ConflictError(EMAIL_TAKEN)
    if store.find_by_username(username) is not None:
        raise ConflictError(USERNAME_TAKEN)

    user = store.create(username, email, hash_password(password))
    logger.info(f"User registered: {user.username}", extra={'user': user.id})
    return user


def authenticate_user(store: UserStore, email: str, password: str) -> UserRecord:
    """Verify email + password.

    Unknown email and wrong password produce the same error so callers
    cannot probe which accounts exist.

    Raises:
        AuthenticationError: credentials do not match an account
    """
    user = store.find_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS)
    return user
