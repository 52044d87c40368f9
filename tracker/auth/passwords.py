"""
Password hashing and verification.

Passwords are only ever stored as salted one-way hashes produced by
werkzeug; plaintext never reaches the database or the logs.
"""
from werkzeug.security import generate_password_hash, check_password_hash

from .config import PASSWORD_HASH_METHOD

__all__ = [
    "hash_password",
    "verify_password",
]


def hash_password(password: str) -> str:
    """Hash a password with a per-password random salt.

    Args:
        password: Plain text password

    Returns:
        Werkzeug hash string (method$salt$hash)
    """
    return generate_password_hash(password, method=PASSWORD_HASH_METHOD)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its hash.

    Args:
        password: Plain text password
        password_hash: Stored hash to check against

    Returns:
        True if password matches, False otherwise
    """
    return check_password_hash(password_hash, password)
