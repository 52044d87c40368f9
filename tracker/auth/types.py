"""
Auth domain types - no dependencies on other auth modules.

NOTE: Keep this minimal. Only add types here if they are:
1. Used by 3+ auth submodules, AND
2. Would otherwise cause circular imports
"""
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """User identity from database (immutable)."""
    id: str
    username: str
    email: str
    password_hash: str
    created_at: str

    def public_dict(self) -> dict:
        """Fields safe to return to clients (never the password hash)."""
        return {"id": self.id, "username": self.username, "email": self.email}


@dataclass(frozen=True)
class TokenClaims:
    """Decoded JWT payload (immutable)."""
    user_id: str
    email: str
    iat: datetime
    exp: datetime
