"""
Tracker authentication module.

Public API:
- Decorators: jwt_required
- Tokens: TokenIssuer, get_token_issuer, get_token_from_request
- Identity: UserStore, get_user_store, register_user, authenticate_user
- Passwords: hash_password, verify_password

Import Rules:
- External callers: Use `from tracker.auth import X` (this facade)
- Internal auth modules: Use `from .submodule import X` (direct imports)
"""

# =============================================================================
# Decorators
# =============================================================================
from .decorators import jwt_required

# =============================================================================
# Tokens
# =============================================================================
from .tokens import (
    TokenIssuer,
    get_token_issuer,
    get_token_from_request,
)

# =============================================================================
# Identity
# =============================================================================
from .identity import (
    UserStore,
    get_user_store,
    register_user,
    authenticate_user,
)

# =============================================================================
# Password Utilities
# =============================================================================
from .passwords import hash_password, verify_password

from .types import UserRecord, TokenClaims

# =============================================================================
# Schema Initialization (for tracker/app.py)
# =============================================================================
from .schema import initialize as init_database

__all__ = [
    "jwt_required",
    "TokenIssuer",
    "get_token_issuer",
    "get_token_from_request",
    "UserStore",
    "get_user_store",
    "register_user",
    "authenticate_user",
    "hash_password",
    "verify_password",
    "UserRecord",
    "TokenClaims",
    "init_database",
]
