"""
Flask route decorators for authentication.

Provides:
- jwt_required: Require a valid bearer token for a still-existing account
"""
from functools import wraps

from flask import g

from core.errors import AuthenticationError
from .identity import get_user_store
from .tokens import get_token_from_request, get_token_issuer


def jwt_required(f):
    """Decorator to require valid JWT token for endpoint.

    Status codes follow the browser client's expectations:
    - 401 when no bearer token is sent
    - 403 when the token is malformed, tampered, or expired
    - 401 when the token is valid but its account no longer exists

    Sets g.current_user (UserRecord) and g.current_user_id on success.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        token = get_token_from_request()
        if not token:
            raise AuthenticationError("Access token required")

        claims = get_token_issuer().verify(token)

        # Re-resolve on every request; a signature alone does not prove
        # the account still exists
        user = get_user_store().find_by_id(claims.user_id)
        if user is None:
            raise AuthenticationError("User not found")

        g.current_user = user
        g.current_user_id = user.id
        return f(*args, **kwargs)
    return decorated
