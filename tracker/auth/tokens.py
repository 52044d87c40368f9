"""
JWT session token issuing and verification.

Tokens are stateless: the signature and the embedded expiry are the only
things checked. There is no server-side revocation, so logging out is a
client-side delete and a captured token stays valid until it expires.
"""
import logging
from datetime import datetime, timedelta, timezone

import jwt
from flask import current_app, request

from core.errors import InvalidTokenError
from .config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRATION_DAYS
from .types import TokenClaims, UserRecord

logger = logging.getLogger(__name__)

_INVALID_MESSAGE = "Invalid or expired token"


class TokenIssuer:
    """Mints and verifies signed bearer tokens with a fixed lifetime.

    One instance is created per app (see tracker.app) and shared by the
    auth routes and the jwt_required decorator.
    """

    def __init__(
        self,
        secret: str = JWT_SECRET,
        algorithm: str = JWT_ALGORITHM,
        lifetime: timedelta = timedelta(days=JWT_EXPIRATION_DAYS),
    ):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._lifetime = lifetime

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user: UserRecord) -> str:
        """Create a signed token embedding the user's id and email.

        Args:
            user: Identity the token is issued for

        Returns:
            Encoded JWT
        """
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user.id,
            "email": user.email,
            "iat": now,
            "exp": now + self._lifetime,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Decode and validate a token.

        Malformed, tampered, and expired tokens all raise the same
        InvalidTokenError so callers cannot tell them apart.

        Raises:
            InvalidTokenError: token cannot be trusted
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            raise InvalidTokenError(_INVALID_MESSAGE)
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid token: {e}")
            raise InvalidTokenError(_INVALID_MESSAGE)

        user_id = payload.get("userId")
        email = payload.get("email")
        if not isinstance(user_id, str) or not isinstance(email, str):
            raise InvalidTokenError(_INVALID_MESSAGE)

        return TokenClaims(
            user_id=user_id,
            email=email,
            iat=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


def get_token_issuer() -> TokenIssuer:
    """Return the TokenIssuer registered on the current app."""
    return current_app.extensions["token_issuer"]


def get_token_from_request() -> str | None:
    """Extract JWT token from Authorization header.

    Returns:
        Token string or None if not present
    """
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        token = auth_header[7:].strip()
        return token or None
    return None
