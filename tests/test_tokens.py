"""Tests for bearer token issuing and verification."""

from datetime import timedelta

import jwt
import pytest

from core.errors import InvalidTokenError
from tracker.auth import TokenIssuer, UserRecord


@pytest.fixture
def user():
    return UserRecord(
        id="a" * 24,
        username="alice",
        email="alice@example.com",
        password_hash="unused",
        created_at="2025-01-01T00:00:00.000000+00:00",
    )


@pytest.fixture
def issuer():
    return TokenIssuer(secret="unit-test-secret")


class TestTokenRoundTrip:
    def test_verify_returns_issued_identity(self, issuer, user):
        claims = issuer.verify(issuer.issue(user))
        assert claims.user_id == user.id
        assert claims.email == user.email

    def test_expiry_is_seven_days_by_default(self, user):
        issuer = TokenIssuer(secret="unit-test-secret")
        claims = issuer.verify(issuer.issue(user))
        assert claims.exp - claims.iat == timedelta(days=7)

    def test_payload_uses_client_claim_names(self, issuer, user):
        payload = jwt.decode(issuer.issue(user), "unit-test-secret", algorithms=["HS256"])
        assert set(payload) == {"userId", "email", "iat", "exp"}


class TestTokenRejection:
    """Every untrusted token fails the same way."""

    def test_tampered_token_rejected(self, issuer, user):
        token = issuer.issue(user)
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])
        with pytest.raises(InvalidTokenError, match="Invalid or expired token"):
            issuer.verify(tampered)

    def test_wrong_secret_rejected(self, user):
        token = TokenIssuer(secret="other-secret").issue(user)
        with pytest.raises(InvalidTokenError):
            TokenIssuer(secret="unit-test-secret").verify(token)

    def test_expired_token_rejected(self, user):
        expired = TokenIssuer(secret="unit-test-secret", lifetime=timedelta(seconds=-10))
        with pytest.raises(InvalidTokenError, match="Invalid or expired token"):
            expired.verify(expired.issue(user))

    def test_malformed_token_rejected(self, issuer):
        with pytest.raises(InvalidTokenError):
            issuer.verify("not-a-jwt")

    def test_missing_identity_claims_rejected(self, issuer):
        token = jwt.encode({"sub": "x", "iat": 0, "exp": 4102444800}, "unit-test-secret", algorithm="HS256")
        with pytest.raises(InvalidTokenError):
            issuer.verify(token)

    def test_invalid_token_is_403(self):
        assert InvalidTokenError("x").status_code == 403


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenIssuer(secret="")
