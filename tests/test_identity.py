"""Tests for the user store, registration, and login."""

import pytest

from core.errors import AuthenticationError, ConflictError
from tracker.auth import authenticate_user, register_user
from tracker.auth.identity import EMAIL_TAKEN, INVALID_CREDENTIALS, USERNAME_TAKEN


class TestUserStore:
    def test_create_and_lookup(self, user_store, make_user):
        user = make_user()
        assert len(user.id) == 24
        assert user_store.find_by_id(user.id) == user
        assert user_store.find_by_email("alice@example.com") == user
        assert user_store.find_by_username("alice") == user

    def test_lookup_missing_returns_none(self, user_store):
        assert user_store.find_by_id("0" * 24) is None
        assert user_store.find_by_email("nobody@example.com") is None

    def test_duplicate_email_at_store_level(self, make_user):
        make_user()
        with pytest.raises(ConflictError, match=EMAIL_TAKEN):
            make_user(username="alice2")

    def test_duplicate_username_at_store_level(self, make_user):
        make_user()
        with pytest.raises(ConflictError, match=USERNAME_TAKEN):
            make_user(email="alice2@example.com")

    def test_public_dict_omits_hash(self, make_user):
        public = make_user().public_dict()
        assert set(public) == {"id", "username", "email"}


class TestRegisterUser:
    def test_password_is_hashed(self, user_store):
        user = register_user(user_store, "alice", "alice@example.com", "s3cret!")
        assert user.password_hash != "s3cret!"
        assert "s3cret!" not in user.password_hash

    def test_email_conflict_reported_first(self, user_store):
        register_user(user_store, "alice", "alice@example.com", "pw")
        register_user(user_store, "bob", "bob@example.com", "pw")
        # Both taken: email wins
        with pytest.raises(ConflictError, match=EMAIL_TAKEN):
            register_user(user_store, "bob", "alice@example.com", "pw")

    def test_username_conflict(self, user_store):
        register_user(user_store, "alice", "alice@example.com", "pw")
        with pytest.raises(ConflictError, match=USERNAME_TAKEN):
            register_user(user_store, "alice", "other@example.com", "pw")

    def test_values_stored_as_sent(self, user_store):
        user = register_user(user_store, "Alice", "Alice@Example.com", "pw")
        assert user_store.find_by_email("Alice@Example.com").username == "Alice"
        assert user_store.find_by_email("alice@example.com") is None
        assert user.email == "Alice@Example.com"


class TestAuthenticateUser:
    def test_correct_credentials(self, user_store):
        created = register_user(user_store, "alice", "alice@example.com", "s3cret!")
        assert authenticate_user(user_store, "alice@example.com", "s3cret!").id == created.id

    def test_wrong_password_and_unknown_email_are_indistinguishable(self, user_store):
        register_user(user_store, "alice", "alice@example.com", "s3cret!")
        with pytest.raises(AuthenticationError) as wrong_pw:
            authenticate_user(user_store, "alice@example.com", "nope")
        with pytest.raises(AuthenticationError) as unknown:
            authenticate_user(user_store, "ghost@example.com", "s3cret!")
        assert wrong_pw.value.message == unknown.value.message == INVALID_CREDENTIALS
        assert wrong_pw.value.status_code == unknown.value.status_code == 401
