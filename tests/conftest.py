"""Shared pytest fixtures for task tracker tests."""
import os

import pytest

# ---------------------------------------------------------------------------
# Deterministic test environment, set BEFORE any tracker module imports.
# Auth constants are read from settings at import time.
# ---------------------------------------------------------------------------
os.environ.setdefault('TESTING', 'true')
os.environ.setdefault('JWT_SECRET', 'test-jwt-secret-for-pytest-32chars!')
os.environ.setdefault('PASSWORD_HASH_METHOD', 'pbkdf2:sha256:1000')
os.environ.setdefault('LOG_FORMAT', 'text')


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def _reset_db_singletons():
    """Reset DB singleton between tests for isolation."""
    yield
    from core.db import DatabaseManager
    DatabaseManager.reset()


@pytest.fixture
def db(tmp_path):
    """Per-test SQLite database with the users and tasks schema applied."""
    from core.db import DatabaseManager
    from core.task_store import init_task_schema
    from tracker.auth import init_database

    DatabaseManager.reset()
    dm = DatabaseManager.get_instance(db_path=tmp_path / "test_tasks.db")
    init_database(dm)
    init_task_schema(dm)
    return dm


@pytest.fixture
def user_store(db):
    from tracker.auth import UserStore
    return UserStore(db)


@pytest.fixture
def task_store(db):
    from core.task_store import TaskStore
    return TaskStore(db)


@pytest.fixture
def make_user(user_store):
    """Factory: create a user record directly in the store."""
    from tracker.auth import hash_password

    def _make(username="alice", email="alice@example.com", password="s3cret!"):
        return user_store.create(username, email, hash_password(password))
    return _make


# =============================================================================
# Flask API Test Client Fixtures
# =============================================================================

@pytest.fixture
def app(db):
    """Create Flask app for testing via the application factory.

    Depends on db so that DatabaseManager is wired to a temp DB before the
    factory asks for the singleton.
    """
    from tracker.app import create_app

    return create_app(config={
        'TESTING': True,
        'DATABASE_PATH': db.db_path,
    })


@pytest.fixture
def client(app):
    """Create Flask test client."""
    return app.test_client()


@pytest.fixture
def register(client):
    """Factory: register an account through the API and return the response."""
    def _register(username="alice", email="alice@example.com", password="s3cret!"):
        return client.post('/api/auth/register', json={
            'username': username,
            'email': email,
            'password': password,
        })
    return _register


def _bearer(response):
    return {'Authorization': f"Bearer {response.get_json()['token']}"}


@pytest.fixture
def auth_headers(register):
    """Valid bearer headers for a freshly registered user 'alice'."""
    response = register()
    assert response.status_code == 201
    return _bearer(response)


@pytest.fixture
def other_auth_headers(register):
    """Valid bearer headers for a second user 'bob'."""
    response = register(username="bob", email="bob@example.com", password="hunter22")
    assert response.status_code == 201
    return _bearer(response)
