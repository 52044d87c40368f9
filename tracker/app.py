"""
Flask Application Factory.

Creates and configures the Flask app: logging, extensions, error handlers,
the shared database, the per-app service objects (user store, task store,
token issuer), and the route blueprints.

Usage:
    gunicorn -c tracker/gunicorn.conf.py "tracker.app:create_app()"
"""

import logging
import time
import uuid

from dotenv import load_dotenv
from flask import Flask, g, request

load_dotenv()

logger = logging.getLogger(__name__)

QUIET_PATHS = ('/healthz', '/readyz')


def create_app(config=None):
    """Create and configure the Flask application.

    Args:
        config: Optional dict of config overrides (e.g. {'TESTING': True}).
            DATABASE_PATH points the app at a specific SQLite file and
            TOKEN_ISSUER replaces the default TokenIssuer.

    Returns:
        Configured Flask app instance.
    """
    app = Flask(__name__, static_folder=None)

    if config:
        app.config.update(config)

    # Configure logging
    from tracker.logging_config import configure_logging
    configure_logging(app)

    # Initialize extensions (CORS)
    from tracker.extensions import init_extensions
    init_extensions(app)

    # Register error handlers for APIError hierarchy
    from core.errors import register_error_handlers
    register_error_handlers(app)

    # Database, schema, and per-app services
    _init_services(app)

    # Register blueprints
    _register_blueprints(app)

    # Register middleware
    _register_middleware(app)

    return app


def _init_services(app):
    """Create the database-backed stores and token issuer for this app.

    Handlers reach them through app.extensions rather than module globals.
    """
    from core.db import DatabaseManager
    from core.task_store import TaskStore, init_task_schema
    from tracker.auth import TokenIssuer, UserStore, init_database

    db = DatabaseManager.get_instance(db_path=app.config.get('DATABASE_PATH'))
    init_database(db)
    init_task_schema(db)

    app.extensions['db'] = db
    app.extensions['user_store'] = UserStore(db)
    app.extensions['task_store'] = TaskStore(db)
    app.extensions['token_issuer'] = app.config.get('TOKEN_ISSUER') or TokenIssuer()


def _register_blueprints(app):
    """Register all route blueprints."""
    from tracker.routes import auth_bp, health_bp, tasks_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(tasks_bp)


def _register_middleware(app):
    """Register request tracking and security middleware."""

    @app.before_request
    def before_request_tracking():
        """Assign request ID and start the timer."""
        g.request_id = request.headers.get('X-Request-ID', str(uuid.uuid4())[:8])
        g.start_time = time.time()

    @app.after_request
    def after_request_tracking(response):
        """Log request completion with timing and add security headers."""
        duration_ms = 0
        if hasattr(g, 'start_time'):
            duration_ms = (time.time() - g.start_time) * 1000

        if hasattr(g, 'request_id'):
            response.headers['X-Request-ID'] = g.request_id

        log_level = logging.WARNING if response.status_code >= 400 else logging.INFO
        if request.path in QUIET_PATHS:
            log_level = logging.DEBUG

        logger.log(
            log_level,
            f"{request.method} {request.path} -> {response.status_code} ({duration_ms:.1f}ms)",
            extra={
                'request_id': getattr(g, 'request_id', 'unknown'),
                'method': request.method,
                'endpoint': request.path,
                'status_code': response.status_code,
                'duration_ms': round(duration_ms, 2),
                'remote_addr': request.remote_addr,
                'user': getattr(g, 'current_user_id', None),
            }
        )

        # Security headers
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Content-Security-Policy'] = "default-src 'none'; frame-ancestors 'none'"
        response.headers['Cache-Control'] = 'no-store'

        return response
