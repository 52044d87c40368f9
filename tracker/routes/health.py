"""
Health check endpoints for the task tracker API.

Provides Kubernetes-compatible liveness and readiness probes. Both are
unauthenticated and logged at DEBUG by the request middleware.
"""

import logging
import os
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

logger = logging.getLogger(__name__)

# Create blueprint
health_bp = Blueprint('health', __name__)

SERVICE_NAME = "task-tracker-api"


@health_bp.route('/healthz')
def liveness():
    """
    Liveness probe - is the process running?

    Used by Kubernetes to determine if container should be restarted.
    """
    return jsonify({
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "version": os.getenv("APP_VERSION", "1.0.0"),
    })


@health_bp.route('/readyz')
def readiness():
    """
    Readiness probe - is the service ready to accept traffic?

    The database is the only dependency; if it cannot answer, report 503.
    """
    db_ok = current_app.extensions["db"].ping()
    checks = {
        "database": {"healthy": db_ok, "message": "connected" if db_ok else "connection failed"},
    }

    return jsonify({
        "status": "ok" if db_ok else "unavailable",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": checks,
    }), 200 if db_ok else 503
