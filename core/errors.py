"""
Centralized error handling for the task tracker API.

Error Hierarchy:
- APIError (4xx): Expected errors with messages safe to expose to clients
- Anything else (5xx): logged with an error_id, never exposed to clients

Every error response body carries a human-readable "message" field, plus an
"error_id" that matches the server log line for support lookups.

Usage:
    from core.errors import NotFoundError, ValidationError

    # For expected errors (4xx) - raise with safe message
    raise NotFoundError("Task not found")
"""

import logging
import uuid

from flask import jsonify, request
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


# =============================================================================
# Exception Classes (4xx - Expected Errors)
# =============================================================================

class APIError(Exception):
    """
    Base class for expected API errors (4xx status codes).
    Messages are safe to expose to clients.
    """
    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(APIError):
    """Request validation failed (400)."""
    status_code = 400


class AuthenticationError(APIError):
    """Missing credentials, bad credentials, or unknown account (401)."""
    status_code = 401


class InvalidTokenError(AuthenticationError):
    """Bearer token present but tampered, malformed, or expired (403)."""
    status_code = 403


class NotFoundError(APIError):
    """Resource not found, or not owned by the caller (404)."""
    status_code = 404


class ConflictError(APIError):
    """Uniqueness violation (400 for client compatibility)."""
    status_code = 400


# =============================================================================
# Helpers
# =============================================================================

def from_pydantic(e: PydanticValidationError) -> ValidationError:
    """Convert a pydantic validation failure into a client-safe ValidationError.

    Uses the first error only; custom validators supply the human message.
    """
    first = e.errors()[0]
    message = first.get("msg", "Invalid request")
    field = ".".join(str(p) for p in first.get("loc", ()))
    # pydantic prefixes custom ValueError messages
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    elif first.get("type") == "missing":
        message = f"{field} is required"
    elif field:
        message = f"{field}: {message}"
    return ValidationError(message)


def register_error_handlers(app):
    """
    Register Flask error handlers for APIError exceptions.

    Call this in your Flask app factory:
        from core.errors import register_error_handlers
        register_error_handlers(app)
    """

    @app.errorhandler(APIError)
    def handle_api_error(e):
        """Handle all APIError subclasses."""
        error_id = str(uuid.uuid4())[:8]
        logger.warning(f"API error: {e}", extra={'error_id': error_id, 'status_code': e.status_code})
        return jsonify({
            "message": e.message,
            "error_id": error_id,
        }), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_exception(e):
        """Render werkzeug HTTP errors (404, 405, bad JSON) as JSON."""
        if e.code is not None and e.code >= 500:
            return handle_unexpected(e)
        return jsonify({"message": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e):
        """Handle unexpected errors without exposing details."""
        error_id = str(uuid.uuid4())[:8]
        logger.exception(
            f"Unhandled exception: {e}",
            extra={
                'error_id': error_id,
                'method': request.method,
                'endpoint': request.path,
            },
        )
        return jsonify({
            "message": "Internal server error",
            "error_id": error_id,
        }), 500
