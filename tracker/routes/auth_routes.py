"""
Authentication endpoints for the task tracker API.

Provides registration, login, and current-user lookup. There is no logout
endpoint: tokens are stateless and the browser simply discards its copy.
"""

import logging

from flask import Blueprint, g, jsonify

from core.errors import AuthenticationError
from tracker.auth import (
    authenticate_user,
    get_token_issuer,
    get_user_store,
    jwt_required,
    register_user,
)
from tracker.schemas import LoginRequest, RegisterRequest, parse_json_body

logger = logging.getLogger(__name__)

# Create blueprint
auth_bp = Blueprint('auth', __name__, url_prefix='/api/auth')


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and return a session token."""
    data = parse_json_body(RegisterRequest)

    user = register_user(get_user_store(), data.username, data.email, data.password)
    token = get_token_issuer().issue(user)

    return jsonify({
        "message": "User registered successfully",
        "token": token,
        "user": user.public_dict(),
    }), 201


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate by email + password and return a session token."""
    data = parse_json_body(LoginRequest)

    try:
        user = authenticate_user(get_user_store(), data.email, data.password)
    except AuthenticationError:
        logger.warning("Login failed: invalid credentials")
        raise

    logger.info(f"Login successful: {user.username}", extra={'user': user.id})
    return jsonify({
        "message": "Login successful",
        "token": get_token_issuer().issue(user),
        "user": user.public_dict(),
    })


@auth_bp.route('/me', methods=['GET'])
@jwt_required
def get_current_user():
    """Get current authenticated user info."""
    return jsonify({"user": g.current_user.public_dict()})
