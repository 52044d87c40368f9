"""
Auth configuration constants - no dependencies on other auth modules.

All auth configuration is centralized here for easy auditing.
Values are sourced from config.settings (Pydantic BaseSettings) and read
once, at import time.
"""
from config.settings import get_settings

_settings = get_settings()
_auth = _settings.auth

# =============================================================================
# JWT Configuration
# =============================================================================

JWT_SECRET = _auth.jwt_secret.get_secret_value()
JWT_ALGORITHM = _auth.jwt_algorithm
JWT_EXPIRATION_DAYS = _auth.jwt_expiration_days

# =============================================================================
# Password Hashing
# =============================================================================

PASSWORD_HASH_METHOD = _auth.password_hash_method

# =============================================================================
# Input Limits
# =============================================================================

USERNAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 254
PASSWORD_MAX_LENGTH = 200
