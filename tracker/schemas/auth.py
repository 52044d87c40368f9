"""
Authentication request schemas.
"""

from pydantic import BaseModel, Field, field_validator

from tracker.auth.config import EMAIL_MAX_LENGTH, PASSWORD_MAX_LENGTH, USERNAME_MAX_LENGTH


def _require_nonempty_string(v, message: str):
    """Reject non-strings and empty strings (prevent type confusion attacks)."""
    if not isinstance(v, str) or not v:
        raise ValueError(message)
    return v


class RegisterRequest(BaseModel):
    """New account registration. Values are used exactly as sent."""
    username: str = Field(None, validate_default=True, max_length=USERNAME_MAX_LENGTH, description="Username")
    email: str = Field(None, validate_default=True, max_length=EMAIL_MAX_LENGTH, description="Email address")
    password: str = Field(None, validate_default=True, max_length=PASSWORD_MAX_LENGTH, description="Password")

    @field_validator('username', 'email', 'password', mode='before')
    @classmethod
    def all_fields_required(cls, v):
        return _require_nonempty_string(v, 'All fields are required')


class LoginRequest(BaseModel):
    """Email + password login."""
    email: str = Field(None, validate_default=True, max_length=EMAIL_MAX_LENGTH, description="Email address")
    password: str = Field(None, validate_default=True, max_length=PASSWORD_MAX_LENGTH, description="Password")

    @field_validator('email', 'password', mode='before')
    @classmethod
    def must_be_string(cls, v):
        return _require_nonempty_string(v, 'Email and password required')
