"""
Pydantic schemas for request validation.

These schemas provide centralized validation with clear error messages,
replacing scattered manual validation throughout route handlers.
"""

from tracker.schemas.common import parse_json_body, parse_query
from tracker.schemas.auth import (
    RegisterRequest,
    LoginRequest,
)
from tracker.schemas.tasks import (
    TaskRequest,
    TaskCompletionRequest,
    TaskListQuery,
)

__all__ = [
    # Common
    "parse_json_body",
    "parse_query",
    # Auth
    "RegisterRequest",
    "LoginRequest",
    # Tasks
    "TaskRequest",
    "TaskCompletionRequest",
    "TaskListQuery",
]
