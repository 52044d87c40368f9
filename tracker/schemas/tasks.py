"""
Task request schemas.

TaskRequest backs both create (POST) and full update (PUT): omitted
optional fields fall back to their defaults, so a PUT without a dueDate
clears it.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from core.task_store import DEFAULT_PRIORITY, DEFAULT_SORT, PRIORITIES
from core.timestamps import parse_timestamp

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 5000


class TaskRequest(BaseModel):
    """Create / full-update payload."""
    model_config = {"populate_by_name": True, "extra": "ignore"}

    title: str = Field(None, validate_default=True, max_length=TITLE_MAX_LENGTH)
    description: str = Field("", max_length=DESCRIPTION_MAX_LENGTH)
    priority: str = DEFAULT_PRIORITY
    due_date: Optional[datetime] = Field(None, alias="dueDate")

    @field_validator('title', mode='before')
    @classmethod
    def title_required(cls, v):
        if not isinstance(v, str) or not v.strip():
            raise ValueError('Task title is required')
        return v.strip()

    @field_validator('description', mode='before')
    @classmethod
    def trim_description(cls, v):
        if v is None:
            return ""
        if not isinstance(v, str):
            raise ValueError('Description must be a string')
        return v.strip()

    @field_validator('priority', mode='before')
    @classmethod
    def validate_priority(cls, v):
        if v is None or v == "":
            return DEFAULT_PRIORITY
        if v not in PRIORITIES:
            raise ValueError(f'Priority must be one of: {", ".join(PRIORITIES)}')
        return v

    @field_validator('due_date', mode='before')
    @classmethod
    def parse_due_date(cls, v):
        """Accept ISO dates ("2025-01-01") and datetimes; blank clears."""
        if v is None or v == "":
            return None
        if not isinstance(v, str):
            raise ValueError('Due date must be an ISO 8601 date string')
        try:
            return parse_timestamp(v)
        except ValueError:
            raise ValueError('Due date must be an ISO 8601 date string')


class TaskCompletionRequest(BaseModel):
    """Partial update of the completed flag."""
    model_config = {"extra": "ignore"}

    completed: bool = Field(None, validate_default=True)

    @field_validator('completed', mode='before')
    @classmethod
    def must_be_bool(cls, v):
        # JSON booleans only; "true" and 1 are rejected
        if not isinstance(v, bool):
            raise ValueError('Completed status is required')
        return v


class TaskListQuery(BaseModel):
    """Query-string filters for listing tasks."""
    completed: Optional[bool] = None
    priority: Optional[str] = None
    sort: str = DEFAULT_SORT

    @field_validator('completed', mode='before')
    @classmethod
    def parse_completed(cls, v):
        # Only the literal string "true" selects completed tasks
        if v is None:
            return None
        return v == "true"

    @field_validator('priority', 'sort', mode='before')
    @classmethod
    def blank_is_default(cls, v, info):
        if v == "":
            return DEFAULT_SORT if info.field_name == 'sort' else None
        return v
