"""
Request parsing helpers shared by the route modules.
"""

from typing import TypeVar

from flask import request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from core.errors import ValidationError, from_pydantic

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_json_body(model: type[ModelT]) -> ModelT:
    """Validate the request's JSON object body against a schema.

    Raises:
        ValidationError: body missing, not a JSON object, or invalid
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise from_pydantic(e)


def parse_query(model: type[ModelT]) -> ModelT:
    """Validate query-string arguments against a schema (first value wins)."""
    try:
        return model.model_validate(request.args.to_dict(flat=True))
    except PydanticValidationError as e:
        raise from_pydantic(e)
