from typing import Iterable
from functools import wraps
from flask import request
from pydantic import ValidationError
from .responses import validation_error_response


def has_required_fields(data: dict, required: Iterable[str]) -> bool:
    """Return True if every required field is present and non-empty."""
    if not isinstance(data, dict):
        return False
    return all(data.get(field) not in (None, "") for field in required)


def validate_schema(schema, message="Invalid request data"):
    """Decorator to validate request JSON against a Pydantic schema."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            payload = request.get_json(silent=True)
            if not isinstance(payload, dict):
                payload = {}
            try:
                obj = schema(**payload)
            except ValidationError as ve:
                details = ve.errors(include_url=False, include_context=False, include_input=False)
                return validation_error_response(details, message)
            request.validated_data = obj
            return fn(*args, **kwargs)
        return wrapper

    return decorator
