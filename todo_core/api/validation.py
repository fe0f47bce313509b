"""Request body validation for Flask views.

The @validate_request decorator parses the JSON body into the pydantic model
named by a view parameter's annotation. Parameters that Flask fills from the
URL (view args) pass through untouched.

    @todos_bp.put("/<int:todo_id>")
    @validate_request
    def update_todo(todo_id: int, data: TodoUpdate):
        ...

On failure it raises ValidationError whose message is the first failing
rule, so handlers never see malformed input.
"""

import inspect
import logging
import typing
from functools import wraps

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

logger = logging.getLogger(__name__)

REDACTED = "***"


def _format_error(error: dict) -> dict:
    """Flatten a pydantic error into field/message/expected_type."""
    return {
        "field": ".".join(str(part) for part in error["loc"]),
        "message": error["msg"],
        "expected_type": error["type"],
    }


def _redact(received: dict) -> dict:
    """Mask secrets before echoing the body back in error details."""
    return {
        key: REDACTED if "password" in key.lower() or "token" in key.lower() else value
        for key, value in received.items()
    }


def validate_request(f):
    """
    Validate the JSON body against the view's pydantic model parameter.

    Raises:
        TypeError: At decoration time if the view has no parameters or a
            parameter lacks a type annotation; at request time if the body
            parameter is not annotated with a BaseModel subclass
        ValidationError: At request time if the body does not validate
    """
    params = list(inspect.signature(f).parameters.values())
    if not params:
        raise TypeError(f"{f.__name__} has no parameters to validate")

    hints = typing.get_type_hints(f)
    for param in params:
        if param.name not in hints:
            raise TypeError(f"Parameter '{param.name}' of {f.__name__} lacks a type annotation")

    @wraps(f)
    def wrapper(*args, **kwargs):
        for param in params:
            # Path parameters arrive as kwargs from Flask
            if param.name in kwargs:
                continue

            model = hints[param.name]
            if not (isinstance(model, type) and issubclass(model, BaseModel)):
                raise TypeError(
                    f"Parameter '{param.name}' of {f.__name__} must be annotated "
                    f"with a Pydantic BaseModel subclass"
                )

            received = request.get_json(silent=True)
            if not isinstance(received, dict):
                received = {}

            try:
                kwargs[param.name] = model.model_validate(received)
            except PydanticValidationError as e:
                errors = [_format_error(err) for err in e.errors()]
                logger.debug(f"Validation failed for {model.__name__}: {errors}")
                raise ValidationError(
                    errors[0]["message"],
                    {
                        "model": model.__name__,
                        "received": _redact(received),
                        "errors": errors,
                    }
                )

        return f(*args, **kwargs)

    return wrapper
