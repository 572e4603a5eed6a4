"""Request validation.

validate() runs a Pydantic model over raw input and returns a
ValidationResult: either the parsed model or a ValidationError carrying
per-field details. @validate_request applies it to the JSON body of a
Flask view and raises the error before the view runs.

Unknown fields are dropped by the request models, so only whitelisted
fields ever reach a view.
"""

from dataclasses import dataclass
from functools import wraps
from typing import Any, Generic, TypeVar, get_type_hints

from flask import request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ValidationError

M = TypeVar("M", bound=BaseModel)


@dataclass(frozen=True)
class ValidationResult(Generic[M]):
    """Outcome of validate(): exactly one of value / error is set."""

    value: M | None = None
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> M:
        """Return the value or raise the error."""
        if self.error is not None:
            raise self.error
        return self.value


def _format_errors(exc: PydanticValidationError) -> list[dict[str, str]]:
    return [
        {
            "field": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "expected_type": err["type"],
        }
        for err in exc.errors()
    ]


def _redact(data: Any) -> Any:
    """Mask password values at any depth of a decoded JSON payload."""
    if isinstance(data, dict):
        return {
            k: ("***" if "password" in str(k).lower() else _redact(v))
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [_redact(item) for item in data]
    return data


def validate(model: type[M], data: Any) -> ValidationResult[M]:
    """
    Validate raw input against a model.

    Args:
        model: Pydantic model class
        data: Decoded JSON (anything; non-dicts fail validation)

    Returns:
        ValidationResult with the parsed model, or with a ValidationError
        whose details are {"model", "received", "errors"}
    """
    if not isinstance(data, dict):
        return ValidationResult(error=ValidationError(
            "Request body must be a JSON object",
            {"model": model.__name__, "received": _redact(data), "errors": []}
        ))

    try:
        return ValidationResult(value=model.model_validate(data))
    except PydanticValidationError as e:
        return ValidationResult(error=ValidationError(
            "Invalid request data",
            {"model": model.__name__, "received": _redact(data), "errors": _format_errors(e)}
        ))


def validate_request(f):
    """
    Validate the JSON body against the view's `data` parameter annotation.

    Path parameters pass through unchanged.

    Example:
    ```python
    @users_bp.put("/<user_id>")
    @validate_request
    def update_user(user_id: str, data: UpdateUserRequest):
        ...
    ```

    Raises:
        ValidationError: If the body is missing, not an object, or invalid
    """
    model = get_type_hints(f).get("data")
    if model is None or not issubclass(model, BaseModel):
        raise TypeError(f"{f.__name__} needs a 'data' parameter annotated with a Pydantic model")

    @wraps(f)
    def wrapper(*args, **kwargs):
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        kwargs["data"] = validate(model, body).unwrap()
        return f(*args, **kwargs)

    return wrapper
