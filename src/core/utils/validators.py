"""Request validation utilities."""

from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from core.models.errors import InvalidRequestError

ModelT = TypeVar("ModelT", bound=BaseModel)


def sanitize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, str]]:
    """Sanitize Pydantic validation errors for API responses.

    Removes sensitive/internal fields like:
    - url
    - ctx
    - input
    """
    sanitized: list[dict[str, str]] = []

    for err in errors:
        field = ".".join(str(x) for x in err.get("loc", [])) or "query"
        msg = err.get("msg", "Invalid value").replace("Value error,", "").strip()

        if "field required" in msg.lower():
            msg = "This field is required"

        sanitized.append({"field": field, "message": msg})

    return sanitized


def validate_request(model: type[ModelT], data: dict[str, Any] | None) -> ModelT:
    """Validate request data against a Pydantic model.

    Raises:
        InvalidRequestError: With the sanitized field errors in `details`
    """
    try:
        return model(**(data or {}))

    except ValidationError as exc:
        errors = sanitize_validation_errors(exc.errors())
        first = errors[0] if errors else {"field": "query", "message": "Invalid value"}
        raise InvalidRequestError(
            message=f"Invalid {first['field']}: {first['message']}",
            details={"errors": errors},
        ) from exc
