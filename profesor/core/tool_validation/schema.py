"""JSON schema validation for tool call parameters: required, types, unknown fields."""

from __future__ import annotations

from profesor.contracts.json_types import JSONValue
from profesor.contracts.llm_types import ToolParametersDict
from profesor.core.tool_validation.models import ErrorCode, ValidationError

_TYPE_MAP: dict[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
}


def _validate_type(field: str, value: JSONValue, expected_type: str) -> ValidationError | None:
    """Validate a value against an expected JSON Schema type.

    ``bool`` is a subclass of ``int`` in Python but never a JSON integer/number.
    """
    expected = _TYPE_MAP.get(expected_type)
    if expected is None:
        return None
    mismatched = not isinstance(value, expected) or (
        isinstance(value, bool) and expected_type in ("integer", "number")
    )
    if mismatched:
        return ValidationError(
            field=field,
            message=f"Expected {expected_type}, got {type(value).__name__}",
            code=ErrorCode.TYPE_MISMATCH,
        )
    return None


def _validate_schema(
    params: dict[str, JSONValue],
    schema: ToolParametersDict,
) -> list[ValidationError]:
    """Validate params against a tool's input schema (required fields, types, extras)."""
    errors: list[ValidationError] = []

    required = schema.get("required") or []
    properties = schema.get("properties") or {}
    closed = schema.get("additionalProperties") is False

    for field in required:
        if field not in params:
            errors.append(ValidationError(
                field=field,
                message=f"Required field '{field}' is missing",
                code=ErrorCode.MISSING_REQUIRED,
            ))

    for field, value in params.items():
        prop = properties.get(field)
        if prop is None:
            if closed:
                errors.append(ValidationError(
                    field=field,
                    message=f"Unexpected field '{field}'",
                    code=ErrorCode.UNEXPECTED_FIELD,
                ))
            continue
        type_error = _validate_type(field, value, prop["type"])
        if type_error:
            errors.append(type_error)

    return errors
