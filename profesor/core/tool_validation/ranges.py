"""Bounds validation: minimum/maximum, minLength, enum."""

from __future__ import annotations

from profesor.contracts.json_types import JSONValue
from profesor.contracts.llm_types import ToolParametersDict
from profesor.core.tool_validation.models import ErrorCode, ValidationError


def _validate_value_ranges(
    params: dict[str, JSONValue],
    schema: ToolParametersDict,
) -> list[ValidationError]:
    """Check declared bounds on fields whose type is already correct."""
    errors: list[ValidationError] = []
    properties = schema.get("properties") or {}

    for field, value in params.items():
        prop = properties.get(field)
        if prop is None:
            continue

        if isinstance(value, (int, float)) and not isinstance(value, bool):
            min_val = prop.get("minimum")
            max_val = prop.get("maximum")
            if (min_val is not None and value < min_val) or (max_val is not None and value > max_val):
                errors.append(ValidationError(
                    field=field,
                    message=f"Value {value} is out of range [{min_val}, {max_val}]",
                    code=ErrorCode.VALUE_OUT_OF_RANGE,
                ))

        if isinstance(value, str):
            min_length = prop.get("minLength")
            if min_length is not None and len(value.strip()) < min_length:
                errors.append(ValidationError(
                    field=field,
                    message=f"Must be at least {min_length} character(s)",
                    code=ErrorCode.TOO_SHORT,
                ))
            allowed = prop.get("enum")
            if allowed is not None and value not in allowed:
                errors.append(ValidationError(
                    field=field,
                    message=f"'{value}' is not one of: {', '.join(allowed)}",
                    code=ErrorCode.INVALID_ENUM,
                ))

    return errors
