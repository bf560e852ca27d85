"""Main validation entrypoint: validate_tool_call."""

from __future__ import annotations

import logging

from profesor.contracts.json_types import JSONValue
from profesor.core.tool_validation.models import ErrorCode, ValidationError, ValidationResult
from profesor.core.tool_validation.ranges import _validate_value_ranges
from profesor.core.tool_validation.schema import _validate_schema
from profesor.core.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def validate_tool_call(
    tool_name: str,
    params: dict[str, JSONValue],
    registry: ToolRegistry,
) -> ValidationResult:
    """
    Validate a tool call requested by the model.

    Steps:
    1. Registry check (unknown tools are rejected)
    2. Schema validation (required params, types, unexpected fields)
    3. Bounds validation (minimum/maximum, minLength, enum)
    """
    spec = registry.get(tool_name)
    if spec is None:
        unknown = ValidationError(
            field="tool_name",
            message=f"Unknown tool '{tool_name}'",
            code=ErrorCode.UNKNOWN_TOOL,
        )
        return ValidationResult(tool_name=tool_name, params=params, errors=(unknown,))

    errors = _validate_schema(params, spec.input_schema)
    # Bounds only make sense once types line up; skip fields that already failed.
    failed = {e.field for e in errors}
    errors.extend(
        _validate_value_ranges(
            {k: v for k, v in params.items() if k not in failed},
            spec.input_schema,
        )
    )

    result = ValidationResult(tool_name=tool_name, params=params, errors=tuple(errors))
    if not result.valid:
        logger.debug(f"Tool call {tool_name} rejected: {result.error_message}")
    return result
