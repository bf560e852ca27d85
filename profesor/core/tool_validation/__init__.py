"""
Tool argument validation.

Validates tool calls before execution:
1. Registry check (unknown tool)
2. JSON schema validation (required params, types, unexpected fields)
3. Bounds validation (minimum/maximum, minLength, enum)

Public API:
    validate_tool_call(tool_name, params, registry) -> ValidationResult
"""

from profesor.core.tool_validation.models import ErrorCode, ValidationError, ValidationResult
from profesor.core.tool_validation.ranges import _validate_value_ranges
from profesor.core.tool_validation.schema import _validate_schema, _validate_type
from profesor.core.tool_validation.validators import validate_tool_call

__all__ = [
    "ErrorCode",
    "ValidationError",
    "ValidationResult",
    "_validate_schema",
    "_validate_type",
    "_validate_value_ranges",
    "validate_tool_call",
]
