"""Validation outcome types for tool calls requested by the model."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from profesor.contracts.json_types import JSONObject


class ErrorCode(str, Enum):
    UNKNOWN_TOOL = "UNKNOWN_TOOL"
    MISSING_REQUIRED = "MISSING_REQUIRED"
    TYPE_MISMATCH = "TYPE_MISMATCH"
    UNEXPECTED_FIELD = "UNEXPECTED_FIELD"
    VALUE_OUT_OF_RANGE = "VALUE_OUT_OF_RANGE"
    TOO_SHORT = "TOO_SHORT"
    INVALID_ENUM = "INVALID_ENUM"


@dataclass(frozen=True)
class ValidationError:
    """One violated constraint on one argument (``field`` is the argument name)."""

    field: str
    message: str
    code: ErrorCode

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    tool_name: str
    params: JSONObject
    errors: tuple[ValidationError, ...] = field(default_factory=tuple)

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def error_message(self) -> str:
        """All violations joined with ``; `` (empty when valid)."""
        return "; ".join(str(e) for e in self.errors)
