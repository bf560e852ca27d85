"""JSON primitive aliases shared across the pipeline.

Use ``JSONValue`` / ``JSONObject`` only where a payload's shape is genuinely
unknown (raw tool arguments from the model, provider responses before
validation). Do not use them in Pydantic ``BaseModel`` fields.
"""
from __future__ import annotations

JSONScalar = str | int | float | bool | None
"""A JSON leaf value with no recursive structure."""

JSONValue = str | int | float | bool | None | list["JSONValue"] | dict[str, "JSONValue"]
"""Recursive JSON value."""

JSONObject = dict[str, JSONValue]
"""A JSON object with unknown key set (e.g. tool arguments before validation)."""
