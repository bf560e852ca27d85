"""ToolSpec: one named capability the orchestrator can invoke."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

from profesor.contracts.json_types import JSONObject
from profesor.contracts.llm_types import ToolParametersDict, ToolSchemaDict

ToolHandler = Callable[[JSONObject], Awaitable[str]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: ToolParametersDict
    handler: ToolHandler

    async def invoke(self, arguments: JSONObject) -> str:
        """Run the tool on already-validated arguments; always returns text."""
        return await self.handler(arguments)

    def schema(self) -> ToolSchemaDict:
        """OpenAI function-calling definition advertised to the model."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.input_schema,
            },
        }
