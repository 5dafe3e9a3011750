"""Tool data models and handle protocol.

ToolDefinition and ParameterSpec describe a tool in the uniform schema every
provider is normalized into; ToolResult is the structured envelope every
invocation returns; ToolHandle is the execute capability the registry owns.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, model_validator

JSON_SCHEMA_TYPES: frozenset[str] = frozenset({"string", "number", "boolean", "object", "array"})


class ParameterSpec(BaseModel):
    """A single declared tool parameter.

    ``has_default`` records whether a default was declared at all, so an
    explicit ``default=None`` still reaches the function-calling schema.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    default: Any = None
    has_default: bool = Field(default=False, exclude=True, repr=False)

    @model_validator(mode="before")
    @classmethod
    def _track_default(cls, data: Any) -> Any:
        if isinstance(data, Mapping) and "default" in data and "has_default" not in data:
            return {**data, "has_default": True}
        return data

    def schema_property(self) -> dict[str, Any]:
        prop: dict[str, Any] = {
            "type": self.type if self.type in JSON_SCHEMA_TYPES else "string",
            "description": self.description,
        }
        if self.has_default:
            prop["default"] = self.default
        return prop


class ToolDefinition(BaseModel):
    """Uniform description of a callable tool."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    description: str = ""
    category: str = "general"
    parameters: tuple[ParameterSpec, ...] = ()

    def function_schema(self) -> dict[str, Any]:
        """Return the function-calling descriptor consumed by LLM callers."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {p.name: p.schema_property() for p in self.parameters},
                "required": [p.name for p in self.parameters if p.required],
            },
        }

    def summary(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category,
            "parameters": [
                {
                    "name": p.name,
                    "type": p.type,
                    "description": p.description,
                    "required": p.required,
                    **({"default": p.default} if p.has_default else {}),
                }
                for p in self.parameters
            ],
        }


class ToolResult(BaseModel):
    """Structured outcome of a single tool invocation."""

    success: bool
    data: Any = None
    error: str | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _failure_has_error(self) -> ToolResult:
        if not self.success and not self.error:
            self.error = "Tool reported failure without an error message"
        duration = self.metadata.get("duration_ms")
        if isinstance(duration, (int, float)) and duration < 0:
            self.metadata["duration_ms"] = 0
        return self

    @classmethod
    def failure(cls, tool: str, error: str, duration_ms: float = 0, **extra: Any) -> ToolResult:
        return cls(
            success=False,
            error=error,
            metadata={**extra, "tool": tool, "duration_ms": duration_ms},
        )


class ToolCall(BaseModel):
    tool: str = Field(..., description="Name of the tool to invoke")
    params: dict[str, Any] = Field(default_factory=dict, description="Arguments for the tool")


@runtime_checkable
class ToolHandle(Protocol):
    """Anything the registry can dispatch to."""

    @property
    def definition(self) -> ToolDefinition: ...

    async def execute(self, params: Mapping[str, Any]) -> ToolResult: ...


ToolFunction = Callable[[dict[str, Any]], Any] | Callable[[dict[str, Any]], Awaitable[Any]]


def coerce_result(tool: str, raw: Any) -> ToolResult:
    """Turn whatever a handler returned into a ToolResult.

    Handlers may return a ToolResult, a mapping shaped like one (carrying a
    ``success`` key), or plain data which is treated as a successful payload.
    """
    if isinstance(raw, ToolResult):
        return raw
    if isinstance(raw, Mapping) and "success" in raw:
        metadata = raw.get("metadata") or {}
        return ToolResult(
            success=bool(raw["success"]),
            data=raw.get("data"),
            error=raw.get("error"),
            metadata=dict(metadata) if isinstance(metadata, Mapping) else {},
        )
    return ToolResult(success=True, data=raw, metadata={"tool": tool})


@dataclass(frozen=True)
class FunctionTool:
    """ToolHandle backed by a plain callable taking a params dict.

    Coroutine functions are awaited directly; synchronous callables run in a
    worker thread so a batch never stalls behind one blocking handler.
    """

    definition: ToolDefinition
    func: ToolFunction

    @property
    def name(self) -> str:
        return self.definition.name

    async def execute(self, params: Mapping[str, Any]) -> ToolResult:
        args = dict(params)
        if inspect.iscoroutinefunction(self.func):
            raw = await self.func(args)
        else:
            raw = await asyncio.to_thread(self.func, args)
            if inspect.isawaitable(raw):
                raw = await raw
        return coerce_result(self.definition.name, raw)


__all__ = [
    "JSON_SCHEMA_TYPES",
    "FunctionTool",
    "ParameterSpec",
    "ToolCall",
    "ToolDefinition",
    "ToolFunction",
    "ToolHandle",
    "ToolResult",
    "coerce_result",
]
