"""Tool execution against the registry.

This module provides:
- execute_one: resolve a tool by exact name and run it, always returning a ToolResult
- execute_many: fan out a batch concurrently, results aligned with the input order

Every failure (unknown tool, missing configuration, handler exception) is
converted into a ToolResult with ``success=False`` at this boundary.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable, Mapping
from time import perf_counter
from typing import Any

from toolhub.capabilities.models import ToolCall, ToolResult, coerce_result
from toolhub.capabilities.registry import ToolRegistry
from toolhub.core.console import get_logger
from toolhub.core.result import UnconfiguredError

logger = get_logger(__name__)

AUDIT_PREFIX = "audit.tool"


def _elapsed_ms(start: float) -> float:
    return max(0.0, round((perf_counter() - start) * 1000, 3))


class ExecutionOrchestrator:
    """Dispatch tool calls against a registry with per-call failure isolation."""

    def __init__(self, registry: ToolRegistry) -> None:
        self.registry = registry

    async def execute_one(self, name: str, params: Mapping[str, Any] | None = None) -> ToolResult:
        tool = self.registry.get(name)
        if tool is None:
            logger.debug("%s.not_found tool=%s", AUDIT_PREFIX, name)
            return ToolResult.failure(name, f"Tool not found: {name}")

        start = perf_counter()
        try:
            result = coerce_result(name, await tool.execute(dict(params or {})))
        except asyncio.CancelledError:
            raise
        except UnconfiguredError as exc:
            logger.warning("%s.unconfigured tool=%s reason=%s", AUDIT_PREFIX, name, exc)
            return ToolResult.failure(name, str(exc), _elapsed_ms(start))
        except Exception as exc:
            logger.exception("Unhandled error in tool %s", name)
            return ToolResult.failure(name, str(exc) or type(exc).__name__, _elapsed_ms(start))

        metadata = {**result.metadata, "tool": name, "duration_ms": _elapsed_ms(start)}
        return result.model_copy(update={"metadata": metadata})

    async def execute_many(self, calls: Iterable[ToolCall]) -> list[ToolResult]:
        """Run every call concurrently; result ``i`` always answers call ``i``."""
        batch = list(calls)
        if not batch:
            return []
        return list(
            await asyncio.gather(*(self.execute_one(call.tool, call.params) for call in batch))
        )


__all__ = ["AUDIT_PREFIX", "ExecutionOrchestrator"]
