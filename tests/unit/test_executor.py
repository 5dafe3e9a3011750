"""Tests for capabilities/executor.py - dispatch and failure isolation."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from toolhub.capabilities.catalog import normalize_tool
from toolhub.capabilities.executor import ExecutionOrchestrator
from toolhub.capabilities.models import FunctionTool, ToolCall, ToolDefinition, ToolResult
from toolhub.capabilities.registry import ToolRegistry
from toolhub.core.result import UnconfiguredError


def register(registry: ToolRegistry, name: str, func: Any) -> None:
    registry.register(FunctionTool(definition=ToolDefinition(name=name), func=func))


class RawHandle:
    """Provider-built handle that bypasses FunctionTool and returns plain data."""

    @property
    def definition(self) -> ToolDefinition:
        return ToolDefinition(name="raw_handle")

    async def execute(self, params: Any) -> Any:
        return {"ok": True}


@pytest.fixture
def registry() -> ToolRegistry:
    registry = ToolRegistry()

    async def slow_echo(params: dict[str, Any]) -> dict[str, Any]:
        await asyncio.sleep(float(params.get("delay", 0)))
        return {"echo": params.get("value")}

    def boom(params: dict[str, Any]) -> Any:
        raise RuntimeError("handler exploded")

    def needs_key(params: dict[str, Any]) -> Any:
        raise UnconfiguredError("Set TOOLHUB_API_KEY to enable this tool")

    def shaped(params: dict[str, Any]) -> dict[str, Any]:
        return {"success": False, "error": "upstream rejected", "metadata": {"upstream": 502}}

    def sync_add(params: dict[str, Any]) -> int:
        return int(params["a"]) + int(params["b"])

    register(registry, "slow_echo", slow_echo)
    register(registry, "boom", boom)
    register(registry, "needs_key", needs_key)
    register(registry, "shaped", shaped)
    register(registry, "sync_add", sync_add)
    return registry


@pytest.fixture
def orchestrator(registry: ToolRegistry) -> ExecutionOrchestrator:
    return ExecutionOrchestrator(registry)


# ---------------------------------------------------------------------------
# execute_one
# ---------------------------------------------------------------------------


class TestExecuteOne:
    @pytest.mark.asyncio
    async def test_unknown_tool(self, orchestrator: ExecutionOrchestrator) -> None:
        result = await orchestrator.execute_one("missing", {})

        assert result.success is False
        assert result.error == "Tool not found: missing"
        assert result.metadata == {"tool": "missing", "duration_ms": 0}

    @pytest.mark.asyncio
    async def test_async_handler_success(self, orchestrator: ExecutionOrchestrator) -> None:
        result = await orchestrator.execute_one("slow_echo", {"value": 7})

        assert result.success is True
        assert result.data == {"echo": 7}
        assert result.metadata["tool"] == "slow_echo"
        assert result.metadata["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_sync_handler_runs(self, orchestrator: ExecutionOrchestrator) -> None:
        result = await orchestrator.execute_one("sync_add", {"a": 2, "b": 3})
        assert result.success is True
        assert result.data == 5

    @pytest.mark.asyncio
    async def test_handler_exception_becomes_failed_result(
        self, orchestrator: ExecutionOrchestrator
    ) -> None:
        result = await orchestrator.execute_one("boom")

        assert result.success is False
        assert result.error == "handler exploded"
        assert result.metadata["tool"] == "boom"
        assert result.metadata["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_unconfigured_carries_guidance(self, orchestrator: ExecutionOrchestrator) -> None:
        result = await orchestrator.execute_one("needs_key")

        assert result.success is False
        assert "TOOLHUB_API_KEY" in (result.error or "")

    @pytest.mark.asyncio
    async def test_result_shaped_mapping_is_respected(
        self, orchestrator: ExecutionOrchestrator
    ) -> None:
        result = await orchestrator.execute_one("shaped")

        assert result.success is False
        assert result.error == "upstream rejected"
        assert result.metadata["upstream"] == 502
        assert result.metadata["tool"] == "shaped"

    @pytest.mark.asyncio
    async def test_missing_param_error_is_isolated(self, orchestrator: ExecutionOrchestrator) -> None:
        result = await orchestrator.execute_one("sync_add", {"a": 1})
        assert result.success is False
        assert result.error


# ---------------------------------------------------------------------------
# execute_many
# ---------------------------------------------------------------------------


class TestExecuteMany:
    @pytest.mark.asyncio
    async def test_empty_batch(self, orchestrator: ExecutionOrchestrator) -> None:
        assert await orchestrator.execute_many([]) == []

    @pytest.mark.asyncio
    async def test_order_follows_input_not_completion(
        self, orchestrator: ExecutionOrchestrator
    ) -> None:
        calls = [
            ToolCall(tool="slow_echo", params={"value": "first", "delay": 0.05}),
            ToolCall(tool="slow_echo", params={"value": "second", "delay": 0.0}),
            ToolCall(tool="slow_echo", params={"value": "third", "delay": 0.02}),
        ]

        results = await orchestrator.execute_many(calls)

        assert [r.data["echo"] for r in results] == ["first", "second", "third"]

    @pytest.mark.asyncio
    async def test_failure_isolated_to_its_slot(self, orchestrator: ExecutionOrchestrator) -> None:
        calls = [
            ToolCall(tool="sync_add", params={"a": 1, "b": 1}),
            ToolCall(tool="does_not_exist"),
            ToolCall(tool="boom"),
            ToolCall(tool="slow_echo", params={"value": "ok"}),
        ]

        results = await orchestrator.execute_many(calls)

        assert [r.success for r in results] == [True, False, False, True]
        assert results[0].data == 2
        assert results[1].error == "Tool not found: does_not_exist"
        assert results[2].error == "handler exploded"
        assert results[3].data == {"echo": "ok"}

    @pytest.mark.asyncio
    async def test_handle_returning_plain_data_does_not_sink_batch(
        self, registry: ToolRegistry, orchestrator: ExecutionOrchestrator
    ) -> None:
        handle = normalize_tool(RawHandle())
        assert handle is not None
        registry.register(handle)

        results = await orchestrator.execute_many(
            [ToolCall(tool="sync_add", params={"a": 2, "b": 3}), ToolCall(tool="raw_handle")]
        )

        assert [r.success for r in results] == [True, True]
        assert results[0].data == 5
        assert results[1].data == {"ok": True}
        assert results[1].metadata["tool"] == "raw_handle"
        assert results[1].metadata["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_calls_run_concurrently(self, orchestrator: ExecutionOrchestrator) -> None:
        calls = [ToolCall(tool="slow_echo", params={"value": i, "delay": 0.1}) for i in range(5)]

        loop = asyncio.get_running_loop()
        start = loop.time()
        results = await orchestrator.execute_many(calls)
        elapsed = loop.time() - start

        assert all(r.success for r in results)
        assert elapsed < 0.4


class TestToolResult:
    def test_failure_without_error_gets_message(self) -> None:
        result = ToolResult(success=False)
        assert result.error

    def test_negative_duration_clamped(self) -> None:
        result = ToolResult(success=True, metadata={"duration_ms": -3})
        assert result.metadata["duration_ms"] == 0
