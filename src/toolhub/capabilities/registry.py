"""Tool registry: name -> handle map with a derived category view.

Usage:
    from toolhub.capabilities.registry import ToolRegistry

    registry = ToolRegistry()
    registry.register(tool, "compliance")
    registry.get("gst_verify")

Registration happens during a single-threaded startup phase. The category
index is never stored on its own; it is recomputed from the handle map and
a name -> category side map, so re-registering a tool under a new category
moves it instead of leaving a stale entry behind.
"""

from __future__ import annotations

from typing import Any

from toolhub.capabilities.categories import RECOGNIZED_CATEGORIES, is_recognized
from toolhub.capabilities.models import ToolHandle
from toolhub.core.console import get_logger
from toolhub.core.result import ToolNotFoundError

logger = get_logger(__name__)


class ToolRegistry:
    """Explicitly constructed registry; build one per hub or per test."""

    def __init__(self) -> None:
        self._tools: dict[str, ToolHandle] = {}
        self._categories: dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def register(self, tool: ToolHandle, category: str | None = None) -> None:
        """Register a tool, overwriting any previous tool with the same name."""
        name = tool.definition.name
        resolved = category or tool.definition.category
        if name in self._tools:
            logger.debug("Overwriting tool %s", name)

        self._tools[name] = tool
        if is_recognized(resolved):
            self._categories[name] = resolved
        else:
            # Unrecognized buckets are not indexed; the tool is still callable by name.
            self._categories.pop(name, None)

        logger.debug("Registered: %s (%s)", name, resolved or "uncategorized")

    def get(self, name: str) -> ToolHandle | None:
        return self._tools.get(name)

    def require(self, name: str) -> ToolHandle:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(f"Tool not found: {name}", context={"tool": name})
        return tool

    def has(self, name: str) -> bool:
        return name in self._tools

    def get_all(self) -> list[ToolHandle]:
        return list(self._tools.values())

    def category_of(self, name: str) -> str | None:
        return self._categories.get(name)

    def get_by_category(self, category: str) -> list[ToolHandle]:
        return [
            self._tools[name]
            for name, assigned in self._categories.items()
            if assigned == category and name in self._tools
        ]

    def get_categories(self) -> list[str]:
        return list(RECOGNIZED_CATEGORIES)

    def category_counts(self) -> dict[str, int]:
        """Count tools per populated category, in first-registration order."""
        counts: dict[str, int] = {}
        for name, assigned in self._categories.items():
            if name in self._tools:
                counts[assigned] = counts.get(assigned, 0) + 1
        return counts

    def list_tools(self) -> list[dict[str, Any]]:
        return [
            {
                "name": tool.definition.name,
                "description": tool.definition.description,
                "category": self._categories.get(tool.definition.name, tool.definition.category),
            }
            for tool in self._tools.values()
        ]

    def search(self, query: str) -> list[ToolHandle]:
        """Case-insensitive substring match over tool names and descriptions."""
        needle = query.lower()
        return [
            tool
            for tool in self._tools.values()
            if needle in tool.definition.name.lower()
            or needle in tool.definition.description.lower()
        ]

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Return function-calling descriptors for every registered tool."""
        return [tool.definition.function_schema() for tool in self._tools.values()]


__all__ = ["ToolRegistry"]
