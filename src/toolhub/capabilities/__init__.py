"""Capabilities package - tool catalog, registry and execution.

This package owns the tool side of the hub: loading a catalog through the
fallback tiers, indexing it in a registry, and dispatching calls.
"""

from __future__ import annotations

from toolhub.capabilities.catalog import Catalog, CatalogLoader, ProviderContext, register_catalog
from toolhub.capabilities.categories import infer_category
from toolhub.capabilities.executor import ExecutionOrchestrator
from toolhub.capabilities.models import (
    FunctionTool,
    ParameterSpec,
    ToolCall,
    ToolDefinition,
    ToolHandle,
    ToolResult,
)
from toolhub.capabilities.registry import ToolRegistry

__all__ = [
    "Catalog",
    "CatalogLoader",
    "ExecutionOrchestrator",
    "FunctionTool",
    "ParameterSpec",
    "ProviderContext",
    "ToolCall",
    "ToolDefinition",
    "ToolHandle",
    "ToolRegistry",
    "ToolResult",
    "infer_category",
    "register_catalog",
]
