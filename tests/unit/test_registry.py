"""Tests for capabilities/registry.py - name map and derived category view."""

from __future__ import annotations

from typing import Any

import pytest

from toolhub.capabilities.models import FunctionTool, ParameterSpec, ToolDefinition
from toolhub.capabilities.registry import ToolRegistry
from toolhub.core.result import ToolNotFoundError


def make_tool(name: str, category: str = "general", **kwargs: Any) -> FunctionTool:
    definition = ToolDefinition(name=name, category=category, **kwargs)
    return FunctionTool(definition=definition, func=lambda params: {"tool": name})


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class TestRegister:
    def test_register_and_get(self) -> None:
        registry = ToolRegistry()
        tool = make_tool("gst_verify", "compliance")
        registry.register(tool)

        assert registry.get("gst_verify") is tool
        assert registry.has("gst_verify")
        assert "gst_verify" in registry
        assert len(registry) == 1

    def test_reregistration_returns_second(self) -> None:
        registry = ToolRegistry()
        first = make_tool("gst_verify", "compliance", description="first")
        second = make_tool("gst_verify", "compliance", description="second")

        registry.register(first)
        registry.register(second)

        assert registry.get("gst_verify") is second
        assert len(registry) == 1

    def test_explicit_category_overrides_definition(self) -> None:
        registry = ToolRegistry()
        registry.register(make_tool("lookup", "general"), "logistics")

        assert registry.category_of("lookup") == "logistics"
        assert [t.definition.name for t in registry.get_by_category("logistics")] == ["lookup"]
        assert registry.get_by_category("general") == []

    def test_unrecognized_category_not_indexed_but_callable(self) -> None:
        registry = ToolRegistry()
        registry.register(make_tool("loads", "freight"))

        assert registry.has("loads")
        assert registry.category_of("loads") is None
        assert registry.get_by_category("freight") == []
        assert registry.category_counts() == {}

    def test_reregistration_moves_category(self) -> None:
        registry = ToolRegistry()
        registry.register(make_tool("track", "logistics"))
        registry.register(make_tool("track", "fleet"))

        assert registry.get_by_category("logistics") == []
        assert [t.definition.name for t in registry.get_by_category("fleet")] == ["track"]
        assert registry.category_counts() == {"fleet": 1}

    def test_reregistration_under_unknown_category_drops_index_entry(self) -> None:
        registry = ToolRegistry()
        registry.register(make_tool("track", "logistics"))
        registry.register(make_tool("track", "freight"))

        assert registry.get_by_category("logistics") == []
        assert registry.has("track")

    def test_require_raises_for_unknown(self) -> None:
        registry = ToolRegistry()
        with pytest.raises(ToolNotFoundError, match="Tool not found: nope"):
            registry.require("nope")


# ---------------------------------------------------------------------------
# Lookup views
# ---------------------------------------------------------------------------


class TestViews:
    @pytest.fixture
    def registry(self) -> ToolRegistry:
        registry = ToolRegistry()
        registry.register(make_tool("gst_verify", "compliance", description="Verify GSTIN"))
        registry.register(make_tool("gst_calc", "compliance", description="Calculate GST"))
        registry.register(make_tool("shipment_track", "logistics", description="Track a shipment"))
        return registry

    def test_get_by_category_keeps_registration_order(self, registry: ToolRegistry) -> None:
        names = [t.definition.name for t in registry.get_by_category("compliance")]
        assert names == ["gst_verify", "gst_calc"]

    def test_category_counts(self, registry: ToolRegistry) -> None:
        assert registry.category_counts() == {"compliance": 2, "logistics": 1}

    def test_get_categories_lists_recognized_buckets(self, registry: ToolRegistry) -> None:
        categories = registry.get_categories()
        assert categories[0] == "compliance"
        assert "general" in categories
        assert "skills" in categories

    def test_search_matches_name_and_description(self, registry: ToolRegistry) -> None:
        assert {t.definition.name for t in registry.search("GST")} == {"gst_verify", "gst_calc"}
        assert [t.definition.name for t in registry.search("a shipment")] == ["shipment_track"]
        assert registry.search("nothing-here") == []

    def test_list_tools(self, registry: ToolRegistry) -> None:
        listed = registry.list_tools()
        assert listed[0] == {
            "name": "gst_verify",
            "description": "Verify GSTIN",
            "category": "compliance",
        }


# ---------------------------------------------------------------------------
# Function-calling descriptors
# ---------------------------------------------------------------------------


class TestToolDefinitions:
    def test_schema_shape(self) -> None:
        registry = ToolRegistry()
        registry.register(
            make_tool(
                "gst_calc",
                "compliance",
                description="Calculate GST on amount",
                parameters=(
                    ParameterSpec(name="amount", type="number", description="Base amount", required=True),
                    ParameterSpec(name="rate", type="number", description="GST rate", default=18),
                ),
            )
        )

        (schema,) = registry.get_tool_definitions()

        assert schema == {
            "name": "gst_calc",
            "description": "Calculate GST on amount",
            "parameters": {
                "type": "object",
                "properties": {
                    "amount": {"type": "number", "description": "Base amount"},
                    "rate": {"type": "number", "description": "GST rate", "default": 18},
                },
                "required": ["amount"],
            },
        }

    def test_unknown_parameter_type_maps_to_string(self) -> None:
        registry = ToolRegistry()
        registry.register(
            make_tool("x", parameters=(ParameterSpec(name="when", type="date"),)),
        )
        (schema,) = registry.get_tool_definitions()
        assert schema["parameters"]["properties"]["when"]["type"] == "string"
        assert schema["parameters"]["required"] == []
