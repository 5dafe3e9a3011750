"""Tests for core/runtime.py."""

from __future__ import annotations

import logging

import pytest

from toolhub.core.config import AppConfig
from toolhub.core.runtime import HubContext, build_context


def test_independent_contexts(app_config: AppConfig) -> None:
    first = build_context(app_config)
    second = build_context(app_config)

    assert first.registry is not second.registry
    assert first.skill_loader is not second.skill_loader
    assert len(first.registry) == len(second.registry)


def test_reload_swaps_registry(hub: HubContext) -> None:
    old_registry = hub.registry
    old_catalog = hub.catalog

    catalog = hub.reload()

    assert hub.catalog is catalog
    assert hub.registry is not old_registry
    assert hub.orchestrator.registry is hub.registry
    assert len(hub.registry) == len(old_registry)
    assert catalog.loaded_at >= old_catalog.loaded_at


def test_degraded_tier_is_logged(
    app_config: AppConfig, caplog: pytest.LogCaptureFixture
) -> None:
    config = app_config.model_copy(
        update={"catalog": app_config.catalog.model_copy(update={"providers": ["toolhub_missing"]})}
    )

    with caplog.at_level(logging.WARNING, logger="toolhub"):
        hub = build_context(config)

    assert hub.catalog.tier == "fallback-static"
    assert "fallback-static" in caplog.text
