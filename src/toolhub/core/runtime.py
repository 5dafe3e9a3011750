"""
Explicitly constructed runtime context for toolhub.

Every consumer (CLI commands, the HTTP bridge, tests) builds its own
HubContext instead of reaching for module-level singletons, so independent
instances never share a registry or a skill cache.

Usage:
    from toolhub.core.runtime import build_context

    ctx = build_context(config)
    result = await ctx.orchestrator.execute_one("gst_calc", {"amount": 100})
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from toolhub.capabilities.catalog import (
    Catalog,
    CatalogLoader,
    ProviderContext,
    ToolProvider,
    register_catalog,
)
from toolhub.capabilities.executor import ExecutionOrchestrator
from toolhub.capabilities.registry import ToolRegistry
from toolhub.core.console import get_logger
from toolhub.skills.loader import SkillContentLoader
from toolhub.skills.selector import SkillSelector
from toolhub.skills.store import SkillStore

if TYPE_CHECKING:
    from toolhub.core.config import AppConfig

logger = get_logger(__name__)


@dataclass
class HubContext:
    """Runtime state for one hub instance.

    Attributes:
        config: The loaded AppConfig
        skill_store: View over the configured skills directory
        skill_loader: Budgeted skill loader owning the content cache
        skill_selector: Product/query skill selector
        catalog_loader: Fallback-chain catalog builder
        registry: Tools registered from the current catalog
        orchestrator: Dispatcher bound to ``registry``
        catalog: The catalog the registry was last built from
    """

    config: AppConfig
    skill_store: SkillStore
    skill_loader: SkillContentLoader
    skill_selector: SkillSelector
    catalog_loader: CatalogLoader
    registry: ToolRegistry
    orchestrator: ExecutionOrchestrator
    catalog: Catalog

    def reload(self) -> Catalog:
        """Rebuild the catalog and swap in a fresh registry."""
        catalog = self.catalog_loader.load_catalog()
        registry = ToolRegistry()
        register_catalog(registry, catalog)
        self.registry = registry
        self.orchestrator = ExecutionOrchestrator(registry)
        self.catalog = catalog
        return catalog


def build_context(
    config: AppConfig, providers: Sequence[ToolProvider] | None = None
) -> HubContext:
    """Construct an independent hub: skills layer, catalog, registry and orchestrator."""
    store = SkillStore(config.skills.skills_dir)
    loader = SkillContentLoader(store)
    selector = SkillSelector(config.skills.product_skills, config.skills.skill_triggers)

    catalog_loader = CatalogLoader(
        context=ProviderContext(
            config=config, skill_store=store, skill_loader=loader, skill_selector=selector
        ),
        provider_modules=tuple(config.catalog.providers),
        providers=providers,
    )
    catalog = catalog_loader.load_catalog()
    registry = ToolRegistry()
    register_catalog(registry, catalog)
    if catalog.tier != "full":
        logger.warning("Running on degraded catalog tier %s", catalog.tier)

    return HubContext(
        config=config,
        skill_store=store,
        skill_loader=loader,
        skill_selector=selector,
        catalog_loader=catalog_loader,
        registry=registry,
        orchestrator=ExecutionOrchestrator(registry),
        catalog=catalog,
    )


__all__ = ["HubContext", "build_context"]
