"""Catalog loading with tiered fallback.

The catalog is built by an ordered chain of setup strategies. Each strategy
returns an explicit Ok(raw_tools) or Err(ProviderLoadError); the first one
that produces at least one usable tool wins:

    full              every configured provider, including resource-dependent ones
    fallback-default  only providers that need no external resources
    fallback-static   the embedded STATIC_CATALOG with stub handlers

Raw provider tools are heterogeneous (mappings or attribute objects, with
parameters given as a list or as a name-keyed mapping) and are normalized
into ToolDefinition + FunctionTool pairs here. Nothing in this module lets
an exception escape load_catalog().
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from importlib import import_module
from typing import TYPE_CHECKING, Any, Literal, Protocol

from pydantic import ValidationError

from toolhub.capabilities.categories import infer_category
from toolhub.capabilities.models import (
    FunctionTool,
    ParameterSpec,
    ToolDefinition,
    ToolHandle,
)
from toolhub.capabilities.registry import ToolRegistry
from toolhub.capabilities.static_catalog import STATIC_CATALOG, stub_handler
from toolhub.core.console import get_logger
from toolhub.core.result import Err, Ok, ProviderLoadError, Result

if TYPE_CHECKING:
    from toolhub.core.config import AppConfig
    from toolhub.skills.loader import SkillContentLoader
    from toolhub.skills.selector import SkillSelector
    from toolhub.skills.store import SkillStore

logger = get_logger(__name__)

CatalogTier = Literal["full", "fallback-default", "fallback-static"]

PROVIDER_ATTR = "PROVIDER"


# ---------------------------------------------------------------------------
# Provider protocol
# ---------------------------------------------------------------------------


@dataclass
class ProviderContext:
    """Everything a provider's setup hook may need."""

    config: AppConfig
    skill_store: SkillStore | None = None
    skill_loader: SkillContentLoader | None = None
    skill_selector: SkillSelector | None = None


class ToolProvider(Protocol):
    name: str
    requires_resources: bool

    def setup(self, context: ProviderContext) -> Iterable[object]: ...


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Catalog:
    handles: tuple[ToolHandle, ...]
    loaded_at: datetime
    tier: CatalogTier
    errors: tuple[str, ...] = ()

    @property
    def tools(self) -> list[ToolDefinition]:
        return [handle.definition for handle in self.handles]

    def __len__(self) -> int:
        return len(self.handles)


# ---------------------------------------------------------------------------
# Normalization
# ---------------------------------------------------------------------------


def _field(raw: object, key: str, default: Any = None) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(key, default)
    return getattr(raw, key, default)


def _has_field(raw: object, key: str) -> bool:
    if isinstance(raw, Mapping):
        return key in raw
    return hasattr(raw, key)


def normalize_parameters(raw_params: object) -> list[ParameterSpec]:
    """Normalize list- or mapping-shaped parameter metadata to an ordered list.

    List input keeps list order; mapping input keeps key insertion order and
    the key supplies the parameter name when the entry does not carry one.
    """
    entries: list[tuple[str | None, object]]
    if isinstance(raw_params, Mapping):
        entries = [(str(key), value) for key, value in raw_params.items()]
    elif isinstance(raw_params, (list, tuple)):
        entries = [(None, value) for value in raw_params]
    else:
        return []

    specs: list[ParameterSpec] = []
    for key, entry in entries:
        name = _field(entry, "name") or key
        if not name:
            logger.warning("Dropping unnamed parameter entry: %r", entry)
            continue
        values: dict[str, Any] = {
            "name": str(name),
            "type": _field(entry, "type") or "string",
            "description": _field(entry, "description") or "",
            "required": bool(_field(entry, "required", False)),
        }
        if _has_field(entry, "default"):
            values["default"] = _field(entry, "default")
        specs.append(ParameterSpec(**values))
    return specs


def normalize_tool(raw: object) -> ToolHandle | None:
    """Normalize one raw provider tool; returns None for unusable entries."""
    if isinstance(raw, ToolHandle) and not isinstance(raw, Mapping):
        return raw

    name = _field(raw, "name") or ""
    if not isinstance(name, str) or not name:
        logger.warning("Dropping provider tool without a name: %r", raw)
        return None

    try:
        definition = ToolDefinition(
            name=name,
            description=_field(raw, "description") or "",
            category=_field(raw, "category") or infer_category(name),
            parameters=tuple(normalize_parameters(_field(raw, "parameters"))),
        )
    except ValidationError as exc:
        logger.warning("Dropping malformed provider tool %s: %s", name, exc)
        return None
    execute = _field(raw, "execute")
    handler = execute if callable(execute) else stub_handler(name)
    return FunctionTool(definition=definition, func=handler)


def normalize_tools(raw_tools: Iterable[object]) -> list[ToolHandle]:
    by_name: dict[str, ToolHandle] = {}
    for raw in raw_tools:
        handle = normalize_tool(raw)
        if handle is None:
            continue
        name = handle.definition.name
        if name in by_name:
            logger.warning("Duplicate tool name '%s'; previous definition will be overwritten.", name)
        by_name[name] = handle
    return list(by_name.values())


# ---------------------------------------------------------------------------
# Setup strategies
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SetupStrategy:
    tier: CatalogTier
    run: Callable[[], Result[list[object], ProviderLoadError]]


def import_providers(module_names: Sequence[str]) -> Result[list[ToolProvider], ProviderLoadError]:
    """Import provider modules and collect their PROVIDER objects."""
    providers: list[ToolProvider] = []
    for module_name in module_names:
        try:
            module = import_module(module_name)
        except Exception as exc:
            return Err(
                ProviderLoadError(
                    f"Failed to import provider module: {exc}", context={"module": module_name}
                )
            )
        provider = getattr(module, PROVIDER_ATTR, None)
        if provider is None or not callable(getattr(provider, "setup", None)):
            return Err(
                ProviderLoadError(
                    f"Module does not expose a {PROVIDER_ATTR} with a setup hook",
                    context={"module": module_name},
                )
            )
        providers.append(provider)
    return Ok(providers)


def run_providers(
    providers: Iterable[ToolProvider], context: ProviderContext
) -> Result[list[object], ProviderLoadError]:
    raw_tools: list[object] = []
    for provider in providers:
        name = getattr(provider, "name", type(provider).__name__)
        try:
            produced = list(provider.setup(context))
        except Exception as exc:
            return Err(
                ProviderLoadError(f"Provider setup failed: {exc}", context={"provider": name})
            )
        logger.debug("Provider %s produced %d tools", name, len(produced))
        raw_tools.extend(produced)
    return Ok(raw_tools)


@dataclass
class CatalogLoader:
    """Build the authoritative tool catalog via the fallback chain.

    Providers come either from ``providers`` (already constructed) or from
    importing ``provider_modules`` fresh on every load.
    """

    context: ProviderContext
    provider_modules: Sequence[str] = ()
    providers: Sequence[ToolProvider] | None = None
    static_catalog: Sequence[Mapping[str, Any]] = field(default=STATIC_CATALOG)

    def _resolve_providers(self) -> Result[list[ToolProvider], ProviderLoadError]:
        if self.providers is not None:
            return Ok(list(self.providers))
        return import_providers(self.provider_modules)

    def _full_setup(self) -> Result[list[object], ProviderLoadError]:
        resolved = self._resolve_providers()
        if resolved.is_err():
            return resolved
        return run_providers(resolved.unwrap(), self.context)

    def _reduced_setup(self) -> Result[list[object], ProviderLoadError]:
        resolved = self._resolve_providers()
        if resolved.is_err():
            return resolved
        independent = [p for p in resolved.unwrap() if not getattr(p, "requires_resources", False)]
        return run_providers(independent, self.context)

    def _static_setup(self) -> Result[list[object], ProviderLoadError]:
        return Ok(list(self.static_catalog))

    def strategies(self) -> list[SetupStrategy]:
        return [
            SetupStrategy("full", self._full_setup),
            SetupStrategy("fallback-default", self._reduced_setup),
            SetupStrategy("fallback-static", self._static_setup),
        ]

    def load_catalog(self) -> Catalog:
        errors: list[str] = []
        handles: list[ToolHandle] = []
        tier: CatalogTier = "fallback-static"

        for strategy in self.strategies():
            try:
                outcome = strategy.run()
                if outcome.is_ok():
                    handles = normalize_tools(outcome.unwrap())
                    if not handles:
                        outcome = Err(ProviderLoadError("Setup produced no usable tools"))
            except Exception as exc:
                outcome = Err(ProviderLoadError(f"Unexpected setup failure: {exc}"))

            if isinstance(outcome, Err):
                errors.append(f"{strategy.tier}: {outcome.error}")
                logger.warning(
                    "Catalog tier %s failed, demoting: %s", strategy.tier, outcome.error
                )
                handles = []
                continue

            tier = strategy.tier
            break

        catalog = Catalog(
            handles=tuple(handles),
            loaded_at=datetime.now(UTC),
            tier=tier,
            errors=tuple(errors),
        )
        logger.info("Loaded %d tools (tier=%s)", len(catalog), catalog.tier)
        return catalog


def register_catalog(registry: ToolRegistry, catalog: Catalog) -> int:
    """Register every catalog handle under its own category."""
    for handle in catalog.handles:
        registry.register(handle, handle.definition.category)
    return len(catalog.handles)


__all__ = [
    "PROVIDER_ATTR",
    "Catalog",
    "CatalogLoader",
    "CatalogTier",
    "ProviderContext",
    "SetupStrategy",
    "ToolProvider",
    "import_providers",
    "normalize_parameters",
    "normalize_tool",
    "normalize_tools",
    "register_catalog",
    "run_providers",
]
