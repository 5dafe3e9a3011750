"""Skill discovery tools.

Instead of registering one tool per procedure, agents list, search and load
skill documents on demand. The skills directory is checked at call time, so
a missing directory yields a failed result with guidance rather than a
demoted catalog.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from toolhub.capabilities.catalog import ProviderContext
from toolhub.capabilities.categories import SKILLS_CATEGORY
from toolhub.core.result import UnconfiguredError
from toolhub.skills.injection import inject_skills
from toolhub.skills.loader import SkillContentLoader
from toolhub.skills.selector import SkillSelector
from toolhub.skills.store import SkillStore


def _require_store(store: SkillStore) -> SkillStore:
    if not store.exists():
        raise UnconfiguredError(
            "Skills directory not found. Set TOOLHUB_SKILLS__SKILLS_DIR or skills.skills_dir "
            "in the config file.",
            context={"skills_dir": str(store.root)},
        )
    return store


def _names(raw: Any) -> list[str] | None:
    if isinstance(raw, str):
        return [n.strip() for n in raw.split(",") if n.strip()] or None
    if isinstance(raw, (list, tuple)):
        return [str(n) for n in raw] or None
    return None


class SkillsProvider:
    name = "skills"
    requires_resources = False

    def setup(self, context: ProviderContext) -> Iterable[object]:
        skills_config = context.config.skills
        store = context.skill_store or SkillStore(skills_config.skills_dir)
        loader = context.skill_loader or SkillContentLoader(store)
        selector = context.skill_selector or SkillSelector(
            skills_config.product_skills, skills_config.skill_triggers
        )

        def skill_list(params: dict[str, Any]) -> dict[str, Any]:
            _require_store(store)
            category = params.get("category")
            skills = store.list_in_category(str(category)) if category else store.list_all()
            return {
                "skills": [{"name": s.name, "category": s.category} for s in skills],
                "total": len(skills),
                "categories": store.list_categories(),
            }

        def skill_load(params: dict[str, Any]) -> dict[str, Any]:
            _require_store(store)
            name = str(params.get("name") or "")
            category = params.get("category")
            content = (
                loader.load_from_category(str(category), name) if category else loader.load(name)
            )
            if content is None:
                return {
                    "success": False,
                    "error": f'Skill "{name}" not found. Use skill_list to see available skills.',
                }
            return {
                "success": True,
                "data": {"name": content.name, "category": content.category, "content": content.content},
            }

        def skill_search(params: dict[str, Any]) -> dict[str, Any]:
            _require_store(store)
            query = str(params.get("query") or "")
            results = store.search(query)
            return {
                "query": query,
                "results": [{"name": s.name, "category": s.category} for s in results],
                "total": len(results),
            }

        def inject(params: dict[str, Any]) -> dict[str, Any]:
            _require_store(store)
            product = str(params.get("product") or skills_config.default_product)
            max_tokens = int(params.get("max_tokens") or skills_config.max_tokens)
            injection = inject_skills(
                selector,
                loader,
                product,
                query=params.get("query") or None,
                explicit_names=_names(params.get("skills")),
                max_tokens=max_tokens,
            )
            return injection.model_dump()

        return [
            {
                "name": "skill_list",
                "category": SKILLS_CATEGORY,
                "description": "List available skills, optionally filtered by category",
                "parameters": [
                    {"name": "category", "type": "string", "description": "Optional category filter"},
                ],
                "execute": skill_list,
            },
            {
                "name": "skill_load",
                "category": SKILLS_CATEGORY,
                "description": "Load a skill document to learn an API or procedure",
                "parameters": [
                    {"name": "name", "type": "string", "description": "Skill name", "required": True},
                    {"name": "category", "type": "string", "description": "Optional category to narrow the lookup"},
                ],
                "execute": skill_load,
            },
            {
                "name": "skill_search",
                "category": SKILLS_CATEGORY,
                "description": "Search for skills by keyword across all categories",
                "parameters": [
                    {"name": "query", "type": "string", "description": "Search keyword", "required": True},
                ],
                "execute": skill_search,
            },
            {
                "name": "inject_skills",
                "category": SKILLS_CATEGORY,
                "description": "Select and load token-budgeted skills for a product and query",
                "parameters": [
                    {"name": "product", "type": "string", "description": "Product identifier"},
                    {"name": "query", "type": "string", "description": "User query used for skill detection"},
                    {"name": "skills", "type": "array", "description": "Explicit skill names"},
                    {"name": "max_tokens", "type": "number", "description": "Token ceiling", "default": skills_config.max_tokens},
                ],
                "execute": inject,
            },
        ]


PROVIDER = SkillsProvider()

__all__ = ["PROVIDER", "SkillsProvider"]
