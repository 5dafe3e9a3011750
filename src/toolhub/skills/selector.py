"""Product- and query-driven skill selection.

Selection never touches the filesystem: it maps a product and an optional
user query to an ordered list of at most three skill names. Keyword matches
always outrank product defaults; defaults only pad a short detection result.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

MAX_SELECTED = 3

FALLBACK_PRODUCT = "ankr-internal"

PRODUCT_SKILLS: dict[str, list[str]] = {
    "swayam": ["ankr-intent-router", "ankr-mcp-tools", "ankr-tms-dev", "ankr-llmbox"],
    "wowtruck": [
        "ankr-intent-router",
        "ankr-mcp-tools",
        "ankr-tms-dev",
        "ankr-voice-hindi",
        "ankr-logistics-rag",
        "ankr-eon-memory",
    ],
    "complimtrx": ["ankr-intent-router", "ankr-mcp-tools", "ankr-tms-dev", "ankr-logistics-rag"],
    "saathi": ["ankr-intent-router", "ankr-mcp-tools", "ankr-voice-hindi", "ankr-eon-memory"],
    "baniai": ["ankr-intent-router", "ankr-mcp-tools", "ankr-tms-dev", "ankr-logistics-rag"],
    "ankr-internal": [
        "ankr-intent-router",
        "ankr-mcp-tools",
        "ankr-tms-dev",
        "ankr-eon-memory",
        "ankr-llmbox",
        "ankr-logistics-rag",
        "ankr-voice-hindi",
    ],
}

# Declaration order is the tie-break order for equal scores.
SKILL_TRIGGERS: dict[str, list[str]] = {
    "ankr-intent-router": [
        "karo", "banao", "dikhao", "batao", "hatao", "create", "make",
        "show", "list", "do", "run", "help", "kar", "bana",
    ],
    "ankr-mcp-tools": [
        "tool", "mcp", "invoke", "call", "execute", "port", "gst",
        "invoice", "commit", "component", "deploy", "check",
    ],
    "ankr-tms-dev": [
        "module", "service", "controller", "nestjs", "prisma", "crud", "api", "dto", "entity",
    ],
    "ankr-eon-memory": ["memory", "episode", "learn", "remember", "pattern", "context", "eon"],
    "ankr-voice-hindi": [
        "voice", "hindi", "tamil", "telugu", "बोलो", "சொல்", "చెప్పు", "speak", "audio",
    ],
    "ankr-llmbox": ["llm", "provider", "cost", "groq", "deepseek", "route", "model"],
    "ankr-logistics-rag": [
        "search", "find", "shipment", "carrier", "route", "track", "delivery", "freight",
    ],
}


def _dedupe(names: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(names))


class SkillSelector:
    """Choose the skill documents relevant to a product/query pair.

    Both tables are ordered lists of strings. Entries passed in ``product_skills``
    or ``skill_triggers`` replace built-in entries with the same key; new keys are
    appended after the built-in ones.
    """

    def __init__(
        self,
        product_skills: Mapping[str, Sequence[str]] | None = None,
        skill_triggers: Mapping[str, Sequence[str]] | None = None,
        fallback_product: str = FALLBACK_PRODUCT,
    ) -> None:
        self.product_skills: dict[str, list[str]] = {k: list(v) for k, v in PRODUCT_SKILLS.items()}
        self.skill_triggers: dict[str, list[str]] = {k: list(v) for k, v in SKILL_TRIGGERS.items()}
        for product, skills in (product_skills or {}).items():
            self.product_skills[product] = [str(s) for s in skills]
        for skill, keywords in (skill_triggers or {}).items():
            self.skill_triggers[skill] = [str(k) for k in keywords]
        self.fallback_product = fallback_product

    @property
    def products(self) -> list[str]:
        return list(self.product_skills)

    def product_defaults(self, product: str) -> list[str]:
        defaults = self.product_skills.get(product)
        if defaults is None:
            defaults = self.product_skills.get(self.fallback_product, [])
        return list(defaults)

    def score(self, query: str) -> dict[str, int]:
        lowered = query.lower()
        return {
            skill: sum(1 for keyword in keywords if keyword.lower() in lowered)
            for skill, keywords in self.skill_triggers.items()
        }

    def detect(self, query: str) -> list[str]:
        """Skills with at least one keyword hit, highest score first.

        ``sorted`` is stable, so equal scores keep declaration order.
        """
        scores = self.score(query)
        matched = [(skill, hits) for skill, hits in scores.items() if hits > 0]
        return [skill for skill, _ in sorted(matched, key=lambda item: item[1], reverse=True)]

    def select_skills(
        self,
        product: str,
        query: str | None = None,
        explicit_names: Sequence[str] | None = None,
    ) -> list[str]:
        if explicit_names:
            return list(explicit_names)

        defaults = self.product_defaults(product)
        if not query:
            return defaults[:MAX_SELECTED]

        return _dedupe([*self.detect(query), *defaults])[:MAX_SELECTED]


__all__ = [
    "FALLBACK_PRODUCT",
    "MAX_SELECTED",
    "PRODUCT_SKILLS",
    "SKILL_TRIGGERS",
    "SkillSelector",
]
