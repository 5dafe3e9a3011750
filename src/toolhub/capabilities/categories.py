"""Deterministic tool category inference.

Providers that do not declare a category get one from the tool name. The
pattern groups are tested in a fixed priority order and the first match
wins; reordering them changes how existing catalogs classify, so the order
is part of the public contract.
"""

from __future__ import annotations

from dataclasses import dataclass

GENERAL_CATEGORY = "general"
SKILLS_CATEGORY = "skills"


@dataclass(frozen=True)
class CategoryRule:
    category: str
    prefixes: tuple[str, ...] = ()
    substrings: tuple[str, ...] = ()

    def matches(self, lowered: str) -> bool:
        return lowered.startswith(self.prefixes) or any(s in lowered for s in self.substrings)


CATEGORY_RULES: tuple[CategoryRule, ...] = (
    CategoryRule(
        "compliance",
        prefixes=("gst", "tds"),
        substrings=("tax", "compliance", "itr", "mca"),
    ),
    CategoryRule(
        "erp",
        prefixes=("invoice", "inventory", "purchase"),
        substrings=("erp", "balance_sheet", "profit"),
    ),
    CategoryRule(
        "crm",
        prefixes=("lead", "contact", "opportunity"),
        substrings=("crm", "activity"),
    ),
    CategoryRule(
        "banking",
        prefixes=("upi",),
        substrings=("emi", "sip", "bank", "payment", "fastag"),
    ),
    CategoryRule(
        "government",
        substrings=("aadhaar", "digilocker", "vahan", "sarathi", "pm_kisan", "epf", "ration"),
    ),
    CategoryRule(
        "logistics",
        substrings=("shipment", "container", "freight", "vessel", "port", "tracking", "route"),
    ),
    CategoryRule(
        "fleet",
        substrings=("fleet", "driver", "trip", "vehicle_position", "toll", "distance"),
    ),
    CategoryRule("memory", substrings=("eon", "remember", "recall", "memory")),
    CategoryRule("dev-tools", substrings=("ralph", "code", "deploy", "refactor", "git")),
    CategoryRule("knowledge-base", substrings=("kb_", "knowledge")),
    CategoryRule("orchestration", substrings=("agflow", "slm", "sandbox")),
    CategoryRule("messaging", substrings=("telegram", "whatsapp", "email", "sms")),
    CategoryRule("utilities", substrings=("weather", "web_search", "http", "calculator")),
)

CATEGORY_PRIORITY: tuple[str, ...] = tuple(rule.category for rule in CATEGORY_RULES)

RECOGNIZED_CATEGORIES: tuple[str, ...] = (*CATEGORY_PRIORITY, GENERAL_CATEGORY, SKILLS_CATEGORY)


def infer_category(name: str) -> str:
    """Classify a tool name into a category bucket.

    >>> infer_category("gst_verify")
    'compliance'
    >>> infer_category("lead_create")
    'crm'
    >>> infer_category("random_xyz")
    'general'
    """
    lowered = name.lower()
    for rule in CATEGORY_RULES:
        if rule.matches(lowered):
            return rule.category
    return GENERAL_CATEGORY


def is_recognized(category: str | None) -> bool:
    return category in RECOGNIZED_CATEGORIES


__all__ = [
    "CATEGORY_PRIORITY",
    "CATEGORY_RULES",
    "GENERAL_CATEGORY",
    "RECOGNIZED_CATEGORIES",
    "SKILLS_CATEGORY",
    "CategoryRule",
    "infer_category",
    "is_recognized",
]
