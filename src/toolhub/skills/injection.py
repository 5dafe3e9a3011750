"""Assemble selected skills into model context."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel, Field

from toolhub.skills.loader import SkillContent, SkillContentLoader
from toolhub.skills.selector import SkillSelector

SKILL_SEPARATOR = "\n\n---\n\n"

Message = Mapping[str, Any]


class SkillInjection(BaseModel):
    product: str
    skills: list[str] = Field(default_factory=list)
    system_prompt: str = ""
    tokens_added: int = 0


def build_skill_prompt(skills: Sequence[SkillContent], product: str) -> str:
    """Wrap admitted skill contents in a ``<skills>`` block; empty input yields ''."""
    if not skills:
        return ""
    body = SKILL_SEPARATOR.join(skill.content for skill in skills)
    return (
        f'<skills product="{product}">\n'
        f"{body}\n"
        "</skills>\n\n"
        "Follow the patterns and guidelines from the skills above."
    )


def inject_skills(
    selector: SkillSelector,
    loader: SkillContentLoader,
    product: str,
    query: str | None = None,
    explicit_names: Sequence[str] | None = None,
    max_tokens: int = 4000,
) -> SkillInjection:
    names = selector.select_skills(product, query, explicit_names)
    admitted = loader.load_budgeted(names, max_tokens)
    return SkillInjection(
        product=product,
        skills=[skill.name for skill in admitted],
        system_prompt=build_skill_prompt(admitted, product),
        tokens_added=sum(skill.approx_tokens for skill in admitted),
    )


def inject_into_messages(
    messages: Sequence[Message],
    selector: SkillSelector,
    loader: SkillContentLoader,
    product: str,
    query: str | None = None,
    explicit_names: Sequence[str] | None = None,
    max_tokens: int = 4000,
) -> list[dict[str, Any]]:
    """Return a copy of ``messages`` with the skill prompt in the system slot.

    The query defaults to the content of the last message. An existing leading
    system message keeps its text after the skill prompt.
    """
    out = [dict(message) for message in messages]
    if query is None and out:
        query = str(out[-1].get("content") or "")

    injection = inject_skills(selector, loader, product, query, explicit_names, max_tokens)
    if not injection.system_prompt:
        return out

    if out and out[0].get("role") == "system":
        existing = str(out[0].get("content") or "")
        out[0]["content"] = f"{injection.system_prompt}\n\n{existing}"
        return out
    return [{"role": "system", "content": injection.system_prompt}, *out]


__all__ = [
    "SKILL_SEPARATOR",
    "SkillInjection",
    "build_skill_prompt",
    "inject_into_messages",
    "inject_skills",
]
