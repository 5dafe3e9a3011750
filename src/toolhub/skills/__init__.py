"""Skill documents: storage, selection, budgeted loading and injection."""

from __future__ import annotations

from toolhub.skills.injection import build_skill_prompt, inject_into_messages, inject_skills
from toolhub.skills.loader import SkillContent, SkillContentLoader
from toolhub.skills.selector import SkillSelector
from toolhub.skills.store import Skill, SkillStore

__all__ = [
    "Skill",
    "SkillContent",
    "SkillContentLoader",
    "SkillSelector",
    "SkillStore",
    "build_skill_prompt",
    "inject_into_messages",
    "inject_skills",
]
