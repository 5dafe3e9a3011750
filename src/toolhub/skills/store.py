"""Skill document storage on disk.

Skills live in a directory tree of category directories, each holding
``<name>.md`` documents:

    skills/
        logistics/
            ankr-logistics-rag.md
        platform/
            ankr-intent-router.md

A skill's identity is the (category, name) pair. Name-only lookups scan
categories in sorted order and take the first match, so a name that exists in
two categories always resolves to the alphabetically first category.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from toolhub.core.console import get_logger

logger = get_logger(__name__)

SKILL_SUFFIX = ".md"


@dataclass(frozen=True)
class Skill:
    name: str
    category: str
    path: Path


class SkillStore:
    """Read-only view over a skills directory."""

    def __init__(self, root: Path) -> None:
        self.root = Path(root).expanduser()

    def exists(self) -> bool:
        return self.root.is_dir()

    def list_categories(self) -> list[str]:
        if not self.root.is_dir():
            return []
        try:
            return sorted(
                entry.name
                for entry in self.root.iterdir()
                if entry.is_dir() and not entry.name.startswith(".")
            )
        except OSError as exc:
            logger.warning("Cannot list skill categories in %s: %s", self.root, exc)
            return []

    def list_in_category(self, category: str) -> list[Skill]:
        category_dir = self.root / category
        if not category_dir.is_dir():
            return []
        try:
            files = sorted(category_dir.glob(f"*{SKILL_SUFFIX}"))
        except OSError as exc:
            logger.warning("Cannot list skills in %s: %s", category_dir, exc)
            return []
        return [Skill(name=path.stem, category=category, path=path) for path in files if path.is_file()]

    def list_all(self) -> list[Skill]:
        skills: list[Skill] = []
        for category in self.list_categories():
            skills.extend(self.list_in_category(category))
        return skills

    def search(self, keyword: str) -> list[Skill]:
        needle = keyword.lower()
        return [
            skill
            for skill in self.list_all()
            if needle in skill.name.lower() or needle in skill.category.lower()
        ]

    def find(self, name: str) -> Skill | None:
        """Resolve a skill by name, scanning categories in enumeration order."""
        wanted = name.lower()
        for category in self.list_categories():
            for skill in self.list_in_category(category):
                if skill.name.lower() == wanted:
                    return skill
        return None

    def find_in(self, category: str, name: str) -> Skill | None:
        path = self.root / category / f"{name}{SKILL_SUFFIX}"
        if not path.is_file():
            return None
        return Skill(name=name, category=category, path=path)

    def read(self, skill: Skill) -> str | None:
        try:
            return skill.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Cannot read skill %s/%s: %s", skill.category, skill.name, exc)
            return None

    def index(self) -> dict[str, list[str]]:
        """Lightweight category -> skill names listing for discovery."""
        return {
            category: [skill.name for skill in self.list_in_category(category)]
            for category in self.list_categories()
        }

    def index_formatted(self) -> str:
        lines = ["# Available Skills", ""]
        for category, names in self.index().items():
            lines.append(f"## {category}")
            lines.extend(f"- {name}" for name in names)
            lines.append("")
        return "\n".join(lines)


__all__ = ["SKILL_SUFFIX", "Skill", "SkillStore"]
