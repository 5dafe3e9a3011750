"""Token-budgeted skill content loading.

load_budgeted() walks the requested names in order and keeps a running
token total. A document is admitted whole when it fits the remaining
budget; otherwise a compressed rendition is tried. The sum of admitted
``approx_tokens`` never exceeds the caller's ceiling.

Only full documents are cached. Compressed text depends on the budget left
at the time it was produced, so it is never reused across calls.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from toolhub.core.console import get_logger
from toolhub.core.tokens import estimate_tokens
from toolhub.skills.store import Skill, SkillStore

logger = get_logger(__name__)

KEY_SECTIONS: tuple[str, ...] = ("Overview", "Usage", "Examples", "Key Patterns")
TRUNCATE_LINES = 50


@dataclass(frozen=True)
class SkillContent:
    name: str
    category: str
    content: str
    approx_tokens: int
    path: Path | None = None
    compressed: bool = False

    @classmethod
    def from_text(
        cls, skill: Skill, content: str, *, compressed: bool = False
    ) -> SkillContent:
        return cls(
            name=skill.name,
            category=skill.category,
            content=content,
            approx_tokens=estimate_tokens(content),
            path=skill.path,
            compressed=compressed,
        )


def extract_key_sections(content: str) -> str:
    """Keep top-level title lines plus every line under a key ``## `` section."""
    kept: list[str] = []
    in_key_section = False
    for line in content.split("\n"):
        if line.startswith("## "):
            heading = line[3:]
            in_key_section = any(section in heading for section in KEY_SECTIONS)
        if in_key_section or line.startswith("# "):
            kept.append(line)
    return "\n".join(kept)


def compress(content: str, budget: int) -> str:
    """Shrink ``content`` toward ``budget`` tokens.

    The result is best effort: callers must re-check its size before use.
    """
    filtered = extract_key_sections(content)
    if estimate_tokens(filtered) <= budget:
        return filtered
    return "\n".join(filtered.split("\n")[:TRUNCATE_LINES])


class SkillContentLoader:
    """Loads skill documents from a SkillStore with an unbounded full-content cache."""

    def __init__(self, store: SkillStore) -> None:
        self.store = store
        self._cache: dict[str, SkillContent] = {}

    def cached_names(self) -> list[str]:
        return list(self._cache)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _read(self, skill: Skill | None) -> SkillContent | None:
        if skill is None:
            return None
        text = self.store.read(skill)
        if text is None:
            return None
        return SkillContent.from_text(skill, text)

    def load(self, name: str) -> SkillContent | None:
        """Load a whole document by name, bypassing any budget."""
        cached = self._cache.get(name)
        if cached is not None:
            return cached
        loaded = self._read(self.store.find(name))
        if loaded is not None:
            self._cache[name] = loaded
        return loaded

    def load_from_category(self, category: str, name: str) -> SkillContent | None:
        return self._read(self.store.find_in(category, name))

    def load_budgeted(self, names: Iterable[str], max_tokens: int) -> list[SkillContent]:
        admitted: list[SkillContent] = []
        used = 0

        for name in names:
            cached = self._cache.get(name)
            if cached is not None:
                if used + cached.approx_tokens <= max_tokens:
                    admitted.append(cached)
                    used += cached.approx_tokens
                else:
                    logger.debug("Skipping cached skill %s: %d tokens over budget", name, cached.approx_tokens)
                continue

            skill = self.store.find(name)
            full = self._read(skill)
            if skill is None or full is None:
                logger.warning("Skill not found: %s", name)
                continue

            remaining = max_tokens - used
            if full.approx_tokens <= remaining:
                self._cache[name] = full
                admitted.append(full)
                used += full.approx_tokens
                continue

            text = compress(full.content, remaining)
            candidate = SkillContent.from_text(skill, text, compressed=True)
            if not text.strip() or candidate.approx_tokens > remaining:
                logger.debug(
                    "Skipping skill %s: %d tokens (compressed %d) exceed remaining %d",
                    name,
                    full.approx_tokens,
                    candidate.approx_tokens,
                    remaining,
                )
                continue

            admitted.append(candidate)
            used += candidate.approx_tokens

        return admitted


__all__ = [
    "KEY_SECTIONS",
    "TRUNCATE_LINES",
    "SkillContent",
    "SkillContentLoader",
    "compress",
    "extract_key_sections",
]
