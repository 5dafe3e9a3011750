"""Tests for skills/store.py - category directory layout and lookups."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from toolhub.skills.store import SkillStore


class TestListing:
    def test_missing_root(self, tmp_path: Path) -> None:
        store = SkillStore(tmp_path / "absent")
        assert store.exists() is False
        assert store.list_categories() == []
        assert store.list_all() == []
        assert store.index() == {}

    def test_categories_sorted(self, sample_skills: Path) -> None:
        store = SkillStore(sample_skills)
        assert store.list_categories() == ["logistics", "memory", "platform"]

    def test_hidden_dirs_and_other_files_ignored(self, sample_skills: Path) -> None:
        (sample_skills / ".git").mkdir()
        (sample_skills / "platform" / "notes.txt").write_text("x", encoding="utf-8")
        store = SkillStore(sample_skills)

        assert ".git" not in store.list_categories()
        assert [s.name for s in store.list_in_category("platform")] == [
            "ankr-intent-router",
            "ankr-mcp-tools",
        ]

    def test_list_all_in_enumeration_order(self, sample_skills: Path) -> None:
        store = SkillStore(sample_skills)
        assert [(s.category, s.name) for s in store.list_all()] == [
            ("logistics", "ankr-logistics-rag"),
            ("memory", "ankr-eon-memory"),
            ("platform", "ankr-intent-router"),
            ("platform", "ankr-mcp-tools"),
        ]


class TestLookup:
    def test_find_case_insensitive(self, sample_skills: Path) -> None:
        skill = SkillStore(sample_skills).find("ANKR-EON-MEMORY")
        assert skill is not None
        assert skill.category == "memory"

    def test_find_first_category_wins(self, sample_skills: Path, skill_writer: Any) -> None:
        skill_writer(sample_skills, {"aaa": {"ankr-mcp-tools": "# shadow\n"}})
        skill = SkillStore(sample_skills).find("ankr-mcp-tools")
        assert skill is not None
        assert skill.category == "aaa"

    def test_find_missing(self, sample_skills: Path) -> None:
        assert SkillStore(sample_skills).find("nope") is None

    def test_find_in(self, sample_skills: Path) -> None:
        store = SkillStore(sample_skills)
        assert store.find_in("platform", "ankr-mcp-tools") is not None
        assert store.find_in("memory", "ankr-mcp-tools") is None

    def test_search_matches_name_or_category(self, sample_skills: Path) -> None:
        store = SkillStore(sample_skills)
        assert [s.name for s in store.search("EON")] == ["ankr-eon-memory"]
        assert {s.name for s in store.search("platform")} == {
            "ankr-intent-router",
            "ankr-mcp-tools",
        }

    def test_read(self, sample_skills: Path) -> None:
        store = SkillStore(sample_skills)
        skill = store.find("ankr-mcp-tools")
        assert skill is not None
        assert store.read(skill) == "# MCP Tools\n\n## Usage\nCall tools by exact name.\n"


def test_index_formatted(sample_skills: Path) -> None:
    text = SkillStore(sample_skills).index_formatted()
    assert text.startswith("# Available Skills\n\n## logistics\n- ankr-logistics-rag\n")
    assert "## platform\n- ankr-intent-router\n- ankr-mcp-tools\n" in text
