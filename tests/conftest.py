from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console
from typer.testing import CliRunner

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from toolhub.core.config import AppConfig, load_config  # noqa: E402
from toolhub.core.runtime import HubContext, build_context  # noqa: E402

SAMPLE_SKILLS: dict[str, dict[str, str]] = {
    "platform": {
        "ankr-intent-router": (
            "# Intent Router\n\n## Overview\nRoutes Hindi and English intents to tools.\n\n"
            "## Internals\nRegex tables and fallbacks.\n"
        ),
        "ankr-mcp-tools": "# MCP Tools\n\n## Usage\nCall tools by exact name.\n",
    },
    "memory": {
        "ankr-eon-memory": "# EON Memory\n\n## Overview\nEpisodic memory for agents.\n",
    },
    "logistics": {
        "ankr-logistics-rag": "# Logistics RAG\n\n## Examples\nsearch shipment by LR number\n",
    },
}


def write_skills(root: Path, skills: dict[str, dict[str, str]]) -> Path:
    for category, docs in skills.items():
        category_dir = root / category
        category_dir.mkdir(parents=True, exist_ok=True)
        for name, content in docs.items():
            (category_dir / f"{name}.md").write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def skills_dir(tmp_path: Path) -> Path:
    return tmp_path / "skills"


@pytest.fixture(autouse=True)
def isolate_config(tmp_path: Path, skills_dir: Path, monkeypatch: Any) -> Path:
    """Point config, skills and the memory database at temp paths."""
    cfg_path = tmp_path / "config.toml"
    monkeypatch.setenv("TOOLHUB_CONFIG", str(cfg_path))
    monkeypatch.setenv("TOOLHUB_SKILLS__SKILLS_DIR", str(skills_dir))
    monkeypatch.setenv("TOOLHUB_CATALOG__MEMORY_DATABASE", str(tmp_path / "memory.sqlite"))
    for key in ("TOOLHUB_LOG_LEVEL", "TOOLHUB_SERVER__PORT", "TOOLHUB_SKILLS__MAX_TOKENS"):
        monkeypatch.delenv(key, raising=False)
    return cfg_path


@pytest.fixture
def skill_writer() -> Callable[[Path, dict[str, dict[str, str]]], Path]:
    return write_skills


@pytest.fixture
def sample_skills(skills_dir: Path) -> Path:
    return write_skills(skills_dir, SAMPLE_SKILLS)


@pytest.fixture
def app_config() -> AppConfig:
    config, _ = load_config()
    return config


@pytest.fixture
def hub(app_config: AppConfig, sample_skills: Path) -> HubContext:
    return build_context(app_config)


@pytest.fixture(autouse=True)
def capture_console(monkeypatch: Any) -> Console:
    """Use an in-memory Rich console during tests."""
    test_console = Console(record=True, width=200)
    import toolhub.commands.skills as skills_commands
    import toolhub.commands.tools as tools_commands
    import toolhub.core.console as core_console
    import toolhub.main as toolhub_main

    for module in (core_console, toolhub_main, tools_commands, skills_commands):
        monkeypatch.setattr(module, "console", test_console)
    return test_console
