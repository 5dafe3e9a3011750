from __future__ import annotations

from pathlib import Path

from typer.main import get_command
from typer.testing import CliRunner

from toolhub import __version__
from toolhub.main import app

runner = CliRunner()


def test_app_version() -> None:
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_all_commands_have_help() -> None:
    """
    Iterate over every registered command and group and ensure it accepts
    --help. This catches import errors and broken option declarations in
    the command modules.
    """
    commands = getattr(get_command(app), "commands", {})
    assert {"config", "version", "serve", "tools", "skills"} <= set(commands)
    for name in commands:
        result = runner.invoke(app, [name, "--help"])
        assert result.exit_code == 0, f"Command 'toolhub {name} --help' failed!"
        assert "Usage:" in result.stdout


def test_config_command(isolate_config: Path) -> None:
    result = runner.invoke(app, ["config"])
    assert result.exit_code == 0
    assert "Config source" in result.stdout
    assert "File loaded: no" in result.stdout
    assert "skills.skills_dir" in result.stdout


def test_broken_config_enters_safe_mode(isolate_config: Path) -> None:
    isolate_config.write_text("[skills\n", encoding="utf-8")

    result = runner.invoke(app, ["config"])

    assert result.exit_code == 0
    assert "Safe Mode Active" in result.stdout
    assert "Using default settings." in result.stdout
