"""Tests for core/config.py - sources, precedence and safe mode."""

from __future__ import annotations

import json
from pathlib import Path

from toolhub.core.config import DEFAULT_PROVIDERS, AppConfig, load_config


def test_defaults(app_config: AppConfig, skills_dir: Path) -> None:
    assert app_config.log_level == "INFO"
    assert app_config.catalog.providers == list(DEFAULT_PROVIDERS)
    assert app_config.skills.max_tokens == 4000
    assert app_config.skills.default_product == "ankr-internal"
    assert app_config.skills.skills_dir == skills_dir
    assert app_config.server.port == 4573


def test_missing_file_is_not_an_error(isolate_config: Path) -> None:
    _, meta = load_config()
    assert meta.path == isolate_config
    assert meta.file_loaded is False
    assert meta.error is None


def test_toml_file(isolate_config: Path) -> None:
    isolate_config.write_text(
        "[skills]\n"
        "max_tokens = 900\n"
        'default_product = "saathi"\n'
        "[skills.product_skills]\n"
        'fleetos = ["fleet-ops", "ankr-mcp-tools"]\n'
        "[server]\n"
        "port = 9000\n",
        encoding="utf-8",
    )

    config, meta = load_config()

    assert meta.file_loaded is True
    assert config.skills.max_tokens == 900
    assert config.skills.default_product == "saathi"
    assert config.skills.product_skills == {"fleetos": ["fleet-ops", "ankr-mcp-tools"]}
    assert config.server.port == 9000


def test_json_file(tmp_path: Path) -> None:
    path = tmp_path / "toolhub.json"
    path.write_text(json.dumps({"catalog": {"providers": ["toolhub.providers.utilities"]}}))

    config, meta = load_config(config_path=path)

    assert meta.file_loaded is True
    assert config.catalog.providers == ["toolhub.providers.utilities"]


def test_env_overrides_file(isolate_config: Path) -> None:
    isolate_config.write_text("[server]\nport = 9000\n", encoding="utf-8")

    config, meta = load_config(env={"TOOLHUB_SERVER__PORT": "9100"})

    assert config.server.port == 9100
    assert "server.port" in meta.env_overrides
    assert "skills.skills_dir" in meta.env_overrides


def test_log_level_override_detected() -> None:
    config, meta = load_config(env={"TOOLHUB_LOG_LEVEL": "DEBUG"})
    assert config.log_level == "DEBUG"
    assert "log_level" in meta.env_overrides


def test_invalid_toml_falls_back_to_defaults(isolate_config: Path) -> None:
    isolate_config.write_text("[skills\nmax_tokens = 1\n", encoding="utf-8")

    config, meta = load_config()

    assert meta.error is not None
    assert "Syntax error" in meta.error
    assert meta.file_loaded is False
    assert config.skills.max_tokens == 4000


def test_invalid_values_fall_back_to_defaults(isolate_config: Path) -> None:
    isolate_config.write_text("[skills]\nmax_tokens = -5\n", encoding="utf-8")

    config, meta = load_config()

    assert meta.error is not None
    assert "max_tokens" in meta.error
    assert config.skills.max_tokens == 4000


def test_non_mapping_root_rejected(tmp_path: Path) -> None:
    path = tmp_path / "toolhub.json"
    path.write_text("[1, 2, 3]")

    _, meta = load_config(config_path=path)

    assert meta.error is not None
    assert "must be a mapping" in meta.error
