"""Application configuration management.

Handles loading and validating configuration from multiple sources:
    - TOML/JSON config files
    - Environment variables (TOOLHUB_* prefix)
    - Default values

Key components:
    - AppConfig: Main configuration model
    - load_config(): Safe config loading with fallback
    - ConfigLoadResult: Metadata about config source
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from contextlib import nullcontext
from dataclasses import dataclass
from pathlib import Path
from typing import Any
from unittest.mock import patch

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from toolhub.core.result import ConfigurationError

CONFIG_ENV_VAR = "TOOLHUB_CONFIG"

DEFAULT_PROVIDERS: tuple[str, ...] = (
    "toolhub.providers.utilities",
    "toolhub.providers.memory",
    "toolhub.providers.skills",
)


# -----------------------------------------------------------------------------
# Sub-configuration Models
# -----------------------------------------------------------------------------


class CatalogConfig(BaseModel):
    """Tool catalog and provider configuration."""

    providers: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PROVIDERS),
        description="Provider modules imported during catalog setup, in order.",
    )
    memory_database: Path = Field(
        default_factory=lambda: Path.home() / ".toolhub" / "memory.sqlite",
        description="SQLite file backing the resource-dependent memory provider.",
    )


class SkillsConfig(BaseModel):
    """Skill document loading configuration."""

    skills_dir: Path = Field(
        default_factory=lambda: Path.home() / ".toolhub" / "skills",
        description="Root directory holding <category>/<name>.md skill documents.",
    )
    max_tokens: int = Field(default=4000, description="Default token ceiling for skill injection.")
    default_product: str = Field(
        default="ankr-internal", description="Product used when a caller names none."
    )
    product_skills: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Extra or overriding product -> default skill lists.",
    )
    skill_triggers: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Extra or overriding skill -> trigger keyword lists.",
    )

    @field_validator("max_tokens")
    @classmethod
    def non_negative_budget(cls, v: int) -> int:
        if v < 0:
            raise ValueError("max_tokens must be non-negative")
        return v


class ServerConfig(BaseModel):
    """HTTP bridge configuration."""

    host: str = Field(default="127.0.0.1", description="Interface the HTTP bridge binds to.")
    port: int = Field(default=4573, description="Port the HTTP bridge listens on.")


@dataclass
class ConfigLoadResult:
    path: Path
    file_loaded: bool
    env_overrides: set[str]
    error: str | None = None


class AppConfig(BaseSettings):
    """Application-wide configuration with nested sub-configs."""

    model_config = SettingsConfigDict(
        env_prefix="TOOLHUB_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Log level for toolhub output.")
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    @field_validator("skills", mode="after")
    @classmethod
    def expand_skill_paths(cls, v: SkillsConfig) -> SkillsConfig:
        v.skills_dir = v.skills_dir.expanduser()
        return v

    @field_validator("catalog", mode="after")
    @classmethod
    def expand_catalog_paths(cls, v: CatalogConfig) -> CatalogConfig:
        v.memory_database = v.memory_database.expanduser()
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        # Ensure environment variables override config file entries.
        return (env_settings, init_settings, dotenv_settings, file_secret_settings)


def _resolve_config_path(config_path: Path | None, env_vars: Mapping[str, str]) -> Path:
    candidate = config_path or env_vars.get(CONFIG_ENV_VAR) or (Path.home() / ".toolhub.toml")
    return Path(candidate).expanduser()


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}

    raw = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    parser = json.loads if suffix == ".json" else tomllib.loads

    try:
        data = parser(raw)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Syntax error in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Config root in {path} must be a mapping.")

    return data


def _detect_env_overrides(env_vars: Mapping[str, str]) -> set[str]:
    """Detect which fields are overridden by environment variables.

    For nested models, detects vars like TOOLHUB_SKILLS__MAX_TOKENS.
    """
    prefix = AppConfig.model_config.get("env_prefix", "")
    delimiter = AppConfig.model_config.get("env_nested_delimiter", "__")
    overrides: set[str] = set()

    if f"{prefix}LOG_LEVEL" in env_vars:
        overrides.add("log_level")

    nested_models: dict[str, type[BaseModel]] = {
        "catalog": CatalogConfig,
        "skills": SkillsConfig,
        "server": ServerConfig,
    }

    for group_name, model_cls in nested_models.items():
        for field in model_cls.model_fields:
            env_key = f"{prefix}{group_name}{delimiter}{field}".upper()
            if env_key in env_vars:
                overrides.add(f"{group_name}.{field}")

    return overrides


def load_config(
    config_path: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> tuple[AppConfig, ConfigLoadResult]:
    """
    Load configuration with Safe Mode fallback.
    If the file is invalid, returns default config + error message.
    """
    env_vars: Mapping[str, str] = os.environ if env is None else {**os.environ, **env}
    resolved_path = _resolve_config_path(config_path, env_vars)
    env_overrides = _detect_env_overrides(env_vars)

    error: str | None = None
    file_loaded = False
    file_data: dict[str, Any] = {}

    try:
        file_data = _read_config_file(resolved_path)
        file_loaded = resolved_path.exists()
    except ConfigurationError as exc:
        error = str(exc)

    context_manager = (
        patch.dict(os.environ, env_vars, clear=False) if env is not None else nullcontext()
    )

    try:
        with context_manager:
            config = AppConfig(**file_data)
    except ValidationError as exc:
        error = str(exc)
        config = AppConfig()

    load_result = ConfigLoadResult(
        path=resolved_path,
        file_loaded=file_loaded,
        env_overrides=env_overrides,
        error=error,
    )

    return config, load_result
