"""Configuration for skills-hub.

Settings are layered: built-in defaults, then an optional ``skills-hub.yaml``
in the working directory (or an explicit path), then ``SKILLS_HUB_*``
environment variables. Nested values use ``__`` in environment variable names,
e.g. ``SKILLS_HUB_LOGGER__LEVEL=debug``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from skills_hub.core.exceptions import ConfigFileError

CONFIG_FILENAME = "skills-hub.yaml"
DEFAULT_STATE_FILENAME = ".skillsrc.json"


class LoggerSettings(BaseModel):
    level: Literal["debug", "info", "warning", "error"] = "warning"

    model_config = ConfigDict(extra="ignore")


class Settings(BaseSettings):
    default_branch: str = "main"
    """Branch used to build raw content URLs when the reference names none."""

    state_file: str = DEFAULT_STATE_FILENAME
    """Local state file, relative to the working directory unless absolute."""

    output_dir: str = "."
    """Default directory generated platform files are written to."""

    logger: LoggerSettings = Field(default_factory=LoggerSettings)

    model_config = SettingsConfigDict(
        env_prefix="SKILLS_HUB_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # init kwargs carry the YAML file contents, so environment wins over them
        return (env_settings, init_settings)

    def resolve_state_path(self, cwd: Path | None = None) -> Path:
        path = Path(self.state_file).expanduser()
        if not path.is_absolute():
            path = (cwd or Path.cwd()) / path
        return path


_settings: Settings | None = None


def find_config_file(cwd: Path | None = None) -> Path | None:
    candidate = (cwd or Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return candidate
    return None


def load_config_payload(path: Path) -> dict[str, Any]:
    with open(path, encoding="utf-8") as handle:
        payload = yaml.safe_load(handle) or {}
    if not isinstance(payload, dict):
        raise ValueError(f"Configuration file must contain a mapping: {path}")
    return payload


def get_settings(config_path: str | Path | None = None) -> Settings:
    """Return the process-wide settings, loading them on first use."""
    global _settings
    if config_path is None and _settings is not None:
        return _settings

    path = Path(config_path) if config_path is not None else find_config_file()
    source = str(path) if path is not None else "environment"
    try:
        payload = load_config_payload(path) if path is not None else {}
        settings = Settings(**payload)
    except (OSError, ValueError, ValidationError, yaml.YAMLError) as exc:
        raise ConfigFileError(f"Invalid configuration ({source})", str(exc)) from exc
    _settings = settings
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
