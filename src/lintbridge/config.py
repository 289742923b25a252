# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and loaders for lintbridge."""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

PYPROJECT_FILENAME: Final[str] = "pyproject.toml"
CONFIG_FILENAME: Final[str] = ".lintbridge.toml"
PYPROJECT_TOOL_KEY: Final[str] = "tool"
PYPROJECT_SECTION_KEY: Final[str] = "lintbridge"

DEFAULT_TITLE: Final[str] = "Clippy"
DEFAULT_LOGO_URL: Final[str] = "https://www.rust-lang.org/logos/rust-logo-blk.svg"
DEFAULT_REPORT_KEY: Final[str] = "lintbridge.clippy"
DEFAULT_COMMAND: Final[tuple[str, ...]] = ("cargo", "clippy", "--message-format", "json")

_ENV_VAR_PATTERN = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


class ConfigError(Exception):
    """Raised when configuration input is invalid."""


class ServerConfig(BaseModel):
    """Location of and credentials for the Bitbucket Server instance."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    url: str | None = None
    project: str | None = None
    slug: str | None = None
    username: str | None = None
    password: str | None = None
    timeout: float = Field(default=30.0, gt=0)

    def missing_fields(self) -> list[str]:
        """Return the names of fields required for publishing that are unset."""

        required = ("url", "project", "slug", "username", "password")
        return [name for name in required if not getattr(self, name)]


class ToolConfig(BaseModel):
    """Identity and invocation of the analysis tool."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    title: str = Field(default=DEFAULT_TITLE, min_length=1)
    logo_url: str | None = DEFAULT_LOGO_URL
    report_key: str = Field(default=DEFAULT_REPORT_KEY, min_length=1)
    command: list[str] = Field(default_factory=lambda: list(DEFAULT_COMMAND), min_length=1)
    timeout: float | None = Field(default=None, gt=0)


class OutputConfig(BaseModel):
    """Console output preferences."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    emoji: bool = True
    color: bool = True
    verbose: bool = False


class Config(BaseModel):
    """Top-level lintbridge configuration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    server: ServerConfig = Field(default_factory=ServerConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as plain data."""

        return self.model_dump(mode="python")


def _deep_merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], Mapping) and isinstance(value, Mapping):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _expand_env_value(value: Any, env: Mapping[str, str]) -> Any:
    if isinstance(value, str):
        return _expand_env_string(value, env)
    if isinstance(value, Mapping):
        return {k: _expand_env_value(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env_value(v, env) for v in value]
    return value


def _expand_env_string(value: str, env: Mapping[str, str]) -> str:
    def _replace(match: re.Match[str]) -> str:
        key = match.group(1) or match.group(2)
        if key is None:
            return match.group(0)
        return env.get(key, match.group(0))

    return _ENV_VAR_PATTERN.sub(_replace, value)


def _read_toml(path: Path) -> dict[str, Any]:
    """Return the TOML document at ``path`` or an empty mapping when absent.

    Raises:
        ConfigError: When the file exists but cannot be parsed.
    """

    if not path.is_file():
        return {}
    try:
        with path.open("rb") as handle:
            return tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Unable to read {path}: {exc}") from exc


def _pyproject_section(path: Path) -> dict[str, Any]:
    """Return the ``[tool.lintbridge]`` table of ``path`` when present."""

    tool_section = _read_toml(path).get(PYPROJECT_TOOL_KEY)
    if not isinstance(tool_section, Mapping):
        return {}
    section = tool_section.get(PYPROJECT_SECTION_KEY)
    if section is None:
        return {}
    if not isinstance(section, Mapping):
        raise ConfigError(f"[{PYPROJECT_TOOL_KEY}.{PYPROJECT_SECTION_KEY}] in {path} must be a table")
    return dict(section)


def load_config(root: Path, *, env: Mapping[str, str] | None = None) -> Config:
    """Load configuration for the project rooted at ``root``.

    Layers, lowest precedence first: built-in defaults, ``[tool.lintbridge]``
    in ``pyproject.toml``, then ``.lintbridge.toml``. ``$VAR`` and ``${VAR}``
    references in string values are expanded from ``env``.

    Args:
        root: Project directory containing the configuration files.
        env: Environment used for variable expansion; defaults to ``os.environ``.

    Returns:
        Config: Validated configuration.

    Raises:
        ConfigError: When a document is unreadable or fails validation.
    """

    environment = os.environ if env is None else env
    merged: dict[str, Any] = {}
    for fragment in (_pyproject_section(root / PYPROJECT_FILENAME), _read_toml(root / CONFIG_FILENAME)):
        merged = _deep_merge(merged, fragment)
    expanded = _expand_env_value(merged, environment)
    try:
        return Config.model_validate(expanded)
    except ValidationError as exc:
        raise ConfigError(f"Invalid lintbridge configuration: {exc}") from exc


def apply_overrides(config: Config, overrides: Mapping[str, Mapping[str, Any]]) -> Config:
    """Return ``config`` with non-``None`` values from ``overrides`` applied per section.

    Raises:
        ConfigError: When an override fails validation.
    """

    cleaned = {
        section: {key: value for key, value in values.items() if value is not None}
        for section, values in overrides.items()
    }
    try:
        return Config.model_validate(_deep_merge(config.to_dict(), cleaned))
    except ValidationError as exc:
        raise ConfigError(f"Invalid option value: {exc}") from exc


__all__ = [
    "CONFIG_FILENAME",
    "Config",
    "ConfigError",
    "DEFAULT_COMMAND",
    "DEFAULT_LOGO_URL",
    "DEFAULT_REPORT_KEY",
    "DEFAULT_TITLE",
    "OutputConfig",
    "ServerConfig",
    "ToolConfig",
    "apply_overrides",
    "load_config",
]
