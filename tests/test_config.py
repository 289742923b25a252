# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for configuration loading."""

from __future__ import annotations

from pathlib import Path
from textwrap import dedent

import pytest

from lintbridge.config import (
    DEFAULT_COMMAND,
    DEFAULT_REPORT_KEY,
    Config,
    ConfigError,
    apply_overrides,
    load_config,
)


def test_defaults_when_no_files(tmp_path: Path) -> None:
    config = load_config(tmp_path, env={})
    assert config == Config()
    assert config.tool.title == "Clippy"
    assert tuple(config.tool.command) == DEFAULT_COMMAND
    assert config.tool.report_key == DEFAULT_REPORT_KEY
    assert config.server.missing_fields() == ["url", "project", "slug", "username", "password"]


def test_pyproject_then_dotfile_precedence(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        dedent(
            """
            [tool.lintbridge.server]
            url = "https://bitbucket.example.test"
            project = "PRJ"

            [tool.lintbridge.tool]
            title = "Clippy (pedantic)"
            """
        ),
        encoding="utf-8",
    )
    (tmp_path / ".lintbridge.toml").write_text(
        dedent(
            """
            [server]
            project = "OVERRIDE"
            password = "${BB_TOKEN}"
            """
        ),
        encoding="utf-8",
    )

    config = load_config(tmp_path, env={"BB_TOKEN": "s3cret"})

    assert config.server.url == "https://bitbucket.example.test"
    assert config.server.project == "OVERRIDE"
    assert config.server.password == "s3cret"
    assert config.tool.title == "Clippy (pedantic)"


def test_unknown_key_rejected(tmp_path: Path) -> None:
    (tmp_path / ".lintbridge.toml").write_text("[server]\nhost = 'x'\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path, env={})


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    (tmp_path / ".lintbridge.toml").write_text("[server\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path, env={})


def test_overrides_ignore_none_values() -> None:
    base = Config()
    updated = apply_overrides(
        base,
        {"server": {"url": "https://bb.test", "project": None}, "output": {"emoji": False}},
    )
    assert updated.server.url == "https://bb.test"
    assert updated.server.project is None
    assert updated.output.emoji is False


def test_empty_title_override_rejected() -> None:
    with pytest.raises(ConfigError):
        apply_overrides(Config(), {"tool": {"title": ""}})
