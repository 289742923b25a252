# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for revision lookup and diagnostic sources."""

from __future__ import annotations

import shutil
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

import pytest

from lintbridge.core.errors import RevisionError, SourceError
from lintbridge.discovery import CommandDiagnosticSource, GitRevisionProvider, StaticDiagnosticSource
from lintbridge.parsers import map_diagnostics

COMMIT = "0123456789abcdef0123456789abcdef01234567"


def test_revision_from_runner(tmp_path: Path) -> None:
    calls: list[tuple[tuple[str, ...], Path]] = []

    def runner(cmd: Sequence[str], root: Path) -> list[str]:
        calls.append((tuple(cmd), root))
        return [f"{COMMIT}\n"]

    provider = GitRevisionProvider(tmp_path, runner=runner)
    assert provider.current_revision() == COMMIT
    assert calls == [(("git", "rev-parse", "HEAD"), tmp_path)]


@pytest.mark.parametrize("output", [[], [""], ["HEAD"], ["fatal: not a git repository"]])
def test_revision_rejects_non_hash_output(tmp_path: Path, output: list[str]) -> None:
    provider = GitRevisionProvider(tmp_path, runner=lambda cmd, root: output)
    with pytest.raises(RevisionError):
        provider.current_revision()


@pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")
def test_revision_from_real_repository(tmp_path: Path) -> None:
    def git(*args: str) -> None:
        subprocess.run(["git", *args], cwd=tmp_path, check=True, capture_output=True)

    git("init", "-q")
    (tmp_path / "README").write_text("demo\n", encoding="utf-8")
    git("add", "README")
    identity = ("-c", "user.name=Test", "-c", "user.email=test@example.test", "-c", "commit.gpgsign=false")
    git(*identity, "commit", "-q", "-m", "init")

    revision = GitRevisionProvider(tmp_path).current_revision()
    assert len(revision) == 40


def test_command_source_yields_stdout_lines(tmp_path: Path) -> None:
    script = "import sys; print('one'); print('two'); sys.stderr.write('noise'); sys.exit(101)"
    source = CommandDiagnosticSource([sys.executable, "-c", script], cwd=tmp_path)
    assert list(source.lines()) == ["one", "two"]


def test_command_source_timeout_discards_partial_output(tmp_path: Path) -> None:
    script = "import sys, time; print('partial'); sys.stdout.flush(); time.sleep(5)"
    source = CommandDiagnosticSource([sys.executable, "-c", script], cwd=tmp_path, timeout=0.5)
    with pytest.raises(SourceError, match="timed out"):
        list(source.lines())


def test_command_source_exit_124_is_not_a_timeout(tmp_path: Path) -> None:
    script = "import sys; print('complete'); sys.exit(124)"
    source = CommandDiagnosticSource([sys.executable, "-c", script], cwd=tmp_path, timeout=30)
    assert list(source.lines()) == ["complete"]


def test_command_source_replaces_undecodable_bytes(tmp_path: Path, compiler_message) -> None:
    good = compiler_message(message="after bad bytes")
    script = f"import sys; sys.stdout.buffer.write(b'\\xff\\xfe\\n' + {good.encode()!r} + b'\\n')"
    source = CommandDiagnosticSource([sys.executable, "-c", script], cwd=tmp_path)

    result = map_diagnostics(source.lines())

    assert [item.message for item in result.annotations] == ["after bad bytes"]
    assert result.stats.malformed == 1


@pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")
def test_revision_outside_repository_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path.parent))
    with pytest.raises(RevisionError, match="git rev-parse failed"):
        GitRevisionProvider(tmp_path).current_revision()


def test_command_source_missing_executable(tmp_path: Path) -> None:
    source = CommandDiagnosticSource(["lintbridge-no-such-linter"], cwd=tmp_path)
    with pytest.raises(SourceError):
        list(source.lines())


def test_static_source_from_file(tmp_path: Path) -> None:
    captured = tmp_path / "clippy.jsonl"
    captured.write_text("first\nsecond\n", encoding="utf-8")
    assert list(StaticDiagnosticSource.from_file(captured).lines()) == ["first", "second"]


def test_static_source_missing_file(tmp_path: Path) -> None:
    with pytest.raises(SourceError):
        StaticDiagnosticSource.from_file(tmp_path / "absent.jsonl")
