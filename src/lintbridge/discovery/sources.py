# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Diagnostic sources feeding raw linter output into the pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from ..core.errors import SourceError
from ..runtime.process import CommandOptions, CommandTimeoutError, run_command


class CommandDiagnosticSource:
    """Run the linter and expose its stdout as lines.

    The linter's exit status is not inspected: clippy exits non-zero whenever
    it reports errors, which is the normal case for this tool.
    """

    def __init__(self, command: Sequence[str], *, cwd: Path, timeout: float | None = None) -> None:
        self._command = tuple(command)
        self._options = CommandOptions(cwd=cwd, check=False, discard_stderr=True, timeout=timeout)

    @property
    def command(self) -> tuple[str, ...]:
        """Return the command line executed by the source."""

        return self._command

    def lines(self) -> Iterator[str]:
        """Run the linter to completion and yield its stdout lines.

        Raises:
            SourceError: When the linter cannot be started or is stopped by
                its timeout; output from a cut-off run is never yielded.
        """

        try:
            completed = run_command(self._command, options=self._options)
        except (FileNotFoundError, ValueError) as exc:
            raise SourceError(f"Unable to run linter: {exc}") from exc
        except CommandTimeoutError as exc:
            raise SourceError(f"Linter timed out after {exc.timeout:.1f}s; partial output discarded") from exc
        yield from completed.stdout.splitlines()


class StaticDiagnosticSource:
    """Replay previously captured linter output."""

    def __init__(self, lines: Iterable[str]) -> None:
        self._lines = tuple(lines)

    @classmethod
    def from_file(cls, path: Path) -> StaticDiagnosticSource:
        """Load captured output from ``path``.

        Raises:
            SourceError: When the file cannot be read.
        """

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise SourceError(f"Unable to read linter output from {path}: {exc}") from exc
        return cls(text.splitlines())

    def lines(self) -> Iterator[str]:
        """Yield the captured lines in their original order."""

        yield from self._lines


__all__ = ["CommandDiagnosticSource", "StaticDiagnosticSource"]
