# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Git-based revision lookup."""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Final

from ..core.errors import RevisionError
from ..runtime.process import CommandOptions, SubprocessExecutionError, run_command

GitRunner = Callable[[Sequence[str], Path], list[str]]

_COMMIT_RE: Final[re.Pattern[str]] = re.compile(r"^[0-9a-f]{40}([0-9a-f]{24})?$")


class GitRevisionProvider:
    """Resolve ``HEAD`` of the repository containing ``root``."""

    def __init__(self, root: Path, *, runner: GitRunner | None = None) -> None:
        """Create a provider bound to ``root``.

        Args:
            root: Directory inside the working tree.
            runner: Optional command runner returning stdout lines; the
                default runs git through :func:`run_command`.
        """

        self._root = root
        self._runner = runner or self._default_runner

    def current_revision(self) -> str:
        """Return the full hash of the checked-out commit.

        Raises:
            RevisionError: When git fails or prints something other than a commit hash.
        """

        output = self._runner(["git", "rev-parse", "HEAD"], self._root)
        revision = output[0].strip() if output else ""
        if not _COMMIT_RE.match(revision):
            raise RevisionError(f"Unable to resolve HEAD for {self._root}")
        return revision

    @staticmethod
    def _default_runner(cmd: Sequence[str], root: Path) -> list[str]:
        """Execute ``cmd`` in ``root`` and return its stdout lines.

        Raises:
            RevisionError: When git is missing or exits with a failure status.
        """

        try:
            cp = run_command(cmd, options=CommandOptions(cwd=root))
        except FileNotFoundError as exc:
            raise RevisionError(str(exc)) from exc
        except SubprocessExecutionError as exc:
            detail = (exc.stderr or "").strip() or f"exit status {exc.returncode}"
            raise RevisionError(f"git rev-parse failed in {root}: {detail}") from exc
        return cp.stdout.splitlines()


__all__ = ["GitRevisionProvider", "GitRunner"]
