# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Discovery of version-control state and linter output."""

from __future__ import annotations

from .git import GitRevisionProvider
from .sources import CommandDiagnosticSource, StaticDiagnosticSource

__all__ = ["CommandDiagnosticSource", "GitRevisionProvider", "StaticDiagnosticSource"]
