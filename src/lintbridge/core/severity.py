# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final


class Severity(str, Enum):
    """Severity levels accepted by the Code Insights annotation API."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def rank(self) -> int:
        """Return the ordinal position of the severity (``LOW`` is lowest)."""

        return _SEVERITY_RANK[self]


_SEVERITY_RANK: Final[dict[Severity, int]] = {
    Severity.LOW: 0,
    Severity.MEDIUM: 1,
    Severity.HIGH: 2,
}

DEFAULT_SEVERITY: Final[Severity] = Severity.MEDIUM

LEVEL_SEVERITY_MAP: Final[dict[str, Severity]] = {
    "note": Severity.LOW,
    "help": Severity.LOW,
    "warning": Severity.MEDIUM,
    "error": Severity.HIGH,
}


def classify_level(level: str) -> Severity:
    """Map a compiler/linter level label to a :class:`Severity`.

    Unknown labels (including future rustc levels such as ``failure-note``)
    fall back to :data:`DEFAULT_SEVERITY`; the function never raises.

    Args:
        level: Level string exactly as emitted by the tool.

    Returns:
        Severity: Normalised severity for ``level``.
    """

    return LEVEL_SEVERITY_MAP.get(level, DEFAULT_SEVERITY)


def coerce_severity(value: Severity | str | None) -> Severity | None:
    """Return ``value`` as a :class:`Severity` or ``None`` when it is not one."""

    if isinstance(value, Severity):
        return value
    if isinstance(value, str):
        try:
            return Severity(value.upper())
        except ValueError:
            return None
    return None


__all__ = [
    "DEFAULT_SEVERITY",
    "LEVEL_SEVERITY_MAP",
    "Severity",
    "classify_level",
    "coerce_severity",
]
