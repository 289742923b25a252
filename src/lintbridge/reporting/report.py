# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Assemble the per-run Code Insights report."""

from __future__ import annotations

from ..core.errors import ReportError
from ..core.models import Report


def build_report(title: str, logo_url: str | None = None) -> Report:
    """Return the summary :class:`Report` for an analysis run.

    Args:
        title: Name of the analysis tool shown on the report.
        logo_url: Optional image URL used for branding.

    Returns:
        Report: Frozen report model.

    Raises:
        ReportError: When ``title`` is empty.
    """

    if not title or not title.strip():
        raise ReportError("report title must not be empty")
    return Report(title=title, logo_url=logo_url or None)


__all__ = ["build_report"]
