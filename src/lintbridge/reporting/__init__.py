# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report assembly and publishing to Code Insights."""

from __future__ import annotations

from .publisher import InsightsEndpoint, InsightsPublisher
from .report import build_report

__all__ = ["InsightsEndpoint", "InsightsPublisher", "build_report"]
