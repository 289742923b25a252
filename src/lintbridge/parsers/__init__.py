# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Parsers turning linter output into annotations."""

from __future__ import annotations

from .clippy import MappingResult, MappingStats, iter_annotations, map_diagnostics, to_annotation
from .records import (
    COMPILER_MESSAGE_REASON,
    CompilerMessage,
    DecodedRecord,
    DiagnosticMessage,
    DiagnosticSpan,
    ToolEvent,
    decode_record,
)

__all__ = [
    "COMPILER_MESSAGE_REASON",
    "CompilerMessage",
    "DecodedRecord",
    "DiagnosticMessage",
    "DiagnosticSpan",
    "MappingResult",
    "MappingStats",
    "ToolEvent",
    "decode_record",
    "iter_annotations",
    "map_diagnostics",
    "to_annotation",
]
