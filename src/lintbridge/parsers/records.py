# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typed decoding of Cargo ``--message-format json`` lines."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Final, TypeAlias, cast

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from ..core.errors import RecordDecodeError
from ..core.serialization import JsonValue, coerce_optional_int, coerce_optional_str, mapping_sequence

COMPILER_MESSAGE_REASON: Final[str] = "compiler-message"
REASON_KEY: Final[str] = "reason"


class DiagnosticSpan(BaseModel):
    """Source region attached to a compiler diagnostic."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    file_name: str | None = None
    line_start: int | None = None

    @field_validator("file_name", mode="before")
    @classmethod
    def _coerce_file_name(cls, value: JsonValue) -> str | None:
        return coerce_optional_str(value)

    @field_validator("line_start", mode="before")
    @classmethod
    def _coerce_line_start(cls, value: JsonValue) -> int | None:
        return coerce_optional_int(value)


class DiagnosticMessage(BaseModel):
    """The ``message`` object carried by a ``compiler-message`` record."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    message: StrictStr
    level: StrictStr
    spans: tuple[DiagnosticSpan, ...] = Field(default_factory=tuple)

    @field_validator("spans", mode="before")
    @classmethod
    def _keep_span_objects(cls, value: JsonValue) -> tuple[Mapping[str, JsonValue], ...]:
        """Drop span entries that are not JSON objects; non-lists become empty."""

        return mapping_sequence(value)

    @property
    def primary_span(self) -> DiagnosticSpan | None:
        """Return the first span, or ``None`` when the diagnostic has none."""

        return self.spans[0] if self.spans else None


class CompilerMessage(BaseModel):
    """A diagnostic emitted by rustc or clippy."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    reason: StrictStr = COMPILER_MESSAGE_REASON
    message: DiagnosticMessage


class ToolEvent(BaseModel):
    """Any non-diagnostic record (build progress, artifacts, build-finished)."""

    model_config = ConfigDict(frozen=True)

    reason: str | None = None


DecodedRecord: TypeAlias = CompilerMessage | ToolEvent


def decode_record(line: str) -> DecodedRecord:
    """Decode one line of linter output into a typed record.

    Args:
        line: Raw stdout line.

    Returns:
        DecodedRecord: :class:`CompilerMessage` for diagnostics, otherwise a
        :class:`ToolEvent` naming the record kind.

    Raises:
        RecordDecodeError: When the line is not a JSON object or a
            ``compiler-message`` record lacks its message text or level.
    """

    text = line.strip()
    if not text:
        raise RecordDecodeError("blank line")
    try:
        payload = cast(JsonValue, json.loads(text))
    except json.JSONDecodeError as exc:
        raise RecordDecodeError(f"invalid JSON: {exc.msg}") from exc
    except RecursionError as exc:
        raise RecordDecodeError("JSON nesting too deep") from exc
    if not isinstance(payload, Mapping):
        raise RecordDecodeError("record is not a JSON object")
    reason = payload.get(REASON_KEY)
    if reason != COMPILER_MESSAGE_REASON:
        return ToolEvent(reason=reason if isinstance(reason, str) else None)
    try:
        return CompilerMessage.model_validate(payload)
    except ValidationError as exc:
        raise RecordDecodeError(f"malformed compiler message: {exc.error_count()} error(s)") from exc


__all__ = [
    "COMPILER_MESSAGE_REASON",
    "CompilerMessage",
    "DecodedRecord",
    "DiagnosticMessage",
    "DiagnosticSpan",
    "ToolEvent",
    "decode_record",
]
