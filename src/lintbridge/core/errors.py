# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared across lintbridge."""

from __future__ import annotations

from enum import Enum


class LintBridgeError(RuntimeError):
    """Base class for failures that abort a lintbridge run."""


class AnnotationErrorKind(str, Enum):
    """Enumerate the validation rules enforced when building annotations."""

    EMPTY_MESSAGE = "empty_message"
    MISSING_SEVERITY = "missing_severity"
    INCOMPLETE_LOCATION = "incomplete_location"
    INVALID_LINE = "invalid_line"
    INVALID_TEXT = "invalid_text"


class AnnotationError(ValueError):
    """Raised when an annotation cannot be built from the supplied values."""

    def __init__(self, kind: AnnotationErrorKind, detail: str | None = None) -> None:
        """Initialise the error with the violated rule.

        Args:
            kind: Validation rule that rejected the input.
            detail: Optional human-readable elaboration.
        """

        message = kind.value.replace("_", " ")
        super().__init__(f"{message}: {detail}" if detail else message)
        self.kind = kind


class ReportError(ValueError):
    """Raised when a report cannot be assembled."""


class RecordDecodeError(ValueError):
    """Raised when a raw linter line cannot be decoded into a typed record."""


class SourceError(LintBridgeError):
    """Raised when the diagnostic source cannot produce output."""


class RevisionError(LintBridgeError):
    """Raised when the current commit cannot be resolved."""


class PublishError(LintBridgeError):
    """Raised when the insights server rejects or fails a publish call."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None) -> None:
        """Initialise the error with request metadata.

        Args:
            message: Human-readable description of the failure.
            url: Endpoint the request targeted.
            status_code: HTTP status returned by the server, when one was received.
        """

        super().__init__(message)
        self.url = url
        self.status_code = status_code


__all__ = [
    "AnnotationError",
    "AnnotationErrorKind",
    "LintBridgeError",
    "PublishError",
    "RecordDecodeError",
    "ReportError",
    "RevisionError",
    "SourceError",
]
