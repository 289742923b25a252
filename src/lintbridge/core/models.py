# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Payload models published to the Code Insights API."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import AnnotationError, AnnotationErrorKind
from .severity import Severity, coerce_severity


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """File and line a finding points at; both halves travel together."""

    path: str | None
    line: int | None


class Annotation(BaseModel):
    """Validated finding attached to an optional source location.

    Instances are produced by :func:`build_annotation`; constructing the model
    directly still enforces the field constraints but not the location pairing.
    """

    model_config = ConfigDict(frozen=True)

    message: str = Field(min_length=1)
    severity: Severity
    path: str | None = None
    line: int | None = Field(default=None, ge=1)


class Report(BaseModel):
    """Summary describing the analysis run that produced the annotations."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(min_length=1)
    logo_url: str | None = Field(default=None, alias="logoUrl")


class Annotations(BaseModel):
    """Ordered annotation batch in the shape expected by the annotations endpoint."""

    model_config = ConfigDict(frozen=True)

    annotations: tuple[Annotation, ...] = Field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.annotations)


def _construct(
    *,
    message: str,
    severity: Severity,
    path: str | None = None,
    line: int | None = None,
) -> Annotation:
    # Strings decoded from JSON may carry lone surrogates the model rejects.
    try:
        return Annotation(message=message, severity=severity, path=path, line=line)
    except ValidationError as exc:
        fields = ", ".join(str(error["loc"][0]) for error in exc.errors() if error["loc"])
        raise AnnotationError(AnnotationErrorKind.INVALID_TEXT, fields or None) from exc


def build_annotation(
    message: str | None,
    severity: Severity | str | None,
    location: SourceLocation | None = None,
) -> Annotation:
    """Validate the supplied values and return an immutable :class:`Annotation`.

    Rules are checked in order: message, severity, location pairing, line
    range, text encodability. The first violation raises.

    Args:
        message: Human-readable finding text; must contain non-whitespace.
        severity: Normalised severity, or its wire value.
        location: Optional file/line pair; when given both halves are required.

    Returns:
        Annotation: Frozen annotation instance.

    Raises:
        AnnotationError: When any validation rule fails.
    """

    if message is None or not message.strip():
        raise AnnotationError(AnnotationErrorKind.EMPTY_MESSAGE)
    resolved_severity = coerce_severity(severity)
    if resolved_severity is None:
        raise AnnotationError(AnnotationErrorKind.MISSING_SEVERITY, repr(severity))
    if location is None:
        return _construct(message=message, severity=resolved_severity)
    has_path = bool(location.path)
    has_line = location.line is not None
    if has_path != has_line:
        missing = "line" if has_path else "path"
        raise AnnotationError(AnnotationErrorKind.INCOMPLETE_LOCATION, f"{missing} is missing")
    if not has_path:
        return _construct(message=message, severity=resolved_severity)
    line = location.line
    if isinstance(line, bool) or not isinstance(line, int) or line < 1:
        raise AnnotationError(AnnotationErrorKind.INVALID_LINE, repr(line))
    return _construct(message=message, severity=resolved_severity, path=location.path, line=line)


def wrap_annotations(items: Iterable[Annotation]) -> Annotations:
    """Collect ``items`` into an :class:`Annotations` batch preserving order."""

    return Annotations(annotations=tuple(items))


__all__ = [
    "Annotation",
    "Annotations",
    "Report",
    "SourceLocation",
    "build_annotation",
    "wrap_annotations",
]
