# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Map Cargo Clippy JSON output onto Code Insights annotations."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from ..core.errors import AnnotationError, RecordDecodeError
from ..core.models import Annotation, SourceLocation, build_annotation
from ..core.severity import classify_level
from .records import CompilerMessage, decode_record


@dataclass(slots=True)
class MappingStats:
    """Counters describing how raw lines were consumed."""

    total: int = 0
    emitted: int = 0
    ignored: int = 0
    malformed: int = 0
    invalid: int = 0

    @property
    def skipped(self) -> int:
        """Return the number of lines dropped because they could not be used."""

        return self.malformed + self.invalid


@dataclass(slots=True)
class MappingResult:
    """Annotations produced from a line stream together with its counters."""

    annotations: list[Annotation] = field(default_factory=list)
    stats: MappingStats = field(default_factory=MappingStats)


def to_annotation(record: CompilerMessage) -> Annotation:
    """Convert a decoded compiler message into an :class:`Annotation`.

    Only the first span contributes a location.

    Raises:
        AnnotationError: When the record fails annotation validation.
    """

    diagnostic = record.message
    severity = classify_level(diagnostic.level)
    span = diagnostic.primary_span
    location = SourceLocation(path=span.file_name, line=span.line_start) if span is not None else None
    return build_annotation(diagnostic.message, severity, location)


def iter_annotations(lines: Iterable[str], stats: MappingStats | None = None) -> Iterator[Annotation]:
    """Lazily yield annotations for the diagnostics found in ``lines``.

    Lines that do not decode, non-diagnostic records, and diagnostics failing
    validation are skipped without interrupting the stream.

    Args:
        lines: Raw linter stdout lines.
        stats: Optional counters updated as lines are consumed.

    Yields:
        Annotation: One annotation per usable ``compiler-message`` record, in input order.
    """

    counters = stats if stats is not None else MappingStats()
    for line in lines:
        counters.total += 1
        try:
            record = decode_record(line)
        except RecordDecodeError:
            counters.malformed += 1
            continue
        if not isinstance(record, CompilerMessage):
            counters.ignored += 1
            continue
        try:
            annotation = to_annotation(record)
        except AnnotationError:
            counters.invalid += 1
            continue
        counters.emitted += 1
        yield annotation


def map_diagnostics(lines: Iterable[str]) -> MappingResult:
    """Consume ``lines`` and return every annotation plus skip counters."""

    result = MappingResult()
    result.annotations.extend(iter_annotations(lines, result.stats))
    return result


__all__ = [
    "MappingResult",
    "MappingStats",
    "iter_annotations",
    "map_diagnostics",
    "to_annotation",
]
