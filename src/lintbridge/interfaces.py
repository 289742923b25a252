# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Service interfaces for the collaborators around the annotation pipeline."""

# pylint: disable=too-few-public-methods -- Protocol definitions intentionally expose minimal method surfaces.

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from .core.models import Annotations, Report


@dataclass(frozen=True, slots=True)
class PublishReceipt:
    """Acknowledgement returned by a successful publish call."""

    url: str
    status_code: int


@runtime_checkable
class DiagnosticSource(Protocol):
    """Produce the raw output lines of a linter run."""

    def lines(self) -> Iterable[str]:
        """Return the linter's stdout, one line per entry."""

        raise NotImplementedError


@runtime_checkable
class RevisionProvider(Protocol):
    """Resolve the commit identifier the results belong to."""

    def current_revision(self) -> str:
        """Return the full commit hash of the checked-out revision."""

        raise NotImplementedError


@runtime_checkable
class Publisher(Protocol):
    """Deliver reports and annotation batches to the review platform."""

    def publish_report(self, report: Report, revision: str) -> PublishReceipt:
        """Create or replace the report attached to ``revision``."""

        raise NotImplementedError

    def publish_annotations(self, annotations: Annotations, revision: str) -> PublishReceipt:
        """Attach ``annotations`` to the report for ``revision``."""

        raise NotImplementedError


__all__ = ["DiagnosticSource", "PublishReceipt", "Publisher", "RevisionProvider"]
