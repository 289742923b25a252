# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Sequence one lint-to-insights run."""

from __future__ import annotations

from dataclasses import dataclass

from .core.models import Annotations, Report, wrap_annotations
from .interfaces import DiagnosticSource, PublishReceipt, Publisher, RevisionProvider
from .parsers.clippy import MappingStats, map_diagnostics
from .reporting.report import build_report


@dataclass(frozen=True, slots=True)
class ToolIdentity:
    """Branding of the analysis tool shown on the published report."""

    title: str
    logo_url: str | None = None


@dataclass(frozen=True, slots=True)
class PreparedRun:
    """Payloads produced from one linter run, ready to publish."""

    report: Report
    annotations: Annotations
    stats: MappingStats


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of a published run."""

    revision: str
    prepared: PreparedRun
    report_receipt: PublishReceipt
    annotations_receipt: PublishReceipt

    @property
    def annotations(self) -> Annotations:
        """Return the annotation batch that was published."""

        return self.prepared.annotations


def prepare_run(source: DiagnosticSource, tool: ToolIdentity) -> PreparedRun:
    """Map the source's diagnostics and assemble the report without publishing."""

    mapped = map_diagnostics(source.lines())
    return PreparedRun(
        report=build_report(tool.title, tool.logo_url),
        annotations=wrap_annotations(mapped.annotations),
        stats=mapped.stats,
    )


def run_pipeline(
    source: DiagnosticSource,
    revision_provider: RevisionProvider,
    publisher: Publisher,
    tool: ToolIdentity,
) -> PipelineResult:
    """Run the linter, map its output, and publish the report then its annotations.

    The report is sent first so the annotations have a report to attach to.
    A failure publishing the report propagates before any annotation is sent.

    Args:
        source: Provider of raw linter output.
        revision_provider: Resolves the commit the results belong to.
        publisher: Destination for the report and annotations.
        tool: Branding for the report.

    Returns:
        PipelineResult: Published payloads, receipts, and mapping counters.

    Raises:
        LintBridgeError: Propagated from the source, revision provider, or publisher.
    """

    revision = revision_provider.current_revision()
    prepared = prepare_run(source, tool)
    report_receipt = publisher.publish_report(prepared.report, revision)
    annotations_receipt = publisher.publish_annotations(prepared.annotations, revision)
    return PipelineResult(
        revision=revision,
        prepared=prepared,
        report_receipt=report_receipt,
        annotations_receipt=annotations_receipt,
    )


__all__ = ["PipelineResult", "PreparedRun", "ToolIdentity", "prepare_run", "run_pipeline"]
