# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass, field

import pytest

from lintbridge.core.errors import PublishError
from lintbridge.core.models import Annotations, Report
from lintbridge.interfaces import PublishReceipt

COMMIT = "0123456789abcdef0123456789abcdef01234567"

LineFactory = Callable[..., str]


def _compiler_message(
    message: str | None = "unused variable",
    level: str | None = "warning",
    spans: object = (),
) -> str:
    body: dict[str, object] = {}
    if message is not None:
        body["message"] = message
    if level is not None:
        body["level"] = level
    if spans is not None:
        body["spans"] = list(spans) if isinstance(spans, tuple) else spans
    return json.dumps({"reason": "compiler-message", "message": body})


@pytest.fixture
def compiler_message() -> LineFactory:
    """Return a factory producing ``compiler-message`` JSON lines.

    Pass ``spans=None`` to omit the key entirely.
    """

    return _compiler_message


@pytest.fixture
def scenario_lines() -> list[str]:
    """Return the canonical three-line clippy sample."""

    return [
        _compiler_message(spans=[{"file_name": "src/lib.rs", "line_start": 10}]),
        json.dumps({"reason": "build-finished", "success": True}),
        "not json",
    ]


@dataclass
class RecordingPublisher:
    calls: list[tuple[str, object, str]] = field(default_factory=list)
    fail_report: bool = False

    def publish_report(self, report: Report, revision: str) -> PublishReceipt:
        if self.fail_report:
            raise PublishError("report rejected", url="http://insights/report", status_code=500)
        self.calls.append(("report", report, revision))
        return PublishReceipt(url="http://insights/report", status_code=200)

    def publish_annotations(self, annotations: Annotations, revision: str) -> PublishReceipt:
        self.calls.append(("annotations", annotations, revision))
        return PublishReceipt(url="http://insights/report/annotations", status_code=204)


@dataclass
class FixedRevision:
    revision: str = COMMIT

    def current_revision(self) -> str:
        return self.revision


@pytest.fixture
def publisher() -> RecordingPublisher:
    return RecordingPublisher()


@pytest.fixture
def revision() -> FixedRevision:
    return FixedRevision()
