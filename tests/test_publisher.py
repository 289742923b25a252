# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the Code Insights HTTP publisher."""

from __future__ import annotations

import base64
import json

import httpx
import pytest

from lintbridge.core.errors import PublishError
from lintbridge.core.models import SourceLocation, build_annotation, wrap_annotations
from lintbridge.core.severity import Severity
from lintbridge.reporting import InsightsEndpoint, InsightsPublisher, build_report

COMMIT = "0123456789abcdef0123456789abcdef01234567"
ENDPOINT = InsightsEndpoint(
    base_url="https://bitbucket.example.test/",
    project="PRJ",
    slug="my-repo",
    report_key="lintbridge.clippy",
)


def _publisher(handler, *, auth: httpx.Auth | None = None) -> InsightsPublisher:
    client = httpx.Client(transport=httpx.MockTransport(handler), auth=auth)
    return InsightsPublisher(ENDPOINT, client)


def test_endpoint_urls() -> None:
    expected = (
        "https://bitbucket.example.test/rest/insights/1.0/projects/PRJ/repos/my-repo"
        f"/commits/{COMMIT}/reports/lintbridge.clippy"
    )
    assert ENDPOINT.report_url(COMMIT) == expected
    assert ENDPOINT.annotations_url(COMMIT) == f"{expected}/annotations"


def test_publish_report_puts_json_body() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"key": "lintbridge.clippy"})

    with _publisher(handler, auth=httpx.BasicAuth("admin", "secret")) as publisher:
        receipt = publisher.publish_report(build_report("Clippy", "https://logo.test/r.svg"), COMMIT)

    [request] = seen
    assert request.method == "PUT"
    assert str(request.url) == ENDPOINT.report_url(COMMIT)
    assert json.loads(request.content) == {"title": "Clippy", "logoUrl": "https://logo.test/r.svg"}
    token = base64.b64encode(b"admin:secret").decode()
    assert request.headers["Authorization"] == f"Basic {token}"
    assert receipt.status_code == 200


def test_publish_annotations_posts_batch() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(204)

    annotations = wrap_annotations(
        [
            build_annotation("unused variable", Severity.MEDIUM, SourceLocation(path="src/lib.rs", line=10)),
            build_annotation("crate-level note", Severity.LOW),
        ]
    )
    with _publisher(handler) as publisher:
        receipt = publisher.publish_annotations(annotations, COMMIT)

    [request] = seen
    assert request.method == "POST"
    assert str(request.url) == ENDPOINT.annotations_url(COMMIT)
    assert json.loads(request.content) == {
        "annotations": [
            {"message": "unused variable", "severity": "MEDIUM", "path": "src/lib.rs", "line": 10},
            {"message": "crate-level note", "severity": "LOW"},
        ]
    }
    assert receipt.url == ENDPOINT.annotations_url(COMMIT)


def test_http_error_status_raises_publish_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Authentication failed")

    with _publisher(handler) as publisher, pytest.raises(PublishError) as excinfo:
        publisher.publish_report(build_report("Clippy"), COMMIT)
    assert excinfo.value.status_code == 401
    assert "Authentication failed" in str(excinfo.value)


def test_transport_error_raises_publish_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with _publisher(handler) as publisher, pytest.raises(PublishError) as excinfo:
        publisher.publish_annotations(wrap_annotations([]), COMMIT)
    assert excinfo.value.status_code is None
    assert excinfo.value.url == ENDPOINT.annotations_url(COMMIT)
