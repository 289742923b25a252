# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""HTTP publisher for the Bitbucket Server Code Insights REST API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal
from urllib.parse import quote

import httpx
from pydantic import BaseModel

from ..core.errors import PublishError
from ..core.models import Annotations, Report
from ..core.serialization import to_wire
from ..interfaces import PublishReceipt

INSIGHTS_API_PREFIX: Final[str] = "rest/insights/1.0"

HttpMethod = Literal["PUT", "POST"]


@dataclass(frozen=True, slots=True)
class InsightsEndpoint:
    """Address of one report on the Code Insights API."""

    base_url: str
    project: str
    slug: str
    report_key: str

    def report_url(self, revision: str) -> str:
        """Return the URL of the report attached to ``revision``."""

        base = self.base_url.rstrip("/")
        return (
            f"{base}/{INSIGHTS_API_PREFIX}/projects/{quote(self.project, safe='')}"
            f"/repos/{quote(self.slug, safe='')}/commits/{quote(revision, safe='')}"
            f"/reports/{quote(self.report_key, safe='')}"
        )

    def annotations_url(self, revision: str) -> str:
        """Return the URL of the annotations collection for ``revision``."""

        return f"{self.report_url(revision)}/annotations"


class InsightsPublisher:
    """Send reports and annotations with HTTP basic authentication."""

    def __init__(self, endpoint: InsightsEndpoint, client: httpx.Client) -> None:
        """Bind the publisher to ``endpoint``.

        Args:
            endpoint: Report address on the server.
            client: HTTP client; authentication and timeouts are configured on it.
        """

        self._endpoint = endpoint
        self._client = client

    @classmethod
    def create(
        cls,
        endpoint: InsightsEndpoint,
        *,
        username: str,
        password: str,
        timeout: float = 30.0,
    ) -> InsightsPublisher:
        """Return a publisher owning a new client configured for basic auth."""

        client = httpx.Client(auth=httpx.BasicAuth(username, password), timeout=timeout)
        return cls(endpoint, client)

    def publish_report(self, report: Report, revision: str) -> PublishReceipt:
        """Create or replace the report for ``revision`` (``PUT``)."""

        return self._send("PUT", self._endpoint.report_url(revision), report)

    def publish_annotations(self, annotations: Annotations, revision: str) -> PublishReceipt:
        """Add ``annotations`` to the report for ``revision`` (``POST``)."""

        return self._send("POST", self._endpoint.annotations_url(revision), annotations)

    def close(self) -> None:
        """Close the underlying HTTP client."""

        self._client.close()

    def __enter__(self) -> InsightsPublisher:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _send(self, method: HttpMethod, url: str, payload: BaseModel) -> PublishReceipt:
        """Issue ``method`` against ``url`` with ``payload`` as the JSON body.

        Raises:
            PublishError: On transport failures or HTTP error statuses.
        """

        try:
            response = self._client.request(method, url, json=to_wire(payload))
        except httpx.HTTPError as exc:
            raise PublishError(f"{method} {url} failed: {exc}", url=url) from exc
        if response.is_error:
            raise PublishError(
                f"{method} {url} returned HTTP {response.status_code}: {_summarise_body(response)}",
                url=url,
                status_code=response.status_code,
            )
        return PublishReceipt(url=url, status_code=response.status_code)


def _summarise_body(response: httpx.Response, limit: int = 200) -> str:
    """Return a short excerpt of ``response`` suitable for error messages."""

    text = response.text.strip()
    if not text:
        return response.reason_phrase or "<empty body>"
    return text if len(text) <= limit else f"{text[:limit]}..."


__all__ = ["INSIGHTS_API_PREFIX", "InsightsEndpoint", "InsightsPublisher"]
