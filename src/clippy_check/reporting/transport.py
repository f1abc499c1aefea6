# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Transports that deliver check-run reports to GitHub."""

from __future__ import annotations

import logging
from datetime import datetime
from types import TracebackType
from typing import Final, Protocol, runtime_checkable

import httpx

from .. import __version__
from ..constants import DEFAULT_GITHUB_API_URL
from ..errors import TransportError
from ..models import Batch, CheckContext, JsonValue
from ..severity import Conclusion
from .summary import ReportOutput

LOGGER = logging.getLogger(__name__)

_API_VERSION: Final[str] = "2022-11-28"
_DEFAULT_TIMEOUT: Final[float] = 30.0


@runtime_checkable
class ReportTransport(Protocol):
    """Remote API the report submitter talks to."""

    def create(self, context: CheckContext, output: ReportOutput) -> int:
        """Create an in-progress report showing ``output`` and return its identifier."""

    def update(self, report_id: int, batch: Batch, output: ReportOutput) -> None:
        """Attach ``batch`` to the report; annotations accumulate remotely."""

    def complete(
        self,
        report_id: int,
        conclusion: Conclusion,
        completed_at: datetime,
        output: ReportOutput,
    ) -> None:
        """Mark the report completed with ``conclusion``."""

    def cancel(self, report_id: int, output: ReportOutput) -> None:
        """Mark the report completed as cancelled."""

    def close(self) -> None:
        """Release any resources held by the transport."""


def _isoformat(moment: datetime) -> str:
    return moment.isoformat().replace("+00:00", "Z")


class GitHubChecksTransport:
    """Check-run transport backed by the GitHub REST API.

    Calls are made one at a time on a shared :class:`httpx.Client`; failures
    surface as :class:`~clippy_check.errors.TransportError` without retries.
    """

    def __init__(
        self,
        *,
        token: str,
        owner: str,
        repo: str,
        api_url: str = DEFAULT_GITHUB_API_URL,
        client: httpx.Client | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        """Initialise the transport.

        Args:
            token: Token used to authenticate against the API.
            owner: Repository owner.
            repo: Repository name.
            api_url: Base URL of the REST API.
            client: Optional pre-configured client, mainly for tests.
            timeout: Request timeout in seconds for the default client.
        """

        self._checks_path = f"/repos/{owner}/{repo}/check-runs"
        headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "User-Agent": f"clippy-check/{__version__}",
            "X-GitHub-Api-Version": _API_VERSION,
        }
        if client is None:
            self._client = httpx.Client(base_url=api_url.rstrip("/"), headers=headers, timeout=timeout)
            self._owns_client = True
        else:
            client.headers.update(headers)
            self._client = client
            self._owns_client = False

    def __enter__(self) -> GitHubChecksTransport:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client when this transport created it."""

        if self._owns_client:
            self._client.close()

    def _send(self, operation: str, method: str, path: str, payload: dict[str, JsonValue]) -> httpx.Response:
        LOGGER.debug("%s %s (%s)", method, path, operation)
        try:
            response = self._client.request(method, path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise TransportError(operation, f"HTTP {status}: {exc.response.text}", status_code=status) from exc
        except httpx.HTTPError as exc:
            raise TransportError(operation, str(exc)) from exc
        return response

    def create(self, context: CheckContext, output: ReportOutput) -> int:
        payload: dict[str, JsonValue] = {
            "name": context.name,
            "head_sha": context.head_sha,
            "status": "in_progress",
            "started_at": _isoformat(context.started_at),
            "output": output.to_payload(),
        }
        response = self._send("create", "POST", self._checks_path, payload)
        try:
            return int(response.json()["id"])
        except (ValueError, KeyError, TypeError) as exc:
            raise TransportError("create", f"unexpected response body: {response.text}") from exc

    def update(self, report_id: int, batch: Batch, output: ReportOutput) -> None:
        payload: dict[str, JsonValue] = {
            "status": "in_progress",
            "output": output.to_payload(batch),
        }
        self._send("update", "PATCH", f"{self._checks_path}/{report_id}", payload)

    def complete(
        self,
        report_id: int,
        conclusion: Conclusion,
        completed_at: datetime,
        output: ReportOutput,
    ) -> None:
        payload: dict[str, JsonValue] = {
            "status": "completed",
            "conclusion": conclusion.value,
            "completed_at": _isoformat(completed_at),
            "output": output.to_payload(),
        }
        self._send("complete", "PATCH", f"{self._checks_path}/{report_id}", payload)

    def cancel(self, report_id: int, output: ReportOutput) -> None:
        payload: dict[str, JsonValue] = {
            "status": "completed",
            "conclusion": Conclusion.CANCELLED.value,
            "output": output.to_payload(),
        }
        self._send("cancel", "PATCH", f"{self._checks_path}/{report_id}", payload)


__all__ = ["GitHubChecksTransport", "ReportTransport"]
