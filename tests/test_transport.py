# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the GitHub Checks API transport."""

from __future__ import annotations

import json
from datetime import UTC, datetime

import httpx
import pytest

from clippy_check.errors import TransportError
from clippy_check.models import MessageStats
from clippy_check.reporting.summary import build_output, cancelled_output
from clippy_check.reporting.transport import GitHubChecksTransport, ReportTransport
from clippy_check.severity import AnnotationLevel, Conclusion


def _transport(handler) -> tuple[GitHubChecksTransport, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def _record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    client = httpx.Client(base_url="https://api.github.test", transport=httpx.MockTransport(_record))
    transport = GitHubChecksTransport(token="t0ken", owner="octo", repo="demo", client=client)
    return transport, seen


def _output():
    return build_output(MessageStats(warning=2), {"rustc": "rustc 1.78.0"})


def test_transport_satisfies_protocol() -> None:
    transport, _ = _transport(lambda request: httpx.Response(200, json={}))
    assert isinstance(transport, ReportTransport)


def test_create_posts_in_progress_check_run(check_context) -> None:
    transport, seen = _transport(lambda request: httpx.Response(201, json={"id": 42}))

    report_id = transport.create(check_context, build_output(MessageStats(), check_context.metadata))

    assert report_id == 42
    (request,) = seen
    assert request.method == "POST"
    assert request.url.path == "/repos/octo/demo/check-runs"
    assert request.headers["Authorization"] == "Bearer t0ken"
    assert request.headers["Accept"] == "application/vnd.github+json"
    body = json.loads(request.content)
    assert body == {
        "name": "clippy",
        "head_sha": "abc123",
        "status": "in_progress",
        "started_at": "2024-05-01T12:00:00Z",
        "output": {
            "title": "No problems found",
            "summary": body["output"]["summary"],
            "text": "## Versions\n\n- rustc 1.78.0\n- cargo 1.78.0\n- clippy 0.1.78",
        },
    }


def test_update_sends_annotations_with_output(make_annotation) -> None:
    transport, seen = _transport(lambda request: httpx.Response(200, json={"id": 42}))
    batch = (make_annotation(0), make_annotation(1, AnnotationLevel.FAILURE))

    transport.update(42, batch, _output())

    (request,) = seen
    assert request.method == "PATCH"
    assert request.url.path == "/repos/octo/demo/check-runs/42"
    body = json.loads(request.content)
    assert body["status"] == "in_progress"
    assert body["output"]["title"] == "2 warnings"
    assert "| Warning | 2 |" in body["output"]["summary"]
    assert body["output"]["text"] == "## Versions\n\n- rustc 1.78.0"
    assert body["output"]["annotations"] == [
        {
            "path": "src/file_0.rs",
            "start_line": 1,
            "end_line": 1,
            "annotation_level": "warning",
            "message": "message 0",
        },
        {
            "path": "src/file_1.rs",
            "start_line": 2,
            "end_line": 2,
            "annotation_level": "failure",
            "message": "message 1",
        },
    ]


def test_complete_and_cancel_payloads() -> None:
    transport, seen = _transport(lambda request: httpx.Response(200, json={"id": 42}))

    transport.complete(42, Conclusion.FAILURE, datetime(2024, 5, 1, 12, 5, tzinfo=UTC), _output())
    transport.cancel(42, cancelled_output())

    complete_body, cancel_body = (json.loads(request.content) for request in seen)
    assert complete_body["status"] == "completed"
    assert complete_body["conclusion"] == "failure"
    assert complete_body["completed_at"] == "2024-05-01T12:05:00Z"
    assert "annotations" not in complete_body["output"]
    assert cancel_body["conclusion"] == "cancelled"
    assert cancel_body["output"]["title"] == "Check was cancelled"


def test_http_errors_raise_transport_error(check_context) -> None:
    transport, _ = _transport(lambda request: httpx.Response(403, text="Resource not accessible by integration"))
    with pytest.raises(TransportError) as excinfo:
        transport.create(check_context, _output())
    assert excinfo.value.status_code == 403
    assert excinfo.value.operation == "create"
    assert "Resource not accessible" in str(excinfo.value)


def test_network_errors_raise_transport_error(make_annotation) -> None:
    def _boom(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    transport, _ = _transport(_boom)
    with pytest.raises(TransportError) as excinfo:
        transport.update(1, (make_annotation(0),), _output())
    assert excinfo.value.status_code is None
    assert isinstance(excinfo.value.__cause__, httpx.ConnectError)


def test_create_rejects_body_without_id(check_context) -> None:
    transport, _ = _transport(lambda request: httpx.Response(201, json={"message": "odd"}))
    with pytest.raises(TransportError, match="unexpected response body"):
        transport.create(check_context, _output())
