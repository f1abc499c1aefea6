# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime

import pytest

from clippy_check.console import get_console_manager
from clippy_check.models import Annotation, CheckContext
from clippy_check.severity import AnnotationLevel

STARTED_AT = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)

LineFactory = Callable[..., str]


def compiler_message(
    *,
    level: str = "warning",
    file_name: str = "src/lib.rs",
    line_start: int = 4,
    line_end: int | None = None,
    column_start: int = 9,
    column_end: int = 10,
    is_primary: bool = True,
    rendered: str | None = "unused variable",
    code: str | None = None,
    reason_key: str = "reason",
    extra_spans: list[dict[str, object]] | None = None,
) -> str:
    """Return one JSON line shaped like a cargo ``compiler-message`` record."""

    span = {
        "file_name": file_name,
        "line_start": line_start,
        "line_end": line_start if line_end is None else line_end,
        "column_start": column_start,
        "column_end": column_end,
        "is_primary": is_primary,
    }
    message: dict[str, object] = {
        "message": "unused variable: `x`",
        "level": level,
        "spans": [*(extra_spans or []), span],
        "code": {"code": code, "explanation": None} if code else None,
        "children": [],
    }
    if rendered is not None:
        message["rendered"] = rendered
    return json.dumps({reason_key: "compiler-message", "package_id": "demo 0.1.0", "message": message})


@pytest.fixture
def make_line() -> LineFactory:
    """Return a factory producing compiler-message JSON lines."""

    return compiler_message


@pytest.fixture
def check_context() -> CheckContext:
    """Return a check context for ``octo/demo`` at a fixed commit."""

    return CheckContext(
        owner="octo",
        repo="demo",
        head_sha="abc123",
        name="clippy",
        started_at=STARTED_AT,
        metadata={"rustc": "rustc 1.78.0", "cargo": "cargo 1.78.0", "clippy": "clippy 0.1.78"},
    )


def _annotation(index: int, level: AnnotationLevel = AnnotationLevel.WARNING) -> Annotation:
    return Annotation(
        path=f"src/file_{index}.rs",
        start_line=index + 1,
        end_line=index + 1,
        annotation_level=level,
        message=f"message {index}",
    )


@pytest.fixture
def make_annotation() -> Callable[..., Annotation]:
    """Return a factory producing distinct annotations identified by an index."""

    return _annotation


@pytest.fixture(autouse=True)
def _fresh_consoles() -> None:
    """Rebind cached Rich consoles so output lands in pytest's capture."""

    get_console_manager().clear()
