# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering classification of cargo JSON output lines."""

from __future__ import annotations

import json

import pytest

from clippy_check.models import BuildFinished, CompilerArtifact, CompilerMessage
from clippy_check.parsers import classify_line, load_json_object, parse_record


def test_classify_line_accepts_compiler_message(make_line) -> None:
    record = classify_line(make_line())
    assert isinstance(record, CompilerMessage)
    assert record.message.level == "warning"
    assert record.message.spans[0].file_name == "src/lib.rs"


def test_classify_line_accepts_kind_discriminant(make_line) -> None:
    line = (
        '{"kind":"compiler-message","message":{"level":"warning","spans":[{"file_name":"src/lib.rs",'
        '"line_start":4,"line_end":4,"is_primary":true}],"rendered":"unused variable"}}'
    )
    record = classify_line(line)
    assert record is not None
    assert record.message.rendered == "unused variable"
    assert classify_line(make_line(reason_key="kind")) is not None


@pytest.mark.parametrize(
    "line",
    [
        "",
        "   ",
        "Compiling foo v0.1.0",
        "[1, 2, 3]",
        '"compiler-message"',
        "null",
        "{not json",
        '{"reason": "compiler-message"}',
        '{"reason": "compiler-message", "message": {"level": "warning", "spans": "nope"}}',
        '{"reason": "something-new", "message": {}}',
        '{"message": {"level": "warning", "spans": []}}',
        "[" * 100_000,
        '{"reason":"compiler-artifact","fresh":' + "9" * 5000 + "}",
    ],
)
def test_classify_line_drops_noise_without_raising(line: str) -> None:
    assert classify_line(line) is None


def test_classify_line_drops_records_without_primary_span(make_line) -> None:
    assert classify_line(make_line(is_primary=False)) is None


def test_parse_record_recognises_other_cargo_records() -> None:
    artifact = parse_record(json.dumps({"reason": "compiler-artifact", "package_id": "demo", "fresh": True}))
    finished = parse_record(json.dumps({"reason": "build-finished", "success": False}))
    assert isinstance(artifact, CompilerArtifact)
    assert isinstance(finished, BuildFinished)
    assert finished.success is False
    assert classify_line(json.dumps({"reason": "build-finished", "success": True})) is None


def test_load_json_object_rejects_non_objects() -> None:
    assert load_json_object('{"a": 1}') == {"a": 1}
    assert load_json_object("42") is None
    assert load_json_object("") is None


def test_load_json_object_tolerates_oversized_integers() -> None:
    assert load_json_object('{"fresh": ' + "9" * 5000 + "}") is None


def test_classify_line_preserves_stream_order(make_line) -> None:
    lines = [
        make_line(file_name="src/a.rs"),
        "warning: build failed",
        make_line(file_name="src/b.rs"),
        make_line(file_name="src/c.rs", is_primary=False),
        make_line(file_name="src/d.rs"),
    ]
    records = [record for record in map(classify_line, lines) if record is not None]
    assert [record.message.spans[-1].file_name for record in records] == ["src/a.rs", "src/b.rs", "src/d.rs"]
