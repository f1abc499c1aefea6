# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for resolving the run verdict from clippy's exit status."""

from __future__ import annotations

import pytest

from clippy_check.verdict import contains_ice, resolve_verdict

ICE_STDERR = (
    "   Checking demo v0.1.0\n"
    "error: internal compiler error: compiler/rustc_middle/src/ty/mod.rs: unexpected\n"
    "thread 'rustc' panicked\n"
)


@pytest.mark.parametrize("stderr", ["", "warning: unused variable\n", ICE_STDERR])
def test_zero_exit_is_success_regardless_of_stderr(stderr: str) -> None:
    verdict = resolve_verdict(0, stderr)
    assert verdict.success
    assert verdict.message is None
    assert verdict.suppressed_stderr is None
    assert verdict.exit_code == 0


def test_ice_is_recovered_with_full_stderr() -> None:
    verdict = resolve_verdict(101, ICE_STDERR)
    assert verdict.success
    assert verdict.suppressed_stderr == ICE_STDERR
    assert verdict.exit_code == 0


def test_non_zero_exit_without_ice_fails() -> None:
    stderr = "error: could not compile `demo` due to 2 previous errors\n"
    verdict = resolve_verdict(101, stderr)
    assert not verdict.success
    assert verdict.message is not None
    assert "101" in verdict.message
    assert stderr in verdict.message
    assert verdict.exit_code == 1


def test_ice_marker_must_start_the_line() -> None:
    assert not contains_ice("note: error: internal compiler error reported elsewhere")
    assert contains_ice("first\nerror: internal compiler error: boom")
    assert not resolve_verdict(1, "  error: internal compiler error").success
