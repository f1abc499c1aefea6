# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Resolve the final verdict of a run from the linter's exit status."""

from __future__ import annotations

from .constants import ICE_MARKER
from .models import RunVerdict


def contains_ice(stderr: str) -> bool:
    """Return whether any line of ``stderr`` reports an internal compiler error."""

    return any(line.startswith(ICE_MARKER) for line in stderr.splitlines())


def failure_message(exit_code: int, stderr: str) -> str:
    """Return the failure text reported when clippy exits unsuccessfully."""

    return f"Clippy had exited with the {exit_code} exit code:\n{stderr}"


def resolve_verdict(exit_code: int, stderr: str) -> RunVerdict:
    """Map the linter exit status and stderr to a :class:`RunVerdict`.

    A zero exit always succeeds. A non-zero exit caused by an internal
    compiler error is downgraded to success so a crash inside clippy does not
    block unrelated work; the stderr text is kept for the workflow output.
    Any other non-zero exit fails the run. Annotation counts play no part.

    Args:
        exit_code: Exit status of ``cargo clippy``.
        stderr: Full captured standard error stream.

    Returns:
        RunVerdict: Verdict for the whole run.
    """

    if exit_code == 0:
        return RunVerdict.ok()
    if contains_ice(stderr):
        return RunVerdict.recovered(stderr)
    return RunVerdict.failed(failure_message(exit_code, stderr))


__all__ = ["contains_ice", "failure_message", "resolve_verdict"]
