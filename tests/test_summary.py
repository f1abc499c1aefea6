# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for the check-run title, summary and text."""

from __future__ import annotations

from clippy_check.models import MessageStats
from clippy_check.reporting.summary import (
    NO_PROBLEMS_TITLE,
    conclusion_for,
    render_summary,
    render_title,
    render_versions,
)
from clippy_check.severity import Conclusion


def test_render_title_lists_non_zero_levels() -> None:
    stats = MessageStats(ice=1, error=2, warning=0, note=3, help=1)
    assert render_title(stats) == "1 internal compiler errors, 2 errors, 3 notes, 1 help messages"
    assert render_title(MessageStats()) == NO_PROBLEMS_TITLE


def test_render_summary_table() -> None:
    summary = render_summary(MessageStats(error=2, warning=5))
    assert summary.splitlines() == [
        "## Results",
        "",
        "| Message level | Amount |",
        "| --- | --- |",
        "| Internal compiler error | 0 |",
        "| Error | 2 |",
        "| Warning | 5 |",
        "| Note | 0 |",
        "| Help | 0 |",
    ]


def test_render_versions_handles_blank_probe_output() -> None:
    text = render_versions({"rustc": "rustc 1.78.0\n", "clippy": ""})
    assert text == "## Versions\n\n- rustc 1.78.0\n- clippy: unknown"


def test_conclusion_for() -> None:
    assert conclusion_for(MessageStats(warning=10, note=1)) is Conclusion.SUCCESS
    assert conclusion_for(MessageStats(error=1)) is Conclusion.FAILURE
    assert conclusion_for(MessageStats(ice=1)) is Conclusion.FAILURE
