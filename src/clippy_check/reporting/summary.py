# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render the title, summary and text shown on the check-run page."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Final

from pydantic import BaseModel, ConfigDict

from ..models import Annotation, JsonValue, MessageStats
from ..severity import Conclusion, Severity

NO_PROBLEMS_TITLE: Final[str] = "No problems found"
CANCELLED_TITLE: Final[str] = "Check was cancelled"
CANCELLED_SUMMARY: Final[str] = "Unable to complete clippy-check"

_TITLE_LABELS: Final[tuple[tuple[Severity, str], ...]] = (
    (Severity.ICE, "internal compiler errors"),
    (Severity.ERROR, "errors"),
    (Severity.WARNING, "warnings"),
    (Severity.NOTE, "notes"),
    (Severity.HELP, "help messages"),
)
_TABLE_LABELS: Final[tuple[tuple[Severity, str], ...]] = (
    (Severity.ICE, "Internal compiler error"),
    (Severity.ERROR, "Error"),
    (Severity.WARNING, "Warning"),
    (Severity.NOTE, "Note"),
    (Severity.HELP, "Help"),
)


class ReportOutput(BaseModel):
    """The ``output`` object attached to every check-run call."""

    model_config = ConfigDict(frozen=True)

    title: str
    summary: str
    text: str | None = None

    def to_payload(self, annotations: Sequence[Annotation] = ()) -> dict[str, JsonValue]:
        """Return the JSON ``output`` object, optionally carrying ``annotations``."""

        payload: dict[str, JsonValue] = {"title": self.title, "summary": self.summary}
        if self.text is not None:
            payload["text"] = self.text
        if annotations:
            payload["annotations"] = [annotation.to_payload() for annotation in annotations]
        return payload


def render_title(stats: MessageStats) -> str:
    """Return a short headline such as ``"2 errors, 5 warnings"``."""

    parts = [f"{stats.count(severity)} {label}" for severity, label in _TITLE_LABELS if stats.count(severity)]
    return ", ".join(parts) if parts else NO_PROBLEMS_TITLE


def render_summary(stats: MessageStats) -> str:
    """Return a markdown table of message counts per level."""

    lines = [
        "## Results",
        "",
        "| Message level | Amount |",
        "| --- | --- |",
    ]
    lines.extend(f"| {label} | {stats.count(severity)} |" for severity, label in _TABLE_LABELS)
    return "\n".join(lines)


def render_versions(metadata: Mapping[str, str]) -> str:
    """Return a markdown list of the tool versions used by the run."""

    lines = ["## Versions", ""]
    for tool, version in metadata.items():
        cleaned = version.strip()
        lines.append(f"- {cleaned}" if cleaned else f"- {tool}: unknown")
    return "\n".join(lines)


def build_output(stats: MessageStats, metadata: Mapping[str, str]) -> ReportOutput:
    """Return the output shown while and after annotations are submitted."""

    return ReportOutput(
        title=render_title(stats),
        summary=render_summary(stats),
        text=render_versions(metadata),
    )


def cancelled_output() -> ReportOutput:
    """Return the output attached when a submission is aborted."""

    return ReportOutput(title=CANCELLED_TITLE, summary=CANCELLED_SUMMARY, text=CANCELLED_SUMMARY)


def conclusion_for(stats: MessageStats) -> Conclusion:
    """Return ``failure`` when an error or ICE was reported, else ``success``."""

    return Conclusion.FAILURE if stats.has_failures() else Conclusion.SUCCESS


__all__ = [
    "CANCELLED_SUMMARY",
    "CANCELLED_TITLE",
    "NO_PROBLEMS_TITLE",
    "ReportOutput",
    "build_output",
    "cancelled_output",
    "conclusion_for",
    "render_summary",
    "render_title",
    "render_versions",
]
