# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from enum import Enum
from typing import Final

from .constants import ICE_MARKER


class Severity(str, Enum):
    """Message levels emitted by rustc and clippy."""

    ICE = "ice"
    ERROR = "error"
    WARNING = "warning"
    NOTE = "note"
    HELP = "help"


class AnnotationLevel(str, Enum):
    """Annotation levels accepted by the GitHub Checks API."""

    FAILURE = "failure"
    WARNING = "warning"
    NOTICE = "notice"


class Conclusion(str, Enum):
    """Final check-run conclusions produced by a run."""

    SUCCESS = "success"
    FAILURE = "failure"
    CANCELLED = "cancelled"


_LEVEL_ALIASES: Final[dict[str, Severity]] = {
    ICE_MARKER: Severity.ICE,
}

_SEVERITY_TO_ANNOTATION_LEVEL: Final[dict[Severity, AnnotationLevel]] = {
    Severity.ICE: AnnotationLevel.FAILURE,
    Severity.ERROR: AnnotationLevel.FAILURE,
    Severity.WARNING: AnnotationLevel.WARNING,
    Severity.NOTE: AnnotationLevel.NOTICE,
    Severity.HELP: AnnotationLevel.NOTICE,
}

FAILING_SEVERITIES: Final[frozenset[Severity]] = frozenset({Severity.ICE, Severity.ERROR})


def parse_severity(label: object) -> Severity | None:
    """Return the :class:`Severity` named by ``label``.

    Args:
        label: Level token taken from a diagnostic message.

    Returns:
        Severity | None: Matching severity, or ``None`` for unknown tokens.
    """

    if not isinstance(label, str):
        return None
    token = label.strip().lower()
    if token in _LEVEL_ALIASES:
        return _LEVEL_ALIASES[token]
    try:
        return Severity(token)
    except ValueError:
        return None


def severity_to_annotation_level(severity: Severity) -> AnnotationLevel:
    """Map a :class:`Severity` to the annotation level used by check runs.

    Args:
        severity: Severity value to translate.

    Returns:
        AnnotationLevel: ``failure``, ``warning`` or ``notice``.
    """

    return _SEVERITY_TO_ANNOTATION_LEVEL[severity]


__all__ = [
    "AnnotationLevel",
    "Conclusion",
    "FAILING_SEVERITIES",
    "Severity",
    "parse_severity",
    "severity_to_annotation_level",
]
