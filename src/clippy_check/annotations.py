# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Convert clippy diagnostics into check-run annotations."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from .models import Annotation, CompilerMessage, DiagnosticSpan
from .severity import AnnotationLevel, parse_severity, severity_to_annotation_level

LOGGER = logging.getLogger(__name__)


def annotation_level_for(level: str) -> AnnotationLevel | None:
    """Return the annotation level for a rustc ``level`` token.

    Args:
        level: Level string from the diagnostic (``error``, ``warning``...).

    Returns:
        AnnotationLevel | None: Mapped level, or ``None`` for unknown tokens.
    """

    severity = parse_severity(level)
    if severity is None:
        return None
    return severity_to_annotation_level(severity)


def _columns(span: DiagnosticSpan) -> tuple[int | None, int | None]:
    # The Checks API only accepts columns on single-line annotations.
    if span.line_start != span.line_end:
        return None, None
    return span.column_start, span.column_end


def make_annotation(record: CompilerMessage) -> Annotation | None:
    """Build an :class:`Annotation` from the first primary span of ``record``.

    Args:
        record: Diagnostic accepted by the line classifier.

    Returns:
        Annotation | None: Normalised annotation, or ``None`` when the level is
        unknown, no primary span exists, or the span is not a valid range.
    """

    message = record.message
    level = annotation_level_for(message.level)
    if level is None:
        LOGGER.debug("Ignoring diagnostic with unknown level %r", message.level)
        return None
    span = message.primary_span()
    if span is None:
        return None
    start_column, end_column = _columns(span)
    title = message.code.code if message.code is not None else (message.message.strip() or None)
    try:
        return Annotation(
            path=span.file_name,
            start_line=span.line_start,
            end_line=span.line_end,
            start_column=start_column,
            end_column=end_column,
            annotation_level=level,
            message=message.rendered if message.rendered is not None else message.message,
            title=title,
        )
    except ValidationError as exc:
        LOGGER.debug("Ignoring diagnostic with invalid span in %s: %s", span.file_name, exc)
        return None


__all__ = ["annotation_level_for", "make_annotation"]
