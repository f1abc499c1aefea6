# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared constants used across clippy_check modules."""

from __future__ import annotations

from typing import Final

# GitHub rejects check-run updates carrying more annotations than this.
MAX_ANNOTATIONS_PER_REQUEST: Final[int] = 50

ICE_MARKER: Final[str] = "error: internal compiler error"

LINT_NAMESPACE: Final[str] = "clippy::"
BARE_LINT_KEYWORDS: Final[frozenset[str]] = frozenset({"warnings"})
MESSAGE_FORMAT_OPTION: Final[str] = "--message-format"

DEFAULT_CHECK_NAME: Final[str] = "clippy"
DEFAULT_GITHUB_API_URL: Final[str] = "https://api.github.com"
SUPPRESSED_ICE_OUTPUT: Final[str] = "Suppress ICEs"

__all__ = [
    "BARE_LINT_KEYWORDS",
    "DEFAULT_CHECK_NAME",
    "DEFAULT_GITHUB_API_URL",
    "ICE_MARKER",
    "LINT_NAMESPACE",
    "MAX_ANNOTATIONS_PER_REQUEST",
    "MESSAGE_FORMAT_OPTION",
    "SUPPRESSED_ICE_OUTPUT",
]
