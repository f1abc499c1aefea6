# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy raised by clippy_check."""

from __future__ import annotations


class ClippyCheckError(Exception):
    """Base class for errors that abort a clippy-check run."""


class ConfigError(ClippyCheckError):
    """Raised when action inputs or the workflow environment are invalid."""


class TransportError(ClippyCheckError):
    """Raised when a call to the check-run API fails."""

    def __init__(self, operation: str, detail: str, *, status_code: int | None = None) -> None:
        """Initialise the error with the failing operation and its cause.

        Args:
            operation: Name of the transport call that failed (``create``, ``update``...).
            detail: Human readable description of the failure.
            status_code: HTTP status returned by the API when a response was received.
        """

        super().__init__(f"check-run {operation} failed: {detail}")
        self.operation = operation
        self.detail = detail
        self.status_code = status_code


class SubmissionError(ClippyCheckError):
    """Raised when the report submitter is driven out of order."""


__all__ = ["ClippyCheckError", "ConfigError", "SubmissionError", "TransportError"]
