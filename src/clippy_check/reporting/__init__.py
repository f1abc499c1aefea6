# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Check-run reporting: rendering, transport and ordered submission."""

from __future__ import annotations

from .submitter import ReportSubmitter, SubmissionResult, SubmissionState
from .summary import ReportOutput, build_output, conclusion_for
from .transport import GitHubChecksTransport, ReportTransport

__all__ = [
    "GitHubChecksTransport",
    "ReportOutput",
    "ReportSubmitter",
    "ReportTransport",
    "SubmissionResult",
    "SubmissionState",
    "build_output",
    "conclusion_for",
]
