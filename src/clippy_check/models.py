# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data models shared across the clippy_check package."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .severity import FAILING_SEVERITIES, AnnotationLevel, Severity

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = "JsonScalar | list[JsonValue] | dict[str, JsonValue]"


class DiagnosticSpan(BaseModel):
    """Source region referenced by a compiler diagnostic."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    file_name: str
    line_start: int
    line_end: int
    column_start: int | None = None
    column_end: int | None = None
    is_primary: bool = False


class DiagnosticCode(BaseModel):
    """Lint or error code attached to a diagnostic (``clippy::needless_return``)."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    code: str
    explanation: str | None = None


class DiagnosticMessage(BaseModel):
    """The ``message`` object nested in a ``compiler-message`` record."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str = ""
    code: DiagnosticCode | None = None
    level: str
    spans: tuple[DiagnosticSpan, ...] = Field(default_factory=tuple)
    rendered: str | None = None

    def primary_span(self) -> DiagnosticSpan | None:
        """Return the first span flagged as primary, if any.

        Returns:
            DiagnosticSpan | None: Primary span in emission order or ``None``.
        """

        return next((span for span in self.spans if span.is_primary), None)


class CompilerMessage(BaseModel):
    """A diagnostic emitted by rustc or clippy for one crate target."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    reason: Literal["compiler-message"]
    package_id: str | None = None
    manifest_path: str | None = None
    message: DiagnosticMessage


class CompilerArtifact(BaseModel):
    """Notification that cargo finished building an artifact."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    reason: Literal["compiler-artifact"]
    package_id: str | None = None
    fresh: bool | None = None


class BuildScriptExecuted(BaseModel):
    """Notification that a build script has run."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    reason: Literal["build-script-executed"]
    package_id: str | None = None


class BuildFinished(BaseModel):
    """Final record cargo emits once the build completes."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    reason: Literal["build-finished"]
    success: bool | None = None


CargoRecord = Annotated[
    CompilerMessage | CompilerArtifact | BuildScriptExecuted | BuildFinished,
    Field(discriminator="reason"),
]


class Annotation(BaseModel):
    """A report-ready annotation referencing a file range."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    start_line: int = Field(ge=1)
    end_line: int = Field(ge=1)
    start_column: int | None = Field(default=None, ge=1)
    end_column: int | None = Field(default=None, ge=1)
    annotation_level: AnnotationLevel
    message: str
    title: str | None = None

    @model_validator(mode="after")
    def _check_range(self) -> Annotation:
        """Reject annotations whose line range is inverted.

        Returns:
            Annotation: The validated annotation.

        Raises:
            ValueError: If ``start_line`` is greater than ``end_line``.
        """

        if self.start_line > self.end_line:
            raise ValueError(f"start_line {self.start_line} is after end_line {self.end_line}")
        return self

    def to_payload(self) -> dict[str, JsonValue]:
        """Return the JSON body fragment used by the Checks API."""

        return self.model_dump(mode="json", exclude_none=True)


Batch: TypeAlias = tuple[Annotation, ...]


class CheckContext(BaseModel):
    """Immutable description of the check run captured before the linter starts."""

    model_config = ConfigDict(frozen=True)

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    head_sha: str = Field(min_length=1)
    name: str = Field(min_length=1)
    started_at: datetime
    metadata: Mapping[str, str] = Field(default_factory=dict)


@dataclass(slots=True)
class MessageStats:
    """Count accepted diagnostics per severity."""

    ice: int = 0
    error: int = 0
    warning: int = 0
    note: int = 0
    help: int = 0

    def record(self, severity: Severity) -> None:
        """Increment the counter that tracks ``severity``."""

        setattr(self, severity.value, getattr(self, severity.value) + 1)

    def count(self, severity: Severity) -> int:
        """Return the number of diagnostics recorded for ``severity``."""

        return int(getattr(self, severity.value))

    @property
    def total(self) -> int:
        """Return the number of diagnostics recorded across all severities."""

        return self.ice + self.error + self.warning + self.note + self.help

    def has_failures(self) -> bool:
        """Return whether any error or internal compiler error was recorded."""

        return any(self.count(severity) for severity in FAILING_SEVERITIES)


class RunVerdict(BaseModel):
    """Terminal result of a clippy-check run.

    ``suppressed_stderr`` is only populated when an internal compiler error was
    downgraded to success; callers publish it as an informational output.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    message: str | None = None
    suppressed_stderr: str | None = None

    @classmethod
    def ok(cls) -> RunVerdict:
        """Return a plain success verdict."""

        return cls(success=True)

    @classmethod
    def failed(cls, message: str) -> RunVerdict:
        """Return a failure verdict carrying ``message``."""

        return cls(success=False, message=message)

    @classmethod
    def recovered(cls, stderr: str) -> RunVerdict:
        """Return a success verdict that records a suppressed internal compiler error."""

        return cls(success=True, suppressed_stderr=stderr)

    @property
    def exit_code(self) -> int:
        """Return the process exit status matching the verdict."""

        return 0 if self.success else 1


__all__ = [
    "Annotation",
    "Batch",
    "BuildFinished",
    "BuildScriptExecuted",
    "CargoRecord",
    "CheckContext",
    "CompilerArtifact",
    "CompilerMessage",
    "DiagnosticCode",
    "DiagnosticMessage",
    "DiagnosticSpan",
    "JsonScalar",
    "JsonValue",
    "MessageStats",
    "RunVerdict",
]
