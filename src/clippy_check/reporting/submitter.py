# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Submit annotations to a check run as an ordered sequence of calls."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum

from ..errors import ClippyCheckError, SubmissionError, TransportError
from ..logging import fail, info, warn
from ..models import Batch, CheckContext, MessageStats
from ..severity import Conclusion
from .summary import build_output, cancelled_output, conclusion_for
from .transport import ReportTransport

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""

    return datetime.now(UTC)


class SubmissionState(str, Enum):
    """Lifecycle of one report submission."""

    PENDING = "pending"
    CREATED = "created"
    SUBMITTING = "submitting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class SubmissionResult:
    """Summary of a finished submission."""

    report_id: int | None
    conclusion: Conclusion
    batches_sent: int
    annotations_sent: int
    fallback: bool = False


class ReportSubmitter:
    """Drive ``create -> update * N -> complete`` against a :class:`ReportTransport`.

    Each call starts only after the previous one returned, so the remote side
    receives batches in drain order. A transport failure after the report was
    created triggers a best-effort cancel and is then re-raised unchanged.

    When ``fork_fallback`` is set and the report cannot be created (pull
    requests from forks get a read-only token), annotations are printed to the
    log instead.
    """

    def __init__(
        self,
        transport: ReportTransport,
        *,
        clock: Clock = utcnow,
        fork_fallback: bool = False,
        use_emoji: bool = False,
    ) -> None:
        self._transport = transport
        self._clock = clock
        self._fork_fallback = fork_fallback
        self._use_emoji = use_emoji
        self._state = SubmissionState.PENDING
        self._batch_index: int | None = None
        self._report_id: int | None = None

    @property
    def state(self) -> SubmissionState:
        """Return the current lifecycle state."""

        return self._state

    @property
    def batch_index(self) -> int | None:
        """Return the index of the batch being (or last) submitted."""

        return self._batch_index

    @property
    def report_id(self) -> int | None:
        """Return the identifier of the created report, if any."""

        return self._report_id

    def submit(self, context: CheckContext, batches: Iterable[Batch], *, stats: MessageStats) -> SubmissionResult:
        """Create the report, send every batch in order and complete it.

        Args:
            context: Immutable description of the check run.
            batches: Annotation batches in submission order.
            stats: Per-severity counts used for the title and conclusion.

        Returns:
            SubmissionResult: Identifier, conclusion and counts of what was sent.

        Raises:
            SubmissionError: If this submitter was already used.
            TransportError: If any call fails (after cancelling the report).
            ClippyCheckError: If the fork fallback ran and clippy reported errors.
        """

        if self._state is not SubmissionState.PENDING:
            raise SubmissionError(f"submit() called in state {self._state.value}")
        output = build_output(stats, context.metadata)
        conclusion = conclusion_for(stats)

        try:
            self._report_id = self._transport.create(context, output)
        except TransportError as exc:
            if not self._fork_fallback:
                self._state = SubmissionState.FAILED
                raise
            return self._dump_to_log(exc, batches, conclusion)
        self._state = SubmissionState.CREATED

        batches_sent = 0
        annotations_sent = 0
        try:
            for index, batch in enumerate(batches):
                self._state = SubmissionState.SUBMITTING
                self._batch_index = index
                self._transport.update(self._report_id, batch, output)
                batches_sent += 1
                annotations_sent += len(batch)
            self._transport.complete(self._report_id, conclusion, self._clock(), output)
        except Exception:
            self._cancel()
            self._state = SubmissionState.FAILED
            raise
        self._state = SubmissionState.COMPLETED
        return SubmissionResult(
            report_id=self._report_id,
            conclusion=conclusion,
            batches_sent=batches_sent,
            annotations_sent=annotations_sent,
        )

    def _cancel(self) -> None:
        if self._report_id is None:
            return
        try:
            self._transport.cancel(self._report_id, cancelled_output())
        except TransportError as exc:
            warn(f"Unable to cancel check run {self._report_id}: {exc}", use_emoji=self._use_emoji)

    def _dump_to_log(
        self,
        cause: TransportError,
        batches: Iterable[Batch],
        conclusion: Conclusion,
    ) -> SubmissionResult:
        fail(f"Unable to create clippy annotations! Reason: {cause}", use_emoji=self._use_emoji)
        warn("It seems that this Action is executed from the forked repository.", use_emoji=self._use_emoji)
        warn(
            "GitHub Actions are not allowed to create Check annotations when executed for a forked repository.",
            use_emoji=self._use_emoji,
        )
        info("Posting clippy checks here instead.", use_emoji=self._use_emoji)
        annotations_sent = 0
        for batch in batches:
            for annotation in batch:
                info(annotation.message, use_emoji=False)
                annotations_sent += 1
        if conclusion is Conclusion.FAILURE:
            self._state = SubmissionState.FAILED
            raise ClippyCheckError("Exiting due to clippy errors") from cause
        self._state = SubmissionState.COMPLETED
        return SubmissionResult(
            report_id=None,
            conclusion=conclusion,
            batches_sent=0,
            annotations_sent=annotations_sent,
            fallback=True,
        )


__all__ = [
    "Clock",
    "ReportSubmitter",
    "SubmissionResult",
    "SubmissionState",
    "utcnow",
]
