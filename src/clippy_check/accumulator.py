# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Buffer annotations and hand them out in API-sized batches."""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import TypeVar

from .annotations import make_annotation
from .constants import MAX_ANNOTATIONS_PER_REQUEST
from .models import Annotation, Batch, MessageStats
from .parsers import classify_line
from .severity import parse_severity

_T = TypeVar("_T")


def chunked(items: Sequence[_T], size: int) -> Iterator[tuple[_T, ...]]:
    """Yield consecutive slices of ``items`` holding at most ``size`` entries.

    Args:
        items: Sequence to partition.
        size: Maximum number of entries per slice.

    Yields:
        tuple: Non-empty slices in original order.

    Raises:
        ValueError: If ``size`` is not positive.
    """

    if size < 1:
        raise ValueError(f"chunk size must be positive, got {size}")
    for start in range(0, len(items), size):
        yield tuple(items[start : start + size])


class AnnotationAccumulator:
    """Collect annotations while the linter runs and drain them afterwards.

    The accumulator is fed from the line callback of the process runner, so
    every operation here is in-memory and constant time per line.
    """

    def __init__(self, *, batch_size: int = MAX_ANNOTATIONS_PER_REQUEST) -> None:
        if batch_size < 1:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self._batch_size = batch_size
        self._pending: list[Annotation] = []
        self._stats = MessageStats()

    @property
    def batch_size(self) -> int:
        """Return the maximum number of annotations per batch."""

        return self._batch_size

    @property
    def stats(self) -> MessageStats:
        """Return per-severity counts of accepted diagnostics."""

        return self._stats

    @property
    def pending(self) -> tuple[Annotation, ...]:
        """Return a snapshot of the buffered annotations."""

        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, annotation: Annotation) -> None:
        """Append ``annotation`` to the pending sequence."""

        self._pending.append(annotation)

    def try_push(self, line: str) -> bool:
        """Classify ``line`` and buffer the annotation it yields, if any.

        Args:
            line: One line of linter stdout.

        Returns:
            bool: ``True`` when an annotation was buffered.
        """

        record = classify_line(line)
        if record is None:
            return False
        annotation = make_annotation(record)
        if annotation is None:
            return False
        severity = parse_severity(record.message.level)
        if severity is not None:
            self._stats.record(severity)
        self.push(annotation)
        return True

    def drain_batches(self) -> Iterator[Batch]:
        """Yield the pending annotations partitioned into batches.

        Every call recomputes the same partition from the pending sequence. An
        empty accumulator yields no batches at all.

        Yields:
            Batch: Up to :attr:`batch_size` annotations, in push order.
        """

        yield from chunked(self._pending, self._batch_size)


__all__ = ["AnnotationAccumulator", "chunked"]
