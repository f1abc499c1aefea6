# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classify lines of ``cargo clippy --message-format=json`` output."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping as MappingABC
from typing import Final, cast

from pydantic import TypeAdapter

from .models import CargoRecord, CompilerMessage, JsonValue

LOGGER = logging.getLogger(__name__)

_REASON_KEY: Final[str] = "reason"
_KIND_KEY: Final[str] = "kind"
_RECORD_ADAPTER: Final[TypeAdapter[CargoRecord]] = TypeAdapter(CargoRecord)


def load_json_object(line: str) -> dict[str, JsonValue] | None:
    """Decode ``line`` as a JSON object.

    Args:
        line: One line of linter output.

    Returns:
        dict[str, JsonValue] | None: Decoded object, or ``None`` for blank lines,
        invalid JSON and JSON values that are not objects.
    """

    trimmed = line.strip()
    if not trimmed:
        return None
    try:
        payload = json.loads(trimmed)
    except (ValueError, RecursionError):
        return None
    if not isinstance(payload, MappingABC):
        return None
    return {str(key): cast(JsonValue, value) for key, value in payload.items()}


def _with_discriminant(payload: dict[str, JsonValue]) -> dict[str, JsonValue]:
    """Return ``payload`` with ``kind`` folded into the ``reason`` discriminant."""

    if _REASON_KEY not in payload and _KIND_KEY in payload:
        return {**payload, _REASON_KEY: payload[_KIND_KEY]}
    return payload


def parse_record(line: str) -> CargoRecord | None:
    """Parse ``line`` into one of the known cargo record types.

    Args:
        line: One line of linter output.

    Returns:
        CargoRecord | None: Typed record, or ``None`` when the line is not a
        recognised cargo JSON message.
    """

    payload = load_json_object(line)
    if payload is None:
        return None
    try:
        return _RECORD_ADAPTER.validate_python(_with_discriminant(payload))
    except ValueError as exc:
        LOGGER.debug("Ignoring unrecognised record: %s", exc)
        return None


def classify_line(line: str) -> CompilerMessage | None:
    """Return the diagnostic carried by ``line`` when it can be annotated.

    Only ``compiler-message`` records with at least one primary span qualify.
    Everything else cargo interleaves with diagnostics (artifacts, build
    script notifications, plain text) is dropped silently.

    Args:
        line: One line of linter output.

    Returns:
        CompilerMessage | None: The diagnostic record, or ``None`` when the
        line should be ignored.
    """

    record = parse_record(line)
    if not isinstance(record, CompilerMessage):
        return None
    if record.message.primary_span() is None:
        LOGGER.debug("Ignoring diagnostic without a primary span: %s", record.message.message)
        return None
    return record


__all__ = [
    "classify_line",
    "load_json_object",
    "parse_record",
]
