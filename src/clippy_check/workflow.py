# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""GitHub Actions workflow commands and output files."""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path
from typing import Final

from .errors import ConfigError
from .logging import plain

_OUTPUT_FILE_ENV: Final[str] = "GITHUB_OUTPUT"


def escape_data(value: str) -> str:
    """Escape ``value`` for use as a workflow command payload."""

    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def escape_property(value: str) -> str:
    """Escape ``value`` for use as a workflow command property."""

    return escape_data(value).replace(":", "%3A").replace(",", "%2C")


def issue_command(command: str, message: str = "", **properties: str) -> None:
    """Print a ``::command prop=value::message`` line for the runner.

    Args:
        command: Workflow command name.
        message: Command payload.
        **properties: Optional command properties.
    """

    rendered = ",".join(f"{key}={escape_property(value)}" for key, value in properties.items())
    head = f"{command} {rendered}" if rendered else command
    plain(f"::{head}::{escape_data(message)}")


def debug(message: str) -> None:
    """Emit a debug message, visible when step debug logging is on."""

    issue_command("debug", message)


def error(message: str) -> None:
    """Emit an error annotation for the current step."""

    issue_command("error", message)


def set_failed(message: str) -> None:
    """Report ``message`` as the reason the step failed.

    The caller is responsible for exiting with a non-zero status.
    """

    error(message)


@contextmanager
def group(title: str) -> Iterator[None]:
    """Fold everything printed inside the block under ``title`` in the log."""

    issue_command("group", title)
    try:
        yield
    finally:
        issue_command("endgroup")


def set_output(name: str, value: str, *, environ: Mapping[str, str] | None = None) -> None:
    """Publish a step output.

    Outputs are appended to the file named by ``GITHUB_OUTPUT`` using a
    heredoc delimiter; without that file the legacy ``set-output`` command is
    printed instead.

    Args:
        name: Output name.
        value: Output value, may span several lines.
        environ: Environment mapping, defaults to :data:`os.environ`.

    Raises:
        ConfigError: If ``GITHUB_OUTPUT`` names a file that does not exist.
    """

    env = os.environ if environ is None else environ
    output_file = env.get(_OUTPUT_FILE_ENV)
    if not output_file:
        issue_command("set-output", value, name=name)
        return
    path = Path(output_file)
    if not path.is_file():
        raise ConfigError(f"{_OUTPUT_FILE_ENV} points at a missing file: {output_file}")
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ConfigError("output delimiter collided with the output content")
    with path.open("a", encoding="utf-8") as handle:
        handle.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")


__all__ = [
    "debug",
    "error",
    "escape_data",
    "escape_property",
    "group",
    "issue_command",
    "set_failed",
    "set_output",
]
