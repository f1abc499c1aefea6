# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Action inputs and the cargo arguments derived from them."""

from __future__ import annotations

import re
import shlex
from collections.abc import Iterable, Sequence
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import BARE_LINT_KEYWORDS, DEFAULT_CHECK_NAME, LINT_NAMESPACE, MESSAGE_FORMAT_OPTION
from .errors import ConfigError

_LIST_SEPARATOR: Final[re.Pattern[str]] = re.compile(r"[\s,]+")

WARN_FLAG: Final[str] = "--warn"
ALLOW_FLAG: Final[str] = "--allow"
DENY_FLAG: Final[str] = "--deny"
FORBID_FLAG: Final[str] = "--forbid"


def split_lint_list(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split a whitespace- or comma-separated lint list.

    Args:
        value: Raw input string, an iterable of such strings, or ``None``.

    Returns:
        tuple[str, ...]: Non-empty lint names in input order.
    """

    if value is None:
        return ()
    chunks = [value] if isinstance(value, str) else list(value)
    names: list[str] = []
    for chunk in chunks:
        names.extend(part for part in _LIST_SEPARATOR.split(chunk) if part)
    return tuple(names)


def split_options(value: str | Iterable[str] | None) -> tuple[str, ...]:
    """Split extra cargo options the way a shell would.

    Args:
        value: Raw option string, an iterable of already split options, or ``None``.

    Returns:
        tuple[str, ...]: Individual arguments.

    Raises:
        ConfigError: If the option string has unbalanced quotes.
    """

    if value is None:
        return ()
    if not isinstance(value, str):
        return tuple(value)
    try:
        return tuple(shlex.split(value))
    except ValueError as exc:
        raise ConfigError(f"invalid options {value!r}: {exc}") from exc


def qualify_lint(name: str) -> str:
    """Return ``name`` inside the clippy lint namespace.

    ``warnings`` and names that already carry the namespace are returned
    unchanged.
    """

    if name in BARE_LINT_KEYWORDS or name.startswith(LINT_NAMESPACE):
        return name
    return f"{LINT_NAMESPACE}{name}"


def lint_flags(prefix: str, names: Iterable[str]) -> list[str]:
    """Return ``[prefix, lint]`` pairs for every name in ``names``.

    Args:
        prefix: Flag such as ``--warn`` or ``--deny``.
        names: Lint names, with or without the ``clippy::`` namespace.

    Returns:
        list[str]: Flattened flag list.
    """

    flags: list[str] = []
    for name in names:
        flags.extend((prefix, qualify_lint(name)))
    return flags


class ActionInputs(BaseModel):
    """Inputs accepted by the action."""

    model_config = ConfigDict(frozen=True)

    token: str = Field(min_length=1, repr=False)
    name: str = Field(default=DEFAULT_CHECK_NAME, min_length=1)
    options: tuple[str, ...] = Field(default_factory=tuple)
    warn: tuple[str, ...] = Field(default_factory=tuple)
    allow: tuple[str, ...] = Field(default_factory=tuple)
    deny: tuple[str, ...] = Field(default_factory=tuple)
    forbid: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("options", mode="before")
    @classmethod
    def _split_options(cls, value: str | Sequence[str] | None) -> tuple[str, ...]:
        return split_options(value)

    @field_validator("warn", "allow", "deny", "forbid", mode="before")
    @classmethod
    def _split_lints(cls, value: str | Sequence[str] | None) -> tuple[str, ...]:
        return split_lint_list(value)

    def cargo_options(self) -> list[str]:
        """Return user options minus any ``--message-format`` override."""

        return [option for option in self.options if not option.startswith(MESSAGE_FORMAT_OPTION)]

    def lint_arguments(self) -> list[str]:
        """Return the lint level flags passed to clippy after ``--``."""

        return [
            *lint_flags(WARN_FLAG, self.warn),
            *lint_flags(ALLOW_FLAG, self.allow),
            *lint_flags(DENY_FLAG, self.deny),
            *lint_flags(FORBID_FLAG, self.forbid),
        ]


def clippy_arguments(inputs: ActionInputs) -> list[str]:
    """Return the ``cargo`` arguments that run clippy with JSON output.

    Args:
        inputs: Validated action inputs.

    Returns:
        list[str]: Arguments following the ``cargo`` executable.
    """

    return ["clippy", "--message-format=json", *inputs.cargo_options(), "--", *inputs.lint_arguments()]


__all__ = [
    "ALLOW_FLAG",
    "ActionInputs",
    "DENY_FLAG",
    "FORBID_FLAG",
    "WARN_FLAG",
    "clippy_arguments",
    "lint_flags",
    "qualify_lint",
    "split_lint_list",
    "split_options",
]
