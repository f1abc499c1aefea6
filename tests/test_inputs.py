# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests covering action inputs and the derived cargo arguments."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from clippy_check.errors import ConfigError
from clippy_check.inputs import (
    ActionInputs,
    clippy_arguments,
    lint_flags,
    qualify_lint,
    split_lint_list,
    split_options,
)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("needless_return", "clippy::needless_return"),
        ("clippy::pedantic", "clippy::pedantic"),
        ("warnings", "warnings"),
    ],
)
def test_qualify_lint(name: str, expected: str) -> None:
    assert qualify_lint(name) == expected


def test_lint_flags_pairs_prefix_with_each_name() -> None:
    assert lint_flags("--deny", ["warnings", "all"]) == ["--deny", "warnings", "--deny", "clippy::all"]
    assert lint_flags("--warn", []) == []


def test_split_lint_list_accepts_spaces_commas_and_newlines() -> None:
    assert split_lint_list("a, b\nc  clippy::d") == ("a", "b", "c", "clippy::d")
    assert split_lint_list(["x y", "z"]) == ("x", "y", "z")
    assert split_lint_list(None) == ()


def test_split_options_is_shell_like() -> None:
    assert split_options('--all-features -p "my crate"') == ("--all-features", "-p", "my crate")
    with pytest.raises(ConfigError):
        split_options('--features "unterminated')


def test_clippy_arguments_orders_flags_and_drops_message_format() -> None:
    inputs = ActionInputs(
        token="t",
        options="--all-targets --message-format=short --workspace",
        warn="clippy::pedantic",
        allow="module_name_repetitions",
        deny="warnings",
        forbid="unsafe_code",
    )
    assert clippy_arguments(inputs) == [
        "clippy",
        "--message-format=json",
        "--all-targets",
        "--workspace",
        "--",
        "--warn",
        "clippy::pedantic",
        "--allow",
        "clippy::module_name_repetitions",
        "--deny",
        "warnings",
        "--forbid",
        "clippy::unsafe_code",
    ]


def test_action_inputs_defaults_and_validation() -> None:
    inputs = ActionInputs(token="s3cret")
    assert inputs.name == "clippy"
    assert clippy_arguments(inputs) == ["clippy", "--message-format=json", "--"]
    assert "s3cret" not in repr(inputs)
    with pytest.raises(ValidationError):
        ActionInputs(token="")
