# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application exposing the ``clippy-check`` commands."""

from __future__ import annotations

import shlex
from typing import Annotated

import typer
from pydantic import ValidationError

from ..constants import DEFAULT_CHECK_NAME
from ..errors import ClippyCheckError
from ..github import GitHubEnvironment
from ..inputs import ActionInputs, clippy_arguments
from ..logging import configure_logging
from ..process import SubprocessExecutionError
from ..runner import CARGO, publish_verdict, run
from ..workflow import set_failed

app = typer.Typer(
    name="clippy-check",
    help="Annotate GitHub check runs with cargo clippy diagnostics.",
    no_args_is_help=True,
    add_completion=False,
)

NameOption = Annotated[str, typer.Option("--name", envvar="INPUT_NAME", help="Name of the created check run.")]
OptionsOption = Annotated[
    str,
    typer.Option("--options", envvar="INPUT_OPTIONS", help="Extra cargo clippy options, split shell-style."),
]
WarnOption = Annotated[str, typer.Option("--warn", envvar="INPUT_WARN", help="Lints to set to warn.")]
AllowOption = Annotated[str, typer.Option("--allow", envvar="INPUT_ALLOW", help="Lints to allow.")]
DenyOption = Annotated[str, typer.Option("--deny", envvar="INPUT_DENY", help="Lints to deny.")]
ForbidOption = Annotated[str, typer.Option("--forbid", envvar="INPUT_FORBID", help="Lints to forbid.")]


def _build_inputs(
    *,
    token: str,
    name: str,
    options: str,
    warn: str,
    allow: str,
    deny: str,
    forbid: str,
) -> ActionInputs:
    try:
        return ActionInputs(
            token=token,
            name=name,
            options=options,
            warn=warn,
            allow=allow,
            deny=deny,
            forbid=forbid,
        )
    except ValidationError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command("run")
def run_command(
    token: Annotated[str, typer.Option("--token", envvar="INPUT_TOKEN", help="GitHub token.")],
    name: NameOption = DEFAULT_CHECK_NAME,
    options: OptionsOption = "",
    warn: WarnOption = "",
    allow: AllowOption = "",
    deny: DenyOption = "",
    forbid: ForbidOption = "",
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show debug logging.")] = False,
    use_emoji: Annotated[bool, typer.Option("--emoji/--no-emoji", help="Prefix messages with emoji.")] = False,
) -> None:
    """Run cargo clippy and publish its diagnostics as a check run.

    Raises:
        typer.Exit: With status ``0`` on success and ``1`` on failure.
    """

    configure_logging(verbose=verbose)
    try:
        inputs = _build_inputs(
            token=token,
            name=name,
            options=options,
            warn=warn,
            allow=allow,
            deny=deny,
            forbid=forbid,
        )
        environment = GitHubEnvironment.from_environ()
        verdict = run(inputs, environment, use_emoji=use_emoji)
        exit_code = publish_verdict(verdict, use_emoji=use_emoji)
    except (ClippyCheckError, SubprocessExecutionError, OSError) as exc:
        set_failed(str(exc))
        raise typer.Exit(code=1) from exc
    raise typer.Exit(code=exit_code)


@app.command("flags")
def flags_command(
    options: OptionsOption = "",
    warn: WarnOption = "",
    allow: AllowOption = "",
    deny: DenyOption = "",
    forbid: ForbidOption = "",
) -> None:
    """Print the cargo command line ``run`` would execute."""

    try:
        inputs = _build_inputs(
            token="unused",
            name=DEFAULT_CHECK_NAME,
            options=options,
            warn=warn,
            allow=allow,
            deny=deny,
            forbid=forbid,
        )
    except ClippyCheckError as exc:
        raise typer.BadParameter(str(exc)) from exc
    typer.echo(shlex.join([CARGO, *clippy_arguments(inputs)]))


__all__ = ["app"]
