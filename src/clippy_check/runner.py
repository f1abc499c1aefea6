# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run clippy once and report its diagnostics as a check run."""

from __future__ import annotations

import shlex
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Final

from .accumulator import AnnotationAccumulator
from .constants import SUPPRESSED_ICE_OUTPUT
from .github import GitHubEnvironment
from .inputs import ActionInputs, clippy_arguments
from .logging import info, ok, warn
from .models import CheckContext, RunVerdict
from .process import CommandOptions, LineCallback, StreamResult, run_command, stream_command
from .reporting.submitter import Clock, ReportSubmitter, SubmissionResult, utcnow
from .reporting.transport import GitHubChecksTransport, ReportTransport
from .verdict import resolve_verdict
from .workflow import debug, group, set_failed, set_output

VersionProbe = Callable[[Sequence[str]], str]
Streamer = Callable[[Sequence[str], LineCallback], StreamResult]
TransportFactory = Callable[[ActionInputs, GitHubEnvironment], ReportTransport]

CARGO: Final[str] = "cargo"
VERSION_COMMANDS: Final[dict[str, tuple[str, ...]]] = {
    "rustc": ("rustc", "-V"),
    "cargo": ("cargo", "-V"),
    "clippy": ("cargo", "clippy", "-V"),
}


def probe_version(command: Sequence[str]) -> str:
    """Return the stdout of a ``-V`` style version command."""

    return run_command(command, options=CommandOptions(check=True)).stdout.strip()


def collect_versions(probe: VersionProbe = probe_version) -> dict[str, str]:
    """Return the rustc, cargo and clippy versions keyed by tool name."""

    return {tool: probe(command) for tool, command in VERSION_COMMANDS.items()}


def _stream(args: Sequence[str], on_line: LineCallback) -> StreamResult:
    return stream_command(args, on_line)


def github_transport(inputs: ActionInputs, environment: GitHubEnvironment) -> ReportTransport:
    """Return the default transport talking to the GitHub Checks API."""

    return GitHubChecksTransport(
        token=inputs.token,
        owner=environment.owner,
        repo=environment.repo,
        api_url=environment.api_url,
    )


@dataclass(slots=True)
class RunCollaborators:
    """External collaborators used by :func:`run`; tests swap them out."""

    probe: VersionProbe = probe_version
    streamer: Streamer = _stream
    transport_factory: TransportFactory = github_transport
    clock: Clock = utcnow


def run(
    inputs: ActionInputs,
    environment: GitHubEnvironment,
    *,
    collaborators: RunCollaborators | None = None,
    use_emoji: bool = False,
) -> RunVerdict:
    """Execute clippy, submit its annotations and resolve the verdict.

    Args:
        inputs: Validated action inputs.
        environment: Workflow context (repository, commit, fork status).
        collaborators: Optional replacements for the process and transport layers.
        use_emoji: Whether console messages carry emoji prefixes.

    Returns:
        RunVerdict: Final verdict for the run.

    Raises:
        TransportError: If the check run cannot be created or updated.
        ClippyCheckError: If the fork fallback ran and clippy reported errors.
        OSError: If clippy or one of the version probes cannot be launched.
    """

    deps = collaborators or RunCollaborators()
    started_at = deps.clock()
    versions = collect_versions(deps.probe)

    accumulator = AnnotationAccumulator()
    command = [CARGO, *clippy_arguments(inputs)]
    debug(f"Running {shlex.join(command)}")
    with group("Executing cargo clippy (JSON output)"):
        outcome = deps.streamer(command, accumulator.try_push)

    context = CheckContext(
        owner=environment.owner,
        repo=environment.repo,
        head_sha=environment.head_sha,
        name=inputs.name,
        started_at=started_at,
        metadata=versions,
    )
    stats = accumulator.stats
    info(
        f"Clippy results: {stats.ice} ICE, {stats.error} errors, {stats.warning} warnings, "
        f"{stats.note} notes, {stats.help} help",
        use_emoji=use_emoji,
    )
    transport = deps.transport_factory(inputs, environment)
    submitter = ReportSubmitter(
        transport,
        clock=deps.clock,
        fork_fallback=environment.is_fork_pull_request,
        use_emoji=use_emoji,
    )
    try:
        result = submitter.submit(context, accumulator.drain_batches(), stats=stats)
    finally:
        transport.close()
    _report_submission(result, use_emoji=use_emoji)
    return resolve_verdict(outcome.returncode, outcome.stderr)


def _report_submission(result: SubmissionResult, *, use_emoji: bool) -> None:
    if result.fallback:
        return
    ok(
        f"Check run {result.report_id} completed with {result.conclusion.value}: "
        f"{result.annotations_sent} annotations in {result.batches_sent} batches",
        use_emoji=use_emoji,
    )


def publish_verdict(verdict: RunVerdict, *, environ: Mapping[str, str] | None = None, use_emoji: bool = False) -> int:
    """Surface ``verdict`` to the workflow and return the process exit code.

    Args:
        verdict: Verdict returned by :func:`run`.
        environ: Environment used to locate ``GITHUB_OUTPUT``.
        use_emoji: Whether console messages carry emoji prefixes.

    Returns:
        int: ``0`` for success, ``1`` for failure.
    """

    if verdict.suppressed_stderr is not None:
        warn("Clippy hit an internal compiler error; the failure is suppressed.", use_emoji=use_emoji)
        set_output(SUPPRESSED_ICE_OUTPUT, verdict.suppressed_stderr, environ=environ)
    if not verdict.success:
        set_failed(verdict.message or "clippy-check failed")
    return verdict.exit_code


__all__ = [
    "RunCollaborators",
    "VERSION_COMMANDS",
    "collect_versions",
    "github_transport",
    "probe_version",
    "publish_verdict",
    "run",
]
