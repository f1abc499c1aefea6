# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Safe wrappers around ``subprocess`` execution."""

from __future__ import annotations

import shutil

# Bandit: subprocess usage is intentional; arguments are passed as lists and
# ``shell=True`` is never used.
import subprocess  # nosec B404
import threading
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from subprocess import CompletedProcess

LineCallback = Callable[[str], None]


@dataclass(slots=True)
class CommandOptions:
    """Command execution options."""

    cwd: Path | None = None
    env: Mapping[str, str] | None = None
    check: bool = True
    timeout: float | None = None


class SubprocessExecutionError(RuntimeError):
    """Raised when a subprocess exits with a non-zero status while ``check`` is true."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int,
        stdout: str | None,
        stderr: str | None,
    ) -> None:
        """Initialise the error with captured subprocess metadata.

        Args:
            command: Normalised command sequence that was executed.
            returncode: Exit status reported by the subprocess.
            stdout: Captured standard output stream.
            stderr: Captured standard error stream.
        """
        super().__init__(
            f"Command '{command[0]}' exited with status {returncode}. stderr: {stderr or '<none>'}",
        )
        self.command = tuple(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr


@dataclass(slots=True, frozen=True)
class StreamResult:
    """Exit status and captured stderr of a streamed command."""

    returncode: int
    stderr: str


def _normalize_args(args: Sequence[str]) -> list[str]:
    """Normalise the subprocess argument sequence.

    Args:
        args: Raw command arguments supplied by the caller.

    Returns:
        list[str]: Validated argument list suitable for subprocess execution.

    Raises:
        ValueError: If no arguments are provided.
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
    """

    if not args:
        msg = "subprocess command requires at least one argument"
        raise ValueError(msg)

    head, *rest = args
    head_path = Path(head)
    if head_path.is_absolute():
        return [str(head_path), *rest]

    resolved = shutil.which(head)
    if resolved is None:
        msg = f"Executable '{head}' was not found on PATH"
        raise FileNotFoundError(msg)
    return [resolved, *rest]


def run_command(args: Sequence[str], *, options: CommandOptions | None = None) -> CompletedProcess[str]:
    """Execute ``args`` and capture its output as text.

    Args:
        args: Command and argument sequence to execute.
        options: Options configuring execution semantics.

    Returns:
        CompletedProcess: Subprocess execution metadata.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        SubprocessExecutionError: When ``check`` is true and the process exits
            with a non-zero status.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    completed: CompletedProcess[str] = subprocess.run(  # nosec B603 - controlled arguments, not user supplied
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        env=dict(resolved_options.env) if resolved_options.env is not None else None,
        check=False,
        capture_output=True,
        text=True,
        timeout=resolved_options.timeout,
        stdin=subprocess.DEVNULL,
    )
    if resolved_options.check and completed.returncode != 0:
        raise SubprocessExecutionError(normalized, completed.returncode, completed.stdout, completed.stderr)
    return completed


def _start_watchdog(
    process: subprocess.Popen[str],
    timeout: float | None,
    expired: threading.Event,
) -> threading.Timer | None:
    """Kill ``process`` once ``timeout`` seconds elapse and flag ``expired``."""

    if timeout is None:
        return None

    def _expire() -> None:
        expired.set()
        process.kill()

    watchdog = threading.Timer(timeout, _expire)
    watchdog.daemon = True
    watchdog.start()
    return watchdog


def stream_command(
    args: Sequence[str],
    on_line: LineCallback,
    *,
    options: CommandOptions | None = None,
) -> StreamResult:
    """Run ``args`` and hand each stdout line to ``on_line`` as it arrives.

    Lines are delivered in order, once each, with the trailing newline
    removed. Stderr is drained on a helper thread and returned in full. A
    non-zero exit status is reported, never raised; ``options.check`` is
    ignored. When ``options.timeout`` elapses the process is killed, even
    while it is still writing output.

    Args:
        args: Command and argument sequence to execute.
        on_line: Callback invoked synchronously for every stdout line.
        options: Options providing ``cwd``, ``env`` and ``timeout``.

    Returns:
        StreamResult: Exit status and the captured stderr text.

    Raises:
        FileNotFoundError: If the executable cannot be resolved on ``PATH``.
        OSError: If the process cannot be launched.
        subprocess.TimeoutExpired: If the process outlived ``options.timeout``.
    """

    normalized = _normalize_args(args)
    resolved_options = options or CommandOptions()
    stderr_chunks: list[str] = []
    with subprocess.Popen(  # nosec B603 - controlled arguments, not user supplied
        normalized,
        cwd=str(resolved_options.cwd) if resolved_options.cwd is not None else None,
        env=dict(resolved_options.env) if resolved_options.env is not None else None,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        text=True,
        encoding="utf-8",
        errors="replace",
    ) as process:
        assert process.stdout is not None and process.stderr is not None  # nosec B101 - pipes requested above
        stderr_stream = process.stderr
        reader = threading.Thread(target=lambda: stderr_chunks.append(stderr_stream.read()), daemon=True)
        reader.start()
        expired = threading.Event()
        watchdog = _start_watchdog(process, resolved_options.timeout, expired)
        try:
            for raw_line in process.stdout:
                on_line(raw_line.rstrip("\r\n"))
            reader.join()
            returncode = process.wait()
        finally:
            if watchdog is not None:
                watchdog.cancel()
    if expired.is_set():
        raise subprocess.TimeoutExpired(normalized, resolved_options.timeout or 0, stderr="".join(stderr_chunks))
    return StreamResult(returncode=returncode, stderr="".join(stderr_chunks))


__all__ = [
    "CommandOptions",
    "LineCallback",
    "StreamResult",
    "SubprocessExecutionError",
    "run_command",
    "stream_command",
]
