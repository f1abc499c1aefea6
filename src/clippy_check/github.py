# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Read the GitHub Actions workflow environment."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from .constants import DEFAULT_GITHUB_API_URL
from .errors import ConfigError
from .models import JsonValue


def load_event_payload(path: str | None) -> dict[str, JsonValue]:
    """Return the webhook payload stored at ``path``.

    Args:
        path: Value of ``GITHUB_EVENT_PATH``; missing or empty means no payload.

    Returns:
        dict[str, JsonValue]: Decoded payload, empty when unavailable.

    Raises:
        ConfigError: If the file exists but does not hold a JSON object.
    """

    if not path:
        return {}
    event_file = Path(path)
    if not event_file.is_file():
        return {}
    try:
        payload = json.loads(event_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"unable to read event payload {path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise ConfigError(f"event payload {path} is not a JSON object")
    return payload


def pull_request_head_sha(payload: Mapping[str, JsonValue]) -> str | None:
    """Return the head commit of the pull request in ``payload``, if any."""

    pull_request = payload.get("pull_request")
    if not isinstance(pull_request, Mapping):
        return None
    head = pull_request.get("head")
    if not isinstance(head, Mapping):
        return None
    sha = head.get("sha")
    return sha if isinstance(sha, str) and sha else None


class GitHubEnvironment(BaseModel):
    """Workflow context captured from ``GITHUB_*`` variables."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    head_sha: str
    head_ref: str | None = None
    api_url: str = DEFAULT_GITHUB_API_URL

    @property
    def is_fork_pull_request(self) -> bool:
        """Return whether the run was triggered by a pull request from a fork.

        ``GITHUB_HEAD_REF`` is only set for pull request events; those from
        forks receive a read-only token.
        """

        return bool(self.head_ref)

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> GitHubEnvironment:
        """Build the environment from ``environ`` (defaults to :data:`os.environ`).

        The target commit is the pull request head when the event payload
        carries one, otherwise ``GITHUB_SHA``.

        Raises:
            ConfigError: If the repository or commit cannot be determined.
        """

        env = os.environ if environ is None else environ
        repository = env.get("GITHUB_REPOSITORY", "")
        owner, _, repo = repository.partition("/")
        if not owner or not repo:
            raise ConfigError(f"GITHUB_REPOSITORY must look like 'owner/repo', got {repository!r}")
        sha = env.get("GITHUB_SHA", "")
        payload = load_event_payload(env.get("GITHUB_EVENT_PATH"))
        head_sha = pull_request_head_sha(payload) or sha
        if not head_sha:
            raise ConfigError("unable to determine the commit to report on: GITHUB_SHA is not set")
        return cls(
            owner=owner,
            repo=repo,
            head_sha=head_sha,
            head_ref=env.get("GITHUB_HEAD_REF") or None,
            api_url=env.get("GITHUB_API_URL") or DEFAULT_GITHUB_API_URL,
        )


__all__ = ["GitHubEnvironment", "load_event_payload", "pull_request_head_sha"]
