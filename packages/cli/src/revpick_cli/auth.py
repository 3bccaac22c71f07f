"""Where revpick gets its GitHub token.

Precedence, first non-empty wins:
  1. --token on the command line
  2. GITHUB_TOKEN (what a pull_request workflow passes in)
  3. `gh auth token`, the local GitHub CLI session

The token needs pull-request write access on the target repository to
request reviews; `revpick scores` only reads.
"""

from __future__ import annotations

import logging
import os
import subprocess

logger = logging.getLogger(__name__)

_GH_TIMEOUT_SECONDS = 5


def _token_from_gh_cli() -> str | None:
    try:
        result = subprocess.run(
            ["gh", "auth", "token"],
            capture_output=True,
            text=True,
            timeout=_GH_TIMEOUT_SECONDS,
        )
    except (FileNotFoundError, subprocess.TimeoutExpired):
        logger.debug("gh CLI unavailable; no session token.")
        return None
    if result.returncode != 0:
        logger.debug("gh auth token exited with %d.", result.returncode)
        return None
    return result.stdout.strip() or None


def resolve_github_token(explicit: str | None = None) -> str | None:
    """Return the token to use for GitHub calls, or None. Never raises."""
    if explicit and explicit.strip():
        return explicit.strip()

    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    token = _token_from_gh_cli()
    if token:
        logger.debug("Resolved GitHub token via gh CLI session.")
    return token
