"""Exception types raised by revpick.

Only context and configuration problems surface as exceptions. Failures
fetching an individual PR's reviews or a single file's commits are absorbed
by the engine and never reach the caller.
"""

from __future__ import annotations


class RevpickError(Exception):
    """Base class for errors that abort a reviewer assignment run."""


class ConfigError(RevpickError, ValueError):
    """A required configuration value is missing or unusable."""


class PullRequestContextError(RevpickError):
    """The pull request, its author, or its reviewers could not be resolved."""
