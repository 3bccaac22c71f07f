"""Repository client interface consumed by the selection engine.

The engine only talks to GitHub through the operations listed on
RepositoryClient. GithubPullRequestClient is the PyGithub-backed
implementation; tests pass a plain in-memory object with the same methods.
Structural typing (Protocol) means no base class has to be inherited.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass(frozen=True)
class FileChange:
    """A file touched by the pull request."""

    filename: str
    status: str  # "added" | "modified" | "removed" | "renamed" | ...


@dataclass(frozen=True)
class CommitInfo:
    """One commit touching a file; index 0 is the most recent."""

    author_login: str | None
    index: int


class RepositoryClient(Protocol):
    def get_current_reviewers(self) -> list[str]:
        """Logins currently requested for review. Raises if there is no PR context."""

    def get_pr_author(self) -> str:
        """Login of the PR author. Raises if it cannot be determined."""

    def add_reviewers(self, reviewers: list[str]) -> None:
        """Request review from the given logins. Empty input is a logged no-op."""

    def list_changed_files(self) -> list[FileChange]: ...

    def list_commits(self, path: str, since: datetime, max_count: int) -> list[CommitInfo]: ...

    def list_closed_prs(self, max_count: int) -> list[int]:
        """Numbers of closed PRs, most recently updated first."""

    def list_reviewers(self, pr_number: int) -> list[str]: ...

    def list_commenters(self, pr_number: int) -> list[str]: ...
