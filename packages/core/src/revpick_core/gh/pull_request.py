from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from github import Github, GithubException

from revpick_core.errors import PullRequestContextError
from revpick_core.gh.base import CommitInfo, FileChange

logger = logging.getLogger(__name__)

_NO_PR_CONTEXT = "This command can only be run on pull request events"


def get_repo(repo_name: str, token: str):
    return Github(token).get_repo(repo_name)


def get_pull(repo, pr_number: int):
    return repo.get_pull(pr_number)


def get_event_pr_number(event_path: str | None) -> int | None:
    """Return pull_request.number from a GitHub Actions event payload, or None."""
    if not event_path:
        return None
    path = Path(event_path)
    if not path.exists():
        return None
    try:
        payload = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read event payload %s: %s", event_path, e)
        return None
    if not isinstance(payload, dict):
        return None
    pull_request = payload.get("pull_request")
    number = pull_request.get("number") if isinstance(pull_request, dict) else None
    return int(number) if number else None


def _unique_logins(users) -> list[str]:
    """Logins in first-seen order; users without a login (deleted accounts) are dropped."""
    logins: list[str] = []
    for user in users:
        login = getattr(user, "login", None) if user is not None else None
        if login and login not in logins:
            logins.append(login)
    return logins


class GithubPullRequestClient:
    """PyGithub-backed RepositoryClient bound to one pull request."""

    def __init__(self, repo, pr_number: int | None):
        self._repo = repo
        self._pr_number = pr_number
        self._pr = None

    @classmethod
    def from_token(cls, repo_name: str, pr_number: int | None, token: str) -> GithubPullRequestClient:
        return cls(get_repo(repo_name, token=token), pr_number)

    @property
    def pr_number(self) -> int | None:
        return self._pr_number

    def _pull(self):
        if not self._pr_number:
            raise PullRequestContextError(_NO_PR_CONTEXT)
        if self._pr is None:
            try:
                self._pr = get_pull(self._repo, self._pr_number)
            except GithubException as e:
                raise PullRequestContextError(
                    f"PR #{self._pr_number} not found in {self._repo.full_name}: {e}"
                ) from e
        return self._pr

    def get_current_reviewers(self) -> list[str]:
        return _unique_logins(self._pull().requested_reviewers or [])

    def get_pr_author(self) -> str:
        user = self._pull().user
        login = getattr(user, "login", None) if user is not None else None
        if not login:
            raise PullRequestContextError("Unable to determine PR author")
        return login

    def add_reviewers(self, reviewers: list[str]) -> None:
        pr = self._pull()
        if not reviewers:
            logger.info("No reviewers to add")
            return
        pr.create_review_request(reviewers=list(reviewers))
        logger.info("Added reviewers: %s", ", ".join(reviewers))

    def list_changed_files(self) -> list[FileChange]:
        return [FileChange(filename=f.filename, status=f.status) for f in self._pull().get_files()]

    def list_commits(self, path: str, since: datetime, max_count: int) -> list[CommitInfo]:
        commits: list[CommitInfo] = []
        # Iterate lazily so PyGithub stops paging once max_count is reached.
        for i, commit in enumerate(self._repo.get_commits(path=path, since=since)):
            if i >= max_count:
                break
            author = commit.author
            commits.append(CommitInfo(author_login=author.login if author is not None else None, index=i))
        return commits

    def list_closed_prs(self, max_count: int) -> list[int]:
        numbers: list[int] = []
        pulls = self._repo.get_pulls(state="closed", sort="updated", direction="desc")
        for i, pr in enumerate(pulls):
            if i >= max_count:
                break
            numbers.append(pr.number)
        return numbers

    def list_reviewers(self, pr_number: int) -> list[str]:
        reviews = self._repo.get_pull(pr_number).get_reviews()
        return _unique_logins(review.user for review in reviews)

    def list_commenters(self, pr_number: int) -> list[str]:
        comments = self._repo.get_issue(pr_number).get_comments()
        return _unique_logins(comment.user for comment in comments)
