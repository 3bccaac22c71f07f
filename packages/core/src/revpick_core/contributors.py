"""Code-ownership heuristic: who has been committing to the files in this PR?

For each changed file we look at up to MAX_COMMITS_PER_FILE commits from the
last COMMIT_LOOKBACK_MONTHS months. The commit at recency index i (0 = most
recent) is worth max(1, 30 - i) points to its author, so recent work counts
more than old work. Points add up across all files in the PR. The highest
scoring author who is not the PR author is suggested as a reviewer.
"""

from __future__ import annotations

import calendar
import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from revpick_core.gh.base import CommitInfo, RepositoryClient

logger = logging.getLogger(__name__)

COMMIT_LOOKBACK_MONTHS = 6
MAX_COMMITS_PER_FILE = 30
_MAX_WEIGHT = 30


def commit_weight(index: int) -> int:
    return max(1, _MAX_WEIGHT - index)


def months_ago(now: datetime, months: int) -> datetime:
    """Same day-of-month `months` calendar months earlier, clamped to the month's length."""
    month_index = now.year * 12 + (now.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = min(now.day, calendar.monthrange(year, month)[1])
    return now.replace(year=year, month=month, day=day)


def rank_contributors(commit_lists: Iterable[Iterable[CommitInfo]]) -> list[tuple[str, int]]:
    """Accumulate weights across files and sort by total, highest first.

    Each inner iterable is one file's commits. Authors with equal totals keep
    the order in which they were first seen.
    """
    totals: dict[str, int] = {}
    for commits in commit_lists:
        for commit in commits:
            if not commit.author_login:
                continue
            totals[commit.author_login] = totals.get(commit.author_login, 0) + commit_weight(commit.index)
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)


def pick_top_contributor(ranked: list[tuple[str, int]], author_to_exclude: str | None) -> str | None:
    for login, _ in ranked:
        if login != author_to_exclude:
            return login
    return None


def get_top_code_contributor(
    client: RepositoryClient,
    author_to_exclude: str | None,
    now: datetime | None = None,
    log: logging.Logger | None = None,
) -> str | None:
    """Return the top recent committer to the PR's files, or None.

    Never raises: per-file fetch failures skip that file, and any other
    failure is logged and turned into None.
    """
    log = log or logger
    now = now or datetime.now(timezone.utc)
    since = months_ago(now, COMMIT_LOOKBACK_MONTHS)

    try:
        commit_lists: list[list[CommitInfo]] = []
        for file in client.list_changed_files():
            if file.status == "removed":
                continue
            try:
                commit_lists.append(client.list_commits(file.filename, since, MAX_COMMITS_PER_FILE))
            except Exception as e:
                log.warning("Failed to get commits for file %s: %s", file.filename, e)

        ranked = rank_contributors(commit_lists)
        if not ranked:
            log.info("No recent contributors found for modified files")
            return None

        log.info("Code contributors for modified files:")
        for position, (login, score) in enumerate(ranked, 1):
            suffix = " (PR author - skipped)" if login == author_to_exclude else ""
            log.info("  %d. %s: %d%s", position, login, score, suffix)

        top = pick_top_contributor(ranked, author_to_exclude)
        if top is None:
            log.info("No suitable code contributor found (all contributors are the PR author)")
            return None

        log.info("Selected top contributor: %s (score: %d)", top, dict(ranked)[top])
        return top
    except Exception as e:
        log.warning("Failed to analyze code contributors: %s", e)
        return None
