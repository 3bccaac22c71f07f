"""Participation history for balanced reviewer selection.

Balanced mode looks at the most recently closed pull requests and counts,
for every configured reviewer, how many of them they took part in (as a
reviewer, a commenter, or both). Reviewers who have done the least recently
are picked first.

Ordering precondition: the repository client returns closed PRs most
recently updated first. "Last participated PR" is the first PR in that list
a reviewer appears in, so it only means "most recent participation" while
that ordering holds. If the client ordering ever changes, the secondary sort
key silently changes meaning with it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from functools import cmp_to_key
from typing import TYPE_CHECKING, Iterable, Sequence

if TYPE_CHECKING:
    from revpick_core.gh.base import RepositoryClient

logger = logging.getLogger(__name__)


@dataclass
class PRParticipation:
    pr_number: int
    reviewers: list[str] = field(default_factory=list)
    commenters: list[str] = field(default_factory=list)
    participants: list[str] = field(default_factory=list)


@dataclass
class ParticipationScore:
    username: str
    participation_count: int = 0
    last_participated_pr: int | None = None


def analyze_pr_history(
    client: RepositoryClient,
    lookback: int,
    checks: Iterable[str],
    log: logging.Logger | None = None,
) -> list[PRParticipation]:
    """Collect reviewers and commenters for the last `lookback` closed PRs.

    A failed reviews/comments fetch for one PR leaves that category empty and
    processing continues. If the PR list itself cannot be fetched, returns an
    empty list; callers treat that as "no history", not as an error.
    """
    log = log or logger
    checks = set(checks)

    try:
        log.info("Analyzing last %d PRs for participation history", lookback)
        pr_numbers = client.list_closed_prs(lookback)
    except Exception as e:
        log.warning("Failed to analyze PR history: %s", e)
        return []

    history: list[PRParticipation] = []
    for number in pr_numbers:
        participation = PRParticipation(pr_number=number)

        if "reviewers" in checks:
            try:
                participation.reviewers = list(dict.fromkeys(client.list_reviewers(number)))
            except Exception as e:
                log.warning("Failed to get reviews for PR #%d: %s", number, e)

        if "comments" in checks:
            try:
                participation.commenters = list(dict.fromkeys(client.list_commenters(number)))
            except Exception as e:
                log.warning("Failed to get comments for PR #%d: %s", number, e)

        participation.participants = list(dict.fromkeys(participation.reviewers + participation.commenters))
        history.append(participation)
        log.debug("PR #%d: %d participants", number, len(participation.participants))

    return history


def _compare_scores(a: ParticipationScore, b: ParticipationScore) -> int:
    if a.participation_count != b.participation_count:
        return a.participation_count - b.participation_count
    if a.last_participated_pr is not None and b.last_participated_pr is not None:
        return a.last_participated_pr - b.last_participated_pr
    if a.last_participated_pr is not None:
        return 1
    if b.last_participated_pr is not None:
        return -1
    return 0


def calculate_participation_scores(
    history: Sequence[PRParticipation],
    available: Sequence[str],
) -> list[ParticipationScore]:
    """Score every available reviewer against the history, least active first.

    Sort keys: participation count ascending; then, among equal counts, never
    participated before participated, and older last PR before newer. Remaining
    ties keep the order of `available`. Users outside `available` are ignored.
    """
    scores: dict[str, ParticipationScore] = {}
    for reviewer in available:
        scores.setdefault(reviewer, ParticipationScore(username=reviewer))

    for pr in history:
        for participant in pr.participants:
            score = scores.get(participant)
            if score is None:
                continue
            score.participation_count += 1
            if score.last_participated_pr is None:
                score.last_participated_pr = pr.pr_number

    # sorted() is stable, which preserves input order for full ties.
    return sorted(scores.values(), key=cmp_to_key(_compare_scores))


def select_balanced_reviewers(
    scores: Sequence[ParticipationScore],
    excluded: Iterable[str],
    count: int,
    log: logging.Logger | None = None,
) -> list[str]:
    """Take the first `count` non-excluded reviewers in score order."""
    log = log or logger
    excluded = set(excluded)
    eligible = [score for score in scores if score.username not in excluded]

    log.info("Balanced selection participation scores:")
    for score in eligible:
        if score.last_participated_pr is not None:
            detail = f"(last: PR #{score.last_participated_pr})"
        else:
            detail = "(never participated)"
        log.info("  %s: %d participations %s", score.username, score.participation_count, detail)

    if count <= 0:
        return []
    return [score.username for score in eligible[:count]]
