"""Reviewer selection orchestration."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rich.console import Console

from revpick_core.contributors import get_top_code_contributor
from revpick_core.history import analyze_pr_history, calculate_participation_scores, select_balanced_reviewers
from revpick_core.utils.sampling import select_random_reviewers

if TYPE_CHECKING:
    from revpick_core.config import SelectionInputs
    from revpick_core.gh.base import RepositoryClient

console = Console()
logger = logging.getLogger(__name__)


@dataclass
class SelectionResult:
    """Outcome of one selection run.

    selected_reviewers holds everything to request, including the code
    contributor; code_contributor repeats that one pick so it can be reported
    separately.
    """

    selected_reviewers: list[str] = field(default_factory=list)
    already_assigned: list[str] = field(default_factory=list)
    code_contributor: str | None = None
    selection_method: str = "random"

    def outputs(self) -> dict[str, str]:
        """Values published for the surrounding workflow."""
        return {
            "reviewers-added": ",".join(self.selected_reviewers),
            "code-contributor": self.code_contributor or "",
            "selection-method": self.selection_method,
        }


def balanced_method_label(inputs: SelectionInputs) -> str:
    return f"balanced (lookback: {inputs.balanced_lookback}, checks: {','.join(inputs.participation_checks)})"


def _select_balanced(
    client: RepositoryClient,
    inputs: SelectionInputs,
    excluded: list[str],
    count: int,
    rng: random.Random | None,
    log: logging.Logger,
) -> list[str]:
    log.info("Analyzing PR history for balanced selection...")
    history = analyze_pr_history(client, inputs.balanced_lookback, inputs.participation_checks, log=log)

    if not history:
        log.warning("No PR history found, falling back to random selection")
        return select_random_reviewers(inputs.reviewer_list, excluded, count, rng=rng)

    scores = calculate_participation_scores(history, inputs.reviewer_list)
    return select_balanced_reviewers(scores, excluded, count, log=log)


def select_reviewers(
    client: RepositoryClient,
    inputs: SelectionInputs,
    rng: random.Random | None = None,
    log: logging.Logger | None = None,
) -> SelectionResult:
    """Decide which reviewers to request for the client's pull request.

    Steps: always-add list, then random or balanced picks up to
    min_reviewers, then optionally the top code contributor. Failing to
    resolve the current reviewers or the PR author propagates; every later
    step degrades to fewer picks instead of failing.
    """
    log = log or logger

    current_reviewers = client.get_current_reviewers()
    pr_author = client.get_pr_author()

    log.info("Current reviewers: %s", ", ".join(current_reviewers) or "none")
    log.info("PR Author: %s", pr_author)
    log.info("Selection mode: %s", inputs.selection_mode)

    already_assigned = list(dict.fromkeys([*current_reviewers, pr_author]))
    to_add: list[str] = []
    selection_method = inputs.selection_mode

    for reviewer in inputs.always_add:
        if reviewer not in already_assigned and reviewer not in to_add:
            to_add.append(reviewer)

    remaining = max(0, inputs.min_reviewers - len(to_add))
    if remaining > 0:
        excluded = already_assigned + to_add
        if inputs.selection_mode == "balanced":
            picked = _select_balanced(client, inputs, excluded, remaining, rng, log)
            selection_method = balanced_method_label(inputs)
        else:
            picked = select_random_reviewers(inputs.reviewer_list, excluded, remaining, rng=rng)
            selection_method = "random"
        to_add.extend(picked)

    code_contributor: str | None = None
    if inputs.add_top_contributor:
        contributor = get_top_code_contributor(client, pr_author, log=log)
        if contributor and contributor not in already_assigned and contributor not in to_add:
            code_contributor = contributor
            to_add.append(contributor)

    return SelectionResult(
        selected_reviewers=to_add,
        already_assigned=already_assigned,
        code_contributor=code_contributor,
        selection_method=selection_method,
    )


def log_inputs(inputs: SelectionInputs, log: logging.Logger | None = None) -> None:
    log = log or logger
    log.info("Reviewer list: %s", ", ".join(inputs.reviewer_list))
    log.info("Always add: %s", ", ".join(inputs.always_add) or "none")
    log.info("Min reviewers: %d", inputs.min_reviewers)
    log.info("Selection mode: %s", inputs.selection_mode)
    log.info("Add top contributor: %s", "enabled" if inputs.add_top_contributor else "disabled")
    if inputs.selection_mode == "balanced":
        log.info("Balanced lookback: %d PRs", inputs.balanced_lookback)
        log.info("Participation checks: %s", ", ".join(inputs.participation_checks))


def run_assignment(
    client: RepositoryClient,
    inputs: SelectionInputs,
    dry_run: bool = False,
    rng: random.Random | None = None,
) -> SelectionResult:
    """Select reviewers and request their review on GitHub.

    With dry_run the selection is printed but nothing is posted.
    """
    log_inputs(inputs)
    result = select_reviewers(client, inputs, rng=rng)

    if not result.selected_reviewers:
        console.print("[yellow]No additional reviewers to add.[/yellow]")
        return result

    if dry_run:
        console.print(
            f"[bold]Dry run: would add {len(result.selected_reviewers)} reviewer(s) "
            f"using {result.selection_method}: {', '.join(result.selected_reviewers)}[/bold]"
        )
        return result

    client.add_reviewers(result.selected_reviewers)
    console.print(
        f"[green]Added {len(result.selected_reviewers)} reviewer(s) using {result.selection_method}: "
        f"{', '.join(result.selected_reviewers)}[/green]"
    )
    if result.code_contributor:
        console.print(f"[green]Added top contributor: {result.code_contributor}[/green]")
    return result
