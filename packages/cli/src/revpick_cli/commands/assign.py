"""assign command — select reviewers for a pull request and request their review."""

from __future__ import annotations

import os

import click
from github import GithubException
from rich.console import Console

from revpick_core.errors import PullRequestContextError, RevpickError
from revpick_core.gh.pull_request import GithubPullRequestClient, get_event_pr_number
from revpick_core.reviewer import run_assignment
from revpick_cli.outputs import write_github_outputs

console = Console()


def resolve_repo_name(repo: str | None) -> str:
    repo = repo or os.environ.get("GITHUB_REPOSITORY")
    if not repo:
        raise click.UsageError("No repository given. Pass --repo owner/name or set GITHUB_REPOSITORY.")
    return repo


def resolve_token(token: str | None) -> str:
    from revpick_cli.auth import resolve_github_token

    token = resolve_github_token(token)
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN or run `gh auth login` first.\n"
            "Create a token at https://github.com/settings/tokens"
        )
    return token


@click.command("assign")
@click.option("--repo", default=None, help="GitHub repository in owner/name format. Defaults to $GITHUB_REPOSITORY.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Defaults to the PR in $GITHUB_EVENT_PATH.",
)
@click.option("--token", default=None, help="GitHub token. Defaults to $GITHUB_TOKEN or the gh CLI session.")
@click.option("--reviewers", default=None, help="Comma-separated reviewer pool. Overrides config file.")
@click.option("--always-add", "always_add", default=None, help="Comma-separated reviewers to always request.")
@click.option("--min-reviewers", "min_reviewers", default=None, help="Minimum number of reviewers to request.")
@click.option(
    "--mode",
    "selection_mode",
    type=click.Choice(["random", "balanced"]),
    default=None,
    help="Selection mode. Overrides config file.",
)
@click.option("--lookback", "balanced_lookback", default=None, help="Closed PRs to analyze in balanced mode.")
@click.option(
    "--checks",
    "participation_checks",
    default=None,
    help="Comma-separated participation checks for balanced mode (reviewers, comments).",
)
@click.option(
    "--top-contributor/--no-top-contributor",
    "add_top_contributor",
    default=None,
    help="Also request the top recent committer to the changed files.",
)
@click.option("--dry-run", "-n", "dry_run", is_flag=True, help="Print the selection without requesting reviews.")
@click.pass_context
def assign_cmd(
    ctx,
    repo: str | None,
    pr_number: int | None,
    token: str | None,
    reviewers: str | None,
    always_add: str | None,
    min_reviewers: str | None,
    selection_mode: str | None,
    balanced_lookback: str | None,
    participation_checks: str | None,
    add_top_contributor: bool | None,
    dry_run: bool,
):
    """Request reviews from a balanced or random reviewer set.

    \b
    Run inside a pull_request workflow, --repo and --pr are picked up from
    GITHUB_REPOSITORY and GITHUB_EVENT_PATH. Outputs reviewers-added,
    code-contributor and selection-method are written to GITHUB_OUTPUT.
    """
    from revpick_core.config import load_config, parse_selection_inputs

    config_path = ctx.obj.get("config_path", ".revpick.yml") if ctx.obj else ".revpick.yml"
    config = load_config(
        config_path,
        cli_overrides={
            "reviewers": reviewers,
            "always_add": always_add,
            "min_reviewers": min_reviewers,
            "selection_mode": selection_mode,
            "balanced_lookback": balanced_lookback,
            "participation_checks": participation_checks,
            "add_top_contributor": add_top_contributor,
        },
    )

    try:
        inputs = parse_selection_inputs(config)
    except RevpickError as e:
        raise click.UsageError(str(e)) from e

    repo_name = resolve_repo_name(repo)
    github_token = resolve_token(token)
    pr_number = pr_number or get_event_pr_number(os.environ.get("GITHUB_EVENT_PATH"))

    try:
        if not pr_number:
            raise PullRequestContextError("This command can only be run on pull request events")
        console.print(f"Smart reviewer assignment for [bold]{repo_name}#{pr_number}[/bold]")
        client = GithubPullRequestClient.from_token(repo_name, pr_number, github_token)
        result = run_assignment(client, inputs, dry_run=dry_run)
    except (RevpickError, GithubException) as e:
        raise click.ClickException(f"Action failed: {e}") from e

    outputs = result.outputs()
    for name, value in outputs.items():
        console.print(f"  {name}: {value or '—'}")
    if not dry_run:
        write_github_outputs(outputs)
