"""scores command — show participation scores used by balanced mode."""

from __future__ import annotations

import click
from github import GithubException
from rich.console import Console
from rich.table import Table

from revpick_core.errors import RevpickError
from revpick_core.gh.pull_request import GithubPullRequestClient
from revpick_core.history import analyze_pr_history, calculate_participation_scores
from revpick_cli.commands.assign import resolve_repo_name, resolve_token

console = Console()


@click.command("scores")
@click.option("--repo", default=None, help="GitHub repository (owner/name). Defaults to $GITHUB_REPOSITORY.")
@click.option("--token", default=None, help="GitHub token. Defaults to $GITHUB_TOKEN or the gh CLI session.")
@click.option("--reviewers", default=None, help="Comma-separated reviewer pool. Overrides config file.")
@click.option("--lookback", "balanced_lookback", default=None, help="Number of closed PRs to analyze.")
@click.option("--checks", "participation_checks", default=None, help="Comma-separated checks (reviewers, comments).")
@click.pass_context
def scores_cmd(
    ctx,
    repo: str | None,
    token: str | None,
    reviewers: str | None,
    balanced_lookback: str | None,
    participation_checks: str | None,
):
    """Show how often each reviewer took part in recently closed PRs.

    Rows are in the order balanced mode picks from: least active first.
    """
    from revpick_core.config import load_config, parse_selection_inputs

    config_path = ctx.obj.get("config_path", ".revpick.yml") if ctx.obj else ".revpick.yml"
    config = load_config(
        config_path,
        cli_overrides={
            "reviewers": reviewers,
            "balanced_lookback": balanced_lookback,
            "participation_checks": participation_checks,
        },
    )
    try:
        inputs = parse_selection_inputs(config)
    except RevpickError as e:
        raise click.UsageError(str(e)) from e

    repo_name = resolve_repo_name(repo)
    github_token = resolve_token(token)

    try:
        client = GithubPullRequestClient.from_token(repo_name, None, github_token)
        # analyze_pr_history swallows listing errors; surface auth and 404s here.
        client.list_closed_prs(1)
    except GithubException as e:
        raise click.ClickException(f"Could not load PR history: {e}") from e

    history = analyze_pr_history(client, inputs.balanced_lookback, inputs.participation_checks)

    if not history:
        console.print("[yellow]No closed pull requests found.[/yellow]")
        return

    scores = calculate_participation_scores(history, inputs.reviewer_list)

    table = Table(
        title=f"Participation — last {len(history)} closed PR(s) in {repo_name}",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("#", justify="right", width=4)
    table.add_column("Reviewer", style="bold")
    table.add_column("Participations", justify="right")
    table.add_column("Last PR", justify="right")

    for position, score in enumerate(scores, 1):
        last = f"#{score.last_participated_pr}" if score.last_participated_pr is not None else "[dim]never[/dim]"
        table.add_row(str(position), score.username, str(score.participation_count), last)

    console.print(table)
    console.print(f"[dim]Checks: {', '.join(inputs.participation_checks)}[/dim]")
