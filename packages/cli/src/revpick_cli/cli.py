"""CLI entry point for revpick.

Commands:
  assign  — select reviewers for a pull request and request their review
  scores  — show balanced-mode participation scores without assigning
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from revpick_cli.commands.assign import assign_cmd
from revpick_cli.commands.scores import scores_cmd


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # PyGithub and urllib3 log every request at DEBUG.
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


@click.group()
@click.version_option(
    version=importlib.metadata.version("revpick"),
    prog_name="revpick",
)
@click.option(
    "--config",
    "config_path",
    default=".revpick.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="REVPICK_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Pick fair, relevant reviewers for GitHub pull requests."""
    _configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(assign_cmd)
main.add_command(scores_cmd)
