"""CLI entry point for gh-standup.

Collects the user's recent GitHub activity and asks a GitHub Models model to
turn it into a standup report. The report is the only thing written to
stdout; progress and errors go to stderr.
"""

from __future__ import annotations

import importlib.metadata
import logging
from datetime import datetime, timedelta, timezone

import click
from github import GithubException
from rich.console import Console
from rich.logging import RichHandler

from standup_cli.auth import resolve_github_token
from standup_core.collector import collect_activity
from standup_core.config import load_config
from standup_core.errors import StandupError
from standup_core.gh.search import get_client, get_current_user
from standup_core.prompt import NO_ACTIVITY_MESSAGE, parse_prompt_override
from standup_core.providers.github_models import GitHubModelsProvider
from standup_core.report import generate_standup_report

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )
    # Keep HTTP client chatter out of the progress output.
    for noisy in ("urllib3", "httpx", "httpcore", "openai", "github"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _run(
    config: dict,
    prompts: tuple[str, ...],
) -> None:
    token = resolve_github_token()
    if not token:
        raise click.ClickException("No GitHub token found. Please run 'gh auth login' to authenticate.")

    # Parse overrides before any network call so a typo fails fast.
    try:
        prompt_messages = [parse_prompt_override(p) for p in prompts]
    except StandupError as e:
        raise click.ClickException(str(e)) from e

    gh = get_client(token)

    user = config.get("user")
    if not user:
        try:
            user = get_current_user(gh)
        except (GithubException, OSError) as e:
            raise click.ClickException(f"failed to get current user: {e}") from e

    end = datetime.now(timezone.utc)
    start = end - timedelta(days=config["days"])
    logger.debug("Window %s .. %s, repo=%s, model=%s", start, end, config.get("repo"), config.get("model"))
    console.print(f"[dim]Collecting activity for [bold]{user}[/bold] since {start:%Y-%m-%d}...[/dim]")

    try:
        result = collect_activity(gh, user, start, end, repo=config.get("repo"))
    except StandupError as e:
        raise click.ClickException(f"failed to collect GitHub activity: {e}") from e

    if result.is_empty:
        console.print(f"[yellow]{NO_ACTIVITY_MESSAGE}[/yellow]")
        return

    counts = result.counts
    console.print(f"Found [bold]{counts.total}[/bold] activities")
    console.print(
        f"   {counts.commits} commits, {counts.pull_requests} pull requests, "
        f"{counts.issues} issues, {counts.reviews} reviews"
    )

    try:
        provider = GitHubModelsProvider(token=token)
        report = generate_standup_report(
            result.activities,
            provider,
            model=config.get("model"),
            prompt_messages=prompt_messages,
        )
    except StandupError as e:
        raise click.ClickException(f"failed to generate standup report: {e}") from e

    click.echo(report)


@click.command("standup")
@click.version_option(
    version=importlib.metadata.version("gh-standup"),
    prog_name="gh-standup",
)
@click.option("--days", "-d", type=int, default=None, help="Number of days to look back for activity.  [default: 1]")
@click.option("--model", "-m", default=None, help="GitHub Models model to use.  [default: openai/gpt-4o]")
@click.option(
    "--prompts",
    "-p",
    multiple=True,
    help="Override default prompt messages in format role:message. Can be given multiple times.",
)
@click.option("--repo", "-r", default=None, help="Repository to generate standup for (owner/repo).")
@click.option("--user", "-u", default=None, help="User to generate standup for (defaults to authenticated user).")
@click.option(
    "--config",
    "config_path",
    default=".standup.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="STANDUP_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
def main(
    days: int | None,
    model: str | None,
    prompts: tuple[str, ...],
    repo: str | None,
    user: str | None,
    config_path: str,
    verbose: bool,
):
    """Generate AI-powered standup reports from your GitHub activity.

    \b
    Authentication (first match wins):
      GH_TOKEN / GITHUB_TOKEN   GitHub token with access to GitHub Models
      gh auth login             GitHub CLI session
    """
    _configure_logging(verbose)

    try:
        config = load_config(config_path, cli_overrides={"days": days, "model": model, "repo": repo, "user": user})
    except (ValueError, OSError) as e:
        raise click.ClickException(f"failed to load configuration: {e}") from e

    if not isinstance(config["days"], int) or config["days"] < 1:
        raise click.ClickException(f"days must be a positive integer, got {config['days']!r}")

    _run(config, prompts)
