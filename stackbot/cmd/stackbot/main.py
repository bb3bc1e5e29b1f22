"""CLI entry point."""

import json
import sys
import click
import logging
import yaml
from typing import Optional
from click import Context

from ...config import Config
from ...config.config_parser import parse_config
from ...context import EventContext
from ...events import EventRouter
from ...github import GitHubClient, PyGithubProtocol, find_github_token
from ...github.adapters import create_pygithub_client
from ...github.types import PullRequestEvent, RepositoryPayload, parse_pull_request_event
from ...stack import DependencyStatusReporter, Stacker

# Get module logger
logger = logging.getLogger(__name__)

def load_config(config_path: Optional[str]) -> Config:
    """Load config from file and environment."""
    return Config(parse_config(config_path))

def setup_github(config: Config, repo_full_name: Optional[str] = None,
                 github_client: Optional[PyGithubProtocol] = None) -> GitHubClient:
    """Setup the GitHub client for one repository."""
    full_name = repo_full_name or config.repo.full_name
    if not full_name:
        raise ValueError("Repository unknown. Set GITHUB_REPOSITORY or repo.github_repo_owner/github_repo_name")

    if github_client is None:
        token = find_github_token()
        if not token:
            error_msg = "No GitHub token found. Try one of:\n1. Set GITHUB_TOKEN env var\n2. Log in with 'gh auth login'"
            logger.error(error_msg)
            raise ValueError(error_msg)
        github_client = create_pygithub_client(token, per_page=config.stack.search_page_size)

    return GitHubClient(config, github_client, full_name)

@click.group()
@click.pass_context
def cli(ctx: Context) -> None:
    """stackbot - keep stacked pull requests on GitHub in order."""
    ctx.ensure_object(dict)

@cli.command(name="handle", help="Handle one pull_request webhook event")
@click.option('--event-name', envvar='GITHUB_EVENT_NAME', required=True,
              help="Webhook event name (defaults to $GITHUB_EVENT_NAME)")
@click.option('--event-path', envvar='GITHUB_EVENT_PATH', required=True,
              type=click.Path(exists=True, file_okay=True, dir_okay=False),
              help="JSON payload file (defaults to $GITHUB_EVENT_PATH)")
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help="Config file (defaults to .stackbot.yaml if present)")
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
@click.pass_context
def handle(ctx: Context, event_name: str, event_path: str, config_path: Optional[str], verbose: int) -> None:
    """Handle command."""
    from ... import setup_logging
    setup_logging(verbose)

    if event_name != "pull_request":
        logger.info(f"Ignoring {event_name} event")
        return

    try:
        with open(event_path, 'r') as f:
            payload = json.load(f)
        event = parse_pull_request_event(payload)
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid event payload in {event_path}: {e}")
        sys.exit(1)

    try:
        config = load_config(config_path)
        repository: Optional[RepositoryPayload] = event.repository
        github = setup_github(config, repository.full_name if repository else None,
                              github_client=ctx.obj.get('github_client'))
    except (ValueError, yaml.YAMLError) as e:
        logger.error(f"{e}")
        sys.exit(1)

    event_ctx = EventContext(github, config, event_name, event)
    failures = EventRouter().dispatch(event_ctx)
    if failures:
        logger.warning(f"{failures} handler(s) failed for {event_ctx.describe()} on PR #{event.number}")

@cli.command(name="recheck", help="Re-run stacking and the dependency check for one PR")
@click.argument('pr_number', type=int)
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help="Config file (defaults to .stackbot.yaml if present)")
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
@click.pass_context
def recheck(ctx: Context, pr_number: int, config_path: Optional[str], verbose: int) -> None:
    """Recheck command."""
    from ... import setup_logging
    setup_logging(verbose)

    try:
        config = load_config(config_path)
        github = setup_github(config, github_client=ctx.obj.get('github_client'))
        pull_request = github.get_pull_payload(pr_number)
    except Exception as e:
        logger.error(f"Error fetching PR #{pr_number}: {e}")
        sys.exit(1)

    event = PullRequestEvent(action="recheck", number=pr_number, pull_request=pull_request)
    event_ctx = EventContext(github, config, "pull_request", event)
    Stacker(event_ctx).run()
    result = DependencyStatusReporter(event_ctx).update()
    if result.waiting:
        click.echo(f"#{pr_number}: waiting for #{result.depends_on}")
    else:
        click.echo(f"#{pr_number}: no dependencies")

def main() -> None:
    """Main entry point."""
    cli(obj={})

if __name__ == "__main__":
    main()
