"""Shared utilities for stackbot tests."""
from typing import Any, Dict, Optional

from stackbot.config import Config
from stackbot.context import EventContext
from stackbot.github import GitHubClient
from stackbot.github.types import PullRequestEvent, parse_pull_request_event
from stackbot.tests.fake_pygithub import FakePullRequest

def pull_request_payload(pr: FakePullRequest) -> Dict[str, Any]:
    """Render a fake PR the way GitHub renders it in webhook payloads."""
    return {
        "id": pr.id,
        "number": pr.number,
        "title": pr.title,
        "body": pr.body or None,
        "state": pr.state,
        "merged": pr.merged,
        "base": {"ref": pr.base.ref, "sha": pr.base.sha},
        "head": {"ref": pr.head.ref, "sha": pr.head.sha},
        "labels": [{"name": label.name} for label in pr.labels],
    }

def event_payload(pr: FakePullRequest, action: str,
                  previous_body: Optional[str] = None, default_branch: str = "main") -> Dict[str, Any]:
    """Build a pull_request webhook payload for a fake PR."""
    owner, name = pr.repo.full_name.split("/")
    payload: Dict[str, Any] = {
        "action": action,
        "number": pr.number,
        "pull_request": pull_request_payload(pr),
        "repository": {
            "name": name,
            "full_name": pr.repo.full_name,
            "default_branch": default_branch,
            "owner": {"login": owner},
        },
    }
    if previous_body is not None:
        payload["changes"] = {"body": {"from": previous_body}}
    return payload

def make_context(client: GitHubClient, config: Config, pr: FakePullRequest, action: str,
                 previous_body: Optional[str] = None) -> EventContext:
    """Build the context for one event on a fake PR, from its current state."""
    event: PullRequestEvent = parse_pull_request_event(
        event_payload(pr, action, previous_body=previous_body, default_branch=client.repo.default_branch))
    return EventContext(client, config, "pull_request", event)
