"""Configuration for pytest."""

import logging
from typing import Callable, Optional

import pytest

from stackbot.config import Config
from stackbot.context import EventContext
from stackbot.github import GitHubClient
from stackbot.tests.fake_pygithub import FakeGithub, FakePullRequest, FakeRepository, create_fake_github
from stackbot.tests.utils import make_context

logger = logging.getLogger(__name__)

REPO = "acme/widgets"

@pytest.fixture
def config() -> Config:
    return Config({
        'repo': {
            'github_repo_owner': 'acme',
            'github_repo_name': 'widgets',
        },
        'stack': {},
    })

@pytest.fixture
def fake_github() -> FakeGithub:
    return create_fake_github(per_page=100)

@pytest.fixture
def repo(fake_github: FakeGithub) -> FakeRepository:
    return fake_github.get_repo(REPO)

@pytest.fixture
def client(config: Config, fake_github: FakeGithub) -> GitHubClient:
    return GitHubClient(config, fake_github, REPO)

@pytest.fixture
def context_for(client: GitHubClient, config: Config) -> Callable[..., EventContext]:
    """Factory building an event context from a fake PR's current state."""
    def factory(pr: FakePullRequest, action: str, previous_body: Optional[str] = None) -> EventContext:
        return make_context(client, config, pr, action, previous_body=previous_body)
    return factory
