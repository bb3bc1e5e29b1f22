"""Adapter classes to wrap PyGithub objects with our protocol interfaces."""

from typing import Dict, List
import logging

from github import Auth, Github
from github.Repository import Repository
from github.PullRequest import PullRequest as PyGithubPullRequest

from . import (
    PyGithubProtocol,
    GitHubRepoProtocol,
    GitHubPullRequestProtocol,
    GitHubRefProtocol,
    GitHubLabelProtocol,
    GitHubGitRefProtocol,
    GitHubBranchProtocol,
    GitHubCheckRunProtocol,
    GitHubIssueProtocol,
)

logger = logging.getLogger(__name__)


class PyGithubPullRequestAdapter(GitHubPullRequestProtocol):
    """Adapter for PyGithub PullRequest objects."""

    def __init__(self, pr: PyGithubPullRequest) -> None:
        self._pr = pr

    @property
    def number(self) -> int:
        return self._pr.number

    @property
    def id(self) -> int:
        return self._pr.id

    @property
    def body(self) -> str:
        # PyGithub returns None for an empty description
        return self._pr.body or ""

    @property
    def state(self) -> str:
        return self._pr.state

    @property
    def merged(self) -> bool:
        return self._pr.merged

    @property
    def base(self) -> GitHubRefProtocol:
        return self._pr.base

    @property
    def head(self) -> GitHubRefProtocol:
        return self._pr.head

    @property
    def labels(self) -> List[GitHubLabelProtocol]:
        return list(self._pr.labels)

    def edit(self, base: str) -> None:
        """Change the base branch of the pull request."""
        self._pr.edit(base=base)

    def add_to_labels(self, *labels: str) -> None:
        self._pr.add_to_labels(*labels)

    def remove_from_labels(self, label: str) -> None:
        self._pr.remove_from_labels(label)


class PyGithubRepoAdapter(GitHubRepoProtocol):
    """Adapter for PyGithub Repository objects."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    @property
    def default_branch(self) -> str:
        return self._repo.default_branch

    def get_git_ref(self, ref: str) -> GitHubGitRefProtocol:
        return self._repo.get_git_ref(ref)

    def create_git_ref(self, ref: str, sha: str) -> GitHubGitRefProtocol:
        return self._repo.create_git_ref(ref=ref, sha=sha)

    def get_branch(self, branch: str) -> GitHubBranchProtocol:
        return self._repo.get_branch(branch)

    def get_pull(self, number: int) -> GitHubPullRequestProtocol:
        return PyGithubPullRequestAdapter(self._repo.get_pull(number))

    def get_check_runs(self, sha: str, check_name: str) -> List[GitHubCheckRunProtocol]:
        """Get the latest check runs with the given name on a commit."""
        # Check runs hang off the commit in PyGithub, not the repository
        commit = self._repo.get_commit(sha)
        return list(commit.get_check_runs(check_name=check_name, filter="latest"))

    def create_check_run(self, name: str, head_sha: str, status: str,
                         conclusion: str, output: Dict[str, str]) -> GitHubCheckRunProtocol:
        return self._repo.create_check_run(
            name=name,
            head_sha=head_sha,
            status=status,
            conclusion=conclusion,
            output=output,
        )

    def get_label(self, name: str) -> GitHubLabelProtocol:
        return self._repo.get_label(name)

    def create_label(self, name: str, color: str, description: str) -> GitHubLabelProtocol:
        return self._repo.create_label(name=name, color=color, description=description)


class PyGithubAdapter(PyGithubProtocol):
    """Adapter for the main PyGithub object."""

    def __init__(self, github: Github) -> None:
        self._github = github

    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        """Get a repository by full name."""
        return PyGithubRepoAdapter(self._github.get_repo(full_name_or_id))

    def search_issues_page(self, query: str, page: int) -> List[GitHubIssueProtocol]:
        """Get one page (0-based) of issue search results.

        The page size is the per_page the Github object was built with.
        """
        return list(self._github.search_issues(query).get_page(page))


def create_pygithub_client(token: str, per_page: int = 100) -> PyGithubAdapter:
    """Create a real PyGithub client wrapped in our adapter."""
    real_github = Github(auth=Auth.Token(token), per_page=per_page)
    return PyGithubAdapter(real_github)
