"""GitHub interfaces and implementation."""

import os
import logging
from typing import Dict, List, Optional, Protocol, runtime_checkable

from ..util import ensure, is_absence
from ..config.models import StackbotConfig
from .types import LabelPayload, PullRequestPayload, RefPayload

# Get module logger
logger = logging.getLogger(__name__)

# Define protocols for GitHub objects
@runtime_checkable
class GitHubRefProtocol(Protocol):
    """Protocol for GitHub ref objects (base/head of a pull request)."""
    @property
    def ref(self) -> str:
        """Get the ref name (e.g., 'main', 'stackbot/pr-12')."""
        ...

    @property
    def sha(self) -> str:
        """Get the commit SHA."""
        ...

@runtime_checkable
class GitHubLabelProtocol(Protocol):
    """Protocol for GitHub label objects."""
    @property
    def name(self) -> str:
        ...

@runtime_checkable
class GitHubGitObjectProtocol(Protocol):
    """Protocol for the object a git ref points at."""
    @property
    def sha(self) -> str:
        ...

@runtime_checkable
class GitHubGitRefProtocol(Protocol):
    """Protocol for git refs (refs/heads/...)."""
    @property
    def object(self) -> GitHubGitObjectProtocol:
        """Get the object the ref points at."""
        ...

    def edit(self, sha: str, force: bool = False) -> None:
        """Move the ref."""
        ...

    def delete(self) -> None:
        """Delete the ref."""
        ...

@runtime_checkable
class GitHubBranchProtocol(Protocol):
    """Protocol for branch objects, used for protection rules."""
    def edit_protection(self, strict: bool = ..., contexts: List[str] = ...,
                        enforce_admins: bool = ..., allow_force_pushes: bool = ...) -> object:
        """Create or replace the branch protection."""
        ...

    def remove_protection(self) -> None:
        """Remove the branch protection."""
        ...

@runtime_checkable
class GitHubIssueProtocol(Protocol):
    """Protocol for search results (issues and pull requests)."""
    @property
    def number(self) -> int:
        ...

@runtime_checkable
class GitHubCheckRunProtocol(Protocol):
    """Protocol for check runs."""
    @property
    def id(self) -> int:
        ...

    @property
    def name(self) -> str:
        ...

    @property
    def pull_requests(self) -> List[GitHubIssueProtocol]:
        """Pull requests the check run is associated with."""
        ...

    def edit(self, name: str = ..., status: str = ..., conclusion: str = ...,
             output: Dict[str, str] = ...) -> None:
        """Update the check run."""
        ...

@runtime_checkable
class GitHubPullRequestProtocol(Protocol):
    """Protocol for GitHub pull request objects (real or fake)."""
    @property
    def number(self) -> int:
        ...

    @property
    def id(self) -> int:
        ...

    @property
    def body(self) -> str:
        ...

    @property
    def state(self) -> str:
        """Get the PR state (open, closed)."""
        ...

    @property
    def merged(self) -> bool:
        ...

    @property
    def base(self) -> GitHubRefProtocol:
        ...

    @property
    def head(self) -> GitHubRefProtocol:
        ...

    @property
    def labels(self) -> List[GitHubLabelProtocol]:
        ...

    def edit(self, base: str) -> None:
        """Change the base branch of the pull request."""
        ...

    def add_to_labels(self, *labels: str) -> None:
        """Add labels to the pull request."""
        ...

    def remove_from_labels(self, label: str) -> None:
        """Remove a label from the pull request."""
        ...

@runtime_checkable
class GitHubRepoProtocol(Protocol):
    """Protocol for GitHub repository objects (real or fake)."""
    @property
    def default_branch(self) -> str:
        ...

    def get_git_ref(self, ref: str) -> GitHubGitRefProtocol:
        """Get a git ref, e.g. 'heads/main'."""
        ...

    def create_git_ref(self, ref: str, sha: str) -> GitHubGitRefProtocol:
        """Create a git ref, e.g. 'refs/heads/main'."""
        ...

    def get_branch(self, branch: str) -> GitHubBranchProtocol:
        ...

    def get_pull(self, number: int) -> GitHubPullRequestProtocol:
        ...

    def get_check_runs(self, sha: str, check_name: str) -> List[GitHubCheckRunProtocol]:
        """Get the latest check runs with the given name on a commit."""
        ...

    def create_check_run(self, name: str, head_sha: str, status: str,
                         conclusion: str, output: Dict[str, str]) -> GitHubCheckRunProtocol:
        ...

    def get_label(self, name: str) -> GitHubLabelProtocol:
        ...

    def create_label(self, name: str, color: str, description: str) -> GitHubLabelProtocol:
        ...

@runtime_checkable
class PyGithubProtocol(Protocol):
    """Protocol for PyGithub implementations (real or fake).

    This protocol defines the interface that both the adapted PyGithub
    library and our fake implementation must satisfy.
    """
    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        """Get a repository by full name."""
        ...

    def search_issues_page(self, query: str, page: int) -> List[GitHubIssueProtocol]:
        """Get one page (0-based) of issue search results."""
        ...

def find_github_token() -> Optional[str]:
    """Find GitHub token from env var or gh CLI config."""
    import yaml
    from pathlib import Path

    # First try environment variable
    token = os.environ.get("GITHUB_TOKEN")
    if token:
        return token

    # Then try gh CLI config at ~/.config/gh/hosts.yml
    try:
        gh_config_path = Path.home() / ".config" / "gh" / "hosts.yml"
        if gh_config_path.exists():
            with open(gh_config_path, "r") as f:
                gh_config = yaml.safe_load(f)
                if gh_config and "github.com" in gh_config:
                    github_config: Dict[str, object] = gh_config["github.com"]
                    if "oauth_token" in github_config:
                        token = github_config["oauth_token"]
                        if isinstance(token, str):
                            return token
    except Exception as e:
        logger.error(f"Error reading gh CLI config: {e}")
    return None


def heads_ref(branch: str) -> str:
    """Short ref name as the git refs API expects for lookups."""
    return f"heads/{branch}"


class GitHubClient:
    """GitHub client implementation.

    Every method maps onto a single hosting-platform call and lets the
    PyGithub exception through; classifying failures is up to the caller.
    """
    def __init__(self, config: StackbotConfig, github_client: PyGithubProtocol,
                 repo_full_name: Optional[str] = None):
        """Initialize with config and GitHub client implementation.

        Args:
            config: The configuration
            github_client: GitHub client implementation (real or fake)
            repo_full_name: owner/name of the repository; defaults to the config
        """
        self.config = config
        self.client = github_client
        self.repo_full_name = repo_full_name or config.repo.full_name
        self._repo: Optional[GitHubRepoProtocol] = None

    @property
    def repo(self) -> GitHubRepoProtocol:
        """Get GitHub repository."""
        if self._repo is None:
            self._repo = self.client.get_repo(ensure(self.repo_full_name))
        return self._repo

    @repo.setter
    def repo(self, value: GitHubRepoProtocol) -> None:
        """Set the GitHub repository."""
        self._repo = value

    def default_branch(self) -> str:
        """Get the repository default branch."""
        return self.repo.default_branch

    # Refs

    def get_ref_sha(self, branch: str) -> str:
        """Get the commit a branch points at."""
        return self.repo.get_git_ref(heads_ref(branch)).object.sha

    def create_ref(self, branch: str, sha: str) -> None:
        logger.info(f"> github create ref {branch} @ {sha[:8]}")
        self.repo.create_git_ref(ref=f"refs/heads/{branch}", sha=sha)

    def update_ref(self, branch: str, sha: str, force: bool = True) -> None:
        logger.info(f"> github update ref {branch} @ {sha[:8]} (force={force})")
        self.repo.get_git_ref(heads_ref(branch)).edit(sha, force=force)

    def delete_ref(self, branch: str) -> None:
        logger.info(f"> github delete ref {branch}")
        self.repo.get_git_ref(heads_ref(branch)).delete()

    # Branch protection

    def protect_branch(self, branch: str, check_name: str) -> None:
        """Require check_name on branch while still allowing force pushes.

        No review requirement and no push restrictions are configured, so
        the protection only surfaces the check on PRs targeting the branch.
        """
        logger.info(f"> github protect {branch} : require {check_name}")
        self.repo.get_branch(branch).edit_protection(
            strict=False,
            contexts=[check_name],
            enforce_admins=True,
            allow_force_pushes=True,
        )

    def unprotect_branch(self, branch: str) -> None:
        logger.info(f"> github unprotect {branch}")
        self.repo.get_branch(branch).remove_protection()

    # Check runs

    def list_check_runs(self, sha: str, check_name: str) -> List[GitHubCheckRunProtocol]:
        logger.debug(f"> github list check runs {check_name} @ {sha[:8]}")
        return list(self.repo.get_check_runs(sha, check_name))

    def create_check_run(self, check_name: str, sha: str, conclusion: str,
                         title: str, summary: str) -> GitHubCheckRunProtocol:
        logger.info(f"> github create check run {check_name} @ {sha[:8]} : {conclusion}")
        return self.repo.create_check_run(
            name=check_name,
            head_sha=sha,
            status="completed",
            conclusion=conclusion,
            output={"title": title, "summary": summary},
        )

    def update_check_run(self, run: GitHubCheckRunProtocol, conclusion: str,
                         title: str, summary: str) -> None:
        logger.info(f"> github update check run {run.name} ({run.id}) : {conclusion}")
        run.edit(
            name=run.name,
            status="completed",
            conclusion=conclusion,
            output={"title": title, "summary": summary},
        )

    # Labels

    def ensure_label(self, name: str, color: str, description: str) -> bool:
        """Create the repository label if it doesn't exist. Returns True if created."""
        try:
            self.repo.get_label(name)
            return False
        except Exception as e:
            if not is_absence(e):
                raise
        logger.info(f"> github create label {name}")
        self.repo.create_label(name=name, color=color, description=description)
        return True

    def add_label(self, number: int, label: str) -> None:
        logger.info(f"> github add label #{number} : {label}")
        self.repo.get_pull(number).add_to_labels(label)

    def remove_label(self, number: int, label: str) -> None:
        logger.info(f"> github remove label #{number} : {label}")
        self.repo.get_pull(number).remove_from_labels(label)

    # Pull requests

    def get_pull(self, number: int) -> GitHubPullRequestProtocol:
        return self.repo.get_pull(number)

    def set_base(self, number: int, base: str) -> None:
        logger.info(f"> github retarget #{number} onto {base}")
        self.repo.get_pull(number).edit(base=base)

    def search_open_pulls_by_base(self, branch: str, page: int) -> List[int]:
        """Get one page (0-based) of open PR numbers whose base is branch."""
        query = f"is:pr state:open repo:{self.repo_full_name} base:{branch}"
        logger.debug(f"> github search page {page} : {query}")
        return [item.number for item in self.client.search_issues_page(query, page)]

    def get_pull_payload(self, number: int) -> PullRequestPayload:
        """Fetch a PR and shape it like the pull_request object of a webhook."""
        pr = self.get_pull(number)
        return PullRequestPayload(
            id=pr.id,
            number=pr.number,
            body=pr.body,
            state=pr.state,
            merged=pr.merged,
            base=RefPayload(ref=pr.base.ref, sha=pr.base.sha),
            head=RefPayload(ref=pr.head.ref, sha=pr.head.sha),
            labels=[LabelPayload(name=label.name) for label in pr.labels],
        )
