"""Dependency status: the check run and label reflecting a PR's stacking state."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ..config.models import StackbotConfig
from ..context import EventContext
from ..github import GitHubCheckRunProtocol
from ..util import is_absence
from .branches import branch_name_for
from .directive import effective_dependency

logger = logging.getLogger(__name__)


class DependencyStatus(Enum):
    NO_DEPENDENCY = "no_dependency"
    WAITING = "waiting"


@dataclass(frozen=True)
class StatusResult:
    """Effective stacking state of a PR and what to report for it."""
    status: DependencyStatus
    depends_on: Optional[int] = None

    @property
    def waiting(self) -> bool:
        return self.status is DependencyStatus.WAITING

    @property
    def conclusion(self) -> str:
        return "failure" if self.waiting else "success"

    @property
    def title(self) -> str:
        if self.waiting:
            return f"Waiting for #{self.depends_on} to be merged or closed"
        return "This PR has no dependencies!"

    @property
    def summary(self) -> str:
        return self.title


def compute_status(body: Optional[str], base_ref: str, pr_number: int,
                   config: StackbotConfig) -> StatusResult:
    """Work out whether a PR is effectively stacked.

    Declaring a dependency isn't enough: the PR also has to target that
    dependency's shadow branch. A directive not yet acted on, or a base
    reset by hand, both read as no dependency.
    """
    dep = effective_dependency(body, pr_number, config.stack.marker)
    if dep is None or base_ref != branch_name_for(dep, config.stack.branch_prefix):
        return StatusResult(DependencyStatus.NO_DEPENDENCY)
    return StatusResult(DependencyStatus.WAITING, dep)


class DependencyStatusReporter:
    """Publish the dependency check run and toggle the advisory label."""

    def __init__(self, ctx: EventContext) -> None:
        self.ctx = ctx
        self.github = ctx.github
        self.stack_config = ctx.config.stack

    def update(self) -> StatusResult:
        pr = self.ctx.payload.pull_request
        result = compute_status(pr.body, pr.base.ref, pr.number, self.ctx.config)
        logger.info(f"PR #{pr.number}: dependency status {result.status.value}"
                    + (f" on #{result.depends_on}" if result.depends_on else ""))

        self.ctx.attempt("publish check run", lambda: self.publish_check_run(result))
        self.ctx.attempt("toggle label", lambda: self.toggle_label(result, pr.label_names))
        return result

    def find_check_run(self, runs: List[GitHubCheckRunProtocol]) -> Optional[GitHubCheckRunProtocol]:
        """Pick the run to update: one linked to this PR, else any with our name."""
        pr = self.ctx.payload.pull_request
        ours = [run for run in runs if run.name == self.stack_config.check_name]
        for run in ours:
            if any(linked.number == pr.number for linked in run.pull_requests):
                return run
        return ours[0] if ours else None

    def publish_check_run(self, result: StatusResult) -> None:
        pr = self.ctx.payload.pull_request
        check_name = self.stack_config.check_name
        run = self.find_check_run(self.github.list_check_runs(pr.head.sha, check_name))
        if run is None:
            self.github.create_check_run(check_name, pr.head.sha, result.conclusion,
                                         result.title, result.summary)
        else:
            self.github.update_check_run(run, result.conclusion, result.title, result.summary)

    def toggle_label(self, result: StatusResult, current_labels: List[str]) -> None:
        label = self.stack_config.label
        has_label = label in current_labels
        number = self.ctx.pr_number
        if result.waiting and not has_label:
            self.github.ensure_label(label, self.stack_config.label_color,
                                     self.stack_config.label_description)
            self.github.add_label(number, label)
        elif not result.waiting and has_label:
            try:
                self.github.remove_label(number, label)
            except Exception as e:
                if not is_absence(e):
                    raise
                logger.debug(f"Label {label} already gone from #{number}")
