"""Revert a PR's base when its author removes the stack directive."""

import logging

from ..context import EventContext
from .directive import effective_dependency

logger = logging.getLogger(__name__)


class UnstackDetector:
    """Handle the one edit transition the stacking flow doesn't: directive removed.

    Adding a directive, switching it to another PR or leaving it alone are
    all the stacking flow's business.
    """

    def __init__(self, ctx: EventContext) -> None:
        self.ctx = ctx
        self.github = ctx.github

    def run(self) -> bool:
        """Returns True if the PR was moved back to the default branch."""
        previous_body = self.ctx.payload.previous_body
        if previous_body is None:
            # Not a description edit
            return False

        marker = self.ctx.config.stack.marker
        number = self.ctx.pr_number
        current_dep = effective_dependency(self.ctx.payload.pull_request.body, number, marker)
        prev_dep = effective_dependency(previous_body, number, marker)

        if not (current_dep is None and prev_dep is not None):
            return False

        default_branch = self.default_branch()
        logger.info(f"PR #{number} no longer depends on #{prev_dep}, moving it to {default_branch}")
        result = self.ctx.attempt(f"unstack #{number}",
                                  lambda: self.github.set_base(number, default_branch))
        return result.ok

    def default_branch(self) -> str:
        configured = self.ctx.config.repo.default_branch
        if configured:
            return configured
        repository = self.ctx.payload.repository
        if repository is not None and repository.default_branch:
            return repository.default_branch
        return self.github.default_branch()
