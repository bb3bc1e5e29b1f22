"""Stack a PR onto the PR its description depends on."""

import logging
from typing import Optional

from ..context import EventContext
from .branches import ShadowBranchManager, is_shadow_branch
from .directive import effective_dependency

logger = logging.getLogger(__name__)


class Stacker:
    """Create the dependency's shadow branch and retarget the PR onto it."""

    def __init__(self, ctx: EventContext) -> None:
        self.ctx = ctx
        self.github = ctx.github
        self.branches = ShadowBranchManager(ctx)

    def run(self) -> Optional[str]:
        """Returns the shadow branch the PR now targets, or None if nothing was done."""
        pr = self.ctx.payload.pull_request
        dep = effective_dependency(pr.body, pr.number, self.ctx.config.stack.marker)
        if dep is None:
            return None

        branch = self.branches.branch_name_for(dep)
        if pr.base.ref == branch:
            logger.debug(f"PR #{pr.number} is already stacked on {branch}")
            return None
        if is_shadow_branch(pr.base.ref, self.branches.prefix):
            logger.info(f"PR #{pr.number} moves from {pr.base.ref} to {branch}")

        fetched = self.ctx.attempt(f"get dependency #{dep}", lambda: self.github.get_pull(dep))
        dep_pr = fetched.value
        if dep_pr is None:
            logger.info(f"PR #{pr.number} depends on #{dep}, which couldn't be fetched")
            return None
        if dep_pr.state == "closed":
            logger.info(f"PR #{pr.number} depends on #{dep}, which is already closed")
            return None

        created = self.branches.create_follower_branch(dep, dep_pr.head.sha)

        retarget = self.ctx.attempt(f"retarget #{pr.number} onto {branch}",
                                    lambda: self.github.set_base(pr.number, branch))

        if created:
            self.branches.protect(dep, self.ctx.config.stack.check_name)

        if not retarget.ok:
            return None
        # Later handlers of this event read the payload, keep it current
        pr.base.ref = branch
        return branch
