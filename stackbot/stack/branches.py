"""Shadow branches: synthetic branches mirroring a dependency PR's head."""

import logging
import re

from ..context import EventContext
from ..util import is_already_exists

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "stackbot/pr-"


def branch_name_for(pr_number: int, prefix: str = DEFAULT_PREFIX) -> str:
    """Shadow branch name for a dependency PR."""
    return f"{prefix}{pr_number}"


def is_shadow_branch(name: str, prefix: str = DEFAULT_PREFIX) -> bool:
    return re.fullmatch(re.escape(prefix) + r"[0-9]+", name) is not None


class ShadowBranchManager:
    """Create, move, protect and tear down shadow branches.

    Every operation goes through the event context's failure boundary, so
    none of them raise.
    """

    def __init__(self, ctx: EventContext) -> None:
        self.ctx = ctx
        self.github = ctx.github
        self.prefix = ctx.config.stack.branch_prefix

    def branch_name_for(self, pr_number: int) -> str:
        return branch_name_for(pr_number, self.prefix)

    def exists(self, pr_number: int) -> bool:
        """Check whether the shadow branch exists.

        Any failure reads as False, so a True answer is the only one that
        means something.
        """
        branch = self.branch_name_for(pr_number)
        result = self.ctx.attempt(f"get ref {branch}", lambda: self.github.get_ref_sha(branch),
                                   absent_ok=True)
        return result.ok

    def create_follower_branch(self, pr_number: int, sha: str) -> bool:
        """Create the shadow branch at sha. Returns True only if it was created here.

        If the branch is already there it is moved to sha instead.
        """
        branch = self.branch_name_for(pr_number)
        try:
            self.github.create_ref(branch, sha)
            return True
        except Exception as e:
            if not is_already_exists(e):
                logger.error(f"Error while processing event {self.ctx.describe()} "
                             f"for PR #{self.ctx.pr_number}: create ref {branch}: {e}")
                return False
        logger.debug(f"Shadow branch {branch} already exists, moving it to {sha[:8]}")
        self.force_update(pr_number, sha)
        return False

    def force_update(self, pr_number: int, sha: str) -> None:
        """Force-move the shadow branch to sha. Best-effort."""
        branch = self.branch_name_for(pr_number)
        self.ctx.attempt(f"update ref {branch}", lambda: self.github.update_ref(branch, sha, force=True),
                         absent_ok=True)

    def protect(self, pr_number: int, check_name: str) -> bool:
        branch = self.branch_name_for(pr_number)
        result = self.ctx.attempt(f"protect {branch}",
                                  lambda: self.github.protect_branch(branch, check_name))
        return result.ok

    def unprotect_and_delete(self, pr_number: int) -> None:
        """Remove protection then delete the ref. Missing either is fine."""
        branch = self.branch_name_for(pr_number)
        self.ctx.attempt(f"unprotect {branch}", lambda: self.github.unprotect_branch(branch),
                         absent_ok=True)
        self.ctx.attempt(f"delete ref {branch}", lambda: self.github.delete_ref(branch),
                         absent_ok=True)
