"""Re-parent dependents of a closing PR and tear down its shadow branch."""

import logging
from dataclasses import dataclass, field
from typing import List, Set

from ..context import EventContext
from .branches import ShadowBranchManager

logger = logging.getLogger(__name__)


@dataclass
class CascadeResult:
    """What a cascade run did."""
    branch: str
    reparented: List[int] = field(default_factory=list)
    failed: List[int] = field(default_factory=list)
    search_failed: bool = False
    torn_down: bool = False


class CascadeReparenter:
    """Move every open PR based on the closing PR's shadow branch onto its base.

    Only one level is flattened. Grandchildren keep targeting their own
    parent's shadow branch and get the same treatment when that parent closes.
    """

    def __init__(self, ctx: EventContext) -> None:
        self.ctx = ctx
        self.github = ctx.github
        self.branches = ShadowBranchManager(ctx)
        self.page_size = ctx.config.stack.search_page_size

    def run(self) -> CascadeResult:
        closing = self.ctx.payload.pull_request
        branch = self.branches.branch_name_for(closing.number)
        new_base = closing.base.ref
        result = CascadeResult(branch)

        # Re-parented PRs drop out of the search results, so the same page is
        # fetched again until it only holds PRs already handled.
        seen: Set[int] = set()
        page = 0
        while True:
            search = self.ctx.attempt(f"search PRs based on {branch} (page {page})",
                                      lambda: self.github.search_open_pulls_by_base(branch, page))
            if not search.ok:
                # Deleting a base branch closes the PRs still targeting it, so
                # leave the branch alone when dependents couldn't be listed.
                logger.warning(f"Skipping cascade for {branch}: search failed")
                result.search_failed = True
                return result

            numbers = search.value or []
            new = [number for number in numbers if number not in seen]
            for number in new:
                seen.add(number)
                self.reparent(number, new_base, result)

            # A short page is the last one
            if len(numbers) < self.page_size:
                break
            if not new:
                page += 1

        if result.failed:
            logger.warning(f"Keeping {branch}: {len(result.failed)} dependent(s) still target it")
            return result

        self.branches.unprotect_and_delete(closing.number)
        result.torn_down = True
        logger.info(f"Cascade for {branch}: re-parented {len(result.reparented)} PR(s) onto {new_base}")
        return result

    def reparent(self, number: int, new_base: str, result: CascadeResult) -> None:
        outcome = self.ctx.attempt(f"re-parent #{number}",
                                   lambda: self.github.set_base(number, new_base))
        if outcome.ok:
            result.reparented.append(number)
        else:
            result.failed.append(number)
