"""Route pull_request webhook events to the stack components."""

import logging
from typing import Callable, Dict, List, Optional

from ..context import EventContext
from ..stack import (
    CascadeReparenter,
    DependencyStatusReporter,
    ShadowBranchManager,
    Stacker,
    UnstackDetector,
)

logger = logging.getLogger(__name__)

Handler = Callable[[EventContext], object]


def stack_pull_request(ctx: EventContext) -> object:
    return Stacker(ctx).run()


def update_dependency_status(ctx: EventContext) -> object:
    return DependencyStatusReporter(ctx).update()


def unstack_if_directive_removed(ctx: EventContext) -> object:
    return UnstackDetector(ctx).run()


def update_following_branch(ctx: EventContext) -> object:
    """Move the shadow branch that mirrors this PR, if there is one."""
    pr = ctx.payload.pull_request
    ShadowBranchManager(ctx).force_update(pr.number, pr.head.sha)
    return None


def reparent_dependents(ctx: EventContext) -> object:
    return CascadeReparenter(ctx).run()


def build_dispatch_table() -> Dict[str, List[Handler]]:
    """Map 'event.action' keys to the handlers run for them, in order."""
    return {
        "pull_request.opened": [
            stack_pull_request,
            update_dependency_status,
        ],
        "pull_request.edited": [
            stack_pull_request,
            update_dependency_status,
            unstack_if_directive_removed,
        ],
        "pull_request.synchronize": [
            update_dependency_status,
            update_following_branch,
        ],
        "pull_request.closed": [
            reparent_dependents,
        ],
        # Not an action GitHub sends today; closed carries merged=true instead
        "pull_request.merged": [
            reparent_dependents,
        ],
    }


class EventRouter:
    """Dispatch an event to its handlers, each in its own failure boundary."""

    def __init__(self, table: Optional[Dict[str, List[Handler]]] = None) -> None:
        self.table = table if table is not None else build_dispatch_table()

    def handlers_for(self, key: str) -> List[Handler]:
        return self.table.get(key, [])

    def dispatch(self, ctx: EventContext) -> int:
        """Run the handlers for ctx's event. Returns how many failed."""
        key = ctx.describe()
        logger.info(f"action: {key}")

        handlers = self.handlers_for(key)
        if not handlers:
            logger.debug(f"No handlers for {key}")
            return 0

        failures = 0
        for handler in handlers:
            result = ctx.attempt(handler.__name__, lambda: handler(ctx))
            if result.failed:
                failures += 1
        return failures
