"""Per-event context passed explicitly to every stack component."""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from .config.models import StackbotConfig
from .github import GitHubClient
from .github.types import PullRequestEvent
from .util import CallResult, is_absence

logger = logging.getLogger(__name__)

R = TypeVar('R')


@dataclass
class EventContext:
    """Everything one event's handling needs: API client, config and payload."""
    github: GitHubClient
    config: StackbotConfig
    event_name: str
    payload: PullRequestEvent

    @property
    def action(self) -> Optional[str]:
        return self.payload.action

    @property
    def pr_number(self) -> int:
        return self.payload.number

    def describe(self) -> str:
        """Event identity as used in log lines, e.g. 'pull_request.opened'."""
        return f"{self.event_name}.{self.action}"

    def attempt(self, step: str, func: Callable[[], R], absent_ok: bool = False) -> CallResult[R]:
        """Run one sub-operation inside its own failure boundary.

        Never raises. With absent_ok, a 404 from the platform comes back as an
        absent result. Anything else, including a 404 the caller doesn't
        expect, is logged with the event identity and PR number and comes back
        as a failed result.
        """
        try:
            return CallResult.success(func())
        except Exception as e:
            if absent_ok and is_absence(e):
                logger.debug(f"{step}: not found while processing {self.describe()} for PR #{self.pr_number}")
                return CallResult.absence(e)
            logger.error(f"Error while processing event {self.describe()} for PR #{self.pr_number}: {step}: {e}")
            logger.debug("Traceback:", exc_info=True)
            return CallResult.failure(e)
