from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from github import GithubException, UnknownObjectException

T = TypeVar('T')


def ensure(value: Optional[T]) -> T:
    """Ensure a value is not None, raising RuntimeError if it is.

    Args:
        value: The value to check

    Returns:
        The value if it is not None

    Raises:
        RuntimeError: If the value is None
    """
    if value is None:
        raise RuntimeError("Value is None")
    return value


class Outcome(Enum):
    """How an external call ended."""
    OK = "ok"
    ABSENT = "absent"  # ref not found, label not present, branch not protected
    FAILED = "failed"


@dataclass(frozen=True)
class CallResult(Generic[T]):
    """Result of a call into the hosting platform.

    Expected absence and unexpected failure are kept apart so callers can
    treat the former as a normal no-op and only the latter as an error.
    """
    outcome: Outcome
    value: Optional[T] = None
    error: Optional[BaseException] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "CallResult[T]":
        return cls(Outcome.OK, value=value)

    @classmethod
    def absence(cls, error: BaseException) -> "CallResult[T]":
        return cls(Outcome.ABSENT, error=error)

    @classmethod
    def failure(cls, error: BaseException) -> "CallResult[T]":
        return cls(Outcome.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.outcome is Outcome.OK

    @property
    def absent(self) -> bool:
        return self.outcome is Outcome.ABSENT

    @property
    def failed(self) -> bool:
        return self.outcome is Outcome.FAILED


def is_absence(err: BaseException) -> bool:
    """Check whether an API error means the resource simply isn't there."""
    if isinstance(err, UnknownObjectException):
        return True
    return isinstance(err, GithubException) and err.status == 404


def is_already_exists(err: BaseException) -> bool:
    """Check whether an API error means the resource was already created."""
    if not isinstance(err, GithubException) or err.status != 422:
        return False
    data = err.data if isinstance(err.data, dict) else {}
    return "already exists" in str(data.get("message", "")).lower()
