"""Tests for API error classification and call results."""

import pytest
from github import GithubException, UnknownObjectException

from stackbot.util import CallResult, Outcome, ensure, is_absence, is_already_exists


def test_is_absence() -> None:
    assert is_absence(UnknownObjectException(404, {"message": "Not Found"}, None))
    assert is_absence(GithubException(404, {"message": "Branch not protected"}, None))
    assert not is_absence(GithubException(403, {"message": "Forbidden"}, None))
    assert not is_absence(GithubException(422, {"message": "Reference already exists"}, None))
    assert not is_absence(RuntimeError("boom"))


def test_is_already_exists() -> None:
    assert is_already_exists(GithubException(422, {"message": "Reference already exists"}, None))
    assert not is_already_exists(GithubException(422, {"message": "Validation Failed"}, None))
    assert not is_already_exists(GithubException(500, {"message": "already exists"}, None))
    assert not is_already_exists(GithubException(422, None, None))
    assert not is_already_exists(ValueError("already exists"))


def test_call_result() -> None:
    ok = CallResult.success(3)
    assert ok.ok and not ok.absent and not ok.failed
    assert ok.value == 3

    err = UnknownObjectException(404, {"message": "Not Found"}, None)
    absent: CallResult[int] = CallResult.absence(err)
    assert absent.outcome is Outcome.ABSENT
    assert absent.value is None
    assert absent.error is err

    failed: CallResult[int] = CallResult.failure(RuntimeError("boom"))
    assert failed.failed and not failed.ok


def test_ensure() -> None:
    assert ensure("x") == "x"
    with pytest.raises(RuntimeError):
        ensure(None)
