"""Tests for stacking a PR onto its declared dependency."""

from typing import Callable

from stackbot.context import EventContext
from stackbot.stack.stacker import Stacker
from stackbot.tests.fake_pygithub import FakeRepository


def test_stacks_onto_new_shadow_branch(repo: FakeRepository,
                                       context_for: Callable[..., EventContext]) -> None:
    parent = repo.create_pull("Parent", "", base="main", head="feature-a")
    child = repo.create_pull("Child", "Needs the parent\n/stack #1", base="main", head="feature-b")

    ctx = context_for(child, "opened")
    assert Stacker(ctx).run() == "stackbot/pr-1"

    assert repo.refs["stackbot/pr-1"] == parent.head.sha
    assert child.base.ref == "stackbot/pr-1"
    assert repo.protections["stackbot/pr-1"]["contexts"] == ["stacked-dependencies"]
    # Later handlers see the new base
    assert ctx.payload.pull_request.base.ref == "stackbot/pr-1"


def test_existing_shadow_branch_is_reused_without_reprotecting(
        repo: FakeRepository, context_for: Callable[..., EventContext]) -> None:
    parent = repo.create_pull("Parent", "", base="main", head="feature-a")
    repo.refs["stackbot/pr-1"] = "a" * 40
    child = repo.create_pull("Child", "/stack #1", base="main", head="feature-b")

    assert Stacker(context_for(child, "opened")).run() == "stackbot/pr-1"

    assert repo.refs["stackbot/pr-1"] == parent.head.sha
    assert child.base.ref == "stackbot/pr-1"
    assert "stackbot/pr-1" not in repo.protections


def test_no_directive_does_nothing(repo: FakeRepository,
                                   context_for: Callable[..., EventContext]) -> None:
    pr = repo.create_pull("Plain", "just a change", base="main", head="feature-a")
    assert Stacker(context_for(pr, "opened")).run() is None
    assert pr.base.ref == "main"
    assert set(repo.refs) == {"main", "feature-a"}


def test_self_reference_does_nothing(repo: FakeRepository,
                                     context_for: Callable[..., EventContext]) -> None:
    pr = repo.create_pull("Self", "/stack #1", base="main", head="feature-a")
    assert Stacker(context_for(pr, "opened")).run() is None
    assert "stackbot/pr-1" not in repo.refs


def test_already_stacked_does_nothing(repo: FakeRepository,
                                      context_for: Callable[..., EventContext]) -> None:
    parent = repo.create_pull("Parent", "", base="main", head="feature-a")
    repo.refs["stackbot/pr-1"] = parent.head.sha
    child = repo.create_pull("Child", "/stack #1", base="stackbot/pr-1", head="feature-b")
    repo.fail("create_ref")

    assert Stacker(context_for(child, "edited")).run() is None
    assert child.base.ref == "stackbot/pr-1"


def test_closed_dependency_is_ignored(repo: FakeRepository,
                                      context_for: Callable[..., EventContext]) -> None:
    parent = repo.create_pull("Parent", "", base="main", head="feature-a")
    parent.close(merged=True)
    child = repo.create_pull("Child", "/stack #1", base="main", head="feature-b")

    assert Stacker(context_for(child, "opened")).run() is None
    assert child.base.ref == "main"
    assert "stackbot/pr-1" not in repo.refs


def test_missing_dependency_is_ignored(repo: FakeRepository,
                                       context_for: Callable[..., EventContext]) -> None:
    child = repo.create_pull("Child", "/stack #42", base="main", head="feature-b")

    assert Stacker(context_for(child, "opened")).run() is None
    assert child.base.ref == "main"


def test_switching_dependency(repo: FakeRepository,
                              context_for: Callable[..., EventContext]) -> None:
    repo.create_pull("A", "", base="main", head="feature-a")
    b = repo.create_pull("B", "", base="main", head="feature-b")
    repo.refs["stackbot/pr-1"] = repo.pulls[1].head.sha
    child = repo.create_pull("Child", "/stack #1", base="stackbot/pr-1", head="feature-c")

    child.body = "/stack #2"
    assert Stacker(context_for(child, "edited", previous_body="/stack #1")).run() == "stackbot/pr-2"
    assert child.base.ref == "stackbot/pr-2"
    assert repo.refs["stackbot/pr-2"] == b.head.sha


def test_failed_retarget_still_protects_new_branch(repo: FakeRepository,
                                                   context_for: Callable[..., EventContext]) -> None:
    repo.create_pull("Parent", "", base="main", head="feature-a")
    child = repo.create_pull("Child", "/stack #1", base="main", head="feature-b")
    repo.fail("edit_pull", number=child.number)

    ctx = context_for(child, "opened")
    assert Stacker(ctx).run() is None
    assert child.base.ref == "main"
    assert ctx.payload.pull_request.base.ref == "main"
    assert "stackbot/pr-1" in repo.protections
