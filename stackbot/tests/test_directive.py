"""Unit tests for the stack directive parser."""

import pytest

from stackbot.stack.directive import Directive, effective_dependency, parse_directive


class TestParseDirective:
    """Tests for parse_directive."""

    def test_simple_directive(self) -> None:
        assert parse_directive("/stack #7") == 7

    def test_directive_among_other_lines(self) -> None:
        body = "Adds the widget cache.\n\n/stack #12\n\nSee the design doc."
        assert parse_directive(body) == 12

    def test_first_matching_line_wins(self) -> None:
        body = "/stack #3\n/stack #4\n/stack #5"
        assert parse_directive(body) == 3

    def test_later_conflicting_line_ignored(self) -> None:
        body = "intro\n  /stack   #21  \n/stack #22"
        assert parse_directive(body) == 21

    def test_crlf_line_endings(self) -> None:
        assert parse_directive("first line\r\n/stack #9\r\nlast line") == 9

    def test_marker_inside_line(self) -> None:
        assert parse_directive("Depends on: /stack #40 please") == 40

    @pytest.mark.parametrize("body", [
        "",
        "no directive here",
        "/stack 7",
        "/stack#7",
        "stack #7",
        "/stack #",
        "/stack\n#7",
    ])
    def test_no_directive(self, body: str) -> None:
        assert parse_directive(body) is None

    def test_none_body(self) -> None:
        assert parse_directive(None) is None

    def test_zero_is_not_a_pr(self) -> None:
        assert parse_directive("/stack #0\n/stack #8") == 8

    def test_custom_marker(self) -> None:
        assert parse_directive("depends-on #5", marker="depends-on") == 5
        assert parse_directive("/stack #5", marker="depends-on") is None

    def test_marker_is_literal(self) -> None:
        # Regex metacharacters in the marker must not act as a pattern
        assert parse_directive("xdeps #5", marker=".deps") is None
        assert parse_directive(".deps #5", marker=".deps") == 5


class TestEffectiveDependency:
    """Tests for self-reference handling."""

    def test_self_reference_is_no_dependency(self) -> None:
        assert effective_dependency("/stack #7", 7) is None

    def test_other_pr(self) -> None:
        assert effective_dependency("/stack #7", 8) == 7

    def test_directive_value_object(self) -> None:
        assert Directive.parse("/stack #7", 8) == Directive(8, 7)
        assert Directive.parse("/stack #7", 8).present
        assert not Directive.parse("/stack #7", 7).present
        assert not Directive.parse(None, 7).present
