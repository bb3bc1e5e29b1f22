"""Parse `/stack #N` dependency directives out of PR descriptions."""

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_MARKER = "/stack"


def directive_pattern(marker: str = DEFAULT_MARKER) -> "re.Pattern[str]":
    return re.compile(re.escape(marker) + r"\s+#([0-9]+)")


def parse_directive(text: Optional[str], marker: str = DEFAULT_MARKER) -> Optional[int]:
    """Get the dependency PR number declared in text, if any.

    Lines are scanned in order and trimmed; the first line carrying the
    marker followed by `#<positive number>` wins. A marker split across
    lines does not count.
    """
    if not text:
        return None
    pattern = directive_pattern(marker)
    for line in re.split(r"\r?\n", text):
        match = pattern.search(line.strip())
        if match is None:
            continue
        number = int(match.group(1))
        if number > 0:
            return number
    return None


def effective_dependency(text: Optional[str], pr_number: int,
                         marker: str = DEFAULT_MARKER) -> Optional[int]:
    """Like parse_directive, but a PR can't depend on itself."""
    dep = parse_directive(text, marker)
    if dep == pr_number:
        return None
    return dep


@dataclass(frozen=True)
class Directive:
    """Parsed dependency declaration of one PR."""
    pr_number: int
    depends_on: Optional[int] = None

    @classmethod
    def parse(cls, text: Optional[str], pr_number: int, marker: str = DEFAULT_MARKER) -> "Directive":
        return cls(pr_number, effective_dependency(text, pr_number, marker))

    @property
    def present(self) -> bool:
        return self.depends_on is not None
