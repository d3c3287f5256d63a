"""Request path matchers deciding which requests are eligible for profiling."""

import re
from typing import Protocol


class PathMatcher(Protocol):
    def __call__(self, path: str) -> bool:
        """Returns True if requests to `path` may be profiled."""


class MatchAll(PathMatcher):
    __slots__ = ()

    def __call__(self, path: str) -> bool:
        return True

    def __repr__(self) -> str:
        return "MatchAll()"


class PatternMatcher(PathMatcher):
    """Unanchored regular expression match against the full request path."""

    __slots__ = ("pattern",)

    def __init__(self, pattern: re.Pattern[str]) -> None:
        self.pattern = pattern

    def __call__(self, path: str) -> bool:
        return self.pattern.search(path) is not None

    def __repr__(self) -> str:
        return f"PatternMatcher({self.pattern.pattern!r})"


def build_path_matcher(include_path: str | re.Pattern[str] | None) -> PathMatcher:
    """Build the matcher for `profile_include_path`.

    Args:
        include_path: None or "" to profile every path, otherwise a regular
            expression (string or compiled) the request path must contain.

    Raises:
        ValueError: The string is not a valid regular expression.
        TypeError: The value is neither a string nor a compiled pattern.
    """
    match include_path:
        case None | "":
            return MatchAll()
        case re.Pattern():
            return PatternMatcher(include_path)
        case str():
            try:
                return PatternMatcher(re.compile(include_path))
            except re.error as e:
                raise ValueError(f"Invalid profile_include_path pattern {include_path!r}: {e}") from e
        case _:
            raise TypeError(f"profile_include_path must be a str or re.Pattern, not {type(include_path).__name__}")
